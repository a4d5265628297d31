"""
Generate golden test cases by running the current pricing engine on sample bookings.
This captures current behavior as a regression baseline.
"""
import csv
import os
import sys

# Add src to path so we can import the engine
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

from cargo_pricing.engine import PackageInput, PricingEngine, PricingRequest

FIELDS = [
    'case_id', 'destination', 'service_type', 'package_count', 'weight', 'weight_unknown',
    'length', 'width', 'height', 'declared_value', 'expected_subtotal', 'expected_discount',
    'expected_insurance', 'expected_surcharge', 'expected_total',
]

# (case_id, destination, service, count, weight, weight_unknown, (L, W, H), declared_value)
SCENARIOS = [
    ('guyana-single', 'guyana', 'standard', 1, 10, False, None, 0),
    ('jamaica-express', 'jamaica', 'express', 1, 8, False, None, None),
    ('trinidad-dim-three', 'trinidad', 'standard', 3, 4, False, (12, 12, 12), 0),
    ('barbados-unknown-five', 'barbados', 'door-to-door', 5, None, True, None, 100),
    ('suriname-express-pair', 'suriname', 'express', 2, 20, False, None, 50),
    ('guyana-empty-box', 'guyana', 'consolidated', 1, 0, False, None, None),
    ('guyana-dim-dominant', 'guyana', 'standard', 1, 2, False, (20, 20, 20), None),
]


def blank(value) -> str:
    return '' if value is None else str(value)


def generate_golden_cases():
    engine = PricingEngine()

    rows = []
    for case_id, destination, service, count, weight, unknown, dims, declared in SCENARIOS:
        length, width, height = dims or (None, None, None)
        packages = [
            PackageInput(
                id=f"{case_id}-{i}",
                weight=weight,
                weight_unknown=unknown,
                length=length,
                width=width,
                height=height,
                declared_value=declared,
            )
            for i in range(1, count + 1)
        ]
        result = engine.calculate(PricingRequest(destination, service, packages))

        rows.append({
            'case_id': case_id,
            'destination': destination,
            'service_type': service,
            'package_count': count,
            'weight': blank(weight),
            'weight_unknown': str(unknown).lower(),
            'length': blank(length),
            'width': blank(width),
            'height': blank(height),
            'declared_value': blank(declared),
            'expected_subtotal': f"{result.subtotal:.2f}",
            'expected_discount': f"{result.multi_package_discount:.2f}",
            'expected_insurance': f"{result.insurance_cost:.2f}",
            'expected_surcharge': f"{result.express_surcharge:.2f}",
            'expected_total': f"{result.total_cost:.2f}",
        })

    output_path = os.path.join(os.path.dirname(__file__), 'golden_cases.csv')
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=FIELDS)
        writer.writeheader()
        writer.writerows(rows)

    print(f"Generated {len(rows)} golden cases -> {output_path}")


if __name__ == "__main__":
    generate_golden_cases()
