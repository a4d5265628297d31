"""
Golden test cases for pricing engine regression testing.
These tests capture the expected quotes for the packaged reference data and
should fail if pricing logic or rates change unexpectedly.
"""
import csv
import os

import pytest

from cargo_pricing.data.reference_data import ReferenceData
from cargo_pricing.config.settings import Settings
from cargo_pricing.engine import PackageInput, PricingEngine, PricingRequest


@pytest.fixture(scope="module")
def engine():
    """Create a single engine over the packaged reference data."""
    return PricingEngine(ReferenceData.load(Settings.load()))


def load_golden_cases():
    """Load golden test cases from CSV."""
    cases_path = os.path.join(os.path.dirname(__file__), 'golden_cases.csv')

    if not os.path.exists(cases_path):
        pytest.skip(f"Golden cases file not found: {cases_path}. Run generate_golden_cases.py first.")

    with open(cases_path, 'r', newline='', encoding='utf-8') as f:
        return list(csv.DictReader(f))


def optional_float(value: str):
    return float(value) if value.strip() else None


def build_request(case: dict) -> PricingRequest:
    """Expand a case row into identical packages."""
    packages = [
        PackageInput(
            id=f"{case['case_id']}-{i}",
            weight=optional_float(case['weight']),
            weight_unknown=case['weight_unknown'].lower() == 'true',
            length=optional_float(case['length']),
            width=optional_float(case['width']),
            height=optional_float(case['height']),
            declared_value=optional_float(case['declared_value']),
        )
        for i in range(1, int(case['package_count']) + 1)
    ]
    return PricingRequest(
        destination_id=case['destination'],
        service_type=case['service_type'],
        packages=packages,
    )


@pytest.mark.parametrize("case", load_golden_cases(), ids=lambda c: c['case_id'])
def test_golden_case(engine, case):
    """Test that pricing matches expected golden case."""
    result = engine.calculate(build_request(case))

    expected = {
        'subtotal': float(case['expected_subtotal']),
        'multi_package_discount': float(case['expected_discount']),
        'insurance_cost': float(case['expected_insurance']),
        'express_surcharge': float(case['expected_surcharge']),
        'total_cost': float(case['expected_total']),
    }
    for field_name, value in expected.items():
        actual = getattr(result, field_name)
        assert abs(actual - value) < 0.001, \
            f"{field_name} mismatch for {case['case_id']}: expected ${value:.2f}, got ${actual:.2f}"


def test_golden_totals_reconcile(engine):
    """Every golden total equals subtotal - discount + insurance + surcharge."""
    for case in load_golden_cases():
        result = engine.calculate(build_request(case))
        reconciled = (
            result.subtotal - result.multi_package_discount
            + result.insurance_cost + result.express_surcharge
        )
        assert abs(result.total_cost - reconciled) < 0.01
