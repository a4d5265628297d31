#!/usr/bin/env python
"""
Build pipeline - validates reference data and runs the golden tests.

Usage:
    python scripts/build_all.py
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from cargo_pricing.data.build_reference import build_reference_report


def main():
    print("=" * 60)
    print("CARGO PRICING BUILD PIPELINE")
    print("=" * 60)
    print()

    # Validate reference data
    print("[1/2] Validating reference data...")
    report = build_reference_report(verbose=True)

    if report["status"] != "success":
        print("\n❌ BUILD FAILED")
        for error in report["errors"]:
            print(f"  ERROR: {error}")
        sys.exit(1)

    print()
    print("[2/2] Running golden tests...")

    # Run tests
    import subprocess
    test_result = subprocess.run(
        [sys.executable, '-m', 'pytest', 'tests/test_golden_cases.py', '-v', '--tb=short'],
        cwd=Path(__file__).parent.parent
    )

    if test_result.returncode != 0:
        print("\n❌ TESTS FAILED")
        sys.exit(1)

    print()
    print("=" * 60)
    print("✅ BUILD COMPLETE")
    print("=" * 60)
    print()
    print("Summary:")
    for name, stats in report['metrics'].items():
        print(f"  {name}: {stats['valid']} valid, {stats['dropped']} dropped")
    print(f"  Warnings: {len(report['warnings'])}")


if __name__ == "__main__":
    main()
