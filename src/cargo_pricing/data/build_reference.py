"""
Reference Builder - validates the destination and service tables.

Produces a build report with:
- Input file hashes
- Row counts before and after validation
- Warnings for dropped rows, errors for unreadable files
"""
import json
import hashlib
from datetime import datetime
from typing import Optional
from pathlib import Path

from ..config.settings import get_settings, Settings
from ..exceptions import ReferenceDataError
from .reference_data import (
    DESTINATION_COLUMNS,
    SERVICE_COLUMNS,
    parse_destinations,
    parse_services,
    read_reference_csv,
)


def get_file_hash(path: Path) -> str:
    """Get SHA256 hash of a file."""
    if not path.exists():
        return ""
    with open(path, 'rb') as f:
        return hashlib.sha256(f.read()).hexdigest()[:12]


def build_reference_report(settings: Optional[Settings] = None, verbose: bool = True) -> dict:
    """
    Validate destinations.csv and services.csv and write the build report.

    Args:
        settings: Optional settings override
        verbose: Print progress messages

    Returns:
        Build report dictionary
    """
    settings = settings or get_settings()

    report = {
        "timestamp": datetime.now().isoformat(),
        "status": "pending",
        "input_files": {},
        "metrics": {},
        "warnings": [],
        "errors": []
    }

    tables = [
        ("destinations", settings.destinations_csv, DESTINATION_COLUMNS, parse_destinations),
        ("services", settings.services_csv, SERVICE_COLUMNS, parse_services),
    ]

    for name, path, columns, parser in tables:
        if not path.exists():
            msg = f"CRITICAL ERROR: {path} not found."
            report["errors"].append(msg)
            if verbose:
                print(msg)
            continue

        report["input_files"][name] = {
            "path": str(path),
            "hash": get_file_hash(path)
        }

        try:
            df = read_reference_csv(path, columns)
        except (ReferenceDataError, ValueError) as e:
            msg = f"ERROR: Failed to process {path}. {e}"
            report["errors"].append(msg)
            if verbose:
                print(msg)
            continue

        records, warnings = parser(df)
        report["metrics"][name] = {
            "rows": len(df),
            "valid": len(records),
            "dropped": len(df) - len(records),
            "ids": sorted(records),
        }
        report["warnings"].extend(warnings)

        if verbose:
            print(f"SUCCESS: {name}: {len(records)} of {len(df)} rows valid")
            for warning in warnings:
                print(f"WARNING: {warning}")

    report["status"] = "failed" if report["errors"] else "success"

    report_path = settings.reference_report
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, 'w') as f:
        json.dump(report, f, indent=2)

    if verbose:
        print(f"Build report saved to: {report_path}")

    return report


if __name__ == "__main__":
    build_reference_report()
