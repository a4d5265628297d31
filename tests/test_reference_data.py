"""
Tests for reference data loading and the reference build report.
"""
import json

import pytest

from cargo_pricing.config.settings import Settings
from cargo_pricing.data.build_reference import build_reference_report
from cargo_pricing.data.reference_data import ReferenceData
from cargo_pricing.exceptions import ReferenceDataError

SERVICES_CSV = """id,name,description,rate_multiplier,additional_fee,delivery_days
standard,Standard Air Freight,Weekly departures,1.0,0,5
express,Express Delivery,Priority,1.25,,2
door_to_door,Door-to-Door Service,Pickup and delivery,1.0,25.00,5
"""

DESTINATIONS_CSV = """id,name,city,airport_code,base_rate,transit_min,transit_max
guyana,Guyana,Georgetown,GEO,3.50,3,4
 jamaica ,Jamaica,Kingston,KIN,3.75,3,4
freebie,Free Island,,,0,2,3
backwards,Backwards Land,,,4.00,5,2
fractional,Fraction Isle,,,4.00,3.5,4
guyana,Guyana Again,,,9.99,1,1
"""


def make_settings(tmp_path, destinations=DESTINATIONS_CSV, services=SERVICES_CSV) -> Settings:
    if destinations is not None:
        (tmp_path / 'destinations.csv').write_text(destinations)
    if services is not None:
        (tmp_path / 'services.csv').write_text(services)
    return Settings(
        project_root=tmp_path,
        data_dir=tmp_path,
        destinations_csv=tmp_path / 'destinations.csv',
        services_csv=tmp_path / 'services.csv',
        reference_report=tmp_path / 'outputs' / 'reference_report.json',
    )


def test_packaged_reference_data_loads():
    """The CSVs shipped with the package hold the five Caribbean destinations."""
    reference = ReferenceData.load(Settings.load())

    assert sorted(reference.destinations) == ['barbados', 'guyana', 'jamaica', 'suriname', 'trinidad']
    assert sorted(reference.services) == ['consolidated', 'door_to_door', 'express', 'standard']
    assert reference.warnings == []

    guyana = reference.get_destination('guyana')
    assert guyana.base_rate == 3.5
    assert (guyana.transit_min, guyana.transit_max) == (3, 4)
    assert reference.get_service('door-to-door').additional_fee == 25.0


def test_invalid_rows_are_dropped_with_warnings(tmp_path):
    reference = ReferenceData.load(make_settings(tmp_path))

    assert sorted(reference.destinations) == ['guyana', 'jamaica']
    assert reference.get_destination('guyana').name == 'Guyana'
    assert len(reference.warnings) == 4
    assert any("base_rate" in w and "freebie" in w for w in reference.warnings)
    assert any("backwards" in w for w in reference.warnings)
    assert any("fractional" in w for w in reference.warnings)
    assert any("duplicate id 'guyana'" in w for w in reference.warnings)


def test_lookups_strip_ids_and_miss_cleanly(tmp_path):
    reference = ReferenceData.load(make_settings(tmp_path))

    assert reference.get_destination(' jamaica ').city == 'Kingston'
    assert reference.get_destination('atlantis') is None
    assert reference.get_destination(None) is None
    assert reference.get_service('door_to_door') is reference.get_service('door-to-door')
    assert reference.get_service('consolidated') is None


def test_blank_optional_service_fields_use_defaults(tmp_path):
    reference = ReferenceData.load(make_settings(tmp_path))
    express = reference.get_service('express')

    assert express.additional_fee == 0.0
    assert express.rate_multiplier == 1.25
    assert express.delivery_days == 2


def test_missing_file_raises(tmp_path):
    settings = make_settings(tmp_path, destinations=None)
    with pytest.raises(FileNotFoundError, match="destinations.csv"):
        ReferenceData.load(settings)


def test_missing_column_raises(tmp_path):
    settings = make_settings(tmp_path, destinations="id,name,base_rate\nguyana,Guyana,3.5\n")
    with pytest.raises(ReferenceDataError, match="transit_min"):
        ReferenceData.load(settings)


def test_settings_honor_data_dir_env(tmp_path, monkeypatch):
    monkeypatch.setenv("CARGO_PRICING_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CARGO_PRICING_LOG_LEVEL", "debug")
    settings = Settings.load()

    assert settings.destinations_csv == tmp_path / 'destinations.csv'
    assert settings.log_level == "DEBUG"


# =============================================================================
# BUILD REPORT
# =============================================================================

def test_build_report_success(tmp_path):
    settings = make_settings(tmp_path)
    report = build_reference_report(settings, verbose=False)

    assert report["status"] == "success"
    assert report["metrics"]["destinations"]["rows"] == 6
    assert report["metrics"]["destinations"]["valid"] == 2
    assert report["metrics"]["destinations"]["dropped"] == 4
    assert report["metrics"]["services"]["ids"] == ['door_to_door', 'express', 'standard']
    assert len(report["input_files"]["destinations"]["hash"]) == 12

    with open(settings.reference_report) as f:
        saved = json.load(f)
    assert saved["status"] == "success"
    assert len(saved["warnings"]) == 4


def test_build_report_fails_on_missing_file(tmp_path):
    settings = make_settings(tmp_path, services=None)
    report = build_reference_report(settings, verbose=False)

    assert report["status"] == "failed"
    assert any("services.csv" in e for e in report["errors"])
    assert "destinations" in report["metrics"]
