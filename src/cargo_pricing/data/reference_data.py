"""
Reference Data - destination and service lookup tables.

Loads destinations.csv and services.csv into frozen records. Rows that
break the table invariants are dropped with a warning rather than failing
the whole load.
"""
import logging
import math
from pathlib import Path
from typing import Optional

import pandas as pd

from ..config.settings import get_settings, Settings
from ..engine.models import Destination, Service
from ..exceptions import ReferenceDataError

logger = logging.getLogger(__name__)


DESTINATION_COLUMNS = ['id', 'name', 'base_rate', 'transit_min', 'transit_max']
SERVICE_COLUMNS = ['id', 'name', 'delivery_days']


def read_reference_csv(path: Path, required_columns: list[str]) -> pd.DataFrame:
    """Read a reference CSV with stripped headers and string cells."""
    if not path.exists():
        raise FileNotFoundError(f"Reference file not found at {path}.")

    df = pd.read_csv(path, dtype=str).fillna('')
    df.columns = [c.strip() for c in df.columns]
    for col in df.columns:
        df[col] = df[col].astype(str).str.strip()

    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise ReferenceDataError(f"{path.name} is missing columns: {', '.join(missing)}")
    return df


def _as_int(value) -> Optional[int]:
    number = pd.to_numeric(value, errors='coerce')
    if pd.isna(number) or not math.isfinite(number) or float(number) != int(number):
        return None
    return int(number)


def _as_float(value, default: Optional[float] = None) -> Optional[float]:
    number = pd.to_numeric(value, errors='coerce')
    if pd.isna(number):
        return default
    return float(number)


def parse_destinations(df: pd.DataFrame) -> tuple[dict[str, Destination], list[str]]:
    """
    Build destination records from a DataFrame.

    Returns (destinations by id, warnings). A row is dropped when its id is
    blank or duplicated, base_rate is not > 0, or the transit bounds are not
    integers with transit_min <= transit_max.
    """
    destinations: dict[str, Destination] = {}
    warnings = []

    for line_num, row in enumerate(df.to_dict(orient='records'), start=2):
        dest_id = row.get('id', '')
        if not dest_id:
            warnings.append(f"destinations line {line_num}: id is required")
            continue
        if dest_id in destinations:
            warnings.append(f"destinations line {line_num}: duplicate id '{dest_id}'")
            continue

        base_rate = _as_float(row.get('base_rate'))
        if base_rate is None or base_rate <= 0:
            warnings.append(f"destinations line {line_num}: base_rate must be > 0 for '{dest_id}'")
            continue

        transit_min = _as_int(row.get('transit_min'))
        transit_max = _as_int(row.get('transit_max'))
        if transit_min is None or transit_max is None or transit_min > transit_max:
            warnings.append(
                f"destinations line {line_num}: invalid transit range for '{dest_id}'"
            )
            continue

        destinations[dest_id] = Destination(
            id=dest_id,
            name=row.get('name') or dest_id,
            base_rate=base_rate,
            transit_min=transit_min,
            transit_max=transit_max,
            city=row.get('city', ''),
            airport_code=row.get('airport_code', ''),
        )

    return destinations, warnings


def parse_services(df: pd.DataFrame) -> tuple[dict[str, Service], list[str]]:
    """Build service records from a DataFrame. Returns (services by id, warnings)."""
    services: dict[str, Service] = {}
    warnings = []

    for line_num, row in enumerate(df.to_dict(orient='records'), start=2):
        service_id = row.get('id', '')
        if not service_id:
            warnings.append(f"services line {line_num}: id is required")
            continue
        if service_id in services:
            warnings.append(f"services line {line_num}: duplicate id '{service_id}'")
            continue

        delivery_days = _as_int(row.get('delivery_days'))
        if delivery_days is None or delivery_days < 0:
            warnings.append(f"services line {line_num}: invalid delivery_days for '{service_id}'")
            continue

        services[service_id] = Service(
            id=service_id,
            name=row.get('name') or service_id,
            delivery_days=delivery_days,
            description=row.get('description', ''),
            rate_multiplier=_as_float(row.get('rate_multiplier'), 1.0),
            additional_fee=_as_float(row.get('additional_fee'), 0.0),
        )

    return services, warnings


class ReferenceData:
    """
    In-memory destination and service tables.

    Read-only after construction; the engines receive an instance instead of
    reaching for module-level state.
    """

    def __init__(
        self,
        destinations: dict[str, Destination],
        services: dict[str, Service],
        warnings: Optional[list[str]] = None
    ):
        self.destinations = dict(destinations)
        self.services = dict(services)
        self.warnings = list(warnings or [])

    @classmethod
    def load(cls, settings: Optional[Settings] = None) -> 'ReferenceData':
        """Load both tables from the CSV files named in settings."""
        settings = settings or get_settings()

        destinations, dest_warnings = parse_destinations(
            read_reference_csv(settings.destinations_csv, DESTINATION_COLUMNS)
        )
        services, service_warnings = parse_services(
            read_reference_csv(settings.services_csv, SERVICE_COLUMNS)
        )

        warnings = dest_warnings + service_warnings
        for warning in warnings:
            logger.warning("Dropped reference row: %s", warning)
        logger.info(
            "Loaded %d destinations and %d services from %s",
            len(destinations), len(services), settings.data_dir
        )
        return cls(destinations, services, warnings)

    @classmethod
    def from_records(cls, destinations: list[Destination], services: list[Service]) -> 'ReferenceData':
        """Build directly from records (used by tests and embedding callers)."""
        return cls(
            {d.id: d for d in destinations},
            {s.id: s for s in services},
        )

    def get_destination(self, destination_id: str) -> Optional[Destination]:
        """Resolve a destination by id, or None."""
        if destination_id is None:
            return None
        return self.destinations.get(str(destination_id).strip())

    def get_service(self, service_id: str) -> Optional[Service]:
        """Resolve a service by id, or None. Accepts 'door-to-door' as well as 'door_to_door'."""
        if service_id is None:
            return None
        key = str(service_id).strip()
        if key == 'door-to-door':
            key = 'door_to_door'
        return self.services.get(key)

    def destination_list(self) -> list[Destination]:
        return list(self.destinations.values())

    def service_list(self) -> list[Service]:
        return list(self.services.values())


# Default reference data instance
_reference: Optional[ReferenceData] = None


def get_reference_data() -> ReferenceData:
    """Get the shared reference data, loading it on first use."""
    global _reference
    if _reference is None:
        _reference = ReferenceData.load()
    return _reference
