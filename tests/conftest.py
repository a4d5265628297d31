import os
import sys

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from cargo_pricing.data.reference_data import ReferenceData
from cargo_pricing.engine.models import Destination, Service


@pytest.fixture
def reference():
    """Small in-memory reference table with round numbers."""
    return ReferenceData.from_records(
        destinations=[
            Destination(id="testland", name="Testland", base_rate=5.0, transit_min=3, transit_max=5),
            Destination(id="oneday", name="One Day Island", base_rate=4.0, transit_min=1, transit_max=1),
        ],
        services=[
            Service(id="standard", name="Standard Air Freight", delivery_days=5),
            Service(id="express", name="Express Delivery", delivery_days=2, rate_multiplier=1.25),
            Service(id="door_to_door", name="Door-to-Door Service", delivery_days=5, additional_fee=25.0),
            Service(id="consolidated", name="Consolidated Cargo", delivery_days=7),
        ],
    )
