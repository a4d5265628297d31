class CargoPricingError(Exception):
    """Base exception for cargo pricing errors."""
    pass


class InvalidDestination(CargoPricingError, ValueError):
    """Raised when a destination id does not resolve in the reference data."""

    def __init__(self, destination_id: str):
        self.destination_id = destination_id
        super().__init__(f"Invalid destination: {destination_id}")


class ReferenceDataError(CargoPricingError):
    """Raised when a reference CSV is missing required columns."""
    pass
