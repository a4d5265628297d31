"""
Logging configuration for the API, the UI and the build scripts.

The calculation engines never log; reference loading and the HTTP layer do.
"""
import logging
from typing import Optional

from .settings import get_settings


def configure_logging(level: Optional[str] = None):
    """
    Configure the root logger.

    Level comes from the argument, else from settings (CARGO_PRICING_LOG_LEVEL).
    Noisy server/client loggers are kept at WARNING.
    """
    log_level = (level or get_settings().log_level).upper()

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger("cargo_pricing").setLevel(getattr(logging, log_level, logging.INFO))

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured at level: %s", log_level)
