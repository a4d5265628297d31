"""
Centralized settings and path configuration for the cargo pricing service.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


DATA_DIR_ENV = "CARGO_PRICING_DATA_DIR"
LOG_LEVEL_ENV = "CARGO_PRICING_LOG_LEVEL"


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def get_package_data_dir() -> Path:
    """Directory holding the reference CSVs shipped with the package."""
    return Path(__file__).resolve().parent.parent / 'data'


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path
    data_dir: Path

    # Reference data files
    destinations_csv: Path
    services_csv: Path

    # Output files
    reference_report: Path

    log_level: str = "INFO"

    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> 'Settings':
        """Load settings from the environment and the project structure."""
        root = get_project_root()

        env_dir = os.environ.get(DATA_DIR_ENV)
        if data_dir is None:
            data_dir = Path(env_dir) if env_dir else get_package_data_dir()
        data_dir = Path(data_dir)

        return cls(
            project_root=root,
            data_dir=data_dir,
            destinations_csv=data_dir / 'destinations.csv',
            services_csv=data_dir / 'services.csv',
            reference_report=data_dir / 'outputs' / 'reference_report.json',
            log_level=os.environ.get(LOG_LEVEL_ENV, "INFO").upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
