"""Settings module for runtime configuration."""

from __future__ import annotations

import os

DEFAULT_BULK_DATA_URL = "https://api.scryfall.com"


def _is_truthy(value: str | None) -> bool:
    """Check if a string value is truthy.

    Args:
        value: String value to check

    Returns:
        True if value is "true", "1", or "yes" (case-insensitive), False otherwise
    """
    if value is None:
        return False
    return value.lower() in ("true", "1", "yes")


class Settings:
    """Simple settings class for runtime configuration."""

    def __init__(self) -> None:
        """Initialize settings from environment variables."""
        self._verbose = _is_truthy(os.environ.get("PRICE_REPORT_VERBOSE", "false"))
        self._bulk_data_url = os.environ.get("PRICE_REPORT_BULK_DATA_URL", DEFAULT_BULK_DATA_URL)

    @property
    def verbose(self) -> bool:
        """Check if debug logging is enabled."""
        return self._verbose

    @verbose.setter
    def verbose(self, value: bool) -> None:
        """Set debug logging state."""
        self._verbose = value

    @property
    def bulk_data_url(self) -> str:
        """Base URL of the bulk data API."""
        return self._bulk_data_url


# Global settings instance
settings = Settings()
