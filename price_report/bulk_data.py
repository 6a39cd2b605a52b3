"""Downloader for Scryfall bulk data."""

from __future__ import annotations

import logging
import pathlib
import time
from enum import StrEnum

import orjson
import requests
import zstandard as zstd
from tenacity import retry, stop_after_attempt, wait_exponential

from price_report.errors import DownloadError
from price_report.extractor import ZSTD_SUFFIXES
from price_report.settings import settings

logger = logging.getLogger(__name__)


class BulkDataKey(StrEnum):
    """Key for Scryfall bulk data."""

    ALL_CARDS = "all_cards"
    DEFAULT_CARDS = "default_cards"
    ORACLE_CARDS = "oracle_cards"
    RULINGS = "rulings"
    UNIQUE_ARTWORK = "unique_artwork"


class ScryfallBulkDataFetcher:
    """Fetches bulk data files from Scryfall."""

    def __init__(self, *, base_url: str | None = None) -> None:
        """Initialize the fetcher.

        Args:
            base_url: Base URL for the Scryfall API. Defaults to the configured bulk data URL.
        """
        self.base_url = (base_url or settings.bulk_data_url).rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": "PriceReport/1.0",
            "Accept": "application/json",
        })

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _get(self, url: str, timeout: int) -> requests.Response:
        response = self.session.get(url, timeout=timeout)
        response.raise_for_status()
        return response

    def list_bulk_data(self) -> dict[BulkDataKey, dict]:
        """Fetch the index of available bulk data files."""
        url = f"{self.base_url}/bulk-data"
        response = self._get(url, timeout=5)
        try:
            listing = orjson.loads(response.content)["data"]
            types = [entry["type"] for entry in listing]
        except orjson.JSONDecodeError as e:
            msg = f"Bulk data index from {url} is not valid json: {e}"
            raise DownloadError(msg) from e
        except (KeyError, TypeError) as e:
            msg = f"Unexpected bulk data index format from {url}: {e!r}"
            raise DownloadError(msg) from e

        entries = {}
        for data_type, entry in zip(types, listing, strict=True):
            try:
                entries[BulkDataKey(data_type)] = entry
            except ValueError:
                logger.debug("Ignoring unknown bulk data type %s", data_type)
        return entries

    def get_download_uri(self, data_key: BulkDataKey) -> str:
        """Get the download URI for a given data key."""
        try:
            return self.list_bulk_data()[data_key]["download_uri"]
        except KeyError as e:
            msg = f"No bulk data file for {data_key}"
            raise DownloadError(msg) from e

    def download(self, data_key: BulkDataKey, destination: str | pathlib.Path) -> pathlib.Path:
        """Download a bulk data file to ``destination``.

        Destinations ending in .zst or .zstd are written zstd-compressed.

        Raises:
            DownloadError: If the file cannot be fetched or written.
        """
        destination = pathlib.Path(destination)
        try:
            download_uri = self.get_download_uri(data_key)
            before = time.monotonic()
            response = self._get(download_uri, timeout=30)
        except requests.RequestException as e:
            msg = f"Failed to download {data_key}: {e}"
            raise DownloadError(msg) from e
        content = response.content
        logger.info(
            "Downloaded %d bytes from %s in %.3f seconds",
            len(content),
            download_uri,
            time.monotonic() - before,
        )

        if destination.suffix in ZSTD_SUFFIXES:
            content = zstd.compress(content)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with destination.open("wb") as f:
                f.write(content)
        except OSError as e:
            msg = f"Failed to write {destination}: {e}"
            raise DownloadError(msg) from e
        logger.info("Wrote %d bytes to %s", len(content), destination)
        return destination
