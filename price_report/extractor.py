"""Extract priced, ranked cards from a Scryfall bulk data export.

The export is a JSON array of card objects. Only four fields are consumed:
``name``, ``type_line``, ``edhrec_rank`` and ``prices.usd``. Cards without a
rank or without a current USD price are skipped, as are entries that are not
objects; anything else that does not fit the expected shape aborts the run.
"""

from __future__ import annotations

import logging
import math
import pathlib
import re
import time
from dataclasses import dataclass
from typing import Any

import orjson
import zstandard as zstd

from price_report.errors import (
    InputFileError,
    MalformedRecordError,
    NumericFormatError,
    ParseError,
    StructureError,
)
from price_report.models import Card

logger = logging.getLogger(__name__)

CONSUMED_FIELDS = ("name", "type_line", "prices", "edhrec_rank")
REQUIRED_FIELDS = ("name", "type_line", "prices")
PRICE_KEY = "usd"
ZSTD_SUFFIXES = (".zst", ".zstd")

DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


@dataclass
class ExtractionStats:
    """Counters collected while extracting a listing."""

    seen: int = 0
    kept: int = 0
    skipped_unranked: int = 0
    skipped_unpriced: int = 0
    skipped_non_object: int = 0


def parse_price(text: str) -> float:
    """Parse a decimal price string into a non-negative float.

    Raises:
        NumericFormatError: If the text is not a finite, non-negative decimal number.
    """
    if not DECIMAL_RE.fullmatch(text):
        msg = f"Price is not a decimal number: {text!r}"
        raise NumericFormatError(msg)
    price = float(text)
    if not math.isfinite(price) or price < 0:
        msg = f"Price out of range: {text!r}"
        raise NumericFormatError(msg)
    return price


def _residual(record: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in record.items() if k not in CONSUMED_FIELDS}


def _require_text(record: dict[str, Any], key: str) -> str:
    value = record[key]
    if not isinstance(value, str):
        msg = f"Field {key!r} must be a string, got {type(value).__name__}"
        raise MalformedRecordError(msg, _residual(record))
    return value


def _require_rank(record: dict[str, Any]) -> int:
    # bool is an int subclass but true/false is not a rank
    value = record["edhrec_rank"]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"Field 'edhrec_rank' must be a non-negative integer, got {value!r}"
        raise MalformedRecordError(msg, _residual(record))
    return value


def extract_card(record: dict[str, Any], stats: ExtractionStats) -> Card | None:
    """Build a Card from one raw card object.

    Args:
        record: A single card object from the listing.
        stats: Counters updated with the outcome for this record.

    Returns:
        The extracted Card, or None if the card is unranked or has no USD price.

    Raises:
        MalformedRecordError: If a required field is missing or has the wrong type.
        NumericFormatError: If the USD price is not a decimal number.
    """
    if "edhrec_rank" not in record:
        stats.skipped_unranked += 1
        logger.debug("Skipping unranked card: %s", record.get("name"))
        return None

    missing = tuple(key for key in REQUIRED_FIELDS if key not in record)
    if missing:
        msg = f"Card object is missing required fields {list(missing)}"
        raise MalformedRecordError(msg, _residual(record), missing)

    name = _require_text(record, "name")
    type_line = _require_text(record, "type_line")
    edhrec_rank = _require_rank(record)

    prices = record["prices"]
    if not isinstance(prices, dict):
        msg = f"Field 'prices' must be an object, got {type(prices).__name__}"
        raise MalformedRecordError(msg, _residual(record))

    usd = prices.get(PRICE_KEY)
    if usd is None:
        stats.skipped_unpriced += 1
        logger.debug("Skipping card without a %s price: %s", PRICE_KEY, name)
        return None
    if not isinstance(usd, str):
        msg = f"Price {PRICE_KEY!r} of {name!r} must be a string, got {type(usd).__name__}"
        raise MalformedRecordError(msg, _residual(record))

    return Card(
        name=name,
        price=parse_price(usd),
        edhrec_rank=edhrec_rank,
        type_line=type_line,
    )


def extract(listing: Any, stats: ExtractionStats | None = None) -> list[Card]:  # noqa: ANN401
    """Extract every priced, ranked card from a decoded listing.

    Args:
        listing: The decoded JSON document, expected to be a list of card objects.
        stats: Optional counters to fill in; a fresh instance is used otherwise.

    Returns:
        The extracted cards in source order.

    Raises:
        StructureError: If the listing is not a list.
    """
    if stats is None:
        stats = ExtractionStats()
    if not isinstance(listing, list):
        msg = "expected array of card objects"
        raise StructureError(msg)

    cards = []
    for idx, record in enumerate(listing):
        if not isinstance(record, dict):
            stats.skipped_non_object += 1
            logger.debug("Skipping element %d, expected a card object but got %s", idx, type(record).__name__)
            continue
        stats.seen += 1
        card = extract_card(record, stats)
        if card is not None:
            cards.append(card)
    stats.kept = len(cards)

    logger.info(
        "Extracted %d of %d cards (%d unranked, %d without a %s price, %d non-object entries)",
        stats.kept,
        stats.seen,
        stats.skipped_unranked,
        stats.skipped_unpriced,
        PRICE_KEY,
        stats.skipped_non_object,
    )
    return cards


def load_listing(path: str | pathlib.Path) -> Any:  # noqa: ANN401
    """Read and decode a bulk data file.

    Files ending in .zst or .zstd are decompressed first.

    Raises:
        InputFileError: If the file cannot be read.
        ParseError: If the content is not valid (compressed) JSON.
    """
    path = pathlib.Path(path)
    before = time.monotonic()
    try:
        with path.open("rb") as f:
            raw = f.read()
    except OSError as e:
        msg = f"Failed to read input file {path}: {e}"
        raise InputFileError(msg) from e
    logger.info("Read %d bytes from %s in %.3f seconds", len(raw), path, time.monotonic() - before)

    if path.suffix in ZSTD_SUFFIXES:
        before = time.monotonic()
        try:
            raw = zstd.ZstdDecompressor().decompressobj().decompress(raw)
        except zstd.ZstdError as e:
            msg = f"Failed to decompress {path}: {e}"
            raise ParseError(msg) from e
        logger.info("Decompressed to %d bytes in %.3f seconds", len(raw), time.monotonic() - before)

    before = time.monotonic()
    try:
        listing = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        msg = f"Failed to parse json in {path}: {e}"
        raise ParseError(msg) from e
    logger.info("Parsed %d bytes to objects in %.3f seconds using orjson", len(raw), time.monotonic() - before)
    return listing


def load_cards(path: str | pathlib.Path, stats: ExtractionStats | None = None) -> list[Card]:
    """Load a bulk data file and extract its priced, ranked cards."""
    return extract(load_listing(path), stats)
