"""Render query results as plain text reports."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from price_report.models import Card

DECK_LIST_QUANTITY = 1


def format_price(price: float) -> str:
    """Format a price as the shortest positional decimal.

    Whole numbers drop the fractional part and exponents are expanded, so
    2.0 renders as "2" and 1e-07 as "0.0000001".
    """
    text = format(Decimal(repr(price)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _lines(lines: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def format_price_rank_csv(pairs: Iterable[tuple[float, int]]) -> str:
    """Render one "<price>, <rank>" line per pair."""
    return _lines(f"{format_price(price)}, {rank}" for price, rank in pairs)


def format_deck_list(cards: Iterable[Card]) -> str:
    """Render cards as a deck list with one copy of each card."""
    return _lines(f"{DECK_LIST_QUANTITY} {card.name}" for card in cards)
