"""Read-only queries over extracted cards."""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from price_report.models import Card

by_rank = operator.attrgetter("edhrec_rank")


def price_rank_pairs(cards: Iterable[Card]) -> list[tuple[float, int]]:
    """Return (price, edhrec_rank) for every card, in input order."""
    return [(card.price, card.edhrec_rank) for card in cards]


def top_cards_under_price(
    cards: Iterable[Card],
    num_cards: int,
    max_price: float,
    type_filter: str | None = None,
) -> list[Card]:
    """Find the most popular cards that cost at most ``max_price``.

    Args:
        cards: Extracted cards.
        num_cards: Maximum number of cards to return.
        max_price: Inclusive upper bound on the USD price.
        type_filter: If given, only cards whose type line contains this text
            (case-sensitive) are considered.

    Returns:
        Up to ``num_cards`` cards ordered by ascending EDHREC rank. Cards that
        share a rank keep their input order.
    """
    if num_cards < 0:
        msg = f"num_cards must be non-negative, got {num_cards}"
        raise ValueError(msg)
    matching = [
        card
        for card in cards
        if card.price <= max_price and (type_filter is None or type_filter in card.type_line)
    ]
    # sorted() is stable, ties keep their input order
    return sorted(matching, key=by_rank)[:num_cards]
