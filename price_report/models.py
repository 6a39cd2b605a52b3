"""Data model for extracted cards."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Card"]


@dataclass(frozen=True)
class Card:
    """A catalog card that has both a USD price and an EDHREC rank."""

    name: str
    price: float
    edhrec_rank: int
    type_line: str
