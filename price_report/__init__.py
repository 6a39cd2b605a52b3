"""Price and EDHREC rank reports over Scryfall bulk card data."""

from price_report.extractor import ExtractionStats, extract, load_cards, load_listing
from price_report.models import Card
from price_report.queries import price_rank_pairs, top_cards_under_price

__all__ = [
    "Card",
    "ExtractionStats",
    "extract",
    "load_cards",
    "load_listing",
    "price_rank_pairs",
    "top_cards_under_price",
]
