"""Command-line interface for the price report tool."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import TYPE_CHECKING, NoReturn

from price_report.bulk_data import BulkDataKey, ScryfallBulkDataFetcher
from price_report.errors import NumericFormatError, PriceReportError, UsageError
from price_report.extractor import DECIMAL_RE, load_cards
from price_report.formatting import format_deck_list, format_price_rank_csv
from price_report.queries import price_rank_pairs, top_cards_under_price
from price_report.settings import settings

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

UINT_RE = re.compile(r"\+?[0-9]+")

EPILOG = (
    "The input file should be the 'Oracle Cards' JSON from https://scryfall.com/docs/api/bulk-data "
    "(optionally zstd-compressed, with a .zst or .zstd suffix)."
)


class UsageErrorParser(argparse.ArgumentParser):
    """Argument parser that raises UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        """Raise the parser error so main() can print the usage text."""
        raise UsageError(message)


def build_parser() -> UsageErrorParser:
    """Build the argument parser with one subcommand per report mode."""
    parser = UsageErrorParser(
        prog="price-report",
        description="Report prices and EDHREC ranks from Scryfall bulk card data",
        epilog=EPILOG,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="mode", required=True, help="Report to produce")

    csv_parser = subparsers.add_parser(
        "price_rank_csv",
        help="Print '<price>, <rank>' for every priced, ranked card",
    )
    csv_parser.add_argument("input_path", help="Path to the bulk data JSON file")

    top_parser = subparsers.add_parser(
        "top_cards_under_price",
        help="Print the most popular cards at or below a price as a deck list",
    )
    top_parser.add_argument("input_path", help="Path to the bulk data JSON file")
    top_parser.add_argument("num_cards", help="Number of cards to list")
    top_parser.add_argument("max_price", help="Maximum USD price (inclusive)")
    top_parser.add_argument(
        "type_filter",
        nargs="?",
        default=None,
        help="Only include cards whose type line contains this text (case-sensitive)",
    )

    download_parser = subparsers.add_parser(
        "download_oracle_cards",
        help="Download the current Oracle Cards bulk data file",
    )
    download_parser.add_argument("output_path", help="Where to write the file (.zst/.zstd to compress)")

    return parser


def parse_uint(text: str, name: str) -> int:
    """Parse a non-negative integer argument written with ASCII digits."""
    if not UINT_RE.fullmatch(text):
        msg = f"{name} must be a non-negative integer, got {text!r}"
        raise NumericFormatError(msg)
    return int(text)


def parse_float(text: str, name: str) -> float:
    """Parse a real number argument written as a decimal literal."""
    if not DECIMAL_RE.fullmatch(text):
        msg = f"{name} must be a number, got {text!r}"
        raise NumericFormatError(msg)
    return float(text)


def run(args: argparse.Namespace) -> str:
    """Run the selected mode and return the rendered report."""
    if args.mode == "price_rank_csv":
        cards = load_cards(args.input_path)
        return format_price_rank_csv(price_rank_pairs(cards))

    if args.mode == "top_cards_under_price":
        num_cards = parse_uint(args.num_cards, "num_cards")
        max_price = parse_float(args.max_price, "max_price")
        cards = load_cards(args.input_path)
        return format_deck_list(top_cards_under_price(cards, num_cards, max_price, args.type_filter))

    if args.mode == "download_oracle_cards":
        ScryfallBulkDataFetcher().download(BulkDataKey.ORACLE_CARDS, args.output_path)
        return ""

    msg = f"Invalid mode: {args.mode}"
    raise UsageError(msg)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
    -------
        Exit code (0 for success, 1 for failure)

    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logger.error("%s", e)
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or settings.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        report = run(args)
    except PriceReportError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    sys.stdout.write(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
