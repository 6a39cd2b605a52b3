"""Fixtures for the test suite."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import orjson
import pytest

if TYPE_CHECKING:
    import pathlib
    from collections.abc import Callable

logging.basicConfig(
    force=True,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

SOL_RING = {
    "name": "Sol Ring",
    "type_line": "Artifact",
    "edhrec_rank": 1,
    "prices": {"usd": "2.00"},
}
OBSCURE_CARD = {
    "name": "Obscure Card",
    "type_line": "Creature",
    "edhrec_rank": 9999,
    "prices": {"usd": None},
}


def make_card_record(
    name: str = "Test Card",
    type_line: str = "Creature — Test",
    edhrec_rank: int | None = 100,
    usd: str | None = "1.00",
    **kwargs: Any,
) -> dict[str, Any]:
    """Create a raw bulk data card object; edhrec_rank=None leaves the card unranked."""
    record = {
        "object": "card",
        "name": name,
        "type_line": type_line,
        "prices": {"usd": usd, "usd_foil": None, "eur": None, "tix": None},
    }
    if edhrec_rank is not None:
        record["edhrec_rank"] = edhrec_rank
    record.update(kwargs)
    return record


@pytest.fixture
def example_listing() -> list[dict[str, Any]]:
    """Sol Ring plus a ranked card with no USD price."""
    return [dict(SOL_RING), dict(OBSCURE_CARD)]


@pytest.fixture
def write_listing(tmp_path: pathlib.Path) -> Callable[..., pathlib.Path]:
    """Fixture returning a helper that writes a listing to a JSON file."""

    def _write(listing: Any, name: str = "oracle-cards.json") -> pathlib.Path:  # noqa: ANN401
        path = tmp_path / name
        path.write_bytes(orjson.dumps(listing))
        return path

    return _write


@pytest.fixture(name="make_record")
def make_record_fixture() -> Callable[..., dict[str, Any]]:
    """Fixture exposing make_card_record to tests."""
    return make_card_record
