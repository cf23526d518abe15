"""Pytest konfigurácia a zdieľané fixtures.

Súbor pytest načíta automaticky a poskytuje:
- čerstvú dosku so štartovou šípkou,
- pomocníka na kladenie dlažíc priamo na dosku (bez racku hráča),
- deterministický generátor náhody.
"""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from nile.core.board import Board
from nile.core.types import (
    Coordinates,
    Rotation,
    TilePath,
    TilePathType,
    TilePlacement,
)

PlaceFn = Callable[[Board, int, int, TilePath, Rotation], None]


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def put() -> PlaceFn:
    """Položí bežnú dlaždicu na (row, col) bez ohľadu na pravidlá ťahu."""

    def _put(
        target: Board,
        row: int,
        col: int,
        tile_path: TilePath,
        rotation: Rotation = Rotation.NONE,
    ) -> None:
        target.place_tile(
            Coordinates(row, col),
            TilePlacement(TilePathType.normal(tile_path), rotation),
        )

    return _put
