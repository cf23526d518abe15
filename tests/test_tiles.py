from __future__ import annotations

import random
from collections import Counter

from nile.core.player import MAX_TILES, Player
from nile.core.scoring import TurnScore
from nile.core.tiles import TILE_DISTRIBUTION, TileBox
from nile.core.types import Tile


def _empty_box() -> TileBox:
    box = TileBox(tiles=[Tile.STRAIGHT])
    box.draw()
    return box


def test_box_total_count() -> None:
    box = TileBox(seed=42)
    assert box.remaining() == 104
    assert Counter(box.tiles) == Counter(TILE_DISTRIBUTION)
    assert TILE_DISTRIBUTION[Tile.UNIVERSAL] == 4


def test_box_is_reproducible_with_seed() -> None:
    assert TileBox(seed=7).tiles == TileBox(seed=7).tiles
    assert TileBox(rng=random.Random(3)).tiles == TileBox(seed=3).tiles


def test_draw_in_order_and_exhaust() -> None:
    box = TileBox(tiles=[Tile.STRAIGHT, Tile.DIAGONAL])
    assert box.draw() is Tile.STRAIGHT
    assert box.draw() is Tile.DIAGONAL
    assert box.draw() is None


def test_discard_returns_tiles_to_box() -> None:
    box = TileBox(tiles=[Tile.STRAIGHT], seed=1)
    box.discard([Tile.LEFT_45, Tile.RIGHT_45])
    assert box.remaining() == 3
    assert Counter(box.tiles) == Counter([Tile.STRAIGHT, Tile.LEFT_45, Tile.RIGHT_45])


def test_new_player_has_full_rack() -> None:
    box = TileBox(seed=5)
    player = Player.new("anna", box)
    assert len(player.tiles) == MAX_TILES
    assert box.remaining() == 104 - MAX_TILES
    assert not player.is_cpu


def test_place_and_return_tile() -> None:
    player = Player("anna", tiles=[Tile.STRAIGHT, Tile.DIAGONAL])
    assert player.place_tile(Tile.CORNER_90) is None
    assert player.tiles == [Tile.STRAIGHT, Tile.DIAGONAL]
    assert player.place_tile(Tile.DIAGONAL) is Tile.DIAGONAL
    assert player.tiles == [Tile.STRAIGHT]
    player.return_tile(Tile.DIAGONAL)
    assert player.tiles == [Tile.STRAIGHT, Tile.DIAGONAL]


def test_end_turn_with_empty_rack_gets_bonus() -> None:
    player = Player("anna")
    player.add_score(TurnScore.from_int(10))
    turn = player.end_turn(_empty_box())
    assert turn == TurnScore(30, 0)
    assert player.scores == [TurnScore(30, 0)]
    assert player.current_turn_score == TurnScore()
    assert player.total_score() == 30


def test_end_turn_refills_rack() -> None:
    box = TileBox(tiles=[Tile.LEFT_45, Tile.RIGHT_45])
    player = Player("anna", tiles=[Tile.STRAIGHT])
    player.add_score(TurnScore(10, -40))
    assert player.end_turn(box) == TurnScore(10, -40)
    assert player.tiles == [Tile.STRAIGHT, Tile.LEFT_45, Tile.RIGHT_45]
    assert player.total_score() == -30


def test_cant_play_discards_rack_with_penalty() -> None:
    box = TileBox(tiles=[Tile.DIAGONAL], rng=random.Random(0))
    player = Player("anna", tiles=[Tile.STRAIGHT, Tile.LEFT_135])
    turn = player.cant_play(box)
    assert turn == TurnScore(0, -15)
    assert Counter(player.tiles) == Counter([Tile.DIAGONAL, Tile.STRAIGHT, Tile.LEFT_135])
    assert box.remaining() == 0
    assert player.total_score() == -15
