from __future__ import annotations

import random

import pytest

from nile.__main__ import run_simulation
from nile.core.errors import CellError, ErrorKind, MessageError
from nile.core.game import Engine, Nile
from nile.core.scoring import TurnScore
from nile.core.types import (
    Coordinates,
    Offset,
    Rotation,
    Tile,
    TilePath,
    TilePathType,
)

STRAIGHT = TilePathType.normal(TilePath.STRAIGHT)


def C(row: int, col: int) -> Coordinates:
    return Coordinates(row, col)


def _nile(rng: random.Random) -> Nile:
    nile = Nile(["anna", "boris"], rng=rng)
    nile.players[0].tiles = [Tile.STRAIGHT] * 5
    return nile


@pytest.mark.parametrize("humans, cpus", [(["a"], 0), (["a", "b", "c"], 2), ([], 1)])
def test_player_count_is_checked(humans: list[str], cpus: int) -> None:
    with pytest.raises(MessageError):
        Nile(humans, cpus)


def test_new_game(rng: random.Random) -> None:
    nile = Nile(["anna"], 2, rng=rng)
    assert [p.name for p in nile.players] == ["anna", "cpu1", "cpu2"]
    assert [p.is_cpu for p in nile.players] == [False, True, True]
    assert all(len(p.tiles) == 5 for p in nile.players)
    assert nile.tile_box.remaining() == 104 - 15
    assert nile.current_turn == 0
    assert not nile.has_ended


def test_place_tile_updates_rack_and_score(rng: random.Random) -> None:
    nile = _nile(rng)
    score = nile.place_tile(STRAIGHT, C(10, 0))
    assert score == TurnScore(10, 0)
    assert len(nile.players[0].tiles) == 4
    assert nile.current_turn_placements == {C(10, 0)}


def test_place_missing_tile_is_rejected(rng: random.Random) -> None:
    nile = _nile(rng)
    with pytest.raises(MessageError):
        nile.place_tile(TilePathType.normal(TilePath.DIAGONAL), C(10, 0))
    assert len(nile.players[0].tiles) == 5


def test_failed_place_keeps_rack(rng: random.Random) -> None:
    nile = _nile(rng)
    with pytest.raises(CellError) as exc:
        nile.place_tile(STRAIGHT, C(21, 3))
    assert exc.value.kind is ErrorKind.INVALID_COORDINATES
    assert nile.players[0].tiles == [Tile.STRAIGHT] * 5
    assert not nile.current_turn_placements


def test_remove_tile_restores_rack_and_score(rng: random.Random) -> None:
    nile = _nile(rng)
    nile.place_tile(STRAIGHT, C(1, 6))
    removed = nile.remove_tile(C(1, 6))
    assert removed.tile_path_type == STRAIGHT
    assert nile.players[0].tiles == [Tile.STRAIGHT] * 5
    assert nile.players[0].current_turn_score.score() == 0
    assert not nile.current_turn_placements


def test_move_tile_changes_score_only_by_bonus(rng: random.Random) -> None:
    nile = _nile(rng)
    begin = nile.place_tile(STRAIGHT, C(10, 0))
    # Ani jedno pole nema bonus
    assert nile.move_tile(C(10, 0), C(9, 0)).score() == begin.score()
    assert nile.current_turn_placements == {C(9, 0)}
    assert nile.move_tile(C(9, 0), C(9, 5)).score() == begin.score() - 60


def test_tiles_from_other_turns_are_locked(rng: random.Random) -> None:
    nile = _nile(rng)
    nile.place_tile(STRAIGHT, C(10, 0))
    nile.end_turn()
    for action in (
        lambda: nile.rotate_tile(C(10, 0), Rotation.CLOCKWISE_90),
        lambda: nile.remove_tile(C(10, 0)),
        lambda: nile.move_tile(C(10, 0), C(9, 0)),
        lambda: nile.update_universal_path(C(10, 0), TilePath.DIAGONAL),
    ):
        with pytest.raises(CellError) as exc:
            action()
        assert exc.value.coordinates == frozenset({C(10, 0)})


def test_end_turn(rng: random.Random) -> None:
    nile = _nile(rng)
    nile.place_tile(STRAIGHT, C(10, 0))
    assert nile.end_turn() is False
    assert nile.current_turn == 1
    assert nile.players[0].scores == [TurnScore(10, 0)]
    assert len(nile.players[0].tiles) == 5
    assert nile.board.last_placement == (C(10, 0), Offset(0, 1))
    assert not nile.current_turn_placements


def test_end_turn_requires_placement(rng: random.Random) -> None:
    nile = _nile(rng)
    with pytest.raises(MessageError):
        nile.end_turn()


def test_invalid_turn_is_not_committed(rng: random.Random) -> None:
    nile = _nile(rng)
    nile.place_tile(STRAIGHT, C(10, 0), Rotation.CLOCKWISE_90)
    with pytest.raises(CellError) as exc:
        nile.end_turn()
    assert exc.value.kind is ErrorKind.MISALIGNED
    assert nile.current_turn == 0
    assert nile.current_turn_placements == {C(10, 0)}
    # Hrac moze tah opravit otocenim dlazdice
    nile.rotate_tile(C(10, 0), Rotation.NONE)
    assert nile.end_turn() is False


def test_cant_play_by_everyone_ends_game(rng: random.Random) -> None:
    nile = _nile(rng)
    assert nile.cant_play() is False
    assert nile.players[0].total_score() == -50
    assert nile.cant_play() is True
    assert nile.has_ended
    with pytest.raises(MessageError):
        nile.place_tile(STRAIGHT, C(10, 0))


def test_cant_play_after_placing_is_rejected(rng: random.Random) -> None:
    nile = _nile(rng)
    nile.place_tile(STRAIGHT, C(10, 0))
    with pytest.raises(MessageError):
        nile.cant_play()


def test_advance_turn_does_not_unend_game(rng: random.Random) -> None:
    nile = _nile(rng)
    nile.has_ended = True
    nile.advance_turn()
    assert nile.current_turn == 1
    assert nile.has_ended


def test_game_ends_when_next_rack_is_empty(rng: random.Random) -> None:
    nile = _nile(rng)
    nile.players[1].tiles = []
    nile.tile_box.tiles = []
    nile.place_tile(STRAIGHT, C(10, 0))
    assert nile.end_turn() is True
    assert nile.has_ended


# ---------------- Engine ----------------


def _engine(rng: random.Random) -> Engine:
    engine = Engine(["anna"], 1, rng=rng)
    engine.players[0].tiles = [Tile.STRAIGHT] * 5
    return engine


def test_engine_select_and_place(rng: random.Random) -> None:
    engine = _engine(rng)
    assert not engine.select_rack_tile(9).ok
    assert not engine.place_tile(C(10, 0)).ok
    assert engine.select_rack_tile(0).ok
    assert engine.selected_rack_tile() == 0
    assert engine.place_tile(C(10, 0)).ok
    assert engine.selected_board_tile() == C(10, 0)
    assert engine.board.has_tile(C(10, 0))
    # Vybrana dlazdica na doske sa presuva
    assert engine.place_tile(C(9, 0)).ok
    assert engine.board.has_tile(C(9, 0))
    assert not engine.board.has_tile(C(10, 0))


def test_engine_failed_action_reports_cells(rng: random.Random) -> None:
    engine = _engine(rng)
    engine.select_rack_tile(0)
    result = engine.place_tile(C(21, 0))
    assert not result.ok
    assert result.coordinates == frozenset({C(21, 0)})
    assert result.message
    assert not engine.can_undo()


def test_engine_undo_redo(rng: random.Random) -> None:
    engine = _engine(rng)
    engine.select_rack_tile(0)
    engine.place_tile(C(10, 0))
    assert engine.rotate_selected_tile(Rotation.CLOCKWISE_90).ok

    assert engine.undo().ok
    assert engine.board.cell(C(10, 0)).tile.rotation is Rotation.NONE
    assert engine.undo().ok
    assert not engine.board.has_tile(C(10, 0))
    assert len(engine.players[0].tiles) == 5
    assert not engine.undo().ok

    assert engine.redo().ok
    assert engine.board.has_tile(C(10, 0))
    assert engine.redo().ok
    assert engine.board.cell(C(10, 0)).tile.rotation is Rotation.CLOCKWISE_90
    assert not engine.can_redo()


def test_engine_remove_and_undo(rng: random.Random) -> None:
    engine = _engine(rng)
    engine.select_rack_tile(0)
    engine.place_tile(C(10, 0))
    assert engine.remove_selected_tile().ok
    assert engine.selected_board_tile() is None
    assert not engine.board.has_tile(C(10, 0))
    assert engine.undo().ok
    assert engine.board.has_tile(C(10, 0))
    assert len(engine.players[0].tiles) == 4


def test_engine_universal_path(rng: random.Random) -> None:
    engine = _engine(rng)
    engine.players[0].tiles = [Tile.UNIVERSAL]
    engine.select_rack_tile(0)
    engine.place_tile(C(10, 0))
    assert engine.update_selected_universal_path(TilePath.CENTER_90).ok
    tile = engine.board.cell(C(10, 0)).tile
    assert tile.tile_path_type == TilePathType.wild(TilePath.CENTER_90)
    assert engine.undo().ok
    assert engine.board.cell(C(10, 0)).tile.tile_path_type == TilePathType.wild(TilePath.STRAIGHT)


def test_engine_cpu_plays_after_human(rng: random.Random) -> None:
    engine = _engine(rng)
    engine.players[1].tiles = [Tile.STRAIGHT] * 5
    engine.select_rack_tile(0)
    engine.place_tile(C(10, 0))
    assert engine.end_turn().ok
    cpu = engine.players[1]
    assert len(cpu.scores) == 1
    # CPU nadviazal na rieku a je opat na tahu clovek
    assert cpu.scores[0].score() > 0
    assert engine.current_player().name == "anna"
    assert engine.board.has_tile(C(10, 1))
    assert not engine.can_undo()


def test_engine_end_turn_without_tiles(rng: random.Random) -> None:
    engine = _engine(rng)
    result = engine.end_turn()
    assert not result.ok
    assert engine.current_player().name == "anna"


def test_cpu_without_playable_tiles_cant_play(rng: random.Random) -> None:
    engine = Engine([], 2, rng=rng)
    # Diagonala sa nenapoji na vodorovnu startovu sipku
    engine.players[0].tiles = [Tile.DIAGONAL] * 5
    assert engine.take_cpu_turn() == []
    assert engine.players[0].scores == [TurnScore(0, -50)]
    assert engine.nile.current_turn == 1


def test_simulation_runs() -> None:
    engine = run_simulation(2, seed=11, max_turns=6)
    assert engine.nile.turn_count <= 6
    assert all(len(p.scores) >= 1 for p in engine.players) or engine.has_ended
