from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..ai.brute import Brute, describe_candidate
from ..logging_setup import TURN_ID_VAR
from .board import Board
from .errors import CellError, ErrorKind, MessageError, NileError
from .events import (
    CantPlay,
    EndTurn,
    Event,
    EventLog,
    MoveTile,
    PlaceTile,
    RemoveTile,
    RotateTile,
    UpdateUniversalPath,
)
from .player import Player
from .scoring import TurnScore
from .tiles import TileBox
from .types import Coordinates, Placement, Rotation, TilePath, TilePathType, TilePlacement

log = logging.getLogger("nile.game")

MIN_PLAYERS = 2
MAX_PLAYERS = 4


class Nile:
    """Kompletny stav partie a pravidla priebehu tahu.

    Vsetky operacie pri poruseni pravidiel vyhodia `NileError`; stav sa
    pri chybe nemeni.
    """

    def __init__(
        self,
        player_names: Sequence[str],
        cpu_player_count: int = 0,
        *,
        rng: random.Random | None = None,
    ) -> None:
        player_count = len(player_names) + cpu_player_count
        if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
            raise MessageError(f"Nile je hra pre {MIN_PLAYERS}-{MAX_PLAYERS} hracov")
        self.board = Board()
        self.tile_box = TileBox(rng=rng)
        self.players: list[Player] = [
            Player.new(name, self.tile_box, is_cpu=False) for name in player_names
        ]
        for i in range(1, cpu_player_count + 1):
            self.players.append(Player.new(f"cpu{i}", self.tile_box, is_cpu=True))
        self.current_turn = 0
        # Pocet odohranych tahov (pre logy)
        self.turn_count = 0
        self.current_turn_placements: set[Coordinates] = set()
        # Pocet "nemozem hrat" za sebou
        self.cant_play_count = 0
        self.has_ended = False

    def current_player(self) -> Player:
        return self.players[self.current_turn]

    def other_player_scores(self) -> list[int]:
        return [
            p.total_score() for i, p in enumerate(self.players) if i != self.current_turn
        ]

    def scores(self) -> dict[str, int]:
        return {p.name: p.total_score() for p in self.players}

    def if_not_ended(self) -> None:
        if self.has_ended:
            raise MessageError("Hra uz skoncila")

    def _require_current_turn(self, coordinates: Coordinates) -> None:
        if coordinates not in self.current_turn_placements:
            raise CellError(
                coordinates,
                "Nemozno menit dlazdice z ineho tahu",
                ErrorKind.GAME_RULE,
            )

    # ---------------- Akcie v tahu ----------------
    def place_tile(
        self,
        tile_path_type: TilePathType,
        coordinates: Coordinates,
        rotation: Rotation = Rotation.NONE,
    ) -> TurnScore:
        """Polozi dlazdicu z racku aktualneho hraca; vrati skore tahu po akcii."""
        self.if_not_ended()
        tile = tile_path_type.tile
        player = self.current_player()
        if player.place_tile(tile) is None:
            raise MessageError(f"Hrac {player.name} nema dlazdicu {tile.value}")
        try:
            event_score = self.board.place_tile(
                coordinates, TilePlacement(tile_path_type, rotation)
            )
        except NileError:
            # Rack hraca ostava nezmeneny
            player.return_tile(tile)
            raise
        self.current_turn_placements.add(coordinates)
        return player.add_score(event_score)

    def rotate_tile(self, coordinates: Coordinates, rotation: Rotation) -> None:
        self.if_not_ended()
        self._require_current_turn(coordinates)
        self.board.rotate_tile(coordinates, rotation)

    def remove_tile(self, coordinates: Coordinates) -> TilePlacement:
        """Vrati dlazdicu z dosky na rack a zrusi jej skore."""
        self.if_not_ended()
        self._require_current_turn(coordinates)
        removed = self.board.remove_tile(coordinates)
        if removed is None:
            raise CellError(coordinates, "Na tomto poli nie je dlazdica", ErrorKind.EMPTY_CELL)
        tile_placement, event_score = removed
        player = self.current_player()
        player.return_tile(tile_placement.tile_path_type.tile)
        player.add_score(event_score)
        self.current_turn_placements.discard(coordinates)
        return tile_placement

    def update_universal_path(self, coordinates: Coordinates, tile_path: TilePath) -> TilePath:
        self.if_not_ended()
        self._require_current_turn(coordinates)
        return self.board.update_universal_path(coordinates, tile_path)

    def move_tile(self, old_coordinates: Coordinates, new_coordinates: Coordinates) -> TurnScore:
        self.if_not_ended()
        self._require_current_turn(old_coordinates)
        score_change = self.board.move_tile(old_coordinates, new_coordinates)
        self.current_turn_placements.discard(old_coordinates)
        self.current_turn_placements.add(new_coordinates)
        return self.current_player().add_score(score_change)

    # ---------------- Koniec tahu ----------------
    def end_turn(self) -> bool:
        """Ukonci tah s aspon jednou dlazdicou; vrati True, ak hra skoncila."""
        self.if_not_ended()
        if not self.current_turn_placements:
            raise MessageError(
                "Tah nemozno ukoncit bez polozenej dlazdice. "
                "Ak nemas platny tah, pouzi 'nemozem hrat'"
            )
        self.has_ended = self.board.validate_turns_moves(self.current_turn_placements)
        player = self.current_player()
        turn_score = player.end_turn(self.tile_box)
        log.info(
            "turn_ended player=%s tiles=%d score=%d total=%d ended=%s",
            player.name,
            len(self.current_turn_placements),
            turn_score.score(),
            player.total_score(),
            self.has_ended,
        )
        self.cant_play_count = 0
        self.advance_turn()
        return self.has_ended

    def cant_play(self) -> bool:
        """Hrac tvrdi, ze nemoze hrat: odhodi rack a dostane penalizaciu."""
        self.if_not_ended()
        if self.current_turn_placements:
            raise MessageError("Hrac uz v tomto tahu polozil dlazdice")
        player = self.current_player()
        turn_score = player.cant_play(self.tile_box)
        self.cant_play_count += 1
        # Ak nikto z hracov za sebou nemohol hrat, hra konci
        self.has_ended = self.cant_play_count == len(self.players)
        log.info(
            "cant_play player=%s penalty=%d streak=%d ended=%s",
            player.name,
            turn_score.score(),
            self.cant_play_count,
            self.has_ended,
        )
        self.advance_turn()
        return self.has_ended

    def advance_turn(self) -> None:
        self.current_turn = (self.current_turn + 1) % len(self.players)
        self.turn_count += 1
        # Hra konci aj vtedy, ked dalsi hrac nema ziadne dlazdice
        self.has_ended = self.has_ended or self.current_player().rack_is_empty()
        self.current_turn_placements.clear()


@dataclass(frozen=True)
class ActionResult:
    """Vysledok akcie pre UI: uspech alebo sprava + bunky na zvyraznenie."""

    ok: bool
    message: str = ""
    coordinates: frozenset[Coordinates] = field(default_factory=frozenset)

    @classmethod
    def success(cls, message: str = "") -> ActionResult:
        return cls(ok=True, message=message)

    @classmethod
    def from_error(cls, exc: NileError) -> ActionResult:
        return cls(ok=False, message=exc.msg, coordinates=exc.coordinates)


@dataclass(frozen=True)
class RackSelection:
    """Vybrana dlazdica na racku (index v racku aktualneho hraca)."""

    index: int


@dataclass(frozen=True)
class BoardSelection:
    coordinates: Coordinates


Selection = RackSelection | BoardSelection


class Engine:
    """Vrstva nad `Nile` pre UI: vyber dlazdice, undo/redo a tahy CPU hracov."""

    def __init__(
        self,
        player_names: Sequence[str],
        cpu_player_count: int = 0,
        *,
        rng: random.Random | None = None,
        brute_max_states: int | None = None,
    ) -> None:
        self.nile = Nile(player_names, cpu_player_count, rng=rng)
        self.selected: Selection | None = None
        self.event_log = EventLog()
        self.brute_max_states = brute_max_states

    # ---------------- Stav ----------------
    @property
    def board(self) -> Board:
        return self.nile.board

    @property
    def players(self) -> list[Player]:
        return self.nile.players

    @property
    def has_ended(self) -> bool:
        return self.nile.has_ended

    def current_player(self) -> Player:
        return self.nile.current_player()

    def can_undo(self) -> bool:
        return self.event_log.can_undo()

    def can_redo(self) -> bool:
        return self.event_log.can_redo()

    def selected_board_tile(self) -> Coordinates | None:
        if isinstance(self.selected, BoardSelection):
            return self.selected.coordinates
        return None

    def selected_rack_tile(self) -> int | None:
        if isinstance(self.selected, RackSelection):
            return self.selected.index
        return None

    def _run(self, action: Callable[[], None]) -> ActionResult:
        try:
            action()
        except NileError as exc:
            log.info("action_rejected kind=%s msg=%s", exc.kind.name, exc.msg)
            return ActionResult.from_error(exc)
        return ActionResult.success()

    # ---------------- Vyber ----------------
    def select_rack_tile(self, index: int) -> ActionResult:
        # Vyber nie je udalost, do logu sa nezapisuje
        if not 0 <= index < len(self.current_player().tiles):
            return ActionResult(ok=False, message=f"Neplatny index v racku: {index}")
        self.selected = RackSelection(index)
        return ActionResult.success()

    def select_board_tile(self, coordinates: Coordinates) -> ActionResult:
        if coordinates not in self.nile.current_turn_placements:
            return ActionResult(
                ok=False,
                message="Vybrat mozno iba dlazdice z tohto tahu",
                coordinates=frozenset({coordinates}),
            )
        if not self.board.has_tile(coordinates):
            return ActionResult(
                ok=False,
                message=f"Na {coordinates} nie je dlazdica",
                coordinates=frozenset({coordinates}),
            )
        self.selected = BoardSelection(coordinates)
        return ActionResult.success()

    # ---------------- Akcie ----------------
    def place_tile(self, coordinates: Coordinates) -> ActionResult:
        """Polozi vybranu dlazdicu z racku, alebo presunie vybranu dlazdicu z dosky."""
        selected = self.selected
        if selected is None:
            return ActionResult(ok=False, message="Nie je vybrata ziadna dlazdica")

        def action() -> None:
            if isinstance(selected, RackSelection):
                tiles = self.current_player().tiles
                if selected.index >= len(tiles):
                    raise MessageError(f"Neplatny index v racku: {selected.index}")
                tile_path_type = TilePathType.from_tile(tiles[selected.index])
                self.nile.place_tile(tile_path_type, coordinates, Rotation.NONE)
                self.event_log.record(
                    PlaceTile(Placement(coordinates, Rotation.NONE, tile_path_type))
                )
            else:
                self.nile.move_tile(selected.coordinates, coordinates)
                self.event_log.record(MoveTile(old=selected.coordinates, new=coordinates))
            self.selected = BoardSelection(coordinates)

        return self._run(action)

    def rotate_selected_tile(self, rotation: Rotation) -> ActionResult:
        coordinates = self.selected_board_tile()
        if coordinates is None:
            return ActionResult(ok=False, message="Nie je vybrata dlazdica na doske")

        def action() -> None:
            cell = self.board.cell(coordinates)
            if cell is None or cell.tile is None:
                raise CellError(coordinates, "Na tomto poli nie je dlazdica", ErrorKind.EMPTY_CELL)
            old_rotation = cell.tile.rotation
            self.nile.rotate_tile(coordinates, rotation)
            self.event_log.record(RotateTile(coordinates, old=old_rotation, new=rotation))

        return self._run(action)

    def remove_selected_tile(self) -> ActionResult:
        coordinates = self.selected_board_tile()
        if coordinates is None:
            return ActionResult(ok=False, message="Nie je vybrata dlazdica na doske")

        def action() -> None:
            removed = self.nile.remove_tile(coordinates)
            self.selected = None
            self.event_log.record(
                RemoveTile(Placement(coordinates, removed.rotation, removed.tile_path_type))
            )

        return self._run(action)

    def update_selected_universal_path(self, tile_path: TilePath) -> ActionResult:
        coordinates = self.selected_board_tile()
        if coordinates is None:
            return ActionResult(ok=False, message="Nie je vybrata dlazdica na doske")

        def action() -> None:
            old_tile_path = self.nile.update_universal_path(coordinates, tile_path)
            self.event_log.record(UpdateUniversalPath(coordinates, old_tile_path, tile_path))

        return self._run(action)

    def undo(self) -> ActionResult:
        def action() -> None:
            self.nile.if_not_ended()
            event = self.event_log.undo()
            if event is None:
                raise MessageError("Nie je co vratit")
            self._dispatch(event)

        return self._run(action)

    def redo(self) -> ActionResult:
        def action() -> None:
            self.nile.if_not_ended()
            event = self.event_log.redo()
            if event is None:
                raise MessageError("Nie je co zopakovat")
            self._dispatch(event)

        return self._run(action)

    def end_turn(self) -> ActionResult:
        """Ukonci tah cloveka a nechaj odohrat CPU hracov."""

        def action() -> None:
            self.nile.end_turn()
            self.event_log.end_turn()
            self.selected = None

        result = self._run(action)
        if result.ok:
            self.take_cpu_turns()
        return result

    def cant_play(self) -> ActionResult:
        def action() -> None:
            self.nile.cant_play()
            self.event_log.cant_play()
            self.selected = None

        result = self._run(action)
        if result.ok:
            self.take_cpu_turns()
        return result

    def _dispatch(self, event: Event) -> None:
        """Aplikuje udalost z undo/redo bez noveho zapisu do logu."""
        if isinstance(event, PlaceTile):
            p = event.placement
            self.nile.place_tile(p.tile_path_type, p.coordinates, p.rotation)
            self.selected = BoardSelection(p.coordinates)
        elif isinstance(event, RemoveTile):
            self.nile.remove_tile(event.placement.coordinates)
            self.selected = None
        elif isinstance(event, RotateTile):
            self.selected = BoardSelection(event.coordinates)
            self.nile.rotate_tile(event.coordinates, event.new)
        elif isinstance(event, UpdateUniversalPath):
            self.selected = BoardSelection(event.coordinates)
            self.nile.update_universal_path(event.coordinates, event.new_tile_path)
        elif isinstance(event, MoveTile):
            self.nile.move_tile(event.old, event.new)
            self.selected = BoardSelection(event.new)
        elif isinstance(event, (EndTurn, CantPlay)):
            raise MessageError(f"Nepodporovana udalost: {type(event).__name__}")

    # ---------------- CPU ----------------
    def take_cpu_turns(self) -> None:
        """Odohra tahy CPU hracov, kym nie je na tahu clovek alebo hra neskonci."""
        while not self.has_ended and self.current_player().is_cpu:
            self.take_cpu_turn()

    def take_cpu_turn(self) -> list[Placement]:
        """Odohra jeden tah CPU hraca; vrati polozene dlazdice (prazdne = nemohol hrat)."""
        player = self.current_player()
        if self.has_ended or not player.is_cpu:
            return []
        token = TURN_ID_VAR.set(f"{self.nile.turn_count}:{player.name}")
        try:
            candidates = Brute(len(self.players), self.brute_max_states).take_turn(
                player.tiles,
                self.board,
                player.total_score(),
                self.nile.other_player_scores(),
            )
            for candidate in candidates:
                if self._try_candidate(candidate.placements):
                    log.debug(
                        "cpu_turn player=%s expected=%d placements=%s",
                        player.name,
                        candidate.score.score(),
                        describe_candidate(candidate),
                    )
                    return candidate.placements
            # Bud ziadne tahy, alebo ziadny z navrhnutych nebol platny
            self.nile.cant_play()
            self.event_log.cant_play()
            return []
        finally:
            TURN_ID_VAR.reset(token)

    def _try_candidate(self, placements: list[Placement]) -> bool:
        for p in placements:
            try:
                self.nile.place_tile(p.tile_path_type, p.coordinates, p.rotation)
            except NileError as exc:
                log.warning(
                    "cpu_placement_failed kind=%s msg=%s placement=%s",
                    exc.kind.name,
                    exc.msg,
                    p,
                )
                self._undo_all()
                return False
            # Zapis kvoli moznemu vrateniu celeho pokusu
            self.event_log.record(PlaceTile(p))
        try:
            self.nile.end_turn()
        except NileError as exc:
            log.warning(
                "cpu_end_turn_failed kind=%s msg=%s placements=%d",
                exc.kind.name,
                exc.msg,
                len(placements),
            )
            self._undo_all()
            return False
        self.event_log.end_turn()
        return True

    def _undo_all(self) -> None:
        while self.event_log.can_undo():
            event = self.event_log.undo()
            assert event is not None
            self._dispatch(event)
        self.event_log.redo_events.clear()
