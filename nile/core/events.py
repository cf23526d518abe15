"""Zaznam udalosti tahu pre undo/redo.

Kazda udalost v ramci tahu obsahuje vsetko potrebne na svoje vratenie.
Koniec tahu (`EndTurn`, `CantPlay`) udalosti uzavrie, tie uz vratit nejde.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .types import Coordinates, Placement, Rotation, TilePath


@dataclass(frozen=True)
class PlaceTile:
    placement: Placement

    def revert(self) -> Event | None:
        return RemoveTile(self.placement)


@dataclass(frozen=True)
class RemoveTile:
    placement: Placement

    def revert(self) -> Event | None:
        return PlaceTile(self.placement)


@dataclass(frozen=True)
class RotateTile:
    coordinates: Coordinates
    old: Rotation
    new: Rotation

    def revert(self) -> Event | None:
        return RotateTile(self.coordinates, old=self.new, new=self.old)


@dataclass(frozen=True)
class MoveTile:
    old: Coordinates
    new: Coordinates

    def revert(self) -> Event | None:
        return MoveTile(old=self.new, new=self.old)


@dataclass(frozen=True)
class UpdateUniversalPath:
    coordinates: Coordinates
    old_tile_path: TilePath
    new_tile_path: TilePath

    def revert(self) -> Event | None:
        return UpdateUniversalPath(
            self.coordinates,
            old_tile_path=self.new_tile_path,
            new_tile_path=self.old_tile_path,
        )


@dataclass(frozen=True)
class EndTurn:
    def revert(self) -> Event | None:
        return None


@dataclass(frozen=True)
class CantPlay:
    def revert(self) -> Event | None:
        return None


Event = Union[PlaceTile, RemoveTile, RotateTile, MoveTile, UpdateUniversalPath, EndTurn, CantPlay]


def _touches(event: Event, coordinates: Coordinates) -> bool:
    if isinstance(event, (PlaceTile, RemoveTile)):
        return event.placement.coordinates == coordinates
    if isinstance(event, MoveTile):
        return event.new == coordinates
    if isinstance(event, (RotateTile, UpdateUniversalPath)):
        return event.coordinates == coordinates
    return False


@dataclass
class EventLog:
    """Herny zaznam: uzavrete tahy + undo/redo zasobniky aktualneho tahu."""

    events: list[Event] = field(default_factory=list)
    undo_events: list[Event] = field(default_factory=list)
    redo_events: list[Event] = field(default_factory=list)

    def record(self, event: Event) -> None:
        """Zapise novu akciu hraca; nova akcia zahodi moznost redo."""
        self.undo_events.append(event)
        self.redo_events.clear()

    def undo(self) -> Event | None:
        """Vrati opacnu udalost k poslednej akcii (alebo None)."""
        if not self.undo_events:
            return None
        event = self.undo_events.pop()
        self.redo_events.append(event)
        return event.revert()

    def redo(self) -> Event | None:
        """Vrati udalost na opatovne vykonanie (alebo None)."""
        if not self.redo_events:
            return None
        event = self.redo_events.pop()
        self.undo_events.append(event)
        return event

    def end_turn(self) -> None:
        self._seal(EndTurn())

    def cant_play(self) -> None:
        self._seal(CantPlay())

    def _seal(self, event: Event) -> None:
        self.undo_events.append(event)
        self.events.extend(self.undo_events)
        self.undo_events.clear()
        self.redo_events.clear()

    def can_undo(self) -> bool:
        return bool(self.undo_events)

    def can_redo(self) -> bool:
        return bool(self.redo_events)

    def cell_changed_in_turn(self, coordinates: Coordinates) -> bool:
        """Ci sa bunka zmenila v aktualnom tahu (vratane vratenych akcii)."""
        return any(_touches(e, coordinates) for e in self.undo_events) or any(
            _touches(e, coordinates) for e in self.redo_events
        )
