"""Chyby pravidiel hry Nile.

Dva druhy chyb:
- `CellError` nesie jednu alebo viac suradnic (UI ich moze zvyraznit),
- `MessageError` nesie iba spravu (porusenie bez konkretnej bunky).
"""
from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, auto

from .types import Coordinates


class ErrorKind(Enum):
    """Druh porusenia pravidla (stabilny pre testy aj UI)."""

    INVALID_COORDINATES = auto()
    OCCUPIED = auto()
    EMPTY_CELL = auto()
    NOT_UNIVERSAL = auto()
    MISALIGNED = auto()
    NON_CONTIGUOUS = auto()
    REUSED_TILE = auto()
    CROSSOVER = auto()
    DEAD_END = auto()
    ENCIRCLED = auto()
    OFF_BOARD = auto()
    END_OF_GAME = auto()
    GAME_RULE = auto()


class NileError(Exception):
    """Zakladna chyba pravidiel."""

    def __init__(self, msg: str, kind: ErrorKind = ErrorKind.GAME_RULE) -> None:
        super().__init__(msg)
        self.msg = msg
        self.kind = kind

    @property
    def coordinates(self) -> frozenset[Coordinates]:
        return frozenset()


class CellError(NileError):
    """Chyba viazana na konkretne bunky dosky."""

    def __init__(
        self,
        coordinates: Coordinates | Iterable[Coordinates],
        msg: str,
        kind: ErrorKind = ErrorKind.GAME_RULE,
    ) -> None:
        super().__init__(msg, kind)
        if isinstance(coordinates, Coordinates):
            self._coordinates = frozenset({coordinates})
        else:
            self._coordinates = frozenset(coordinates)

    @property
    def coordinates(self) -> frozenset[Coordinates]:
        return self._coordinates


class MessageError(NileError):
    """Chyba bez konkretnej bunky (napr. viac dlazdic v koncovom stlpci)."""
