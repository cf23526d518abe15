"""Automaticki (CPU) hraci."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..core.board import Board
from ..core.types import Tile
from .brute import Brute, CandidateMoves


class CPUPlayer(Protocol):
    """Hrac, ktory navrhne zoradene kandidatske tahy pre dany rack a dosku."""

    def take_turn(
        self,
        tiles: Sequence[Tile],
        board: Board,
        score: int,
        other_scores: Sequence[int],
    ) -> list[CandidateMoves]: ...


__all__ = ["Brute", "CPUPlayer", "CandidateMoves"]
