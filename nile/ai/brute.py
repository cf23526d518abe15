"""Hrubou silou prehladavany CPU hrac.

Pre kazdu dlazdicu z racku, kazdy tvar, ktory moze reprezentovat, a kazde
otocenie skusi polozit dlazdicu na nasledujuce pole rieky. Kazda platna
postupnost (aj ciastocna) je kandidat na tah; vysledok je zoradeny od
najlepsieho skore.

Komentár (SK): Prehladavanie bezi na jednej sukromnej kopii dosky. Dlazdice
rozpracovanej postupnosti sa na nu kladu a pri navrate odstranuju, takze
kontrola obsadenosti aj krizenia vidi aj skorsie dlazdice toho isteho tahu.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..core.board import Board
from ..core.errors import NileError
from ..core.path import eval_placement, rotations_for, tile_paths_from_tile
from ..core.scoring import TurnScore
from ..core.types import Anchor, Coordinates, Placement, Tile, TilePathType

log = logging.getLogger("nile.ai")

# Bonus za vylozenie poslednej dlazdice z ruky
EMPTY_HAND_BONUS = 20
# Ukoncenie hry na prvom mieste / inak
WINNING_END_BONUS = 1000
LOSING_END_PENALTY = -100


@dataclass
class CandidateMoves:
    """Jedna kandidatska postupnost polozeni a jej odhadovane skore."""

    score: TurnScore
    placements: list[Placement] = field(default_factory=list)


class _SearchBudgetExhausted(Exception):
    pass


class Brute:
    """Vycerpavajuce prehladavanie tahov pre `player_count` hracov."""

    def __init__(self, player_count: int, max_states: int | None = None) -> None:
        if player_count < 1:
            raise ValueError("player_count musi byt kladny")
        self.player_count = player_count
        self.max_states = max_states
        self._candidates: list[CandidateMoves] = []

    def take_turn(
        self,
        tiles: Sequence[Tile],
        board: Board,
        score: int,
        other_scores: Sequence[int],
    ) -> list[CandidateMoves]:
        """Vrati vsetky kandidatske tahy zoradene zostupne podla skore.

        Prazdny zoznam znamena, ze hrac nemoze hrat.
        """
        self._candidates = []
        probe = board.clone()
        try:
            self._search(
                probe,
                score,
                list(other_scores),
                probe.last_placement,
                TurnScore(),
                list(tiles),
                [],
            )
        except _SearchBudgetExhausted:
            log.warning(
                "ai_search_truncated max_states=%s tiles=%s",
                self.max_states,
                [t.value for t in tiles],
            )
        # Stabilne zoradenie: pri zhode vyhrava skorsie najdeny kandidat
        candidates = sorted(self._candidates, key=lambda c: c.score.score(), reverse=True)
        log.debug(
            "ai_candidates count=%d best=%s",
            len(candidates),
            candidates[0].score.score() if candidates else None,
        )
        return candidates

    def _search(
        self,
        board: Board,
        score: int,
        other_scores: list[int],
        last_placement: Anchor,
        turn_score: TurnScore,
        tiles: list[Tile],
        placements: list[Placement],
    ) -> None:
        last_coordinates, last_offset = last_placement
        coordinates = last_coordinates + last_offset
        for idx, tile in enumerate(tiles):
            for tile_path in tile_paths_from_tile(tile):
                if tile is Tile.UNIVERSAL:
                    tile_path_type = TilePathType.wild(tile_path)
                else:
                    tile_path_type = TilePathType.normal(tile_path)
                for rotation in rotations_for(tile_path):
                    placement = Placement(coordinates, rotation, tile_path_type)
                    try:
                        anchor = eval_placement(last_placement, placement)
                    except NileError:
                        continue
                    if not self._is_playable(board, anchor, placements):
                        continue

                    cell = board.cell(coordinates)
                    assert cell is not None
                    new_score = turn_score + TurnScore.from_int(tile.points) + cell.score()
                    if len(tiles) == 1:
                        new_score = new_score + TurnScore.from_int(EMPTY_HAND_BONUS)
                    new_placements = placements + [placement]
                    try:
                        end_game_adj = self._end_game_adjustment(
                            board, score, other_scores, new_score, new_placements, anchor
                        )
                    except NileError:
                        continue
                    self._record(
                        CandidateMoves(
                            score=new_score
                            + self._next_tile_adjustment(board, anchor)
                            + end_game_adj,
                            placements=new_placements,
                        )
                    )
                    # Po ukonceni hry uz dalsie dlazdice nema zmysel klast
                    if len(tiles) > 1 and not board.is_end_game_cell(coordinates):
                        board.place_tile(coordinates, placement.tile_placement)
                        try:
                            self._search(
                                board,
                                score,
                                other_scores,
                                anchor,
                                new_score,
                                tiles[:idx] + tiles[idx + 1 :],
                                new_placements,
                            )
                        finally:
                            board.remove_tile(coordinates)

    @staticmethod
    def _is_playable(board: Board, anchor: Anchor, placements: list[Placement]) -> bool:
        coordinates, offset = anchor
        next_coordinates = coordinates + offset
        cell = board.cell(coordinates)
        if cell is None:
            return False
        # Z koncoveho stlpca uz rieka nikam nepokracuje
        if not board.in_bounds(next_coordinates) and not board.is_end_game_cell(coordinates):
            return False
        if any(
            p.coordinates == coordinates or p.coordinates == next_coordinates
            for p in placements
        ):
            return False
        if not cell.is_empty() or board.has_tile(next_coordinates):
            return False
        try:
            board.no_crossover(coordinates, offset)
        except NileError:
            return False
        return True

    def _record(self, candidate: CandidateMoves) -> None:
        if self.max_states is not None and len(self._candidates) >= self.max_states:
            raise _SearchBudgetExhausted()
        self._candidates.append(candidate)

    def _next_tile_adjustment(self, board: Board, anchor: Anchor) -> TurnScore:
        # Pri dvoch hracoch je hra s nulovym suctom: bonus nechany supierovi
        # je rovnako zly ako vlastna penalizacia
        coordinates, offset = anchor
        cell = board.cell(coordinates + offset)
        if cell is None:
            return TurnScore()
        return -(cell.score() * 2 / self.player_count)

    @staticmethod
    def _end_game_adjustment(
        board: Board,
        score: int,
        other_scores: list[int],
        turn_score: TurnScore,
        placements: list[Placement],
        anchor: Anchor,
    ) -> TurnScore:
        """Odmena/penalizacia za ukoncenie hry; neplatny koncovy stlpec vyhodi chybu."""
        end_of_game_count = sum(1 for p in placements if board.is_end_game_cell(p.coordinates))
        ends_game = Board.validate_end_of_game_cells(end_of_game_count, anchor)
        if not ends_game:
            return TurnScore()
        total_score = score + turn_score.score()
        rank = 1 + sum(1 for s in other_scores if s >= total_score)
        if rank == 1:
            return TurnScore.from_int(WINNING_END_BONUS)
        return TurnScore.from_int(LOSING_END_PENALTY)


def describe_candidate(candidate: CandidateMoves) -> list[tuple[Coordinates, str]]:
    """Kratky popis kandidata pre logy a CLI."""
    return [(p.coordinates, p.tile_path_type.tile_path.value) for p in candidate.placements]
