"""Stav jedneho hraca: rack, skore aktualneho tahu a historia tahov."""
from __future__ import annotations

from dataclasses import dataclass, field

from .scoring import TurnScore
from .tiles import TileBox
from .types import Tile

MAX_TILES = 5

# Bonus za pouzitie vsetkych dlazdic z racku
EMPTY_RACK_BONUS = 20


@dataclass
class Player:
    """Vsetky data hraca (cloveka aj CPU)."""

    name: str
    is_cpu: bool = False
    tiles: list[Tile] = field(default_factory=list)
    # Skore ukoncenych tahov
    scores: list[TurnScore] = field(default_factory=list)
    current_turn_score: TurnScore = field(default_factory=TurnScore)

    @classmethod
    def new(cls, name: str, tile_box: TileBox, is_cpu: bool = False) -> Player:
        player = cls(name=name, is_cpu=is_cpu)
        player.fill_rack(tile_box)
        return player

    def fill_rack(self, tile_box: TileBox) -> None:
        while len(self.tiles) < MAX_TILES:
            tile = tile_box.draw()
            if tile is None:
                break
            self.tiles.append(tile)

    def rack_is_empty(self) -> bool:
        return not self.tiles

    def place_tile(self, tile: Tile) -> Tile | None:
        """Odoberie z racku jednu dlazdicu daneho druhu (None, ak ju hrac nema)."""
        try:
            idx = self.tiles.index(tile)
        except ValueError:
            return None
        return self.tiles.pop(idx)

    def return_tile(self, tile: Tile) -> None:
        """Hrac vratil dlazdicu z dosky na rack."""
        self.tiles.append(tile)

    def add_score(self, score: TurnScore) -> TurnScore:
        """Upravi skore aktualneho tahu a vrati ho."""
        self.current_turn_score = self.current_turn_score + score
        return self.current_turn_score

    def end_turn(self, tile_box: TileBox) -> TurnScore:
        """Uzavrie tah: bonus za prazdny rack, zapis skore a doplnenie racku."""
        if self.rack_is_empty():
            self.add_score(TurnScore.from_int(EMPTY_RACK_BONUS))
        final_turn_score = self.current_turn_score
        self.fill_rack(tile_box)
        self.scores.append(final_turn_score)
        self.current_turn_score = TurnScore()
        return final_turn_score

    def cant_play(self, tile_box: TileBox) -> TurnScore:
        """Hrac nemoze hrat: odhodi cely rack a dostane penalizaciu za jeho hodnotu."""
        discarded, self.tiles = self.tiles, []
        turn_score = TurnScore(add=0, sub=-sum(t.points for t in discarded))
        tile_box.discard(discarded)
        self.fill_rack(tile_box)
        self.scores.append(turn_score)
        self.current_turn_score = TurnScore()
        return turn_score

    def total_score(self) -> int:
        return sum(s.score() for s in self.scores)
