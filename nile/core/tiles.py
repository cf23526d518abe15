from __future__ import annotations

import random
from dataclasses import dataclass, field

from .types import Tile

# Pocty dlazdic z povodnej krabice hry (spolu 104)
TILE_DISTRIBUTION: dict[Tile, int] = {
    Tile.LEFT_135: 10,
    Tile.CENTER_90: 10,
    Tile.LEFT_45: 10,
    Tile.STRAIGHT: 20,
    Tile.RIGHT_45: 10,
    Tile.RIGHT_135: 10,
    Tile.DIAGONAL: 20,
    Tile.CORNER_90: 10,
    Tile.UNIVERSAL: 4,
}


@dataclass
class TileBox:
    """Krabica s dlazdicami, ktore si hraci este mozu potiahnut.

    Nahodnost sa vklada zvonka (`rng` alebo `seed`), aby boli testy aj
    simulacie reprodukovatelne.
    """

    tiles: list[Tile] = field(default_factory=list)
    rng: random.Random | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.seed)
        # Pozn.: Ak su poskytnute `tiles`, zachovaj ich presne v danom poradi.
        # Inak napln podla distribucie a premiesaj.
        if not self.tiles:
            for tile, count in TILE_DISTRIBUTION.items():
                self.tiles.extend([tile] * count)
            self.rng.shuffle(self.tiles)

    def draw(self) -> Tile | None:
        """Potiahne jednu dlazdicu (alebo None, ak je krabica prazdna)."""
        if not self.tiles:
            return None
        return self.tiles.pop(0)

    def discard(self, tiles: list[Tile]) -> None:
        """Vrati dlazdice do krabice, kazdu na nahodne miesto."""
        assert self.rng is not None
        for tile in tiles:
            # Pri t dlazdiciach je t + 1 moznych miest
            self.tiles.insert(self.rng.randint(0, len(self.tiles)), tile)

    def remaining(self) -> int:
        return len(self.tiles)
