from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Pozn.: Vsetky komentare su v slovencine podla preferencii pouzivatela.


@dataclass(frozen=True)
class Offset:
    """Posun o jedno pole v jednom z osmich smerov (riadok, stlpec).

    Obe zlozky su z {-1, 0, 1}; `Offset(0, 0)` je neplatny.
    """
    row: int
    col: int

    def __neg__(self) -> Offset:
        return Offset(-self.row, -self.col)

    def rotate(self, rotation: Rotation) -> Offset:
        """Otoci posun v smere hodinovych ruciciek (riadky rastu smerom dole)."""
        x, y = self.row, self.col
        if rotation is Rotation.NONE:
            return Offset(x, y)
        if rotation is Rotation.CLOCKWISE_90:
            return Offset(y, -x)
        if rotation is Rotation.CLOCKWISE_180:
            return Offset(-x, -y)
        return Offset(-y, x)

    def is_diagonal(self) -> bool:
        return self.row != 0 and self.col != 0


@dataclass(frozen=True)
class Coordinates:
    """Jedinecna pozicia na doske (row, col)."""
    row: int
    col: int

    def __add__(self, offset: Offset) -> Coordinates:
        return Coordinates(self.row + offset.row, self.col + offset.col)

    def __str__(self) -> str:
        return f"riadok {self.row}, stlpec {self.col}"


# Posledne polozenie: suradnice + vystupny smer rieky
Anchor = tuple[Coordinates, Offset]


class Rotation(Enum):
    """Otocenie dlazdice v smere hodinovych ruciciek."""
    NONE = 0
    CLOCKWISE_90 = 1
    CLOCKWISE_180 = 2
    CLOCKWISE_270 = 3


class Direction(Enum):
    """Svetove strany, ktorymi moze rieka vstupit/vystupit z pola."""
    N = (-1, 0)
    NE = (-1, 1)
    E = (0, 1)
    SE = (1, 1)
    S = (1, 0)
    SW = (1, -1)
    W = (0, -1)
    NW = (-1, -1)

    @property
    def offset(self) -> Offset:
        row, col = self.value
        return Offset(row, col)


class TilePath(Enum):
    """Osem tvarov rieky v jednom poli (bez univerzalnej dlazdice)."""
    STRAIGHT = "straight"
    DIAGONAL = "diagonal"
    CENTER_90 = "center90"
    CORNER_90 = "corner90"
    LEFT_45 = "left45"
    RIGHT_45 = "right45"
    LEFT_135 = "left135"
    RIGHT_135 = "right135"

    def directions(self) -> tuple[Direction, Direction]:
        return _PATH_DIRECTIONS[self]

    def offsets(self) -> tuple[Offset, Offset]:
        first, second = self.directions()
        return first.offset, second.offset


_PATH_DIRECTIONS: dict[TilePath, tuple[Direction, Direction]] = {
    TilePath.STRAIGHT: (Direction.W, Direction.E),
    TilePath.DIAGONAL: (Direction.SW, Direction.NE),
    TilePath.CENTER_90: (Direction.S, Direction.W),
    TilePath.CORNER_90: (Direction.SW, Direction.SE),
    TilePath.LEFT_45: (Direction.S, Direction.NW),
    TilePath.RIGHT_45: (Direction.S, Direction.NE),
    TilePath.LEFT_135: (Direction.S, Direction.SW),
    TilePath.RIGHT_135: (Direction.S, Direction.SE),
}


class Tile(Enum):
    """Herna dlazdica na racku hraca."""
    STRAIGHT = "straight"
    DIAGONAL = "diagonal"
    CENTER_90 = "center90"
    CORNER_90 = "corner90"
    LEFT_45 = "left45"
    RIGHT_45 = "right45"
    LEFT_135 = "left135"
    RIGHT_135 = "right135"
    # Moze reprezentovat lubovolny iny tvar
    UNIVERSAL = "universal"

    @property
    def points(self) -> int:
        return _TILE_POINTS[self]

    @property
    def path(self) -> TilePath | None:
        """Tvar rieky; univerzalna dlazdica ziadny pevny tvar nema."""
        if self is Tile.UNIVERSAL:
            return None
        return TilePath(self.value)

    @classmethod
    def from_path(cls, tile_path: TilePath) -> Tile:
        return cls(tile_path.value)


_TILE_POINTS: dict[Tile, int] = {
    Tile.STRAIGHT: 10,
    Tile.DIAGONAL: 10,
    Tile.CENTER_90: 10,
    Tile.CORNER_90: 10,
    Tile.LEFT_45: 8,
    Tile.RIGHT_45: 8,
    Tile.LEFT_135: 5,
    Tile.RIGHT_135: 5,
    Tile.UNIVERSAL: 35,
}


@dataclass(frozen=True)
class TilePathType:
    """Tvar polozenej dlazdice: pevny (Normal) alebo zolik (Universal).

    Zolik po polozeni reprezentuje jeden konkretny `TilePath`, no boduje ako
    univerzalna dlazdica. Zmena tvaru ide iba cez `retag()`.
    """
    tile_path: TilePath
    universal: bool = False

    @classmethod
    def normal(cls, tile_path: TilePath) -> TilePathType:
        return cls(tile_path, universal=False)

    @classmethod
    def wild(cls, tile_path: TilePath) -> TilePathType:
        return cls(tile_path, universal=True)

    @classmethod
    def from_tile(cls, tile: Tile, default: TilePath = TilePath.STRAIGHT) -> TilePathType:
        """Vytvori typ z dlazdice na racku; zolik zacina ako `default`."""
        path = tile.path
        if path is None:
            return cls.wild(default)
        return cls.normal(path)

    @property
    def tile(self) -> Tile:
        if self.universal:
            return Tile.UNIVERSAL
        return Tile.from_path(self.tile_path)

    def score(self) -> int:
        return self.tile.points

    def offsets(self) -> tuple[Offset, Offset]:
        return self.tile_path.offsets()

    def retag(self, tile_path: TilePath) -> TilePathType:
        if not self.universal:
            raise ValueError("Iba univerzalna dlazdica moze zmenit tvar")
        return TilePathType.wild(tile_path)


@dataclass(frozen=True)
class TilePlacement:
    """Dlazdica ulozena v bunke: tvar + otocenie."""
    tile_path_type: TilePathType
    rotation: Rotation = Rotation.NONE

    def offsets(self) -> list[Offset]:
        return [o.rotate(self.rotation) for o in self.tile_path_type.offsets()]


@dataclass(frozen=True)
class Placement:
    """Jedna dlazdica polozena v tomto tahu na suradnicu."""
    coordinates: Coordinates
    rotation: Rotation
    tile_path_type: TilePathType

    @property
    def tile_placement(self) -> TilePlacement:
        return TilePlacement(self.tile_path_type, self.rotation)
