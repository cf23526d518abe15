"""Geometria rieky: nadvaznost dlazdic a odvodenie tvaru z dvojice smerov.

Modul je cisty (bez stavu dosky), pouziva ho validacia tahu, kontrola
obkolesenia aj AI.
"""
from __future__ import annotations

from .errors import CellError, ErrorKind
from .types import (
    Anchor,
    Offset,
    Placement,
    Rotation,
    Tile,
    TilePath,
    TilePathType,
    TilePlacement,
)

# Poradie smerov pri hladani volnych tahov
OFFSETS: tuple[Offset, ...] = (
    Offset(-1, 1),
    Offset(0, 1),
    Offset(1, 1),
    Offset(1, 0),
    Offset(1, -1),
    Offset(0, -1),
    Offset(-1, -1),
    Offset(-1, 0),
)

TILE_PATHS: tuple[TilePath, ...] = tuple(TilePath)

ROTATIONS: tuple[Rotation, ...] = tuple(Rotation)

# Symetricke tvary maju iba dve rozne otocenia
_SYMMETRIC_PATHS = frozenset({TilePath.STRAIGHT, TilePath.DIAGONAL})


def rotations_for(tile_path: TilePath) -> tuple[Rotation, ...]:
    if tile_path in _SYMMETRIC_PATHS:
        return ROTATIONS[:2]
    return ROTATIONS


def tile_paths_from_tile(tile: Tile) -> list[TilePath]:
    """Tvary, ktore dlazdica moze reprezentovat (zolik vsetkych osem)."""
    path = tile.path
    if path is None:
        return list(TILE_PATHS)
    return [path]


def eval_placement(prev: Anchor, placement: Placement) -> Anchor:
    """Overi jednu dlazdicu voci predchadzajucemu polozeniu.

    Vrati nove (suradnice, vystupny posun), ktore sa daju podat do
    dalsieho volania. Hranice dosky ani obsadenost tu neriesime.
    """
    prev_coordinates, prev_offset = prev
    new_coordinates = prev_coordinates + prev_offset
    if new_coordinates != placement.coordinates:
        raise CellError(
            placement.coordinates,
            f"Dlazdica na {placement.coordinates} nenadvazuje na zvysok rieky",
            ErrorKind.MISALIGNED,
        )
    offsets = placement.tile_placement.offsets()
    entry = next(
        (o for o in offsets if placement.coordinates + o == prev_coordinates),
        None,
    )
    if entry is None:
        raise CellError(
            placement.coordinates,
            f"Tvar a otocenie dlazdice na {placement.coordinates} nenadvazuju na zvysok rieky",
            ErrorKind.MISALIGNED,
        )
    # Predpokladame presne dva posuny
    exit_offset = next((o for o in offsets if o != entry), None)
    if exit_offset is None:
        raise CellError(
            placement.coordinates,
            f"Dlazdica na {placement.coordinates} nema platny vystup",
            ErrorKind.MISALIGNED,
        )
    return new_coordinates, exit_offset


def offsets_to_tile_placement(prev_offset: Offset, new_offset: Offset) -> TilePlacement | None:
    """Najde tvar a otocenie, ktore spoja vstup z `prev_offset` s vystupom `new_offset`.

    Vrati None pre neplatne dvojice, napr. `Offset(1, 0)` a `Offset(-1, 0)`,
    kde by sa rieka vracala sama do seba.
    """
    # `prev_offset` otocime, lebo dlazdica je na "prijimajucej" strane
    entry = -prev_offset
    for tile_path in TILE_PATHS:
        for rotation in ROTATIONS:
            first, second = (o.rotate(rotation) for o in tile_path.offsets())
            if (first == entry and second == new_offset) or (
                first == new_offset and second == entry
            ):
                return TilePlacement(TilePathType.normal(tile_path), rotation)
    return None
