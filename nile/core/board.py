from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from .assets import load_bonus_layout
from .errors import CellError, ErrorKind, MessageError, NileError
from .path import OFFSETS, eval_placement, offsets_to_tile_placement
from .scoring import TurnScore
from .types import (
    Anchor,
    Coordinates,
    Offset,
    Placement,
    Rotation,
    TilePath,
    TilePlacement,
)

log = logging.getLogger("nile.board")

BOARD_DIM = 21

# Startova sipka: rieka vtece do pola (10, 0) zlava
START_PLACEMENT: Anchor = (Coordinates(10, -1), Offset(0, 1))

# Do koncoveho stlpca sa smie vstupit iba rovno (smerom na bodku)
END_OF_GAME_OFFSET = Offset(0, 1)


@dataclass
class Cell:
    """Bunka na doske: pevny bonus/penalizacia + volitelne dlazdica."""
    bonus: int = 0
    tile: TilePlacement | None = None

    def is_empty(self) -> bool:
        return self.tile is None

    def score(self) -> TurnScore:
        tile_score = self.tile.tile_path_type.score() if self.tile is not None else 0
        return TurnScore.from_int(tile_score) + TurnScore.from_int(self.bonus)

    def set_tile(self, tile: TilePlacement) -> TurnScore:
        self.tile = tile
        return self.score()

    def remove_tile(self) -> tuple[TilePlacement, TurnScore] | None:
        """Odstrani dlazdicu a vrati zaporne skore, ktore ruší jej polozenie."""
        if self.tile is None:
            return None
        old_score = self.score()
        tile, self.tile = self.tile, None
        return tile, -old_score

    def update_universal_path(self, tile_path: TilePath) -> TilePath:
        if self.tile is None:
            raise NileError("Bunka je prazdna", ErrorKind.EMPTY_CELL)
        path_type = self.tile.tile_path_type
        if not path_type.universal:
            raise NileError("Bunka neobsahuje univerzalnu dlazdicu", ErrorKind.NOT_UNIVERSAL)
        self.tile = replace(self.tile, tile_path_type=path_type.retag(tile_path))
        return path_type.tile_path


class Board:
    """Doska 21x21 plus specialny koncovy stlpec (index stlpca 21)."""

    def __init__(
        self,
        bonuses_path: str | None = None,
        *,
        last_placement: Anchor = START_PLACEMENT,
    ) -> None:
        layout = load_bonus_layout(bonuses_path)
        self._last_placement: Anchor = last_placement
        self.cells: list[Cell] = [
            Cell(bonus=layout.cells.get(divmod(i, BOARD_DIM), 0))
            for i in range(BOARD_DIM * BOARD_DIM)
        ]
        self.end_of_game_cells: list[Cell] = [Cell(bonus=b) for b in layout.end_of_game]

    def clone(self) -> Board:
        """Nezavisla kopia dosky (na spekulativne polozenia)."""
        other = Board.__new__(Board)
        other._last_placement = self._last_placement
        other.cells = [replace(c) for c in self.cells]
        other.end_of_game_cells = [replace(c) for c in self.end_of_game_cells]
        return other

    # ---------------- Pristup k bunkam ----------------
    @property
    def last_placement(self) -> Anchor:
        return self._last_placement

    def is_end_game_cell(self, coordinates: Coordinates) -> bool:
        return coordinates.col == BOARD_DIM

    def in_bounds(self, coordinates: Coordinates) -> bool:
        # +1 stlpec pre koncovy stlpec
        return 0 <= coordinates.row < BOARD_DIM and 0 <= coordinates.col < BOARD_DIM + 1

    def cell(self, coordinates: Coordinates) -> Cell | None:
        if not self.in_bounds(coordinates):
            return None
        if self.is_end_game_cell(coordinates):
            return self.end_of_game_cells[coordinates.row]
        return self.cells[coordinates.row * BOARD_DIM + coordinates.col]

    def has_tile(self, coordinates: Coordinates) -> bool:
        cell = self.cell(coordinates)
        return cell is not None and not cell.is_empty()

    def end_of_game_tile_count(self) -> int:
        return sum(1 for c in self.end_of_game_cells if not c.is_empty())

    # ---------------- Zakladne operacie ----------------
    def place_tile(self, coordinates: Coordinates, tile_placement: TilePlacement) -> TurnScore:
        """Polozi dlazdicu a vrati skore bunky (bonus + hodnota dlazdice)."""
        cell = self.cell(coordinates)
        if cell is None:
            raise CellError(coordinates, "Neplatne suradnice", ErrorKind.INVALID_COORDINATES)
        if not cell.is_empty():
            raise CellError(coordinates, "Na tomto poli uz dlazdica je", ErrorKind.OCCUPIED)
        return cell.set_tile(tile_placement)

    def remove_tile(self, coordinates: Coordinates) -> tuple[TilePlacement, TurnScore] | None:
        cell = self.cell(coordinates)
        if cell is None:
            return None
        return cell.remove_tile()

    def rotate_tile(self, coordinates: Coordinates, rotation: Rotation) -> None:
        cell = self.cell(coordinates)
        if cell is None:
            raise CellError(coordinates, "Neplatne suradnice", ErrorKind.INVALID_COORDINATES)
        if cell.tile is None:
            raise CellError(coordinates, "Bunka je prazdna", ErrorKind.EMPTY_CELL)
        cell.tile = replace(cell.tile, rotation=rotation)

    def update_universal_path(self, coordinates: Coordinates, tile_path: TilePath) -> TilePath:
        """Zmeni tvar zolika a vrati povodny `TilePath` (kvoli undo)."""
        cell = self.cell(coordinates)
        if cell is None:
            raise CellError(coordinates, "Neplatne suradnice", ErrorKind.INVALID_COORDINATES)
        try:
            return cell.update_universal_path(tile_path)
        except NileError as exc:
            raise CellError(coordinates, exc.msg, exc.kind) from exc

    def move_tile(self, old_coordinates: Coordinates, new_coordinates: Coordinates) -> TurnScore:
        removed = self.remove_tile(old_coordinates)
        if removed is None:
            raise CellError(
                old_coordinates,
                "Na povodnych suradniciach nie je dlazdica na presun",
                ErrorKind.EMPTY_CELL,
            )
        tile_placement, removal_score = removed
        try:
            placement_score = self.place_tile(new_coordinates, tile_placement)
        except CellError:
            # Vratime dlazdicu spat, doska ostane nezmenena
            self.place_tile(old_coordinates, tile_placement)
            raise
        # `removal_score` je uz zaporne
        return placement_score + removal_score

    # ---------------- Validacia tahu ----------------
    def validate_turns_moves(self, turn_coordinates: Iterable[Coordinates]) -> bool:
        """Overi dlazdice polozene v tomto tahu a potvrdi novy koniec rieky.

        Vrati True, ak tah ukoncil hru (dlazdica v koncovom stlpci).
        Doska sa meni iba pri uspechu (posledne polozenie).
        """
        remaining = set(turn_coordinates)
        last_placement = self._last_placement
        while remaining:
            coordinates = last_placement[0] + last_placement[1]
            cell = self.cell(coordinates)
            if cell is None:
                raise CellError(
                    coordinates,
                    f"Neplatne suradnice: {coordinates}",
                    ErrorKind.INVALID_COORDINATES,
                )
            if cell.tile is None:
                raise CellError(
                    coordinates,
                    f"Rieka nie je suvisla. Chyba dlazdica na {coordinates}",
                    ErrorKind.NON_CONTIGUOUS,
                )
            last_placement = eval_placement(
                last_placement,
                Placement(coordinates, cell.tile.rotation, cell.tile.tile_path_type),
            )
            self.no_crossover(*last_placement)
            if last_placement[0] not in remaining:
                raise CellError(
                    last_placement[0],
                    "Nemozno znovu pouzit dlazdicu z ineho tahu",
                    ErrorKind.REUSED_TILE,
                )
            remaining.discard(last_placement[0])

        last_coordinates, last_offset = last_placement
        next_coordinates = last_coordinates + last_offset
        # Posledna dlazdica nesmie koncit v inej dlazdici
        if self.has_tile(next_coordinates):
            raise CellError(
                {last_coordinates, next_coordinates},
                f"Dlazdica na {last_coordinates} vedie do slepej ulicky, "
                f"rieka uz pokracuje na {next_coordinates}",
                ErrorKind.DEAD_END,
            )
        self.no_encircles(last_placement)
        has_ended = self.validate_end_of_game_cells(self.end_of_game_tile_count(), last_placement)
        self._last_placement = last_placement
        log.debug(
            "turn_validated anchor=%s offset=%s ended=%s",
            last_coordinates,
            last_offset,
            has_ended,
        )
        return has_ended

    @staticmethod
    def validate_end_of_game_cells(end_of_game_cell_count: int, last_placement: Anchor) -> bool:
        """Pravidlo koncoveho stlpca; vrati True, ak hra skoncila."""
        coordinates, offset = last_placement
        in_column = coordinates.col == BOARD_DIM
        if end_of_game_cell_count == 0:
            return False
        if end_of_game_cell_count == 1:
            if in_column and offset == END_OF_GAME_OFFSET:
                return True
            if in_column:
                raise CellError(
                    coordinates,
                    f"Dlazdica v koncovom stlpci na {coordinates} musi smerovat na bodku",
                    ErrorKind.END_OF_GAME,
                )
            raise CellError(
                coordinates,
                "Dlazdica v koncovom stlpci musi byt poslednou dlazdicou rieky",
                ErrorKind.END_OF_GAME,
            )
        raise MessageError(
            "Do koncoveho stlpca mozno polozit najviac jednu dlazdicu",
            ErrorKind.END_OF_GAME,
        )

    def no_crossover(self, coordinates: Coordinates, offset: Offset) -> None:
        """Overi, ze diagonalny krok nekrizuje existujucu cestu.

        Ortogonalne kroky by narazili na inu dlazdicu, to riesia ine kontroly.
        Neplatna je napr. takato cesta::

             |\\ /
             | X
             |/ \\
        """
        if not offset.is_diagonal():
            return
        corner1 = coordinates + Offset(offset.row, 0)
        corner2 = coordinates + Offset(0, offset.col)
        cell1 = self.cell(corner1)
        cell2 = self.cell(corner2)
        if cell1 is None or cell2 is None or cell1.tile is None or cell2.tile is None:
            return
        if any(corner1 + o == corner2 for o in cell1.tile.offsets()) and any(
            corner2 + o == corner1 for o in cell2.tile.offsets()
        ):
            raise CellError(
                {coordinates, corner1, corner2},
                f"Rieka nemoze krizovat existujucu cestu medzi {corner1} a {corner2}. "
                f"Neplatne polozenie na {coordinates}",
                ErrorKind.CROSSOVER,
            )

    # ---------------- Kontrola obkolesenia ----------------
    def open_moves(self) -> list[Offset]:
        """Smery z nasledujuceho pola, ktore vedu na volnu bunku bez krizenia."""
        next_coordinates = self._last_placement[0] + self._last_placement[1]
        moves: list[Offset] = []
        for offset in OFFSETS:
            try:
                self.no_crossover(next_coordinates, offset)
            except CellError:
                continue
            cell = self.cell(next_coordinates + offset)
            if cell is not None and cell.is_empty():
                moves.append(offset)
        return moves

    def no_encircles(self, last_placement: Anchor) -> None:
        """Dokaze, ze z `last_placement` vedie cesta do koncoveho stlpca.

        Rieka, ktora sa sama uzavrie a nema unik, je neplatna. Hladame do
        hlbky na jednej sukromnej kopii dosky, spekulativne dlazdice kladieme
        a pri navrate odstranujeme.
        """
        last_coordinates, last_offset = last_placement
        if self.is_end_game_cell(last_coordinates):
            return
        coordinates = last_coordinates + last_offset
        if self.is_end_game_cell(coordinates):
            return
        if self.cell(coordinates) is None:
            raise CellError(
                coordinates,
                f"Rieka vedie na suradnice {coordinates} mimo dosky",
                ErrorKind.OFF_BOARD,
            )
        probe = self.clone()
        visited: set[Coordinates] = set()
        if probe._has_escape(last_placement, visited):
            return
        probe._last_placement = last_placement
        open_moves = probe.open_moves()
        log.debug("river_encircled at=%s open_moves=%s", coordinates, open_moves)
        raise CellError(
            coordinates,
            f"Rieka je obkolesena. Z {coordinates} nevedie ziadna cesta do koncoveho "
            f"stlpca (volne smery: {[(o.row, o.col) for o in open_moves]})",
            ErrorKind.ENCIRCLED,
        )

    def _has_escape(self, last_placement: Anchor, visited: set[Coordinates]) -> bool:
        last_coordinates, last_offset = last_placement
        coordinates = last_coordinates + last_offset
        if self.is_end_game_cell(coordinates):
            return True
        visited.add(coordinates)
        self._last_placement = last_placement
        for offset in self.open_moves():
            if coordinates + offset in visited:
                continue
            tile_placement = offsets_to_tile_placement(last_offset, offset)
            if tile_placement is None:
                continue
            try:
                self.place_tile(coordinates, tile_placement)
            except CellError:
                continue
            if self._has_escape((coordinates, offset), visited):
                return True
            self.remove_tile(coordinates)
        return False
