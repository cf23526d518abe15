"""Pomocné funkcie pre prístup k assetom (napr. bonuses.json).

Komentár (SK): Používame Path pre robustné zostavenie ciest nezávislé od cwd.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def get_assets_path() -> Path:
    """Vráti cestu k priečinku `assets/` v projekte.

    Nájde sa relatívne k tomuto modulu (`nile/core/assets.py`).
    """

    return Path(__file__).resolve().parent.parent / "assets"


def get_bonuses_path() -> str:
    """Úplná cesta k súboru `bonuses.json` (ako textová cesta)."""

    return str(get_assets_path() / "bonuses.json")


@dataclass(frozen=True)
class BonusLayout:
    """Rozloženie bonusov a penalizácií na doske.

    - `cells`: bonus pre každé (riadok, stĺpec) hlavnej mriežky, už vrátane
      zrkadlenia cez vodorovnú os,
    - `end_of_game`: bonusy koncového stĺpca podľa riadku.
    """

    dimension: int
    cells: dict[tuple[int, int], int]
    end_of_game: tuple[int, ...]


@lru_cache(maxsize=None)
def load_bonus_layout(path: str | None = None) -> BonusLayout:
    """Načíta rozloženie z JSON a doplní zrkadlovú polovicu dosky."""

    p = Path(path or get_bonuses_path())
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    dimension = int(data["dimension"])
    mirror_row = int(data["mirror_row"])
    cells: dict[tuple[int, int], int] = {}
    for row, col, bonus in data["cells"]:
        cells[(row, col)] = bonus
        # Doska je symetrická podľa vodorovnej osi
        if row < mirror_row:
            cells[(dimension - 1 - row, col)] = bonus
    half = list(data["end_of_game"])
    # Koncový stĺpec je tiež symetrický, stred sa neopakuje
    end_of_game = tuple(half + half[-2::-1])
    return BonusLayout(dimension=dimension, cells=cells, end_of_game=end_of_game)
