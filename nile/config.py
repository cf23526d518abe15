"""Konfigurácia Nile z premenných prostredia (.env).

Premenné:
- NILE_LOG_PATH      -> cesta k log súboru (predvolene `nile.log` v koreni repozitára),
- NILE_LOG_LEVEL     -> úroveň konzolového logovania (predvolene INFO),
- NILE_AI_MAX_STATES -> horný limit kandidátov v AI prehľadávaní (nenastavené = bez limitu),
- NILE_SEED          -> seed pre miešanie krabice (nenastavené = náhodné).
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Načítaj .env veľmi skoro, ale nenahrádzaj už existujúce OS premenne
if os.getenv("PYTEST_CURRENT_TEST") is None:
    load_dotenv(override=False)

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _parse_int(val: str | None) -> int | None:
    """Bezpečné parsovanie celého čísla; None ak chýba alebo je neplatné."""
    if val is None:
        return None
    try:
        return int(val.strip())
    except ValueError:
        return None


def log_path() -> str:
    env = os.getenv("NILE_LOG_PATH")
    if env:
        return env
    root_dir = Path(__file__).resolve().parents[1]
    return str(root_dir / "nile.log")


def log_level() -> int:
    """Úroveň logovania pre konzolu; neznáme hodnoty -> INFO."""
    val = (os.getenv("NILE_LOG_LEVEL") or "").strip().upper()
    if val in _LEVELS:
        return getattr(logging, val)
    return logging.INFO


def ai_max_states() -> int | None:
    """Limit stavov AI; nekladné alebo neplatné hodnoty znamenajú bez limitu."""
    value = _parse_int(os.getenv("NILE_AI_MAX_STATES"))
    if value is None or value <= 0:
        return None
    return value


def seed() -> int | None:
    return _parse_int(os.getenv("NILE_SEED"))
