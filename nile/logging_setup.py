"""Centralizovaná inicializácia logovania pre Nile.

- Konfiguruje Rich konzolový handler a rotujúci súborový handler.
- Zabráni duplicitným handlerom pri opakovaných volaniach.
- Poskytuje `TURN_ID_VAR` pre propagáciu čísla ťahu cez ContextVar.
"""
from __future__ import annotations

import logging
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

from . import config

# Kontextové ID ťahu (napr. "12:cpu1"), dostupné pre hru aj AI
TURN_ID_VAR: ContextVar[str] = ContextVar("turn_id", default="-")


class _TurnIdFilter(logging.Filter):
    """Filter doplní `turn_id` do každého záznamu z ContextVar."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.turn_id = TURN_ID_VAR.get()
        return True


def configure_logging(*, log_path: str | None = None, level: int | None = None) -> logging.Logger:
    """Inicializuje logging iba raz a vráti projektový logger.

    - Rich na konzolu (prehľadné tracebacky)
    - Rotujúci súborový handler (≈1 MB, 5 záloh)
    - Formát zahŕňa `turn_id` z `TURN_ID_VAR`
    """

    root = logging.getLogger()
    if root.handlers:
        return logging.getLogger("nile")

    root.setLevel(logging.DEBUG)
    turn_filter = _TurnIdFilter()

    # Konzola
    ch = RichHandler(rich_tracebacks=True)
    ch.setLevel(level if level is not None else config.log_level())
    ch.addFilter(turn_filter)
    ch.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(ch)

    # Súbor s rotáciou
    path = log_path or config.log_path()
    try:
        fh = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    except OSError as exc:
        # Bez súboru pokračuj aspoň s konzolou
        logging.getLogger("nile").warning("log_file_unavailable path=%s error=%s", path, exc)
    else:
        fh.setLevel(logging.DEBUG)
        fh.addFilter(turn_filter)
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s [turn=%(turn_id)s] %(message)s"
            )
        )
        root.addHandler(fh)

    return logging.getLogger("nile")
