"""Vstupný bod pre spustenie: `python -m nile`.

Odohrá partiu iba s CPU hráčmi a vypíše výsledné skóre.
"""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from . import config
from .core.errors import MessageError
from .core.game import Engine
from .logging_setup import configure_logging

log = logging.getLogger("nile")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nile", description="Simulacia partie Nile (iba CPU)")
    parser.add_argument("--players", type=int, default=2, help="pocet CPU hracov (2-4)")
    parser.add_argument("--seed", type=int, default=None, help="seed pre miesanie krabice")
    parser.add_argument(
        "--max-turns", type=int, default=500, help="bezpecnostny limit poctu tahov"
    )
    return parser


def run_simulation(players: int, seed: int | None, max_turns: int) -> Engine:
    """Odohrá CPU partiu; zastaví sa na konci hry alebo po `max_turns` ťahoch."""

    engine = Engine([], players, rng=random.Random(seed), brute_max_states=config.ai_max_states())
    log.info("simulation_start players=%d seed=%s", players, seed)
    while not engine.has_ended and engine.nile.turn_count < max_turns:
        engine.take_cpu_turn()
    log.info(
        "simulation_end turns=%d ended=%s scores=%s",
        engine.nile.turn_count,
        engine.has_ended,
        engine.nile.scores(),
    )
    return engine


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging()
    seed = args.seed if args.seed is not None else config.seed()
    try:
        engine = run_simulation(args.players, seed, args.max_turns)
    except MessageError as exc:
        Console(stderr=True).print(f"[red]{exc.msg}[/red]")
        return 2

    table = Table(title=f"Nile: {engine.nile.turn_count} tahov")
    table.add_column("Hrac")
    table.add_column("Tahy", justify="right")
    table.add_column("Skore", justify="right")
    for player in sorted(engine.players, key=lambda p: p.total_score(), reverse=True):
        table.add_row(player.name, str(len(player.scores)), str(player.total_score()))
    Console().print(table)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
