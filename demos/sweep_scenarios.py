#!/usr/bin/env python3
"""
Demo: step through a few small curve configurations and render each step.

Every scenario is a list of ``a b c t1 t2`` rows. The demo prints the console
report of every processed event, then the final summary, and (unless
``--no-plots``) writes one PNG per step under ``--out-dir/<scenario>/``.

    python -m demos.sweep_scenarios --out-dir sweep_demo --log-level INFO
"""
from __future__ import annotations

import argparse
import os
from typing import Dict, List, Sequence

from parasweep.core.engine import initialize
from parasweep.core.instructions import format_step, format_status, format_summary
from parasweep.core.logging_utils import configure_logging, get_logger
from parasweep.core.stats import print_stats

log = get_logger('parasweep.demo.scenarios')

SCENARIOS: Dict[str, List[Sequence[float]]] = {
    # two lines crossing once at the origin
    'cross': [(0, 1, 0, -5, 5), (0, -1, 0, -5, 5)],
    # parabola cut twice by a horizontal line
    'parabola_line': [(1, 0, 0, -2, 2), (0, 0, 1, -2, 2)],
    # a short line entering between two crossing curves forces a purge
    'purge': [(0, 0, 3, 0, 10), (0, 1, 1, 1, 10), (0, 0.5, 1, 0, 10)],
    # three lines through one point: reported as unresolved
    'triple_point': [(0, 1, 0, -5, 5), (0, 0, 0, -5, 5), (0, -1, 0, -5, 5)],
    # generic position, eleven crossings
    'mixed': [(1, 0, 0, -2, 2), (0, 0, 0.5, -2, 2), (0, 0.3, 0.2, -2, 2), (-1, 0, 3, -2, 2)],
}


def run_scenario(name: str, rows, out_dir: str = None, dpi: int = 80, show_stats: bool = False) -> None:
    engine = initialize(rows)
    frames = None
    if out_dir:
        frames = os.path.join(out_dir, name)
        os.makedirs(frames, exist_ok=True)
        from parasweep.core.visualization import plot_sweep
    print(f"== {name} ({len(rows)} curves)")
    k = 0
    while not engine.done:
        result = engine.step()
        print(format_step(result) + ("  [unresolved]" if result.unresolved else ""))
        print(format_status(engine))
        if frames:
            plot_sweep(engine, outname=os.path.join(frames, f"step_{k:03d}.png"), dpi=dpi)
        k += 1
    print(format_summary(engine))
    for p in engine.intersections:
        print(f"  {p}")
    if show_stats:
        print_stats(engine.stats)
    if frames:
        log.info('%s: wrote %d frame(s) to %s', name, k, frames)


def run_sweep_scenarios(names=None, out_dir: str = None, dpi: int = 80, show_stats: bool = False) -> None:
    for name in (names or list(SCENARIOS)):
        if name not in SCENARIOS:
            raise ValueError(f"Unknown scenario: {name} (choose from {', '.join(SCENARIOS)})")
        run_scenario(name, SCENARIOS[name], out_dir=out_dir, dpi=dpi, show_stats=show_stats)


def main():
    ap = argparse.ArgumentParser(description='Step through small sweep scenarios')
    ap.add_argument('names', nargs='*', help=f"Scenarios to run (default: all of {', '.join(SCENARIOS)})")
    ap.add_argument('--out-dir', type=str, default=None, help='Write one PNG per step under this directory')
    ap.add_argument('--dpi', type=int, default=80)
    ap.add_argument('--stats', action='store_true', help='Print per-kind statistics after each scenario')
    ap.add_argument('--log-level', type=str, choices=['DEBUG','INFO','WARNING','ERROR','CRITICAL'], default='WARNING')
    args = ap.parse_args()
    configure_logging(args.log_level)
    run_sweep_scenarios(args.names, out_dir=args.out_dir, dpi=args.dpi, show_stats=args.stats)


if __name__ == '__main__':
    main()
