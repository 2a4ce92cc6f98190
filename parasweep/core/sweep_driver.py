#!/usr/bin/env python3
"""Sweep driver / CLI tool.

Reads an input file (curve block followed by an instruction stream), builds a
sweep session and executes the instructions against it, printing the console
protocol reports to stdout.

Key Responsibilities (high-level):
  * CLI argument parsing and run orchestration (`main`).
  * Optional per-instruction frames (`-v` / `--frames-dir`) and a final plot.
  * Optional per-kind statistics table (`--stats`).

Sample inputs live in demos/inputs/, e.g.:

    parasweep demos/inputs/parabola_line.txt --stats
"""
from __future__ import annotations

import argparse
import sys

from .config import DriverConfig
from .constants import SUPPORTED_DTYPES, DEFAULT_DTYPE
from .engine import SweepEngine
from .frame_capture import FrameCapture
from .instructions import execute_all
from .io import read_input, InputFormatError
from .logging_utils import configure_logging, get_logger
from .stats import print_stats

logger = get_logger('parasweep.driver')

__all__ = ['run_session', 'build_parser', 'main']


def run_session(input_path: str, cfg: DriverConfig, out=None) -> SweepEngine:
    """Execute the instruction stream of ``input_path``; returns the final engine."""
    out = out or sys.stdout
    data = read_input(input_path)
    logger.info('read %d curve(s) and %d instruction(s) from %s', data.n_curves, len(data.instructions), input_path)
    engine = SweepEngine(data.curves, config=cfg.sweep_config())
    capture = FrameCapture(enabled=cfg.frames_dir is not None, directory=cfg.frames_dir or '',
                           max_frames=cfg.max_frames, dpi=cfg.frame_dpi)
    execute_all(engine, data.instructions, out=out,
                on_instruction=capture.on_instruction if capture.enabled else None)
    capture.finalize()
    if cfg.plot_out:
        from .visualization import plot_sweep
        plot_sweep(engine, outname=cfg.plot_out, dpi=cfg.frame_dpi)
        logger.info('final state written to %s', cfg.plot_out)
    if cfg.show_stats:
        print_stats(engine.stats, file=out)
    return engine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='parasweep', description='Step-driven Bentley-Ottmann sweep over linear and quadratic curves.')
    parser.add_argument('input', help='Input file: curve count, N curve lines "a b c t1 t2", then instructions')
    parser.add_argument('-v', '--visual', action='store_true', help='Render one frame per instruction (into --frames-dir, default "sweep_frames")')
    parser.add_argument('--frames-dir', type=str, default=None, help='Directory for per-instruction frames (implies -v)')
    parser.add_argument('--plot', type=str, default=None, help='Write a plot of the final state to this path')
    parser.add_argument('--stats', action='store_true', help='Print per-event-kind statistics after the run')
    parser.add_argument('--dtype', type=str, choices=list(SUPPORTED_DTYPES), default=DEFAULT_DTYPE, help='Floating precision for curve arithmetic (default: float64)')
    parser.add_argument('--log-level', type=str, choices=['DEBUG','INFO','WARNING','ERROR','CRITICAL'], default='WARNING', help='Logging verbosity (default: WARNING)')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    frames_dir = args.frames_dir or ('sweep_frames' if args.visual else None)
    cfg = DriverConfig(
        frames_dir=frames_dir,
        plot_out=args.plot,
        show_stats=args.stats,
        log_level=args.log_level,
        dtype=args.dtype,
    )
    configure_logging(cfg.log_level)
    try:
        run_session(args.input, cfg)
    except FileNotFoundError:
        logger.error('unable to find file "%s"', args.input)
        return 1
    except InputFormatError as e:
        logger.error('error while parsing %s: %s', args.input, e)
        return 1
    return 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
