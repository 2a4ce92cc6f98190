"""Demos for the parasweep sweep engine.

Each module exposes a run_* function callable from Python and a module-level
__main__ guard so it can be executed via:

    python -m demos.sweep_scenarios
"""
from .sweep_scenarios import run_sweep_scenarios

__all__ = ['run_sweep_scenarios']
