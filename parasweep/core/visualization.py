"""Rendering helpers for sweep sessions.

Kept apart from the engine so the core never imports matplotlib.
"""
from __future__ import annotations

import math
import os as _os
import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import numpy as np
import matplotlib.pyplot as plt

from .logging_utils import get_logger

logger = get_logger('parasweep.viz')

__all__ = ['plot_sweep', 'status_lines']


def status_lines(engine, max_items: int = 12):
    """Three short text lines describing active set, pending events and intersections."""
    def clip(items):
        items = list(items)
        if len(items) > max_items:
            return items[:max_items] + ['...']
        return items
    active = ', '.join(clip(str(i) for i in engine.active_ids()))
    pending = ', '.join(clip(f"{float(ev.x):.2f}" for ev in engine.pending()))
    found = ', '.join(clip(str(p) for p in engine.intersections))
    return [
        f"Sweep Line Status: {active}",
        f"Events: {pending}",
        f"Intersections: {found}",
    ]


def plot_sweep(engine, outname: str = "sweep.png", title=None, samples: int = 200, dpi: int = 120, show_status: bool = True):
    """Plot every curve, the sweep line and the intersections found so far.

    Args:
        engine: SweepEngine-like with .curves, .x, .active, .pending(), .intersections
        outname: output image path
        title: optional figure title; defaults to the sweep position
        samples: points sampled per curve
        dpi: output resolution
        show_status: if True, write the active set / events / intersections under the plot
    """
    fig, ax = plt.subplots(figsize=(7, 7.6 if show_status else 7))
    active_ids = set(engine.active_ids())
    cmap = plt.get_cmap('tab10')
    xs_all = []
    ys_all = []
    for curve in engine.curves:
        xs, ys = curve.sample(samples)
        xs_all.append(xs)
        ys_all.append(ys)
        is_active = curve.id in active_ids
        ax.plot(xs, ys, color=cmap(curve.id % 10), linewidth=2.2 if is_active else 1.0,
                alpha=1.0 if is_active else 0.55)
        ax.annotate(str(curve.id), (xs[0], ys[0]), textcoords='offset points', xytext=(-8, 4), fontsize=8)

    if xs_all:
        xs_cat = np.concatenate(xs_all)
        ys_cat = np.concatenate(ys_all)
        xmin, xmax = float(xs_cat.min()), float(xs_cat.max())
        ymin, ymax = float(ys_cat.min()), float(ys_cat.max())
        pad_x = 0.05 * max(1e-9, xmax - xmin)
        pad_y = 0.05 * max(1e-9, ymax - ymin)
        ax.set_xlim(xmin - pad_x, xmax + pad_x)
        ax.set_ylim(ymin - pad_y, ymax + pad_y)

    # pending events as ticks on the bottom axis
    pending_x = [float(ev.x) for ev in engine.pending()]
    if pending_x:
        ax.plot(pending_x, [0.0] * len(pending_x), '|', color='0.4', markersize=10,
                transform=ax.get_xaxis_transform(), clip_on=False)

    if math.isfinite(engine.x):
        ax.axvline(engine.x, color='crimson', linestyle='--', linewidth=1.2)

    pts = np.array([tuple(p) for p in engine.intersections], dtype=float).reshape(-1, 2)
    if pts.shape[0]:
        ax.scatter(pts[:, 0], pts[:, 1], s=30, color='black', zorder=5)
    for ev in getattr(engine, 'unresolved', ()):
        ax.scatter([float(ev.x)], [float(ev.y)], s=60, marker='x', color='red', zorder=6)

    ax.set_title(title if title is not None else (f"x = {engine.x:.2f}" if math.isfinite(engine.x) else "x = -inf"))
    ax.grid(True, alpha=0.3)
    if show_status:
        fig.text(0.02, 0.02, '\n'.join(status_lines(engine)), family='monospace', fontsize=8, va='bottom')
        fig.subplots_adjust(bottom=0.14)
    fig.savefig(outname, dpi=dpi)
    plt.close(fig)
    logger.debug('wrote %s', outname)
    return outname
