"""Bentley-Ottmann sweep over bounded linear and quadratic curves.

The engine owns three structures and mutates them one event at a time:

* an ``EventQueue`` of pending START, END and intersection events,
* an ``ActiveSet`` holding the curves under the sweep line, top to bottom,
* the append-only list of confirmed intersection points.

``step`` consumes exactly one event. Between steps every structure can be
read through the observer properties, which is what the instruction
interpreter and the renderer rely on. ``run`` simply steps until the queue
is empty.

Queue maintenance follows the classic protocol: only curves that are adjacent
in the active set are tested against each other, and whenever two curves stop
being adjacent their pending crossing is purged so it cannot fire out of
order. An intersection event whose curves only touch (a tangency, or a curve
starting on another one) is recorded but leaves the order alone, since the
upper curve is still above just after x. Three or more curves meeting in one
point are detected while scheduling, merged into a single
``MultiIntersectionEvent`` and reported as unresolved when reached.
"""
from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .active_set import ActiveSet
from .config import SweepConfig
from .curve import Curve, _as_curves
from .event_queue import EventQueue, EmptyEventQueue
from .events import (
    Event, EventKind, StartEvent, EndEvent,
    IntersectionEvent, MultiIntersectionEvent,
)
from .geometry import crossing_roots
from .logging_utils import get_logger
from .stats import SweepStats

logger = get_logger('parasweep.engine')

__all__ = [
    'SweepEngine', 'StepResult', 'RunSummary', 'Point',
    'initialize', 'EmptyEventQueue',
]

_CROSSING_KINDS = (EventKind.INTERSECTION, EventKind.MULTI_INTERSECTION)


class Point(NamedTuple):
    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:5.2f}, {self.y:5.2f})"


@dataclass(frozen=True)
class StepResult:
    """Outcome of one ``step``.

    ``scheduled`` counts the intersection events added to the queue during
    the step; it is diagnostic only. ``unresolved`` is set when the step
    reached a coincidence of three or more curves.
    """
    kind: EventKind
    x: float
    scheduled: int
    event: Event
    unresolved: bool = False


@dataclass(frozen=True)
class RunSummary:
    curves: int
    intersections: int
    unresolved: int = 0


class SweepEngine:
    """Step-driven sweep session over a fixed set of curves.

    Parameters
    ----------
    curves : sequence
        ``Curve`` objects, rows of ``a b c t1 t2`` or an ``(N, 5)`` array.
        Rows are converted with ids equal to their position.
    config : SweepConfig, optional
        Numeric settings; defaults to double precision.
    """

    def __init__(self, curves, config: Optional[SweepConfig] = None):
        self.config = config or SweepConfig()
        self.curves: Tuple[Curve, ...] = tuple(_as_curves(curves, dtype=self.config.dtype))
        self._num = self.config.scalar
        self._tol = max(float(self.config.coincident_tol), 8.0 * float(np.finfo(self.config.dtype).eps))
        self.queue = EventQueue()
        self._active = ActiveSet()
        self._intersections: List[Point] = []
        self._unresolved: List[MultiIntersectionEvent] = []
        self._x = self._num(-np.inf)
        # pairs whose crossing or contact was processed at the current sweep position
        self._handled_here = set()
        self.stats = SweepStats()
        self._current = None
        for curve in self.curves:
            self.queue.push(StartEvent.of(curve))
            self.queue.push(EndEvent.of(curve))
        logger.debug('initialized sweep with %d curves, %d events', len(self.curves), len(self.queue))

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    @property
    def x(self) -> float:
        """Current sweep position (-inf before the first step)."""
        return float(self._x)

    @property
    def active(self) -> Tuple[Curve, ...]:
        """Active curves from top to bottom."""
        return tuple(self._active)

    def active_ids(self) -> List[int]:
        return self._active.ids()

    def pending(self) -> List[Event]:
        """Pending events in processing order."""
        return self.queue.snapshot()

    @property
    def intersections(self) -> Tuple[Point, ...]:
        return tuple(self._intersections)

    @property
    def unresolved(self) -> Tuple[MultiIntersectionEvent, ...]:
        return tuple(self._unresolved)

    @property
    def done(self) -> bool:
        return not self.queue

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    def step(self) -> StepResult:
        """Process the next event.

        Raises
        ------
        EmptyEventQueue
            When no event is pending; the engine state is left untouched.
        """
        event = self.queue.pop()
        t0 = time.perf_counter()
        if event.x != self._x:
            self._handled_here.clear()
        self._x = event.x
        self._current = self.stats.kind(event.kind.value)
        unresolved = False
        if event.kind is EventKind.START:
            scheduled = self._on_start(event.curve)
        elif event.kind is EventKind.END:
            scheduled = self._on_end(event.curve)
        elif event.kind is EventKind.INTERSECTION:
            scheduled = self._on_intersection(event)
        else:
            scheduled = self._on_multi(event)
            unresolved = True
        self._current.processed += 1
        self._current.scheduled += scheduled
        self._current.record_time(time.perf_counter() - t0)
        logger.debug('step %s x=%.6g scheduled=%d active=%s', event.kind.tag, float(self._x), scheduled, self._active.ids())
        return StepResult(event.kind, float(self._x), scheduled, event, unresolved)

    def run(self) -> RunSummary:
        """Step until the queue is empty and summarize the sweep."""
        while self.queue:
            self.step()
        summary = RunSummary(len(self.curves), len(self._intersections), len(self._unresolved))
        logger.info('sweep finished: %d curves, %d intersections, %d unresolved',
                    summary.curves, summary.intersections, summary.unresolved)
        return summary

    run_to_completion = run

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _on_start(self, curve: Curve) -> int:
        x = self._x
        self._active.refresh_all(x)
        curve.refresh(x)
        self._active.insert(curve, x)
        above = self._active.predecessor(curve)
        below = self._active.successor(curve)
        n = 0
        if above is not None:
            n += self.check_intersection(above, curve)
        if below is not None:
            n += self.check_intersection(curve, below)
        if above is not None and below is not None:
            self._purge(above, below)
        return n

    def _on_end(self, curve: Curve) -> int:
        above = self._active.predecessor(curve)
        below = self._active.successor(curve)
        n = 0
        if above is not None and below is not None:
            n += self.check_intersection(above, below)
        self._active.remove(curve)
        return n

    def _on_intersection(self, event: IntersectionEvent) -> int:
        c1, c2 = event.curves
        if c1 not in self._active or c2 not in self._active:
            self.stats.stale_skipped += 1
            logger.warning('skipping intersection of inactive curves %s at x=%.6g', event.curve_ids, float(event.x))
            return 0
        self._handled_here.add(event.id_set)
        self._intersections.append(Point(float(event.x), float(event.y)))
        if self._active.index(c1) < self._active.index(c2):
            upper, lower = c1, c2
        else:
            upper, lower = c2, c1
        if not self._reverses(upper, lower):
            # contact only: the current order is still right just after x
            self.stats.touches += 1
            logger.debug('curves %d and %d touch at x=%.6g, order kept', upper.id, lower.id, float(self._x))
            return 0
        self._active.swap(upper, lower)
        upper, lower = lower, upper
        above = self._active.predecessor(upper)
        below = self._active.successor(lower)
        n = 0
        if above is not None:
            n += self.check_intersection(above, upper)
            self._purge(above, lower)
        if below is not None:
            n += self.check_intersection(lower, below)
            self._purge(below, upper)
        return n

    def _reverses(self, upper: Curve, lower: Curve) -> bool:
        """True when ``lower`` is above ``upper`` just after the sweep position.

        Both curves meet at x, so the order right after x is decided by the
        slopes there, and by curvature when the slopes agree.
        """
        x = self._x
        su, sl = float(upper.slope(x)), float(lower.slope(x))
        if not math.isclose(su, sl, rel_tol=self._tol, abs_tol=self._tol):
            return sl > su
        return float(lower.a) > float(upper.a)

    def _on_multi(self, event: MultiIntersectionEvent) -> int:
        self._unresolved.append(event)
        logger.warning('unresolved coincidence of curves %s at (%.6g, %.6g)',
                       list(event.curve_ids), float(event.x), float(event.y))
        return 0

    # ------------------------------------------------------------------
    # Queue maintenance
    # ------------------------------------------------------------------
    def check_intersection(self, c1: Curve, c2: Curve) -> int:
        """Schedule the crossings of ``c1`` and ``c2`` ahead of the sweep.

        Returns the number of events added to the queue (0, 1 or 2).
        """
        pair = frozenset((c1.id, c2.id))
        n = 0
        for r in crossing_roots(c1, c2, self._x):
            if r == self._x and pair in self._handled_here:
                continue
            if self._schedule(IntersectionEvent.at(r, c1, c2)):
                n += 1
        return n

    def _same_point(self, a: Event, b: Event) -> bool:
        return (math.isclose(float(a.x), float(b.x), rel_tol=self._tol, abs_tol=self._tol)
                and math.isclose(float(a.y), float(b.y), rel_tol=self._tol, abs_tol=self._tol))

    def _schedule(self, event: IntersectionEvent) -> bool:
        clashes = self.queue.find(lambda e: e.kind in _CROSSING_KINDS and self._same_point(e, event))
        if not clashes:
            self.queue.push(event)
            logger.debug('+ %r', event)
            return True
        if any(event.id_set <= e.id_set for e in clashes):
            self.stats.duplicates_suppressed += 1
            logger.debug('duplicate %r suppressed', event)
            return False
        first = clashes[0]
        merged: List[Curve] = []
        for ev in clashes + [event]:
            for c in ev.curves:
                if all(c is not m for m in merged):
                    merged.append(c)
        merged.sort(key=lambda c: (self._active.index(c) if c in self._active else len(self._active), c.id))
        self.queue.remove_where(lambda e: any(e is old for old in clashes))
        multi = MultiIntersectionEvent(first.x, first.y, tuple(merged))
        self.queue.push(multi)
        self.stats.coincidences_merged += 1
        logger.debug('+ %r (merged %d pending events)', multi, len(clashes))
        return True

    def _purge(self, c1: Curve, c2: Curve) -> int:
        removed = self.queue.discard_pair(c1, c2)
        if removed and self._current is not None:
            self._current.purged += removed
            logger.debug('- %d pending intersection(s) of (%d, %d)', removed, c1.id, c2.id)
        return removed

    def __repr__(self) -> str:
        return (f"SweepEngine(x={self.x:.6g}, active={self._active.ids()}, pending={len(self.queue)}, "
                f"intersections={len(self._intersections)})")


def initialize(curves: Sequence, config: Optional[SweepConfig] = None) -> SweepEngine:
    """Build a sweep session: one START and one END event per curve, x = -inf."""
    return SweepEngine(curves, config=config)
