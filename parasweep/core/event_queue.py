"""Priority queue of pending sweep events.

Backed by a binary heap of ``(key, seq, event)`` entries. ``key`` is the
event's own sort key and ``seq`` a monotonically increasing insertion counter,
which makes the order total and deterministic for events that share a key.
"""
from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional

from .curve import Curve
from .events import Event, EventKind

__all__ = ['EventQueue', 'EmptyEventQueue']


class EmptyEventQueue(IndexError):
    """Raised when an event is requested from an empty queue."""

    def __init__(self, message: str = 'no more events'):
        super().__init__(message)


@dataclass(order=True)
class _Entry:
    key: tuple
    seq: int
    event: Event = field(compare=False)


class EventQueue:
    """Min-queue of events keyed by ascending x.

    Ties on x are broken by event kind rank, then by the sorted ids of the
    curves involved, then by insertion order.
    """

    def __init__(self, events=None):
        self._heap: List[_Entry] = []
        self._counter = itertools.count()
        for ev in events or ():
            self.push(ev)

    def push(self, event: Event) -> None:
        heapq.heappush(self._heap, _Entry(event.sort_key(), next(self._counter), event))

    insert = push

    def pop(self) -> Event:
        if not self._heap:
            raise EmptyEventQueue()
        return heapq.heappop(self._heap).event

    extract_min = pop

    def peek(self) -> Optional[Event]:
        return self._heap[0].event if self._heap else None

    def remove_where(self, predicate: Callable[[Event], bool]) -> int:
        """Drop every event matching ``predicate``; returns how many were removed.

        Retained entries keep their keys and sequence numbers, so their
        relative order is unchanged.
        """
        kept = [e for e in self._heap if not predicate(e.event)]
        removed = len(self._heap) - len(kept)
        if removed:
            heapq.heapify(kept)
            self._heap = kept
        return removed

    def discard_pair(self, c1: Curve, c2: Curve) -> int:
        """Remove pending two-curve intersections between ``c1`` and ``c2``."""
        return self.remove_where(
            lambda ev: ev.kind is EventKind.INTERSECTION and ev.concerns_pair(c1, c2)
        )

    def find(self, predicate: Callable[[Event], bool]) -> List[Event]:
        return [e.event for e in sorted(self._heap) if predicate(e.event)]

    def snapshot(self) -> List[Event]:
        """Pending events in the order they would be processed."""
        return [e.event for e in sorted(self._heap)]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Event]:
        # heap order, not processing order
        return (e.event for e in self._heap)

    def __repr__(self) -> str:
        return f"EventQueue({len(self._heap)} pending)"
