"""Sweep events as tagged variants.

Each event carries the sweep position it fires at, the point on the plane it
describes and the curves it concerns. The concrete classes fix how many curves
that is: one for ``StartEvent``/``EndEvent``, two for ``IntersectionEvent`` and
three or more for ``MultiIntersectionEvent``.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, FrozenSet, Tuple

from .constants import KIND_RANK
from .curve import Curve

__all__ = [
    'EventKind', 'Event', 'StartEvent', 'EndEvent',
    'IntersectionEvent', 'MultiIntersectionEvent',
]


class EventKind(enum.Enum):
    START = 'START'
    END = 'END'
    INTERSECTION = 'INTERSECTION'
    MULTI_INTERSECTION = 'MULTI_INTERSECTION'

    @property
    def rank(self) -> int:
        return KIND_RANK[self.value]

    @property
    def tag(self) -> str:
        """One-letter label used by the console protocol."""
        return {'START': 'S', 'END': 'E', 'INTERSECTION': 'I', 'MULTI_INTERSECTION': 'M'}[self.value]


@dataclass(frozen=True, eq=False)
class Event:
    kind: ClassVar[EventKind]
    x: float
    y: float
    curves: Tuple[Curve, ...]

    @property
    def point(self) -> Tuple[float, float]:
        return float(self.x), float(self.y)

    @property
    def curve_ids(self) -> Tuple[int, ...]:
        return tuple(c.id for c in self.curves)

    @property
    def id_set(self) -> FrozenSet[int]:
        return frozenset(c.id for c in self.curves)

    def sort_key(self) -> tuple:
        """Queue order: x, then kind rank, then the sorted curve ids."""
        return (float(self.x), self.kind.rank, tuple(sorted(self.curve_ids)))

    def concerns_pair(self, c1: Curve, c2: Curve) -> bool:
        return False

    def __repr__(self) -> str:
        ids = ','.join(str(i) for i in self.curve_ids)
        return f"{type(self).__name__}(x={float(self.x):.6g}, y={float(self.y):.6g}, curves=[{ids}])"


@dataclass(frozen=True, eq=False, repr=False)
class StartEvent(Event):
    kind: ClassVar[EventKind] = EventKind.START

    @classmethod
    def of(cls, curve: Curve) -> 'StartEvent':
        return cls(curve.t1, curve.evaluate(curve.t1), (curve,))

    @property
    def curve(self) -> Curve:
        return self.curves[0]


@dataclass(frozen=True, eq=False, repr=False)
class EndEvent(Event):
    kind: ClassVar[EventKind] = EventKind.END

    @classmethod
    def of(cls, curve: Curve) -> 'EndEvent':
        return cls(curve.t2, curve.evaluate(curve.t2), (curve,))

    @property
    def curve(self) -> Curve:
        return self.curves[0]


@dataclass(frozen=True, eq=False, repr=False)
class IntersectionEvent(Event):
    """Crossing of exactly two curves.

    Two intersection events denote the same pair when they reference the same
    unordered pair of curves, whatever their x.
    """
    kind: ClassVar[EventKind] = EventKind.INTERSECTION

    def __post_init__(self):
        if len(self.curves) != 2:
            raise ValueError(f"IntersectionEvent needs exactly two curves, got {len(self.curves)}")

    @classmethod
    def at(cls, x, c1: Curve, c2: Curve) -> 'IntersectionEvent':
        return cls(x, c1.evaluate(x), (c1, c2))

    def concerns_pair(self, c1: Curve, c2: Curve) -> bool:
        return self.id_set == frozenset((c1.id, c2.id))


@dataclass(frozen=True, eq=False, repr=False)
class MultiIntersectionEvent(Event):
    """Three or more curves meeting at one point (reported, never resolved)."""
    kind: ClassVar[EventKind] = EventKind.MULTI_INTERSECTION

    def __post_init__(self):
        if len(self.curves) < 3:
            raise ValueError(f"MultiIntersectionEvent needs at least three curves, got {len(self.curves)}")
