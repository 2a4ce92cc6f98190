"""Ordered set of the curves currently crossed by the sweep line.

Curves are kept top to bottom (descending cached height ``y``). The height is
a mutable key: it is refreshed explicitly with ``refresh_all`` before a new
curve is placed, and a crossing is modelled by swapping two members in place
rather than re-sorting, so the structural order is the authority between
refreshes.
"""
from __future__ import annotations

from bisect import bisect_left
from typing import Iterator, List, Optional, Tuple

from .curve import Curve

__all__ = ['ActiveSet']


def _order_key(curve: Curve, x) -> Tuple[float, float, float, int]:
    """Sort key at sweep position ``x``; smaller keys sit higher.

    Equal heights are separated by which curve rises faster just after ``x``,
    then by curvature, then by id, so no two members ever compare equal.
    """
    return (-float(curve.y), -float(curve.slope(x)), -float(curve.a), curve.id)


class ActiveSet:

    def __init__(self):
        self._items: List[Curve] = []

    def refresh_all(self, x) -> None:
        """Recompute every member's cached height at ``x`` (order is kept)."""
        for curve in self._items:
            curve.refresh(x)

    def insert(self, curve: Curve, x) -> int:
        """Place ``curve`` by its cached height at ``x``; returns its index."""
        if curve in self:
            raise ValueError(f"curve {curve.id} is already active")
        keys = [_order_key(c, x) for c in self._items]
        pos = bisect_left(keys, _order_key(curve, x))
        self._items.insert(pos, curve)
        return pos

    def remove(self, curve: Curve) -> int:
        pos = self.index(curve)
        del self._items[pos]
        return pos

    def index(self, curve: Curve) -> int:
        for i, c in enumerate(self._items):
            if c is curve:
                return i
        raise KeyError(f"curve {curve.id} is not active")

    def predecessor(self, curve: Curve) -> Optional[Curve]:
        """Curve immediately above ``curve``, or None."""
        pos = self.index(curve)
        return self._items[pos - 1] if pos > 0 else None

    def successor(self, curve: Curve) -> Optional[Curve]:
        """Curve immediately below ``curve``, or None."""
        pos = self.index(curve)
        return self._items[pos + 1] if pos + 1 < len(self._items) else None

    def swap(self, c1: Curve, c2: Curve) -> None:
        """Exchange the positions and cached heights of two members."""
        i, j = self.index(c1), self.index(c2)
        self._items[i], self._items[j] = c2, c1
        c1.y, c2.y = c2.y, c1.y

    def ids(self) -> List[int]:
        return [c.id for c in self._items]

    def __contains__(self, curve) -> bool:
        return any(c is curve for c in self._items)

    def __iter__(self) -> Iterator[Curve]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, pos: int) -> Curve:
        return self._items[pos]

    def __repr__(self) -> str:
        return f"ActiveSet({self.ids()})"
