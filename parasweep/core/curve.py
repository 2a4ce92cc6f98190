"""Bounded polynomial curves of degree <= 2.

A curve is the graph of ``y = a*x**2 + b*x + c`` restricted to the closed
interval ``[t1, t2]``. Straight segments are the special case ``a == 0``.
Everything except the cached sweep height ``y`` is fixed at construction.
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from .constants import DEFAULT_DTYPE

__all__ = ['Curve', 'curves_from_array']


class Curve:
    """One input curve plus its current height on the sweep line.

    Coefficients and bounds are stored as numpy scalars of ``dtype`` so every
    evaluation happens at that fixed width.
    """

    __slots__ = ('id', 'a', 'b', 'c', 't1', 't2', 'y', '_num')

    def __init__(self, id: int, a, b, c, t1, t2, dtype: str = DEFAULT_DTYPE):
        num = np.dtype(dtype).type
        self.id = int(id)
        self._num = num
        self.a = num(a)
        self.b = num(b)
        self.c = num(c)
        self.t1 = num(t1)
        self.t2 = num(t2)
        if not self.t1 < self.t2:
            raise ValueError(f"curve {self.id}: domain start t1={float(self.t1)} must be below t2={float(self.t2)}")
        self.y = self.evaluate(self.t1)

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self._num)

    @property
    def is_linear(self) -> bool:
        return self.a == 0

    @property
    def coefficients(self) -> Tuple[float, float, float]:
        return float(self.a), float(self.b), float(self.c)

    @property
    def domain(self) -> Tuple[float, float]:
        return float(self.t1), float(self.t2)

    def evaluate(self, x):
        """Height of the curve at ``x`` (no domain check)."""
        x = self._num(x)
        return self.a * x * x + self.b * x + self.c

    def refresh(self, x):
        """Evaluate at ``x`` and cache the result as the current sweep height."""
        self.y = self.evaluate(x)
        return self.y

    def slope(self, x):
        x = self._num(x)
        return 2 * self.a * x + self.b

    def contains(self, x) -> bool:
        return self.t1 <= x <= self.t2

    def sample(self, n: int = 200) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``n`` evenly spaced (xs, ys) over the domain, for plotting."""
        xs = np.linspace(float(self.t1), float(self.t2), max(2, int(n)))
        ys = np.polyval([float(self.a), float(self.b), float(self.c)], xs)
        return xs, ys

    def __repr__(self) -> str:
        return (f"Curve(id={self.id}, a={float(self.a):g}, b={float(self.b):g}, c={float(self.c):g}, "
                f"t1={float(self.t1):g}, t2={float(self.t2):g})")

    def __str__(self) -> str:
        return f"{float(self.a):g} {float(self.b):g} {float(self.c):g} {float(self.t1):g} {float(self.t2):g}"


def curves_from_array(values, dtype: str = DEFAULT_DTYPE) -> List[Curve]:
    """Build curves from ``(N, 5)`` rows of ``a b c t1 t2``; ids follow row order.

    ``values`` may be any array-like, including an iterable of 5-tuples. An
    empty input yields an empty list.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return []
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[1] != 5:
        raise ValueError(f"curve rows must have shape (N, 5), got {arr.shape}")
    return [Curve(i, *row, dtype=dtype) for i, row in enumerate(arr)]


def _as_curves(items: Iterable, dtype: str = DEFAULT_DTYPE) -> List[Curve]:
    """Accept Curve objects, 5-value rows or an (N, 5) array."""
    if isinstance(items, np.ndarray):
        return curves_from_array(items, dtype=dtype)
    items = list(items)
    if all(isinstance(it, Curve) for it in items):
        ids = [it.id for it in items]
        if len(set(ids)) != len(ids):
            raise ValueError("curve ids must be unique")
        return items
    if any(isinstance(it, Curve) for it in items):
        raise ValueError("cannot mix Curve objects and raw rows")
    return curves_from_array(items, dtype=dtype)
