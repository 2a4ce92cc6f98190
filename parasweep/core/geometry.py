"""Pairwise crossing predicate for bounded curves of degree <= 2.

``crossing_roots`` answers where two curves meet ahead of a sweep position;
the engine turns each returned root into one intersection event. Arithmetic
is carried out in the curves' own numpy dtype and compares exactly, with no
tolerance, so degenerate inputs (parallel lines, tangency, negative
discriminant) fall out as defined results rather than special cases.
"""
from __future__ import annotations

from typing import List, Tuple

import numpy as np

from .curve import Curve

__all__ = ['crossing_roots', 'linear_root', 'quadratic_roots', 'within_domains']


def within_domains(r, c1: Curve, c2: Curve) -> bool:
    """True when ``r`` lies inside both closed domains."""
    return c1.t1 <= r <= c1.t2 and c2.t1 <= r <= c2.t2


def linear_root(c1: Curve, c2: Curve):
    """Unique crossing x of two curves sharing the quadratic coefficient.

    Returns None for parallel (or coincident) curves; coincident overlaps
    have no enumerable crossing point and are not reported.
    """
    if c1.b == c2.b:
        return None
    return (c2.c - c1.c) / (c1.b - c2.b)


def quadratic_roots(c1: Curve, c2: Curve) -> Tuple:
    """Real roots of ``c1 - c2`` for curves with different quadratic terms.

    The difference is normalised to a positive leading coefficient so both
    argument orders run the exact same float operations. Returns the roots in
    ascending order, one root on tangency, none for a negative discriminant.
    """
    a = c1.a - c2.a
    b = c1.b - c2.b
    c = c1.c - c2.c
    if a < 0:
        a, b, c = -a, -b, -c
    d = b * b - 4 * a * c
    if d < 0:
        return ()
    sq = np.sqrt(d)
    r1 = (-b - sq) / (2 * a)
    r2 = (-b + sq) / (2 * a)
    if r1 == r2:
        return (r1,)
    return (r1, r2)


def crossing_roots(c1: Curve, c2: Curve, x) -> List:
    """X-coordinates where ``c1`` and ``c2`` cross ahead of the sweep at ``x``.

    Curves with equal quadratic coefficients (both straight, or parallel
    parabolas) cross at most once and only strictly after ``x``. Otherwise
    each root of the difference quadratic counts from ``x`` on, inclusive.
    Every accepted root also lies within both curves' domains.
    The result is symmetric in ``c1`` and ``c2``.
    """
    if c1.a == c2.a:
        r = linear_root(c1, c2)
        if r is None or not r > x:
            return []
        return [r] if within_domains(r, c1, c2) else []
    return [r for r in quadratic_roots(c1, c2) if r >= x and within_domains(r, c1, c2)]
