"""Unit tests for the pairwise crossing predicate."""
import itertools
import math

import numpy as np
import pytest

from parasweep.core.curve import Curve
from parasweep.core.geometry import crossing_roots, linear_root, quadratic_roots, within_domains

NEG_INF = -math.inf


class TestLinearCase:

    def test_single_crossing(self):
        a = Curve(0, 0, 1, 0, -5, 5)
        b = Curve(1, 0, -1, 0, -5, 5)
        assert crossing_roots(a, b, NEG_INF) == [0.0]

    def test_parallel_lines_never_cross(self):
        a = Curve(0, 0, 1, 0, -5, 5)
        b = Curve(1, 0, 1, 1, -5, 5)
        assert linear_root(a, b) is None
        assert crossing_roots(a, b, NEG_INF) == []

    def test_coincident_overlap_not_reported(self):
        a = Curve(0, 0, 2, 1, -5, 5)
        b = Curve(1, 0, 2, 1, -1, 8)
        assert crossing_roots(a, b, NEG_INF) == []

    def test_root_must_be_strictly_ahead(self):
        a = Curve(0, 0, 1, 0, -5, 5)
        b = Curve(1, 0, -1, 0, -5, 5)
        assert crossing_roots(a, b, 0.0) == []
        assert crossing_roots(a, b, -0.5) == [0.0]

    def test_root_outside_either_domain_rejected(self):
        a = Curve(0, 0, 1, 0, -5, -1)
        b = Curve(1, 0, -1, 0, -5, 5)
        assert crossing_roots(a, b, NEG_INF) == []
        c = Curve(2, 0, 1, 0, 0, 5)   # domain bound is inclusive
        assert crossing_roots(c, b, NEG_INF) == [0.0]

    def test_equal_nonzero_quadratic_terms_use_linear_formula(self):
        a = Curve(0, 2, 0, 0, -5, 5)
        b = Curve(1, 2, 1, -3, -5, 5)
        assert crossing_roots(a, b, NEG_INF) == [pytest.approx(3.0)]


class TestQuadraticCase:

    def test_parabola_and_line_two_roots(self):
        p = Curve(0, 1, 0, 0, -2, 2)
        l = Curve(1, 0, 0, 1, -2, 2)
        assert [float(r) for r in crossing_roots(p, l, NEG_INF)] == [-1.0, 1.0]

    def test_negative_discriminant(self):
        p = Curve(0, 1, 0, 1, -2, 2)
        l = Curve(1, 0, 0, 0, -2, 2)
        assert quadratic_roots(p, l) == ()
        assert crossing_roots(p, l, NEG_INF) == []

    def test_roots_outside_domains(self):
        p = Curve(0, 1, 0, 0, -1, 1)
        l = Curve(1, 0, 0, 10, -1, 1)
        assert len(quadratic_roots(p, l)) == 2
        assert crossing_roots(p, l, -1.0) == []

    def test_tangency_gives_one_root(self):
        p = Curve(0, 1, 0, 0, -1, 1)
        l = Curve(1, 0, 0, 0, -1, 1)
        assert [float(r) for r in crossing_roots(p, l, NEG_INF)] == [0.0]

    def test_root_at_sweep_position_is_accepted(self):
        p = Curve(0, 1, 0, 0, -2, 2)
        l = Curve(1, 0, 0, 1, -2, 2)
        assert [float(r) for r in crossing_roots(p, l, -1.0)] == [-1.0, 1.0]
        assert [float(r) for r in crossing_roots(p, l, 0.0)] == [1.0]

    def test_two_parabolas(self):
        up = Curve(0, 1, 0, -1, -3, 3)
        down = Curve(1, -1, 0, 1, -3, 3)
        assert [float(r) for r in crossing_roots(up, down, NEG_INF)] == [-1.0, 1.0]


def test_within_domains_inclusive():
    a = Curve(0, 0, 1, 0, -1, 1)
    b = Curve(1, 0, 1, 0, 1, 2)
    assert within_domains(1.0, a, b)
    assert not within_domains(0.5, a, b)


def test_predicate_is_symmetric():
    rng = np.random.default_rng(7)
    curves = []
    for i in range(12):
        t1 = rng.uniform(-5, 2)
        a = 0.0 if i % 3 == 0 else rng.uniform(-2, 2)
        curves.append(Curve(i, a, rng.uniform(-3, 3), rng.uniform(-3, 3), t1, t1 + rng.uniform(0.5, 6)))
    for c1, c2 in itertools.combinations(curves, 2):
        for x in (NEG_INF, -1.0, 0.5):
            assert crossing_roots(c1, c2, x) == crossing_roots(c2, c1, x)


def test_float32_arithmetic():
    p = Curve(0, 1, 0, 0, -2, 2, dtype='float32')
    l = Curve(1, 0, 0, 1, -2, 2, dtype='float32')
    roots = crossing_roots(p, l, NEG_INF)
    assert all(isinstance(r, np.float32) for r in roots)
    assert [float(r) for r in roots] == [-1.0, 1.0]
