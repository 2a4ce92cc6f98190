"""End-to-end sweep scenarios with hand-computed expectations."""
import math

import numpy as np
import pytest

from parasweep.core.config import SweepConfig
from parasweep.core.engine import SweepEngine, initialize, RunSummary, Point
from parasweep.core.event_queue import EmptyEventQueue
from parasweep.core.events import EventKind


def test_scenario_a_two_crossing_lines():
    engine = initialize([(0, 1, 0, -5, 5), (0, -1, 0, -5, 5)])
    summary = engine.run()
    assert summary == RunSummary(curves=2, intersections=1, unresolved=0)
    (p,) = engine.intersections
    assert p.x == pytest.approx(0.0) and p.y == pytest.approx(0.0)


def test_scenario_b_parallel_lines():
    engine = initialize([(0, 1, 0, -5, 5), (0, 1, 1, -5, 5)])
    assert engine.run().intersections == 0
    assert engine.intersections == ()


def test_scenario_c_parabola_and_line():
    engine = initialize([(1, 0, 0, -2, 2), (0, 0, 1, -2, 2)])
    assert engine.run().intersections == 2
    assert [p.x for p in engine.intersections] == [pytest.approx(-1.0), pytest.approx(1.0)]
    assert all(p.y == pytest.approx(1.0) for p in engine.intersections)


def test_scenario_d_roots_outside_domain():
    engine = initialize([(1, 0, 0, -1, 1), (0, 0, 10, -1, 1)])
    assert engine.run().intersections == 0


class TestScenarioE:
    """A = y=3, B = y=x+1 (starts at x=1), C = y=0.5x+1.

    A and C are adjacent first and schedule a crossing at x=4; B starts
    between them, which must purge that event. B then crosses A at x=2,
    after which A (now below B) is adjacent to C again and crosses it at x=4.
    """

    @staticmethod
    def make_engine():
        return initialize([
            (0, 0, 3, 0, 10),    # A, id 0
            (0, 1, 1, 1, 10),    # B, id 1
            (0, 0.5, 1, 0, 10),  # C, id 2
        ])

    @staticmethod
    def pending_pairs(engine):
        return [tuple(sorted(ev.curve_ids)) for ev in engine.pending() if ev.kind is EventKind.INTERSECTION]

    def test_stale_pair_purged_and_rescheduled(self):
        engine = self.make_engine()
        r1 = engine.step()
        r2 = engine.step()
        assert (r1.kind, r2.kind) == (EventKind.START, EventKind.START)
        assert r2.scheduled == 1
        assert self.pending_pairs(engine) == [(0, 2)]

        r3 = engine.step()               # B starts between A and C
        assert r3.kind is EventKind.START and r3.x == 1.0
        assert engine.active_ids() == [0, 1, 2]
        assert self.pending_pairs(engine) == [(0, 1)]
        assert engine.stats.kind('START').purged == 1

        r4 = engine.step()               # B crosses A
        assert r4.kind is EventKind.INTERSECTION and r4.x == pytest.approx(2.0)
        assert engine.active_ids() == [1, 0, 2]
        assert r4.scheduled == 1
        assert self.pending_pairs(engine) == [(0, 2)]

        r5 = engine.step()               # A crosses C
        assert r5.kind is EventKind.INTERSECTION and r5.x == pytest.approx(4.0)
        assert engine.active_ids() == [1, 2, 0]
        assert r5.scheduled == 0

    def test_total_matches_reference(self):
        engine = self.make_engine()
        assert engine.run() == RunSummary(3, 2, 0)
        assert [tuple(p) for p in engine.intersections] == [
            (pytest.approx(2.0), pytest.approx(3.0)),
            (pytest.approx(4.0), pytest.approx(3.0)),
        ]
        assert engine.active == ()


class TestStepping:

    def test_initial_state(self):
        engine = initialize([(0, 1, 0, -5, 5), (0, -1, 0, -5, 5)])
        assert engine.x == -math.inf
        assert len(engine.pending()) == 4
        assert engine.active == ()
        assert not engine.done

    def test_step_reports_kind_x_and_scheduled(self):
        engine = initialize([(0, 1, 0, -5, 5), (0, -1, 0, -5, 5)])
        first = engine.step()
        assert (first.kind, first.x, first.scheduled) == (EventKind.START, -5.0, 0)
        second = engine.step()
        assert (second.kind, second.scheduled) == (EventKind.START, 1)
        assert engine.active_ids() == [1, 0]
        third = engine.step()
        assert third.kind is EventKind.INTERSECTION
        assert engine.active_ids() == [0, 1]
        assert engine.intersections == (Point(0.0, 0.0),)

    def test_step_on_empty_queue_is_reported_and_harmless(self):
        engine = initialize([(0, 1, 0, 0, 1)])
        engine.run()
        assert engine.done
        with pytest.raises(EmptyEventQueue):
            engine.step()
        assert engine.x == 1.0
        assert engine.run() == RunSummary(1, 0, 0)

    def test_no_curves(self):
        engine = initialize([])
        assert engine.done
        assert engine.run() == RunSummary(0, 0, 0)

    def test_accepts_numpy_rows_and_float32(self):
        rows = np.array([[1, 0, 0, -2, 2], [0, 0, 1, -2, 2]])
        engine = SweepEngine(rows, config=SweepConfig(dtype='float32'))
        assert all(c.dtype == np.float32 for c in engine.curves)
        assert engine.run().intersections == 2
        assert [p.x for p in engine.intersections] == [-1.0, 1.0]
        assert all(isinstance(p.x, float) for p in engine.intersections)


class TestDegenerateCases:

    def test_tangent_parabola_counts_once(self):
        engine = initialize([(1, 0, 0, -1, 1), (0, 0, 0, -1, 1)])
        assert engine.run().intersections == 1
        assert engine.intersections[0].x == pytest.approx(0.0)

    def test_tangency_keeps_vertical_order(self):
        engine = initialize([(1, 0, 0, -1, 1), (0, 0, 0, -1, 1)])
        engine.step()
        engine.step()
        assert engine.active_ids() == [0, 1]
        result = engine.step()
        assert result.kind is EventKind.INTERSECTION
        assert result.scheduled == 0
        # the parabola only touches the line and stays above it
        assert engine.active_ids() == [0, 1]
        assert engine.stats.touches == 1

    def test_crossing_after_tangency_is_found(self):
        engine = initialize([
            (1, 0, 0, -1, 1),       # y = x^2, touches y = 0 at x = 0
            (0, 0, 0, -1, 1),       # y = 0
            (0, 0, 0.25, 0.2, 1),   # y = 0.25, crosses the parabola at x = 0.5
        ])
        assert engine.run().intersections == 2
        assert [p.x for p in engine.intersections] == [pytest.approx(0.0), pytest.approx(0.5)]
        assert engine.intersections[1].y == pytest.approx(0.25)

    def test_curve_starting_on_another_curve(self):
        engine = initialize([
            (0, 0, 1, -2, 2),       # y = 1
            (1, 0, 0, 1, 2),        # y = x^2, starts on y = 1 at x = 1
            (0, 0, 2, -2, 2),       # y = 2, crossed by the parabola at sqrt(2)
        ])
        for _ in range(4):
            engine.step()
        assert engine.x == 1.0
        assert engine.active_ids() == [2, 1, 0]
        assert engine.run().intersections == 2
        p, q = engine.intersections
        assert (p.x, p.y) == (pytest.approx(1.0), pytest.approx(1.0))
        assert (q.x, q.y) == (pytest.approx(math.sqrt(2)), pytest.approx(2.0))

    def test_curve_starting_on_another_and_falling_below(self):
        engine = initialize([(0, 0, 1, -2, 2), (-1, 0, 2, 1, 2)])
        assert engine.run().intersections == 1
        assert engine.stats.touches == 1

    def test_parabola_crossing_line_twice_with_a_curve_in_between(self):
        # a short line starting between the parabola and the long line
        # separates them for a while; both crossings must still be found
        engine = initialize([
            (1, 0, 0, -2, 2),      # y = x^2
            (0, 0, 1, -2, 2),      # y = 1
            (0, 0, 2, -1.8, -1.5), # y = 2, above the line, below the parabola
        ])
        assert engine.run().intersections == 2
        assert [p.x for p in engine.intersections] == [pytest.approx(-1.0), pytest.approx(1.0)]

    def test_three_lines_through_one_point_are_unresolved(self):
        engine = initialize([(0, 1, 0, -5, 5), (0, 0, 0, -5, 5), (0, -1, 0, -5, 5)])
        kinds = []
        while not engine.done:
            kinds.append(engine.step())
        multi = [r for r in kinds if r.kind is EventKind.MULTI_INTERSECTION]
        assert len(multi) == 1
        assert multi[0].unresolved
        assert sorted(multi[0].event.curve_ids) == [0, 1, 2]
        assert engine.intersections == ()
        assert len(engine.unresolved) == 1
        assert engine.stats.coincidences_merged == 1
        assert RunSummary(3, 0, 1) == RunSummary(len(engine.curves), len(engine.intersections), len(engine.unresolved))

    def test_duplicate_schedule_suppressed(self):
        engine = initialize([(0, 1, 0, -5, 5), (0, -1, 0, -5, 5)])
        engine.step()
        engine.step()
        c0, c1 = engine.curves
        assert engine.check_intersection(c0, c1) == 0
        assert engine.stats.duplicates_suppressed == 1
        assert len([ev for ev in engine.pending() if ev.kind is EventKind.INTERSECTION]) == 1

    def test_separated_parallel_curves_never_meet(self):
        engine = initialize([(2, 0, 0, -3, 3), (2, 0, 5, -3, 3), (0, 0, -1, -3, 3)])
        assert engine.run().intersections == 0
