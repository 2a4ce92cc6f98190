"""Sweep statistics data structures and presentation utilities.

``SweepStats`` keeps one ``KindStats`` per event kind so the driver can report
how much work each part of the sweep did without the engine having to format
anything itself.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class KindStats:
    processed: int = 0
    scheduled: int = 0
    purged: int = 0
    # Timing (seconds)
    time_total: float = 0.0
    time_max: float = 0.0
    time_min: float = 0.0  # 0 means uninitialized

    def record_time(self, dt: float) -> None:
        self.time_total += dt
        if dt > self.time_max:
            self.time_max = dt
        if self.time_min == 0.0 or dt < self.time_min:
            self.time_min = dt

    def to_dict(self) -> Dict[str, Any]:
        return {
            'processed': self.processed,
            'scheduled': self.scheduled,
            'purged': self.purged,
            'time_total': self.time_total,
            'time_max': self.time_max,
            'time_min': self.time_min,
            'time_avg': (self.time_total / self.processed) if self.processed else 0.0,
        }


@dataclass
class SweepStats:
    kinds: Dict[str, KindStats] = field(default_factory=dict)
    duplicates_suppressed: int = 0
    coincidences_merged: int = 0
    stale_skipped: int = 0
    touches: int = 0

    def kind(self, name: str) -> KindStats:
        if name not in self.kinds:
            self.kinds[name] = KindStats()
        return self.kinds[name]

    @property
    def steps(self) -> int:
        return sum(k.processed for k in self.kinds.values())

    def to_dict(self) -> Dict[str, Any]:
        return {name: ks.to_dict() for name, ks in self.kinds.items()}


def format_stats_table(stats_dict) -> str:
    """Return a human readable multi-line table summarizing per-kind stats."""
    if not stats_dict:
        return "<no stats>"
    header = ["kind", "processed", "sched", "purged", "avg_us", "min_us", "max_us"]
    rows = []
    for kind in sorted(stats_dict.keys()):
        s = stats_dict[kind]
        rows.append([
            kind, str(s['processed']), str(s['scheduled']), str(s['purged']),
            f"{s['time_avg'] * 1e6:8.2f}", f"{s['time_min'] * 1e6:8.2f}", f"{s['time_max'] * 1e6:8.2f}",
        ])
    col_w = [len(h) for h in header]
    for r in rows:
        for i, v in enumerate(r):
            col_w[i] = max(col_w[i], len(v))

    def fmt(r):
        return " ".join(r[i].rjust(col_w[i]) for i in range(len(r)))
    lines = [fmt(header), "-" * (sum(col_w) + len(col_w) - 1)] + [fmt(r) for r in rows]
    return "\n".join(lines)


def print_stats(stats: SweepStats, file=None):  # pragma: no cover - formatting wrapper
    import sys
    out = file or sys.stdout
    print(format_stats_table(stats.to_dict()), file=out)
    extras = [
        ("duplicates suppressed", stats.duplicates_suppressed),
        ("coincidences merged", stats.coincidences_merged),
        ("stale events skipped", stats.stale_skipped),
        ("contacts without reordering", stats.touches),
    ]
    for label, value in extras:
        if value:
            print(f"{label}: {value}", file=out)


__all__ = ["KindStats", "SweepStats", "format_stats_table", "print_stats"]
