"""Central numerical tolerances and event ordering constants.

The sweep itself compares coefficients and roots exactly; the tolerances
below are only used where two independently computed points have to be
recognised as the same location.
"""
from __future__ import annotations

# Point tolerances
EPS_COINCIDENT: float = 1e-9      # two event points closer than this are the same point

# Floating dtypes accepted for curve arithmetic
DEFAULT_DTYPE: str = 'float64'
SUPPORTED_DTYPES = ('float32', 'float64')

# Secondary queue order for events sharing the same x
KIND_RANK = {
    'START': 0,
    'INTERSECTION': 1,
    'MULTI_INTERSECTION': 2,
    'END': 3,
}

__all__ = [
    'EPS_COINCIDENT',
    'DEFAULT_DTYPE',
    'SUPPORTED_DTYPES',
    'KIND_RANK',
]
