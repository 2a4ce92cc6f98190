"""Configuration objects for the sweep engine and its command-line driver."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Optional, Any, Dict

import numpy as np

from .constants import EPS_COINCIDENT, DEFAULT_DTYPE, SUPPORTED_DTYPES


@dataclass
class SweepConfig:
    """Engine parameters.

    Attributes
    ----------
    dtype : str
        Floating dtype used for curve coefficients and all sweep arithmetic
        ('float64' or 'float32').
    coincident_tol : float
        Absolute tolerance under which two pending intersection points are
        treated as the same location.
    """
    dtype: str = DEFAULT_DTYPE
    coincident_tol: float = EPS_COINCIDENT

    def __post_init__(self):
        if self.dtype not in SUPPORTED_DTYPES:
            raise ValueError(f"unsupported dtype '{self.dtype}' (expected one of {SUPPORTED_DTYPES})")
        if self.coincident_tol < 0:
            raise ValueError("coincident_tol must be non-negative")

    @property
    def scalar(self):
        """numpy scalar type matching ``dtype``."""
        return np.dtype(self.dtype).type


@dataclass
class DriverConfig:
    frames_dir: Optional[str] = None
    plot_out: Optional[str] = None
    show_stats: bool = False
    log_level: str = 'WARNING'
    dtype: str = DEFAULT_DTYPE
    frame_dpi: int = 120
    max_frames: int = 1000

    def sweep_config(self) -> SweepConfig:
        return SweepConfig(dtype=self.dtype)

    def to_dict(self) -> Dict[str, Any]:  # pragma: no cover - simple mapping
        return asdict(self)


__all__ = ['SweepConfig', 'DriverConfig']
