"""One rendered frame per instruction, for stepping through a sweep offline.

Usage pattern:
    from parasweep.core.frame_capture import FrameCapture
    cap = FrameCapture(enabled=True, directory='frames', max_frames=500)
    execute_all(engine, instructions, on_instruction=cap.on_instruction)
    cap.frames  # written PNG paths, in order

Frame names carry the instruction index and a sanitized tag so a directory
listing sorts in playback order.
"""
from __future__ import annotations

import os
import logging
from typing import Callable, List, Optional

from .logging_utils import get_logger


def _default_plot(engine, path: str, dpi: int) -> None:
    from .visualization import plot_sweep
    plot_sweep(engine, outname=path, dpi=dpi)


class FrameCapture:
    def __init__(self, enabled: bool, directory: str, max_frames: int = 1000, dpi: int = 120,
                 plot_fn: Optional[Callable[[object, str, int], None]] = None,
                 logger: Optional[logging.Logger] = None):
        self.enabled = bool(enabled)
        self.directory = directory
        self.max_frames = max_frames
        self.dpi = dpi
        self.plot_fn = plot_fn or _default_plot
        self.logger = logger or get_logger('parasweep.frames')
        self.frames: List[str] = []
        if self.enabled:
            os.makedirs(self.directory, exist_ok=True)

    def save(self, engine, tag: str) -> Optional[str]:
        if not self.enabled or len(self.frames) >= self.max_frames:
            return None
        safe_tag = ''.join(ch if ch.isalnum() or ch in ('_', '-') else '_' for ch in str(tag))[:60]
        fname = os.path.join(self.directory, f"frame_{len(self.frames):05d}_{safe_tag}.png")
        self.plot_fn(engine, fname, self.dpi)
        self.frames.append(fname)
        return fname

    def on_instruction(self, engine, index: int, instruction) -> None:
        """Hook for ``execute_all``: capture the state before each instruction."""
        tag = 'final' if instruction is None else f"{index:04d}_{instruction}"
        self.save(engine, tag)

    def finalize(self) -> List[str]:
        if self.enabled:
            self.logger.info('FrameCapture: wrote %d frame(s) to %s', len(self.frames), self.directory)
        return list(self.frames)


__all__ = ['FrameCapture']
