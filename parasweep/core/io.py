"""Input file reader for sweep sessions.

File layout (plain text)::

    N
    a b c t1 t2        (N lines, one curve each)
    step               (any number of instruction lines)
    step -p
    status
    run

Curves come back as an ``(N, 5)`` float64 array whose row order defines the
curve ids used by the engine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .instructions import Instruction, parse_instruction

__all__ = ['InputData', 'InputFormatError', 'parse_input', 'read_input', 'format_input']


class InputFormatError(ValueError):
    """Raised for malformed input files; the message names the offending line."""


@dataclass
class InputData:
    curves: np.ndarray = field(default_factory=lambda: np.empty((0, 5), dtype=np.float64))
    instructions: List[Instruction] = field(default_factory=list)

    @property
    def n_curves(self) -> int:
        return int(self.curves.shape[0])


def parse_input(text: str) -> InputData:
    """Parse the contents of an input file.

    Parameters
    ----------
    text : str
        Whole file contents.

    Returns
    -------
    InputData
        Curve rows and the instruction stream.

    Raises
    ------
    InputFormatError
        If the curve count is missing or not an integer, a curve line does
        not hold five numbers, a domain is empty (``t1 >= t2``) or an
        instruction is not recognised.
    """
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise InputFormatError("line 1: missing curve count")
    try:
        n = int(lines[0].strip())
    except ValueError:
        raise InputFormatError(f"line 1: unable to parse curve count {lines[0].strip()!r}") from None
    if n < 0:
        raise InputFormatError(f"line 1: negative curve count {n}")
    if len(lines) < 1 + n:
        raise InputFormatError(f"expected {n} curve lines, found {len(lines) - 1}")

    rows = np.empty((n, 5), dtype=np.float64)
    for k in range(n):
        lineno = k + 2
        values = lines[k + 1].split()
        if len(values) != 5:
            raise InputFormatError(f"line {lineno}: curve {k + 1}: 5 numbers expected, {len(values)} found")
        try:
            rows[k] = [float(v) for v in values]
        except ValueError:
            raise InputFormatError(f"line {lineno}: curve {k + 1}: non-numeric value in {lines[k + 1].strip()!r}") from None
        if not rows[k, 3] < rows[k, 4]:
            raise InputFormatError(f"line {lineno}: curve {k + 1}: t1={rows[k, 3]:g} must be below t2={rows[k, 4]:g}")

    instructions: List[Instruction] = []
    for offset, raw in enumerate(lines[1 + n:]):
        if not raw.strip():
            continue
        try:
            instructions.append(parse_instruction(raw))
        except ValueError:
            raise InputFormatError(f"line {n + 2 + offset}: unknown instruction {raw.strip()!r}") from None
    return InputData(rows, instructions)


def read_input(filepath: str) -> InputData:
    """Read and parse an input file (see ``parse_input``)."""
    with open(filepath, 'r', encoding='utf-8') as f:
        return parse_input(f.read())


def format_input(data: InputData) -> str:
    """Inverse of ``parse_input``: render curves and instructions as file text."""
    out = [str(data.n_curves)]
    out += [' '.join(f"{v:g}" for v in row) for row in data.curves]
    out += [str(ins) for ins in data.instructions]
    return '\n'.join(out) + '\n'
