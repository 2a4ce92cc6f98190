"""Instruction stream interpreter.

Drives a ``SweepEngine`` with the four textual instructions of the console
protocol and writes their reports to a text stream:

    step        advance one event, silent
    step -p     advance one event and print ``event: <tag><x> <scheduled>``
    status      print ``status: <n>: <ids top to bottom>``
    run         drain the queue and print ``summary: <n> segments, <k> intersections``
"""
from __future__ import annotations

import enum
import sys
from typing import Iterable, Optional, TextIO

from .engine import SweepEngine, StepResult
from .event_queue import EmptyEventQueue
from .logging_utils import get_logger

logger = get_logger('parasweep.instructions')

__all__ = ['Instruction', 'parse_instruction', 'execute', 'execute_all']


class Instruction(enum.Enum):
    STEP = 'step'
    STEP_P = 'step -p'
    STATUS = 'status'
    RUN = 'run'

    def __str__(self) -> str:
        return self.value


def parse_instruction(text: str) -> Instruction:
    """Map one instruction line to an ``Instruction``; raises ValueError otherwise."""
    key = ' '.join(str(text).split()).lower()
    for ins in Instruction:
        if ins.value == key:
            return ins
    raise ValueError(f"unknown instruction: {text!r}")


def format_step(result: StepResult) -> str:
    x = result.x + 0.0  # print -0.0 as 0.00
    return f"event: {result.kind.tag}{x:6.2f} {result.scheduled}"


def format_status(engine: SweepEngine) -> str:
    ids = engine.active_ids()
    return f"status: {len(ids)}:" + ''.join(f" {i}" for i in ids)


def format_summary(engine: SweepEngine) -> str:
    return f"summary: {len(engine.curves)} segments, {len(engine.intersections)} intersections"


def execute(engine: SweepEngine, instruction: Instruction, out: Optional[TextIO] = None) -> Optional[StepResult]:
    """Apply one instruction; returns the step result for step instructions."""
    out = out or sys.stdout
    if instruction in (Instruction.STEP, Instruction.STEP_P):
        try:
            result = engine.step()
        except EmptyEventQueue:
            logger.debug('step requested on an empty queue')
            print("error: no more events", file=out)
            return None
        if instruction is Instruction.STEP_P:
            print(format_step(result), file=out)
        return result
    if instruction is Instruction.STATUS:
        print(format_status(engine), file=out)
        return None
    engine.run()
    print(format_summary(engine), file=out)
    return None


def execute_all(engine: SweepEngine, instructions: Iterable[Instruction], out: Optional[TextIO] = None, on_instruction=None) -> None:
    """Run a whole instruction stream.

    ``on_instruction(engine, index, instruction)`` is called before each
    instruction and once more after the last one (with ``instruction=None``),
    which is where frame capture hooks in.
    """
    i = -1
    for i, ins in enumerate(instructions):
        if on_instruction is not None:
            on_instruction(engine, i, ins)
        execute(engine, ins, out=out)
    if on_instruction is not None:
        on_instruction(engine, i + 1, None)
