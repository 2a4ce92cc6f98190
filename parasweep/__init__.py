"""Public package API for the parasweep curve-intersection sweep.

This facade provides a stable, flatter import surface on top of the
internal implementation package ``parasweep.core`` while deferring the
matplotlib-backed rendering modules until first use so ``import parasweep``
stays light.

Example
-------
    from parasweep import initialize

    engine = initialize([(0, 1, 0, -5, 5), (0, -1, 0, -5, 5)])
    engine.step()
    engine.run()          # RunSummary(curves=2, intersections=1, unresolved=0)

The deeper modules (``parasweep.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("parasweep")  # populated when installed
except Exception:  # pragma: no cover - editable / unknown state
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Eager light-weight submodules
_curve = _imp('parasweep.core.curve')
_events = _imp('parasweep.core.events')
_queue = _imp('parasweep.core.event_queue')
_active = _imp('parasweep.core.active_set')
_geom = _imp('parasweep.core.geometry')
_engine = _imp('parasweep.core.engine')
_config = _imp('parasweep.core.config')
_io = _imp('parasweep.core.io')
_ins = _imp('parasweep.core.instructions')
_log = _imp('parasweep.core.logging_utils')


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)

        def _load(self):
            try:
                return self._m
            except AttributeError:
                self._m = _imp(mod_name)
                return self._m

        def __getattr__(self, item):
            if item == '_m':
                raise AttributeError(item)
            return getattr(self._load(), item)

        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


# Lazily loaded matplotlib-dependent modules
visualization = _lazy_module('parasweep.core.visualization')
frame_capture = _lazy_module('parasweep.core.frame_capture')


def plot_sweep(*args, **kwargs):
    return visualization.plot_sweep(*args, **kwargs)


# Core model
Curve = _curve.Curve
curves_from_array = _curve.curves_from_array
EventKind = _events.EventKind
Event = _events.Event
StartEvent = _events.StartEvent
EndEvent = _events.EndEvent
IntersectionEvent = _events.IntersectionEvent
MultiIntersectionEvent = _events.MultiIntersectionEvent
EventQueue = _queue.EventQueue
EmptyEventQueue = _queue.EmptyEventQueue
ActiveSet = _active.ActiveSet
crossing_roots = _geom.crossing_roots

# Engine
SweepEngine = _engine.SweepEngine
StepResult = _engine.StepResult
RunSummary = _engine.RunSummary
Point = _engine.Point
initialize = _engine.initialize
SweepConfig = _config.SweepConfig
DriverConfig = _config.DriverConfig

# Outer collaborators
InputData = _io.InputData
InputFormatError = _io.InputFormatError
read_input = _io.read_input
parse_input = _io.parse_input
Instruction = _ins.Instruction
parse_instruction = _ins.parse_instruction
execute = _ins.execute
execute_all = _ins.execute_all
get_logger = _log.get_logger
configure_logging = _log.configure_logging

__all__ = [
    'Curve', 'curves_from_array',
    'EventKind', 'Event', 'StartEvent', 'EndEvent', 'IntersectionEvent', 'MultiIntersectionEvent',
    'EventQueue', 'EmptyEventQueue', 'ActiveSet', 'crossing_roots',
    'SweepEngine', 'StepResult', 'RunSummary', 'Point', 'initialize',
    'SweepConfig', 'DriverConfig',
    'InputData', 'InputFormatError', 'read_input', 'parse_input',
    'Instruction', 'parse_instruction', 'execute', 'execute_all',
    'plot_sweep', 'visualization', 'frame_capture',
    'get_logger', 'configure_logging', '__version__',
]
