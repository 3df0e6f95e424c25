# -*- coding: utf-8 -*-
"""
pyrtle - an embeddable runtime for turtle graphics scripts.

The runtime gives builtins a scoped environment of immutable values and a
turtle that draws onto a screen. Typical use:

    from pyrtle import RasterScreen, Turtle, create_environment, call_builtin, number_val

    turtle = Turtle(RasterScreen((400, 400)))
    env = create_environment(turtle)
    call_builtin(env, "forward", [number_val(100)])
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyrtle")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from .errors import TurtleRuntimeError, Diagnostic, DiagnosticCollector, ErrorSeverity
from .drawable import TurtleScreen, Line, Text, Fill
from .raster_drawable import RasterScreen
from .turtle import Turtle, PenState
from .config import ScreenConfig
from .runtime import (
    Value, ValueKind, NOTHING,
    number_val, text_val, list_val, wrap_value, unwrap_value,
    Frame, Environment, create_environment,
    BuiltinFunction, BuiltinRegistry, get_builtin_registry, call_builtin,
    Program, ProgramRunner, ExecutionResult, load_program, run_program,
)

__all__ = [
    'TurtleRuntimeError', 'Diagnostic', 'DiagnosticCollector', 'ErrorSeverity',
    'TurtleScreen', 'Line', 'Text', 'Fill', 'RasterScreen',
    'Turtle', 'PenState', 'ScreenConfig',
    'Value', 'ValueKind', 'NOTHING',
    'number_val', 'text_val', 'list_val', 'wrap_value', 'unwrap_value',
    'Frame', 'Environment', 'create_environment',
    'BuiltinFunction', 'BuiltinRegistry', 'get_builtin_registry', 'call_builtin',
    'Program', 'ProgramRunner', 'ExecutionResult', 'load_program', 'run_program',
]
