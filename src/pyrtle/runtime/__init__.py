"""
Runtime substrate for turtle scripts.

This module provides:
- Value: Immutable tagged values (number, text, list, nothing)
- Environment: Frame stack plus the session's turtle
- BuiltinRegistry: Built-in function implementations
- ProgramRunner: Executes step lists from program files
"""

from .values import (
    Value,
    ValueKind,
    NOTHING,
    number_val,
    text_val,
    list_val,
    bool_number,
    wrap_value,
    unwrap_value,
)

from .context import (
    Frame,
    Environment,
    create_environment,
)

from .builtins import (
    BuiltinFunction,
    BuiltinRegistry,
    get_builtin_registry,
    call_builtin,
)

from .runner import (
    Program,
    ProgramRunner,
    ExecutionResult,
    parse_program,
    load_program,
    run_program,
)

__all__ = [
    # Values
    'Value',
    'ValueKind',
    'NOTHING',
    'number_val',
    'text_val',
    'list_val',
    'bool_number',
    'wrap_value',
    'unwrap_value',

    # Context
    'Frame',
    'Environment',
    'create_environment',

    # Builtins
    'BuiltinFunction',
    'BuiltinRegistry',
    'get_builtin_registry',
    'call_builtin',

    # Runner
    'Program',
    'ProgramRunner',
    'ExecutionResult',
    'parse_program',
    'load_program',
    'run_program',
]
