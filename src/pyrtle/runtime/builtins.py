"""
Built-in function registry for the turtle runtime.

Maps script-level names to Python implementations. Every implementation
takes the Environment and the already-evaluated argument list and returns
a Value, raising ``TurtleRuntimeError`` on bad arguments.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import math

from .values import (
    Value, ValueKind, NOTHING,
    number_val, list_val, bool_number,
)
from .context import Environment
from ..errors import (
    error_arity, error_index_out_of_bounds, error_type_mismatch, error_unknown_builtin,
)
from ..io.png import write_png

Implementation = Callable[[Environment, Sequence[Value]], Value]


@dataclass
class BuiltinFunction:
    """
    A built-in function with its implementation and minimum arity.
    """
    name: str
    params: Tuple[str, ...]
    implementation: Implementation
    doc: str = ""
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def arity(self) -> int:
        """Minimum number of arguments; ``*rest`` parameters are optional."""
        return sum(1 for p in self.params if not p.startswith('*'))

    def __call__(self, env: Environment, args: Sequence[Value]) -> Value:
        if len(args) < self.arity:
            raise error_arity(self.name, self.arity, len(args))
        return self.implementation(env, args)


# Argument shape checks

def _expect(builtin: str, value: Value, kind: ValueKind):
    if value.kind != kind:
        raise error_type_mismatch(builtin, kind.value, value)
    return value.data


def _text(builtin: str, value: Value) -> str:
    return _expect(builtin, value, ValueKind.TEXT)


def _number(builtin: str, value: Value) -> float:
    return _expect(builtin, value, ValueKind.NUMBER)


def _list(builtin: str, value: Value) -> Tuple[Value, ...]:
    return _expect(builtin, value, ValueKind.LIST)


class BuiltinRegistry:
    """
    Registry of all built-in functions.

    Functions are registered by name (and any aliases) and can be looked
    up for execution.
    """

    def __init__(self):
        self._functions: Dict[str, BuiltinFunction] = {}
        self._register_all()

    def get_function(self, name: str) -> Optional[BuiltinFunction]:
        """Look up a function by name or alias."""
        return self._functions.get(name)

    def register(self, func: BuiltinFunction) -> None:
        """Register a function under its name and aliases."""
        self._functions[func.name] = func
        for alias in func.aliases:
            self._functions[alias] = func

    def functions(self) -> List[BuiltinFunction]:
        """All registered functions, once each, sorted by name."""
        unique = {f.name: f for f in self._functions.values()}
        return [unique[name] for name in sorted(unique)]

    def names(self) -> List[str]:
        return sorted(self._functions)

    def _register_all(self) -> None:
        """Register all built-in functions."""
        self._register_scope_functions()
        self._register_list_functions()
        self._register_logic_functions()
        self._register_turtle_functions()
        self._register_io_functions()

    # --- Scope Functions ---

    def _register_scope_functions(self) -> None:
        """Register variable binding functions."""

        def _make(env: Environment, args: Sequence[Value]) -> Value:
            name = _text("make", args[0])
            env.current_frame().set(name, args[1])
            return NOTHING

        def _global(env: Environment, args: Sequence[Value]) -> Value:
            name = _text("global", args[0])
            env.global_frame().set(name, args[1])
            return NOTHING

        self.register(BuiltinFunction(
            "make", ("name", "value"), _make,
            "Bind name to value in the current frame.",
        ))
        self.register(BuiltinFunction(
            "global", ("name", "value"), _global,
            "Bind name to value in the global frame.",
        ))

    # --- List Functions ---

    def _register_list_functions(self) -> None:
        """Register list accessors. None of them mutate their input."""

        def _head(env: Environment, args: Sequence[Value]) -> Value:
            values = _list("head", args[0])
            if not values:
                return NOTHING
            return values[0]

        def _tail(env: Environment, args: Sequence[Value]) -> Value:
            values = _list("tail", args[0])
            if not values:
                return NOTHING
            return list_val(values[1:])

        def _length(env: Environment, args: Sequence[Value]) -> Value:
            return number_val(len(_list("length", args[0])))

        def _isempty(env: Environment, args: Sequence[Value]) -> Value:
            return bool_number(len(_list("isempty", args[0])) == 0)

        def _getindex(env: Environment, args: Sequence[Value]) -> Value:
            """
            Zero-based lookup. The index is truncated toward zero, so -0.5
            reads element 0 while -1, NaN and infinities are out of bounds.
            """
            values = _list("getindex", args[0])
            n = _number("getindex", args[1])
            if not math.isfinite(n):
                raise error_index_out_of_bounds(n, len(values))
            idx = int(n)  # truncates toward zero
            if idx < 0 or idx >= len(values):
                raise error_index_out_of_bounds(idx, len(values))
            return values[idx]

        self.register(BuiltinFunction(
            "head", ("list",), _head,
            "First element of a list, or nothing if it is empty.",
        ))
        self.register(BuiltinFunction(
            "tail", ("list",), _tail,
            "All but the first element, or nothing if the list is empty.",
        ))
        self.register(BuiltinFunction(
            "length", ("list",), _length,
            "Number of elements in a list.",
        ))
        self.register(BuiltinFunction(
            "isempty", ("list",), _isempty,
            "1 if the list is empty, else 0.",
            aliases=("is_empty",),
        ))
        self.register(BuiltinFunction(
            "getindex", ("list", "index"), _getindex,
            "Element at a zero-based index, truncated toward zero; "
            "negative, NaN and infinite indices are out of bounds.",
            aliases=("get_index",),
        ))

    # --- Logic Functions ---

    def _register_logic_functions(self) -> None:

        def _not(env: Environment, args: Sequence[Value]) -> Value:
            return bool_number(not args[0].is_truthy())

        self.register(BuiltinFunction(
            "not", ("value",), _not,
            "1 if the value is falsy (zero, empty, nothing), else 0.",
        ))

    # --- Turtle Functions ---

    def _register_turtle_functions(self) -> None:
        """Register the movement and drawing commands."""

        def _forward(env: Environment, args: Sequence[Value]) -> Value:
            env.get_turtle().forward(_number("forward", args[0]))
            return NOTHING

        def _backward(env: Environment, args: Sequence[Value]) -> Value:
            env.get_turtle().backward(_number("backward", args[0]))
            return NOTHING

        def _left(env: Environment, args: Sequence[Value]) -> Value:
            env.get_turtle().left(_number("left", args[0]))
            return NOTHING

        def _right(env: Environment, args: Sequence[Value]) -> Value:
            env.get_turtle().right(_number("right", args[0]))
            return NOTHING

        def _realign(env: Environment, args: Sequence[Value]) -> Value:
            env.get_turtle().set_orientation(_number("realign", args[0]))
            return NOTHING

        def _teleport(env: Environment, args: Sequence[Value]) -> Value:
            x = _number("teleport", args[0])
            y = _number("teleport", args[1])
            env.get_turtle().teleport(x, y)
            return NOTHING

        def _color(env: Environment, args: Sequence[Value]) -> Value:
            r, g, b = (_number("color", a) for a in args[:3])
            env.get_turtle().set_color(r, g, b)
            return NOTHING

        def _bgcolor(env: Environment, args: Sequence[Value]) -> Value:
            r, g, b = (_number("bgcolor", a) for a in args[:3])
            env.get_turtle().set_background_color(r, g, b)
            return NOTHING

        def _write(env: Environment, args: Sequence[Value]) -> Value:
            env.get_turtle().write(_text("write", args[0]))
            return NOTHING

        def _position(env: Environment, args: Sequence[Value]) -> Value:
            x, y = env.get_turtle().position
            return list_val([number_val(x), number_val(y)])

        def _orientation(env: Environment, args: Sequence[Value]) -> Value:
            return number_val(env.get_turtle().orientation)

        def _command(method: str) -> Implementation:
            def _run(env: Environment, args: Sequence[Value]) -> Value:
                getattr(env.get_turtle(), method)()
                return NOTHING
            return _run

        turtle_funcs = [
            ("forward", ("length",), _forward, "Move forward, drawing if the pen is down.", ()),
            ("backward", ("length",), _backward, "Move backward, drawing if the pen is down.", ()),
            ("left", ("degrees",), _left, "Turn counter-clockwise.", ()),
            ("right", ("degrees",), _right, "Turn clockwise.", ()),
            ("realign", ("degrees",), _realign, "Set the orientation (0 is north).", ("set_orientation",)),
            ("teleport", ("x", "y"), _teleport, "Go to a point, drawing if the pen is down.", ()),
            ("color", ("red", "green", "blue"), _color, "Set the pen color; channels in [0, 1].", ()),
            ("bgcolor", ("red", "green", "blue"), _bgcolor, "Set the background color.", ()),
            ("write", ("text",), _write, "Write text at the turtle.", ()),
            ("position", (), _position, "The turtle position as [x, y].", ()),
            ("orientation", (), _orientation, "The turtle orientation in degrees.", ()),
            ("home", (), _command("home"), "Return to the origin facing north.", ()),
            ("clear", (), _command("clear"), "Erase everything drawn so far.", ()),
            ("penup", (), _command("pen_up"), "Stop drawing while moving.", ()),
            ("pendown", (), _command("pen_down"), "Draw while moving.", ()),
            ("hide", (), _command("hide"), "Hide the turtle marker.", ()),
            ("show", (), _command("show"), "Show the turtle marker.", ()),
            ("flood", (), _command("flood"), "Flood fill the region under the turtle.", ()),
        ]

        for name, params, impl, doc, aliases in turtle_funcs:
            self.register(BuiltinFunction(name, params, impl, doc, aliases))

    # --- I/O Functions ---

    def _register_io_functions(self) -> None:

        def _print_val(env: Environment, args: Sequence[Value]) -> Value:
            """Print values separated by spaces."""
            print(" ".join(str(a) for a in args), file=env.output)
            return NOTHING

        def _screenshot(env: Environment, args: Sequence[Value]) -> Value:
            """Save the rendered screen as a PNG file."""
            path = _text("screenshot", args[0])
            bitmap = env.get_turtle().screen.capture_bitmap()
            write_png(bitmap, path)
            return NOTHING

        self.register(BuiltinFunction(
            "print", ("*values",), _print_val,
            "Print values separated by spaces.",
        ))
        self.register(BuiltinFunction(
            "screenshot", ("path",), _screenshot,
            "Save the screen to a PNG file.",
        ))


# Global singleton registry
_registry: Optional[BuiltinRegistry] = None


def get_builtin_registry() -> BuiltinRegistry:
    """Get the global built-in function registry."""
    global _registry
    if _registry is None:
        _registry = BuiltinRegistry()
    return _registry


def call_builtin(env: Environment, name: str, args: Sequence[Value]) -> Value:
    """
    Call a built-in function by name.

    Raises TurtleRuntimeError if the function is not found, too few
    arguments are given, or the arguments have the wrong shape.
    """
    func = get_builtin_registry().get_function(name)
    if func is None:
        raise error_unknown_builtin(name)
    return func(env, args)
