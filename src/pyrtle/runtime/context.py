"""
Execution environment for builtins.

Manages the stack of variable frames and owns the Turtle that drawing
builtins operate on. One Environment is passed to every builtin call.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO, TYPE_CHECKING
from contextlib import contextmanager

from .values import Value
from ..errors import error_no_turtle

if TYPE_CHECKING:
    from ..turtle import Turtle


@dataclass
class Frame:
    """
    A single scope level containing variable bindings.

    Keys are unique; writing an existing name replaces its value.
    """
    locals: Dict[str, Value] = field(default_factory=dict)
    name: str = "anonymous"  # For debugging

    def get(self, name: str) -> Optional[Value]:
        return self.locals.get(name)

    def set(self, name: str, value: Value) -> None:
        self.locals[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.locals


class Environment:
    """
    A stack of frames plus the session's turtle.

    The first frame is the global frame. It is created with the
    environment and can never be popped, so the stack is never empty.
    """

    def __init__(self, turtle: "Turtle" = None, output: Optional[TextIO] = None):
        self.frames: List[Frame] = [Frame(name="global")]
        self._turtle = turtle
        # stream for the print builtin; None means stdout
        self.output = output

    @property
    def depth(self) -> int:
        """Number of frames, including the global frame."""
        return len(self.frames)

    def current_frame(self) -> Frame:
        """The innermost frame, used for local bindings."""
        return self.frames[-1]

    def global_frame(self) -> Frame:
        """The outermost frame, visible from every nested scope."""
        return self.frames[0]

    def push_frame(self, name: str = "local") -> Frame:
        """Enter a new local frame."""
        frame = Frame(name=name)
        self.frames.append(frame)
        return frame

    def pop_frame(self) -> Frame:
        """Leave the innermost local frame."""
        if len(self.frames) == 1:
            raise RuntimeError("cannot pop the global frame")
        return self.frames.pop()

    @contextmanager
    def new_frame(self, name: str = "local"):
        """
        Context manager to run code inside a fresh local frame.

        Usage:
            with env.new_frame("square"):
                env.current_frame().set("side", number_val(10))
        """
        frame = self.push_frame(name)
        try:
            yield frame
        finally:
            self.pop_frame()

    def lookup(self, name: str) -> Optional[Value]:
        """Look up a name from the innermost frame outwards."""
        for frame in reversed(self.frames):
            value = frame.get(name)
            if value is not None:
                return value
        return None

    def is_bound(self, name: str) -> bool:
        return self.lookup(name) is not None

    @property
    def has_turtle(self) -> bool:
        return self._turtle is not None

    def get_turtle(self) -> "Turtle":
        """Return the turtle owned by this environment."""
        if self._turtle is None:
            raise error_no_turtle()
        return self._turtle


def create_environment(
    turtle: "Turtle" = None,
    globals: Dict[str, Value] = None,
    output: Optional[TextIO] = None,
) -> Environment:
    """
    Create a new environment, optionally seeding the global frame.

    Args:
        turtle: The turtle drawing builtins will drive
        globals: Initial global bindings
        output: Stream the print builtin writes to (stdout if None)

    Returns:
        A fresh Environment with a single global frame
    """
    env = Environment(turtle, output)
    for name, value in (globals or {}).items():
        env.global_frame().set(name, value)
    return env
