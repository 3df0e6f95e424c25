"""
Step runner for turtle programs.

Programs are YAML (or JSON) documents holding a list of builtin calls
with already-literal arguments. The runner resolves ``{var: name}``
arguments through the environment, manages local frames for ``frame``
blocks and repeats ``repeat`` blocks. It is the minimal evaluator used by
the command line; script parsing proper lives outside this package.

Example program:

    screen:
      size: [400, 400]
    steps:
      - make: [side, 100]
      - repeat:
          times: 4
          steps:
            - forward: {var: side}
            - right: 90
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, TextIO, Tuple, Union
import json
import math

import yaml

from .values import Value, NOTHING, list_val, wrap_value
from .context import Environment, create_environment
from .builtins import call_builtin
from ..config import ScreenConfig
from ..drawable import TurtleScreen
from ..errors import (
    DiagnosticCollector, TurtleRuntimeError,
    error_malformed_step, error_unbound_name,
)
from ..raster_drawable import RasterScreen
from ..turtle import Turtle


@dataclass
class Program:
    """A loaded program: its steps plus screen configuration."""
    steps: List[Any]
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    source: Optional[str] = None


@dataclass
class ExecutionResult:
    """Result of running a program."""
    success: bool
    steps_executed: int = 0
    last_value: Value = NOTHING
    diagnostics: DiagnosticCollector = field(default_factory=DiagnosticCollector)
    error_message: Optional[str] = None


def parse_program(data: Any, source: Optional[str] = None) -> Program:
    """
    Build a Program from a decoded document.

    The document is either a mapping with ``steps`` (and optionally
    ``screen``) or a bare list of steps.
    """
    if isinstance(data, list):
        return Program(steps=data, source=source)
    if not isinstance(data, dict):
        raise ValueError("program must be a mapping with 'steps' or a list of steps")
    steps = data.get("steps")
    if not isinstance(steps, list):
        raise ValueError("program 'steps' must be a list")
    unknown = set(data) - {"steps", "screen"}
    if unknown:
        raise ValueError(f"unknown program keys: {', '.join(sorted(unknown))}")
    return Program(
        steps=steps,
        screen=ScreenConfig.from_dict(data.get("screen")),
        source=source,
    )


def load_program(path: Union[str, Path]) -> Program:
    """Load a program file (JSON by suffix, YAML otherwise)."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as fp:
        if path.suffix == ".json":
            data = json.load(fp)
        else:
            data = yaml.safe_load(fp)
    return parse_program(data, source=str(path))


class _Abort(Exception):
    """Stops a keep-going run once the error limit is reached."""


class ProgramRunner:
    """
    Executes program steps against an environment.

    By default the first runtime failure stops the run. With
    ``keep_going`` failing steps are reported and skipped until the
    diagnostic collector's error limit is reached.
    """

    def __init__(self, env: Environment, keep_going: bool = False):
        self.env = env
        self.keep_going = keep_going
        self.diagnostics = DiagnosticCollector()
        self.steps_executed = 0
        self.last_value: Value = NOTHING

    def run(self, program: Union[Program, List[Any]]) -> ExecutionResult:
        steps = program.steps if isinstance(program, Program) else program
        try:
            self._run_steps(steps, "step ")
        except TurtleRuntimeError as e:
            return self._result(error_message=e.diagnostic.message)
        except _Abort:
            return self._result(error_message="too many errors")
        return self._result()

    def _result(self, error_message: Optional[str] = None) -> ExecutionResult:
        success = error_message is None and not self.diagnostics.has_errors
        if error_message is None and not success:
            error_message = f"{self.diagnostics.error_count} step(s) failed"
        return ExecutionResult(
            success=success,
            steps_executed=self.steps_executed,
            last_value=self.last_value,
            diagnostics=self.diagnostics,
            error_message=error_message,
        )

    def _run_steps(self, steps: Any, prefix: str) -> None:
        if not isinstance(steps, list):
            raise error_malformed_step(steps, "expected a list of steps")
        for i, step in enumerate(steps, start=1):
            where = f"{prefix}{i}"
            try:
                self._run_step(step, where)
            except TurtleRuntimeError as e:
                if e.diagnostic.step is None:
                    self.diagnostics.add_error(e, step=where)
                if not self.keep_going:
                    raise
                if self.diagnostics.should_stop:
                    raise _Abort() from e

    def _run_step(self, step: Any, where: str) -> None:
        if not isinstance(step, dict) or len(step) != 1:
            raise error_malformed_step(step, "a step is a mapping with exactly one key")
        (name, body), = step.items()

        if name == "frame":
            with self.env.new_frame(where):
                self._run_steps(body, f"{where}.")
            return

        if name == "repeat":
            if not isinstance(body, dict) or "times" not in body or "steps" not in body:
                raise error_malformed_step(step, "repeat needs 'times' and 'steps'")
            times = self._resolve(body["times"])
            if not times.is_number:
                raise error_malformed_step(step, "repeat 'times' must be a number")
            if not math.isfinite(times.data):
                raise error_malformed_step(step, "repeat 'times' must be a finite number")
            for _ in range(max(0, int(times.data))):
                self._run_steps(body["steps"], f"{where}.")
            return

        args = self._resolve_args(body)
        self.last_value = call_builtin(self.env, str(name), args)
        self.steps_executed += 1

    def _resolve_args(self, body: Any) -> List[Value]:
        if body is None:
            return []
        if isinstance(body, list):
            return [self._resolve(arg) for arg in body]
        return [self._resolve(body)]

    def _resolve(self, arg: Any) -> Value:
        if isinstance(arg, dict):
            if set(arg) != {"var"}:
                raise error_malformed_step(arg, "argument mappings must be {var: name}")
            name = str(arg["var"])
            value = self.env.lookup(name)
            if value is None:
                raise error_unbound_name(name)
            return value
        if isinstance(arg, list):
            return list_val(self._resolve(item) for item in arg)
        try:
            return wrap_value(arg)
        except ValueError as e:
            raise error_malformed_step(arg, str(e)) from e


def run_program(
    program: Program,
    screen_factory: Callable[..., TurtleScreen] = RasterScreen,
    keep_going: bool = False,
    output: Optional[TextIO] = None,
) -> Tuple[ExecutionResult, Turtle]:
    """
    Create a screen, turtle and environment for ``program`` and run it.

    Args:
        program: The loaded program
        screen_factory: Called with ``(size, title)`` to build the screen
        keep_going: Report failing steps and continue
        output: Stream for the print builtin

    Returns:
        The execution result and the turtle (whose screen holds the drawing)
    """
    config = program.screen
    screen = screen_factory(config.size, config.title)
    turtle = Turtle(screen)
    turtle.set_background_color(*config.background)
    env = create_environment(turtle, output=output)
    runner = ProgramRunner(env, keep_going=keep_going)
    return runner.run(program), turtle
