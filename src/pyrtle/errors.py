"""
Runtime failures and diagnostics for pyrtle.

Every failure a builtin can produce is a single flat exception type,
``TurtleRuntimeError``, carrying a ``Diagnostic``. The error code tells
the category apart for reporting purposes only:

- E400: No turtle attached to the environment
- E401: Type mismatch (wrong value variant passed to a builtin)
- E402: Arity (fewer arguments than the builtin requires)
- E403: Index out of bounds
- E404: I/O failure
- E405: Encode failure
- E406: Unknown builtin
- E407: Unbound name
- E408: Malformed program step
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    """A single diagnostic message (error, warning, etc.)."""
    code: str                       # E401, E403, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity
    step: Optional[str] = None      # Program step that raised it, if known
    hints: List[str] = field(default_factory=list)

    def format(self) -> str:
        """Format the diagnostic for display."""
        parts = []

        header = f"{self.severity.value}[{self.code}]: {self.message}"
        if self.step is not None:
            header = f"{self.step}: {header}"
        parts.append(header)

        for hint in self.hints:
            parts.append(f"    = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "step": self.step,
            "hints": self.hints,
        }


class TurtleRuntimeError(Exception):
    """The one failure kind raised by builtins and the program runner."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.format()


def _error(code: str, message: str, hints: List[str] = None) -> TurtleRuntimeError:
    diag = Diagnostic(
        code=code,
        message=message,
        severity=ErrorSeverity.ERROR,
        hints=hints or [],
    )
    return TurtleRuntimeError(diag)


# --- Builtin error codes ---

def error_no_turtle() -> TurtleRuntimeError:
    """E400: Drawing builtin called without a turtle."""
    return _error("E400", "no turtle is attached to this environment")


def error_type_mismatch(builtin: str, expected: str, got: Any) -> TurtleRuntimeError:
    """E401: Argument has the wrong value variant."""
    return _error("E401", f"{builtin}: invalid argument: expected {expected}, got {got!r}")


def error_arity(builtin: str, required: int, given: int) -> TurtleRuntimeError:
    """E402: Too few arguments."""
    return _error(
        "E402",
        f"{builtin}: expected at least {required} argument(s), got {given}",
    )


def error_index_out_of_bounds(index: Any, length: int) -> TurtleRuntimeError:
    """E403: List index outside the list."""
    return _error("E403", f"Index out of bounds: index {index}, list length {length}")


def error_io(path: str, reason: Any) -> TurtleRuntimeError:
    """E404: File could not be created or written."""
    return _error("E404", f"cannot write '{path}': {reason}")


def error_encode(reason: Any) -> TurtleRuntimeError:
    """E405: Bitmap could not be serialized."""
    return _error("E405", f"cannot encode image: {reason}")


def error_unknown_builtin(name: str) -> TurtleRuntimeError:
    """E406: No builtin with that name."""
    return _error(
        "E406",
        f"Unknown built-in function: {name}",
        hints=["run 'pyrtle builtins' for the list of available names"],
    )


def error_unbound_name(name: str) -> TurtleRuntimeError:
    """E407: Name not bound in any frame."""
    return _error("E407", f"unbound name '{name}'")


def error_malformed_step(step: Any, reason: str) -> TurtleRuntimeError:
    """E408: Program step does not have a recognized shape."""
    return _error("E408", f"malformed step {step!r}: {reason}")


class DiagnosticCollector:
    """Collects diagnostics during a program run."""

    def __init__(self, max_errors: int = 20):
        self.diagnostics: List[Diagnostic] = []
        self.max_errors = max_errors
        self._error_count = 0

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self.diagnostics.append(diagnostic)
        if diagnostic.severity == ErrorSeverity.ERROR:
            self._error_count += 1

    def add_error(self, error: TurtleRuntimeError, step: Optional[str] = None) -> None:
        """Add an error exception as a diagnostic."""
        if step is not None and error.diagnostic.step is None:
            error.diagnostic.step = step
        self.add(error.diagnostic)

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == ErrorSeverity.WARNING)

    @property
    def has_errors(self) -> bool:
        return self._error_count > 0

    @property
    def should_stop(self) -> bool:
        """Check if we've hit the max error limit."""
        return self._error_count >= self.max_errors

    def format_all(self) -> str:
        """Format all diagnostics for display."""
        parts = [d.format() for d in self.diagnostics]
        if self._error_count > 0:
            parts.append(f"{self._error_count} error(s), {self.warning_count} warning(s)")
        elif self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert all diagnostics to JSON format."""
        return {
            "diagnostics": [d.to_json() for d in self.diagnostics],
            "error_count": self._error_count,
            "warning_count": self.warning_count,
        }
