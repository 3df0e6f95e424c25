"""Screen configuration for program runs."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ScreenConfig:
    """Size, caption and initial background of the turtle screen."""

    width: int = 640
    height: int = 480
    title: str = "pyrtle"
    background: Tuple[float, float, float] = (1.0, 1.0, 1.0)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ScreenConfig":
        """Build a config from a program's ``screen:`` header."""
        config = cls()
        if not data:
            return config
        if not isinstance(data, dict):
            raise ValueError(f"screen header must be a mapping, got {data!r}")
        if "size" in data:
            size = data["size"]
            if isinstance(size, str):
                width, height = parse_size(size)
            else:
                try:
                    width, height = (int(v) for v in size)
                except (TypeError, ValueError):
                    raise ValueError(f"bad screen size: {size!r}") from None
            config = replace(config, width=width, height=height)
        if "title" in data:
            config = replace(config, title=str(data["title"]))
        if "background" in data:
            config = replace(config, background=_parse_rgb(data["background"]))
        config.validate()
        return config

    def override(self, size: Optional[str] = None, title: Optional[str] = None) -> "ScreenConfig":
        """Apply command-line overrides."""
        config = self
        if size:
            width, height = parse_size(size)
            config = replace(config, width=width, height=height)
        if title:
            config = replace(config, title=title)
        config.validate()
        return config

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"screen size must be positive, got {self.width}x{self.height}")


def parse_size(text: str) -> Tuple[int, int]:
    """Parse a ``WIDTHxHEIGHT`` string like ``800x600``."""
    parts = text.lower().split("x")
    if len(parts) != 2:
        raise ValueError(f"Invalid size: {text} (expected WIDTHxHEIGHT)")
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Invalid size: {text} (expected WIDTHxHEIGHT)") from None
    return width, height


def _parse_rgb(value: Any) -> Tuple[float, float, float]:
    try:
        r, g, b = (float(c) for c in value)
    except (TypeError, ValueError):
        raise ValueError(f"background must be three numbers in [0, 1], got {value!r}") from None
    return (r, g, b)
