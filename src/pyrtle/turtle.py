"""
The turtle: a cursor with position, heading, pen and color that draws on
a screen as it moves.

The turtle starts in the middle of the screen facing north, with the pen
down and an opaque black color. Orientation is in degrees, counting
counter-clockwise, and is always kept in ``[0, 360)``.

A Turtle owns exactly one ``TurtleScreen``, given at construction.

Example:
    screen = RasterScreen((640, 480))
    turtle = Turtle(screen)
    for _ in range(4):
        turtle.forward(100)
        turtle.right(90)
"""

import math
from enum import Enum
from typing import Tuple

from .drawable import BLACK, Color, Point, TurtleScreen


class PenState(Enum):
    UP = "up"
    DOWN = "down"


def _clamp(channel: float) -> float:
    return min(1.0, max(0.0, float(channel)))


class Turtle:
    """Drives a TurtleScreen with movement and drawing commands."""

    def __init__(self, screen: TurtleScreen):
        self._screen = screen
        self._orientation = 0.0
        self._position: Point = (0.0, 0.0)
        self._color: Color = BLACK
        self._pen = PenState.DOWN
        screen.turtle_position = self._position
        screen.turtle_orientation = self._orientation
        screen.turtle_color = self._color

    def __repr__(self) -> str:
        return (f"Turtle(position={self._position}, orientation={self._orientation}, "
                f"pen={self._pen.value}, hidden={self.is_hidden})")

    @property
    def screen(self) -> TurtleScreen:
        return self._screen

    @property
    def position(self) -> Point:
        return self._position

    @property
    def orientation(self) -> float:
        return self._orientation

    @property
    def pen(self) -> PenState:
        return self._pen

    @property
    def color(self) -> Color:
        return self._color

    @property
    def is_hidden(self) -> bool:
        return self._screen.turtle_hidden

    def _goto(self, x: float, y: float) -> None:
        """
        Move to ``(x, y)``, drawing a line from the old position when the
        pen is down. The screen's turtle marker is always updated.
        """
        start = self._position
        if self._pen == PenState.DOWN:
            self._screen.add_line(start, (x, y), self._color)
        self._position = (x, y)
        self._screen.turtle_position = self._position
        self._screen.draw_and_update()

    def _turn(self, deg: float) -> None:
        self.set_orientation(self._orientation + deg)

    def heading_vector(self, length: float) -> Tuple[float, float]:
        """
        Return the ``(dx, dy)`` walked by moving ``length`` along the
        current orientation. 0 degrees is north, 90 degrees is west.
        """
        rad = math.radians(self._orientation)
        return (-math.sin(rad) * length, math.cos(rad) * length)

    def forward(self, length: float) -> None:
        x, y = self._position
        dx, dy = self.heading_vector(length)
        self._goto(x + dx, y + dy)

    def backward(self, length: float) -> None:
        x, y = self._position
        dx, dy = self.heading_vector(length)
        self._goto(x - dx, y - dy)

    def left(self, deg: float) -> None:
        self._turn(deg)

    def right(self, deg: float) -> None:
        self._turn(-deg)

    def set_orientation(self, deg: float) -> None:
        self._orientation = float(deg) % 360.0
        # -1e-14 % 360 rounds up to 360.0
        if self._orientation >= 360.0:
            self._orientation = 0.0
        self._screen.turtle_orientation = self._orientation
        self._screen.draw_and_update()

    def teleport(self, x: float, y: float) -> None:
        """
        Go straight to ``(x, y)`` keeping the orientation. Draws a line
        if the pen is down.
        """
        self._goto(float(x), float(y))

    def home(self) -> None:
        self.teleport(0.0, 0.0)
        self.set_orientation(0.0)

    def pen_up(self) -> None:
        self._pen = PenState.UP

    def pen_down(self) -> None:
        self._pen = PenState.DOWN

    def set_color(self, red: float, green: float, blue: float) -> None:
        """
        Set the color used for lines, text and fills drawn from now on.
        Channels are in ``[0, 1]``; values outside are clamped.
        """
        self._color = (_clamp(red), _clamp(green), _clamp(blue), 1.0)
        self._screen.turtle_color = self._color
        self._screen.draw_and_update()

    def set_background_color(self, red: float, green: float, blue: float) -> None:
        self._screen.background_color = (_clamp(red), _clamp(green), _clamp(blue), 1.0)
        self._screen.draw_and_update()

    def hide(self) -> None:
        self._screen.turtle_hidden = True
        self._screen.draw_and_update()

    def show(self) -> None:
        self._screen.turtle_hidden = False
        self._screen.draw_and_update()

    def write(self, text: str) -> None:
        """Write text with its lower-left corner at the turtle."""
        self._screen.add_text(self._position, self._orientation, self._color, text)

    def flood(self) -> None:
        """Flood fill the region under the turtle with the current color."""
        self._screen.floodfill(self._position, self._color)

    def clear(self) -> None:
        """Remove drawn lines, text and fills. The turtle itself is unchanged."""
        self._screen.clear()
