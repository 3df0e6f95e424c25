## base class of turtle screens for pyrtle
## Copyright (c) 2026 pyrtle contributors
## All rights reserved
## See licensing terms in the LICENSE file at the top of the repository

from dataclasses import dataclass
from typing import List, Tuple, Union

Point = Tuple[float, float]
Color = Tuple[float, float, float, float]

BLACK: Color = (0.0, 0.0, 0.0, 1.0)
WHITE: Color = (1.0, 1.0, 1.0, 1.0)


## display list primitives, replayed in order by the renderers

@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    color: Color


@dataclass(frozen=True)
class Text:
    """Text anchored at its lower-left corner."""
    position: Point
    orientation: float
    color: Color
    text: str


@dataclass(frozen=True)
class Fill:
    seed: Point
    color: Color


Primitive = Union[Line, Text, Fill]


class TurtleScreen:
    """
    Base class for the surfaces a Turtle draws onto.

    The screen keeps an ordered display list of lines, texts and flood
    fills, plus the pose of the turtle marker. Coordinates have their
    origin in the center of the screen, with positive x to the right and
    positive y up.

    Subclasses render the state in ``draw_and_update`` and return pixels
    from ``capture_bitmap``.
    """

    def __init__(self, size: Tuple[int, int] = (640, 480), title: str = "pyrtle"):
        self.size = size
        self.title = title
        self.primitives: List[Primitive] = []
        self.background_color: Color = WHITE
        self.turtle_position: Point = (0.0, 0.0)
        self.turtle_orientation: float = 0.0
        self.turtle_color: Color = BLACK
        self.turtle_hidden: bool = False

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    ## display list mutators, called by the turtle

    def add_line(self, start: Point, end: Point, color: Color) -> None:
        self.primitives.append(Line(tuple(start), tuple(end), tuple(color)))

    def add_text(self, position: Point, orientation: float, color: Color, text: str) -> None:
        self.primitives.append(Text(tuple(position), orientation, tuple(color), text))

    def floodfill(self, position: Point, color: Color) -> None:
        self.primitives.append(Fill(tuple(position), tuple(color)))

    def clear(self) -> None:
        """Remove all drawn primitives. Background and turtle pose stay."""
        self.primitives = []

    @property
    def lines(self) -> List[Line]:
        return [p for p in self.primitives if isinstance(p, Line)]

    @property
    def texts(self) -> List[Text]:
        return [p for p in self.primitives if isinstance(p, Text)]

    @property
    def fills(self) -> List[Fill]:
        return [p for p in self.primitives if isinstance(p, Fill)]

    ## pure virtual functions -- override for specific rendering
    ## system

    def draw_and_update(self) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not render")

    def capture_bitmap(self):
        raise NotImplementedError(f"{type(self).__name__} cannot capture a bitmap")
