"""
Tests for the drawing builtins, driven through call_builtin.
"""

import pytest

from pyrtle.errors import TurtleRuntimeError
from pyrtle.runtime import NOTHING, call_builtin, list_val, number_val, text_val
from pyrtle.turtle import PenState


def call(env, name, *args):
    return call_builtin(env, name, list(args))


class TestTurtleBuiltins:

    def test_forward_right_forward(self, env, turtle, screen):
        assert call(env, "forward", number_val(100)) is NOTHING
        call(env, "right", number_val(90))
        call(env, "forward", number_val(50))
        x, y = turtle.position
        assert abs(x - 50) < 1e-4 and abs(y - 100) < 1e-4
        assert len(screen.lines) == 2

    def test_backward_and_left(self, env, turtle):
        call(env, "left", number_val(180))
        call(env, "backward", number_val(10))
        x, y = turtle.position
        assert abs(x) < 1e-9 and abs(y - 10) < 1e-9

    def test_realign(self, env, turtle):
        call(env, "realign", number_val(370))
        assert turtle.orientation == 10.0
        call(env, "set_orientation", number_val(-30))
        assert turtle.orientation == 330.0

    def test_teleport(self, env, turtle, screen):
        call(env, "penup")
        call(env, "teleport", number_val(3), number_val(-4))
        assert turtle.position == (3.0, -4.0)
        assert screen.lines == []
        call(env, "pendown")
        assert turtle.pen == PenState.DOWN

    def test_teleport_checks_all_arguments_first(self, env, turtle, screen):
        with pytest.raises(TurtleRuntimeError):
            call(env, "teleport", number_val(3), text_val("y"))
        assert turtle.position == (0.0, 0.0)
        assert screen.updates == 0

    def test_home(self, env, turtle):
        call(env, "forward", number_val(5))
        call(env, "left", number_val(20))
        call(env, "home")
        assert turtle.position == (0.0, 0.0)
        assert turtle.orientation == 0.0

    def test_colors(self, env, turtle, screen):
        call(env, "color", number_val(0), number_val(1), number_val(0))
        assert turtle.color == (0.0, 1.0, 0.0, 1.0)
        call(env, "bgcolor", number_val(0.2), number_val(0.2), number_val(0.2))
        assert screen.background_color == (0.2, 0.2, 0.2, 1.0)

    def test_color_rejects_text(self, env, turtle):
        with pytest.raises(TurtleRuntimeError) as info:
            call(env, "color", number_val(0), text_val("red"), number_val(0))
        assert info.value.code == "E401"
        assert turtle.color == (0.0, 0.0, 0.0, 1.0)

    def test_color_needs_three_channels(self, env):
        with pytest.raises(TurtleRuntimeError) as info:
            call(env, "color", number_val(0), number_val(1))
        assert info.value.code == "E402"

    def test_hide_show(self, env, turtle):
        call(env, "hide")
        assert turtle.is_hidden
        call(env, "show")
        assert not turtle.is_hidden

    def test_write_flood_clear(self, env, screen):
        call(env, "write", text_val("hello"))
        call(env, "flood")
        assert len(screen.texts) == 1
        assert len(screen.fills) == 1
        call(env, "clear")
        assert screen.primitives == []

    def test_write_needs_text(self, env):
        with pytest.raises(TurtleRuntimeError) as info:
            call(env, "write", number_val(1))
        assert info.value.code == "E401"

    def test_queries(self, env):
        call(env, "teleport", number_val(1), number_val(2))
        call(env, "left", number_val(45))
        assert call(env, "position") == list_val([number_val(1), number_val(2)])
        assert call(env, "orientation") == number_val(45)

    def test_forward_needs_number(self, env, turtle):
        with pytest.raises(TurtleRuntimeError) as info:
            call(env, "forward", text_val("10"))
        assert info.value.code == "E401"
        assert turtle.position == (0.0, 0.0)
