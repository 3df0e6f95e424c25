"""
Tests for the runtime substrate (values, environment, builtins).
"""

import dataclasses
import io

import pytest

from pyrtle.errors import TurtleRuntimeError
from pyrtle.runtime import (
    Value, ValueKind, NOTHING,
    number_val, text_val, list_val, bool_number, wrap_value, unwrap_value,
    Environment, Frame, create_environment,
    get_builtin_registry, call_builtin,
)


def nums(*xs):
    return list_val(number_val(x) for x in xs)


# --- Value Tests ---

class TestValues:
    """Test runtime value variants."""

    def test_number_value(self):
        v = number_val(42)
        assert v.kind == ValueKind.NUMBER
        assert v.data == 42.0
        assert isinstance(v.data, float)

    def test_text_value(self):
        v = text_val("hello")
        assert v.is_text
        assert str(v) == "hello"

    def test_list_value_is_immutable_tuple(self):
        v = nums(1, 2, 3)
        assert v.is_list
        assert isinstance(v.data, tuple)
        assert v.data == (number_val(1), number_val(2), number_val(3))

    def test_values_are_frozen(self):
        v = number_val(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            v.data = 2.0

    def test_is_truthy(self):
        """Numbers are falsy only at zero; text and lists when empty."""
        assert number_val(5).is_truthy() is True
        assert number_val(-0.5).is_truthy() is True
        assert number_val(0).is_truthy() is False
        assert text_val("x").is_truthy() is True
        assert text_val("").is_truthy() is False
        assert nums(1).is_truthy() is True
        assert list_val([]).is_truthy() is False
        assert NOTHING.is_truthy() is False

    def test_bool_number(self):
        assert bool_number(True) == number_val(1)
        assert bool_number(False) == number_val(0)

    def test_wrap_value(self):
        v = wrap_value([1, "two", [3.5], None])
        assert v == list_val([number_val(1), text_val("two"), nums(3.5), NOTHING])
        assert wrap_value(True) == number_val(1)

    def test_wrap_rejects_unknown_types(self):
        with pytest.raises(ValueError):
            wrap_value({"a": 1})

    def test_unwrap_value(self):
        assert unwrap_value(wrap_value([1, ["a"]])) == [1.0, ["a"]]

    def test_repr(self):
        assert repr(nums(1, 2.5)) == "[1, 2.5]"
        assert repr(NOTHING) == "Nothing"


# --- Environment Tests ---

class TestEnvironment:
    """Test the frame stack."""

    def test_starts_with_global_frame(self):
        env = Environment()
        assert env.depth == 1
        assert env.current_frame() is env.global_frame()

    def test_push_and_pop(self):
        env = Environment()
        frame = env.push_frame("f")
        assert env.depth == 2
        assert env.current_frame() is frame
        assert env.pop_frame() is frame
        assert env.depth == 1

    def test_cannot_pop_global_frame(self):
        env = Environment()
        with pytest.raises(RuntimeError):
            env.pop_frame()
        assert env.depth == 1

    def test_lookup_innermost_first(self):
        env = Environment()
        env.global_frame().set("x", number_val(1))
        with env.new_frame():
            env.current_frame().set("x", number_val(2))
            assert env.lookup("x") == number_val(2)
        assert env.lookup("x") == number_val(1)
        assert env.lookup("missing") is None

    def test_new_frame_pops_on_error(self):
        env = Environment()
        with pytest.raises(KeyError):
            with env.new_frame():
                raise KeyError("boom")
        assert env.depth == 1

    def test_frame_last_write_wins(self):
        frame = Frame()
        frame.set("a", number_val(1))
        frame.set("a", number_val(2))
        assert frame.get("a") == number_val(2)
        assert "a" in frame

    def test_create_environment_with_globals(self):
        env = create_environment(globals={"size": number_val(10)})
        assert env.global_frame().get("size") == number_val(10)
        assert not env.has_turtle

    def test_get_turtle_without_turtle(self):
        env = Environment()
        with pytest.raises(TurtleRuntimeError) as info:
            env.get_turtle()
        assert info.value.code == "E400"


# --- Scope Builtin Tests ---

class TestScopeBuiltins:
    """Test make and global."""

    def test_make_binds_in_current_frame(self):
        env = Environment()
        with env.new_frame():
            assert call_builtin(env, "make", [text_val("x"), number_val(1)]) is NOTHING
            assert env.lookup("x") == number_val(1)
        assert env.lookup("x") is None

    def test_global_survives_frame_pop(self):
        env = Environment()
        with env.new_frame():
            with env.new_frame():
                call_builtin(env, "global", [text_val("y"), number_val(2)])
        assert env.lookup("y") == number_val(2)
        assert env.global_frame().get("y") == number_val(2)

    def test_make_at_top_level_is_global(self):
        env = Environment()
        call_builtin(env, "make", [text_val("z"), text_val("v")])
        assert env.global_frame().get("z") == text_val("v")

    @pytest.mark.parametrize("name", ["make", "global"])
    def test_name_must_be_text(self, name):
        env = Environment()
        with pytest.raises(TurtleRuntimeError) as info:
            call_builtin(env, name, [number_val(3), number_val(1)])
        assert info.value.code == "E401"
        assert "3" in info.value.diagnostic.message
        assert env.global_frame().locals == {}


# --- List Builtin Tests ---

class TestListBuiltins:
    """Test list accessors."""

    def test_head(self):
        env = Environment()
        assert call_builtin(env, "head", [list_val([])]) is NOTHING
        assert call_builtin(env, "head", [nums(1, 2, 3)]) == number_val(1)

    def test_tail(self):
        env = Environment()
        original = nums(1, 2, 3)
        assert call_builtin(env, "tail", [list_val([])]) is NOTHING
        assert call_builtin(env, "tail", [original]) == nums(2, 3)
        assert original == nums(1, 2, 3)

    def test_length(self):
        env = Environment()
        assert call_builtin(env, "length", [list_val([])]) == number_val(0)
        assert call_builtin(env, "length", [nums(4, 5)]) == number_val(2)

    def test_isempty(self):
        env = Environment()
        assert call_builtin(env, "isempty", [list_val([])]) == number_val(1)
        assert call_builtin(env, "is_empty", [nums(1)]) == number_val(0)

    def test_getindex(self):
        env = Environment()
        values = list_val([number_val(10), text_val("b")])
        assert call_builtin(env, "getindex", [values, number_val(0)]) == number_val(10)
        assert call_builtin(env, "get_index", [values, number_val(1.9)]) == text_val("b")

    def test_getindex_out_of_bounds(self):
        env = Environment()
        with pytest.raises(TurtleRuntimeError) as info:
            call_builtin(env, "getindex", [nums(10, 20), number_val(2)])
        assert info.value.code == "E403"
        message = info.value.diagnostic.message
        assert "index 2" in message
        assert "length 2" in message

    def test_getindex_negative(self):
        env = Environment()
        with pytest.raises(TurtleRuntimeError) as info:
            call_builtin(env, "getindex", [nums(10, 20), number_val(-1)])
        assert info.value.code == "E403"

    @pytest.mark.parametrize("index", [float("nan"), float("inf"), float("-inf")])
    def test_getindex_non_finite(self, index):
        env = Environment()
        with pytest.raises(TurtleRuntimeError) as info:
            call_builtin(env, "getindex", [nums(10, 20), number_val(index)])
        assert info.value.code == "E403"

    def test_getindex_doc_names_rejected_indices(self):
        doc = get_builtin_registry().get_function("getindex").doc
        assert "negative" in doc and "NaN" in doc

    def test_getindex_small_negative_truncates_to_zero(self):
        env = Environment()
        assert call_builtin(env, "getindex", [nums(10, 20), number_val(-0.5)]) == number_val(10)

    @pytest.mark.parametrize("name", ["head", "tail", "length", "isempty"])
    def test_list_argument_required(self, name):
        env = Environment()
        with pytest.raises(TurtleRuntimeError) as info:
            call_builtin(env, name, [number_val(1)])
        assert info.value.code == "E401"

    def test_getindex_index_must_be_number(self):
        env = Environment()
        with pytest.raises(TurtleRuntimeError) as info:
            call_builtin(env, "getindex", [nums(1), text_val("0")])
        assert info.value.code == "E401"


# --- Other Builtin Tests ---

class TestBuiltins:
    """Test logic, print, dispatch and arity handling."""

    def test_not(self):
        env = Environment()
        assert call_builtin(env, "not", [number_val(0)]) == number_val(1)
        assert call_builtin(env, "not", [number_val(5)]) == number_val(0)
        assert call_builtin(env, "not", [NOTHING]) == number_val(1)
        assert call_builtin(env, "not", [text_val("a")]) == number_val(0)

    def test_print(self):
        out = io.StringIO()
        env = create_environment(output=out)
        call_builtin(env, "print", [text_val("at"), nums(1, 2)])
        call_builtin(env, "print", [])
        assert out.getvalue() == "at [1, 2]\n\n"

    def test_too_few_arguments(self):
        env = Environment()
        with pytest.raises(TurtleRuntimeError) as info:
            call_builtin(env, "make", [text_val("x")])
        assert info.value.code == "E402"

    def test_surplus_arguments_ignored(self):
        env = Environment()
        assert call_builtin(env, "length", [nums(1), number_val(9)]) == number_val(1)

    def test_unknown_function_raises(self):
        with pytest.raises(TurtleRuntimeError, match="Unknown built-in function"):
            call_builtin(Environment(), "nonexistent_function", [])

    def test_turtle_builtin_without_turtle(self):
        with pytest.raises(TurtleRuntimeError) as info:
            call_builtin(Environment(), "forward", [number_val(1)])
        assert info.value.code == "E400"

    def test_registry_aliases(self):
        registry = get_builtin_registry()
        assert registry.get_function("set_orientation") is registry.get_function("realign")
        names = [f.name for f in registry.functions()]
        assert "realign" in names
        assert "set_orientation" not in names
        assert names == sorted(names)

    def test_arity(self):
        registry = get_builtin_registry()
        assert registry.get_function("teleport").arity == 2
        assert registry.get_function("print").arity == 0
        assert registry.get_function("home").arity == 0
