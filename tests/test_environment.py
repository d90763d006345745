import pytest

from lox.lox_environment import Environment
from lox.lox_errors import LoxRuntimeError
from lox.lox_lexer import Token


def name(lexeme: str, line: int = 1) -> Token:
    return Token("IDENTIFIER", lexeme, None, line, 1)


def test_define_and_get() -> None:
    env = Environment()
    env.define("a", 1.0)
    assert env.get(name("a")) == 1.0


def test_define_overwrites_in_same_scope() -> None:
    env = Environment()
    env.define("a", 1.0)
    env.define("a", "two")
    assert env.get(name("a")) == "two"


def test_define_nil() -> None:
    env = Environment()
    env.define("a", None)
    assert "a" in env
    assert env.get(name("a")) is None


def test_get_walks_enclosing_scopes() -> None:
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(Environment(outer))
    assert inner.get(name("a")) == 1.0


def test_inner_definition_shadows_outer() -> None:
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.define("a", 2.0)
    assert inner.get(name("a")) == 2.0
    assert outer.get(name("a")) == 1.0


def test_assign_updates_nearest_binding() -> None:
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.assign(name("a"), 5.0)
    assert outer.get(name("a")) == 5.0
    assert "a" not in inner


def test_assign_to_shadowed_name_leaves_outer_alone() -> None:
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.define("a", 2.0)
    inner.assign(name("a"), 3.0)
    assert inner.get(name("a")) == 3.0
    assert outer.get(name("a")) == 1.0


def test_get_undefined_raises() -> None:
    env = Environment(Environment())
    with pytest.raises(LoxRuntimeError, match="Undefined variable 'nope'.") as excinfo:
        env.get(name("nope", line=4))
    assert excinfo.value.line == 4
    assert excinfo.value.token.lexeme == "nope"


def test_assign_undefined_raises_and_does_not_define() -> None:
    env = Environment()
    with pytest.raises(LoxRuntimeError, match="Undefined variable 'x'."):
        env.assign(name("x"), 1.0)
    assert "x" not in env


def test_enclosing_is_read_only() -> None:
    outer = Environment()
    inner = Environment(outer)
    assert inner.enclosing is outer
    assert outer.enclosing is None
    with pytest.raises(AttributeError):
        inner.enclosing = None  # type: ignore[misc]
