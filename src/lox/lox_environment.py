"""Lexical scopes for the Lox interpreter."""

from __future__ import annotations

from lox.lox_ast import Value
from lox.lox_errors import LoxRuntimeError
from lox.lox_lexer import Token


class Environment:
    """A scope mapping variable names to values, chained to its enclosing scope.

    `define` only ever touches this scope, so an inner declaration shadows an
    outer one. `get` and `assign` walk outward to the first scope that binds
    the name.
    """

    def __init__(self, enclosing: Environment | None = None) -> None:
        self._enclosing = enclosing
        self.values: dict[str, Value] = {}

    @property
    def enclosing(self) -> Environment | None:
        return self._enclosing

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def define(self, name: str, value: Value) -> None:
        self.values[name] = value

    def get(self, name: Token) -> Value:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self._enclosing is not None:
            return self._enclosing.get(name)
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Value) -> None:
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self._enclosing is not None:
            self._enclosing.assign(name, value)
            return
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
