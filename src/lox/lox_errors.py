"""
Error types and the error-reporting protocol for the Lox toolchain.

Classes:
    LoxError: Base class for every error raised or collected by the core.
    LoxStaticError: Errors found before evaluation (lexing and parsing).
    LexError: Unexpected character, unterminated string or block comment.
    ParseError: Grammar violation, including an invalid assignment target.
    LoxRuntimeError: Type mismatch, division by zero or undefined variable.
    ErrorReporter: Protocol for the collaborator that displays diagnostics.
    ErrorCollector: An ErrorReporter that just keeps what it receives.

The core never keeps "an error happened" state of its own. Each pass collects
its errors on the instance (``Lexer.errors``, ``Parser.errors``) and forwards
them to an optional reporter; deciding what to do with them is up to the driver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from lox.lox_lexer import Token


class LoxError(Exception):
    """Base class for Lox errors.

    Attributes:
        line (int): 1-based source line the error refers to.
        message (str): Human-readable description, without location.
    """

    def __init__(self, line: int, message: str) -> None:
        super().__init__(message)
        self.line = line
        self.message = message


class LoxStaticError(LoxError):
    """An error detected while scanning or parsing."""

    @property
    def where(self) -> str:
        return ""

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"


class LexError(LoxStaticError):
    """A lexical error. Scanning continues after it is recorded."""


class ParseError(LoxStaticError):
    """A syntax error tied to the token where it was detected.

    Raised inside the parser to abandon the current declaration; the parser
    catches it, records it and resynchronizes.
    """

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(token.line, message)
        self.token = token

    @property
    def where(self) -> str:
        if self.token.type == "EOF":
            return " at end"
        return f" at '{self.token.lexeme}'"


class LoxRuntimeError(LoxError):
    """An error raised while evaluating; stops the current batch."""

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(token.line, message)
        self.token = token

    def __str__(self) -> str:
        return f"{self.message}\n[line {self.line}]"


class ErrorReporter(Protocol):
    """Receives diagnostics from the scanner, parser and interpreter."""

    def report_error(self, error: LoxStaticError) -> None: ...  # pragma: no cover

    def report_runtime_error(
        self, error: LoxRuntimeError
    ) -> None: ...  # pragma: no cover


class ErrorCollector:
    """ErrorReporter that stores every error it is given, in order."""

    def __init__(self) -> None:
        self.errors: list[LoxStaticError] = []
        self.runtime_errors: list[LoxRuntimeError] = []

    def report_error(self, error: LoxStaticError) -> None:
        self.errors.append(error)

    def report_runtime_error(self, error: LoxRuntimeError) -> None:
        self.runtime_errors.append(error)

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    @property
    def had_runtime_error(self) -> bool:
        return bool(self.runtime_errors)
