"""
Lox Language Parser

Parses Lox language tokens into abstract syntax trees (ASTs).

This module implements a recursive-descent parser that turns the flat list of
`Token` objects produced by the lexer into a list of `Stmt` nodes. Binary
operators are parsed by precedence climbing, one method per precedence level,
all left-associative.

Grammar
-------
::

    program     := declaration* EOF
    declaration := "var" IDENTIFIER ("=" expression)? ";" | statement
    statement   := "print" expression ";" | "{" declaration* "}" | expression ";"
    expression  := assignment
    assignment  := IDENTIFIER "=" assignment | equality
    equality    := comparison (("!=" | "==") comparison)*
    comparison  := term ((">" | ">=" | "<" | "<=") term)*
    term        := factor (("-" | "+") factor)*
    factor      := unary (("/" | "*") unary)*
    unary       := ("!" | "-") unary | primary
    primary     := NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER
                 | "(" expression ")"

Parser Behavior
---------------
- A syntax error is recorded, then raised as `ParseError` to abandon the
  current declaration. `declaration()` catches it and resynchronizes by
  skipping tokens until a statement boundary, so one pass can report several
  independent errors. Declarations that failed are left out of the result.
- An invalid assignment target is recorded but not raised.
- Groupings, unary operators, chained assignments and blocks may nest at
  most `MAX_NESTING` deep in total; the next level is a syntax error.

Entry Points
------------
- `parse()`: Parse a full program into a list of statements.
- `parse_interactive()`: Parse one REPL line, where a bare expression needs no
  trailing semicolon.
- `parse(tokens)` / `parse_interactive(tokens)`: module-level shortcuts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from lox.lox_ast import (
    Assign,
    Binary,
    Block,
    Expr,
    ExpressionStatement,
    Grouping,
    Literal,
    PrintStatement,
    Stmt,
    Unary,
    VarDeclaration,
    Variable,
)
from lox.lox_constants import MAX_NESTING, statement_starters
from lox.lox_errors import ErrorReporter, ParseError
from lox.lox_lexer import Token

logger = logging.getLogger(__name__)

# Leading tokens that make a REPL line a declaration or statement
# rather than a bare expression.
interactive_starters: frozenset[str] = frozenset(
    {"VAR", "FUN", "CLASS", "PRINT", "LEFT_BRACE", "IF", "WHILE", "FOR", "RETURN"}
)


class Parser:
    """
    Lox Parser Class

    Attributes
    ----------
    tokens : list[Token]
        The input token stream, normally ending with an EOF token.
    position : int
        Current index into the token stream.
    errors : list[ParseError]
        Every syntax error recorded so far, in source order.
    reporter : ErrorReporter | None
        Receives each syntax error as it is recorded.
    depth : int
        How many nested constructs enclose the current position.
    """

    def __init__(
        self, tokens: list[Token], reporter: ErrorReporter | None = None
    ) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.reporter = reporter
        self.errors: list[ParseError] = []
        self.depth: int = 0

    # Parsing infrastructure

    def current(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        last_line = self.tokens[-1].line if self.tokens else 1
        return Token("EOF", "", None, last_line)

    def previous(self) -> Token:
        return self.tokens[self.position - 1]

    def at_end(self) -> bool:
        return self.current().type == "EOF"

    def check(self, type_: str) -> bool:
        return not self.at_end() and self.current().type == type_

    def advance(self) -> Token:
        """Consumes the current token and returns it."""
        if not self.at_end():
            self.position += 1
        return self.previous()

    def match(self, *types: str) -> Token | None:
        """Consumes and returns the current token if it has one of `types`."""
        for type_ in types:
            if self.check(type_):
                return self.advance()
        return None

    def consume(self, type_: str, message: str) -> Token:
        if self.check(type_):
            return self.advance()
        raise self.error(self.current(), message)

    def error(self, token: Token, message: str) -> ParseError:
        """Records a syntax error and returns it for the caller to raise."""
        err = ParseError(token, message)
        self.errors.append(err)
        if self.reporter is not None:
            self.reporter.report_error(err)
        return err

    @contextmanager
    def nested(self, opener: Token, message: str) -> Iterator[None]:
        """Holds one level of nesting, opened by `opener`, for the `with` body."""
        if self.depth >= MAX_NESTING:
            raise self.error(opener, message)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def synchronize(self) -> None:
        """Discards tokens until the start of the next statement."""
        skipped_from = self.position
        self.advance()

        while not self.at_end():
            if self.previous().type == "SEMICOLON":
                break
            if self.current().type in statement_starters:
                break
            self.advance()

        logger.debug(
            "resynchronized after skipping %d token(s); resuming at %r",
            self.position - skipped_from,
            self.current(),
        )

    # Entry points

    def parse(self) -> list[Stmt]:
        """Parse a full Lox program and return its top-level statements."""
        statements: list[Stmt] = []
        while not self.at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        logger.debug(
            "parsed %d statement(s) with %d syntax error(s)",
            len(statements),
            len(self.errors),
        )
        return statements

    def parse_interactive(self) -> list[Stmt]:
        """Parse one REPL entry.

        The first item is a declaration or statement when its leading keyword
        says so; otherwise it is a bare expression, for which the closing
        semicolon is optional. Whatever follows it is parsed as a normal
        program.
        """
        statements: list[Stmt] = []
        first = self.current().type

        if first == "EOF":
            return statements
        if first in interactive_starters:
            stmt = self.declaration()
        else:
            stmt = self.bare_expression()

        if stmt is not None:
            statements.append(stmt)
        statements.extend(self.parse())
        return statements

    def bare_expression(self) -> Stmt | None:
        try:
            expr = self.expression()
            if not self.match("SEMICOLON") and not self.at_end():
                raise self.error(self.current(), "Expect ';' after expression.")
            return ExpressionStatement(expr)
        except ParseError:
            self.synchronize()
            return None

    # Declarations and statements

    def declaration(self) -> Stmt | None:
        try:
            if self.match("VAR"):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def var_declaration(self) -> Stmt:
        name = self.consume("IDENTIFIER", "Expect variable name.")

        initializer = None
        if self.match("EQUAL"):
            initializer = self.expression()

        self.consume("SEMICOLON", "Expect ';' after variable declaration.")
        return VarDeclaration(name, initializer)

    def statement(self) -> Stmt:
        if self.match("PRINT"):
            return self.print_statement()
        brace = self.match("LEFT_BRACE")
        if brace is not None:
            with self.nested(brace, "Block nested too deeply."):
                return Block(self.block())
        return self.expression_statement()

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume("SEMICOLON", "Expect ';' after value.")
        return PrintStatement(value)

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.consume("SEMICOLON", "Expect ';' after expression.")
        return ExpressionStatement(expr)

    def block(self) -> list[Stmt]:
        """Parse the declarations of a `{}` block; the `{` is already consumed."""
        statements: list[Stmt] = []
        while not self.check("RIGHT_BRACE") and not self.at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)

        self.consume("RIGHT_BRACE", "Expect '}' after block.")
        return statements

    # Expressions, lowest precedence first

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.equality()

        equals = self.match("EQUAL")
        if equals is not None:
            with self.nested(equals, "Expression nested too deeply."):
                value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            # Reported, not raised: the parser is not confused about where it is.
            self.error(equals, "Invalid assignment target.")

        return expr

    def binary_level(self, operand: Callable[[], Expr], *operators: str) -> Expr:
        """Left-associative loop shared by every binary precedence level."""
        expr = operand()

        while (operator := self.match(*operators)) is not None:
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    def equality(self) -> Expr:
        return self.binary_level(self.comparison, "BANG_EQUAL", "EQUAL_EQUAL")

    def comparison(self) -> Expr:
        return self.binary_level(
            self.term, "GREATER", "GREATER_EQUAL", "LESS", "LESS_EQUAL"
        )

    def term(self) -> Expr:
        return self.binary_level(self.factor, "MINUS", "PLUS")

    def factor(self) -> Expr:
        return self.binary_level(self.unary, "SLASH", "STAR")

    def unary(self) -> Expr:
        operator = self.match("BANG", "MINUS")
        if operator is not None:
            with self.nested(operator, "Expression nested too deeply."):
                return Unary(operator, self.unary())
        return self.primary()

    def primary(self) -> Expr:
        if self.match("FALSE"):
            return Literal(False)
        if self.match("TRUE"):
            return Literal(True)
        if self.match("NIL"):
            return Literal(None)

        tok = self.match("NUMBER", "STRING")
        if tok is not None:
            return Literal(tok.literal)

        tok = self.match("IDENTIFIER")
        if tok is not None:
            return Variable(tok)

        paren = self.match("LEFT_PAREN")
        if paren is not None:
            with self.nested(paren, "Expression nested too deeply."):
                expr = self.expression()
            self.consume("RIGHT_PAREN", "Expect ')' after expression.")
            return Grouping(expr)

        raise self.error(self.current(), "Expect expression.")


def parse(tokens: list[Token], reporter: ErrorReporter | None = None) -> list[Stmt]:
    """Parse a token list into statements, dropping the ones with syntax errors."""
    return Parser(tokens, reporter).parse()


def parse_interactive(
    tokens: list[Token], reporter: ErrorReporter | None = None
) -> list[Stmt]:
    """Parse a REPL line, accepting a bare expression without a semicolon."""
    return Parser(tokens, reporter).parse_interactive()


__all__ = ["Parser", "parse", "parse_interactive"]
