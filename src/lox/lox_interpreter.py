"""
Tree-walking interpreter for the Lox language.

The `Interpreter` executes the statements produced by `lox_parser` directly,
keeping variables in a chain of `Environment` scopes. Dispatch over the AST is
a structural `match` on the closed set of node classes in `lox_ast`.

Semantics:
    - `nil` and `false` are falsey; every other value is truthy.
    - Values of different kinds are never equal; there is no coercion.
    - `+` adds numbers, and concatenates display forms when either side is a string.
    - Dividing by zero is a runtime error.
    - Numbers with an integral value print without a trailing ".0".

Errors:
    A `LoxRuntimeError` stops the current batch of statements. `interpret`
    catches it, forwards it to the reporter, and returns it; statements that
    ran before it keep their effects.

Example:
    >>> interp = Interpreter()
    >>> interp.interpret(parse(scan("print 1 + 2;")))
    3
"""

from __future__ import annotations

import logging
from typing import TextIO

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
    Value,
    VarDeclaration,
    Variable,
)
from lox.lox_environment import Environment
from lox.lox_errors import ErrorReporter, LoxRuntimeError
from lox.lox_lexer import Token

logger = logging.getLogger(__name__)


def is_truthy(value: Value) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Value, b: Value) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    # bool is an int subclass; keep true == 1 from comparing equal
    if type(a) is not type(b):
        return False
    return a == b


def stringify(value: Value) -> str:
    """Returns the display form of a value, as `print` writes it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = str(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return str(value)


def check_number_operand(operator: Token, operand: Value) -> float:
    if isinstance(operand, float):
        return operand
    raise LoxRuntimeError(operator, "Operand must be a number.")


def check_number_operands(
    operator: Token, left: Value, right: Value
) -> tuple[float, float]:
    if isinstance(left, float) and isinstance(right, float):
        return left, right
    raise LoxRuntimeError(operator, "Operands must be numbers.")


class Interpreter:
    """Evaluates Lox statements against a persistent global scope.

    Attributes:
        globals (Environment): The outermost scope; survives across `interpret` calls.
        environment (Environment): The scope statements currently run in.
        reporter (ErrorReporter | None): Receives runtime errors caught by `interpret`.
        stdout (TextIO | None): Where `print` writes; None means the current `sys.stdout`.
    """

    def __init__(
        self, reporter: ErrorReporter | None = None, stdout: TextIO | None = None
    ) -> None:
        self.globals = Environment()
        self.environment = self.globals
        self.reporter = reporter
        self.stdout = stdout

    def interpret(
        self, statements: list[Stmt], repl: bool = False
    ) -> LoxRuntimeError | None:
        """Runs a batch of statements.

        Args:
            statements (list[Stmt]): Parsed program or REPL line.
            repl (bool): When True and the batch is one expression statement,
                print its value instead of discarding it.

        Returns:
            LoxRuntimeError | None: The error that stopped the batch, or None.
        """
        try:
            if (
                repl
                and len(statements) == 1
                and isinstance(statements[0], ExpressionStatement)
            ):
                value = self.evaluate(statements[0].expression)
                self.emit(stringify(value))
            else:
                for statement in statements:
                    self.execute(statement)
        except LoxRuntimeError as error:
            logger.debug("runtime error on line %d: %s", error.line, error.message)
            if self.reporter is not None:
                self.reporter.report_runtime_error(error)
            return error
        return None

    def emit(self, text: str) -> None:
        print(text, file=self.stdout)

    # Statements

    def execute(self, stmt: Stmt) -> None:
        match stmt:
            case ExpressionStatement(expression=expression):
                self.evaluate(expression)
            case PrintStatement(expression=expression):
                self.emit(stringify(self.evaluate(expression)))
            case VarDeclaration(name=name, initializer=initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case Block(statements=statements):
                self.execute_block(statements, Environment(self.environment))
            case _:
                raise AssertionError(f"Unexpected statement: {stmt!r}")  # pragma: no cover

    def execute_block(self, statements: list[Stmt], environment: Environment) -> None:
        """Runs `statements` in `environment`, then restores the previous scope."""
        previous = self.environment
        self.environment = environment
        logger.debug("entering block scope with %d statement(s)", len(statements))
        try:
            for statement in statements:
                self.execute(statement)
        finally:
            self.environment = previous
            logger.debug("left block scope")

    # Expressions

    def evaluate(self, expr: Expr) -> Value:
        match expr:
            case Literal(value=value):
                return value
            case Grouping(expression=inner):
                return self.evaluate(inner)
            case Unary(operator=operator, right=right):
                return self.evaluate_unary(operator, self.evaluate(right))
            case Binary():
                return self.evaluate_chain(expr)
            case Variable(name=name):
                return self.environment.get(name)
            case Assign(name=name, value=value_expr):
                value = self.evaluate(value_expr)
                self.environment.assign(name, value)
                return value
            case _:
                raise AssertionError(f"Unexpected expression: {expr!r}")  # pragma: no cover

    def evaluate_chain(self, expr: Binary) -> Value:
        """Evaluates a binary node and every binary node down its left side.

        `1 + 2 + 3` parses as `(1 + 2) + 3`, so a long chain is deep only on
        the left. Folding it in a loop keeps the Python stack flat while
        operands still evaluate left to right.
        """
        chain: list[Binary] = []
        node: Expr = expr
        while isinstance(node, Binary):
            chain.append(node)
            node = node.left

        value = self.evaluate(node)
        for binary in reversed(chain):
            value = self.evaluate_binary(
                binary.operator, value, self.evaluate(binary.right)
            )
        return value

    def evaluate_unary(self, operator: Token, right: Value) -> Value:
        match operator.type:
            case "BANG":
                return not is_truthy(right)
            case "MINUS":
                return -check_number_operand(operator, right)
            case _:
                raise AssertionError(f"Unexpected operator: {operator}")  # pragma: no cover

    def evaluate_binary(self, operator: Token, left: Value, right: Value) -> Value:
        match operator.type:
            # Equality
            case "BANG_EQUAL":
                return not is_equal(left, right)
            case "EQUAL_EQUAL":
                return is_equal(left, right)

            # Comparison
            case "GREATER":
                a, b = check_number_operands(operator, left, right)
                return a > b
            case "GREATER_EQUAL":
                a, b = check_number_operands(operator, left, right)
                return a >= b
            case "LESS":
                a, b = check_number_operands(operator, left, right)
                return a < b
            case "LESS_EQUAL":
                a, b = check_number_operands(operator, left, right)
                return a <= b

            # Arithmetic
            case "MINUS":
                a, b = check_number_operands(operator, left, right)
                return a - b
            case "STAR":
                a, b = check_number_operands(operator, left, right)
                return a * b
            case "SLASH":
                a, b = check_number_operands(operator, left, right)
                if b == 0:
                    raise LoxRuntimeError(operator, "Division by zero.")
                return a / b
            case "PLUS":
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) or isinstance(right, str):
                    return stringify(left) + stringify(right)
                raise LoxRuntimeError(
                    operator,
                    "Operands must be two numbers, two strings, "
                    "or one number and one string.",
                )
            case _:
                raise AssertionError(f"Unexpected operator: {operator}")  # pragma: no cover


__all__ = ["Interpreter", "is_equal", "is_truthy", "stringify"]
