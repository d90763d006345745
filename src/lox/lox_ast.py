"""
Defines the abstract syntax tree (AST) node structure for the Lox programming language.

Expression nodes (subclasses of `Expr`):
    Literal, Grouping, Unary, Binary, Variable, Assign

Statement nodes (subclasses of `Stmt`):
    ExpressionStatement, PrintStatement, VarDeclaration, Block

Both families are closed: the parser produces nothing else and the
interpreter matches on exactly these classes. Nodes are plain dataclasses;
each owns its children, and tokens are kept for error reporting.

ASTDict:
    TypedDict representation for serializing nodes to plain Python dictionaries,
    suitable for JSON output (`lox --ast`) or debugging.

Example:
    node = Binary(Literal(1.0), Token("PLUS", "+", None, 1, 3), Literal(2.0))
    node.to_dict()["operator"]  # "+"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, TypedDict, Union

from lox.lox_lexer import Token

Value = Union[float, str, bool, None]
"""A runtime value: number, string, boolean, or nil (None)."""


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an AST node used for serialization.

    Fields:
        kind (str): The node kind (e.g., "binary", "var", "block").
        line (int): Line number of the token that anchors the node (0 if none).
        value (Any): Literal value, or the assigned expression for "assign".
        operator (str): Operator lexeme for unary/binary nodes.
        name (str): Variable name for variable/assign/var nodes.
        left, right, expression, initializer (ASTDict | None): Child expressions.
        statements (list[ASTDict]): Children of a block.
    """

    kind: str
    line: int
    value: Any
    operator: str
    name: str
    left: "ASTDict"
    right: "ASTDict"
    expression: "ASTDict"
    initializer: "ASTDict | None"
    statements: list["ASTDict"]


class Expr:
    """Base class of every expression node."""

    kind: ClassVar[str] = "expr"

    @property
    def line(self) -> int:
        return 0

    def to_dict(self) -> ASTDict:  # pragma: no cover
        raise NotImplementedError


class Stmt:
    """Base class of every statement node."""

    kind: ClassVar[str] = "stmt"

    @property
    def line(self) -> int:
        return 0

    def to_dict(self) -> ASTDict:  # pragma: no cover
        raise NotImplementedError


@dataclass
class Literal(Expr):
    value: Value
    kind: ClassVar[str] = "literal"

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "value": self.value, "line": self.line}


@dataclass
class Grouping(Expr):
    expression: Expr
    kind: ClassVar[str] = "grouping"

    @property
    def line(self) -> int:
        return self.expression.line

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "expression": self.expression.to_dict(),
            "line": self.line,
        }


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr
    kind: ClassVar[str] = "unary"

    @property
    def line(self) -> int:
        return self.operator.line

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "operator": self.operator.lexeme,
            "right": self.right.to_dict(),
            "line": self.line,
        }


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr
    kind: ClassVar[str] = "binary"

    @property
    def line(self) -> int:
        return self.operator.line

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "left": self.left.to_dict(),
            "operator": self.operator.lexeme,
            "right": self.right.to_dict(),
            "line": self.line,
        }


@dataclass
class Variable(Expr):
    name: Token
    kind: ClassVar[str] = "variable"

    @property
    def line(self) -> int:
        return self.name.line

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "name": self.name.lexeme, "line": self.line}


@dataclass
class Assign(Expr):
    name: Token
    value: Expr
    kind: ClassVar[str] = "assign"

    @property
    def line(self) -> int:
        return self.name.line

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "name": self.name.lexeme,
            "value": self.value.to_dict(),
            "line": self.line,
        }


@dataclass
class ExpressionStatement(Stmt):
    expression: Expr
    kind: ClassVar[str] = "expr_stmt"

    @property
    def line(self) -> int:
        return self.expression.line

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "expression": self.expression.to_dict(),
            "line": self.line,
        }


@dataclass
class PrintStatement(Stmt):
    expression: Expr
    kind: ClassVar[str] = "print"

    @property
    def line(self) -> int:
        return self.expression.line

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "expression": self.expression.to_dict(),
            "line": self.line,
        }


@dataclass
class VarDeclaration(Stmt):
    name: Token
    initializer: Expr | None = None
    kind: ClassVar[str] = "var"

    @property
    def line(self) -> int:
        return self.name.line

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "name": self.name.lexeme,
            "initializer": (
                self.initializer.to_dict() if self.initializer is not None else None
            ),
            "line": self.line,
        }


@dataclass
class Block(Stmt):
    statements: list[Stmt] = field(default_factory=list)
    kind: ClassVar[str] = "block"

    @property
    def line(self) -> int:
        return self.statements[0].line if self.statements else 0

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "statements": [s.to_dict() for s in self.statements],
            "line": self.line,
        }


__all__ = [
    "ASTDict",
    "Assign",
    "Binary",
    "Block",
    "Expr",
    "ExpressionStatement",
    "Grouping",
    "Literal",
    "PrintStatement",
    "Stmt",
    "Unary",
    "Value",
    "VarDeclaration",
    "Variable",
]
