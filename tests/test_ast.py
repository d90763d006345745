import json

from lox.lox_ast import (
    Assign,
    Binary,
    Block,
    ExpressionStatement,
    Grouping,
    Literal,
    PrintStatement,
    Unary,
    VarDeclaration,
    Variable,
)
from lox.lox_lexer import Token

PLUS = Token("PLUS", "+", None, 2, 3)
MINUS = Token("MINUS", "-", None, 4, 1)
NAME = Token("IDENTIFIER", "x", None, 7, 5)


def test_literal_to_dict() -> None:
    assert Literal(1.5).to_dict() == {"kind": "literal", "value": 1.5, "line": 0}


def test_binary_to_dict() -> None:
    node = Binary(Literal(1.0), PLUS, Literal(2.0))
    d = node.to_dict()
    assert d["kind"] == "binary"
    assert d["operator"] == "+"
    assert d["line"] == 2
    assert d["left"]["value"] == 1.0
    assert d["right"]["value"] == 2.0


def test_unary_and_grouping_take_line_from_tokens() -> None:
    node = Grouping(Unary(MINUS, Literal(3.0)))
    assert node.line == 4
    assert node.to_dict()["expression"]["operator"] == "-"


def test_variable_and_assign_to_dict() -> None:
    assert Variable(NAME).to_dict() == {"kind": "variable", "name": "x", "line": 7}
    d = Assign(NAME, Literal("v")).to_dict()
    assert d["name"] == "x"
    assert d["value"] == {"kind": "literal", "value": "v", "line": 0}


def test_statement_to_dict() -> None:
    assert VarDeclaration(NAME).to_dict() == {
        "kind": "var",
        "name": "x",
        "initializer": None,
        "line": 7,
    }
    stmt = PrintStatement(Variable(NAME))
    assert stmt.to_dict()["kind"] == "print"
    assert stmt.line == 7
    assert ExpressionStatement(Literal(None)).to_dict()["kind"] == "expr_stmt"


def test_block_to_dict_is_json_serializable() -> None:
    block = Block(
        [
            VarDeclaration(NAME, Binary(Literal(1.0), PLUS, Literal(2.0))),
            Block([PrintStatement(Variable(NAME))]),
        ]
    )
    d = block.to_dict()
    assert d["line"] == 7
    assert [s["kind"] for s in d["statements"]] == ["var", "block"]
    assert json.loads(json.dumps(d)) == d


def test_empty_block_line() -> None:
    assert Block().line == 0
    assert Block().statements == []


def test_nodes_compare_structurally() -> None:
    n1 = Binary(Literal(1.0), PLUS, Literal(2.0))
    n2 = Binary(Literal(1.0), PLUS, Literal(2.0))
    n3 = Binary(Literal(1.0), PLUS, Literal(3.0))
    assert n1 == n2
    assert n1 != n3


def test_nodes_support_pattern_matching() -> None:
    node = Binary(Literal(1.0), PLUS, Variable(NAME))
    match node:
        case Binary(Literal(value), operator, Variable(name)):
            assert value == 1.0
            assert operator is PLUS
            assert name is NAME
        case _:
            raise AssertionError("pattern did not match")
