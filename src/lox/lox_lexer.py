"""
Lexical analyzer for the Lox programming language.

This module converts raw source code into a list of tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Immutable token with type, lexeme, literal value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Functions:
    scan: Tokenize a whole source string, ending with a single EOF token.

Features:
    - Skips whitespace, line comments (`//`) and block comments (`/* ... */`)
    - Longest-match recognition of one- and two-character operators
    - Recognizes:
        * Identifiers and reserved keywords
        * Numbers (digits with an optional fractional part), as floats
        * Strings (may span lines, no escape sequences)
        * Punctuation and operators

Errors:
    Lexical errors never stop the scan. Each one is appended to `Lexer.errors`
    as a `LexError` and forwarded to the reporter when one is supplied.

Example:
    >>> tokens = scan("print 42;")
    >>> tokens[1]
    Token(NUMBER, 42)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - scan
"""

from __future__ import annotations

import logging
from typing import Any

from lox.lox_constants import MAX_OPERATOR_LENGTH, keywords, token_hashmap
from lox.lox_errors import ErrorReporter, LexError

logger = logging.getLogger(__name__)


class CharacterStream:
    """Cursor over Lox source text.

    `line` and `column` are 1-based and always describe the character at
    `position`, the next one `next()` will return.
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """Consumes one character. Raises IndexError at end of input.

        Newlines advance the line counter, so multi-line strings and block
        comments keep line numbers right without extra bookkeeping.
        """
        if self.position >= len(self.source):
            raise IndexError(f"read past end of source on line {self.line}")
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Lookahead without consuming; "" past either end of the source."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def match(self, expected: str) -> bool:
        """Consumes the next character only if it equals `expected`."""
        if self.peek() != expected:
            return False
        self.next()
        return True

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Lox language.

    Tokens are immutable: every attribute is fixed at construction.

    Attributes:
        type (str): The token type (e.g. 'IDENTIFIER', 'NUMBER', 'EOF').
        lexeme (str): The exact source text of the token.
        literal (float | str | None): Parsed value for NUMBER and STRING tokens.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("type", "lexeme", "literal", "line", "col")

    type: str
    lexeme: str
    literal: float | str | None
    line: int
    col: int

    def __init__(
        self,
        type_: str,
        lexeme: str,
        literal: float | str | None = None,
        line: int = 0,
        col: int = 0,
    ) -> None:
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "lexeme", lexeme)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Token is immutable; cannot delete {name!r}")

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.lexeme})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.lexeme == other.lexeme
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.lexeme, self.literal, self.line, self.col))


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_alphanumeric(ch: str) -> bool:
    return is_alpha(ch) or is_digit(ch)


class Lexer:
    """Lexical analyzer for the Lox language.

    Takes a CharacterStream and converts it into Token objects, one call to
    `next_token` at a time, or all at once through `scan_tokens`.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        reporter (ErrorReporter | None): Receives lexical errors as they occur.
        errors (list[LexError]): Every lexical error found so far.
    """

    def __init__(
        self, stream: CharacterStream, reporter: ErrorReporter | None = None
    ) -> None:
        self.stream = stream
        self.reporter = reporter
        self.errors: list[LexError] = []

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def error(self, line: int, message: str) -> None:
        """Records a lexical error and hands it to the reporter."""
        err = LexError(line, message)
        self.errors.append(err)
        if self.reporter is not None:
            self.reporter.report_error(err)

    def skip_whitespace(self) -> None:
        """Skips whitespace and both comment forms.

        A `/` followed by `/` or `*` opens a comment; any other `/` is left in
        place for `match_operator` to read as SLASH.
        """
        while not self.stream.end_of_file():
            ch = self.peek()
            if ch in " \t\r\n":
                self.advance()
            elif ch == "/" and self.peek(1) == "/":
                self.skip_line_comment()
            elif ch == "/" and self.peek(1) == "*":
                self.skip_block_comment()
            else:
                break

    def skip_line_comment(self) -> None:
        """Advances through the stream until the end of a comment line."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def skip_block_comment(self) -> None:
        """Advances past a `/* ... */` comment. Block comments do not nest."""
        self.advance()  # /
        self.advance()  # *
        while not (self.peek() == "*" and self.peek(1) == "/"):
            if self.stream.end_of_file():
                self.error(self.stream.line, "Unterminated block comment.")
                return
            self.advance()
        self.advance()  # *
        self.advance()  # /

    def match_operator(self) -> Token | None:
        """Reads punctuation or an operator, trying `<=` before `<` and so on.

        Returns None, consuming nothing, when no entry of `token_hashmap`
        starts at the cursor.
        """
        line, col = self.stream.line, self.stream.column
        for length in range(MAX_OPERATOR_LENGTH, 0, -1):
            text = "".join(self.peek(i) for i in range(length))
            if len(text) == length and text in token_hashmap:
                for _ in range(length):
                    self.advance()
                return Token(token_hashmap[text], text, None, line, col)
        return None

    def scan_number(self, line: int, col: int) -> Token:
        text = ""
        while is_digit(self.peek()):
            text += self.advance()

        # A trailing "." with no digit after it belongs to the next token.
        if self.peek() == "." and is_digit(self.peek(1)):
            text += self.advance()
            while is_digit(self.peek()):
                text += self.advance()

        return Token("NUMBER", text, float(text), line, col)

    def scan_identifier(self, line: int, col: int) -> Token:
        ident = ""
        while is_alphanumeric(self.peek()):
            ident += self.advance()
        return Token(keywords.get(ident, "IDENTIFIER"), ident, None, line, col)

    def scan_string(self, line: int, col: int) -> Token | None:
        """Reads a string literal; returns None if the input ends first."""
        self.advance()  # opening quote
        value = ""
        while not self.stream.end_of_file() and self.peek() != '"':
            value += self.advance()

        if self.stream.end_of_file():
            self.error(self.stream.line, "Unterminated string.")
            return None

        self.advance()  # closing quote
        return Token("STRING", f'"{value}"', value, line, col)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Characters that cannot start a token are recorded as errors and
        skipped, so this always returns a real token or EOF.
        """
        while True:
            self.skip_whitespace()

            if self.stream.end_of_file():
                return Token("EOF", "", None, self.stream.line, self.stream.column)

            ch = self.peek()
            line, col = self.stream.line, self.stream.column

            # 1. Identifier or keyword
            if is_alpha(ch):
                return self.scan_identifier(line, col)

            # 2. Number
            if is_digit(ch):
                return self.scan_number(line, col)

            # 3. String
            if ch == '"':
                token = self.scan_string(line, col)
                if token is not None:
                    return token
                continue

            # 4. Punctuation or operator
            token = self.match_operator()
            if token:
                return token

            # 5. Unknown character: report it and keep going
            self.error(line, f"Unexpected character '{self.advance()}'.")

    def scan_tokens(self) -> list[Token]:
        """Tokenizes the rest of the stream, ending with exactly one EOF token."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == "EOF":
                break
        logger.debug(
            "scanned %d tokens with %d lexical errors", len(tokens), len(self.errors)
        )
        return tokens


def scan(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """Tokenizes a complete Lox source string.

    Args:
        source (str): The program text.
        reporter (ErrorReporter | None): Receives each lexical error.

    Returns:
        list[Token]: The tokens in source order, ending with EOF.
    """
    return Lexer(CharacterStream(source), reporter).scan_tokens()


__all__ = ["CharacterStream", "Lexer", "Token", "scan"]
