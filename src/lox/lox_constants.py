"""
Token vocabulary for the Lox language.

Token types are plain upper-case strings, shared by the lexer, the parser and
the tests.

Exports:
    - token_hashmap: punctuation and operator lexemes mapped to token types.
    - keywords: reserved words mapped to token types.
    - statement_starters: token types the parser resynchronizes on.
    - TOKEN_TYPES: every token type the lexer can produce.
"""

token_hashmap: dict[str, str] = {
    # 1-char tokens
    "(": "LEFT_PAREN",
    ")": "RIGHT_PAREN",
    "{": "LEFT_BRACE",
    "}": "RIGHT_BRACE",
    ",": "COMMA",
    ".": "DOT",
    "-": "MINUS",
    "+": "PLUS",
    ";": "SEMICOLON",
    "/": "SLASH",
    "*": "STAR",
    # 1- or 2-char tokens
    "!": "BANG",
    "!=": "BANG_EQUAL",
    "=": "EQUAL",
    "==": "EQUAL_EQUAL",
    ">": "GREATER",
    ">=": "GREATER_EQUAL",
    "<": "LESS",
    "<=": "LESS_EQUAL",
}

keywords: dict[str, str] = {
    "and": "AND",
    "class": "CLASS",
    "else": "ELSE",
    "false": "FALSE",
    "for": "FOR",
    "fun": "FUN",
    "if": "IF",
    "nil": "NIL",
    "or": "OR",
    "print": "PRINT",
    "return": "RETURN",
    "super": "SUPER",
    "this": "THIS",
    "true": "TRUE",
    "var": "VAR",
    "while": "WHILE",
}

literal_tokens: tuple[str, ...] = ("IDENTIFIER", "STRING", "NUMBER")

statement_starters: frozenset[str] = frozenset(
    {"CLASS", "FUN", "VAR", "FOR", "IF", "WHILE", "PRINT", "RETURN"}
)

TOKEN_TYPES: frozenset[str] = frozenset(
    set(token_hashmap.values()) | set(keywords.values()) | set(literal_tokens) | {"EOF"}
)

# longest lexeme in token_hashmap
MAX_OPERATOR_LENGTH: int = max(len(k) for k in token_hashmap)

# deepest combined nesting of groupings, unary operators, chained
# assignments and blocks that the parser accepts
MAX_NESTING: int = 48
