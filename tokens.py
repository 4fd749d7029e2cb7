"""
JBread token and literal model
Value types shared by the scanner, parser, printer and interpreter
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Optional


class TokenType(Enum):
    """Closed set of token kinds produced by the scanner"""

    # Single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS: Dict[str, TokenType] = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}


# ============================================================================
# LITERAL VALUES
# ============================================================================

STRING = "String"
NUMBER = "Number"
BOOLEAN = "Boolean"
NAN = "NaN"


@dataclass(frozen=True)
class LiteralValue:
    """Runtime value of one of the closed set {String, Number, Boolean, NaN}.

    Language-level nil is not a LiteralValue: it is represented by None
    wherever an Optional[LiteralValue] is expected.
    """
    type: str
    value: Any = None

    def __str__(self) -> str:
        return f"{self.type}({self.value!r})" if self.type != NAN else NAN


def make_value(value: Any, type_name: str) -> LiteralValue:
    """Create an immutable runtime value"""
    return LiteralValue(type_name, value)


def make_string(text: str) -> LiteralValue:
    return make_value(text, STRING)


def make_number(number: float) -> LiteralValue:
    return make_value(float(number), NUMBER)


def make_boolean(flag: bool) -> LiteralValue:
    return make_value(bool(flag), BOOLEAN)


NAN_VALUE = LiteralValue(NAN)


# ============================================================================
# TOKENS
# ============================================================================

@dataclass(frozen=True)
class Token:
    """JBread token with its source line"""
    type: TokenType
    lexeme: str
    literal: Optional[LiteralValue]
    line: int

    def __str__(self) -> str:
        if self.literal is not None:
            return f"{self.type.name}({self.lexeme}) = {self.literal}"
        return f"{self.type.name}({self.lexeme})"


def make_token(token_type: TokenType, lexeme: str, line: int = 1,
               literal: Optional[LiteralValue] = None) -> Token:
    """Build a token directly, bypassing the scanner"""
    return Token(token_type, lexeme, literal, line)
