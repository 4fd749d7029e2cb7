"""
JBread Scanner
Single left-to-right pass turning source text into tokens
"""

from typing import List, Optional

from error_handling import ErrorReporter, JBreadScanError
from tokens import KEYWORDS, LiteralValue, Token, TokenType, make_number, make_string


SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# first char -> (token when followed by '=', token otherwise)
ONE_OR_TWO_CHAR_TOKENS = {
    '!': (TokenType.BANG_EQUAL, TokenType.BANG),
    '=': (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    '<': (TokenType.LESS_EQUAL, TokenType.LESS),
    '>': (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

WHITESPACE = {' ', '\t', '\r'}


def is_digit(char: str) -> bool:
    return '0' <= char <= '9'


def is_identifier_start(char: str) -> bool:
    return ('a' <= char <= 'z') or ('A' <= char <= 'Z') or char == '_'


def is_identifier_part(char: str) -> bool:
    return char.isalnum() or char == '_'


class JBreadScanner:
    """JBread scanner.

    Lexical errors never stop the scan: each one is handed to the reporter
    (when there is one) and collected in ``errors``, so a single pass can
    surface several of them.
    """

    def __init__(self, source: str, reporter: Optional[ErrorReporter] = None):
        self.source = source
        self.reporter = reporter
        self.tokens: List[Token] = []
        self.errors: List[JBreadScanError] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        """Scan the whole source; always ends with exactly one EOF token"""
        while not self.is_at_end():
            self.start = self.current
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _scan_token(self) -> None:
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])
        elif char in ONE_OR_TWO_CHAR_TOKENS:
            long_type, short_type = ONE_OR_TWO_CHAR_TOKENS[char]
            self._add_token(long_type if self._match('=') else short_type)
        elif char == '/':
            if self._match('/'):
                # Comment runs to end of line; the newline itself is left for the next pass
                while self._peek() != '\n' and not self.is_at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
        elif char in WHITESPACE:
            pass
        elif char == '\n':
            self.line += 1
        elif char == '"':
            self._string()
        elif is_digit(char):
            self._number()
        elif is_identifier_start(char):
            self._identifier()
        else:
            self._error("Unexpected character.", char)

    def _identifier(self) -> None:
        while is_identifier_part(self._peek()):
            self._advance()

        text = self.source[self.start:self.current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def _number(self) -> None:
        while is_digit(self._peek()):
            self._advance()

        # A fractional part needs at least one digit after the dot
        if self._peek() == '.' and is_digit(self._peek_next()):
            self._advance()
            while is_digit(self._peek()):
                self._advance()

        text = self.source[self.start:self.current]
        self._add_token(TokenType.NUMBER, make_number(float(text)))

    def _string(self) -> None:
        while self._peek() != '"' and not self.is_at_end():
            if self._peek() == '\n':
                self.line += 1
            self._advance()

        if self.is_at_end():
            self._error("Unterminated string.")
            return

        # Closing quote
        self._advance()
        value = self.source[self.start + 1:self.current - 1]
        self._add_token(TokenType.STRING, make_string(value))

    def _peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def _peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def _match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def _advance(self) -> str:
        char = self.source[self.current]
        self.current += 1
        return char

    def _add_token(self, token_type: TokenType, literal: Optional[LiteralValue] = None) -> None:
        text = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, text, literal, self.line))

    def _error(self, message: str, lexeme: Optional[str] = None) -> None:
        error = JBreadScanError(message, self.line, lexeme)
        self.errors.append(error)
        if self.reporter is not None:
            self.reporter.report(error)


def scan(source: str, reporter: Optional[ErrorReporter] = None) -> List[Token]:
    """Scan source text into a token list"""
    return JBreadScanner(source, reporter).scan_tokens()
