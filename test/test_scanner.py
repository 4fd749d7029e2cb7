"""
Scanner tests for JBread
Token kinds, literals, line tracking and lexical error reporting
"""

import pytest

from error_handling import JBreadScanError
from scanner import JBreadScanner, scan
from tokens import TokenType, make_number, make_string


def token_types(source):
  return [token.type for token in scan(source)]


class TestTokens:
  """Test tokens produced for valid source"""

  def test_simple_expression(self):
    tokens = scan("1 + 2")
    assert [t.type for t in tokens] == [
        TokenType.NUMBER, TokenType.PLUS, TokenType.NUMBER, TokenType.EOF
    ]
    assert tokens[0].literal == make_number(1)
    assert tokens[2].lexeme == "2"

  def test_empty_source_is_just_eof(self):
    tokens = scan("")
    assert len(tokens) == 1
    assert tokens[0].type == TokenType.EOF
    assert tokens[0].lexeme == ""

  def test_comment_only(self):
    assert token_types("// nothing to see here") == [TokenType.EOF]

  def test_comment_runs_to_end_of_line(self):
    tokens = scan("// comment\nprint")
    assert [t.type for t in tokens] == [TokenType.PRINT, TokenType.EOF]
    assert tokens[0].line == 2

  def test_slash_is_not_a_comment(self):
    assert token_types("4 / 2") == [
        TokenType.NUMBER, TokenType.SLASH, TokenType.NUMBER, TokenType.EOF
    ]

  def test_maximal_munch(self):
    assert token_types("!= == <= >= ! = < >") == [
        TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL,
        TokenType.BANG, TokenType.EQUAL,
        TokenType.LESS, TokenType.GREATER,
        TokenType.EOF,
    ]

  def test_punctuation(self):
    assert token_types("(){},.-+;*") == [
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
        TokenType.COMMA, TokenType.DOT, TokenType.MINUS,
        TokenType.PLUS, TokenType.SEMICOLON, TokenType.STAR,
        TokenType.EOF,
    ]

  def test_keywords_and_identifiers(self):
    tokens = scan("var and orchid _x1 nil")
    assert [t.type for t in tokens] == [
        TokenType.VAR, TokenType.AND, TokenType.IDENTIFIER,
        TokenType.IDENTIFIER, TokenType.NIL, TokenType.EOF,
    ]
    assert tokens[2].lexeme == "orchid"
    assert tokens[2].literal is None

  def test_all_reserved_words(self):
    source = "and class else false fun for if nil or print return super this true var while"
    types = token_types(source)
    assert TokenType.IDENTIFIER not in types
    assert len(types) == 17


class TestLiterals:
  """Test number and string literals"""

  def test_fractional_number(self):
    tokens = scan("1.5")
    assert len(tokens) == 2
    assert tokens[0].literal == make_number(1.5)

  def test_trailing_dot_is_separate(self):
    tokens = scan("123.")
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]
    assert tokens[0].literal == make_number(123)

  def test_leading_dot_is_separate(self):
    assert token_types(".5") == [TokenType.DOT, TokenType.NUMBER, TokenType.EOF]

  def test_string(self):
    tokens = scan('"hello"')
    assert tokens[0].type == TokenType.STRING
    assert tokens[0].lexeme == '"hello"'
    assert tokens[0].literal == make_string("hello")

  def test_multiline_string_advances_line(self):
    tokens = scan('"a\nb"\nx')
    assert tokens[0].literal == make_string("a\nb")
    assert tokens[0].line == 2
    assert tokens[1].lexeme == "x"
    assert tokens[1].line == 3
    assert tokens[2].line == 3


class TestScanErrors:
  """Test that lexical errors are reported and scanning continues"""

  def test_unexpected_character(self, reporter, diagnostics):
    scanner = JBreadScanner("1 @ 2", reporter)
    tokens = scanner.scan_tokens()

    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF]
    assert len(scanner.errors) == 1
    assert str(scanner.errors[0]) == "[line 1] ScanError at '@': Unexpected character."
    assert "Unexpected character." in diagnostics.getvalue()

  def test_every_error_is_reported(self, reporter):
    scanner = JBreadScanner("@\n#\n$", reporter)
    scanner.scan_tokens()

    assert [e.line for e in scanner.errors] == [1, 2, 3]
    assert len(reporter.errors) == 3
    assert reporter.had_error

  def test_unterminated_string(self):
    scanner = JBreadScanner('"abc\ndef')
    tokens = scanner.scan_tokens()

    assert [t.type for t in tokens] == [TokenType.EOF]
    assert len(scanner.errors) == 1
    assert isinstance(scanner.errors[0], JBreadScanError)
    assert scanner.errors[0].message == "Unterminated string."
    assert scanner.errors[0].line == 2

  def test_no_reporter_still_collects(self):
    scanner = JBreadScanner("~")
    scanner.scan_tokens()
    assert scanner.errors[0].lexeme == "~"


class TestIdentifiers:
  """Test identifier boundaries"""

  def test_non_ascii_letters_continue_an_identifier(self):
    scanner = JBreadScanner("var abé = 1;")
    tokens = scanner.scan_tokens()
    assert scanner.errors == []
    assert tokens[1].type == TokenType.IDENTIFIER
    assert tokens[1].lexeme == "abé"

  def test_non_ascii_letter_cannot_start_an_identifier(self):
    scanner = JBreadScanner("é")
    scanner.scan_tokens()
    assert scanner.errors[0].message == "Unexpected character."
    assert scanner.errors[0].lexeme == "é"

  def test_digits_continue_an_identifier(self):
    tokens = scan("a1b2")
    assert [t.type for t in tokens] == [TokenType.IDENTIFIER, TokenType.EOF]
