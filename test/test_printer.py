"""
AST printer tests
"""

from ast_nodes import Binary, Grouping, Literal, Unary
from printer import AstPrinter, pretty_print_tokens
from scanner import scan
from tokens import TokenType, make_number, make_string, make_token


class TestAstPrinter:
  """Test s-expression rendering"""

  def test_hand_built_tree(self):
    expr = Binary(
        Unary(make_token(TokenType.MINUS, "-"), Literal(make_number(123))),
        make_token(TokenType.STAR, "*"),
        Grouping(Literal(make_number(45.67))),
    )
    assert AstPrinter().print(expr) == "(* (- 123) (group 45.67))"

  def test_literal_forms(self):
    printer = AstPrinter()
    assert printer.print(Literal(None)) == "nil"
    assert printer.print(Literal(make_number(2.5))) == "2.5"
    assert printer.print(Literal(make_string("hi"))) == "hi"

  def test_statements(self, parser):
    statements = parser.parse_string("var a; var b = 1; print b; b = 2; { a; }")
    assert AstPrinter().print_program(statements).split("\n") == [
        "(var a)",
        "(var b 1)",
        "(print b)",
        "(; (= b 2))",
        "(block (; a))",
    ]

  def test_printing_is_stable(self, parser):
    statement = parser.parse_string("print (1 + 2) * -3;")[0]
    printer = AstPrinter()
    assert printer.print(statement) == printer.print(statement)
    assert printer.print(statement) == "(print (* (group (+ 1 2)) (- 3)))"

  def test_token_listing(self):
    listing = pretty_print_tokens(scan("var a = 1;"))
    lines = listing.split("\n")
    assert len(lines) == 6
    assert "VAR(var)" in lines[0]
    assert "NUMBER(1) = Number(1.0)" in lines[3]
    assert "EOF()" in lines[-1]
