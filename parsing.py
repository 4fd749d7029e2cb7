"""
JBread Parser
Recursive descent over the scanner's tokens, one method per grammar rule:

```
program      → declaration* EOF
declaration  → varDecl | statement
varDecl      → "var" IDENTIFIER ( "=" expression )? ";"
statement    → exprStmt | printStmt | block
block        → "{" declaration* "}"
exprStmt     → expression ";"
printStmt    → "print" expression ";"
expression   → assignment
assignment   → IDENTIFIER "=" assignment | equality
equality     → comparison ( ( "!=" | "==" ) comparison )*
comparison   → term ( ( ">" | ">=" | "<" | "<=" ) term )*
term         → factor ( ( "-" | "+" ) factor )*
factor       → unary ( ( "/" | "*" ) unary )*
unary        → ( "!" | "-" ) unary | primary
primary      → NUMBER | STRING | IDENTIFIER | "true" | "false" | "nil" | "(" expression ")"
```

The parser fails fast: the first malformed construct raises JBreadParseError
and no partial tree is returned.
"""

import sys
from typing import Callable, List, Optional, Sequence

from ast_nodes import (
    Assign, Binary, Block, Expr, Expression, Grouping, Literal, Print, Stmt,
    Unary, Var, Variable,
)
from error_handling import NESTING_TOO_DEEP, ErrorReporter, JBreadParseError
from scanner import JBreadScanner
from tokens import Token, TokenType, make_boolean


class JBreadGrammar:
    """Stateful cursor over one token sequence"""

    def __init__(self, tokens: Sequence[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            tokens = list(tokens) + [Token(TokenType.EOF, "", None, tokens[-1].line if tokens else 1)]
        self.tokens = tokens
        self.current = 0

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def program(self) -> List[Stmt]:
        statements = []
        while not self.is_at_end():
            statements.append(self.declaration())
        return statements

    def single_expression(self) -> Expr:
        expr = self.expression()
        if not self.is_at_end():
            raise self._error(self._peek(), "Expect end of expression.")
        return expr

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def declaration(self) -> Stmt:
        if self._match(TokenType.VAR):
            return self.var_declaration()
        return self.statement()

    def var_declaration(self) -> Stmt:
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self.expression()

        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self._match(TokenType.PRINT):
            return self.print_statement()
        if self._match(TokenType.LEFT_BRACE):
            return Block(tuple(self.block()))
        return self.expression_statement()

    def print_statement(self) -> Stmt:
        value = self.expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    def block(self) -> List[Stmt]:
        statements = []
        while not self._check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.declaration())

        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    # ------------------------------------------------------------------
    # Expressions, lowest to highest precedence
    # ------------------------------------------------------------------

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.equality()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            raise self._error(equals, "Invalid assignment target.")

        return expr

    def equality(self) -> Expr:
        return self._left_associative(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self._left_associative(
            self.term,
            TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        )

    def term(self) -> Expr:
        return self._left_associative(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self) -> Expr:
        return self._left_associative(self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self) -> Expr:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            right = self.unary()
            return Unary(operator, right)

        return self.primary()

    def primary(self) -> Expr:
        if self._match(TokenType.FALSE):
            return Literal(make_boolean(False))
        if self._match(TokenType.TRUE):
            return Literal(make_boolean(True))
        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous().literal)

        if self._match(TokenType.IDENTIFIER):
            return Variable(self._previous())

        if self._match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self._error(self._peek(), "Expect expression.")

    def _left_associative(self, operand: Callable[[], Expr], *operators: TokenType) -> Expr:
        """operand ( operator operand )* folded to the left"""
        expr = operand()

        while self._match(*operators):
            operator = self._previous()
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    # ------------------------------------------------------------------
    # Token cursor
    # ------------------------------------------------------------------

    def _match(self, *token_types: TokenType) -> bool:
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _consume(self, token_type: TokenType, message: str) -> Token:
        if self._check(token_type):
            return self._advance()
        raise self._error(self._peek(), message)

    def _check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self._previous()

    def is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    @staticmethod
    def _error(token: Token, message: str) -> JBreadParseError:
        return JBreadParseError.at_token(token, message)


class JBreadParser:
    """Main JBread parser combining scanner and grammar"""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def parse(self, tokens: Sequence[Token]) -> List[Stmt]:
        """Parse a token sequence into statements"""
        grammar = JBreadGrammar(tokens)
        statements = self._apply(grammar, grammar.program)
        if self.debug:
            print(f"Parsed {len(statements)} statements", file=sys.stderr)
        return statements

    def parse_string(self, text: str, reporter: Optional[ErrorReporter] = None) -> List[Stmt]:
        """Parse JBread source code from string; the first lexical error is raised"""
        scanner = JBreadScanner(text, reporter)
        tokens = scanner.scan_tokens()
        if scanner.errors:
            raise scanner.errors[0]
        return self.parse(tokens)

    def parse_expression(self, text: str) -> Expr:
        """Parse a single JBread expression with no trailing ';'"""
        scanner = JBreadScanner(text)
        tokens = scanner.scan_tokens()
        if scanner.errors:
            raise scanner.errors[0]
        grammar = JBreadGrammar(tokens)
        return self._apply(grammar, grammar.single_expression)

    @staticmethod
    def _apply(grammar: JBreadGrammar, rule: Callable):
        """Run a grammar rule, turning Python stack exhaustion into a parse error"""
        try:
            return rule()
        except RecursionError:
            raise JBreadParseError.at_token(grammar._peek(), NESTING_TOO_DEEP) from None

    def parse_file(self, filepath: str) -> List[Stmt]:
        """Parse a JBread source file"""
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.parse_string(content)


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> JBreadParser:
    """Create a JBread parser"""
    return JBreadParser(debug=debug)


def create_debug_parser() -> JBreadParser:
    """Create a JBread parser with debug enabled"""
    return JBreadParser(debug=True)
