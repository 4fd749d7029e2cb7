"""
JBread AST printer
Renders expressions and statements as s-expressions, e.g. `(+ 1 (* 2 3))`
"""

from typing import Iterable, Sequence, Union

from ast_nodes import (
    Assign, Binary, Block, Expr, Expression, ExprVisitor, Grouping, Literal,
    Print, Stmt, StmtVisitor, Unary, Var, Variable,
)
from stdlib import jbread_show
from tokens import Token

Node = Union[Expr, Stmt]


class AstPrinter(ExprVisitor, StmtVisitor):
    """Pure function of the tree: printing the same node twice gives the same text"""

    def print(self, node: Node) -> str:
        return node.accept(self)

    def print_program(self, statements: Sequence[Stmt]) -> str:
        return "\n".join(self.print(statement) for statement in statements)

    def parenthesize(self, name: str, *parts: Union[Node, Token, str]) -> str:
        result = "(" + name
        for part in parts:
            result += " " + self._render(part)
        return result + ")"

    def _render(self, part: Union[Node, Token, str]) -> str:
        if isinstance(part, Token):
            return part.lexeme
        if isinstance(part, str):
            return part
        return part.accept(self)

    # Expressions

    def visit_literal_expr(self, expr: Literal) -> str:
        return jbread_show(expr.value)

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return self.parenthesize("group", expr.expression)

    def visit_unary_expr(self, expr: Unary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_binary_expr(self, expr: Binary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_variable_expr(self, expr: Variable) -> str:
        return expr.name.lexeme

    def visit_assign_expr(self, expr: Assign) -> str:
        return self.parenthesize("=", expr.name, expr.value)

    # Statements

    def visit_expression_stmt(self, stmt: Expression) -> str:
        return self.parenthesize(";", stmt.expression)

    def visit_print_stmt(self, stmt: Print) -> str:
        return self.parenthesize("print", stmt.expression)

    def visit_var_stmt(self, stmt: Var) -> str:
        if stmt.initializer is None:
            return self.parenthesize("var", stmt.name)
        return self.parenthesize("var", stmt.name, stmt.initializer)

    def visit_block_stmt(self, stmt: Block) -> str:
        return self.parenthesize("block", *stmt.statements)


def print_ast(node: Node) -> str:
    """Print a single node"""
    return AstPrinter().print(node)


def pretty_print_tokens(tokens: Iterable[Token]) -> str:
    """One token per line with its source line, for debugging"""
    return "\n".join(f"{token.line:4d}  {token}" for token in tokens)
