"""
JBread abstract syntax tree
Immutable expression and statement nodes with double-dispatch visitors.
A new operation over the tree is a new visitor; node classes never change.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from tokens import LiteralValue, Token


# ============================================================================
# VISITORS
# ============================================================================

class ExprVisitor(ABC):
    """One method per expression node type"""

    @abstractmethod
    def visit_literal_expr(self, expr: "Literal") -> Any: ...

    @abstractmethod
    def visit_grouping_expr(self, expr: "Grouping") -> Any: ...

    @abstractmethod
    def visit_unary_expr(self, expr: "Unary") -> Any: ...

    @abstractmethod
    def visit_binary_expr(self, expr: "Binary") -> Any: ...

    @abstractmethod
    def visit_variable_expr(self, expr: "Variable") -> Any: ...

    @abstractmethod
    def visit_assign_expr(self, expr: "Assign") -> Any: ...


class StmtVisitor(ABC):
    """One method per statement node type"""

    @abstractmethod
    def visit_expression_stmt(self, stmt: "Expression") -> Any: ...

    @abstractmethod
    def visit_print_stmt(self, stmt: "Print") -> Any: ...

    @abstractmethod
    def visit_var_stmt(self, stmt: "Var") -> Any: ...

    @abstractmethod
    def visit_block_stmt(self, stmt: "Block") -> Any: ...


# ============================================================================
# EXPRESSIONS
# ============================================================================

class Expr(ABC):

    @abstractmethod
    def accept(self, visitor: ExprVisitor) -> Any: ...


@dataclass(frozen=True)
class Literal(Expr):
    """Literal value; None stands for nil"""
    value: Optional[LiteralValue]

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_literal_expr(self)


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_grouping_expr(self)


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_unary_expr(self)


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_binary_expr(self)


@dataclass(frozen=True)
class Variable(Expr):
    name: Token

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_variable_expr(self)


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_assign_expr(self)


# ============================================================================
# STATEMENTS
# ============================================================================

class Stmt(ABC):

    @abstractmethod
    def accept(self, visitor: StmtVisitor) -> Any: ...


@dataclass(frozen=True)
class Expression(Stmt):
    """Expression evaluated for its side effects"""
    expression: Expr

    def accept(self, visitor: StmtVisitor) -> Any:
        return visitor.visit_expression_stmt(self)


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr

    def accept(self, visitor: StmtVisitor) -> Any:
        return visitor.visit_print_stmt(self)


@dataclass(frozen=True)
class Var(Stmt):
    """Variable declaration; no initializer means the variable starts as nil"""
    name: Token
    initializer: Optional[Expr] = None

    def accept(self, visitor: StmtVisitor) -> Any:
        return visitor.visit_var_stmt(self)


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...]

    def accept(self, visitor: StmtVisitor) -> Any:
        return visitor.visit_block_stmt(self)
