"""
JBread Interpreter
Tree-walking evaluator: expressions evaluate to literal values (None for nil),
statements run for their side effects against a chain of Environments
"""

import sys
from typing import Callable, Dict, Optional, Sequence, TextIO

from ast_nodes import (
  Assign, Binary, Block, Expr, Expression, ExprVisitor, Grouping, Literal,
  Print, Stmt, StmtVisitor, Unary, Var, Variable,
)
from environment import Environment
from error_handling import JBreadRuntimeError
from tokens import LiteralValue, Token, TokenType
from utilities import BinaryOperation, require_value

from stdlib import (
  jbread_add,
  jbread_sub,
  jbread_mul,
  jbread_div,
  jbread_eq,
  jbread_ne,
  jbread_lt,
  jbread_gt,
  jbread_le,
  jbread_ge,
  jbread_negate,
  jbread_not,
  jbread_print,
)


# ============================================================================
# BUILT-IN OPERATIONS
# ============================================================================

BUILTIN_BINARY_OPERATORS: Dict[TokenType, BinaryOperation] = {
    TokenType.PLUS: jbread_add,
    TokenType.MINUS: jbread_sub,
    TokenType.STAR: jbread_mul,
    TokenType.SLASH: jbread_div,
    TokenType.EQUAL_EQUAL: jbread_eq,
    TokenType.BANG_EQUAL: jbread_ne,
    TokenType.LESS: jbread_lt,
    TokenType.GREATER: jbread_gt,
    TokenType.LESS_EQUAL: jbread_le,
    TokenType.GREATER_EQUAL: jbread_ge,
}

BUILTIN_UNARY_OPERATORS: Dict[TokenType, Callable[[LiteralValue, Token], LiteralValue]] = {
    TokenType.MINUS: jbread_negate,
    TokenType.BANG: jbread_not,
}


# ============================================================================
# INTERPRETER
# ============================================================================

class Interpreter(ExprVisitor, StmtVisitor):
  """Evaluates statements against the current scope.

  ``globals`` lives as long as the interpreter, so a REPL keeps its
  variables from one line to the next.
  """

  def __init__(self, output: Optional[TextIO] = None, debug: bool = False):
    self.output = output
    self.debug = debug
    self.globals = Environment()
    self.environment = self.globals

  def interpret(self, statements: Sequence[Stmt]) -> None:
    """Execute statements in order; the first runtime error propagates"""
    for statement in statements:
      self.execute(statement)

  def evaluate(self, expr: Expr) -> Optional[LiteralValue]:
    return expr.accept(self)

  def execute(self, stmt: Stmt) -> None:
    if self.debug:
      print(f"Executing: {type(stmt).__name__}", file=sys.stderr)
    stmt.accept(self)

  def execute_block(self, statements: Sequence[Stmt], environment: Environment) -> None:
    """Run statements in the given scope, restoring the current scope on every exit path"""
    previous = self.environment
    try:
      self.environment = environment
      for statement in statements:
        self.execute(statement)
    finally:
      self.environment = previous

  # --------------------------------------------------------------------------
  # Expressions
  # --------------------------------------------------------------------------

  def visit_literal_expr(self, expr: Literal) -> Optional[LiteralValue]:
    return expr.value

  def visit_grouping_expr(self, expr: Grouping) -> Optional[LiteralValue]:
    return self.evaluate(expr.expression)

  def visit_unary_expr(self, expr: Unary) -> LiteralValue:
    right = require_value(self.evaluate(expr.right), expr.operator)

    operation = BUILTIN_UNARY_OPERATORS.get(expr.operator.type)
    if operation is None:
      raise JBreadRuntimeError.at_token(expr.operator, "Invalid operator for unary expression.")
    return operation(right, expr.operator)

  def visit_binary_expr(self, expr: Binary) -> LiteralValue:
    # Both sides are always evaluated, left first
    left = self.evaluate(expr.left)
    right = self.evaluate(expr.right)
    left = require_value(left, expr.operator, "Left")
    right = require_value(right, expr.operator, "Right")

    operation = BUILTIN_BINARY_OPERATORS.get(expr.operator.type)
    if operation is None:
      raise JBreadRuntimeError.at_token(expr.operator, "Invalid operator for binary expression.")
    return operation(left, right, expr.operator)

  def visit_variable_expr(self, expr: Variable) -> Optional[LiteralValue]:
    return self.environment.get(expr.name)

  def visit_assign_expr(self, expr: Assign) -> Optional[LiteralValue]:
    value = self.evaluate(expr.value)
    self.environment.assign(expr.name, value)
    return value

  # --------------------------------------------------------------------------
  # Statements
  # --------------------------------------------------------------------------

  def visit_expression_stmt(self, stmt: Expression) -> None:
    self.evaluate(stmt.expression)

  def visit_print_stmt(self, stmt: Print) -> None:
    value = self.evaluate(stmt.expression)
    jbread_print(value, self.output or sys.stdout)

  def visit_var_stmt(self, stmt: Var) -> None:
    value = None
    if stmt.initializer is not None:
      value = self.evaluate(stmt.initializer)
    self.environment.define(stmt.name.lexeme, value)

  def visit_block_stmt(self, stmt: Block) -> None:
    self.execute_block(stmt.statements, Environment(self.environment))


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(output: Optional[TextIO] = None, debug: bool = False) -> Interpreter:
  """Factory function returning an interpreter"""
  return Interpreter(output=output, debug=debug)


def create_debug_interpreter(output: Optional[TextIO] = None) -> Interpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(output, debug=True)
