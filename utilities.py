"""
Utilities module for the JBread interpreter
Value checks, coercions and error builders shared by the operator implementations
"""

from typing import Callable, Optional

from error_handling import JBreadRuntimeError
from tokens import BOOLEAN, NUMBER, LiteralValue, Token, make_boolean, make_number


BinaryOperation = Callable[[LiteralValue, LiteralValue, Token], LiteralValue]


# ==================== VALUE CHECKS ====================

def get_value_type(value: Optional[LiteralValue]) -> str:
  """Type name of a runtime value, 'nil' for the absent value"""
  return "nil" if value is None else value.type


# ==================== ERROR MESSAGE BUILDERS ====================

def type_mismatch_error(
  operator: Token,
  expected: str,
  actual: Optional[LiteralValue]
) -> JBreadRuntimeError:
  """
  Generate type mismatch error

  Args:
    operator: Operator token the operand was given to
    expected: Human readable description of the required operand
    actual: Actual operand value

  Returns:
    JBreadRuntimeError located at the operator
  """
  return JBreadRuntimeError.at_token(
    operator,
    f"{expected}, got {get_value_type(actual)}."
  )


def operation_error(
  operator: Token,
  left: LiteralValue,
  right: LiteralValue
) -> JBreadRuntimeError:
  """
  Generate invalid operands error for '+'

  Args:
    operator: Operator token
    left: Left operand value
    right: Right operand value

  Returns:
    JBreadRuntimeError located at the operator
  """
  return JBreadRuntimeError.at_token(
    operator,
    f"Operands must be two numbers or two strings, got {left.type} and {right.type}."
  )


def missing_operand_error(operator: Token, side: str) -> JBreadRuntimeError:
  return JBreadRuntimeError.at_token(operator, f"{side} operand must not be nil.")


# ==================== COERCIONS ====================

def require_value(value: Optional[LiteralValue], operator: Token, side: str = "Right") -> LiteralValue:
  """Operators only work on literal values, never on nil"""
  if value is None:
    raise missing_operand_error(operator, side)
  return value


def as_number(value: LiteralValue, operator: Token, expected: str = "Operand must be a number") -> float:
  """Coerce to Number; only the Number variant coerces"""
  if value.type != NUMBER:
    raise type_mismatch_error(operator, expected, value)
  return value.value


def as_boolean(value: LiteralValue, operator: Token, expected: str = "Operand must be a boolean") -> bool:
  """Coerce to Boolean; only the Boolean variant coerces"""
  if value.type != BOOLEAN:
    raise type_mismatch_error(operator, expected, value)
  return value.value


# ==================== BINARY OPERATION FACTORIES ====================

def binary_arithmetic_op(op: Callable[[float, float], float]) -> BinaryOperation:
  """
  Factory for binary arithmetic operations over two Numbers

  Examples:
    jbread_sub = binary_arithmetic_op(operator.sub)
    jbread_sub(make_number(3), make_number(1), minus_token) -> Number(2.0)
  """
  def arithmetic(x: LiteralValue, y: LiteralValue, operator: Token) -> LiteralValue:
    left = as_number(x, operator, "Operands must be numbers")
    right = as_number(y, operator, "Operands must be numbers")
    return make_number(op(left, right))

  return arithmetic


def binary_comparison_op(op: Callable[[float, float], bool]) -> BinaryOperation:
  """
  Factory for binary comparisons over two Numbers, producing a Boolean

  Examples:
    jbread_lt = binary_comparison_op(operator.lt)
    jbread_lt(make_number(1), make_number(2), less_token) -> Boolean(True)
  """
  def comparison(x: LiteralValue, y: LiteralValue, operator: Token) -> LiteralValue:
    left = as_number(x, operator, "Operands must be numbers")
    right = as_number(y, operator, "Operands must be numbers")
    return make_boolean(op(left, right))

  return comparison
