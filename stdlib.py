"""
JBread operator library
Implementations of every unary and binary operator plus the textual form of values
"""

import math
import operator
from decimal import Decimal
from typing import Optional, TextIO

from tokens import (
  BOOLEAN, NAN, NAN_VALUE, NUMBER, STRING, LiteralValue, Token,
  make_boolean, make_number, make_string,
)
from utilities import (
  as_boolean,
  as_number,
  binary_arithmetic_op,
  binary_comparison_op,
  operation_error,
)


# ============================================================================
# PRINT FUNCTIONS
# ============================================================================

def format_number(number: float) -> str:
  """Shortest decimal form, never in exponent notation; integral values drop the trailing '.0'"""
  text = repr(number)
  if "e" in text:
    text = format(Decimal(text), "f")
  if text.endswith(".0"):
    text = text[:-2]
  return text


def jbread_show(value: Optional[LiteralValue]) -> str:
  """Convert value to its printed representation"""
  if value is None:
    return "nil"
  elif value.type == NUMBER:
    return format_number(value.value)
  elif value.type == BOOLEAN:
    return "true" if value.value else "false"
  elif value.type == STRING:
    return value.value
  elif value.type == NAN:
    return "NaN"
  return f"<{value.type}>"


def jbread_print(value: Optional[LiteralValue], output: TextIO) -> None:
  """Write a value and a newline to the output sink"""
  print(jbread_show(value), file=output)


# ============================================================================
# EQUALITY
# ============================================================================

def literals_equal(x: LiteralValue, y: LiteralValue) -> bool:
  """Structural, type-sensitive equality; the NaN sentinel equals nothing"""
  if x.type != y.type:
    return False
  if x.type == NAN:
    return False
  return x.value == y.value


def jbread_eq(x: LiteralValue, y: LiteralValue, op: Token) -> LiteralValue:
  """Equality comparison, never an error"""
  return make_boolean(literals_equal(x, y))


def jbread_ne(x: LiteralValue, y: LiteralValue, op: Token) -> LiteralValue:
  """Not equal comparison"""
  return make_boolean(not literals_equal(x, y))


# ============================================================================
# COMPARISON FUNCTIONS
# ============================================================================

jbread_lt = binary_comparison_op(operator.lt)
jbread_gt = binary_comparison_op(operator.gt)
jbread_le = binary_comparison_op(operator.le)
jbread_ge = binary_comparison_op(operator.ge)


# ============================================================================
# ARITHMETIC FUNCTIONS
# ============================================================================

def jbread_add(x: LiteralValue, y: LiteralValue, op: Token) -> LiteralValue:
  """Addition for numbers, concatenation for strings"""
  if x.type == NUMBER and y.type == NUMBER:
    return make_number(x.value + y.value)
  elif x.type == STRING and y.type == STRING:
    return make_string(x.value + y.value)
  else:
    raise operation_error(op, x, y)


jbread_sub = binary_arithmetic_op(operator.sub)
jbread_mul = binary_arithmetic_op(operator.mul)


def ieee_divide(left: float, right: float) -> float:
  """Float division that returns infinities instead of raising on a zero divisor"""
  if right != 0.0:
    return left / right
  if math.isnan(left):
    return math.nan
  return math.copysign(math.inf, left) * math.copysign(1.0, right)


def jbread_div(x: LiteralValue, y: LiteralValue, op: Token) -> LiteralValue:
  """Division; exactly 0/0 gives the NaN sentinel"""
  left = as_number(x, op, "Operands must be numbers")
  right = as_number(y, op, "Operands must be numbers")
  if left == 0.0 and right == 0.0:
    return NAN_VALUE
  return make_number(ieee_divide(left, right))


# ============================================================================
# UNARY FUNCTIONS
# ============================================================================

def jbread_negate(x: LiteralValue, op: Token) -> LiteralValue:
  return make_number(-as_number(x, op))


def jbread_not(x: LiteralValue, op: Token) -> LiteralValue:
  return make_boolean(not as_boolean(x, op))
