"""
JBread runtime environment
A chain of mutable scopes. Each scope keeps a plain reference to the scope
that encloses it; the enclosing scope is owned by whoever created it
(the interpreter for globals, the running block for everything else).
"""

from typing import Dict, Optional

from error_handling import JBreadRuntimeError
from tokens import LiteralValue, Token


def undefined_variable_error(name: Token) -> JBreadRuntimeError:
  return JBreadRuntimeError.at_token(name, f"Undefined variable '{name.lexeme}'.")


class Environment:
  """One lexical scope plus a link to its enclosing scope"""

  def __init__(self, enclosing: Optional["Environment"] = None):
    self.values: Dict[str, Optional[LiteralValue]] = {}
    self.enclosing = enclosing

  def define(self, name: str, value: Optional[LiteralValue]) -> None:
    """Bind name in this scope only; redeclaring simply rebinds"""
    self.values[name] = value

  def get(self, name: Token) -> Optional[LiteralValue]:
    """Look up a value in the environment chain, innermost scope first"""
    if name.lexeme in self.values:
      return self.values[name.lexeme]
    elif self.enclosing is not None:
      return self.enclosing.get(name)

    raise undefined_variable_error(name)

  def assign(self, name: Token, value: Optional[LiteralValue]) -> None:
    """Rebind the innermost existing binding; never creates a new one"""
    if name.lexeme in self.values:
      self.values[name.lexeme] = value
      return
    elif self.enclosing is not None:
      self.enclosing.assign(name, value)
      return

    raise undefined_variable_error(name)

  @property
  def depth(self) -> int:
    """Number of scopes in the chain, this one included"""
    return 1 if self.enclosing is None else self.enclosing.depth + 1

  def bindings(self) -> Dict[str, Optional[LiteralValue]]:
    """Every visible binding, inner scopes shadowing outer ones"""
    visible = self.enclosing.bindings() if self.enclosing is not None else {}
    visible.update(self.values)
    return visible
