"""
Error model and reporting for the JBread interpreter
Errors are plain exceptions; rendering goes through pure dictionary builders
"""

import sys
from typing import Dict, List, Optional, TextIO

from tokens import Token, TokenType


# ============================================================================
# EXCEPTIONS
# ============================================================================

# Reported when source nests deeper than the Python stack allows
NESTING_TOO_DEEP = "Expression nested too deeply."


class JBreadError(Exception):
    """Base class for every error the interpreter can report"""
    kind = "Error"

    def __init__(self, message: str, line: int = 0, lexeme: Optional[str] = None,
                 at_end: bool = False):
        self.message = message
        self.line = line
        self.lexeme = lexeme
        self.at_end = at_end
        super().__init__(self._format_error())

    @classmethod
    def at_token(cls, token: Token, message: str) -> "JBreadError":
        """Create an error located at a token"""
        return cls(message, token.line, token.lexeme, token.type == TokenType.EOF)

    @property
    def where(self) -> str:
        if self.at_end:
            return " at end"
        if self.lexeme is not None:
            return f" at '{self.lexeme}'"
        return ""

    def _format_error(self) -> str:
        return f"[line {self.line}] {self.kind}{self.where}: {self.message}"


class JBreadScanError(JBreadError):
    """Lexical error: unexpected character or unterminated string"""
    kind = "ScanError"


class JBreadParseError(JBreadError):
    """Token stream does not match the grammar"""
    kind = "ParseError"


class JBreadRuntimeError(JBreadError):
    """Ill-typed operation or unbound name during evaluation"""
    kind = "RuntimeError"


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_error_report(error: JBreadError, source_text: str = "", context_lines: int = 1) -> Dict:
    """Create an immutable error report structure"""
    return {
        'kind': error.kind,
        'line': error.line,
        'where': error.where,
        'message': error.message,
        'context': get_context_lines(source_text, error.line, context_lines) if source_text else None,
    }


def format_error_report(report: Dict) -> str:
    """Format error report as string"""
    error_msg = f"[line {report['line']}] {report['kind']}{report['where']}: {report['message']}"

    if report['context']:
        error_msg += "\n" + report['context']

    return error_msg


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def get_context_lines(source_text: str, line_num: int, context_lines: int = 1) -> str:
    """Get context lines around the error, marking the error line"""
    lines = source_text.split('\n')
    if line_num < 1 or line_num > len(lines):
        return ""

    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts = []
    for i in range(start_line, end_line):
        marker = ">" if i == line_num - 1 else " "
        context_parts.append(f"{marker}{i+1:5d}: {lines[i]}")

    return '\n'.join(context_parts)


# ============================================================================
# REPORTER
# ============================================================================

class ErrorReporter:
    """Records that errors occurred and renders them to a diagnostics stream.

    One reporter can serve many runs: call reset() between them so an error
    in one run never leaks into the status of the next.
    """

    def __init__(self, stream: Optional[TextIO] = None, source_text: str = ""):
        self.stream = stream
        self.source_text = source_text
        self.errors: List[JBreadError] = []

    @property
    def had_error(self) -> bool:
        return any(not isinstance(error, JBreadRuntimeError) for error in self.errors)

    @property
    def had_runtime_error(self) -> bool:
        return any(isinstance(error, JBreadRuntimeError) for error in self.errors)

    def reset(self, source_text: str = "") -> None:
        self.source_text = source_text
        self.errors = []

    def report(self, error: JBreadError) -> None:
        self.errors.append(error)
        report = make_error_report(error, self.source_text)
        print(format_error_report(report), file=self.stream or sys.stderr)
