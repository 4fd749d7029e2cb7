"""
JBread session
Runs source text through scan, parse and interpret against one long-lived
interpreter, so successive runs (REPL lines) share global state.
"""

import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple

from ast_nodes import Expression, Stmt
from error_handling import (
    NESTING_TOO_DEEP, ErrorReporter, JBreadError, JBreadParseError, JBreadRuntimeError,
)
from interpreter import Interpreter, create_debug_interpreter, create_interpreter
from parsing import create_debug_parser, create_parser
from printer import AstPrinter, pretty_print_tokens
from scanner import JBreadScanner
from stdlib import jbread_show


OK = "ok"
SCAN_ERROR = "scan_error"
PARSE_ERROR = "parse_error"
RUNTIME_ERROR = "runtime_error"

# Status the command line exits with after any failed run
EXIT_FAILURE = 65


@dataclass(frozen=True)
class RunResult:
    """Outcome of one run; replaces a process-wide 'had error' flag"""
    status: str
    errors: Tuple[JBreadError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status == OK

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else EXIT_FAILURE


class Session:
    """Governs a JBread session: one interpreter, one reporter, many runs"""

    def __init__(self, output: Optional[TextIO] = None, reporter: Optional[ErrorReporter] = None,
                 debug: bool = False):
        self.output = output
        self.reporter = reporter or ErrorReporter()
        self.debug = debug
        self.parser = create_debug_parser() if debug else create_parser()
        self.interpreter: Interpreter = (
            create_debug_interpreter(output) if debug else create_interpreter(output)
        )

    def run(self, source: str, echo: bool = False) -> RunResult:
        """Scan, parse and execute source.

        Any lexical error stops the run before parsing. With ``echo`` set, a
        program that is a single expression statement prints ``=> value``
        instead of discarding the value.
        """
        self.reporter.reset(source)

        scanner = JBreadScanner(source, self.reporter)
        tokens = scanner.scan_tokens()
        if scanner.errors:
            return RunResult(SCAN_ERROR, tuple(scanner.errors))

        if self.debug:
            print("Tokens:", file=sys.stderr)
            print(pretty_print_tokens(tokens), file=sys.stderr)

        try:
            statements = self.parser.parse(tokens)
        except JBreadParseError as e:
            self.reporter.report(e)
            return RunResult(PARSE_ERROR, (e,))

        if self.debug:
            print("AST:", file=sys.stderr)
            print(AstPrinter().print_program(statements), file=sys.stderr)

        try:
            if echo and _is_lone_expression(statements):
                value = self.interpreter.evaluate(statements[0].expression)
                print(f"=> {jbread_show(value)}", file=self.output or sys.stdout)
            else:
                self.interpreter.interpret(statements)
        except JBreadRuntimeError as e:
            self.reporter.report(e)
            return RunResult(RUNTIME_ERROR, (e,))
        except RecursionError:
            error = JBreadRuntimeError(NESTING_TOO_DEEP)
            self.reporter.report(error)
            return RunResult(RUNTIME_ERROR, (error,))

        return RunResult(OK)

    def run_file(self, path: str) -> RunResult:
        """Run a UTF-8 source file; OSError and UnicodeDecodeError propagate"""
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()
        return self.run(source)


def _is_lone_expression(statements: List[Stmt]) -> bool:
    return len(statements) == 1 and isinstance(statements[0], Expression)


def run_source(source: str, output: Optional[TextIO] = None,
               reporter: Optional[ErrorReporter] = None) -> RunResult:
    """Run source in a fresh session"""
    return Session(output=output, reporter=reporter).run(source)
