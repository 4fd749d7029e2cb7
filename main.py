"""
JBread Programming Language - Main Entry Point
Runs a script file or an interactive prompt
"""

import sys
import argparse
import atexit
import os
from typing import List, Optional, Tuple

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from pyparsing import ParseException, Suppress, one_of, rest_of_line

from error_handling import ErrorReporter, JBreadError
from parsing import create_debug_parser, create_parser
from printer import AstPrinter, pretty_print_tokens
from scanner import JBreadScanner
from session import EXIT_FAILURE, Session
from stdlib import jbread_show
from tokens import KEYWORDS


VERSION = "JBread v0.1.0 (Tree-walking Interpreter)"
HISTORY_FILE = "~/.jbread_history"


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='jbread',
      description='JBread Programming Language - a small dynamically typed scripting language',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.jb              # Run a JBread script
  %(prog)s -i                     # Interactive mode
  %(prog)s --tokens script.jb     # Scan and show tokens
  %(prog)s --parse script.jb      # Parse and show the syntax tree
  %(prog)s --debug script.jb      # Run with debug output
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='JBread script file to execute'
  )

  parser.add_argument(
      '-i', '--interactive',
      action='store_true',
      help='Start interactive mode'
  )

  parser.add_argument(
      '--tokens',
      action='store_true',
      help='Scan file and show tokens (for debugging)'
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse file and show the syntax tree (for debugging)'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


# ============================================================================
# FILE MODES
# ============================================================================

def read_script(script_path: str) -> str:
  """Read a script, exiting with status 1 when the file cannot be read"""
  try:
    with open(script_path, 'r', encoding='utf-8') as f:
      return f.read()
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found", file=sys.stderr)
    print(f"  Hint: Check the file path and make sure the file exists", file=sys.stderr)
    sys.exit(1)
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'", file=sys.stderr)
    print(f"  Hint: Make sure you have read permissions for this file", file=sys.stderr)
    sys.exit(1)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}", file=sys.stderr)
    print(f"  Hint: Make sure the file is a text file with UTF-8 encoding", file=sys.stderr)
    sys.exit(1)


def show_tokens_file(script_path: str) -> None:
  """Scan a JBread script file and show its tokens"""
  source = read_script(script_path)
  reporter = ErrorReporter(source_text=source)

  scanner = JBreadScanner(source, reporter)
  tokens = scanner.scan_tokens()

  print(f"Scanned {len(tokens)} tokens:")
  print("=" * 50)
  print(pretty_print_tokens(tokens))

  if scanner.errors:
    sys.exit(EXIT_FAILURE)


def parse_file(script_path: str, debug: bool = False) -> None:
  """Parse a JBread script file and show the syntax tree"""
  source = read_script(script_path)
  reporter = ErrorReporter(source_text=source)
  parser = create_debug_parser() if debug else create_parser()

  try:
    statements = parser.parse_string(source, reporter)
  except JBreadError as e:
    # Scan errors were already reported while scanning
    if not reporter.errors:
      reporter.report(e)
    sys.exit(EXIT_FAILURE)

  print(f"Parsed {len(statements)} top-level statements:")
  print("=" * 50)
  print(AstPrinter().print_program(statements))


def run_script_file(script_path: str, debug: bool = False) -> None:
  """Run a JBread script file, exiting 65 if any stage fails"""
  source = read_script(script_path)
  session = Session(debug=debug)

  if debug:
    print(f"Running {script_path}...", file=sys.stderr)
  result = session.run(source)
  if debug:
    print(f"Finished with status {result.status}", file=sys.stderr)

  if not result.ok:
    sys.exit(result.exit_code)


# ============================================================================
# INTERACTIVE MODE
# ============================================================================

# :tokens <source> | :ast <source> | :env | :help
META_COMMAND = (
    Suppress(":")
    + one_of("tokens ast env help", as_keyword=True)("command")
    + rest_of_line("argument")
)

REPL_COMMANDS = [":tokens", ":ast", ":env", ":help", "exit"]


def parse_meta_command(line: str) -> Optional[Tuple[str, str]]:
  """Split a REPL meta command into (command, argument).

  Returns None when the line is ordinary source; an unrecognised command
  comes back as ("unknown", line).
  """
  text = line.strip()
  if not text.startswith(":"):
    return None

  try:
    result = META_COMMAND.parse_string(text, parse_all=True)
  except ParseException:
    return ("unknown", text)
  return (result["command"], result.get("argument", "").strip())


def print_repl_help() -> None:
  print("REPL Commands:")
  print("  :tokens <source>  - Show the tokens of some source")
  print("  :ast <source>     - Show the syntax tree of some source")
  print("  :env              - Show current environment")
  print("  :help             - Show this help")
  print("  exit              - Exit REPL")
  print()
  print("Language features:")
  print("  var a = 1;                - Declare a variable")
  print("  a = a + 1;                - Assign to a declared variable")
  print("  print \"hi \" + \"there\";    - Print a value")
  print("  { var a = 2; print a; }   - Block with its own scope")
  print("  1 + 2 * 3;                - Expressions echo their value")


def run_meta_command(session: Session, command: str, argument: str) -> None:
  """Execute one REPL meta command against the session"""
  if command == "help":
    print_repl_help()

  elif command == "env":
    bindings = session.interpreter.environment.bindings()
    print("Current environment:")
    if bindings:
      for name, value in bindings.items():
        print(f"  {name} = {jbread_show(value)}")
    else:
      print("  (no user-defined bindings)")

  elif command == "tokens":
    reporter = ErrorReporter(source_text=argument)
    print(pretty_print_tokens(JBreadScanner(argument, reporter).scan_tokens()))

  elif command == "ast":
    reporter = ErrorReporter(source_text=argument)
    try:
      statements = session.parser.parse_string(argument, reporter)
    except JBreadError as e:
      if not reporter.errors:
        reporter.report(e)
      return
    print(AstPrinter().print_program(statements))

  else:
    print(f"Unknown command: {argument}")
    print("  Hint: Type ':help' for the list of commands")


def setup_readline() -> None:
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser(HISTORY_FILE)
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # First time, no history yet, or permission denied

  readline.set_history_length(1000)

  completions = sorted(KEYWORDS) + REPL_COMMANDS

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  def save_history():
    try:
      readline.write_history_file(history_file)
    except OSError:
      pass

  atexit.register(save_history)


def run_interactive_mode(debug: bool = False) -> None:
  """Run JBread in interactive mode; globals persist from line to line"""
  print(f"{VERSION} - Interactive Mode")
  print("Type 'exit' to quit, ':help' for commands")
  if READLINE_AVAILABLE:
    print("Readline enabled: Use ↑/↓ for history, Tab for completion")
  if debug:
    print("Debug mode enabled")
  print()

  setup_readline()

  # Each line gets its own status; an error never carries over
  session = Session(debug=debug)

  while True:
    try:
      code = input("jbread> ")

      if code.strip() == "exit":
        break

      if not code.strip():
        continue

      meta = parse_meta_command(code)
      if meta is not None:
        run_meta_command(session, *meta)
        continue

      session.run(code, echo=True)

    except KeyboardInterrupt:
      print("\nGoodbye!")
      break
    except EOFError:
      print("\nGoodbye!")
      break


def show_language_info() -> None:
  """Show JBread language information"""
  print("JBread Programming Language")
  print("=" * 50)
  print("A small dynamically typed scripting language with:")
  print("• Numbers, strings, booleans and nil")
  print("• Global and block-scoped variables")
  print("• Arithmetic, comparison and equality operators")
  print()


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for JBread"""
  if argv is None:
    argv = sys.argv[1:]

  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  # No arguments - show info and start interactive mode
  if not argv:
    show_language_info()
    run_interactive_mode(debug=False)
    return

  if args.script:
    if args.tokens:
      show_tokens_file(args.script)
    elif args.parse:
      parse_file(args.script, debug=args.debug)
    else:
      run_script_file(args.script, debug=args.debug)

  elif args.interactive:
    run_interactive_mode(debug=args.debug)

  else:
    arg_parser.print_help()
    print()
    show_language_info()


if __name__ == "__main__":
  main()
