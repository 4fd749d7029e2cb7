"""
Session tests: run status, exit codes, error reporting and REPL state
"""

import io

import pytest

from ast_nodes import Grouping, Literal, Print
from error_handling import ErrorReporter, JBreadParseError, JBreadRuntimeError, JBreadScanError
from session import EXIT_FAILURE, OK, PARSE_ERROR, RUNTIME_ERROR, SCAN_ERROR, Session, run_source
from tokens import make_number


class TestRunResult:
  """Test run status for each failure kind"""

  def test_ok(self, session, output):
    result = session.run("print 1 + 2;")
    assert result.status == OK
    assert result.ok
    assert result.exit_code == 0
    assert result.errors == ()
    assert output.getvalue() == "3\n"

  def test_scan_error_stops_before_parsing(self, session, output):
    result = session.run("print 1; @ #")
    assert result.status == SCAN_ERROR
    assert result.exit_code == EXIT_FAILURE
    assert len(result.errors) == 2
    assert all(isinstance(e, JBreadScanError) for e in result.errors)
    assert output.getvalue() == ""

  def test_parse_error_runs_nothing(self, session, output):
    result = session.run("print 1;\nprint 2 +;")
    assert result.status == PARSE_ERROR
    assert result.exit_code == 65
    assert isinstance(result.errors[0], JBreadParseError)
    assert output.getvalue() == ""

  def test_runtime_error(self, session, output):
    result = session.run('print 1;\nprint "a" + 1;\nprint 3;')
    assert result.status == RUNTIME_ERROR
    assert result.exit_code == 65
    assert isinstance(result.errors[0], JBreadRuntimeError)
    assert output.getvalue() == "1\n"

  def test_run_source_uses_fresh_state(self):
    output = io.StringIO()
    run_source("var a = 1;", output, ErrorReporter(stream=io.StringIO()))
    result = run_source("print a;", output, ErrorReporter(stream=io.StringIO()))
    assert result.status == RUNTIME_ERROR


class TestErrorReports:
  """Test what the reporter writes for each error"""

  def test_parse_error_report_has_context(self, session, diagnostics):
    session.run("var a = 1;\nprint a +;")
    lines = diagnostics.getvalue().splitlines()
    assert lines[0] == "[line 2] ParseError at ';': Expect expression."
    assert lines[1] == "     1: var a = 1;"
    assert lines[2] == ">    2: print a +;"

  def test_runtime_error_report(self, session, diagnostics):
    session.run("print nope;")
    assert diagnostics.getvalue().startswith(
        "[line 1] RuntimeError at 'nope': Undefined variable 'nope'."
    )

  def test_every_scan_error_is_reported(self, session, reporter, diagnostics):
    session.run("@\n#")
    assert len(reporter.errors) == 2
    assert diagnostics.getvalue().count("Unexpected character.") == 2

  def test_reporter_is_reset_between_runs(self, session, reporter):
    session.run("print x;")
    assert reporter.had_runtime_error
    session.run("print 1;")
    assert not reporter.had_runtime_error
    assert not reporter.had_error


class TestSessionState:
  """Test state shared between runs"""

  def test_globals_persist(self, session, output):
    session.run("var a = 1;")
    session.run("a = a + 1;")
    session.run("print a;")
    assert output.getvalue() == "2\n"

  def test_errors_do_not_stick(self, session):
    assert not session.run("print x;").ok
    assert session.run("print 1;").ok

  def test_echo_lone_expression(self, session, output):
    session.run("1 + 2;", echo=True)
    session.run('"a" + "b";', echo=True)
    assert output.getvalue() == "=> 3\n=> ab\n"

  def test_echo_ignores_other_statements(self, session, output):
    session.run("print 1;", echo=True)
    session.run("var a = 2;", echo=True)
    session.run("a; a;", echo=True)
    assert output.getvalue() == "1\n"

  def test_echo_runtime_error(self, session, output):
    result = session.run("-true;", echo=True)
    assert result.status == RUNTIME_ERROR
    assert output.getvalue() == ""

  def test_run_file(self, session, output, tmp_path):
    script = tmp_path / "hello.jb"
    script.write_text('print "hello";\n', encoding="utf-8")
    assert session.run_file(str(script)).ok
    assert output.getvalue() == "hello\n"


class TestDebugSession:
  """Test debug diagnostics"""

  def test_dumps_tokens_and_tree(self, output, reporter, capsys):
    Session(output=output, reporter=reporter, debug=True).run("print 1 + 2;")
    err = capsys.readouterr().err
    assert "Tokens:" in err
    assert "PLUS(+)" in err
    assert "AST:" in err
    assert "(print (+ 1 2))" in err
    assert "Executing: Print" in err
    assert output.getvalue() == "3\n"


class TestDeepNesting:
  """Test that nesting beyond the Python stack is reported, not raised"""

  def test_deeply_nested_groups(self, session, output, diagnostics):
    source = "print " + "(" * 500 + "1" + ")" * 500 + ";"
    result = session.run(source)
    assert result.status == PARSE_ERROR
    assert result.errors[0].message == "Expression nested too deeply."
    assert "Expression nested too deeply." in diagnostics.getvalue()
    assert output.getvalue() == ""

  def test_deeply_nested_unary_and_blocks(self, session):
    assert session.run("print " + "!" * 3000 + "true;").status == PARSE_ERROR
    assert session.run("{" * 500 + "}" * 500).status == PARSE_ERROR

  def test_session_survives_deep_nesting(self, session, output):
    session.run("var a = " + "-" * 3000 + "1;")
    assert session.run("print 2;").ok
    assert output.getvalue() == "2\n"

  def test_deep_tree_at_runtime(self, session, output, monkeypatch):
    expr = Literal(make_number(1))
    for _ in range(5000):
      expr = Grouping(expr)
    monkeypatch.setattr(session.parser, "parse", lambda tokens: [Print(expr)])

    result = session.run("print 1;")
    assert result.status == RUNTIME_ERROR
    assert result.errors[0].message == "Expression nested too deeply."
    assert session.interpreter.environment is session.interpreter.globals
    assert output.getvalue() == ""
