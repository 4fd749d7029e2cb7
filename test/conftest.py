"""
Test configuration for JBread interpreter tests
"""

import io
import sys
from pathlib import Path

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from error_handling import ErrorReporter
from parsing import create_parser
from session import Session


@pytest.fixture
def parser():
  """Provide a fresh parser for each test"""
  return create_parser()


@pytest.fixture
def output():
  """Captures what print statements write"""
  return io.StringIO()


@pytest.fixture
def diagnostics():
  """Captures rendered error reports"""
  return io.StringIO()


@pytest.fixture
def reporter(diagnostics):
  return ErrorReporter(stream=diagnostics)


@pytest.fixture
def session(output, reporter):
  return Session(output=output, reporter=reporter)


@pytest.fixture
def examples_dir():
  """Get the examples directory path"""
  return project_root / "examples"
