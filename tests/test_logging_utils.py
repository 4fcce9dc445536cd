"""
tests/test_logging_utils.py - Unit tests for logging utilities.
"""
import logging
import sys
from io import StringIO

import pytest

from pkginfo_reader.logging_utils import GitHubActionsFormatter, setup_logging


@pytest.fixture
def gha_formatter():
    return GitHubActionsFormatter()


@pytest.fixture(autouse=True)
def reset_root_logger_handlers():
    """Keeps the root logger clean around each test."""
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    saved_handlers = root_logger.handlers[:]
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in saved_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)


def _record(level: int, msg: str, name: str = "pkginfo_reader.parser") -> logging.LogRecord:
    return logging.LogRecord(
        name=name, level=level, pathname='parser.py', lineno=42,
        msg=msg, args=(), exc_info=None, func='read_pkginfo'
    )


def _capture_root_output() -> StringIO:
    stream = StringIO()
    logging.getLogger().handlers[0].stream = stream
    return stream


def test_gha_formatter_debug_escapes_special_chars(gha_formatter):
    record = _record(logging.DEBUG, "Stopping at 100% \r\n of line")
    assert gha_formatter.format(record) == "::debug file=parser.py,line=42::Stopping at 100%25 %0D%0A of line"


def test_gha_formatter_info_as_notice(gha_formatter):
    record = _record(logging.INFO, "Read repose-git-6.2-1-x86_64")
    expected = "::notice file=parser.py,line=42,title=pkginfo_reader.parser::Read repose-git-6.2-1-x86_64"
    assert gha_formatter.format(record) == expected


def test_gha_formatter_warning(gha_formatter):
    record = _record(logging.WARNING, "Ignoring PKGINFO content")
    expected = "::warning file=parser.py,line=42,title=pkginfo_reader.parser::Ignoring PKGINFO content"
    assert gha_formatter.format(record) == expected


@pytest.mark.parametrize("level", [logging.ERROR, logging.CRITICAL])
def test_gha_formatter_error(gha_formatter, level):
    record = _record(level, "Failed to read pkg")
    assert gha_formatter.format(record) == "::error file=parser.py,line=42::Failed to read pkg"


def test_gha_formatter_includes_exception(gha_formatter):
    try:
        raise ValueError("bad size")
    except ValueError:
        record = _record(logging.ERROR, "Parse failed")
        record.exc_info = sys.exc_info()
    output = gha_formatter.format(record)
    assert output.startswith("::error file=parser.py,line=42::Parse failed%0A")
    assert "ValueError: bad size" in output
    assert "\n" not in output


def test_setup_logging_gha_mode(monkeypatch):
    monkeypatch.setattr("pkginfo_reader.logging_utils.IS_GHA", True)
    setup_logging(debug_enabled=False)

    root_logger = logging.getLogger()
    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.INFO
    stream = _capture_root_output()

    logging.getLogger("pkginfo_gha_test").info("GHA info message.")
    logging.getLogger("pkginfo_gha_test").debug("hidden")

    output = stream.getvalue()
    assert "::notice file=" in output
    assert "title=pkginfo_gha_test::GHA info message." in output
    assert "hidden" not in output


def test_setup_logging_forced_gha_debug(monkeypatch):
    monkeypatch.setattr("pkginfo_reader.logging_utils.IS_GHA", False)
    setup_logging(debug_enabled=True, force_gha_logging=True)
    assert logging.getLogger().level == logging.DEBUG
    stream = _capture_root_output()

    logging.getLogger("pkginfo_debug_test").debug("GHA debug message.")
    assert "::debug file=" in stream.getvalue()
    assert "::GHA debug message." in stream.getvalue()


def test_setup_logging_local_format(monkeypatch):
    monkeypatch.setattr("pkginfo_reader.logging_utils.IS_GHA", False)
    setup_logging(debug_enabled=True)
    stream = _capture_root_output()

    logging.getLogger("pkginfo_local_test").debug("Local debug line.")
    output = stream.getvalue()
    assert "[DEBUG   ] pkginfo_local_test" in output
    assert "Local debug line." in output
    assert "::debug" not in output


def test_setup_logging_replaces_existing_handlers(monkeypatch):
    monkeypatch.setattr("pkginfo_reader.logging_utils.IS_GHA", False)
    setup_logging()
    setup_logging()
    assert len(logging.getLogger().handlers) == 1
