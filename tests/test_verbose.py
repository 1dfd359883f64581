"""Tests for verbose logging."""

import logging

from matchtree.matchers import be_gt, equal
from matchtree.verbose import setup_logger


def test_logger_creates_debug_log(tmp_path):
    debug_file = tmp_path / "logs" / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_matcher_modules_log_under_the_package_logger(tmp_path):
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file=debug_file)

    equal(1).match(2)

    content = debug_file.read_text()
    assert "equal matched=False" in content
    assert "matchtree.matchers.base" in content


def test_precondition_violations_log_a_warning(tmp_path):
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file=debug_file)

    try:
        be_gt(1).match("a")
    except Exception:
        pass

    assert "WARNING" in debug_file.read_text()


def test_verbose_mode_adds_stderr_handler(tmp_path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    assert len(logger.handlers) == 2
    handler_types = [type(h).__name__ for h in logger.handlers]
    assert "StreamHandler" in handler_types
    assert "FileHandler" in handler_types


def test_verbose_without_file_only_logs_to_stderr():
    logger = setup_logger(verbose=True)
    assert [type(h).__name__ for h in logger.handlers] == ["StreamHandler"]


def test_repeated_setup_does_not_duplicate_handlers(tmp_path):
    setup_logger(debug_file=tmp_path / "debug.log")
    logger = setup_logger(debug_file=tmp_path / "debug.log")
    assert len(logger.handlers) == 1


def test_separate_logger_names_are_independent(tmp_path):
    first = setup_logger(debug_file=tmp_path / "a.log", logger_name="matchtree.first")
    second = setup_logger(debug_file=tmp_path / "b.log", logger_name="matchtree.second")
    first.info("only in a")
    assert "only in a" in (tmp_path / "a.log").read_text()
    assert "only in a" not in (tmp_path / "b.log").read_text()
    assert first is not second
