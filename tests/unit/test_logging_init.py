from __future__ import annotations

import logging
from io import StringIO

import csv_preview.logging.init as log_init
from csv_preview.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


def _capture_logger(name: str) -> tuple[logging.Logger, StringIO]:
    captured = StringIO()
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger, captured


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    logger, captured = _capture_logger("test_csv_preview_labels")
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_child_module_loggers_use_application_handler(capsys):
    setup_logging()
    logging.getLogger("csv_preview.services.session").warning("from child")
    assert "WARN from child" in capsys.readouterr().out


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert get_logger() is logger1


def test_set_debug_lowers_levels():
    logger = setup_logging()
    set_debug(logger)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)


def test_log_summary_convenience_function():
    logger, captured = _capture_logger(LOGGER_NAME)
    log_init._logger = logger

    log_summary("files=2/2 parsed=2 failed=0 valid=1 needs_review=1 rows=15 elapsed_sec=0.5")

    assert captured.getvalue().strip() == (
        "SUMMARY files=2/2 parsed=2 failed=0 valid=1 needs_review=1 rows=15 elapsed_sec=0.5"
    )
