from __future__ import annotations

import logging
from io import StringIO

from offer_funnel.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    """Test that setup_logging creates a logger with labeled format."""
    reset_logging()
    logger = setup_logging()

    assert logger.name == "offer_funnel"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    reset_logging()
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1
    assert get_logger() is first


def test_logging_labeled_prefixes():
    """Outputs carry INFO|WARN|ERROR|SUMMARY prefixes."""
    captured_output = StringIO()
    logger = logging.getLogger("test_offer_funnel_labels")
    logger.setLevel(logging.INFO)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("hello")
    logger.warning("careful")
    logger.error("broken")
    logger.log(SUMMARY_LEVEL, "sheets=1/1")

    lines = captured_output.getvalue().splitlines()
    assert lines == ["INFO hello", "WARN careful", "ERROR broken", "SUMMARY sheets=1/1"]


def test_module_loggers_propagate_into_app_logger(capsys):
    reset_logging()
    setup_logging()
    logging.getLogger(f"{LOGGER_NAME}.services.orchestrator").warning("sheet mismatch")
    log_summary("offers=3")
    out = capsys.readouterr().out
    assert "WARN sheet mismatch" in out
    assert "SUMMARY offers=3" in out
