"""Unit tests for structured logging setup."""

import json
import logging

import pytest

from check_dnsbl.services.logger import (
    RUN_ID,
    log_check_summary,
    log_list_check,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_root_logger():
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)


@pytest.mark.parametrize(
    "verbose,debug,level",
    [
        (False, False, logging.WARNING),
        (True, False, logging.INFO),
        (False, True, logging.DEBUG),
    ],
)
def test_setup_logging_levels(verbose, debug, level):
    """Test --verbose and --debug select the root level."""
    logger = setup_logging(verbose=verbose, debug=debug)

    assert logger.level == level
    assert len(logger.handlers) == 1


def test_logs_go_to_stderr_as_json(capsys):
    """Test log records are JSON on stderr, leaving stdout untouched."""
    setup_logging(verbose=True)

    log_check_summary(
        host="mail.example.org",
        address="192.0.2.1",
        mode="blacklist",
        total_servers=3,
        listed_servers=["a.example"],
        timed_out_servers=[],
        state="WARNING",
        duration_sec=0.2,
    )

    captured = capsys.readouterr()
    assert captured.out == ""
    record = json.loads(captured.err.strip().splitlines()[-1])
    assert record["message"] == "Check completed"
    assert record["run_id"] == RUN_ID
    assert record["level"] == "INFO"
    assert record["listed_servers"] == ["a.example"]
    assert record["timestamp"].endswith("Z")


def test_list_check_is_debug_only(capsys):
    """Test per-server records are hidden unless debugging."""
    setup_logging(verbose=True)
    log_list_check("a.example", "PRESENT", "NOERROR", "127.0.0.2", True)
    assert capsys.readouterr().err == ""

    setup_logging(debug=True)
    log_list_check("a.example", "PRESENT", "NOERROR", "127.0.0.2", True)
    record = json.loads(capsys.readouterr().err.strip())
    assert record["server"] == "a.example"
    assert record["outcome"] == "PRESENT"
