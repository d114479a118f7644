"""Structured JSON logging.

Log records go to stderr; stdout is reserved for the plugin status line.
"""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


# Run ID for correlation across log entries of one invocation
RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds run_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = (
            datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        )
        log_record["run_id"] = RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the plugin.

    Args:
        verbose: Log INFO records.
        debug: Log DEBUG records (implies verbose).

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    if debug:
        logger.setLevel(logging.DEBUG)
    elif verbose:
        logger.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.WARNING)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(sys.stderr)
    formatter = CustomJsonFormatter("%(message)s")
    json_handler.setFormatter(formatter)
    logger.addHandler(json_handler)

    # dnspython logs nothing useful below WARNING
    logging.getLogger("dns").setLevel(logging.WARNING)

    return logger


def log_list_check(
    server: str,
    outcome: str,
    status: str,
    address: str | None,
    listed: bool,
) -> None:
    """Log structured per-server check result.

    Args:
        server: List server domain queried.
        outcome: Classified outcome (PRESENT, ABSENT, TIMED_OUT, QUERY_ERROR).
        status: Raw terminal query status.
        address: Returned address, if any.
        listed: Whether the outcome counts as listed in the current mode.
    """
    logger = logging.getLogger(__name__)
    logger.debug(
        "List server checked",
        extra={
            "server": server,
            "outcome": outcome,
            "status": status,
            "address": address,
            "listed": listed,
        },
    )


def log_check_summary(
    host: str,
    address: str,
    mode: str,
    total_servers: int,
    listed_servers: list[str],
    timed_out_servers: list[str],
    state: str,
    duration_sec: float,
) -> None:
    """Log check completion summary.

    Args:
        host: Target host as given.
        address: Address used for list-server queries.
        mode: "blacklist" or "whitelist".
        total_servers: Number of list servers queried.
        listed_servers: Servers counted as listed.
        timed_out_servers: Servers that timed out.
        state: Resulting service state.
        duration_sec: Total check time in seconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Check completed",
        extra={
            "host": host,
            "address": address,
            "mode": mode,
            "total_servers": total_servers,
            "listed_servers": listed_servers,
            "timed_out_servers": timed_out_servers,
            "state": state,
            "duration_sec": duration_sec,
        },
    )
