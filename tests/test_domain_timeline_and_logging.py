"""Tests for run-diagnostics stage events and logging configuration."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from portfolio_ledger.domain import domain_build_stage_event
from portfolio_ledger.logging_config import logging_configure


def test_domain_build_stage_event_includes_details_and_instant() -> None:
    """Build a stage event with explicit instant and details.

    Returns:
        None: Assertions validate event payload.

    Raises:
        AssertionError: Raised when event payload deviates.
    """

    event = domain_build_stage_event(
        stage="reconcile",
        status="completed",
        details={"ledger_row_count": 3},
        at_utc=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )

    assert event == {
        "stage": "reconcile",
        "status": "completed",
        "at_utc": "2024-01-02T03:04:05+00:00",
        "details": {"ledger_row_count": 3},
    }


def test_domain_build_stage_event_rejects_blank_stage() -> None:
    """Reject blank stage names."""

    with pytest.raises(ValueError):
        domain_build_stage_event(stage=" ", status="started")


def test_logging_configure_installs_single_service_handler() -> None:
    """Replace the service handler on repeated configuration.

    Returns:
        None: Assertions validate handler installation.

    Raises:
        AssertionError: Raised when handlers stack or level is ignored.
    """

    root_logger = logging.getLogger()
    original_level = root_logger.level
    try:
        logging_configure("debug")
        logging_configure("warning")

        service_handlers = [
            handler for handler in root_logger.handlers if getattr(handler, "_portfolio_ledger_handler", False)
        ]
        assert len(service_handlers) == 1
        assert root_logger.level == logging.WARNING
    finally:
        for handler in list(root_logger.handlers):
            if getattr(handler, "_portfolio_ledger_handler", False):
                root_logger.removeHandler(handler)
        root_logger.setLevel(original_level)
