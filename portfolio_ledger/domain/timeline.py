"""Run-diagnostics stage event helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

DOMAIN_STAGE_STATUS_STARTED = "started"
DOMAIN_STAGE_STATUS_COMPLETED = "completed"
DOMAIN_STAGE_STATUS_FAILED = "failed"


def domain_build_stage_event(
    stage: str,
    status: str,
    details: dict[str, Any] | None = None,
    at_utc: datetime | None = None,
) -> dict[str, object]:
    """Build one structured run-diagnostics stage event.

    Args:
        stage: Reconciliation run stage name.
        status: Stage status marker (`started`, `completed`, `failed`).
        details: Optional structured details such as row counters.
        at_utc: Optional event instant; defaults to the current UTC time.

    Returns:
        dict[str, object]: JSON-serializable stage event.

    Raises:
        ValueError: Raised when stage or status is blank.
    """

    if not stage.strip():
        raise ValueError("stage must not be blank")
    if not status.strip():
        raise ValueError("status must not be blank")

    event_instant = at_utc or datetime.now(timezone.utc)
    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": event_instant.isoformat(),
    }
    if details is not None:
        event_payload["details"] = details
    return event_payload
