"""Ledger API router composition for reconciliation endpoints."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from portfolio_ledger.config import AppSettings
from portfolio_ledger.domain import LedgerItem, PositionSummary, domain_normalize_ticker
from portfolio_ledger.jobs import JobOrchestratorPort
from portfolio_ledger.ledger import ledger_active_positions, ledger_reconcile

from ..schemas import NormalizeTickerRequest, ReconcileRequest


def api_create_ledger_router(
    settings: AppSettings,
    reconciliation_orchestrator: JobOrchestratorPort | None = None,
) -> APIRouter:
    """Create ledger router exposing reconciliation APIs.

    Args:
        settings: Runtime settings used for request limits.
        reconciliation_orchestrator: Optional orchestrator for file-driven runs.

    Returns:
        APIRouter: Router exposing ledger endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    router = APIRouter(prefix="/ledger", tags=["ledger"])

    @router.post("/reconcile")
    def api_ledger_reconcile(request: ReconcileRequest) -> JSONResponse:
        """Reconcile submitted trades and corporate actions into one ledger.

        Args:
            request: Trades, splits, mergers and forced exits.

        Returns:
            JSONResponse: Ledger rows, open positions and summary counters.

        Raises:
            RuntimeError: Raised when reconciliation fails unexpectedly.
        """

        event_count = request.total_event_count()
        if event_count > settings.api_max_events:
            payload = {
                "status": "error",
                "code": "TOO_MANY_EVENTS",
                "message": f"request carries {event_count} events, limit is {settings.api_max_events}",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        ledger = ledger_reconcile(
            [item.to_domain() for item in request.transactions],
            [item.to_domain() for item in request.splits],
            [item.to_domain() for item in request.mergers],
            [item.to_domain() for item in request.exits],
        )
        positions = ledger_active_positions(ledger)
        payload = api_serialize_ledger_payload(ledger, positions)
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/normalize-ticker")
    def api_ledger_normalize_ticker(request: NormalizeTickerRequest) -> JSONResponse:
        """Return the market-qualified form of one raw ticker."""

        payload = {"ticker": request.ticker, "normalized": domain_normalize_ticker(request.ticker)}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/run")
    def api_ledger_run_trigger() -> JSONResponse:
        """Trigger one file-driven reconciliation run.

        Returns:
            JSONResponse: Run result payload, or 503 when no orchestrator is wired.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

        if reconciliation_orchestrator is None:
            payload = {
                "status": "error",
                "code": "RUN_UNAVAILABLE",
                "message": "file-driven reconciliation is not configured",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        execution_result = reconciliation_orchestrator.job_execute(job_name="reconcile_run")
        payload: dict[str, object] = {
            "job_name": execution_result.job_name,
            "status": execution_result.status,
            "error_code": execution_result.error_code,
            "diagnostics": execution_result.diagnostics,
        }
        if execution_result.status != "success":
            return JSONResponse(content=payload, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)

        payload.update(api_serialize_ledger_payload(list(execution_result.ledger), list(execution_result.positions)))
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_serialize_ledger_payload(ledger: list[LedgerItem], positions: list[PositionSummary]) -> dict[str, object]:
    """Serialize ledger rows and positions into the reconcile response envelope.

    Args:
        ledger: Reconciled ledger rows.
        positions: Open positions.

    Returns:
        dict[str, object]: JSON-serializable response payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    virtual_count = sum(1 for item in ledger if item.is_virtual)
    return {
        "items": [api_serialize_ledger_item(item) for item in ledger],
        "positions": [
            {"ticker": position.ticker, "quantity": api_serialize_decimal(position.quantity)} for position in positions
        ],
        "summary": {
            "row_count": len(ledger),
            "virtual_row_count": virtual_count,
            "real_row_count": len(ledger) - virtual_count,
            "open_position_count": len(positions),
        },
    }


def api_serialize_ledger_item(item: LedgerItem) -> dict[str, object]:
    """Serialize one ledger row to JSON payload."""

    return {
        "date": item.date.isoformat(),
        "type": item.type.value,
        "ticker": item.ticker,
        "quantity": api_serialize_decimal(item.quantity),
        "unit_price": api_serialize_decimal(item.unit_price),
        "total_value": api_serialize_decimal(item.total_value),
        "source_file": item.source_file,
        "transaction_id": item.transaction_id,
        "is_virtual": item.is_virtual,
    }


def api_serialize_decimal(value: Decimal) -> str:
    """Render a decimal as plain fixed-point text without trailing zeros."""

    if not value.is_finite():
        return str(value)
    return format(value.normalize(), "f")


__all__ = [
    "api_create_ledger_router",
    "api_serialize_ledger_payload",
    "api_serialize_ledger_item",
    "api_serialize_decimal",
]
