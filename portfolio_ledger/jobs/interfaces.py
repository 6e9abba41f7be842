"""Typed interfaces for job-layer orchestration responsibilities."""

from dataclasses import dataclass, field
from typing import Protocol

from portfolio_ledger.domain import LedgerItem, PositionSummary


@dataclass(frozen=True)
class JobExecutionResult:
    """Result contract for one reconciliation workflow execution.

    Attributes:
        job_name: Job identifier.
        status: Final execution state (`success` or `failed`).
        ledger: Reconciled ledger rows; empty when the run failed.
        positions: Open positions compiled from the ledger.
        diagnostics: Stage timeline events captured during the run.
        error_code: Stable failure code when the run failed.
    """

    job_name: str
    status: str
    ledger: tuple[LedgerItem, ...] = ()
    positions: tuple[PositionSummary, ...] = ()
    diagnostics: list[dict[str, object]] = field(default_factory=list)
    error_code: str | None = None


class JobOrchestratorPort(Protocol):
    """Port definition for orchestrating reconciliation jobs."""

    def job_supported_names(self) -> tuple[str, ...]:
        """Return the set of workflow names this orchestrator can execute.

        Returns:
            tuple[str, ...]: Deterministic list of supported job names.

        Raises:
            RuntimeError: Raised when supported job metadata is unavailable.
        """

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Execute one named workflow in the job layer.

        Args:
            job_name: Workflow name.

        Returns:
            JobExecutionResult: Final execution status payload.

        Raises:
            ValueError: Raised when the job name is unsupported.
        """
