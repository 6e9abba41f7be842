"""Job layer package for reconciliation workflow orchestration."""

from .interfaces import JobExecutionResult, JobOrchestratorPort
from .reconciliation_orchestrator import (
    JOB_ERROR_CODE_INPUT_FILE,
    JOB_ERROR_CODE_INPUT_ROW,
    LedgerReconciliationOrchestrator,
    ReconciliationOrchestratorConfig,
)

__all__ = [
    "JobExecutionResult",
    "JobOrchestratorPort",
    "JOB_ERROR_CODE_INPUT_FILE",
    "JOB_ERROR_CODE_INPUT_ROW",
    "LedgerReconciliationOrchestrator",
    "ReconciliationOrchestratorConfig",
]
