"""Job-layer reconciliation orchestrator with deterministic stage timeline diagnostics."""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from datetime import date

from portfolio_ledger.adapters import (
    LedgerInputError,
    LedgerInputRowError,
    SplitSourcePort,
    adapter_list_input_files,
    adapter_read_forced_exits,
    adapter_read_mergers,
    adapter_read_renames,
    adapter_read_transactions_file,
)
from portfolio_ledger.domain import (
    DOMAIN_STAGE_STATUS_COMPLETED,
    DOMAIN_STAGE_STATUS_FAILED,
    DOMAIN_STAGE_STATUS_STARTED,
    Transaction,
    domain_build_stage_event,
)
from portfolio_ledger.ledger import ledger_active_positions, ledger_reconcile

from .interfaces import JobExecutionResult, JobOrchestratorPort

JOB_ERROR_CODE_INPUT_FILE = "INPUT_FILE_INVALID"
JOB_ERROR_CODE_INPUT_ROW = "INPUT_ROW_INVALID"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationOrchestratorConfig:
    """Configuration values for reconciliation orchestration.

    Attributes:
        inputs_dir: Directory holding broker movement CSV files.
        renames_file: Rename map JSON path.
        mergers_file: Merger events JSON path.
        forced_exits_file: Forced exits CSV path.
        splits_start_date: Earliest split date requested from the split source.
    """

    inputs_dir: str
    renames_file: str
    mergers_file: str
    forced_exits_file: str
    splits_start_date: date


class LedgerReconciliationOrchestrator(JobOrchestratorPort):
    """Concrete job orchestrator for the file-driven reconciliation workflow."""

    _RECONCILE_JOB_NAME = "reconcile_run"

    def __init__(self, split_source: SplitSourcePort, config: ReconciliationOrchestratorConfig):
        """Initialize reconciliation orchestrator dependencies.

        Args:
            split_source: Adapter serving historical split events.
            config: Reconciliation input locations.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if split_source is None:
            raise ValueError("split_source must not be None")
        if not config.inputs_dir.strip():
            raise ValueError("config.inputs_dir must not be blank")

        self._split_source = split_source
        self._config = config

    def job_supported_names(self) -> tuple[str, ...]:
        return (self._RECONCILE_JOB_NAME,)

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Execute the reconciliation workflow and capture stage diagnostics.

        Input failures finalize the run as `failed` with a stable error code
        instead of raising, so CLI and API surfaces can report them.

        Args:
            job_name: Name of job to execute.

        Returns:
            JobExecutionResult: Final execution payload with ledger and positions.

        Raises:
            ValueError: Raised when job name is unsupported.
        """

        normalized_job_name = job_name.strip()
        if normalized_job_name != self._RECONCILE_JOB_NAME:
            raise ValueError(f"unsupported job_name={normalized_job_name}")

        timeline: list[dict[str, object]] = [
            domain_build_stage_event(stage="run", status=DOMAIN_STAGE_STATUS_STARTED),
        ]

        try:
            renames = adapter_read_renames(self._config.renames_file)
            mergers = adapter_read_mergers(self._config.mergers_file)
            exits = adapter_read_forced_exits(self._config.forced_exits_file)
            timeline.append(
                domain_build_stage_event(
                    stage="load_config",
                    status=DOMAIN_STAGE_STATUS_COMPLETED,
                    details={"rename_count": len(renames), "merger_count": len(mergers), "exit_count": len(exits)},
                )
            )

            transactions: list[Transaction] = []
            input_files = adapter_list_input_files(self._config.inputs_dir)
            for input_file in input_files:
                logger.info("reading movement file %s", input_file.name)
                transactions.extend(adapter_read_transactions_file(input_file, renames=renames))
            timeline.append(
                domain_build_stage_event(
                    stage="load_transactions",
                    status=DOMAIN_STAGE_STATUS_COMPLETED,
                    details={"file_count": len(input_files), "transaction_count": len(transactions)},
                )
            )

            tickers = sorted({transaction.ticker for transaction in transactions if transaction.ticker})
            splits = self._split_source.adapter_fetch_splits(tickers, self._config.splits_start_date)
            timeline.append(
                domain_build_stage_event(
                    stage="load_splits",
                    status=DOMAIN_STAGE_STATUS_COMPLETED,
                    details={
                        "source": self._split_source.adapter_source_name(),
                        "ticker_count": len(tickers),
                        "split_count": len(splits),
                    },
                )
            )
        except LedgerInputError as error:
            error_code = JOB_ERROR_CODE_INPUT_ROW if isinstance(error, LedgerInputRowError) else JOB_ERROR_CODE_INPUT_FILE
            logger.error("reconciliation input failure code=%s source=%s: %s", error_code, error.source_path, error)
            timeline.append(
                domain_build_stage_event(
                    stage="run",
                    status=DOMAIN_STAGE_STATUS_FAILED,
                    details={
                        "error_code": error_code,
                        "error_type": type(error).__name__,
                        "error_message": str(error),
                        "source_path": error.source_path,
                        "row_number": getattr(error, "row_number", None),
                        "traceback": traceback.format_exc(),
                    },
                )
            )
            return JobExecutionResult(
                job_name=normalized_job_name,
                status="failed",
                diagnostics=timeline,
                error_code=error_code,
            )

        ledger = ledger_reconcile(transactions, splits, mergers, exits)
        virtual_count = sum(1 for item in ledger if item.is_virtual)
        timeline.append(
            domain_build_stage_event(
                stage="reconcile",
                status=DOMAIN_STAGE_STATUS_COMPLETED,
                details={"ledger_row_count": len(ledger), "virtual_row_count": virtual_count},
            )
        )

        positions = ledger_active_positions(ledger)
        timeline.append(
            domain_build_stage_event(
                stage="compile_holdings",
                status=DOMAIN_STAGE_STATUS_COMPLETED,
                details={"open_position_count": len(positions)},
            )
        )
        timeline.append(domain_build_stage_event(stage="run", status="success"))
        logger.info(
            "reconciled %s transactions into %s ledger rows (%s virtual), %s open positions",
            len(transactions),
            len(ledger),
            virtual_count,
            len(positions),
        )

        return JobExecutionResult(
            job_name=normalized_job_name,
            status="success",
            ledger=tuple(ledger),
            positions=tuple(positions),
            diagnostics=timeline,
        )
