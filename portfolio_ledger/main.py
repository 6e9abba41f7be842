"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or runs one file-driven reconciliation.
"""

import argparse

import uvicorn

from portfolio_ledger.bootstrap import bootstrap_create_application, bootstrap_create_reconciliation_orchestrator
from portfolio_ledger.config import config_load_settings
from portfolio_ledger.jobs import JobExecutionResult
from portfolio_ledger.logging_config import logging_configure


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a reconciliation run fails.
    """

    argument_parser = argparse.ArgumentParser(description="Portfolio ledger runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "reconcile-run"),
        help="Runtime command: `api` starts server, `reconcile-run` rebuilds the ledger from input files",
        type=str,
    )
    argument_parser.add_argument(
        "--inputs-dir",
        dest="inputs_dir",
        type=str,
        help="Optional movement-file directory override for `reconcile-run`",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    if parsed_arguments.inputs_dir:
        settings = settings.model_copy(update={"inputs_dir": parsed_arguments.inputs_dir.strip()})
    logging_configure(settings.log_level)

    if parsed_arguments.command == "reconcile-run":
        orchestrator = bootstrap_create_reconciliation_orchestrator(settings)
        execution_result = orchestrator.job_execute(job_name="reconcile_run")
        main_print_run_summary(execution_result)
        if execution_result.status != "success":
            raise SystemExit(1)
        return

    application = bootstrap_create_application(settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_print_run_summary(execution_result: JobExecutionResult) -> None:
    """Print a short reconciliation run summary to stdout.

    Args:
        execution_result: Finished reconciliation run result.

    Returns:
        None: Prints summary lines as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if execution_result.status != "success":
        print("RECONCILE_FAILED:", execution_result.error_code or "UNKNOWN")
        return

    virtual_count = sum(1 for item in execution_result.ledger if item.is_virtual)
    print(f"Ledger rows: {len(execution_result.ledger)} ({virtual_count} virtual)")
    for position in execution_result.positions:
        print(f"{position.ticker}\t{position.quantity}")


if __name__ == "__main__":
    main()
