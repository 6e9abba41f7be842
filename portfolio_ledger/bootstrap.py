"""Application bootstrap wiring for startup validation and dependency assembly."""

from datetime import date

from fastapi import FastAPI

from portfolio_ledger.adapters import SplitSourcePort, StaticFileSplitSource, YahooFinanceSplitSource
from portfolio_ledger.api import create_api_application
from portfolio_ledger.config import AppSettings, config_load_settings
from portfolio_ledger.jobs import LedgerReconciliationOrchestrator, ReconciliationOrchestratorConfig


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    return create_api_application(
        settings=resolved_settings,
        reconciliation_orchestrator=bootstrap_create_reconciliation_orchestrator(resolved_settings),
    )


def bootstrap_create_reconciliation_orchestrator(
    settings: AppSettings | None = None,
) -> LedgerReconciliationOrchestrator:
    """Build reconciliation orchestrator for CLI and HTTP trigger surfaces.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        LedgerReconciliationOrchestrator: Fully wired reconciliation orchestrator.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    return LedgerReconciliationOrchestrator(
        split_source=bootstrap_create_split_source(resolved_settings),
        config=ReconciliationOrchestratorConfig(
            inputs_dir=resolved_settings.inputs_dir,
            renames_file=resolved_settings.renames_file,
            mergers_file=resolved_settings.mergers_file,
            forced_exits_file=resolved_settings.forced_exits_file,
            splits_start_date=date.fromisoformat(resolved_settings.splits_start_date),
        ),
    )


def bootstrap_create_split_source(settings: AppSettings) -> SplitSourcePort:
    """Build the split history adapter selected by `split_source`.

    Args:
        settings: Loaded runtime settings.

    Returns:
        SplitSourcePort: File-backed or Yahoo Finance split source.

    Raises:
        ValueError: Raised when the configured split source is unknown.
    """

    if settings.split_source == "file":
        return StaticFileSplitSource(splits_path=settings.splits_file)
    if settings.split_source == "yahoo":
        return YahooFinanceSplitSource()
    raise ValueError(f"unsupported split_source={settings.split_source}")
