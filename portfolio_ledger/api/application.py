"""FastAPI application factory for the ledger reconciliation service."""

from fastapi import FastAPI

from portfolio_ledger.config import AppSettings
from portfolio_ledger.domain import AppMetadata
from portfolio_ledger.jobs import JobOrchestratorPort

from .routers import api_create_health_router, api_create_ledger_router

_API_APPLICATION_NAME = "portfolio-ledger"


def create_api_application(
    settings: AppSettings,
    reconciliation_orchestrator: JobOrchestratorPort | None = None,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        reconciliation_orchestrator: Optional job orchestrator for file-driven runs.

    Returns:
        FastAPI: Framework application instance with ledger routes.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """
    metadata = AppMetadata(application_name=_API_APPLICATION_NAME, environment_name=settings.environment_name)
    application = FastAPI(title="Portfolio Ledger")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service index response."""

        return {
            "service": metadata.application_name,
            "status": "ready",
            "environment": metadata.environment_name,
        }

    application.include_router(api_create_health_router(metadata=metadata))
    application.include_router(
        api_create_ledger_router(
            settings=settings,
            reconciliation_orchestrator=reconciliation_orchestrator,
        )
    )

    return application
