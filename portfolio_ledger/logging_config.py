"""Process-wide logging configuration for CLI and API entrypoints."""

import logging
import sys

_LOGGING_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOGGING_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def logging_configure(level: str = "INFO") -> None:
    """Configure root logging to stdout with the service log format.

    Repeated calls replace the previously installed service handler instead of
    stacking duplicates.

    Args:
        level: Root logging level name.

    Returns:
        None: Configures logging as side effect.

    Raises:
        ValueError: Raised when the level name is unknown.
    """

    root_logger = logging.getLogger()
    for existing_handler in list(root_logger.handlers):
        if getattr(existing_handler, "_portfolio_ledger_handler", False):
            root_logger.removeHandler(existing_handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOGGING_FORMAT, datefmt=_LOGGING_DATE_FORMAT))
    handler._portfolio_ledger_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
