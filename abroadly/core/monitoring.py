"""
Monitoring and Tracing Configuration Module.

This module wires Pydantic Logfire into the application when it is enabled
through settings. Once configured it traces:
- FastAPI request handling
- SQLAlchemy queries
- Outgoing httpx requests
- Pydantic AI model calls used by the AI service

When Logfire is disabled (the default) nothing is configured and the
application relies on standard logging only.
"""

from typing import Optional

import logfire
from fastapi import FastAPI

from abroadly.core.logging_config import get_logger
from abroadly.server.core.config import LogfireConfig, settings

logger = get_logger(__name__)


def initialize_logfire(app: Optional[FastAPI] = None, config: Optional[LogfireConfig] = None) -> bool:
    """
    Initialize Logfire for monitoring and tracing.

    Args:
        app: FastAPI application to instrument (optional).
        config: Logfire configuration, defaults to the application settings.

    Returns:
        True when Logfire was configured, False when it is disabled or misconfigured.
    """
    config = config or settings.logfire
    if not config.enabled:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not config.token:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set. Monitoring will not work.")
        return False

    logfire.configure(
        token=config.token,
        service_name=config.service_name,
        environment=config.environment,
    )

    instrumentations = {
        "Pydantic AI": logfire.instrument_pydantic_ai,
        "SQLAlchemy": logfire.instrument_sqlalchemy,
        "HTTPX": logfire.instrument_httpx,
    }
    for name, instrument in instrumentations.items():
        try:
            instrument()
            logger.info(f"Logfire: {name} instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument {name}: {e}")

    if app is not None:
        try:
            logfire.instrument_fastapi(app=app)
            logger.info("Logfire: FastAPI instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument FastAPI: {e}")

    logger.info(f"Logfire monitoring initialized: environment={config.environment}, service={config.service_name}")
    return True
