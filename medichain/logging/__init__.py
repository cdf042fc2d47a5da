"""
Logging Module
==============

Structured logging using structlog with JSON output for production
and colored console output for development.

Usage:
    from medichain.logging import get_logger, setup_logging

    # Setup at application start
    setup_logging()

    # Get logger for a module
    logger = get_logger(__name__)

    # Log with context
    logger.info("ledger_contract_loaded", address="0x...", network_id="5777")
    logger.warning("content_store_fallback_to_simulation", reason=str(e))
"""

from medichain.logging.logger import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)


__all__ = [
    "get_logger",
    "setup_logging",
    "bind_context",
    "clear_context",
]
