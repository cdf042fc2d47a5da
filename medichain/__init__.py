"""
MediChain Connectivity Library
==============================

Start-up negotiation of the MediChain contract and the IPFS record
store, with in-memory simulations standing in for whichever backend is
unavailable.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - ledger: MediChain contract interface (web3/simulated)
    - storage: Content store interface (IPFS/simulated)
    - session: Wallet account and login token
    - orchestrator: One-shot resolution of both backends

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "MediChain Team"

from medichain.config import settings
from medichain.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
