#!/usr/bin/env python3
"""
Connectivity Check Script
=========================

Run the start-up negotiation once and report which backend each handle
resolved to.

Usage:
    python scripts/check_connectivity.py
    python scripts/check_connectivity.py --provider-url http://localhost:8545
    python scripts/check_connectivity.py --ipfs-url http://127.0.0.1:5001/api/v0 --timeout-ms 1000
    python scripts/check_connectivity.py --strict

Version: 0.1.0
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from medichain.logging import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False, service_name="check-connectivity")
logger = get_logger(__name__)


async def main(args: argparse.Namespace) -> int:
    """Resolve both backends and print a summary."""
    from medichain.ledger import LedgerResolver
    from medichain.orchestrator import ConnectivityOrchestrator
    from medichain.storage import ContentStoreResolver

    timeout = args.timeout_ms / 1000 if args.timeout_ms else None
    orchestrator = ConnectivityOrchestrator(
        ledger_resolver=LedgerResolver(provider_url=args.provider_url),
        store_resolver=ContentStoreResolver(url=args.ipfs_url, timeout=timeout),
    )

    try:
        await orchestrator.start()
        health = await orchestrator.status()
    finally:
        await orchestrator.close()

    logger.info("=" * 60)
    logger.info("Connectivity Summary")
    logger.info("=" * 60)

    degraded = []
    for outcome in orchestrator.outcomes:
        target = outcome.address or outcome.endpoint
        logger.info(f"  {outcome.backend}: {outcome.mode} ({target})")
        if outcome.degraded:
            logger.info(f"    fell back at {outcome.failed_stage}: {outcome.reason}")
            degraded.append(outcome.backend)

    if not health.is_healthy:
        logger.error(f"\nUnhealthy components: {health.components}")
        return 1

    if degraded and args.strict:
        logger.error(f"\nRunning on simulations: {', '.join(degraded)}")
        return 1

    logger.info("\nApplication ready.")
    return 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Check MediChain ledger and IPFS connectivity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--provider-url",
        default=None,
        help="JSON-RPC node URL (default: LEDGER_PROVIDER_URL, else LEDGER_FALLBACK_URL)",
    )
    parser.add_argument(
        "--ipfs-url",
        default=None,
        help="IPFS RPC API URL (default: IPFS_URL)",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="IPFS probe timeout in milliseconds (default: IPFS_TIMEOUT_MS)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero if either backend fell back to its simulation",
    )

    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    exit_code = asyncio.run(main(args))
    sys.exit(exit_code)
