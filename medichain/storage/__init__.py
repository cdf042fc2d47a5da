"""
Storage Module
==============

Content-addressed storage for medical record files.

Supports:
- IPFS (local node HTTP RPC API)
- Simulated (in-memory stand-in when no node answers)

Usage:
    from medichain.storage import ContentStoreResolver

    store = await ContentStoreResolver().resolve()
    cid = await store.store(b"...")
    content = await store.retrieve(cid)
"""

from medichain.storage.client import ContentStore
from medichain.storage.ipfs import IPFSContentStore
from medichain.storage.mock import CID_PREFIX, SimulatedContentStore
from medichain.storage.resolver import ContentStoreResolver

__all__ = [
    "ContentStore",
    "ContentStoreResolver",
    "IPFSContentStore",
    "SimulatedContentStore",
    "CID_PREFIX",
]
