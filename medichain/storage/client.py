"""
Content Store Interface
=======================

Abstract base class for the content-addressed record store.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from typing import Any

from medichain.config import StoreMode


class ContentStore(ABC):
    """
    Abstract base class for content stores.

    ``store`` returns the content identifier (CID) of the uploaded bytes;
    ``retrieve`` returns the bytes behind a CID.
    """

    @property
    @abstractmethod
    def mode(self) -> StoreMode:
        """Which backend this handle talks to."""
        ...

    @abstractmethod
    async def store(self, content: bytes) -> str:
        """
        Upload content.

        Args:
            content: Raw bytes to store

        Returns:
            Content identifier
        """
        ...

    @abstractmethod
    async def retrieve(self, cid: str) -> bytes:
        """
        Download content.

        Args:
            cid: Content identifier returned by ``store``

        Returns:
            Stored bytes
        """
        ...

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        """Check store health."""
        ...

    async def close(self) -> None:
        """Release transport resources."""
        return None
