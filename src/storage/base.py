from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised when an object could not be written to storage."""


class ObjectStorage(ABC):
    @abstractmethod
    async def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Write ``content`` at ``path``, replacing any existing object."""
        raise NotImplementedError

    @abstractmethod
    def public_url(self, path: str) -> str | None:
        """Publicly resolvable URL for ``path``, or None if there is none."""
        raise NotImplementedError
