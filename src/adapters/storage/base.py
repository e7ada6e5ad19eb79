"""Base class for remote object stores creatives are published to."""

from abc import ABC, abstractmethod


class ObjectStoreError(Exception):
    """Raised when a remote store rejects or fails an upload."""

    def __init__(self, message: str, store: str | None = None, key: str | None = None):
        super().__init__(message)
        self.store = store
        self.key = key


class ObjectStore(ABC):
    """A bucket-like store addressed by object key.

    Implementations fail fast: errors propagate as ObjectStoreError and are
    never retried here.
    """

    # Override in subclasses
    store_name: str = "unknown"

    @abstractmethod
    def put_object(self, key: str, body: bytes | str, content_type: str) -> None:
        """Upload one object.

        Args:
            key: Object key inside the bucket
            body: Object content; text is uploaded UTF-8 encoded
            content_type: MIME type stored with the object

        Raises:
            ObjectStoreError: If the upload fails
        """
