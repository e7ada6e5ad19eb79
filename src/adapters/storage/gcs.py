"""Google Cloud Storage object store."""

import logging
from typing import Any

from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage

from src.adapters.storage.base import ObjectStore, ObjectStoreError

logger = logging.getLogger(__name__)


class GCSObjectStore(ObjectStore):
    """Publishes objects to a GCS bucket."""

    store_name = "gcs"

    def __init__(self, bucket_name: str, client: Any = None):
        self.bucket_name = bucket_name
        self.client = client or storage.Client()

    def put_object(self, key: str, body: bytes | str, content_type: str) -> None:
        blob = self.client.bucket(self.bucket_name).blob(key)
        try:
            blob.upload_from_string(body, content_type=content_type)
        except GoogleAPIError as e:
            raise ObjectStoreError(f"GCS upload of {key} failed: {e}", store=self.store_name, key=key) from e

        logger.debug("Uploaded gs://%s/%s", self.bucket_name, key)
