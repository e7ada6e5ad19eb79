"""Tests for the GCS object store."""

from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import Forbidden

from src.adapters.storage.base import ObjectStoreError
from src.adapters.storage.gcs import GCSObjectStore


class TestGCSObjectStore:
    def test_put_object(self):
        client = MagicMock()
        blob = client.bucket.return_value.blob.return_value
        store = GCSObjectStore(bucket_name="creatives", client=client)

        store.put_object("1/b_u/b.html", "<html></html>", "text/html")

        client.bucket.assert_called_once_with("creatives")
        client.bucket.return_value.blob.assert_called_once_with("1/b_u/b.html")
        blob.upload_from_string.assert_called_once_with("<html></html>", content_type="text/html")

    def test_api_error_wrapped(self):
        client = MagicMock()
        client.bucket.return_value.blob.return_value.upload_from_string.side_effect = Forbidden("nope")
        store = GCSObjectStore(bucket_name="creatives", client=client)

        with pytest.raises(ObjectStoreError) as exc_info:
            store.put_object("k", b"x", "image/png")

        assert exc_info.value.store == "gcs"
        assert isinstance(exc_info.value.__cause__, Forbidden)
