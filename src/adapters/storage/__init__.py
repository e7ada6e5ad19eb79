"""Remote object stores for published creatives."""

import logging

from src.adapters.storage.base import ObjectStore, ObjectStoreError
from src.core.config import UploadSettings

logger = logging.getLogger(__name__)


def build_object_stores(settings: UploadSettings) -> list[ObjectStore]:
    """Create the stores a bundle is published to, primary store first.

    S3 is always used. GCS mirrors the upload when enabled in settings.
    """
    from src.adapters.storage.s3 import S3ObjectStore

    stores: list[ObjectStore] = [
        S3ObjectStore(
            bucket=settings.s3_bucket,
            acl=settings.s3_acl,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            region=settings.s3_region,
        )
    ]

    if settings.mirror_to_gcs:
        from src.adapters.storage.gcs import GCSObjectStore

        stores.append(GCSObjectStore(bucket_name=settings.gcs_bucket))

    logger.debug("Configured object stores: %s", [store.store_name for store in stores])
    return stores


__all__ = [
    "ObjectStore",
    "ObjectStoreError",
    "build_object_stores",
]
