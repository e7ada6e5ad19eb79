"""Amazon S3 object store."""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.adapters.storage.base import ObjectStore, ObjectStoreError

logger = logging.getLogger(__name__)


class S3ObjectStore(ObjectStore):
    """Publishes objects to an S3 bucket with a canned ACL.

    Attributes:
        bucket: Target bucket name
        acl: Canned ACL set on every object (e.g., "public-read")
        client: boto3 S3 client
    """

    store_name = "s3"

    def __init__(
        self,
        bucket: str,
        acl: str = "public-read",
        client: Any = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        region: str | None = None,
    ):
        self.bucket = bucket
        self.acl = acl
        self.client = client or create_s3_client(access_key_id, secret_access_key, region)

    def put_object(self, key: str, body: bytes | str, content_type: str) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")

        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ACL=self.acl,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise ObjectStoreError(f"S3 upload of {key} failed: {e}", store=self.store_name, key=key) from e

        logger.debug("Uploaded s3://%s/%s", self.bucket, key)


def create_s3_client(
    access_key_id: str | None = None,
    secret_access_key: str | None = None,
    region: str | None = None,
) -> Any:
    """Create a boto3 S3 client.

    Unset credentials fall back to the default boto3 credential chain.
    """
    config = {
        "aws_access_key_id": access_key_id,
        "aws_secret_access_key": secret_access_key,
        "region_name": region,
    }
    return boto3.client("s3", **{k: v for k, v in config.items() if v is not None})
