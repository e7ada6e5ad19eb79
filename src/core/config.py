"""Uploader configuration loaded from RICH_MEDIA_* environment variables."""

import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.bundles import BundleType, parse_bundle_type

logger = logging.getLogger(__name__)

ENV_PREFIX = "RICH_MEDIA_"


class UploadSettings(BaseModel):
    """Settings for validating and publishing rich media bundles."""

    model_config = ConfigDict(extra="forbid")

    s3_bucket: str = Field(description="Bucket creatives are published to")
    s3_region: str | None = Field(default=None, description="AWS region of the bucket")
    s3_access_key_id: str | None = Field(default=None, description="Access key; default credential chain if unset")
    s3_secret_access_key: str | None = Field(default=None, description="Secret matching s3_access_key_id")
    s3_acl: str = Field(default="public-read", description="Canned ACL applied to every uploaded object")

    gcs_bucket: str | None = Field(default=None, description="Optional GCS bucket mirroring the S3 upload")
    upload_to_gcs: bool = Field(default=False, description="Also publish bundles to gcs_bucket")

    base_name_check_types: frozenset[BundleType] = Field(
        default=frozenset({BundleType.CONVERSION}),
        description="Bundle types whose root .html name must appear in the upload name",
    )
    work_dir: str | None = Field(default=None, description="Parent directory for temporary upload folders")

    @field_validator("base_name_check_types", mode="before")
    @classmethod
    def parse_check_types(cls, value: Any) -> Any:
        """Accept comma-separated exporter names from the environment."""
        if isinstance(value, str):
            return frozenset(parse_bundle_type(item) for item in value.split(",") if item.strip())
        return value

    @property
    def mirror_to_gcs(self) -> bool:
        return self.upload_to_gcs and bool(self.gcs_bucket)


def load_upload_settings(environ: Mapping[str, str] | None = None) -> UploadSettings:
    """Build UploadSettings from environment variables.

    RICH_MEDIA_S3_BUCKET maps to s3_bucket, RICH_MEDIA_UPLOAD_TO_GCS to
    upload_to_gcs, and so on.

    Args:
        environ: Mapping to read instead of os.environ

    Raises:
        pydantic.ValidationError: If a value is missing or invalid
    """
    environ = os.environ if environ is None else environ
    values = {
        key[len(ENV_PREFIX) :].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX) and value != ""
    }
    settings = UploadSettings(**values)

    if settings.upload_to_gcs and not settings.gcs_bucket:
        logger.warning("RICH_MEDIA_UPLOAD_TO_GCS is set but RICH_MEDIA_GCS_BUCKET is empty; GCS mirror disabled")

    return settings
