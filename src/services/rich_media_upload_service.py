"""Rich media markup upload pipeline.

Uploaded archives are saved and extracted, then all of them are validated,
then each is published. One failed bundle aborts the request before any
upload. Temporary files are removed whether the request succeeds or not.
"""

import logging
import tempfile
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pydantic import BaseModel, Field

from src.adapters.storage import ObjectStore, build_object_stores
from src.core.bundles import parse_bundle_type
from src.core.config import UploadSettings
from src.core.helpers.zip_validation import ZipContentValidator, derive_root_base_name
from src.services.bundle_extraction import describe_upload, save_and_extract
from src.services.publishing_service import BundlePublisher, UploadResult, find_root_html_key

logger = logging.getLogger(__name__)

SUPPORTED_ARCHIVE_EXTENSION = ".zip"


class UploadRequestError(Exception):
    """Raised when an upload request is unusable before any bundle is touched."""


@dataclass(frozen=True)
class IncomingFile:
    """An uploaded file as handed over by the HTTP layer."""

    filename: str
    stream: BinaryIO


class UploadSummary(BaseModel):
    """Outcome of a successful upload request."""

    campaign_id: str
    upload_id: str
    exporter: str
    zip_file_base_name: str
    root_html_key: str | None = None
    root_html_base_name: str | None = None
    uploaded_keys: list[str] = Field(default_factory=list)
    dimensions: str | None = None


class RichMediaUploadService:
    """Runs uploaded archives through validation and publishing."""

    def __init__(
        self,
        settings: UploadSettings,
        stores: Sequence[ObjectStore] | None = None,
        validator: ZipContentValidator | None = None,
        publisher: BundlePublisher | None = None,
    ):
        self.settings = settings
        self.validator = validator or ZipContentValidator(base_name_check_types=settings.base_name_check_types)
        self.publisher = publisher or BundlePublisher(stores or build_object_stores(settings))

    def process_upload(
        self,
        campaign_id: str | int,
        exporter: str,
        files: Sequence[IncomingFile],
        dimensions: str | None = None,
    ) -> UploadSummary:
        """Validate and publish every uploaded archive of one request.

        Args:
            campaign_id: Campaign the creatives belong to
            exporter: Bundle type of all archives ("gwd" or "conversion")
            files: Uploaded archives
            dimensions: Creative size as submitted, passed through to the summary

        Returns:
            UploadSummary of the last published bundle

        Raises:
            UploadRequestError: No files, a file that is not a .zip archive, or two
                archives with the same name
            ValueError: Unknown exporter
            ZipValidationError: A bundle failed validation; nothing is published
            BundleExtractionError: An archive could not be extracted
            BundlePublishError: An upload to a remote store failed
        """
        if not files:
            raise UploadRequestError("no files uploaded")

        bundle_type = parse_bundle_type(exporter)
        upload_id = str(uuid.uuid4())

        with tempfile.TemporaryDirectory(prefix="rich-media-", dir=self.settings.work_dir) as work_dir:
            bundles = [describe_upload(incoming.filename, Path(work_dir)) for incoming in files]
            if not all(bundle.file_extension == SUPPORTED_ARCHIVE_EXTENSION for bundle in bundles):
                raise UploadRequestError("unsupported file type")

            # Object keys are derived from the base name
            base_names = [bundle.file_base_name for bundle in bundles]
            duplicates = sorted({name for name in base_names if base_names.count(name) > 1})
            if duplicates:
                raise UploadRequestError(f"duplicate file name: {', '.join(duplicates)}")

            for bundle, incoming in zip(bundles, files):
                save_and_extract(bundle, incoming.stream)

            # Every bundle must pass before the first upload
            for bundle in bundles:
                self.validator.validate(bundle_type, bundle.file_base_name, bundle.destination_directory)

            results: list[UploadResult] = []
            for bundle in bundles:
                results = self.publisher.publish(
                    bundle.destination_directory,
                    bundle_type,
                    campaign_id,
                    bundle.file_base_name,
                    upload_id,
                )

        root_html_key = find_root_html_key(results)
        summary = UploadSummary(
            campaign_id=str(campaign_id),
            upload_id=upload_id,
            exporter=bundle_type.value,
            zip_file_base_name=bundles[0].file_base_name,
            root_html_key=root_html_key,
            root_html_base_name=derive_root_base_name(root_html_key.split("/")[-1]) if root_html_key else None,
            uploaded_keys=[result.key for result in results],
            dimensions=dimensions,
        )

        logger.info(
            "Rich media upload complete",
            extra={"campaign_id": summary.campaign_id, "upload_id": upload_id, "bundle_count": len(bundles)},
        )
        return summary
