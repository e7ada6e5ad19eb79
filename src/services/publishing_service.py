"""Publishing validated bundles to remote object stores.

Every file of a bundle is uploaded under

    <campaign_id>/<file_base_name>_<upload_id>/<path inside the bundle>

Markup files get their clickthrough URLs rewritten on the way out; all other
files are uploaded byte for byte.
"""

import logging
import mimetypes
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from src.adapters.storage.base import ObjectStore, ObjectStoreError
from src.core.bundles import ROOT_HTML_MARKER, BundleType
from src.core.helpers.bundle_files import BundleFileAccess, FileSystemBundleAccess
from src.core.helpers.clickthrough import is_markup_file, rewrite_clickthrough_urls

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class BundlePublishError(Exception):
    """Raised when a bundle file cannot be uploaded. The publish stops there."""

    def __init__(self, message: str, file_path: str, store: str | None = None):
        super().__init__(message)
        self.file_path = file_path
        self.store = store


@dataclass(frozen=True)
class UploadResult:
    """One object written to the stores."""

    key: str
    content_type: str


def get_upload_key(file_path: str, campaign_id: str | int, file_base_name: str, upload_id: str) -> str:
    """Object key for a bundle file.

    Args:
        file_path: Path relative to the extraction directory
        campaign_id: Campaign the creative belongs to
        file_base_name: Base name the archive was uploaded under
        upload_id: Identifier shared by all files of one upload request

    Returns:
        Key of the form "<campaign_id>/<file_base_name>_<upload_id>/<file_path>".
        A leading "<file_base_name>/" folder inside the archive is dropped.
    """
    prefix = f"{campaign_id}/{file_base_name}_{upload_id}/"
    relative_path = file_path

    if relative_path.split("/")[0] == file_base_name:
        relative_path = relative_path.replace(f"{file_base_name}/", "", 1)

    return f"{prefix}{relative_path}"


def guess_content_type(file_path: str) -> str:
    content_type, _ = mimetypes.guess_type(file_path)
    return content_type or DEFAULT_CONTENT_TYPE


def find_root_html_key(results: Sequence[UploadResult]) -> str | None:
    """Key of the first uploaded .html object."""
    return next((result.key for result in results if ROOT_HTML_MARKER in result.key), None)


class BundlePublisher:
    """Uploads an extracted bundle to one or more object stores.

    Args:
        stores: Stores every file is written to, in order
        file_access: Lister/reader for the extracted files (filesystem by default)
    """

    def __init__(self, stores: Sequence[ObjectStore], file_access: BundleFileAccess | None = None):
        if not stores:
            raise ValueError("At least one object store is required")
        self.stores = list(stores)
        self.file_access = file_access or FileSystemBundleAccess()

    def publish(
        self,
        directory: str | Path,
        bundle_type: BundleType,
        campaign_id: str | int,
        file_base_name: str,
        upload_id: str,
    ) -> list[UploadResult]:
        """Upload every file of an extracted bundle.

        The bundle must already have passed validation.

        Returns:
            One UploadResult per file, in listing order

        Raises:
            BundlePublishError: On the first failed upload
        """
        results: list[UploadResult] = []

        for file_path in self.file_access.list_files(directory):
            key = get_upload_key(file_path, campaign_id, file_base_name, upload_id)
            content_type = guess_content_type(file_path)
            source_path = Path(directory) / file_path

            body: bytes | str
            if is_markup_file(file_path):
                body = rewrite_clickthrough_urls(self.file_access.read_text(source_path), bundle_type)
            else:
                body = self.file_access.read_bytes(source_path)

            for store in self.stores:
                try:
                    store.put_object(key, body, content_type)
                except ObjectStoreError as e:
                    raise BundlePublishError(
                        f"failed to upload {file_path} to {store.store_name}",
                        file_path=file_path,
                        store=store.store_name,
                    ) from e

            results.append(UploadResult(key=key, content_type=content_type))

        logger.info(
            "Published bundle %s",
            file_base_name,
            extra={
                "campaign_id": campaign_id,
                "upload_id": upload_id,
                "file_count": len(results),
                "stores": [store.store_name for store in self.stores],
            },
        )
        return results
