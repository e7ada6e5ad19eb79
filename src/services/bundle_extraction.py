"""Saving and extracting uploaded ZIP archives."""

import logging
import shutil
import time
import uuid
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

UPLOADS_FOLDER = "rich-media-markup-uploads"
EXTRACTED_FOLDER = "rich-media-markup-extracted"


class BundleExtractionError(Exception):
    """Raised when an uploaded archive cannot be extracted."""

    def __init__(self, message: str, archive_path: Path | None = None):
        super().__init__(message)
        self.archive_path = archive_path


@dataclass(frozen=True)
class UploadedBundle:
    """An uploaded archive and where its files were extracted."""

    file_base_name: str
    file_extension: str
    archive_path: Path
    destination_directory: Path


def describe_upload(filename: str, work_dir: Path) -> UploadedBundle:
    """Work out where an uploaded file is stored and extracted.

    The archive keeps its extension and gets a millisecond timestamp suffix;
    files are extracted into a folder named after the archive's base name.
    Each call gets its own parent folder, so archives with the same name in
    one request do not overwrite each other.
    """
    name = Path(filename).name
    suffix = Path(name).suffix
    file_base_name = name[: -len(suffix)] if suffix else name
    slot = uuid.uuid4().hex[:8]
    archive_path = work_dir / UPLOADS_FOLDER / slot / f"{file_base_name}_{int(time.time() * 1000)}{suffix}"

    return UploadedBundle(
        file_base_name=file_base_name,
        file_extension=suffix,
        archive_path=archive_path,
        destination_directory=work_dir / EXTRACTED_FOLDER / slot / file_base_name,
    )


def save_and_extract(bundle: UploadedBundle, stream: BinaryIO) -> UploadedBundle:
    """Write an uploaded archive to disk and extract it.

    Args:
        bundle: Paths from describe_upload()
        stream: Readable binary stream of the uploaded archive

    Returns:
        The same bundle, now extracted

    Raises:
        BundleExtractionError: If the archive is not a readable ZIP file
    """
    bundle.archive_path.parent.mkdir(parents=True, exist_ok=True)
    with open(bundle.archive_path, "wb") as archive:
        shutil.copyfileobj(stream, archive)

    try:
        with zipfile.ZipFile(bundle.archive_path) as archive:
            archive.extractall(bundle.destination_directory)
    except (zipfile.BadZipFile, OSError) as e:
        raise BundleExtractionError(f"failed to extract {bundle.archive_path}", archive_path=bundle.archive_path) from e

    logger.info(
        "Extracted %s",
        bundle.archive_path.name,
        extra={"destination_directory": str(bundle.destination_directory)},
    )
    return bundle
