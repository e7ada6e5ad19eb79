"""Structural validation of uploaded rich media ZIP bundles.

Rules run in order and stop at the first failure:
1. The listing contains a root .html file (first path containing '.html')
2. The upload name contains the root file's base name (configurable per type)
3. The root .html file has content
4. gwd only: the root file carries Google Web Designer generator metadata
5. gwd only: linked assets/ files were shipped in the archive

Error messages are matched verbatim by API clients; do not reword them.
"""

import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import NoReturn

from src.core.bundles import (
    ROOT_HTML_MARKER,
    BundleDescriptor,
    BundleType,
    parse_bundle_type,
)
from src.core.helpers.bundle_files import BundleFileAccess, FileSystemBundleAccess

logger = logging.getLogger(__name__)

GWD_GENERATOR_MARKER = 'name="generator" content="Google Web Designer'
LINKED_ASSET_MARKER = 'src="assets/'

DEFAULT_BASE_NAME_CHECK_TYPES = frozenset({BundleType.CONVERSION})


class ZipValidationFailure(str, Enum):
    """Reasons a bundle can be rejected."""

    MISSING_ROOT_HTML = "missing_root_html"
    BASE_NAME_MISMATCH = "base_name_mismatch"
    EMPTY_ROOT_HTML = "empty_root_html"
    MISSING_GENERATOR_METADATA = "missing_generator_metadata"
    MISSING_ASSETS_FOLDER = "missing_assets_folder"


class ZipValidationError(Exception):
    """Raised when an uploaded bundle breaks a structural rule."""

    def __init__(self, failure: ZipValidationFailure, message: str):
        super().__init__(message)
        self.failure = failure
        self.message = message


def derive_root_base_name(root_html_file: str) -> str:
    """Base name of a root .html path relative to the extraction directory.

    'banner.html' -> 'banner', 'banner/index.html' -> 'banner'
    """
    return root_html_file.split(ROOT_HTML_MARKER)[0].split("/")[0]


class ZipContentValidator:
    """Validates extracted bundles before anything is published.

    Args:
        file_access: Lister/reader for the extracted files (filesystem by default)
        base_name_check_types: Bundle types the base-name rule applies to
    """

    def __init__(
        self,
        file_access: BundleFileAccess | None = None,
        base_name_check_types: Iterable[BundleType] | None = None,
    ):
        self.file_access = file_access or FileSystemBundleAccess()
        self.base_name_check_types = frozenset(
            DEFAULT_BASE_NAME_CHECK_TYPES if base_name_check_types is None else base_name_check_types
        )

    def validate(self, bundle_type: BundleType | str, base_name: str, directory: str | Path) -> bool:
        """List a bundle directory and validate its contents.

        Returns:
            True when every rule passes

        Raises:
            ZipValidationError: On the first rule that fails
            ValueError: If bundle_type is not a supported exporter
        """
        descriptor = BundleDescriptor(
            bundle_type=parse_bundle_type(bundle_type),
            base_name=base_name,
            files=tuple(self.file_access.list_files(directory)),
        )
        return self.validate_descriptor(descriptor, directory)

    def validate_descriptor(self, descriptor: BundleDescriptor, directory: str | Path) -> bool:
        root_html_file = descriptor.root_html_file
        if not root_html_file:
            self._fail(descriptor, ZipValidationFailure.MISSING_ROOT_HTML, "Zip file does not contain a root .html file")

        if descriptor.bundle_type in self.base_name_check_types:
            root_base_name = derive_root_base_name(root_html_file)
            if root_base_name not in descriptor.base_name:
                self._fail(
                    descriptor,
                    ZipValidationFailure.BASE_NAME_MISMATCH,
                    f"Zip file name '{descriptor.base_name}' does not contain basename '{root_base_name}'",
                )

        root_html = self.file_access.read_text(Path(directory) / root_html_file)
        if len(root_html) < 1:
            self._fail(descriptor, ZipValidationFailure.EMPTY_ROOT_HTML, "Root .html file is missing content")

        if descriptor.bundle_type == BundleType.GWD:
            if GWD_GENERATOR_MARKER not in root_html:
                self._fail(
                    descriptor,
                    ZipValidationFailure.MISSING_GENERATOR_METADATA,
                    "Root .html file does not contain Google Web Designer metadata",
                )

            if LINKED_ASSET_MARKER in root_html and not descriptor.has_assets_folder:
                self._fail(
                    descriptor,
                    ZipValidationFailure.MISSING_ASSETS_FOLDER,
                    "Zip file is missing assets folder for linked assets",
                )

        logger.debug(
            "Zip bundle passed validation",
            extra={"bundle_type": descriptor.bundle_type.value, "root_html_file": root_html_file},
        )
        return True

    def _fail(self, descriptor: BundleDescriptor, failure: ZipValidationFailure, message: str) -> NoReturn:
        logger.info(
            "Rejected zip bundle %s: %s",
            descriptor.base_name,
            message,
            extra={"bundle_type": descriptor.bundle_type.value, "failure": failure.value},
        )
        raise ZipValidationError(failure, message)


def validate_zip_file(
    bundle_type: BundleType | str,
    file_base_name: str,
    directory_to_upload: str | Path,
    file_access: BundleFileAccess | None = None,
    base_name_check_types: Iterable[BundleType] | None = None,
) -> bool:
    """Validate an extracted bundle with a one-off ZipContentValidator."""
    validator = ZipContentValidator(file_access=file_access, base_name_check_types=base_name_check_types)
    return validator.validate(bundle_type, file_base_name, directory_to_upload)


__all__ = [
    "DEFAULT_BASE_NAME_CHECK_TYPES",
    "GWD_GENERATOR_MARKER",
    "LINKED_ASSET_MARKER",
    "ZipContentValidator",
    "ZipValidationError",
    "ZipValidationFailure",
    "derive_root_base_name",
    "validate_zip_file",
]
