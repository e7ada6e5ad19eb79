"""Helper modules for the rich media uploader.

- bundle_files: Listing and reading extracted bundle files
- zip_validation: Structural rules a bundle must pass before publishing
- clickthrough: Clickthrough URL rewriting for published markup
"""

from src.core.helpers.bundle_files import BundleFileAccess, FileSystemBundleAccess
from src.core.helpers.clickthrough import (
    INDIRECTION_EXPRESSION,
    is_markup_file,
    rewrite_clickthrough_urls,
)
from src.core.helpers.zip_validation import (
    ZipContentValidator,
    ZipValidationError,
    ZipValidationFailure,
    validate_zip_file,
)

__all__ = [
    "BundleFileAccess",
    "FileSystemBundleAccess",
    "ZipContentValidator",
    "ZipValidationError",
    "ZipValidationFailure",
    "validate_zip_file",
    # Clickthrough rewriting
    "INDIRECTION_EXPRESSION",
    "is_markup_file",
    "rewrite_clickthrough_urls",
]
