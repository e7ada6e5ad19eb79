"""Rich media bundle types.

A bundle is the set of files extracted from one uploaded ZIP archive. The
bundle type decides which validation rules and which clickthrough pattern
apply:
- gwd: export produced by Google Web Designer
- conversion: arbitrary HTML5 bundle
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ROOT_HTML_MARKER = ".html"
ASSETS_FOLDER_MARKER = "assets/"


class BundleType(str, Enum):
    """Supported bundle exporters."""

    GWD = "gwd"
    CONVERSION = "conversion"


def parse_bundle_type(value: str | BundleType) -> BundleType:
    """Parse an exporter value into a BundleType.

    Args:
        value: Exporter name as submitted by the client (e.g., "gwd")

    Returns:
        Matching BundleType

    Raises:
        ValueError: If the exporter is not supported
    """
    if isinstance(value, BundleType):
        return value

    try:
        return BundleType(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown bundle type: {value}") from None


def find_root_html_file(files: list[str] | tuple[str, ...]) -> str | None:
    """Return the first path containing '.html', or None."""
    return next((file for file in files if ROOT_HTML_MARKER in file), None)


class BundleDescriptor(BaseModel):
    """Immutable view of one extracted bundle."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    bundle_type: BundleType
    base_name: str = Field(description="File stem the archive was uploaded under, e.g. 'banner (1)'")
    files: tuple[str, ...] = Field(default=(), description="Paths extracted from the archive, in listing order")

    @property
    def root_html_file(self) -> str | None:
        return find_root_html_file(self.files)

    @property
    def has_assets_folder(self) -> bool:
        return any(ASSETS_FOLDER_MARKER in file for file in self.files)
