"""File access for extracted bundles.

The validator and publisher only see bundles through BundleFileAccess so tests
can swap in stubs instead of touching the filesystem.
"""

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class BundleFileAccess(Protocol):
    """Lister/reader pair used to inspect an extracted bundle."""

    def list_files(self, directory: str | Path) -> list[str]: ...

    def read_text(self, path: str | Path) -> str: ...

    def read_bytes(self, path: str | Path) -> bytes: ...


class FileSystemBundleAccess:
    """Default BundleFileAccess backed by the local filesystem."""

    encoding = "utf-8"

    def list_files(self, directory: str | Path) -> list[str]:
        """List every file below a directory.

        Args:
            directory: Extraction directory of a bundle

        Returns:
            Sorted POSIX-style paths relative to the directory. Empty if the
            directory does not exist.
        """
        root = Path(directory)
        if not root.is_dir():
            logger.debug("Bundle directory does not exist: %s", root)
            return []

        return sorted(path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file())

    def read_text(self, path: str | Path) -> str:
        return Path(path).read_text(encoding=self.encoding, errors="replace")

    def read_bytes(self, path: str | Path) -> bytes:
        return Path(path).read_bytes()
