"""Archive discovery in the download folder."""

import fnmatch
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class ArchiveInfo:
    """Information about a discovered archive."""
    path: Path
    name: str
    size_bytes: int

    def __str__(self) -> str:
        size_mb = self.size_bytes / (1024 * 1024)
        return f"{self.name} ({size_mb:.2f} MB)"

    @classmethod
    def from_path(cls, path: Path) -> "ArchiveInfo":
        path = Path(path)
        return cls(path=path, name=path.name, size_bytes=path.stat().st_size)


class ArchiveDiscovery:
    """Discovers archives in a source directory."""

    def __init__(self, source_dir: Path):
        """Initialize archive discovery.

        Args:
            source_dir: Directory to search for archives

        Raises:
            FileNotFoundError: If the directory does not exist
            NotADirectoryError: If the path is not a directory
        """
        self.source_dir = Path(source_dir)
        if not self.source_dir.exists():
            raise FileNotFoundError(f"Source directory not found: {source_dir}")
        if not self.source_dir.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {source_dir}")

    def discover(self, pattern: str = "*.zip") -> List[ArchiveInfo]:
        """Find archives directly inside the source directory.

        Subdirectories are not searched, so the staging root may live inside
        the source directory. Matching ignores case, so ``Album.ZIP`` is
        found by ``*.zip``.

        Args:
            pattern: Glob matched against file names

        Returns:
            Archives sorted by name
        """
        archives = []
        pattern = pattern.lower()

        for file_path in self.source_dir.iterdir():
            if not fnmatch.fnmatchcase(file_path.name.lower(), pattern):
                continue
            if not file_path.is_file():
                continue
            archive_info = ArchiveInfo.from_path(file_path)
            archives.append(archive_info)
            logger.debug(f"Discovered archive: {archive_info}")

        archives.sort(key=lambda a: a.name)

        logger.info(f"Discovered {len(archives)} archive(s) in {self.source_dir}")
        return archives
