"""Zip extraction into a staging directory."""

import logging
import os
import shutil
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .common.errors import CorruptedArchiveError, ExtractionError
from .events import EventKind, EventSink, ExpandEvent

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 64 * 1024


@dataclass
class ExtractionStats:
    """Outcome of extracting one archive."""
    written: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def is_safe_path(base_dir: str, member_path: str) -> bool:
    """Check that an entry stays inside the extraction directory.

    ``base_dir`` must already be absolute and normalised. The joined path is
    normalised lexically (``..`` collapsed, symlinks not followed) and
    compared ordinally, so case differences never count as a match.

    Args:
        base_dir: Normalised absolute extraction directory
        member_path: Entry name from the archive

    Returns:
        True if safe, False otherwise
    """
    target_path = os.path.normpath(os.path.join(base_dir, member_path))
    # Separator suffix keeps "/staging/album2" from matching "/staging/album"
    prefix = base_dir if base_dir.endswith(os.sep) else base_dir + os.sep
    return target_path.startswith(prefix)


class ArchiveExtractor:
    """Extracts zip archives to an existing directory."""

    def __init__(self, sink: Optional[EventSink] = None):
        """Initialize archive extractor.

        Args:
            sink: Optional event sink notified for every written or skipped entry
        """
        self.sink = sink

    def _emit(self, kind: EventKind, archive: str, **fields) -> None:
        if self.sink:
            self.sink(ExpandEvent(kind=kind, archive=archive, fields=fields))

    def extract(self, zip_ref: zipfile.ZipFile, extract_to: Path) -> ExtractionStats:
        """Extract every entry of an open archive into ``extract_to``.

        Entries whose normalised path escapes ``extract_to`` are skipped and
        reported, not treated as errors.

        Args:
            zip_ref: Open archive
            extract_to: Existing destination directory

        Returns:
            Names of written and skipped entries

        Raises:
            ExtractionError: If the destination is missing or a write fails
            CorruptedArchiveError: If an entry cannot be read
        """
        extract_to = Path(extract_to)
        if not extract_to.is_dir():
            raise ExtractionError(
                f"Extraction directory does not exist: {extract_to}",
                extract_to=str(extract_to),
            )

        archive_name = Path(zip_ref.filename).name if zip_ref.filename else "<stream>"
        base_dir = os.path.normpath(os.path.abspath(extract_to))
        stats = ExtractionStats()

        members = zip_ref.infolist()
        logger.debug(f"Extracting {len(members)} entries from {archive_name} to {base_dir}")

        for info in members:
            member = info.filename
            if not is_safe_path(base_dir, member):
                logger.warning(f"Skipping unsafe path: {member}")
                stats.skipped.append(member)
                self._emit(EventKind.ENTRY_SKIPPED, archive_name, entry=member)
                continue

            target_path = Path(os.path.normpath(os.path.join(base_dir, member)))
            try:
                if info.is_dir():
                    target_path.mkdir(parents=True, exist_ok=True)
                    continue

                target_path.parent.mkdir(parents=True, exist_ok=True)
                with zip_ref.open(info) as source, open(target_path, 'wb') as target:
                    shutil.copyfileobj(source, target, COPY_CHUNK_SIZE)
            except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError) as e:
                raise CorruptedArchiveError(
                    f"Cannot read entry {member} from {archive_name}: {e}",
                    archive=archive_name, entry=member,
                ) from e
            except OSError as e:
                raise ExtractionError(
                    f"Failed to write {target_path}: {e}",
                    archive=archive_name, entry=member,
                ) from e

            stats.written.append(member)
            self._emit(EventKind.ENTRY_WRITTEN, archive_name, entry=member, path=str(target_path))

        if stats.skipped:
            logger.warning(f"Skipped {len(stats.skipped)} unsafe entries in {archive_name}")
        return stats

    def extract_file(self, archive_path: Path, extract_to: Path) -> ExtractionStats:
        """Open ``archive_path`` and extract it into ``extract_to``.

        Raises:
            CorruptedArchiveError: If the archive cannot be opened
            ExtractionError: If the destination is missing or a write fails
        """
        try:
            zip_ref = zipfile.ZipFile(archive_path, 'r')
        except (zipfile.BadZipFile, OSError) as e:
            raise CorruptedArchiveError(
                f"Cannot open archive {archive_path}: {e}", archive=str(archive_path)
            ) from e
        with zip_ref:
            return self.extract(zip_ref, extract_to)
