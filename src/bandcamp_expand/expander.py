"""High-level driver: discover, classify, extract and relocate album archives."""

import logging
import shutil
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .codec import CodecFamily, destination_root, sniff_codec
from .common.errors import CorruptedArchiveError, ExpandError, ExtractionError
from .common.logging import LogContext
from .config import ExpandConfig
from .discovery import ArchiveDiscovery, ArchiveInfo
from .events import EventKind, EventSink, ExpandEvent, LoggingEventSink
from .extractor import ArchiveExtractor
from .naming import AlbumIdentity, parse_album_identity
from .relocator import relocate, remove_if_empty

logger = logging.getLogger(__name__)


@dataclass
class ArchivePlan:
    """Where one archive will go, decided before anything is written."""
    archive: ArchiveInfo
    identity: AlbumIdentity
    codec: CodecFamily
    staging_dir: Path
    destination: Path

    @property
    def album_dir(self) -> Path:
        """Library directory this archive's files are copied into."""
        return self.destination / self.identity.album


@dataclass
class ArchiveResult:
    """Outcome of processing one archive."""
    archive: ArchiveInfo
    plan: Optional[ArchivePlan] = None
    written: int = 0
    skipped: int = 0
    copied: int = 0
    error: Optional[ExpandError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class ExpandSummary:
    """Results of a whole run."""
    results: List[ArchiveResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def succeeded(self) -> List[ArchiveResult]:
        return [r for r in self.results if r.succeeded]

    @property
    def failed(self) -> List[ArchiveResult]:
        return [r for r in self.results if not r.succeeded]


def _open_archive(path: Path) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(path, 'r')
    except (zipfile.BadZipFile, OSError) as e:
        raise CorruptedArchiveError(f"Cannot open archive {path}: {e}", archive=str(path)) from e


class BandcampExpander:
    """Processes every album archive in the source directory.

    Each archive is opened once; the same handle feeds codec detection and
    extraction. A failing archive is recorded and the run moves on, unless
    ``processing.fail_fast`` is set. Only :class:`ExpandError` is handled per
    archive; anything else propagates.
    """

    def __init__(self, config: ExpandConfig, sink: Optional[EventSink] = None):
        self.config = config
        self.sink = sink or LoggingEventSink(logger)
        self.extractor = ArchiveExtractor(sink=self.sink)

    def _emit(self, kind: EventKind, archive: Optional[str] = None, **fields) -> None:
        self.sink(ExpandEvent(kind=kind, archive=archive, fields=fields))

    def _build_plan(self, archive: ArchiveInfo, zip_ref: zipfile.ZipFile) -> ArchivePlan:
        identity = parse_album_identity(archive.name)
        codec = sniff_codec(zip_ref)
        codec_root = destination_root(
            codec,
            self.config.music_root,
            flac_subdir=self.config.library.flac_subdir,
            aac_subdir=self.config.library.aac_subdir,
        )
        self._emit(EventKind.CODEC_DETECTED, archive.name, codec=codec.value)

        return ArchivePlan(
            archive=archive,
            identity=identity,
            codec=codec,
            staging_dir=self.config.staging_root / identity.artist / identity.album,
            destination=codec_root / identity.artist,
        )

    def plan(self, archive: ArchiveInfo) -> ArchivePlan:
        """Parse the filename and sniff the codec without touching the disk.

        Raises:
            FilenameFormatError: If the filename lacks the separator
            CorruptedArchiveError: If the archive cannot be opened
            UnrecognizedCodecError: If no entry has a known extension
        """
        with _open_archive(archive.path) as zip_ref:
            return self._build_plan(archive, zip_ref)

    def process(self, archive: ArchiveInfo) -> ArchiveResult:
        """Extract and relocate one archive.

        Raises:
            ExpandError: Any per-archive failure; nothing is caught here
        """
        result = ArchiveResult(archive=archive)

        with _open_archive(archive.path) as zip_ref:
            plan = self._build_plan(archive, zip_ref)
            result.plan = plan

            # Leftovers from an earlier failed run of this album are discarded
            try:
                if plan.staging_dir.exists():
                    shutil.rmtree(plan.staging_dir)
                plan.staging_dir.mkdir(parents=True)
            except OSError as e:
                raise ExtractionError(
                    f"Cannot create staging directory {plan.staging_dir}: {e}",
                    staging=str(plan.staging_dir),
                ) from e
            self._emit(EventKind.STAGING_CREATED, archive.name, staging_dir=str(plan.staging_dir))

            logger.info(f"Expanding {archive.name} to {plan.staging_dir}")
            stats = self.extractor.extract(zip_ref, plan.staging_dir)
            result.written = len(stats.written)
            result.skipped = len(stats.skipped)

        # Archive handle must be closed before the archive can be deleted
        result.copied = relocate(
            plan.staging_dir,
            plan.album_dir,
            archive.path,
            delete_archive=self.config.processing.delete_archive,
        )
        # Other albums by the same artist may still be staged
        remove_if_empty(plan.staging_dir.parent)
        self._emit(
            EventKind.RELOCATED,
            archive.name,
            source=str(plan.staging_dir),
            destination=str(plan.album_dir),
            files=result.copied,
        )
        return result

    def run(self, dry_run: bool = False) -> ExpandSummary:
        """Discover and process all archives.

        Args:
            dry_run: Only compute plans; create, write and delete nothing

        Returns:
            Summary of every archive attempted

        Raises:
            ExpandError: The first per-archive failure when ``fail_fast`` is set
            FileNotFoundError: If the source directory is missing
        """
        discovery = ArchiveDiscovery(self.config.source_dir)
        archives = discovery.discover(self.config.processing.archive_pattern)
        summary = ExpandSummary(dry_run=dry_run)

        if not archives:
            logger.warning("No archives found")

        for archive in archives:
            self._emit(EventKind.ARCHIVE_STARTED, archive.name, dry_run=dry_run)
            with LogContext(logger, archive=archive.name):
                try:
                    if dry_run:
                        result = ArchiveResult(archive=archive, plan=self.plan(archive))
                    else:
                        result = self.process(archive)
                except ExpandError as e:
                    summary.results.append(ArchiveResult(archive=archive, error=e))
                    self._emit(
                        EventKind.ARCHIVE_FAILED,
                        archive.name,
                        error=e.message,
                        error_type=type(e).__name__,
                    )
                    if self.config.processing.fail_fast:
                        raise
                    continue

            summary.results.append(result)
            self._emit(
                EventKind.ARCHIVE_COMPLETED,
                archive.name,
                destination=str(result.plan.album_dir),
                written=result.written,
                skipped=result.skipped,
            )

        self._emit(
            EventKind.RUN_COMPLETED,
            succeeded=len(summary.succeeded),
            failed=len(summary.failed),
            dry_run=dry_run,
        )
        return summary
