"""Audio codec detection from archive entry names."""

import logging
import zipfile
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from .common.errors import CorruptedArchiveError, UnrecognizedCodecError

logger = logging.getLogger(__name__)


class CodecFamily(Enum):
    """Audio codec family of an album archive."""
    FLAC = "FLAC"
    AAC = "AAC"
    UNKNOWN = "Unknown"


# Suffixes are compared lowercased
EXTENSION_MAP: Dict[str, CodecFamily] = {
    '.flac': CodecFamily.FLAC,
    '.aac': CodecFamily.AAC,
    '.m4a': CodecFamily.AAC,
}


def classify_entry_name(name: str) -> Optional[CodecFamily]:
    """Return the codec family for a single entry name, or None."""
    lowered = name.lower()
    for ext, family in EXTENSION_MAP.items():
        if lowered.endswith(ext):
            return family
    return None


def sniff_codec(zip_ref: zipfile.ZipFile) -> CodecFamily:
    """Classify an open archive by peeking at its entry names.

    Entries are inspected in archive order and the first recognised
    extension wins. Archives are assumed never to mix FLAC and AAC.
    """
    for info in zip_ref.infolist():
        family = classify_entry_name(info.filename)
        if family is not None:
            logger.debug(f"Entry {info.filename} identifies {family.value}")
            return family
    return CodecFamily.UNKNOWN


def detect_codec(archive_path: Path) -> CodecFamily:
    """Open ``archive_path`` read-only and classify it.

    Raises:
        CorruptedArchiveError: If the file is missing or not a zip archive
    """
    try:
        with zipfile.ZipFile(archive_path, 'r') as zip_ref:
            return sniff_codec(zip_ref)
    except (zipfile.BadZipFile, OSError) as e:
        raise CorruptedArchiveError(
            f"Cannot open archive {archive_path}: {e}", archive=str(archive_path)
        ) from e


def destination_root(
    codec: CodecFamily,
    music_root: Path,
    flac_subdir: str = "FLAC",
    aac_subdir: str = "AAC",
) -> Path:
    """Pick the library subtree for a codec family.

    Raises:
        UnrecognizedCodecError: For ``CodecFamily.UNKNOWN``
    """
    if codec is CodecFamily.FLAC:
        return Path(music_root) / flac_subdir
    if codec is CodecFamily.AAC:
        return Path(music_root) / aac_subdir
    raise UnrecognizedCodecError(
        "Cannot find known file type inside compressed folder", codec=codec.value
    )
