"""Moving staged albums into the music library."""

import logging
import shutil
from pathlib import Path

from .common.errors import DestinationCollisionError, RelocationError

logger = logging.getLogger(__name__)


def copy_tree(src: Path, dst: Path) -> int:
    """Recursively copy ``src`` into ``dst`` without overwriting files.

    Missing destination directories are created and existing ones are merged
    into. An existing destination file is a hard failure.

    Args:
        src: Source directory
        dst: Destination directory

    Returns:
        Number of files copied

    Raises:
        RelocationError: If the source is missing or a copy fails
        DestinationCollisionError: If a destination file already exists
    """
    src = Path(src)
    dst = Path(dst)
    if not src.is_dir():
        raise RelocationError(
            f"Source directory does not exist or could not be found: {src}",
            source=str(src),
        )

    try:
        dst.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RelocationError(f"Cannot create {dst}: {e}", destination=str(dst)) from e

    copied = 0
    for child in sorted(src.iterdir()):
        target = dst / child.name
        if child.is_dir():
            copied += copy_tree(child, target)
            continue

        if target.exists():
            raise DestinationCollisionError(
                f"Destination file already exists: {target}",
                source=str(child), destination=str(target),
            )
        try:
            shutil.copy2(child, target)
        except OSError as e:
            raise RelocationError(
                f"Failed to copy {child} to {target}: {e}",
                source=str(child), destination=str(target),
            ) from e
        logger.debug(f"Copied {child} -> {target}")
        copied += 1

    return copied


def relocate(staging_dir: Path, destination: Path, archive_path: Path, delete_archive: bool = True) -> int:
    """Copy a staged album into the library, then clean up.

    The staging directory is removed, then the archive, only after every file was
    copied. Interruption between the copy and the deletions leaves both
    copies in place.

    Returns:
        Number of files copied
    """
    logger.info(f"Moving temp directory to final location: {destination}")
    copied = copy_tree(staging_dir, destination)

    try:
        shutil.rmtree(staging_dir)
        if delete_archive:
            Path(archive_path).unlink()
    except OSError as e:
        raise RelocationError(
            f"Copied to {destination} but cleanup failed: {e}",
            staging=str(staging_dir), archive=str(archive_path),
        ) from e

    return copied


def remove_if_empty(directory: Path) -> bool:
    """Remove ``directory`` if it exists and holds nothing.

    Returns:
        True if the directory was removed

    Raises:
        RelocationError: If the directory cannot be removed
    """
    directory = Path(directory)
    if not directory.is_dir() or any(directory.iterdir()):
        return False
    try:
        directory.rmdir()
    except OSError as e:
        raise RelocationError(f"Cannot remove {directory}: {e}", staging=str(directory)) from e
    return True
