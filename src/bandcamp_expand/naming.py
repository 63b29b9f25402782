"""Artist and album names from storefront archive filenames.

Downloads are named ``"<Artist> - <Album>.zip"``, for example
``"Psycroptic - As the Kingdom Drowns (pre-order).zip"``. When the same
album is downloaded twice the browser appends a counter:
``"Psycroptic - As the Kingdom Drowns (pre-order) (1).zip"``.
"""

from dataclasses import dataclass

from .common.errors import FilenameFormatError

SEPARATOR = " - "
EXTENSION_LENGTH = 4  # ".zip"
DECORATION_LENGTH = 4  # " (1)"


@dataclass(frozen=True)
class AlbumIdentity:
    """Artist and album parsed from an archive filename."""
    artist: str
    album: str


def _separator_index(filename: str) -> int:
    index = filename.find(SEPARATOR)
    if index < 0:
        raise FilenameFormatError(
            f"Filename has no '{SEPARATOR}' separator: {filename}", filename=filename
        )
    return index


def _is_digit(c: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits
    return '0' <= c <= '9'


def _has_counter_suffix(name: str) -> bool:
    if len(name) < DECORATION_LENGTH:
        return False
    tail = name[-DECORATION_LENGTH:]
    return tail.startswith(" (") and tail.endswith(")") and _is_digit(tail[2])


def get_artist_from_filename(filename: str) -> str:
    """Return the text before the first separator."""
    return filename[:_separator_index(filename)]


def get_album_from_filename(filename: str) -> str:
    """Return the text after the first separator, minus extension and counter.

    Only single-digit counters such as ``" (1)"`` are stripped; ``" (10)"``
    stays part of the album name.
    """
    start = _separator_index(filename) + len(SEPARATOR)
    album = filename[start:]
    album = album[:max(len(album) - EXTENSION_LENGTH, 0)]

    if _has_counter_suffix(album):
        album = album[:-DECORATION_LENGTH]
    return album


def parse_album_identity(filename: str) -> AlbumIdentity:
    """Parse both artist and album from a base filename.

    Both parts become directory names, so empty names and ``.``/``..``
    are rejected.
    """
    identity = AlbumIdentity(
        artist=get_artist_from_filename(filename),
        album=get_album_from_filename(filename),
    )
    for part in (identity.artist, identity.album):
        if part.strip() in ("", ".", ".."):
            raise FilenameFormatError(
                f"Filename yields an unusable directory name {part!r}: {filename}",
                filename=filename,
            )
    return identity
