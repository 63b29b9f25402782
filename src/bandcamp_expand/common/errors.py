"""Base error definitions for bandcamp_expand."""

from typing import Any, Dict


class ExpandError(Exception):
    """Base exception for all per-archive and configuration errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(ExpandError):
    """Configuration is invalid or missing."""
    pass


class ArchiveError(ExpandError):
    """Archive processing failed."""
    pass


class CorruptedArchiveError(ArchiveError):
    """Archive cannot be opened or read as a zip container."""
    pass


class ExtractionError(ArchiveError):
    """Failed to write archive entries to the staging directory."""
    pass


class UnrecognizedCodecError(ArchiveError):
    """No archive entry has a known audio extension."""
    pass


class FilenameFormatError(ExpandError):
    """Archive filename does not follow the "<Artist> - <Album>" convention."""
    pass


class RelocationError(ExpandError):
    """Moving the staged tree into the library failed."""
    pass


class DestinationCollisionError(RelocationError):
    """A file already exists at the destination path."""
    pass
