"""Common utilities for bandcamp_expand."""

from .config import ConfigLoader
from .config_utils import expand_path_variables
from .logging import setup_logging, LogContext
from .logging_config import LoggingConfig
from .errors import (
    ExpandError, ConfigurationError, ArchiveError, CorruptedArchiveError,
    ExtractionError, UnrecognizedCodecError, FilenameFormatError,
    RelocationError, DestinationCollisionError
)

__all__ = [
    'ConfigLoader',
    'expand_path_variables',
    'LoggingConfig',
    'setup_logging',
    'LogContext',
    'ExpandError',
    'ConfigurationError',
    'ArchiveError',
    'CorruptedArchiveError',
    'ExtractionError',
    'UnrecognizedCodecError',
    'FilenameFormatError',
    'RelocationError',
    'DestinationCollisionError',
]
