"""Expand storefront album downloads into a codec-organised music library."""

from .codec import CodecFamily, detect_codec, sniff_codec, destination_root
from .config import ExpandConfig
from .discovery import ArchiveDiscovery, ArchiveInfo
from .events import EventKind, ExpandEvent, EventRecorder, LoggingEventSink
from .expander import BandcampExpander, ArchivePlan, ArchiveResult, ExpandSummary
from .extractor import ArchiveExtractor, ExtractionStats
from .naming import AlbumIdentity, get_album_from_filename, get_artist_from_filename, parse_album_identity
from .relocator import copy_tree, relocate, remove_if_empty

__version__ = "0.1.0"

__all__ = [
    'CodecFamily',
    'detect_codec',
    'sniff_codec',
    'destination_root',
    'ExpandConfig',
    'ArchiveDiscovery',
    'ArchiveInfo',
    'EventKind',
    'ExpandEvent',
    'EventRecorder',
    'LoggingEventSink',
    'BandcampExpander',
    'ArchivePlan',
    'ArchiveResult',
    'ExpandSummary',
    'ArchiveExtractor',
    'ExtractionStats',
    'AlbumIdentity',
    'get_album_from_filename',
    'get_artist_from_filename',
    'parse_album_identity',
    'copy_tree',
    'relocate',
    'remove_if_empty',
]
