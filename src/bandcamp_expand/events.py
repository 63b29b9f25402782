"""Observation hooks for the expand pipeline.

The pipeline reports what it does through an event sink instead of writing
to the console. A sink is any callable taking an :class:`ExpandEvent`.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class EventKind(str, Enum):
    """Pipeline event identifiers."""

    ARCHIVE_STARTED = "archive_started"
    CODEC_DETECTED = "codec_detected"
    STAGING_CREATED = "staging_created"
    ENTRY_WRITTEN = "entry_written"
    ENTRY_SKIPPED = "entry_skipped"
    RELOCATED = "relocated"
    ARCHIVE_COMPLETED = "archive_completed"
    ARCHIVE_FAILED = "archive_failed"
    RUN_COMPLETED = "run_completed"


@dataclass
class ExpandEvent:
    """A single observation emitted by the pipeline."""

    kind: EventKind
    archive: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)


EventSink = Callable[[ExpandEvent], None]


class LoggingEventSink:
    """Forwards events to a logger as structured records."""

    # Per-entry events are chatty, everything else is user-facing progress
    LEVELS = {
        EventKind.ENTRY_WRITTEN: logging.DEBUG,
        EventKind.ENTRY_SKIPPED: logging.WARNING,
        EventKind.ARCHIVE_FAILED: logging.ERROR,
    }

    MESSAGES = {
        EventKind.ARCHIVE_STARTED: "Processing file: {archive}",
        EventKind.CODEC_DETECTED: "Found {codec} files in {archive}",
        EventKind.STAGING_CREATED: "Creating temp directory: {staging_dir}",
        EventKind.ENTRY_WRITTEN: "Writing {entry}",
        EventKind.ENTRY_SKIPPED: "Skipping unsafe entry {entry} in {archive}",
        EventKind.RELOCATED: "Moved {source} to {destination}",
        EventKind.ARCHIVE_COMPLETED: "Finished {archive}",
        EventKind.ARCHIVE_FAILED: "Failed to process {archive}: {error}",
        EventKind.RUN_COMPLETED: "Run complete: {succeeded} succeeded, {failed} failed",
    }

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def __call__(self, event: ExpandEvent) -> None:
        level = self.LEVELS.get(event.kind, logging.INFO)
        template = self.MESSAGES.get(event.kind, "{kind}")
        try:
            message = template.format(archive=event.archive, kind=event.kind.value, **event.fields)
        except KeyError:
            message = f"{event.kind.value}: {event.archive}"
        self.logger.log(
            level,
            message,
            extra={
                "extra_fields": {
                    "event": event.kind.value,
                    "archive": event.archive,
                    **event.fields,
                }
            },
        )


class EventRecorder:
    """Collects events in memory."""

    def __init__(self) -> None:
        self.events: List[ExpandEvent] = []

    def __call__(self, event: ExpandEvent) -> None:
        self.events.append(event)

    def kinds(self) -> List[EventKind]:
        return [e.kind for e in self.events]

    def of_kind(self, kind: EventKind) -> List[ExpandEvent]:
        return [e for e in self.events if e.kind == kind]
