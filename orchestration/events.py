"""Orchestration events - Event, EventMetadata."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class EventMetadata:
    """Metadata for an event."""

    execution_id: str
    workflow: str
    domain: str
    timestamp: datetime


@dataclass
class Event:
    """Observational event emitted while a workflow runs."""

    name: str
    payload: dict[str, object]
    metadata: EventMetadata
