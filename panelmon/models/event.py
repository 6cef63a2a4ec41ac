from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field


class EventSource(StrEnum):
    METRICS_COLLECTOR = "metrics_collector"


class EventType(StrEnum):
    METRICS_SAMPLED = "metrics_sampled"


class Event(BaseModel):
    """Raw event emitted by a collector on every tick."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    source: EventSource
    event_type: EventType
    payload: dict = Field(default_factory=dict)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
