"""State models returned by directory queries."""

from typing import Dict

from pydantic import BaseModel, Field

from ..events import Event


class UpcomingEvent(BaseModel):
    """An event paired with the day it belongs to."""

    day_key: str
    event: Event


class EventStatistics(BaseModel):
    """Aggregate counts over every stored event."""

    total_events: int = 0
    days_with_events: int = 0
    category_counts: Dict[str, int] = Field(default_factory=dict)
