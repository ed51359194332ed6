"""Event schema definitions for the event planner."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from ..utils.dates import format_time, parse_time

DEFAULT_CATEGORY = "personal"


class EventValidationError(ValueError):
    """Raised when event data cannot be saved (empty title, bad time range)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass
class ValidationResult:
    """Outcome of validating an event."""
    valid: bool
    error: Optional[str] = None


class TimeOfDay(BaseModel):
    """A wall-clock time without a date."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)

    @model_validator(mode="before")
    @classmethod
    def _parse_text(cls, data: Any) -> Any:
        # Accept "HH:MM" wherever a time is expected
        if isinstance(data, str):
            hour, minute = parse_time(data)
            return {"hour": hour, "minute": minute}
        return data

    @classmethod
    def parse(cls, text: str) -> "TimeOfDay":
        """Parse an HH:MM string."""
        return cls.model_validate(text)

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return format_time(self.hour, self.minute)


class Event(BaseModel):
    """A single planned event on one calendar day.

    Events are immutable; edits produce a new instance that replaces the old
    one in its day. Field aliases are the key names used in the day files.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    start_time: TimeOfDay = Field(alias="startTime")
    end_time: TimeOfDay = Field(alias="endTime")
    description: str = ""
    category: str = DEFAULT_CATEGORY
    show_notification: bool = Field(default=False, alias="showNotification")
    notification_minutes: Optional[int] = Field(default=None, ge=0, alias="notificationMinutes")

    @field_validator("description", mode="before")
    @classmethod
    def _empty_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> Any:
        return DEFAULT_CATEGORY if not value else value

    @field_serializer("start_time", "end_time")
    def _serialize_time(self, value: TimeOfDay) -> str:
        return str(value)

    @property
    def start_minutes(self) -> int:
        return self.start_time.minutes

    @property
    def end_minutes(self) -> int:
        return self.end_time.minutes

    def is_valid(self) -> ValidationResult:
        """Check that the event can be saved.

        Returns:
            ValidationResult with the first problem found, if any
        """
        if not self.title or not self.title.strip():
            return ValidationResult(valid=False, error="Title is required")

        if self.start_minutes >= self.end_minutes:
            return ValidationResult(valid=False, error="End time must be after start time")

        return ValidationResult(valid=True)

    def ensure_valid(self) -> None:
        """Raise EventValidationError if the event is not valid."""
        result = self.is_valid()
        if not result.valid:
            raise EventValidationError(result.error)

    def time_range_label(self) -> str:
        """Formatted time range, e.g. "09:00–10:30"."""
        return f"{self.start_time}–{self.end_time}"

    def overlaps(self, other: "Event") -> bool:
        """True when the two [start, end) minute ranges intersect."""
        return self.start_minutes < other.end_minutes and self.end_minutes > other.start_minutes

    def copy_with(self, **changes: Any) -> "Event":
        """Return a validated copy with some fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return Event.model_validate(data)

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the record stored in a day file."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Event":
        """Deserialize a record read from a day file.

        Raises:
            pydantic.ValidationError: If the record is malformed
        """
        return cls.model_validate(record)
