"""Tests for the event model and the per-day file store."""

import json
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from event_planner.core.planner_core.events import (
    DayFileStore,
    Event,
    EventValidationError,
    TimeOfDay,
)


def make_event(title="Standup", start="09:00", end="09:30", **kwargs) -> Event:
    return Event(title=title, start_time=start, end_time=end, **kwargs)


class TestTimeOfDay:
    """Test time-of-day parsing and formatting."""

    def test_parse_and_format(self):
        """Test that times parse from text and format zero-padded."""
        time = TimeOfDay.parse("9:05")

        assert time.hour == 9
        assert time.minute == 5
        assert str(time) == "09:05"
        assert time.minutes == 545

    def test_out_of_range_rejected(self):
        """Test that hours and minutes outside the clock are rejected."""
        with pytest.raises(ValidationError):
            TimeOfDay(hour=24, minute=0)
        with pytest.raises(ValidationError):
            TimeOfDay.parse("10:60")

    def test_malformed_text_rejected(self):
        """Test that non-time text raises a ValueError."""
        with pytest.raises(ValueError):
            TimeOfDay.parse("noon")


class TestEventSchemas:
    """Test event validation, serialization and helpers."""

    def test_valid_event(self):
        """Test that a well-formed event validates."""
        result = make_event().is_valid()

        assert result.valid is True
        assert result.error is None

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title_invalid(self, title):
        """Test that empty or whitespace titles are rejected."""
        result = make_event(title=title).is_valid()

        assert result.valid is False
        assert result.error == "Title is required"

    @pytest.mark.parametrize("start,end", [("10:00", "10:00"), ("10:30", "10:00"), ("23:59", "00:00")])
    def test_end_not_after_start_invalid(self, start, end):
        """Test that equal or inverted time ranges are rejected."""
        result = make_event(start=start, end=end).is_valid()

        assert result.valid is False
        assert result.error == "End time must be after start time"

    def test_ensure_valid_raises(self):
        """Test that ensure_valid surfaces the validation message."""
        with pytest.raises(EventValidationError) as exc_info:
            make_event(title=" ").ensure_valid()

        assert exc_info.value.message == "Title is required"

    def test_record_round_trip(self):
        """Test that to_record then from_record yields an equal event."""
        event = make_event(
            title="Dentist",
            start="14:05",
            end="15:00",
            description="Bring the forms",
            category="family",
            show_notification=True,
            notification_minutes=30,
        )

        assert Event.from_record(event.to_record()) == event

    def test_record_format(self):
        """Test the on-disk key names and HH:MM time text."""
        record = make_event(start="8:00", end="9:15").to_record()

        assert record == {
            "title": "Standup",
            "startTime": "08:00",
            "endTime": "09:15",
            "description": "",
            "category": "personal",
            "showNotification": False,
            "notificationMinutes": None,
        }

    def test_missing_optional_fields_default(self):
        """Test that records written without notification fields still load."""
        event = Event.from_record({
            "title": "Lunch",
            "startTime": "12:00",
            "endTime": "13:00",
            "description": "With Sam",
            "category": "friends",
        })

        assert event.show_notification is False
        assert event.notification_minutes is None
        assert event.category == "friends"

    def test_time_range_label(self):
        """Test the en dash separated time range."""
        assert make_event(start="9:00", end="10:30").time_range_label() == "09:00–10:30"

    def test_overlaps(self):
        """Test half-open interval overlap."""
        morning = make_event(start="09:00", end="10:00")

        assert morning.overlaps(make_event(start="09:30", end="11:00"))
        assert morning.overlaps(make_event(start="08:00", end="09:01"))
        assert not morning.overlaps(make_event(start="10:00", end="11:00"))
        assert not morning.overlaps(make_event(start="08:00", end="09:00"))

    def test_events_are_immutable(self):
        """Test that fields cannot be reassigned."""
        event = make_event()

        with pytest.raises(ValidationError):
            event.title = "Changed"

    def test_copy_with(self):
        """Test that copy_with replaces fields and keeps the rest."""
        event = make_event(category="work")
        changed = event.copy_with(title="Retro", start_time=TimeOfDay.parse("16:00"), end_time="17:00")

        assert changed.title == "Retro"
        assert str(changed.start_time) == "16:00"
        assert changed.category == "work"
        assert event.title == "Standup"


class TestDayFileStore:
    """Test per-day file persistence."""

    @pytest.fixture
    def temp_store(self):
        """Create a temporary day store for testing."""
        with tempfile.TemporaryDirectory() as temp_dir:
            yield DayFileStore(Path(temp_dir) / "events")

    def test_creates_data_dir(self, temp_store):
        """Test that the data directory is created on first use."""
        assert temp_store.data_dir.is_dir()

    def test_save_and_load_day(self, temp_store):
        """Test that saved records load back unchanged."""
        records = [make_event().to_record(), make_event(title="Review", start="11:00", end="12:00").to_record()]

        assert temp_store.save_day("2025-03-01", records) is True
        assert temp_store.load_day("2025-03-01") == records

    def test_file_is_indented_json(self, temp_store):
        """Test that day files are human-readable JSON lists."""
        temp_store.save_day("2025-03-01", [make_event().to_record()])

        text = temp_store.path_for("2025-03-01").read_text(encoding="utf-8")
        assert text.startswith("[\n  {")
        assert json.loads(text)[0]["title"] == "Standup"

    def test_save_empty_deletes_file(self, temp_store):
        """Test that saving no records removes the day file."""
        temp_store.save_day("2025-03-01", [make_event().to_record()])

        assert temp_store.save_day("2025-03-01", []) is True
        assert not temp_store.path_for("2025-03-01").exists()
        assert temp_store.load_day("2025-03-01") == []

    def test_save_empty_without_file(self, temp_store):
        """Test that saving an empty day that never existed succeeds."""
        assert temp_store.save_day("2025-03-02", []) is True

    def test_load_missing_day(self, temp_store):
        """Test that a missing file loads as no events."""
        assert temp_store.load_day("1999-01-01") == []

    @pytest.mark.parametrize("content", ["", "   \n", "{not json", '{"title": "x"}', "42"])
    def test_load_bad_content(self, temp_store, content):
        """Test that empty or malformed files load as no events."""
        temp_store.path_for("2025-03-01").write_text(content, encoding="utf-8")

        assert temp_store.load_day("2025-03-01") == []

    def test_load_all(self, temp_store):
        """Test that every valid day file is loaded."""
        temp_store.save_day("2025-03-01", [make_event().to_record()])
        temp_store.save_day("2025-03-05", [make_event(title="Gym").to_record()])

        days = temp_store.load_all()

        assert set(days) == {"2025-03-01", "2025-03-05"}
        assert days["2025-03-05"][0]["title"] == "Gym"

    def test_load_all_ignores_other_files(self, temp_store):
        """Test that only exact YYYY-MM-DD.json names are read."""
        record = json.dumps([make_event().to_record()])
        for name in ["notes.json", "2025-3-01.json", "backup-2025-03-01.json", "2025-03-01.json.bak", "2025-03-01.txt"]:
            (temp_store.data_dir / name).write_text(record, encoding="utf-8")

        assert temp_store.load_all() == {}

    def test_load_all_skips_malformed_and_empty(self, temp_store):
        """Test that one bad file does not stop the scan."""
        temp_store.path_for("2025-03-01").write_text("{broken", encoding="utf-8")
        temp_store.path_for("2025-03-02").write_text("[]", encoding="utf-8")
        temp_store.save_day("2025-03-03", [make_event().to_record()])

        assert list(temp_store.load_all()) == ["2025-03-03"]

    def test_load_all_missing_directory(self, temp_store):
        """Test that a missing data directory loads as empty."""
        temp_store.data_dir.rmdir()

        assert temp_store.load_all() == {}

    def test_save_recreates_directory(self, temp_store):
        """Test that saving works after the directory was removed."""
        temp_store.data_dir.rmdir()

        assert temp_store.save_day("2025-03-01", [make_event().to_record()]) is True
        assert len(temp_store.load_day("2025-03-01")) == 1

    def test_failed_write_returns_false_and_cleans_up(self, temp_store):
        """Test that a failed rename reports False and leaves no temp file."""
        temp_store.path_for("2025-03-01").mkdir()

        assert temp_store.save_day("2025-03-01", [make_event().to_record()]) is False
        assert not (temp_store.data_dir / "2025-03-01.json.tmp").exists()

    def test_unserializable_records_return_false(self, temp_store):
        """Test that records json cannot encode are refused before writing."""
        assert temp_store.save_day("2025-03-01", [{"title": object()}]) is False
        assert list(temp_store.data_dir.iterdir()) == []

    def test_clear_all(self, temp_store):
        """Test that clear_all deletes day files only."""
        temp_store.save_day("2025-03-01", [make_event().to_record()])
        temp_store.save_day("2025-03-02", [make_event().to_record()])
        other = temp_store.data_dir / "README.txt"
        other.write_text("keep me", encoding="utf-8")

        temp_store.clear_all()

        assert temp_store.load_all() == {}
        assert other.exists()

    def test_persistence_across_instances(self, temp_store):
        """Test that a new store over the same directory sees saved days."""
        temp_store.save_day("2025-03-01", [make_event().to_record()])

        new_store = DayFileStore(temp_store.data_dir)

        assert new_store.load_day("2025-03-01")[0]["title"] == "Standup"
