"""Per-day JSON file persistence for events."""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DAY_FILE_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})\.json$")


def default_data_dir() -> Path:
    """Default location of the day files ($XDG_DATA_HOME/event-planner)."""
    base = os.getenv("XDG_DATA_HOME")
    if base:
        return Path(base) / "event-planner"
    return Path.home() / ".local" / "share" / "event-planner"


class DayFileStore:
    """Stores each day's events as a JSON list in its own YYYY-MM-DD.json file.

    Every failure is logged and degrades to "no events" or a False return;
    nothing here raises to the caller.
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None, logger: Optional[logging.Logger] = None):
        """Initialize the store.

        Args:
            data_dir: Directory holding the day files (default: XDG data dir)
            logger: Logger to report to (default: module logger)
        """
        self.data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        self.logger = logger or logging.getLogger(__name__)
        self._ensure_data_dir()

    def _ensure_data_dir(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Could not create data directory {self.data_dir}: {e}")

    def path_for(self, day_key: str) -> Path:
        """File path for a day key."""
        return self.data_dir / f"{day_key}.json"

    def load_day(self, day_key: str) -> List[Dict[str, Any]]:
        """Load the raw event records of one day.

        Args:
            day_key: Day to load

        Returns:
            The day's records, or an empty list when the file is missing,
            empty or malformed
        """
        path = self.path_for(day_key)
        if not path.exists():
            return []

        try:
            return self._read_records(path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            self.logger.error(f"Error loading events for {day_key}: {e}")
            return []

    def save_day(self, day_key: str, records: List[Dict[str, Any]]) -> bool:
        """Persist a day's records, deleting the file when there are none.

        Returns:
            True on success, False if the write or delete failed
        """
        path = self.path_for(day_key)

        if not records:
            try:
                if path.exists():
                    path.unlink()
                    self.logger.debug(f"Deleted {path.name} (no events)")
                return True
            except OSError as e:
                self.logger.error(f"Error deleting events for {day_key}: {e}")
                return False

        try:
            content = json.dumps(records, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            self.logger.error(f"Error serializing events for {day_key}: {e}")
            return False

        self._ensure_data_dir()

        # Atomic write using temp file + rename
        temp_path = path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as temp_file:
                temp_file.write(content)
            temp_path.replace(path)
        except OSError as e:
            self.logger.error(f"Error saving events for {day_key}: {e}")
            try:
                temp_path.unlink(missing_ok=True)
            except OSError as cleanup_error:
                self.logger.warning(f"Could not remove {temp_path.name}: {cleanup_error}")
            return False

        self.logger.debug(f"Saved {len(records)} events to {path.name}")
        return True

    def load_all(self) -> Dict[str, List[Dict[str, Any]]]:
        """Load every day file in the data directory.

        Files whose names are not exactly YYYY-MM-DD.json are ignored, and a
        malformed file is logged and skipped without stopping the scan.

        Returns:
            Mapping of day key to that day's non-empty record list
        """
        days: Dict[str, List[Dict[str, Any]]] = {}

        if not self.data_dir.is_dir():
            self.logger.debug(f"Data directory {self.data_dir} does not exist yet")
            return days

        try:
            paths = sorted(self.data_dir.iterdir())
        except OSError as e:
            self.logger.error(f"Error reading data directory {self.data_dir}: {e}")
            return days

        for path in paths:
            match = DAY_FILE_PATTERN.match(path.name)
            if not match or not path.is_file():
                continue

            day_key = match.group(1)
            try:
                records = self._read_records(path)
            except (OSError, UnicodeDecodeError, ValueError) as e:
                self.logger.error(f"Error loading {path.name}: {e}")
                continue

            if records:
                days[day_key] = records

        self.logger.debug(f"Loaded {len(days)} days with events from {self.data_dir}")
        return days

    def clear_all(self) -> None:
        """Delete every day file (other files in the directory are kept)."""
        if not self.data_dir.is_dir():
            return

        try:
            for path in list(self.data_dir.iterdir()):
                if DAY_FILE_PATTERN.match(path.name) and path.is_file():
                    path.unlink()
        except OSError as e:
            self.logger.error(f"Error clearing data: {e}")

    def _read_records(self, path: Path) -> List[Dict[str, Any]]:
        """Read one day file.

        Raises:
            OSError, UnicodeDecodeError: If the file cannot be read
            ValueError: If the content is not a JSON list of objects
        """
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return []

        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON list, got {type(data).__name__}")

        return [record for record in data if isinstance(record, dict)]
