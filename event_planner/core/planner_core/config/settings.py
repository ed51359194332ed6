"""Planner settings loaded from a JSON file and environment variables."""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..events import default_data_dir

logger = logging.getLogger(__name__)

MIN_NOTIFICATION_MINUTES = 5
MAX_NOTIFICATION_MINUTES = 60
NOTIFICATION_MINUTES_STEP = 5

_TRUE_VALUES = {"1", "true", "yes", "on"}


class SettingsError(ValueError):
    """Raised when a setting is given a value outside its allowed range."""
    pass


def default_config_path() -> Path:
    """Settings file location ($EVENT_PLANNER_CONFIG or ~/.config/event-planner)."""
    override = os.getenv("EVENT_PLANNER_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "event-planner" / "settings.json"


def validate_notification_minutes(value: int) -> int:
    """Check a default lead time against the allowed 5-60 minute range.

    Raises:
        SettingsError: If the value is out of range or not a multiple of 5
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"Notification minutes must be an integer, got {value!r}")
    if not MIN_NOTIFICATION_MINUTES <= value <= MAX_NOTIFICATION_MINUTES:
        raise SettingsError(
            f"Notification minutes must be between {MIN_NOTIFICATION_MINUTES} "
            f"and {MAX_NOTIFICATION_MINUTES}, got {value}"
        )
    if value % NOTIFICATION_MINUTES_STEP:
        raise SettingsError(f"Notification minutes must be a multiple of {NOTIFICATION_MINUTES_STEP}, got {value}")
    return value


@dataclass
class PlannerSettings:
    """User settings for the planner."""
    notifications_enabled: bool = True
    notification_minutes: int = 15  # default lead time
    data_dir: Optional[str] = None
    custom_categories: List[Dict[str, str]] = field(default_factory=list)

    # Where load() found the settings; save() writes back there
    _config_path = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlannerSettings":
        """Create settings from a dictionary, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "PlannerSettings":
        """Load settings: defaults, then the settings file, then environment.

        Args:
            path: Settings file (default: default_config_path())

        Returns:
            Loaded settings; a broken file is logged and ignored
        """
        config = cls()
        config_path = Path(path) if path is not None else default_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    file_config = json.load(f)
                if not isinstance(file_config, dict):
                    raise ValueError("settings file must contain a JSON object")
                config = cls.from_dict(file_config)
                logger.debug(f"Loaded settings from {config_path}")
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to load settings from {config_path}: {e}")
                config = cls()

        config._apply_environment()
        config._config_path = config_path

        try:
            validate_notification_minutes(config.notification_minutes)
        except SettingsError as e:
            logger.warning(f"{e}; using {cls.notification_minutes}")
            config.notification_minutes = cls.notification_minutes

        config._reset_mistyped()
        return config

    def _reset_mistyped(self) -> None:
        """Replace values of the wrong JSON type with their defaults."""
        defaults = type(self)()
        checks = {
            "notifications_enabled": bool,
            "data_dir": (str, type(None)),
            "custom_categories": list,
        }
        for name, expected in checks.items():
            value = getattr(self, name)
            if not isinstance(value, expected):
                logger.warning(f"Ignoring invalid {name}={value!r} in settings; using {getattr(defaults, name)!r}")
                setattr(self, name, getattr(defaults, name))

    def _apply_environment(self) -> None:
        data_dir = os.getenv("EVENT_PLANNER_DATA_DIR")
        if data_dir:
            self.data_dir = data_dir

        enabled = os.getenv("EVENT_PLANNER_NOTIFICATIONS")
        if enabled is not None:
            self.notifications_enabled = enabled.strip().lower() in _TRUE_VALUES

        minutes = os.getenv("EVENT_PLANNER_NOTIFICATION_MINUTES")
        if minutes:
            try:
                self.notification_minutes = int(minutes)
            except ValueError:
                logger.warning(f"Ignoring invalid EVENT_PLANNER_NOTIFICATION_MINUTES={minutes!r}")

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the settings file.

        Returns:
            Path that was written

        Raises:
            OSError: If the file cannot be written
        """
        target = Path(path or self._config_path or default_config_path())
        target.parent.mkdir(parents=True, exist_ok=True)

        with open(target, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        self._config_path = target
        return target

    def set_notification_minutes(self, value: int) -> None:
        self.notification_minutes = validate_notification_minutes(value)

    def resolved_data_dir(self) -> Path:
        """Directory holding the day files."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return default_data_dir()
