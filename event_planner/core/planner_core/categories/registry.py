"""Event categories: built-in set plus user-defined entries."""

import logging
import re
from typing import Dict, List, Optional

from pydantic import BaseModel

from ..config import PlannerSettings, SettingsError

logger = logging.getLogger(__name__)

FALLBACK_COLOR = "#888888"

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


class Category(BaseModel):
    """A category as shown to the user."""

    id: str
    name: str
    color: str
    is_default: bool = False


BUILTIN_CATEGORIES: Dict[str, Category] = {
    category.id: category
    for category in [
        Category(id="work", name="Work", color="#3584E4", is_default=True),
        Category(id="personal", name="Personal", color="#33D17A", is_default=True),
        Category(id="fun", name="Fun", color="#FF7800", is_default=True),
        Category(id="family", name="Family", color="#9141AC", is_default=True),
        Category(id="friends", name="Friends", color="#E01B24", is_default=True),
    ]
}


def category_id(name: str) -> str:
    """Derive a category id from a display name ("Side Project" -> "side-project")."""
    return re.sub(r"\s+", "-", name.strip().lower())


class CategoryRegistry:
    """Resolves category ids against built-ins first, then custom entries.

    Custom entries are stored in the settings as ``{"name", "color"}``
    dictionaries; their id is derived from the name.
    """

    def __init__(self, settings: Optional[PlannerSettings] = None):
        self.settings = settings or PlannerSettings()

    def custom_categories(self) -> List[Category]:
        categories = []
        for entry in self.settings.custom_categories:
            try:
                name = entry["name"]
                categories.append(Category(id=category_id(name), name=name, color=entry["color"]))
            except (KeyError, TypeError) as e:
                logger.error(f"Ignoring malformed custom category {entry!r}: {e}")
        return categories

    def all_categories(self) -> List[Category]:
        """Built-in categories followed by custom ones."""
        return list(BUILTIN_CATEGORIES.values()) + self.custom_categories()

    def resolve(self, category: str) -> Category:
        """Look up a category id.

        Unknown ids resolve to a gray category named after the id itself.
        """
        if category in BUILTIN_CATEGORIES:
            return BUILTIN_CATEGORIES[category]

        for custom in self.custom_categories():
            if custom.id == category:
                return custom

        return Category(id=category, name=category, color=FALLBACK_COLOR)

    def color_for(self, category: str) -> str:
        return self.resolve(category).color

    def name_for(self, category: str) -> str:
        return self.resolve(category).name

    def add_custom(self, name: str, color: str) -> Category:
        """Add a user-defined category and save the settings.

        Raises:
            SettingsError: If the name is empty, the id is taken or the
                color is not #RRGGBB
        """
        new_id = self._check(name, color)
        if new_id in BUILTIN_CATEGORIES or self._has_custom(new_id):
            raise SettingsError(f"Category '{new_id}' already exists")

        self.settings.custom_categories.append({"name": name.strip(), "color": color})
        self.settings.save()
        return self.resolve(new_id)

    def update_custom(self, existing_id: str, name: str, color: str) -> Category:
        """Rename or recolor a custom category and save the settings."""
        new_id = self._check(name, color)
        index = self._custom_index(existing_id)

        if new_id != existing_id and (new_id in BUILTIN_CATEGORIES or self._has_custom(new_id)):
            raise SettingsError(f"Category '{new_id}' already exists")

        self.settings.custom_categories[index] = {"name": name.strip(), "color": color}
        self.settings.save()
        return self.resolve(new_id)

    def remove_custom(self, existing_id: str) -> None:
        """Delete a custom category and save the settings.

        Events keep their category id and fall back to the gray default.
        """
        index = self._custom_index(existing_id)
        del self.settings.custom_categories[index]
        self.settings.save()

    def _check(self, name: str, color: str) -> str:
        if not name or not name.strip():
            raise SettingsError("Category name is required")
        if not COLOR_PATTERN.match(color):
            raise SettingsError(f"Category color must look like #RRGGBB, got {color!r}")
        return category_id(name)

    def _has_custom(self, wanted: str) -> bool:
        return any(c.id == wanted for c in self.custom_categories())

    def _custom_index(self, wanted: str) -> int:
        for index, entry in enumerate(self.settings.custom_categories):
            if isinstance(entry, dict) and category_id(entry.get("name", "")) == wanted:
                return index
        raise SettingsError(f"No custom category '{wanted}'")
