"""Event categories for the event planner."""

from .registry import (
    BUILTIN_CATEGORIES,
    FALLBACK_COLOR,
    Category,
    CategoryRegistry,
    category_id,
)

__all__ = [
    "BUILTIN_CATEGORIES",
    "FALLBACK_COLOR",
    "Category",
    "CategoryRegistry",
    "category_id",
]
