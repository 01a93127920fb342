# src/vibe_tasks/tasks/categories.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import InvalidCategory
from .task_models import Category, Task

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CategoryStyle:
    emoji: str
    color: str


# Presentation only; tasks store the label.
CATEGORY_STYLES: dict[Category, CategoryStyle] = {
    Category.WORK: CategoryStyle(emoji="💼", color="blue"),
    Category.PERSONAL: CategoryStyle(emoji="🏠", color="green"),
    Category.STUDY: CategoryStyle(emoji="📚", color="yellow"),
    Category.HEALTH: CategoryStyle(emoji="💪", color="red"),
    Category.SHOPPING: CategoryStyle(emoji="🛒", color="cyan"),
}


def palette_labels() -> list[str]:
    return [c.label for c in Category]


def parse_category(label: str | Category) -> Category:
    if isinstance(label, Category):
        return label
    found = Category.parse(str(label))
    if found is None:
        raise InvalidCategory(str(label), palette_labels())
    return found


def assign(task: Task, labels: Iterable[str | Category]) -> list[Category]:
    """
    Replace the task's categories with `labels`.

    The caller passes the complete desired set. Every label is validated
    before the task is touched; duplicates collapse to one entry.
    """
    parsed = [parse_category(label) for label in labels]
    chosen = set(parsed)
    task.categories = [c for c in Category if c in chosen]
    logger.debug("Categories set task_id=%s -> %s", task.id, [c.value for c in task.categories])
    return list(task.categories)
