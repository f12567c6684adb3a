"""Achievement evaluator — ordered milestone predicates over the engine."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from junkyard.engine.progression import ProgressionEngine

logger = logging.getLogger(__name__)

Condition = Callable[["ProgressionEngine"], bool]


@dataclass(frozen=True)
class AchievementDef:
    """A named milestone. ``condition`` must not mutate the engine."""

    id: str
    name: str
    description: str
    condition: Condition


class Achievement:
    """A definition plus its one-way unlocked flag."""

    __slots__ = ("definition", "_unlocked")

    def __init__(self, definition: AchievementDef) -> None:
        self.definition = definition
        self._unlocked = False

    def __repr__(self) -> str:
        return f"Achievement({self.id!r}, unlocked={self._unlocked})"

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def description(self) -> str:
        return self.definition.description

    @property
    def unlocked(self) -> bool:
        return self._unlocked

    def _unlock(self) -> None:
        self._unlocked = True


class AchievementBook:
    """All achievements in declaration order."""

    def __init__(self, definitions: Iterable[AchievementDef]) -> None:
        self._entries: dict[str, Achievement] = {d.id: Achievement(d) for d in definitions}

    def __iter__(self) -> Iterator[Achievement]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, achievement_id: str) -> Achievement | None:
        return self._entries.get(achievement_id)

    def unlocked_count(self) -> int:
        return sum(1 for a in self._entries.values() if a.unlocked)

    def first_newly_satisfied(self, engine: ProgressionEngine) -> Achievement | None:
        """Flip and return the first locked entry whose condition holds.

        At most one per call: callers show one toast per call and pick up
        the rest on later calls.
        """
        for ach in self._entries.values():
            if ach.unlocked:
                continue
            if ach.definition.condition(engine):
                ach._unlock()
                logger.debug("Achievement unlocked: %s", ach.id)
                return ach
        return None

    def restore(self, saved: Iterable) -> None:
        """Re-apply persisted flags by id; unknown ids are skipped."""
        for entry in saved:
            if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
                continue
            ach = self._entries.get(entry["id"])
            if ach is not None and entry.get("unlocked") is True:
                ach._unlock()

    def to_list(self) -> list[dict]:
        return [{"id": a.id, "unlocked": a.unlocked} for a in self._entries.values()]
