"""
Session-scoped wellness state with derived achievements.

The store owns the in-memory collections for the active session. Achievements
and the interaction log are written through to a key-value store under keys
namespaced by the identity's email; everything else lives only in memory.
After every mutation the achievement rules are re-evaluated, and each new
unlock queues one notification for the UI to show and dismiss.
"""

import datetime
import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from realme.core.config import STORAGE_KEY_PREFIX
from realme.core.exceptions import InputValidationError, PersistenceError
from realme.wellness.achievements import (
    completed_goal_count,
    derive_unlocks,
    initial_achievements,
    mood_streak,
)
from realme.wellness.persistence import (
    InMemoryKeyValueStore,
    KeyValueStore,
    achievements_key,
    interactions_key,
)
from realme.wellness.schemas import (
    Achievement,
    AchievementKey,
    Goal,
    Identity,
    Interaction,
    Mood,
    MoodEntry,
)

logger = logging.getLogger(__name__)

ASSESSMENT_COOLDOWN = datetime.timedelta(days=7)

_ACHIEVEMENT_LIST = TypeAdapter(List[Achievement])
_INTERACTION_LIST = TypeAdapter(List[Interaction])


class WellnessStore:
    def __init__(
        self,
        kv: Optional[KeyValueStore] = None,
        *,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
        key_prefix: str = STORAGE_KEY_PREFIX,
    ):
        self.kv = kv if kv is not None else InMemoryKeyValueStore()
        self.clock = clock
        self.key_prefix = key_prefix

        self._identity: Optional[Identity] = None
        self._moods: Dict[datetime.date, MoodEntry] = {}
        self._goals: List[Goal] = []
        self._assessment_result: Any = None
        self._assessment_timestamp: Optional[datetime.datetime] = None
        self._personalized_content: Any = None
        self._resource_directory_viewed = False
        self._achievements: List[Achievement] = initial_achievements()
        self._interactions: List[Interaction] = []
        self._notifications: Deque[Achievement] = deque()

    # Read access
    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def moods(self) -> List[MoodEntry]:
        return [self._moods[d] for d in sorted(self._moods)]

    @property
    def goals(self) -> List[Goal]:
        return list(self._goals)

    @property
    def achievements(self) -> List[Achievement]:
        return list(self._achievements)

    @property
    def interactions(self) -> List[Interaction]:
        return list(self._interactions)

    @property
    def assessment_result(self) -> Any:
        return self._assessment_result

    @property
    def assessment_timestamp(self) -> Optional[datetime.datetime]:
        return self._assessment_timestamp

    @property
    def personalized_content(self) -> Any:
        return self._personalized_content

    @property
    def today(self) -> datetime.date:
        return self.clock().date()

    @property
    def mood_for_today(self) -> Optional[MoodEntry]:
        return self._moods.get(self.today)

    @property
    def mood_streak(self) -> int:
        return mood_streak(self._moods.values(), self.today)

    @property
    def completed_goal_count(self) -> int:
        return completed_goal_count(self._goals)

    @property
    def unlocked_count(self) -> int:
        return sum(1 for a in self._achievements if a.unlocked)

    @property
    def assessment_locked(self) -> bool:
        """True while a new assessment is not allowed yet (one per week)."""
        if self._assessment_timestamp is None:
            return False
        return self.clock() < self._assessment_timestamp + ASSESSMENT_COOLDOWN

    @property
    def recently_unlocked(self) -> Optional[Achievement]:
        return self._notifications[0] if self._notifications else None

    def clear_recently_unlocked(self) -> None:
        if self._notifications:
            self._notifications.popleft()

    # Session lifecycle
    def login(self, identity: Union[Identity, Mapping[str, Any]]) -> None:
        """Start a session, restoring persisted achievements and interactions for the identity."""
        identity = Identity.model_validate(identity)
        self._reset_session()
        self._identity = identity
        self._achievements = self._load_achievements(self._identity.email)
        self._interactions = self._load_interactions(self._identity.email)
        logger.info(f"Session started for {self._identity.email}")
        self._recompute()

    def signup(self, identity: Union[Identity, Mapping[str, Any]]) -> None:
        """Start a brand-new account: stored records for the email are discarded."""
        identity = Identity.model_validate(identity)
        self._reset_session()
        self._identity = identity
        email = self._identity.email
        for key in (achievements_key(email, self.key_prefix), interactions_key(email, self.key_prefix)):
            try:
                self.kv.remove(key)
            except PersistenceError as e:
                logger.error(f"Failed to clear stored data {key}: {e}")
        self._recompute()

    def logout(self) -> None:
        """Drop all in-memory session state. Persisted records stay for the next login."""
        if self._identity is not None:
            logger.info(f"Session ended for {self._identity.email}")
        self._reset_session()

    def _reset_session(self) -> None:
        self._identity = None
        self._moods = {}
        self._goals = []
        self._assessment_result = None
        self._assessment_timestamp = None
        self._personalized_content = None
        self._resource_directory_viewed = False
        self._achievements = initial_achievements()
        self._interactions = []
        self._notifications.clear()

    # Moods
    def record_mood(self, entries: Iterable[Union[MoodEntry, Mapping[str, Any]]]) -> None:
        """Upsert mood entries by date; a later entry for a date replaces the earlier one."""
        validated = [MoodEntry.model_validate(e) for e in entries]
        for mood in validated:
            self._moods[mood.date] = mood
        self._recompute()

    def log_mood_today(self, mood: Union[Mood, str]) -> MoodEntry:
        entry = MoodEntry(mood=Mood(mood), date=self.today)
        self.record_mood([entry])
        return entry

    # Goals
    def set_goals(self, goals: Iterable[Union[Goal, Mapping[str, Any]]]) -> None:
        self._goals = [Goal.model_validate(g) for g in goals]
        self._recompute()

    def add_goal(self, text: str) -> Goal:
        text = text.strip()
        if not text:
            raise InputValidationError("Please enter a goal.", field="text")
        goal = Goal(text=text)
        self._goals.append(goal)
        self._recompute()
        return goal

    def toggle_goal(self, goal_id: str) -> Optional[Goal]:
        for i, goal in enumerate(self._goals):
            if goal.id == goal_id:
                updated = goal.model_copy(update={"completed": not goal.completed})
                self._goals[i] = updated
                self._recompute()
                return updated
        return None

    def remove_goal(self, goal_id: str) -> bool:
        remaining = [g for g in self._goals if g.id != goal_id]
        removed = len(remaining) != len(self._goals)
        self._goals = remaining
        self._recompute()
        return removed

    # Generated content and views
    def set_assessment_result(self, result: Any) -> None:
        self._assessment_result = result
        self._assessment_timestamp = self.clock() if result is not None else None
        self._recompute()

    def set_personalized_content(self, content: Any) -> None:
        self._personalized_content = content
        self._recompute()

    def mark_resource_directory_viewed(self) -> None:
        self._resource_directory_viewed = True
        self._recompute()

    # Interactions
    def record_interaction(self, interaction: Union[Interaction, Mapping[str, Any]]) -> Interaction:
        """Prepend an interaction to the log and persist the whole log."""
        record = Interaction.model_validate(interaction)
        # keep in memory exactly what a reload would produce
        if record.data is not None:
            record = record.model_copy(update={"data": to_jsonable_python(record.data, by_alias=True)})
        self._interactions = [record, *self._interactions]
        if self._identity is not None:
            self._write(
                interactions_key(self._identity.email, self.key_prefix),
                _INTERACTION_LIST.dump_json(self._interactions, by_alias=True).decode(),
            )
        self._recompute()
        return record

    # Achievements
    def unlock_achievement(self, key: Union[AchievementKey, str]) -> bool:
        """
        Unlock an achievement. Returns False when it was already unlocked,
        in which case nothing is persisted and no notification is queued.
        """
        key = AchievementKey(key)
        for i, achievement in enumerate(self._achievements):
            if achievement.id != key:
                continue
            if achievement.unlocked:
                return False
            unlocked = achievement.model_copy(update={"unlocked": True})
            self._achievements[i] = unlocked
            if self._identity is not None:
                self._write(
                    achievements_key(self._identity.email, self.key_prefix),
                    _ACHIEVEMENT_LIST.dump_json(self._achievements, by_alias=True).decode(),
                )
            self._notifications.append(unlocked)
            logger.info(f"Achievement unlocked: {unlocked.name}")
            return True
        return False

    def _recompute(self) -> None:
        earned = derive_unlocks(
            goals=self._goals,
            moods=list(self._moods.values()),
            interactions=self._interactions,
            today=self.today,
            assessment_result=self._assessment_result,
            personalized_content=self._personalized_content,
            resource_directory_viewed=self._resource_directory_viewed,
        )
        for achievement in list(self._achievements):
            if achievement.id in earned and not achievement.unlocked:
                self.unlock_achievement(achievement.id)

    # Persistence
    def _write(self, key: str, value: str) -> None:
        try:
            self.kv.set(key, value)
        except PersistenceError as e:
            logger.error(f"Failed to persist {key}: {e}")

    def _load_achievements(self, email: str) -> List[Achievement]:
        key = achievements_key(email, self.key_prefix)
        fresh = initial_achievements()
        try:
            raw = self.kv.get(key)
            if not raw:
                return fresh
            stored = {a.id: a for a in _ACHIEVEMENT_LIST.validate_json(raw)}
        except (PersistenceError, ValidationError, ValueError) as e:
            logger.error(f"Failed to load achievements from {key}: {e}")
            return fresh
        # catalog entries added since the record was written start locked
        return [stored.get(a.id, a) for a in fresh]

    def _load_interactions(self, email: str) -> List[Interaction]:
        key = interactions_key(email, self.key_prefix)
        try:
            raw = self.kv.get(key)
            if not raw:
                return []
            return _INTERACTION_LIST.validate_json(raw)
        except (PersistenceError, ValidationError, ValueError) as e:
            logger.error(f"Failed to load interactions from {key}: {e}")
            return []

    def snapshot(self) -> Dict[str, Any]:
        """Plain, JSON-compatible view of the session for callers that render it."""
        return {
            "identity": self._identity.model_dump(by_alias=True) if self._identity else None,
            "moods": [m.model_dump(mode="json", by_alias=True) for m in self.moods],
            "goals": [g.model_dump(by_alias=True) for g in self._goals],
            "achievements": [a.model_dump(mode="json", by_alias=True) for a in self._achievements],
            "interactions": [i.model_dump(mode="json", by_alias=True) for i in self._interactions],
            "assessmentResult": _dump(self._assessment_result),
            "personalizedContent": _dump(self._personalized_content),
            "moodStreak": self.mood_streak,
            "unlockedCount": self.unlocked_count,
        }


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return to_jsonable_python(value) if value is not None else None
