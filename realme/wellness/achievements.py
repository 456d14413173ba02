"""
Achievement catalog and the pure rules that derive unlocks from session state.
"""

import datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set

from realme.wellness.schemas import (
    Achievement,
    AchievementKey,
    Goal,
    Interaction,
    InteractionType,
    MoodEntry,
)

GOAL_GETTER_THRESHOLD = 5
GOAL_MASTER_THRESHOLD = 10
MOOD_MAPPER_STREAK = 7
MOOD_MARATHON_STREAK = 30

ACHIEVEMENT_CATALOG: Sequence[tuple[AchievementKey, str, str]] = (
    (AchievementKey.FIRST_GOAL, "Goal Setter", "You set your first wellness goal!"),
    (AchievementKey.ASSESSMENT_COMPLETE, "Self-Explorer", "You completed your first assessment."),
    (AchievementKey.FIRST_JOURNAL, "Reflective Mind", "You wrote your first journal entry."),
    (AchievementKey.WORRY_JAR_USE, "Worry Whittler", "You used the Worry Jar for the first time."),
    (AchievementKey.CONTENT_GENERATED, "Pathfinder", "You generated your first personalized content plan."),
    (AchievementKey.FIVE_GOALS_DONE, "Goal Getter", "Completed 5 personal goals. Amazing!"),
    (AchievementKey.TEN_GOALS_DONE, "Goal Master", "Completed 10 personal goals. Incredible!"),
    (AchievementKey.MOOD_WEEK, "Mood Mapper", "Logged your mood for 7 days in a row."),
    (AchievementKey.MOOD_MONTH, "Mood Marathoner", "Logged your mood for 30 days. That is commitment!"),
    (AchievementKey.FIRST_RESOURCE, "Support Seeker", "Viewed the local resources directory."),
)

# Icon identifiers for the UI, one per variant
ACHIEVEMENT_ICONS: Mapping[AchievementKey, str] = {
    AchievementKey.FIRST_GOAL: "star",
    AchievementKey.ASSESSMENT_COMPLETE: "book-user",
    AchievementKey.FIRST_JOURNAL: "award",
    AchievementKey.WORRY_JAR_USE: "glass-water",
    AchievementKey.CONTENT_GENERATED: "trophy",
    AchievementKey.FIVE_GOALS_DONE: "check-circle",
    AchievementKey.TEN_GOALS_DONE: "medal",
    AchievementKey.MOOD_WEEK: "calendar-check",
    AchievementKey.MOOD_MONTH: "calendar-heart",
    AchievementKey.FIRST_RESOURCE: "life-buoy",
}

INTERACTION_ICONS: Mapping[InteractionType, str] = {
    InteractionType.JOURNAL: "book-heart",
    InteractionType.WORRY_JAR: "mail",
    InteractionType.ASSESSMENT: "file-text",
    InteractionType.PLANNER: "bot",
}


def _check_exhaustive(mapping: Mapping[Any, str], variants: Iterable[Any], label: str) -> None:
    missing = set(variants) - set(mapping)
    if missing:
        raise RuntimeError(f"{label} is missing entries for: {sorted(m.value for m in missing)}")


_check_exhaustive(ACHIEVEMENT_ICONS, AchievementKey, "ACHIEVEMENT_ICONS")
_check_exhaustive(INTERACTION_ICONS, InteractionType, "INTERACTION_ICONS")
_check_exhaustive({key: name for key, name, _ in ACHIEVEMENT_CATALOG}, AchievementKey, "ACHIEVEMENT_CATALOG")


def initial_achievements() -> List[Achievement]:
    """Fresh catalog with every achievement locked."""
    return [
        Achievement(id=key, name=name, description=description, unlocked=False)
        for key, name, description in ACHIEVEMENT_CATALOG
    ]


def achievement_icon(key: AchievementKey) -> str:
    return ACHIEVEMENT_ICONS[key]


def interaction_icon(kind: InteractionType) -> str:
    return INTERACTION_ICONS[kind]


def completed_goal_count(goals: Iterable[Goal]) -> int:
    return sum(1 for g in goals if g.completed)


def mood_streak(moods: Iterable[MoodEntry], today: datetime.date) -> int:
    """
    Count consecutive calendar dates with a mood entry, walking back from today.

    A missing entry for today means the streak is 0.
    """
    logged = {m.date for m in moods}
    streak = 0
    day = today
    while day in logged:
        streak += 1
        day -= datetime.timedelta(days=1)
    return streak


def derive_unlocks(
    *,
    goals: Sequence[Goal],
    moods: Sequence[MoodEntry],
    interactions: Sequence[Interaction],
    today: datetime.date,
    assessment_result: Optional[Any] = None,
    personalized_content: Optional[Any] = None,
    resource_directory_viewed: bool = False,
) -> Set[AchievementKey]:
    """Return every achievement the given state qualifies for."""
    earned: Set[AchievementKey] = set()

    if goals:
        earned.add(AchievementKey.FIRST_GOAL)
    done = completed_goal_count(goals)
    if done >= GOAL_GETTER_THRESHOLD:
        earned.add(AchievementKey.FIVE_GOALS_DONE)
    if done >= GOAL_MASTER_THRESHOLD:
        earned.add(AchievementKey.TEN_GOALS_DONE)

    streak = mood_streak(moods, today)
    if streak >= MOOD_MAPPER_STREAK:
        earned.add(AchievementKey.MOOD_WEEK)
    if streak >= MOOD_MARATHON_STREAK:
        earned.add(AchievementKey.MOOD_MONTH)

    kinds = {i.type for i in interactions}
    if InteractionType.JOURNAL in kinds:
        earned.add(AchievementKey.FIRST_JOURNAL)
    if InteractionType.WORRY_JAR in kinds:
        earned.add(AchievementKey.WORRY_JAR_USE)
    if assessment_result is not None or InteractionType.ASSESSMENT in kinds:
        earned.add(AchievementKey.ASSESSMENT_COMPLETE)
    if personalized_content is not None:
        earned.add(AchievementKey.CONTENT_GENERATED)
    if resource_directory_viewed:
        earned.add(AchievementKey.FIRST_RESOURCE)

    return earned
