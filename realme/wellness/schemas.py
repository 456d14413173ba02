import datetime
from enum import Enum
from typing import Any, Optional
from uuid import uuid4
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class Mood(str, Enum):
    HAPPY = "Happy"
    CALM = "Calm"
    OKAY = "Okay"
    ANXIOUS = "Anxious"
    SAD = "Sad"


class MoodEntry(BaseSchema):
    mood: Mood
    date: datetime.date


class Goal(BaseSchema):
    id: str = Field(default_factory=lambda: uuid4().hex)
    text: str
    completed: bool = False


class AchievementKey(str, Enum):
    FIRST_GOAL = "firstGoal"
    ASSESSMENT_COMPLETE = "assessmentComplete"
    FIRST_JOURNAL = "firstJournal"
    WORRY_JAR_USE = "worryJarUse"
    CONTENT_GENERATED = "contentGenerated"
    FIVE_GOALS_DONE = "fiveGoalsDone"
    TEN_GOALS_DONE = "tenGoalsDone"
    MOOD_WEEK = "moodWeek"
    MOOD_MONTH = "moodMonth"
    FIRST_RESOURCE = "firstResource"


class Achievement(BaseSchema):
    id: AchievementKey
    name: str
    description: str
    unlocked: bool = False


class InteractionType(str, Enum):
    JOURNAL = "Journal"
    WORRY_JAR = "Worry Jar"
    ASSESSMENT = "Assessment"
    PLANNER = "Planner"


class Interaction(BaseSchema):
    id: str = Field(default_factory=lambda: uuid4().hex)
    type: InteractionType
    title: str
    content: str
    timestamp: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )
    data: Any = None


class Identity(BaseSchema):
    """Identity as supplied by the authentication provider."""

    email: str
    uid: Optional[str] = None
    name: Optional[str] = None
    is_leader: bool = False
    organization_id: Optional[str] = None
