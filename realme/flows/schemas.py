# schemas.py
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class FlowSchema(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class FlowOutputSchema(FlowSchema):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


def _require_length(value: str, minimum: int, message: str) -> str:
    if len(value.strip()) < minimum:
        raise ValueError(message)
    return value


# Daily planner
class DailyPlannerInput(FlowSchema):
    activities: str
    meal_target: str
    dietary_restrictions: Optional[str] = None

    @field_validator("activities")
    @classmethod
    def _activities_detail(cls, v: str) -> str:
        return _require_length(v, 10, "Please describe your day in a bit more detail.")

    @field_validator("meal_target")
    @classmethod
    def _meal_target_present(cls, v: str) -> str:
        return _require_length(v, 3, "Please specify a meal target.")


class PlanItem(FlowOutputSchema):
    time: str = Field(description="The suggested time for the activity (e.g., '09:00 AM').")
    activity: str = Field(description="The description of the task or activity.")
    is_meal: bool = Field(description="Whether this activity is a meal.")


class MealPlan(FlowOutputSchema):
    breakfast: str = Field(description="A healthy breakfast suggestion.")
    lunch: str = Field(description="A healthy lunch suggestion.")
    dinner: str = Field(description="A healthy dinner suggestion.")


class DailyPlannerOutput(FlowOutputSchema):
    daily_plan: List[PlanItem] = Field(
        description="A structured schedule for the user's day, including breaks and wellness activities."
    )
    meal_plan: MealPlan = Field(description="A meal plan tailored to the user's targets and restrictions.")


# Journal analysis
class PreviousInteraction(FlowSchema):
    entry: str
    response: str


class JournalAnalysisInput(FlowSchema):
    journal_entry: str
    previous_interactions: Optional[List[PreviousInteraction]] = None
    user_goals: Optional[List[str]] = None
    current_mood: Optional[str] = None

    @field_validator("journal_entry")
    @classmethod
    def _entry_detail(cls, v: str) -> str:
        return _require_length(
            v, 50, "Your journal entry should be at least 50 characters long for a meaningful analysis."
        )


class JournalAnalysisOutput(FlowOutputSchema):
    summary: str = Field(
        description="A brief, empathetic summary of the key themes and emotions in the user's current journal entry."
    )
    reflection: str = Field(
        description="A single, gentle, and constructive question or thought to prompt deeper reflection."
    )
    pattern_insight: Optional[str] = Field(
        default=None,
        description="An observation about a recurring pattern noticed from previous interactions, if one is evident.",
    )
    goal_connection: Optional[str] = Field(
        default=None,
        description="A comment connecting the entry to one of the user's stated goals, if directly relevant.",
    )


# Worry jar
class ReframeWorryInput(FlowSchema):
    worry: str

    @field_validator("worry")
    @classmethod
    def _worry_detail(cls, v: str) -> str:
        return _require_length(v, 10, "Your worry should be at least 10 characters long.")


class ReframeWorryOutput(FlowOutputSchema):
    reframed_thought: str = Field(
        description="A multi-sentence, reassuring, and constructive reframing of the user's worry."
    )


# Assessment
class AssessmentAnswer(FlowSchema):
    question: str
    answer: str

    @field_validator("answer")
    @classmethod
    def _answer_detail(cls, v: str) -> str:
        return _require_length(v, 10, "Please provide a more detailed answer (at least 10 characters).")


class MentalHealthAssessmentInput(FlowSchema):
    answers: List[AssessmentAnswer] = Field(min_length=1)


class MentalHealthAssessmentOutput(FlowOutputSchema):
    insights: str = Field(
        description="A summary of the user's potential emotional state, key themes and areas of concern. Non-clinical."
    )
    recommendations: str = Field(
        description="A list of 3-5 actionable, personalized recommendations for the user."
    )


# Personalized content
class PersonalizedContentInput(FlowSchema):
    assessment_results: str
    preferences: str


class MeditationSuggestion(FlowOutputSchema):
    title: str = Field(description="The title of a guided meditation.")
    youtube_search_query: str = Field(description="An optimized YouTube search query for this meditation.")


class ExerciseSuggestion(FlowOutputSchema):
    title: str = Field(description="The name of a wellness or cognitive exercise.")
    google_search_query: str = Field(description="An optimized Google search query explaining this exercise.")


class PersonalizedContentOutput(FlowOutputSchema):
    articles: List[str] = Field(description="A list of 3-4 suggested wellness article titles.")
    meditations: List[MeditationSuggestion] = Field(description="A list of 3-4 suggested guided meditations.")
    exercises: List[ExerciseSuggestion] = Field(description="A list of 3-4 suggested wellness exercises.")


# Article generation
class GenerateArticleInput(FlowSchema):
    title: str

    @field_validator("title")
    @classmethod
    def _title_present(cls, v: str) -> str:
        return _require_length(v, 1, "Please provide an article title.")


class GenerateArticleOutput(FlowOutputSchema):
    article_content: str = Field(
        description="The full content of the generated article in a readable, blog-style format."
    )


# Organization insights
class OrganizationInsightsInput(FlowSchema):
    organization_id: str
    member_data: List[Dict[str, Any]] = []


class OrganizationInsightsOutput(FlowOutputSchema):
    overall_sentiment: str = Field(description="A 1-2 sentence summary of the organization's overall emotional state.")
    common_themes: str = Field(description="A hyphen-bulleted list of 2-4 recurring themes, one per line.")
    goal_trends: str = Field(description="A hyphen-bulleted list of 2-3 common goals, one per line.")
    positive_highlights: str = Field(description="Recurring positive themes or achievements.")
    areas_for_attention: str = Field(
        description="A hyphen-bulleted list of 2-3 constructive support areas, one per line."
    )


# Story vetting
class StoryVettingInput(FlowSchema):
    story: str

    @field_validator("story")
    @classmethod
    def _story_length(cls, v: str) -> str:
        _require_length(v, 50, "Please share a bit more of your story (at least 50 characters).")
        if len(v) > 500:
            raise ValueError("Your story is a bit long, please keep it under 500 characters.")
        return v


class StoryVettingOutput(FlowOutputSchema):
    is_approved: bool = Field(description="Whether the story is approved for publication.")
    reason: Optional[str] = Field(
        default=None, description="A constructive, polite reason for rejection if the story is not approved."
    )


# Text correction
class TextCorrectionInput(FlowSchema):
    raw_text: str


class TextCorrectionOutput(FlowOutputSchema):
    corrected_text: str = Field(
        description="The corrected, cleaned-up version of the text, grammatically correct and logical."
    )
