"""
The AI-backed flows exposed to callers.

Every public coroutine takes the flow's input (a schema instance or a plain
mapping using either snake_case or camelCase keys) and returns the validated
output model, or raises once the retry policy is exhausted.
"""

import json
import logging
from typing import Any, Mapping, Optional, Union

from realme.flows.ai_providers.base import StructuredGenerator
from realme.flows.invoker import Flow
from realme.flows.schemas import (
    DailyPlannerInput,
    DailyPlannerOutput,
    GenerateArticleInput,
    GenerateArticleOutput,
    JournalAnalysisInput,
    JournalAnalysisOutput,
    MentalHealthAssessmentInput,
    MentalHealthAssessmentOutput,
    OrganizationInsightsInput,
    OrganizationInsightsOutput,
    PersonalizedContentInput,
    PersonalizedContentOutput,
    ReframeWorryInput,
    ReframeWorryOutput,
    StoryVettingInput,
    StoryVettingOutput,
    TextCorrectionInput,
    TextCorrectionOutput,
)
import realme.flows.prompts.templates as prompts

logger = logging.getLogger(__name__)

FlowData = Union[Mapping[str, Any], Any]


# Prompt rendering
def _render_daily_plan(data: DailyPlannerInput) -> str:
    return prompts.DAILY_PLANNER_TEMPLATE.format(
        activities=data.activities,
        meal_target=data.meal_target,
        dietary_restrictions=data.dietary_restrictions or "None",
    )


def _render_journal_analysis(data: JournalAnalysisInput) -> str:
    if data.user_goals:
        goals = "".join(f"\n  - {g}" for g in data.user_goals)
    else:
        goals = prompts.NO_GOALS
    if data.previous_interactions:
        previous = "\n".join(
            prompts.PREVIOUS_INTERACTION_TEMPLATE.format(entry=p.entry, response=p.response)
            for p in data.previous_interactions
        )
    else:
        previous = prompts.NO_PREVIOUS_INTERACTIONS
    return prompts.JOURNAL_ANALYSIS_TEMPLATE.format(
        current_mood=f'"{data.current_mood}"' if data.current_mood else prompts.NO_MOOD,
        user_goals=goals,
        previous_interactions=previous,
        journal_entry=data.journal_entry,
    )


def _render_worry(data: ReframeWorryInput) -> str:
    return prompts.WORRY_JAR_TEMPLATE.format(worry=data.worry)


def _render_assessment(data: MentalHealthAssessmentInput) -> str:
    answers = "\n".join(
        prompts.ASSESSMENT_ANSWER_TEMPLATE.format(question=a.question, answer=a.answer)
        for a in data.answers
    )
    return prompts.ASSESSMENT_TEMPLATE.format(answers=answers)


def _render_personalized_content(data: PersonalizedContentInput) -> str:
    return prompts.PERSONALIZED_CONTENT_TEMPLATE.format(
        assessment_results=data.assessment_results,
        preferences=data.preferences.strip() or prompts.DEFAULT_CONTENT_PREFERENCES,
    )


def _render_article(data: GenerateArticleInput) -> str:
    return prompts.ARTICLE_TEMPLATE.format(title=data.title)


def _render_organization_insights(data: OrganizationInsightsInput) -> str:
    return prompts.ORGANIZATION_INSIGHTS_TEMPLATE.format(
        organization_id=data.organization_id,
        member_data=json.dumps(data.member_data, default=str, ensure_ascii=False, indent=2),
    )


def _render_story(data: StoryVettingInput) -> str:
    return prompts.STORY_VETTING_TEMPLATE.format(story=data.story)


def _render_text_correction(data: TextCorrectionInput) -> str:
    return prompts.TEXT_CORRECTION_TEMPLATE.format(raw_text=data.raw_text)


# Short-circuits
def _echo_short_text(data: TextCorrectionInput) -> Optional[TextCorrectionOutput]:
    if len(data.raw_text.strip()) < prompts.TEXT_CORRECTION_MIN_LENGTH:
        return TextCorrectionOutput(corrected_text=data.raw_text)
    return None


def _no_member_data(data: OrganizationInsightsInput) -> Optional[OrganizationInsightsOutput]:
    if not data.member_data:
        return OrganizationInsightsOutput.model_validate(prompts.NO_MEMBER_DATA_INSIGHTS)
    return None


# Flow registry
DAILY_PLANNER_FLOW = Flow("daily_planner", DailyPlannerInput, DailyPlannerOutput, _render_daily_plan)
JOURNAL_ANALYSIS_FLOW = Flow(
    "journal_analysis", JournalAnalysisInput, JournalAnalysisOutput, _render_journal_analysis
)
WORRY_JAR_FLOW = Flow("worry_jar", ReframeWorryInput, ReframeWorryOutput, _render_worry)
ASSESSMENT_FLOW = Flow(
    "mental_health_assessment", MentalHealthAssessmentInput, MentalHealthAssessmentOutput, _render_assessment
)
PERSONALIZED_CONTENT_FLOW = Flow(
    "personalized_content", PersonalizedContentInput, PersonalizedContentOutput, _render_personalized_content
)
ARTICLE_FLOW = Flow("article_generation", GenerateArticleInput, GenerateArticleOutput, _render_article)
ORGANIZATION_INSIGHTS_FLOW = Flow(
    "organization_insights",
    OrganizationInsightsInput,
    OrganizationInsightsOutput,
    _render_organization_insights,
    short_circuit=_no_member_data,
)
STORY_VETTING_FLOW = Flow("story_vetting", StoryVettingInput, StoryVettingOutput, _render_story)
TEXT_CORRECTION_FLOW = Flow(
    "text_correction",
    TextCorrectionInput,
    TextCorrectionOutput,
    _render_text_correction,
    short_circuit=_echo_short_text,
)


async def _run(flow: Flow, data: FlowData, generator: Optional[StructuredGenerator], **kwargs: Any):
    return await flow.invoke(data, generator, **kwargs)


async def plan_day(
    data: FlowData, generator: Optional[StructuredGenerator] = None, **kwargs: Any
) -> DailyPlannerOutput:
    """Build a timed daily schedule and a meal plan."""
    return await _run(DAILY_PLANNER_FLOW, data, generator, **kwargs)


async def analyze_journal_entry(
    data: FlowData, generator: Optional[StructuredGenerator] = None, **kwargs: Any
) -> JournalAnalysisOutput:
    """Summarize a journal entry and offer a reflection, optionally linking past entries and goals."""
    return await _run(JOURNAL_ANALYSIS_FLOW, data, generator, **kwargs)


async def reframe_worry(
    data: FlowData, generator: Optional[StructuredGenerator] = None, **kwargs: Any
) -> ReframeWorryOutput:
    return await _run(WORRY_JAR_FLOW, data, generator, **kwargs)


async def mental_health_assessment(
    data: FlowData, generator: Optional[StructuredGenerator] = None, **kwargs: Any
) -> MentalHealthAssessmentOutput:
    return await _run(ASSESSMENT_FLOW, data, generator, **kwargs)


async def personalized_content_suggestions(
    data: FlowData, generator: Optional[StructuredGenerator] = None, **kwargs: Any
) -> PersonalizedContentOutput:
    """Suggest articles, meditations and exercises from assessment insights and preferences."""
    return await _run(PERSONALIZED_CONTENT_FLOW, data, generator, **kwargs)


async def generate_article(
    data: FlowData, generator: Optional[StructuredGenerator] = None, **kwargs: Any
) -> GenerateArticleOutput:
    return await _run(ARTICLE_FLOW, data, generator, **kwargs)


async def generate_organization_insights(
    data: FlowData, generator: Optional[StructuredGenerator] = None, **kwargs: Any
) -> OrganizationInsightsOutput:
    """
    Aggregate anonymized member data into a leader-facing report.

    An empty member list returns a fixed "no data yet" report without generation.
    """
    return await _run(ORGANIZATION_INSIGHTS_FLOW, data, generator, **kwargs)


async def vet_story(
    data: FlowData, generator: Optional[StructuredGenerator] = None, **kwargs: Any
) -> StoryVettingOutput:
    return await _run(STORY_VETTING_FLOW, data, generator, **kwargs)


async def correct_text(
    data: FlowData, generator: Optional[StructuredGenerator] = None, **kwargs: Any
) -> TextCorrectionOutput:
    """Clean up a speech-to-text transcript. Very short input is returned unchanged."""
    return await _run(TEXT_CORRECTION_FLOW, data, generator, **kwargs)
