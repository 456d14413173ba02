from typing import Any, Dict, List, Mapping, Union

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from realme.flows.schemas import (
    DailyPlannerOutput,
    JournalAnalysisOutput,
    MentalHealthAssessmentOutput,
    ReframeWorryOutput,
)
from realme.wellness.schemas import Interaction, InteractionType
from realme.wellness.store import WellnessStore

DEFAULT_JOURNAL_HISTORY = 5


def _as_json(value: Union[BaseModel, Mapping[str, Any]]) -> Any:
    return to_jsonable_python(value, by_alias=True)


def _preview(text: str, limit: int = 50) -> str:
    text = text.strip()
    return text if len(text) <= limit else f"{text[:limit]}..."


def journal_interaction(entry: str, analysis: JournalAnalysisOutput) -> Interaction:
    return Interaction(
        type=InteractionType.JOURNAL,
        title="Journal Entry Reflection",
        content=analysis.summary,
        data={"request": {"journalEntry": entry}, "response": _as_json(analysis)},
    )


def worry_interaction(worry: str, reframe: ReframeWorryOutput) -> Interaction:
    return Interaction(
        type=InteractionType.WORRY_JAR,
        title="Worry Placed in the Jar",
        content=reframe.reframed_thought,
        data={"request": {"worry": worry}, "response": _as_json(reframe)},
    )


def assessment_interaction(result: MentalHealthAssessmentOutput) -> Interaction:
    return Interaction(
        type=InteractionType.ASSESSMENT,
        title="Completed Mental Health Assessment",
        content=result.insights,
        data=_as_json(result),
    )


def planner_interaction(request: Union[BaseModel, Mapping[str, Any]], plan: DailyPlannerOutput) -> Interaction:
    request_json = _as_json(request)
    return Interaction(
        type=InteractionType.PLANNER,
        title="Daily Plan Generated",
        content=f"Plan for: {_preview(str(request_json.get('activities', '')))}",
        data={"request": request_json, "response": _as_json(plan)},
    )


def journal_context(store: WellnessStore, limit: int = DEFAULT_JOURNAL_HISTORY) -> Dict[str, Any]:
    """
    Build the optional context fields of a journal analysis request from the session:
    recent journal exchanges (most recent first), goal texts and today's mood.
    """
    previous: List[Dict[str, str]] = []
    for interaction in store.interactions:
        if interaction.type != InteractionType.JOURNAL or not isinstance(interaction.data, dict):
            continue
        entry = (interaction.data.get("request") or {}).get("journalEntry")
        if not entry:
            continue
        previous.append({"entry": entry, "response": interaction.content})
        if len(previous) >= limit:
            break

    today = store.mood_for_today
    return {
        "previous_interactions": previous or None,
        "user_goals": [g.text for g in store.goals] or None,
        "current_mood": today.mood.value if today else None,
    }


def content_preferences(store: WellnessStore) -> str:
    """Goal texts joined for the personalized content flow; empty when there are no goals."""
    return ", ".join(g.text for g in store.goals)
