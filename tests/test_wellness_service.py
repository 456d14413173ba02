"""Tests for turning flow results into log entries and session context."""

from realme.flows.schemas import (
    DailyPlannerOutput,
    JournalAnalysisOutput,
    MentalHealthAssessmentOutput,
    ReframeWorryOutput,
)
from realme.wellness.schemas import AchievementKey, InteractionType
from realme.wellness.service import (
    assessment_interaction,
    content_preferences,
    journal_context,
    journal_interaction,
    planner_interaction,
    worry_interaction,
)

ANALYSIS = JournalAnalysisOutput(summary="You felt stretched thin.", reflection="What would lighten tomorrow?")


def test_journal_interaction_keeps_request_and_response(store):
    record = store.record_interaction(journal_interaction("Long day at work, very tired.", ANALYSIS))
    assert record.type == InteractionType.JOURNAL
    assert record.content == ANALYSIS.summary
    assert record.data["request"] == {"journalEntry": "Long day at work, very tired."}
    assert record.data["response"]["reflection"] == ANALYSIS.reflection
    assert store.recently_unlocked.id == AchievementKey.FIRST_JOURNAL


def test_worry_interaction_uses_reframed_thought(store):
    record = store.record_interaction(
        worry_interaction("The deadline will crush me", ReframeWorryOutput(reframed_thought="One step at a time."))
    )
    assert record.type == InteractionType.WORRY_JAR
    assert record.content == "One step at a time."


def test_planner_interaction_previews_activities():
    plan = DailyPlannerOutput.model_validate(
        {"dailyPlan": [], "mealPlan": {"breakfast": "Eggs", "lunch": "Soup", "dinner": "Pasta"}}
    )
    activities = "Write the report, call the bank, pick up groceries, gym at six, read before bed"
    record = planner_interaction({"activities": activities, "mealTarget": "2000 kcal"}, plan)
    assert record.content == f"Plan for: {activities[:50]}..."
    assert record.data["response"]["mealPlan"]["dinner"] == "Pasta"


def test_journal_context_from_session(store):
    assert journal_context(store) == {"previous_interactions": None, "user_goals": None, "current_mood": None}

    store.add_goal("Sleep by 11pm")
    store.log_mood_today("Anxious")
    for i in range(7):
        store.record_interaction(journal_interaction(f"Entry number {i}", ANALYSIS))
    store.record_interaction(
        worry_interaction("Something else entirely", ReframeWorryOutput(reframed_thought="Breathe."))
    )

    context = journal_context(store)
    assert context["current_mood"] == "Anxious"
    assert context["user_goals"] == ["Sleep by 11pm"]
    assert len(context["previous_interactions"]) == 5
    assert context["previous_interactions"][0] == {"entry": "Entry number 6", "response": ANALYSIS.summary}


def test_content_preferences_joins_goals(store):
    assert content_preferences(store) == ""
    store.add_goal("Walk daily")
    store.add_goal("Read more")
    assert content_preferences(store) == "Walk daily, Read more"


def test_assessment_interaction_stores_the_result(store):
    result = MentalHealthAssessmentOutput(insights="Mostly steady, some tension.", recommendations="- Rest")
    store.set_assessment_result(result)
    record = store.record_interaction(assessment_interaction(result))
    assert record.type == InteractionType.ASSESSMENT
    assert record.content == result.insights
    assert record.data == {"insights": result.insights, "recommendations": "- Rest"}
    assert store.assessment_locked is True
