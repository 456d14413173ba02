from typing import Any, Awaitable, Callable, Dict
import logging

from fastapi import APIRouter, Body, Depends, HTTPException

from realme.core.dependency import get_generator
from realme.core.exceptions import AuthorizationError, InputValidationError
from realme.flows.ai_providers.base import StructuredGenerator
from realme.flows.schemas import (
    DailyPlannerOutput,
    GenerateArticleOutput,
    JournalAnalysisOutput,
    MentalHealthAssessmentOutput,
    OrganizationInsightsOutput,
    PersonalizedContentOutput,
    ReframeWorryOutput,
    StoryVettingOutput,
    TextCorrectionOutput,
)
from realme.flows.service import (
    analyze_journal_entry,
    correct_text,
    generate_article,
    mental_health_assessment,
    personalized_content_suggestions,
    plan_day,
    reframe_worry,
    vet_story,
)
from realme.organizations.schemas import OrganizationInsightsRequest
from realme.organizations.service import organization_insights_for

router = APIRouter(prefix="/flows", tags=["Flows"])
logger = logging.getLogger(__name__)

FLOW_RESPONSES = {
    200: {"description": "Flow completed successfully."},
    422: {"description": "Input rejected before generation."},
    502: {"description": "The AI service could not produce a valid response."},
}

GENERIC_FAILURE = "Could not get a response from Aya. Please try again."


async def _run_flow(
    flow: Callable[..., Awaitable[Any]],
    payload: Dict[str, Any],
    generator: StructuredGenerator,
    failure_message: str = GENERIC_FAILURE,
) -> Any:
    try:
        return await flow(payload, generator)
    except InputValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": e.message, "field": e.field},
        )
    except Exception as e:
        logger.error(f"{flow.__name__} failed: {e}")
        raise HTTPException(status_code=502, detail=failure_message)


@router.post(
    "/daily-plan",
    response_model=DailyPlannerOutput,
    summary="Plan the day",
    description="Build a timed schedule with breaks and a meal plan from the user's activities.",
    responses=FLOW_RESPONSES,
)
async def plan_day_route(
    payload: Dict[str, Any] = Body(...),
    generator: StructuredGenerator = Depends(get_generator),
) -> DailyPlannerOutput:
    return await _run_flow(plan_day, payload, generator)


@router.post(
    "/journal-analysis",
    response_model=JournalAnalysisOutput,
    summary="Reflect on a journal entry",
    responses=FLOW_RESPONSES,
)
async def analyze_journal_entry_route(
    payload: Dict[str, Any] = Body(...),
    generator: StructuredGenerator = Depends(get_generator),
) -> JournalAnalysisOutput:
    return await _run_flow(analyze_journal_entry, payload, generator)


@router.post(
    "/worry-jar",
    response_model=ReframeWorryOutput,
    summary="Reframe a worry",
    responses=FLOW_RESPONSES,
)
async def reframe_worry_route(
    payload: Dict[str, Any] = Body(...),
    generator: StructuredGenerator = Depends(get_generator),
) -> ReframeWorryOutput:
    return await _run_flow(reframe_worry, payload, generator)


@router.post(
    "/assessment",
    response_model=MentalHealthAssessmentOutput,
    summary="Run the wellness assessment",
    responses=FLOW_RESPONSES,
)
async def mental_health_assessment_route(
    payload: Dict[str, Any] = Body(...),
    generator: StructuredGenerator = Depends(get_generator),
) -> MentalHealthAssessmentOutput:
    return await _run_flow(
        mental_health_assessment,
        payload,
        generator,
        "There was a problem with your assessment. Please try again later.",
    )


@router.post(
    "/personalized-content",
    response_model=PersonalizedContentOutput,
    summary="Suggest articles, meditations and exercises",
    responses=FLOW_RESPONSES,
)
async def personalized_content_route(
    payload: Dict[str, Any] = Body(...),
    generator: StructuredGenerator = Depends(get_generator),
) -> PersonalizedContentOutput:
    return await _run_flow(
        personalized_content_suggestions,
        payload,
        generator,
        "Could not generate personalized content. Please try again.",
    )


@router.post(
    "/article",
    response_model=GenerateArticleOutput,
    summary="Write a wellness article for a title",
    responses=FLOW_RESPONSES,
)
async def generate_article_route(
    payload: Dict[str, Any] = Body(...),
    generator: StructuredGenerator = Depends(get_generator),
) -> GenerateArticleOutput:
    return await _run_flow(generate_article, payload, generator)


@router.post(
    "/story-vetting",
    response_model=StoryVettingOutput,
    summary="Moderate a community success story",
    responses=FLOW_RESPONSES,
)
async def vet_story_route(
    payload: Dict[str, Any] = Body(...),
    generator: StructuredGenerator = Depends(get_generator),
) -> StoryVettingOutput:
    return await _run_flow(vet_story, payload, generator, "Could not submit your story. Please try again.")


@router.post(
    "/text-correction",
    response_model=TextCorrectionOutput,
    summary="Clean up a speech transcript",
    responses=FLOW_RESPONSES,
)
async def correct_text_route(
    payload: Dict[str, Any] = Body(...),
    generator: StructuredGenerator = Depends(get_generator),
) -> TextCorrectionOutput:
    return await _run_flow(
        correct_text,
        payload,
        generator,
        "Could not polish the transcribed text. Please review it manually.",
    )


@router.post(
    "/organization-insights",
    response_model=OrganizationInsightsOutput,
    summary="Aggregate anonymized member wellness for a leader",
    responses={**FLOW_RESPONSES, 403: {"description": "Caller is not an organization leader."}},
)
async def organization_insights_route(
    request: OrganizationInsightsRequest,
    generator: StructuredGenerator = Depends(get_generator),
) -> OrganizationInsightsOutput:
    try:
        return await organization_insights_for(request.identity, request.members, generator)
    except AuthorizationError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InputValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": e.message, "field": e.field},
        )
    except Exception as e:
        logger.error(f"Organization insights failed for {request.identity.organization_id}: {e}")
        raise HTTPException(
            status_code=502,
            detail="Could not generate organization insights.",
        )
