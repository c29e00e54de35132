"""
AI suggestion endpoints for API v1.

These routes forward prompts to the text-completion backend.  They
never raise: every outcome is a JSON body with ``ok`` set, and
failures carry an ``error`` message.  Missing input answers 400 and
backend or store failures answer 500.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from speaker_directory_api.app.core.exceptions import GatewayError, StoreError
from speaker_directory_api.app.services.speaker_service import SpeakerService
from speaker_directory_api.app.services.suggestion_service import (
    GeminiClient,
    SuggestionService,
    get_client,
    summarize_roster,
)


router = APIRouter()


def _failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": error})


def _gateway_failure() -> JSONResponse:
    return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Gemini function failed")


@router.post("/suggest-topics")
async def suggest_topics(
    body: Optional[Dict[str, Any]] = Body(None),
    client: GeminiClient = Depends(get_client),
) -> Any:
    """Suggest talk topics from ``{"bio": ..., "tags": ...}``."""
    body = body if isinstance(body, dict) else {}
    bio = body.get("bio")
    if not bio:
        return _failure(status.HTTP_400_BAD_REQUEST, "Missing bio")
    try:
        ideas = await SuggestionService.suggest_topics(client, str(bio), body.get("tags"))
    except GatewayError:
        return _gateway_failure()
    return {"ok": True, "ideas": ideas}


@router.post("/find-matching-speakers")
async def find_matching_speakers(
    body: Optional[Dict[str, Any]] = Body(None),
    client: GeminiClient = Depends(get_client),
) -> Any:
    """Return the ids of speakers matching ``eventDescription``.

    ``speakerSummary`` is the roster text sent to the model; when it is
    omitted the roster is built from the current directory.
    """
    body = body if isinstance(body, dict) else {}
    description = body.get("eventDescription")
    if not description:
        return _failure(status.HTTP_400_BAD_REQUEST, "Missing event description")
    roster = body.get("speakerSummary")
    if not roster:
        try:
            roster = summarize_roster(await SpeakerService.list_speakers())
        except StoreError:
            return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error reading database")
    if not roster:
        return _failure(status.HTTP_400_BAD_REQUEST, "Missing speaker summary")
    try:
        ids = await SuggestionService.find_matching_speakers(client, str(description), str(roster))
    except GatewayError:
        return _gateway_failure()
    return {"ok": True, "ids": ids}


@router.post("/generate-event-ideas")
async def generate_event_ideas(
    body: Optional[Dict[str, Any]] = Body(None),
    client: GeminiClient = Depends(get_client),
) -> Any:
    """Draft event titles, a description and Q&A for ``{"speaker": {...}}``."""
    body = body if isinstance(body, dict) else {}
    speaker = body.get("speaker")
    if not isinstance(speaker, dict) or not speaker:
        return _failure(status.HTTP_400_BAD_REQUEST, "Missing speaker profile")
    try:
        ideas = await SuggestionService.generate_event_ideas(client, speaker)
    except GatewayError:
        return _gateway_failure()
    return {"ok": True, "ideas": ideas}
