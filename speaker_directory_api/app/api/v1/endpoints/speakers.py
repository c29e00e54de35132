"""
Speaker endpoints for API v1.

``GET /speakers`` returns the directory unfiltered and ``POST
/speakers`` replaces the whole collection.  Single records are read,
replaced and deleted under ``/speakers/{speaker_id}``.  Admin writes
go through ``require_admin``.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from speaker_directory_api.app.core.exceptions import NotFoundError, StoreError, ValidationError
from speaker_directory_api.app.core.security import require_admin
from speaker_directory_api.app.schemas.speaker import Speaker
from speaker_directory_api.app.services.search_service import parse_type_filter
from speaker_directory_api.app.services.speaker_service import SpeakerService


router = APIRouter()


def _store_failure() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Error accessing database",
    )


@router.get("", response_model=List[Speaker], response_model_exclude_none=True)
async def list_speakers() -> List[Speaker]:
    """Return every speaker in directory order."""
    try:
        return await SpeakerService.list_speakers()
    except StoreError:
        raise _store_failure()


@router.post("", summary="Replace all speakers")
async def replace_speakers(
    body: Any = Body(None),
    admin: Optional[str] = Depends(require_admin),
) -> Dict[str, Any]:
    """Replace the speaker collection with the array in the body."""
    try:
        speakers = await SpeakerService.replace_speakers(body)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise _store_failure()
    return {"message": "Database updated successfully.", "count": len(speakers)}


@router.get("/search", response_model=List[Speaker], response_model_exclude_none=True)
async def search_speakers(
    q: str = Query("", description="Substring of name, topic or chapter"),
    type: Optional[str] = Query(None, description="'All', 'Member' or 'Pro'"),
) -> List[Speaker]:
    """Filter speakers by a case-insensitive query and speaker type."""
    try:
        type_filter = parse_type_filter(type)
        return await SpeakerService.search_speakers(q, type_filter)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise _store_failure()


@router.post(
    "/import",
    response_model=List[Speaker],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Import speakers from CSV",
)
async def import_speakers(
    body: Optional[Dict[str, Any]] = Body(None),
    admin: Optional[str] = Depends(require_admin),
) -> List[Speaker]:
    """Append the speakers described by ``{"csv": "<file contents>"}``."""
    text = body.get("csv") if isinstance(body, dict) else None
    try:
        return await SpeakerService.import_speakers_csv(text)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise _store_failure()


@router.get("/{speaker_id}", response_model=Speaker, response_model_exclude_none=True)
async def get_speaker(speaker_id: str) -> Speaker:
    try:
        return await SpeakerService.get_speaker(speaker_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError:
        raise _store_failure()


@router.put("/{speaker_id}", response_model=Speaker, response_model_exclude_none=True)
async def update_speaker(
    speaker_id: str,
    body: Optional[Dict[str, Any]] = Body(None),
    admin: Optional[str] = Depends(require_admin),
) -> Speaker:
    """Replace a speaker record as a whole (no partial patch)."""
    try:
        return await SpeakerService.update_speaker(speaker_id, body)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError:
        raise _store_failure()


@router.delete("/{speaker_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_speaker(
    speaker_id: str,
    admin: Optional[str] = Depends(require_admin),
) -> None:
    """Remove a speaker.  Unknown ids return 404."""
    try:
        await SpeakerService.delete_speaker(speaker_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError:
        raise _store_failure()
    return None


@router.get("/{speaker_id}/booking-email", summary="Draft a booking inquiry")
async def booking_email(speaker_id: str) -> Dict[str, str]:
    """Return the subject, body and ``mailto:`` link of a booking inquiry."""
    try:
        return await SpeakerService.draft_booking_email(speaker_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError:
        raise _store_failure()
