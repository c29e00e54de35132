"""
Review endpoint for API v1.

Visitors rate a speaker from the profile view.  The response carries
the updated speaker so the client can show the new average at once.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException, status
from fastapi.encoders import jsonable_encoder

from speaker_directory_api.app.core.exceptions import NotFoundError, StoreError, ValidationError
from speaker_directory_api.app.services.review_service import ReviewService


router = APIRouter()


@router.post("/speakers/review", summary="Submit a review")
async def create_review(body: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    """Add a review to a speaker.

    The body is ``{"speakerId": ..., "review": {...}}``.  ``review``
    needs ``by``, ``rating`` (1-5), ``comment`` and
    ``rater_chapter_id``.
    """
    body = body if isinstance(body, dict) else {}
    try:
        speaker = await ReviewService.add_review(body.get("speakerId"), body.get("review"))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating database",
        )
    return {
        "message": "Review added",
        "speaker": jsonable_encoder(speaker, by_alias=True, exclude_none=True),
    }
