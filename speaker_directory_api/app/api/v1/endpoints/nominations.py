"""
Nomination endpoints for API v1.

Anyone may submit a nomination.  Approving turns it into a directory
speaker; rejecting discards it.  Both admin actions take the
nomination id in the body as ``nominationId``.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.encoders import jsonable_encoder

from speaker_directory_api.app.core.exceptions import NotFoundError, StoreError, ValidationError
from speaker_directory_api.app.core.security import require_admin
from speaker_directory_api.app.schemas.nomination import Nomination
from speaker_directory_api.app.services.nomination_service import NominationService


router = APIRouter()


def _nomination_id(body: Optional[Dict[str, Any]]) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    return body.get("nominationId")


@router.post(
    "",
    response_model=Nomination,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a nomination",
)
async def create_nomination(body: Optional[Dict[str, Any]] = Body(None)) -> Nomination:
    """Create a nomination from the public form.

    ``name`` and ``email`` are required.  The response is the stored
    nomination including its generated ``id`` and ``nominated_at``.
    """
    try:
        return await NominationService.create_nomination(body)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error writing to database",
        )


@router.post("/approve", summary="Approve a nomination")
async def approve_nomination(
    body: Optional[Dict[str, Any]] = Body(None),
    admin: Optional[str] = Depends(require_admin),
) -> Dict[str, Any]:
    """Approve a nomination and return the speaker created from it."""
    try:
        speaker = await NominationService.approve_nomination(_nomination_id(body))
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
        "message": "Nomination approved",
        "newSpeaker": jsonable_encoder(speaker, by_alias=True, exclude_none=True),
    }


@router.post("/reject", summary="Reject a nomination")
async def reject_nomination(
    body: Optional[Dict[str, Any]] = Body(None),
    admin: Optional[str] = Depends(require_admin),
) -> Dict[str, Any]:
    """Discard a nomination."""
    try:
        await NominationService.reject_nomination(_nomination_id(body))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating database",
        )
    return {"message": "Nomination rejected"}
