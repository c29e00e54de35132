"""
Whole-directory endpoint.

The directory UI renders from a single fetch of both collections and
re-fetches after every mutation.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from fastapi.encoders import jsonable_encoder

from speaker_directory_api.app.core.exceptions import StoreError
from speaker_directory_api.app.services.speaker_service import SpeakerService


router = APIRouter()


@router.get("/data", summary="Fetch speakers and nominations")
async def get_data() -> Dict[str, Any]:
    """Return ``{"speakers": [...], "nominations": [...]}``."""
    try:
        document = await SpeakerService.get_directory()
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error reading database",
        )
    return jsonable_encoder(document, by_alias=True, exclude_none=True)
