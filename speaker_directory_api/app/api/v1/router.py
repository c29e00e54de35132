"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
"""

from fastapi import APIRouter

from .endpoints import (
    auth,
    data,
    nominations,
    reviews,
    speakers,
    suggestions,
)

router = APIRouter()

router.include_router(data.router, tags=["data"])
router.include_router(nominations.router, prefix="/nominations", tags=["nominations"])
# The review router defines its own "/speakers/review" path; it is
# included before the speakers router so the literal path is matched
# ahead of "/speakers/{speaker_id}".
router.include_router(reviews.router, tags=["reviews"])
router.include_router(speakers.router, prefix="/speakers", tags=["speakers"])
router.include_router(suggestions.router, tags=["suggestions"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
