"""
Business logic for speaker reviews.

Reviews are appended to a speaker (newest first) and never edited or
deleted afterwards.  The speaker's ``rating`` is derived data: after
every insertion ``rating.count`` equals the number of reviews and
``rating.avg`` their mean rating, or 0 when there are none.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as SchemaError

from ..core.exceptions import NotFoundError, ValidationError
from ..core.store import get_store
from ..core.utils import utc_now_iso
from ..schemas.review import Review, ReviewCreate
from ..schemas.speaker import Rating, Speaker


def recompute_rating(speaker: Speaker) -> Rating:
    """Derive ``speaker.rating`` from ``speaker.reviews`` and store it."""
    count = len(speaker.reviews)
    total = sum(review.rating for review in speaker.reviews)
    speaker.rating = Rating(avg=total / count if count else 0, count=count)
    return speaker.rating


class ReviewService:
    """Service for handling speaker reviews."""

    @classmethod
    async def add_review(
        cls,
        speaker_id: Optional[str],
        data: Optional[Dict[str, Any]],
    ) -> Speaker:
        """Add a review to a speaker and return the updated speaker.

        The review is validated before the store is read.  The server
        stamps ``date``, the review is prepended to ``reviews`` and the
        rating recomputed from all reviews.
        """
        logger = logging.getLogger(__name__)
        if not speaker_id or not isinstance(data, dict):
            raise ValidationError("Missing speakerId or review data")
        try:
            review_in = ReviewCreate.model_validate(data)
        except SchemaError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise ValidationError(f"Invalid review field '{field}': {error['msg']}") from e

        store = get_store()
        document = store.load()
        speaker = next((s for s in document.speakers if s.id == speaker_id), None)
        if speaker is None:
            raise NotFoundError("Speaker not found")

        review = Review(date=utc_now_iso(), **review_in.model_dump())
        speaker.reviews = [review, *speaker.reviews]
        rating = recompute_rating(speaker)
        store.save(document)
        logger.info(
            "Review by %s added to speaker %s (avg %.2f over %d)",
            review.by,
            speaker_id,
            rating.avg,
            rating.count,
        )
        return speaker
