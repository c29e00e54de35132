"""
Pydantic schemas for speaker reviews.

A review is a rating from 1 to 5 plus a comment left by a member of
a chapter, optionally tied to the event where the speaker presented.
Reviews are immutable once stored; the server assigns ``date``.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ReviewFormat(str, Enum):
    """Session format the review refers to."""

    TALK = "talk"
    WORKSHOP = "workshop"
    PANEL = "panel"


class Review(BaseModel):
    """A stored review, newest first in ``Speaker.reviews``."""

    by: str
    date: str = ""
    rating: int
    comment: str = ""
    rater_chapter_id: str = ""
    event_name: Optional[str] = None
    event_date: Optional[str] = None
    format: Optional[ReviewFormat] = None


class ReviewCreate(BaseModel):
    """Schema for submitting a new review.

    ``by``, ``comment`` and ``rater_chapter_id`` must be non-blank and
    ``rating`` must be an integer between 1 and 5.  Blank optional
    fields (as sent by an HTML form) are treated as absent.
    """

    by: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5, strict=True)
    comment: str = Field(..., min_length=1)
    rater_chapter_id: str = Field(..., min_length=1)
    event_name: Optional[str] = None
    event_date: Optional[str] = None
    format: Optional[ReviewFormat] = None

    @field_validator("by", "comment", "rater_chapter_id", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("event_name", "event_date", "format", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
