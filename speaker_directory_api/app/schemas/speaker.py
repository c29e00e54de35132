"""
Pydantic schemas for directory speakers.

A speaker is either an EO member or an external professional.  The
``fee`` decides whether a rate disclosure is shown.  ``rating`` is
derived from ``reviews`` and is only ever recomputed by the review
service, never edited directly.
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .review import Review


class SpeakerType(str, Enum):
    MEMBER = "EO Member Speaker"
    PRO = "Professional (Non-EO)"


class FeeType(str, Enum):
    NO_FEE = "No Fee"
    EXPENSES_ONLY = "Expenses Only"
    MEMBER_PAID = "Member-Paid"
    PRO_PAID = "Pro-Paid"

    @property
    def is_paid(self) -> bool:
        """Whether this fee requires a rate disclosure."""
        return self in (FeeType.MEMBER_PAID, FeeType.PRO_PAID)


class Rating(BaseModel):
    avg: Union[int, float] = 0
    count: int = 0


class Contact(BaseModel):
    email: str = ""
    phone: str = ""


class Links(BaseModel):
    linkedin: str = ""
    website: str = ""
    video: str = ""


class Rate(BaseModel):
    """Rate disclosure for paid speakers."""

    model_config = ConfigDict(populate_by_name=True)

    currency: str = "USD"
    min: Union[int, float]
    max: Optional[Union[int, float]] = None
    unit: str = ""
    notes: str = ""
    last_updated: str = Field("", alias="lastUpdated")


class Insight(BaseModel):
    title: str = ""
    date: str = ""
    link: str = ""
    summary: str = ""


class EventHistoryEntry(BaseModel):
    chapter: str = ""
    date: str = ""


class Speaker(BaseModel):
    """A directory entry.

    Unknown fields are kept so that records written by other clients
    survive a load/save cycle unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., min_length=1)
    type: SpeakerType = SpeakerType.MEMBER
    fee: FeeType = FeeType.NO_FEE
    name: str
    chapter: str = ""
    city: str = ""
    country: str = ""
    bio: str = ""
    topics: List[str] = Field(default_factory=list)
    formats: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    rating: Rating = Field(default_factory=Rating)
    reviews: List[Review] = Field(default_factory=list)
    contact: Contact = Field(default_factory=Contact)
    links: Links = Field(default_factory=Links)
    rate: Optional[Rate] = None
    insights: List[Insight] = Field(default_factory=list)
    event_history: List[EventHistoryEntry] = Field(default_factory=list, alias="eventHistory")
    photo_url: str = Field("", alias="photoUrl")
    last_verified: str = Field("", alias="lastVerified")

    # Flat rate fields kept alongside ``rate`` for older clients.
    fee_min: Optional[Union[int, float]] = None
    fee_max: Optional[Union[int, float]] = None
    currency: Optional[str] = None
    has_eo_special_rate: Optional[bool] = None
    eo_rate_note: Optional[str] = None

    @field_validator("chapter", "city", "country", "bio", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v
