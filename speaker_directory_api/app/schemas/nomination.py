"""
Pydantic schema for speaker nominations.

A nomination is a pending proposal submitted by anyone through the
public form.  Unlike ``Speaker``, its ``topics`` and ``formats`` are
raw comma-joined strings and the rate fields are kept as the strings
the form sent.  Nominations are never edited; they are either
approved into a speaker or rejected.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .speaker import FeeType, SpeakerType


class Nomination(BaseModel):
    """A pending nomination."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    type: SpeakerType = SpeakerType.MEMBER
    fee: FeeType = FeeType.NO_FEE
    name: str
    email: str
    chapter: str = ""
    topics: str = ""
    formats: str = ""
    rate_currency: str = Field("USD", alias="rateCurrency")
    rate_min: str = Field("", alias="rateMin")
    rate_max: str = Field("", alias="rateMax")
    rate_unit: str = Field("", alias="rateUnit")
    rate_notes: str = Field("", alias="rateNotes")
    nominated_at: str = ""
    referrer_name: str = Field("", alias="referrerName")
    referrer_chapter: str = Field("", alias="referrerChapter")

    @field_validator("topics", "formats", mode="before")
    @classmethod
    def join_sequences(cls, v: Any) -> Any:
        """Accept a list of tokens as well as a comma-joined string."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return ", ".join(str(item) for item in v)
        return v

    @field_validator("rate_min", "rate_max", mode="before")
    @classmethod
    def amount_to_string(cls, v: Optional[Any]) -> Any:
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator(
        "chapter", "rate_currency", "rate_unit", "rate_notes", "referrer_name", "referrer_chapter",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v
