"""
The persisted aggregate: one JSON document with two collections.
"""

from typing import List

from pydantic import BaseModel, Field

from .nomination import Nomination
from .speaker import Speaker


class Document(BaseModel):
    """Whole-store snapshot loaded and saved in one piece."""

    speakers: List[Speaker] = Field(default_factory=list)
    nominations: List[Nomination] = Field(default_factory=list)
