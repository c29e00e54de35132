"""
Directory search and filtering.

Search is a case-insensitive substring match over a speaker's name,
topics and chapter combined with a speaker type filter.  It does not
tokenize or rank: matches keep the order of the directory.
"""

from enum import Enum
from typing import Iterable, List, Optional

from ..core.exceptions import ValidationError
from ..schemas.speaker import Speaker, SpeakerType


class TypeFilter(str, Enum):
    ALL = "All"
    MEMBER = "Member"
    PRO = "Pro"


_TYPE_FOR_FILTER = {
    TypeFilter.MEMBER: SpeakerType.MEMBER,
    TypeFilter.PRO: SpeakerType.PRO,
}


def parse_type_filter(value: Optional[str]) -> TypeFilter:
    """Map a query parameter to a ``TypeFilter``; empty means ``All``."""
    if not value:
        return TypeFilter.ALL
    try:
        return TypeFilter(value)
    except ValueError:
        allowed = ", ".join(f.value for f in TypeFilter)
        raise ValidationError(f"Unknown type filter '{value}'; expected one of {allowed}")


def matches_query(speaker: Speaker, query: str) -> bool:
    """Whether ``query`` (already lower-cased and trimmed) hits the speaker."""
    if not query:
        return True
    if query in speaker.name.lower():
        return True
    if any(query in topic.lower() for topic in speaker.topics):
        return True
    return query in (speaker.chapter or "").lower()


def matches_type(speaker: Speaker, type_filter: TypeFilter) -> bool:
    if type_filter is TypeFilter.ALL:
        return True
    return speaker.type == _TYPE_FOR_FILTER[type_filter]


def filter_speakers(
    speakers: Iterable[Speaker],
    query: str = "",
    type_filter: TypeFilter = TypeFilter.ALL,
) -> List[Speaker]:
    """Return the speakers matching both the query and the type filter."""
    q = (query or "").strip().lower()
    return [s for s in speakers if matches_query(s, q) and matches_type(s, type_filter)]
