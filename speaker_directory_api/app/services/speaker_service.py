"""
Business logic for directory speakers.

Speakers are listed verbatim (no paging, no server-side filtering on
the list endpoint), replaced as whole records by administrators and
removed by id.  The derived ``rating`` is recomputed from ``reviews``
whenever a record is written, so an edit can never leave the two out
of step.
"""

import csv
import io
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as SchemaError

from ..core.exceptions import NotFoundError, ValidationError
from ..core.store import get_store
from ..core.utils import new_id, utc_today
from ..schemas.document import Document
from ..schemas.speaker import Contact, FeeType, Links, Rating, Speaker, SpeakerType
from .formatting import booking_email
from .review_service import recompute_rating
from .search_service import TypeFilter, filter_speakers


# Column order of the bulk import file.  List columns use ``;``.
CSV_COLUMNS = [
    "name",
    "type",
    "chapter",
    "city",
    "country",
    "topics",
    "formats",
    "languages",
    "fee",
    "bio",
    "photoUrl",
    "email",
    "phone",
    "linkedin",
    "website",
    "video",
]

_TYPE_SHORTHANDS = {"member": SpeakerType.MEMBER, "pro": SpeakerType.PRO, "professional": SpeakerType.PRO}


def _validation_message(e: SchemaError) -> str:
    error = e.errors()[0]
    field = ".".join(str(part) for part in error["loc"])
    return f"'{field}': {error['msg']}" if field else error["msg"]


def _split_list(value: str) -> List[str]:
    return [token.strip() for token in value.split(";") if token.strip()]


class SpeakerService:
    """Service for reading and editing directory speakers."""

    @classmethod
    async def get_directory(cls) -> Document:
        """Return the whole document (speakers and pending nominations)."""
        return get_store().load()

    @classmethod
    async def list_speakers(cls) -> List[Speaker]:
        return get_store().load().speakers

    @classmethod
    async def get_speaker(cls, speaker_id: str) -> Speaker:
        for speaker in get_store().load().speakers:
            if speaker.id == speaker_id:
                return speaker
        raise NotFoundError("Speaker not found")

    @classmethod
    async def search_speakers(
        cls,
        query: str = "",
        type_filter: TypeFilter = TypeFilter.ALL,
    ) -> List[Speaker]:
        """Filter the directory the same way the search view does."""
        speakers = get_store().load().speakers
        return filter_speakers(speakers, query, type_filter)

    @classmethod
    async def update_speaker(cls, speaker_id: str, data: Optional[Dict[str, Any]]) -> Speaker:
        """Replace the speaker ``speaker_id`` with ``data``.

        This is a full replace, not a patch: fields missing from
        ``data`` fall back to their defaults.  If ``data`` carries an
        ``id`` it must equal ``speaker_id``.
        """
        logger = logging.getLogger(__name__)
        if not isinstance(data, dict):
            raise ValidationError("Expected a speaker object")
        body_id = data.get("id")
        if body_id is not None and body_id != speaker_id:
            raise ValidationError("Speaker id in body does not match the URL")
        try:
            speaker = Speaker.model_validate({**data, "id": speaker_id})
        except SchemaError as e:
            raise ValidationError(f"Invalid speaker {_validation_message(e)}") from e
        recompute_rating(speaker)

        store = get_store()
        document = store.load()
        for index, existing in enumerate(document.speakers):
            if existing.id == speaker_id:
                document.speakers[index] = speaker
                break
        else:
            raise NotFoundError("Speaker not found")
        store.save(document)
        logger.info("Speaker %s updated", speaker_id)
        return speaker

    @classmethod
    async def delete_speaker(cls, speaker_id: str) -> None:
        """Remove a speaker.  Deleting an unknown id raises ``NotFoundError``."""
        logger = logging.getLogger(__name__)
        store = get_store()
        document = store.load()
        remaining = [s for s in document.speakers if s.id != speaker_id]
        if len(remaining) == len(document.speakers):
            raise NotFoundError("Speaker not found")
        document.speakers = remaining
        store.save(document)
        logger.info("Speaker %s deleted", speaker_id)

    @classmethod
    async def replace_speakers(cls, items: Any) -> List[Speaker]:
        """Replace the whole speaker collection; nominations are kept."""
        logger = logging.getLogger(__name__)
        if not isinstance(items, list):
            raise ValidationError("Invalid data format. Expected an array of speakers.")
        speakers: List[Speaker] = []
        for position, item in enumerate(items):
            try:
                speaker = Speaker.model_validate(item)
            except SchemaError as e:
                raise ValidationError(
                    f"Invalid speaker at index {position}: {_validation_message(e)}"
                ) from e
            recompute_rating(speaker)
            speakers.append(speaker)

        store = get_store()
        document = store.load()
        document.speakers = speakers
        store.save(document)
        logger.info("Speaker collection replaced (%d speakers)", len(speakers))
        return speakers

    @classmethod
    async def import_speakers_csv(cls, text: Optional[str]) -> List[Speaker]:
        """Append speakers parsed from a CSV export.

        The first row is a header and is skipped; columns follow
        ``CSV_COLUMNS``.  Every imported speaker gets a fresh id and an
        empty review history.
        """
        logger = logging.getLogger(__name__)
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Missing CSV content")
        rows = list(csv.reader(io.StringIO(text)))
        today = utc_today()
        created: List[Speaker] = []
        for line_no, row in enumerate(rows[1:], start=2):
            if not any(cell.strip() for cell in row):
                continue
            values = dict(zip(CSV_COLUMNS, [cell.strip() for cell in row] + [""] * len(CSV_COLUMNS)))
            if not values["name"]:
                raise ValidationError(f"CSV line {line_no}: missing name")
            speaker_type = _TYPE_SHORTHANDS.get(values["type"].lower(), values["type"] or SpeakerType.MEMBER)
            try:
                speaker = Speaker(
                    id=new_id("sp"),
                    name=values["name"],
                    type=speaker_type,
                    fee=values["fee"] or FeeType.NO_FEE,
                    chapter=values["chapter"],
                    city=values["city"],
                    country=values["country"],
                    topics=_split_list(values["topics"]),
                    formats=_split_list(values["formats"]),
                    languages=_split_list(values["languages"]),
                    bio=values["bio"],
                    photo_url=values["photoUrl"],
                    contact=Contact(email=values["email"], phone=values["phone"]),
                    links=Links(
                        linkedin=values["linkedin"],
                        website=values["website"],
                        video=values["video"],
                    ),
                    rating=Rating(avg=0, count=0),
                    reviews=[],
                    insights=[],
                    event_history=[],
                    last_verified=today,
                )
            except SchemaError as e:
                raise ValidationError(f"CSV line {line_no}: {_validation_message(e)}") from e
            created.append(speaker)

        if not created:
            raise ValidationError("CSV contains no speakers")
        store = get_store()
        document = store.load()
        document.speakers.extend(created)
        store.save(document)
        logger.info("Imported %d speakers from CSV", len(created))
        return created

    @classmethod
    async def draft_booking_email(cls, speaker_id: str) -> Dict[str, str]:
        speaker = await cls.get_speaker(speaker_id)
        return booking_email(speaker)
