"""
Business logic for speaker nominations.

Anyone may nominate a speaker through the public form.  Nominations
wait in the ``nominations`` collection until an administrator either
approves them, which turns the nomination into a new speaker, or
rejects them, which simply drops the record.  A nomination is never
edited in place.
"""

import logging
import math
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as SchemaError

from ..core.exceptions import NotFoundError, ValidationError
from ..core.store import get_store
from ..core.utils import new_id, utc_now_iso, utc_today
from ..schemas.document import Document
from ..schemas.nomination import Nomination
from ..schemas.speaker import Contact, Links, Rate, Rating, Speaker


def split_tokens(value: str) -> List[str]:
    """Split a comma-joined string into trimmed tokens.

    Empty tokens are kept, so ``"AI, , Ops"`` gives ``["AI", "", "Ops"]``
    and an empty string gives ``[""]``.
    """
    return [token.strip() for token in (value or "").split(",")]


def parse_amount(value: Optional[str]) -> Optional[float]:
    """Parse a rate amount typed into the nomination form.

    Blank, unparsable and non-finite values are treated as absent.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        amount = float(text)
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return amount


def speaker_from_nomination(nomination: Nomination) -> Speaker:
    """Build the directory entry for an approved nomination.

    Every field is set explicitly, so the stored record lists the empty
    ones too.  The rating starts at zero and ``lastVerified`` is today.
    Paying fees with a minimum amount also get a structured rate
    disclosure.
    """
    today = utc_today()
    fee_min = parse_amount(nomination.rate_min)
    fee_max = parse_amount(nomination.rate_max)
    rate = None
    if nomination.fee.is_paid and fee_min is not None:
        rate = Rate(
            currency=nomination.rate_currency or "USD",
            min=fee_min,
            max=fee_max,
            unit=nomination.rate_unit,
            notes=nomination.rate_notes,
            last_updated=today,
        )
    return Speaker(
        id=new_id("sp"),
        type=nomination.type,
        fee=nomination.fee,
        name=nomination.name,
        chapter=nomination.chapter,
        city="",
        country="",
        topics=split_tokens(nomination.topics),
        formats=split_tokens(nomination.formats),
        languages=[],
        rating=Rating(avg=0, count=0),
        last_verified=today,
        bio="",
        links=Links(linkedin="", website="", video=""),
        contact=Contact(email=nomination.email, phone=""),
        reviews=[],
        insights=[],
        event_history=[],
        photo_url="",
        rate=rate,
        fee_min=fee_min,
        fee_max=fee_max,
        currency=nomination.rate_currency,
        has_eo_special_rate=False,
        eo_rate_note=nomination.rate_notes,
    )


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


class NominationService:
    """Service for creating, approving and rejecting nominations."""

    @classmethod
    async def list_nominations(cls) -> List[Nomination]:
        """Return all pending nominations in submission order."""
        return get_store().load().nominations

    @classmethod
    async def create_nomination(cls, payload: Optional[Dict[str, Any]]) -> Nomination:
        """Store a new nomination and return it.

        ``name`` and ``email`` are required.  The server assigns ``id``
        and ``nominated_at``; values sent for them are ignored.
        """
        logger = logging.getLogger(__name__)
        if (
            not isinstance(payload, dict)
            or not _has_text(payload.get("name"))
            or not _has_text(payload.get("email"))
        ):
            raise ValidationError("Missing required nomination fields")
        fields = {k: v for k, v in payload.items() if k not in {"id", "nominated_at"}}
        try:
            nomination = Nomination.model_validate(
                {**fields, "id": new_id("nom"), "nominated_at": utc_now_iso()}
            )
        except SchemaError as e:
            raise ValidationError(f"Invalid nomination: {e.errors()[0]['msg']}") from e

        store = get_store()
        document = store.load()
        document.nominations.append(nomination)
        store.save(document)
        logger.info("Nomination %s created for %s", nomination.id, nomination.name)
        return nomination

    @classmethod
    async def approve_nomination(cls, nomination_id: Optional[str]) -> Speaker:
        """Turn a nomination into a speaker.

        The new speaker is appended and the nomination removed in the
        same document write.  Returns the new speaker.
        """
        logger = logging.getLogger(__name__)
        if not _has_text(nomination_id):
            raise ValidationError("Missing nominationId")
        store = get_store()
        document = store.load()
        index = cls._find_index(document, nomination_id)
        nomination = document.nominations.pop(index)
        speaker = speaker_from_nomination(nomination)
        document.speakers.append(speaker)
        store.save(document)
        logger.info(
            "Nomination %s approved; speaker %s (%s) added",
            nomination_id,
            speaker.id,
            speaker.name,
        )
        return speaker

    @classmethod
    async def reject_nomination(cls, nomination_id: Optional[str]) -> None:
        """Drop a nomination without creating a speaker."""
        logger = logging.getLogger(__name__)
        if not _has_text(nomination_id):
            raise ValidationError("Missing nominationId")
        store = get_store()
        document = store.load()
        index = cls._find_index(document, nomination_id)
        document.nominations.pop(index)
        store.save(document)
        logger.info("Nomination %s rejected", nomination_id)

    @staticmethod
    def _find_index(document: Document, nomination_id: str) -> int:
        for index, nomination in enumerate(document.nominations):
            if nomination.id == nomination_id:
                return index
        raise NotFoundError("Nomination not found")
