"""
Suggestion gateway backed by the Gemini text-completion API.

Three features send a free-text prompt to the model: topic ideas for
a nominee's bio, speaker matching for an event description and event
ideas for a speaker profile.  The model's answer is untrusted text;
parsing is best effort and degrades to a fallback instead of raising.
Transport problems, error statuses and answers without text are
reported as ``GatewayError``.

The HTTP call goes through a ``requests.Session`` with a bounded
timeout.  A session can be injected, which is how the tests replace
the network.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import requests
from fastapi.concurrency import run_in_threadpool

from ..core.config import settings
from ..core.exceptions import GatewayError
from ..schemas.speaker import Speaker


logger = logging.getLogger(__name__)

MAX_TOPIC_IDEAS = 8

_FENCE_PATTERN = re.compile(r"```[a-zA-Z]*\n?|```\n?")


class GeminiClient:
    """Minimal client for the ``generateContent`` endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the concatenated text of the first candidate."""
        if not self.api_key:
            raise GatewayError("GEMINI_API_KEY is not configured")
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            logger.debug("Sending generateContent request to %s", url)
            response = self.session.post(
                url,
                params={"key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = (err_json.get("error") or {}).get("message") or str(err_json)
                except (ValueError, AttributeError):
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("Gemini request failed (%s): %s", status, message)
            raise GatewayError(f"Gemini request failed ({status}): {message}", status_code=status) from exc
        except requests.Timeout as exc:
            logger.error("Gemini request timed out after %ss", self.timeout)
            raise GatewayError(f"Gemini request timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            logger.error("Gemini request failed: %s", exc)
            raise GatewayError(f"Gemini request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise GatewayError("Gemini returned a non-JSON response") from exc
        return self._extract_text(payload)

    @staticmethod
    def _extract_text(payload: Any) -> str:
        try:
            parts = payload["candidates"][0]["content"]["parts"]
            text = "".join(
                part.get("text", "") for part in parts if isinstance(part, dict)
            )
        except (KeyError, IndexError, TypeError) as exc:
            raise GatewayError("Gemini response is missing candidate text") from exc
        if not text.strip():
            raise GatewayError("Gemini response is missing candidate text")
        return text


def get_client() -> Iterator[GeminiClient]:
    """FastAPI dependency: a client built from the settings.

    The session is closed once the request is done.
    """
    client = GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.gemini_timeout,
    )
    try:
        yield client
    finally:
        client.session.close()


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def strip_code_fences(text: str) -> str:
    return _FENCE_PATTERN.sub("", text)


def parse_topic_list(text: str) -> List[str]:
    """Read topic ideas from the model's answer.

    A JSON array of strings is used as is.  Anything else falls back
    to the non-blank lines of the answer, at most ``MAX_TOPIC_IDEAS``.
    """
    try:
        parsed = json.loads(strip_code_fences(text))
    except (ValueError, RecursionError):
        parsed = None
    if isinstance(parsed, list):
        return [str(item).strip() for item in parsed if item is not None and str(item).strip()]
    logger.warning("Topic suggestions were not a JSON array; falling back to lines")
    lines = [line.strip() for line in text.split("\n")]
    return [line for line in lines if line][:MAX_TOPIC_IDEAS]


def parse_speaker_ids(text: str) -> List[str]:
    """Split the model's comma-separated id list."""
    return [token.strip() for token in text.split(",") if token.strip()]


def summarize_roster(speakers: Iterable[Speaker]) -> str:
    """One ``id: .., name: .., topics: ..`` line per speaker for the matching prompt."""
    return "\n".join(
        f"id: {s.id}, name: {s.name}, topics: {', '.join(s.topics)}" for s in speakers
    )


def _join_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value if item is not None)
    return str(value) if value is not None else ""


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

def topics_prompt(bio: str, tags: Any = None) -> str:
    return (
        f"Suggest 8 concise talk/workshop topics for EO audiences based on this speaker bio: {bio}.\n"
        f"Return as a JSON array of strings. Consider tags: {_join_text(tags) or 'none'}."
    )


def matching_prompt(event_description: str, roster: str) -> str:
    return (
        f'Based on the event description: "{event_description}", and the following speaker list:\n'
        f"{roster}\n"
        "Return only the comma-separated IDs of the top 3 matching speakers."
    )


def event_ideas_prompt(speaker: Mapping[str, Any]) -> str:
    name = _join_text(speaker.get("name")) or "this speaker"
    topics = _join_text(speaker.get("topics")) or "their field"
    return (
        f"Based on the speaker profile of {name} who is an expert in {topics}, "
        "generate three potential event titles, a short event description, "
        "and three sample Q&A questions."
    )


class SuggestionService:
    """AI-assisted suggestions for the nomination form and event planning."""

    @classmethod
    async def suggest_topics(cls, client: GeminiClient, bio: str, tags: Any = None) -> List[str]:
        text = await run_in_threadpool(client.generate, topics_prompt(bio, tags))
        return parse_topic_list(text)

    @classmethod
    async def find_matching_speakers(
        cls,
        client: GeminiClient,
        event_description: str,
        roster: str,
    ) -> List[str]:
        text = await run_in_threadpool(client.generate, matching_prompt(event_description, roster))
        return parse_speaker_ids(text)

    @classmethod
    async def generate_event_ideas(cls, client: GeminiClient, speaker: Dict[str, Any]) -> str:
        return await run_in_threadpool(client.generate, event_ideas_prompt(speaker))
