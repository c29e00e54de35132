import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import requests
from fastapi.testclient import TestClient

from speaker_directory_api.app.core.config import settings
from speaker_directory_api.app.main import app
from speaker_directory_api.app.services.suggestion_service import GeminiClient, get_client


SEED_DOCUMENT: Dict[str, Any] = {
    "speakers": [
        {
            "id": "sp-aisha0001",
            "type": "EO Member Speaker",
            "fee": "No Fee",
            "name": "Aisha Tan",
            "chapter": "EO Singapore",
            "city": "Singapore",
            "country": "Singapore",
            "bio": "Founder of a logistics scale-up.",
            "topics": ["Leadership", "Fundraising"],
            "formats": ["Talk", "Panel"],
            "languages": ["English"],
            "rating": {"avg": 5, "count": 1},
            "lastVerified": "2025-01-10",
            "links": {"linkedin": "", "website": "", "video": ""},
            "contact": {"email": "aisha@example.com", "phone": ""},
            "reviews": [
                {
                    "by": "Ken",
                    "date": "2025-01-12T09:00:00.000Z",
                    "rating": 5,
                    "comment": "Inspiring",
                    "rater_chapter_id": "EO Malaysia",
                }
            ],
            "insights": [],
            "eventHistory": [{"chapter": "EO Vietnam", "date": "2024-11-02"}],
            "photoUrl": "",
        },
        {
            "id": "sp-marcus002",
            "type": "Professional (Non-EO)",
            "fee": "Pro-Paid",
            "name": "Marcus Lee",
            "chapter": "",
            "city": "Sydney",
            "country": "Australia",
            "topics": ["AI Strategy", "Digital Transformation"],
            "formats": ["Workshop"],
            "languages": ["English", "Mandarin"],
            "rating": {"avg": 0, "count": 0},
            "lastVerified": "2025-02-01",
            "links": {"linkedin": "", "website": "https://marcus.example.com", "video": ""},
            "contact": {"email": "marcus@example.com", "phone": "+61 400 000 000"},
            "reviews": [],
            "insights": [],
            "eventHistory": [],
            "photoUrl": "",
            "rate": {
                "currency": "USD",
                "min": 5000,
                "max": 8000,
                "unit": "per talk",
                "notes": "",
                "lastUpdated": "2025-02-01",
            },
        },
    ],
    "nominations": [
        {
            "id": "nom-pending01",
            "type": "EO Member Speaker",
            "fee": "Expenses Only",
            "name": "Jane Doe",
            "email": "jane@x.com",
            "chapter": "EO Philippines",
            "topics": "AI, Leadership",
            "formats": "Talk, Workshop",
            "rateCurrency": "USD",
            "rateMin": "",
            "rateMax": "",
            "rateUnit": "per talk",
            "rateNotes": "",
            "nominated_at": "2025-03-01T10:00:00.000Z",
            "referrerName": "Ken",
            "referrerChapter": "EO Malaysia",
        }
    ],
}


@pytest.fixture(name="seed")
def seed_fixture() -> Dict[str, Any]:
    """A fresh copy of the seed document."""
    return copy.deepcopy(SEED_DOCUMENT)


@pytest.fixture(name="db_path")
def db_path_fixture(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, seed: Dict[str, Any]) -> Path:
    """Point the store at a seeded database file in a temp directory."""
    path = tmp_path / "database.json"
    path.write_text(json.dumps(seed, indent=2), encoding="utf-8")
    monkeypatch.setattr(settings, "database_path", str(path))
    return path


@pytest.fixture(name="client")
def client_fixture(db_path: Path):
    """Test client bound to the seeded database."""
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def gemini_payload(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeSession:
    """Stands in for ``requests.Session`` in front of the Gemini API."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.status_code = 200
        self.payload: Any = gemini_payload("")
        self.raw: Optional[bytes] = None
        self.error: Optional[Exception] = None

    def reply_with(self, text: str) -> None:
        self.status_code = 200
        self.payload = gemini_payload(text)

    def post(self, url, params=None, json=None, timeout=None):
        self.calls.append({"url": url, "params": params, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        response = requests.Response()
        response.status_code = self.status_code
        response.url = url
        response._content = self.raw if self.raw is not None else _dumps(self.payload)
        return response


def _dumps(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


@pytest.fixture(name="fake_session")
def fake_session_fixture() -> FakeSession:
    return FakeSession()


@pytest.fixture(name="gemini")
def gemini_fixture(fake_session: FakeSession) -> FakeSession:
    """Route the suggestion endpoints to a fake Gemini session."""
    session = fake_session
    app.dependency_overrides[get_client] = lambda: GeminiClient(api_key="test-key", session=session)
    yield session
    app.dependency_overrides.pop(get_client, None)
