"""HTTP tests for the v1 API."""

import json
from pathlib import Path

import pytest
import requests

API = "/api/v1"


def load(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


class TestData:
    def test_get_data(self, client) -> None:
        response = client.get(f"{API}/data")

        assert response.status_code == 200
        body = response.json()
        assert [s["id"] for s in body["speakers"]] == ["sp-aisha0001", "sp-marcus002"]
        assert body["nominations"][0]["rateCurrency"] == "USD"
        assert body["speakers"][0]["eventHistory"][0]["chapter"] == "EO Vietnam"

    def test_get_data_missing_file(self, client, db_path: Path) -> None:
        db_path.unlink()

        response = client.get(f"{API}/data")

        assert response.status_code == 500
        assert response.json()["detail"] == "Error reading database"

    def test_get_data_malformed_file(self, client, db_path: Path) -> None:
        db_path.write_text("{oops", encoding="utf-8")

        response = client.get(f"{API}/data")

        assert response.status_code == 500
        assert response.json()["detail"] == "Error reading database"


class TestNominations:
    def test_create(self, client, db_path: Path) -> None:
        response = client.post(
            f"{API}/nominations",
            json={"name": "John Roe", "email": "john@x.com", "topics": "Sales", "fee": "Member-Paid",
                  "rateMin": "1000", "referrerName": "Ken"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"].startswith("nom-")
        assert body["nominated_at"]
        assert body["rateMin"] == "1000"
        assert body["referrerName"] == "Ken"
        assert load(db_path)["nominations"][-1]["id"] == body["id"]

    def test_create_with_missing_database(self, client, db_path: Path) -> None:
        db_path.unlink()

        response = client.post(f"{API}/nominations", json={"name": "John Roe", "email": "john@x.com"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Error writing to database"
        assert not db_path.exists()

    @pytest.mark.parametrize("payload", [{}, {"name": "John"}, {"email": "a@x.com"}])
    def test_create_missing_fields(self, client, payload) -> None:
        response = client.post(f"{API}/nominations", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required nomination fields"

    def test_approve(self, client, db_path: Path) -> None:
        response = client.post(f"{API}/nominations/approve", json={"nominationId": "nom-pending01"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Nomination approved"
        assert body["newSpeaker"]["name"] == "Jane Doe"
        assert body["newSpeaker"]["topics"] == ["AI", "Leadership"]
        assert body["newSpeaker"]["rating"] == {"avg": 0, "count": 0}
        saved = load(db_path)
        assert saved["nominations"] == []
        assert saved["speakers"][-1]["id"] == body["newSpeaker"]["id"]

    def test_approve_unknown(self, client, db_path: Path) -> None:
        before = db_path.read_bytes()

        response = client.post(f"{API}/nominations/approve", json={"nominationId": "nom-missing"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Nomination not found"
        assert db_path.read_bytes() == before

    def test_approve_without_id(self, client) -> None:
        assert client.post(f"{API}/nominations/approve", json={}).status_code == 400

    def test_reject(self, client, db_path: Path) -> None:
        response = client.post(f"{API}/nominations/reject", json={"nominationId": "nom-pending01"})

        assert response.status_code == 200
        assert response.json() == {"message": "Nomination rejected"}
        assert load(db_path)["nominations"] == []
        assert len(load(db_path)["speakers"]) == 2

    def test_reject_unknown(self, client) -> None:
        response = client.post(f"{API}/nominations/reject", json={"nominationId": "nom-missing"})

        assert response.status_code == 404


class TestReviews:
    def test_add_review(self, client, db_path: Path) -> None:
        response = client.post(
            f"{API}/speakers/review",
            json={
                "speakerId": "sp-aisha0001",
                "review": {"by": "Mei", "rating": 3, "comment": "Solid", "rater_chapter_id": "EO Japan"},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Review added"
        assert body["speaker"]["rating"] == {"avg": 4.0, "count": 2}
        assert body["speaker"]["reviews"][0]["by"] == "Mei"
        assert load(db_path)["speakers"][0]["rating"]["count"] == 2

    def test_long_comment(self, client) -> None:
        response = client.post(
            f"{API}/speakers/review",
            json={
                "speakerId": "sp-aisha0001",
                "review": {"by": "Mei", "rating": 4, "comment": "x" * 2001, "rater_chapter_id": "EO Japan"},
            },
        )

        assert response.status_code == 200

    @pytest.mark.parametrize("rating", [0, 6, "5"])
    def test_invalid_rating(self, client, db_path: Path, rating) -> None:
        before = db_path.read_bytes()

        response = client.post(
            f"{API}/speakers/review",
            json={
                "speakerId": "sp-aisha0001",
                "review": {"by": "Mei", "rating": rating, "comment": "x", "rater_chapter_id": "EO Japan"},
            },
        )

        assert response.status_code == 400
        assert db_path.read_bytes() == before

    def test_missing_review(self, client) -> None:
        response = client.post(f"{API}/speakers/review", json={"speakerId": "sp-aisha0001"})

        assert response.status_code == 400

    def test_unknown_speaker(self, client) -> None:
        response = client.post(
            f"{API}/speakers/review",
            json={
                "speakerId": "sp-nobody",
                "review": {"by": "Mei", "rating": 3, "comment": "x", "rater_chapter_id": "EO Japan"},
            },
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Speaker not found"


class TestSpeakers:
    def test_list(self, client) -> None:
        response = client.get(f"{API}/speakers")

        assert response.status_code == 200
        body = response.json()
        assert [s["id"] for s in body] == ["sp-aisha0001", "sp-marcus002"]
        assert body[1]["rate"]["lastUpdated"] == "2025-02-01"
        assert body[0]["photoUrl"] == ""
        assert "rate" not in body[0]

    def test_replace(self, client, db_path: Path, seed) -> None:
        response = client.post(f"{API}/speakers", json=[seed["speakers"][0]])

        assert response.status_code == 200
        assert response.json() == {"message": "Database updated successfully.", "count": 1}
        saved = load(db_path)
        assert [s["id"] for s in saved["speakers"]] == ["sp-aisha0001"]
        assert len(saved["nominations"]) == 1

    def test_replace_with_object(self, client, db_path: Path) -> None:
        before = db_path.read_bytes()

        response = client.post(f"{API}/speakers", json={"speakers": []})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid data format. Expected an array of speakers."
        assert db_path.read_bytes() == before

    def test_patch_not_allowed(self, client) -> None:
        assert client.patch(f"{API}/speakers", json=[]).status_code == 405

    def test_search(self, client) -> None:
        response = client.get(f"{API}/speakers/search", params={"q": "AISHA"})

        assert [s["id"] for s in response.json()] == ["sp-aisha0001"]

    def test_search_by_type(self, client) -> None:
        response = client.get(f"{API}/speakers/search", params={"type": "Pro"})

        assert [s["id"] for s in response.json()] == ["sp-marcus002"]

    def test_search_unknown_type(self, client) -> None:
        assert client.get(f"{API}/speakers/search", params={"type": "VIP"}).status_code == 400

    def test_get(self, client) -> None:
        response = client.get(f"{API}/speakers/sp-marcus002")

        assert response.status_code == 200
        assert response.json()["name"] == "Marcus Lee"

    def test_get_unknown(self, client) -> None:
        assert client.get(f"{API}/speakers/sp-nobody").status_code == 404

    def test_update(self, client, db_path: Path, seed) -> None:
        data = dict(seed["speakers"][0], city="Kuala Lumpur")

        response = client.put(f"{API}/speakers/sp-aisha0001", json=data)

        assert response.status_code == 200
        assert response.json()["city"] == "Kuala Lumpur"
        assert load(db_path)["speakers"][0]["city"] == "Kuala Lumpur"

    def test_update_id_mismatch(self, client, seed) -> None:
        response = client.put(f"{API}/speakers/sp-aisha0001", json=seed["speakers"][1])

        assert response.status_code == 400

    def test_update_unknown(self, client) -> None:
        assert client.put(f"{API}/speakers/sp-nobody", json={"name": "Ghost"}).status_code == 404

    def test_delete(self, client, db_path: Path) -> None:
        response = client.delete(f"{API}/speakers/sp-marcus002")

        assert response.status_code == 204
        assert [s["id"] for s in load(db_path)["speakers"]] == ["sp-aisha0001"]

    def test_delete_unknown(self, client) -> None:
        assert client.delete(f"{API}/speakers/sp-nobody").status_code == 404

    def test_import(self, client, db_path: Path) -> None:
        csv_text = "name,type,chapter\nRavi Kumar,pro,\n"

        response = client.post(f"{API}/speakers/import", json={"csv": csv_text})

        assert response.status_code == 201
        assert [s["name"] for s in response.json()] == ["Ravi Kumar"]
        assert len(load(db_path)["speakers"]) == 3

    def test_import_without_csv(self, client) -> None:
        assert client.post(f"{API}/speakers/import", json={}).status_code == 400

    def test_booking_email(self, client) -> None:
        response = client.get(f"{API}/speakers/sp-aisha0001/booking-email")

        assert response.status_code == 200
        body = response.json()
        assert body["subject"] == "EO APAC Speaker Inquiry: Aisha Tan"
        assert body["mailto"].startswith("mailto:aisha@example.com?")


class TestSuggestions:
    def test_suggest_topics(self, client, gemini) -> None:
        gemini.reply_with('["Scaling", "Hiring"]')

        response = client.post(f"{API}/suggest-topics", json={"bio": "Founder", "tags": ["Ops"]})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "ideas": ["Scaling", "Hiring"]}

    def test_suggest_topics_missing_bio(self, client, gemini) -> None:
        response = client.post(f"{API}/suggest-topics", json={})

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Missing bio"}
        assert gemini.calls == []

    def test_suggest_topics_backend_failure(self, client, gemini) -> None:
        gemini.status_code = 503

        response = client.post(f"{API}/suggest-topics", json={"bio": "Founder"})

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "Gemini function failed"}

    def test_find_matching_speakers(self, client, gemini) -> None:
        gemini.reply_with("sp-marcus002, sp-aisha0001,")

        response = client.post(
            f"{API}/find-matching-speakers",
            json={"eventDescription": "AI summit", "speakerSummary": "id: sp-marcus002"},
        )

        assert response.json() == {"ok": True, "ids": ["sp-marcus002", "sp-aisha0001"]}

    def test_find_matching_speakers_builds_roster(self, client, gemini) -> None:
        gemini.reply_with("sp-marcus002")

        response = client.post(f"{API}/find-matching-speakers", json={"eventDescription": "AI summit"})

        assert response.json()["ids"] == ["sp-marcus002"]
        prompt = gemini.calls[0]["json"]["contents"][0]["parts"][0]["text"]
        assert "id: sp-aisha0001, name: Aisha Tan, topics: Leadership, Fundraising" in prompt

    def test_find_matching_speakers_missing_description(self, client, gemini) -> None:
        response = client.post(f"{API}/find-matching-speakers", json={"speakerSummary": "x"})

        assert response.status_code == 400
        assert response.json()["ok"] is False

    def test_find_matching_speakers_empty_directory(self, client, gemini, db_path: Path) -> None:
        db_path.write_text(json.dumps({"speakers": [], "nominations": []}), encoding="utf-8")

        response = client.post(f"{API}/find-matching-speakers", json={"eventDescription": "AI summit"})

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Missing speaker summary"}

    def test_generate_event_ideas(self, client, gemini) -> None:
        gemini.reply_with("Title one")

        response = client.post(
            f"{API}/generate-event-ideas",
            json={"speaker": {"name": "Aisha Tan", "topics": ["Leadership"]}},
        )

        assert response.json() == {"ok": True, "ideas": "Title one"}

    def test_generate_event_ideas_missing_speaker(self, client, gemini) -> None:
        response = client.post(f"{API}/generate-event-ideas", json={"speaker": "Aisha"})

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Missing speaker profile"}

    def test_generate_event_ideas_timeout(self, client, gemini) -> None:
        gemini.error = requests.Timeout("slow")

        response = client.post(f"{API}/generate-event-ideas", json={"speaker": {"name": "A"}})

        assert response.status_code == 500
        assert response.json()["ok"] is False

    @pytest.mark.parametrize("path", ["/suggest-topics", "/find-matching-speakers", "/generate-event-ideas"])
    def test_get_not_allowed(self, client, path) -> None:
        assert client.get(f"{API}{path}").status_code == 405

    def test_suggest_topics_deeply_nested_reply(self, client, gemini) -> None:
        gemini.reply_with("[" * 100000)

        response = client.post(f"{API}/suggest-topics", json={"bio": "Founder"})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "ideas": ["[" * 100000]}
