"""HTTP tests for the FastAPI routers with the Gemini client and SMS sender faked."""

import base64
import json

import pytest
from fastapi.testclient import TestClient

from ashwini.agents import analysis_workflow
from ashwini.errors import TransportError
from ashwini.main import app
from ashwini.memory.analysis_store import analysis_store
from ashwini.memory.session_store import session_store
from ashwini.models.schemas import DispatchResult
from ashwini.prompts.assistant import FALLBACK_REPLY
from ashwini.routers import emergency
from tests.fakes import FakeDispatcher, FakeGenerationClient


@pytest.fixture(autouse=True)
def clean_stores():
    analysis_store.clear()
    session_store.clear_all()
    yield
    analysis_store.clear()
    session_store.clear_all()


@pytest.fixture
def http():
    return TestClient(app)


def _use_client(monkeypatch, *outcomes):
    client = FakeGenerationClient(*outcomes)
    monkeypatch.setattr(analysis_workflow, "gemini_client", client)
    return client


def test_medical_analysis_and_history(http, monkeypatch):
    _use_client(monkeypatch, json.dumps({
        "criticalAlert": "LOW",
        "summary": "Slightly high cholesterol.",
        "resultsBreakdown": [],
        "termDefinitions": [],
    }))

    response = http.post(
        "/analysis/medical",
        json={"report_text": "LDL 140", "report_type": "Lab Report", "language": "English"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["analysis"]["criticalAlert"] == "LOW"
    assert body["alert"]["triggered"] is False

    history = http.get("/analysis/history").json()
    assert len(history) == 1
    assert history[0]["report_type"] == "Lab Report"
    assert history[0]["analysis"]["criticalAlert"] == "LOW"
    assert "critical_alert" not in body["analysis"]
    assert "resultsBreakdown" in body["analysis"]


def test_medical_analysis_failure_is_502(http, monkeypatch):
    _use_client(monkeypatch, TransportError("offline"))

    response = http.post("/analysis/medical", json={"report_text": "LDL 140"})

    assert response.status_code == 502
    assert response.json()["detail"] == analysis_workflow.GENERATION_FAILED_MESSAGE
    assert http.get("/analysis/history").json() == []


def test_invalid_base64_image_is_422(http):
    response = http.post(
        "/analysis/crop",
        json={"crop_part": "Leaf", "image": {"data": "not base64!!", "mime_type": "image/png"}},
    )
    assert response.status_code == 422


def test_facility_search(http, monkeypatch):
    _use_client(monkeypatch, json.dumps([{"name": "City Clinic", "rating": "4.2", "address": "Main Rd"}]))

    response = http.post("/facilities/search", json={"location": "Pune", "facility_type": "Clinics"})

    assert response.status_code == 200
    assert response.json() == [{"name": "City Clinic", "rating": "4.2", "address": "Main Rd"}]


def test_unknown_wellness_category_is_404(http):
    assert http.get("/wellness/tips/Astrology").status_code == 404


def test_assistant_round_trip(http, monkeypatch):
    fake = FakeGenerationClient("Drink water and rest.", TransportError("offline"))
    monkeypatch.setattr(session_store, "_client_factory", lambda: fake)

    image = base64.b64encode(b"jpeg").decode()
    first = http.post("/assistant/s1/messages", json={"text": "I have a headache"})
    second = http.post(
        "/assistant/s1/messages",
        json={"image": {"data": image, "mime_type": "image/jpeg"}},
    )

    assert first.json()["reply"] == "Drink water and rest."
    assert second.json()["reply"] == FALLBACK_REPLY

    transcript = http.get("/assistant/s1").json()
    assert [t["degraded"] for t in transcript["turns"]] == [False, False, True, True]

    assert http.delete("/assistant/s1").json()["existed"] is True
    assert http.get("/assistant/s1").status_code == 404


def test_empty_assistant_message_is_422(http):
    assert http.post("/assistant/s2/messages", json={"text": "  "}).status_code == 422


def test_manual_sos(http, monkeypatch):
    dispatcher = FakeDispatcher(DispatchResult(success=True))
    monkeypatch.setattr(emergency, "alert_dispatcher", dispatcher)

    response = http.post("/emergency/sos")

    assert response.json() == {"success": True, "error": None}
    assert dispatcher.messages[0].startswith("MANUAL SOS ALERT")
