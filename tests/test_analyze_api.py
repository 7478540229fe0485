import pytest
import requests
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.analyze import get_inference_client, router
from llm.client import InferenceClient


@pytest.fixture
def api(fake_session):
    sessions = {}

    def _make(**session_kwargs):
        session = fake_session(**session_kwargs)
        sessions["current"] = session
        app = FastAPI()
        app.include_router(router)
        app.dependency_overrides[get_inference_client] = lambda: InferenceClient(
            base_url="http://llm.test/v1", session=session
        )
        return TestClient(app)

    _make.sessions = sessions
    return _make


def test_missing_skill_name_is_400(api):
    client = api(content="[]")
    for body in ({}, {"skillName": ""}, {"skillName": "   "}, {"userContext": {"role": "Dev"}}):
        response = client.post("/api/analyze-skill", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing skillName"}
    assert api.sessions["current"].calls == []


def test_suggestions_mode(api):
    client = api(content='Here you go: [{"name": "Linux", "confidence": "high"}, {"name": "YAML"}]')
    user_context = {"experience": 3, "role": "DevOps Engineer", "existingSkills": ["Docker"]}

    response = client.post(
        "/api/analyze-skill", json={"skillName": "Kubernetes", "userContext": user_context}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["skillName"] == "Kubernetes"
    assert body["userContext"] == user_context
    assert body["suggestions"][0] == {
        "name": "Linux",
        "reason": "Prerequisite skill identified by AI analysis",
        "confidence": "high",
        "category": "other",
    }
    assert body["suggestions"][1]["confidence"] == "medium"

    prompt = api.sessions["current"].calls[0]["json"]["messages"][1]["content"]
    assert "3 years of experience" in prompt
    assert "DevOps Engineer" in prompt
    assert "Docker" in prompt


def test_suggestions_mode_without_context(api):
    client = api(content="[]")
    response = client.post("/api/analyze-skill", json={"skillName": "Kubernetes"})
    assert response.status_code == 200
    assert response.json()["suggestions"] == []
    assert response.json()["userContext"] == {}


def test_prompt_mode_returns_dependency_analysis(api):
    client = api(content={
        "dependencies": ["Color Theory"],
        "description": "Visual design",
        "difficulty": 4,
        "estimatedHours": 30,
        "enables": ["Branding"],
    })

    response = client.post(
        "/api/analyze-skill", json={"skillName": "Graphic Design", "prompt": "Analyze Graphic Design"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "dependencies": ["Color Theory"],
        "description": "Visual design",
        "difficulty": 4,
        "estimatedHours": 30,
        "enables": ["Branding"],
        "category": "general",
    }
    assert api.sessions["current"].calls[0]["json"]["messages"][1]["content"] == "Analyze Graphic Design"


def test_upstream_failure_is_500(api):
    client = api(status_code=503, payload={})
    response = client.post("/api/analyze-skill", json={"skillName": "Kubernetes"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to analyze skill prerequisites"}


def test_transport_failure_is_500(api):
    client = api(error=requests.ConnectionError("refused"))
    response = client.post("/api/analyze-skill", json={"skillName": "Kubernetes", "prompt": "x"})
    assert response.status_code == 500


def test_unparseable_prompt_reply_is_500(api):
    client = api(content="not json at all")
    response = client.post("/api/analyze-skill", json={"skillName": "Kubernetes", "prompt": "x"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to analyze skill prerequisites"}
