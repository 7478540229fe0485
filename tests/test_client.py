import pytest
import requests

from dependencies.models import SOURCE_REMOTE
from llm.client import FALLBACK_EVALUATION, InferenceClient, InferenceError
from memory.models import UserContext


def _client(session):
    return InferenceClient(
        base_url="http://llm.test/v1/",
        model="test-model",
        api_key="",
        temperature=0.3,
        max_tokens=800,
        suggestion_max_tokens=1000,
        timeout=5,
        session=session,
    )


def test_complete_posts_chat_payload(fake_session):
    session = fake_session(content="hello")
    client = _client(session)

    assert client.complete("system", "user") == "hello"

    call = session.calls[0]
    assert call["url"] == "http://llm.test/v1/chat/completions"
    assert call["timeout"] == 5
    assert call["json"]["model"] == "test-model"
    assert call["json"]["max_tokens"] == 800
    assert call["json"]["messages"][0] == {"role": "system", "content": "system"}
    assert "Authorization" not in call["headers"]


def test_complete_sends_bearer_token(fake_session):
    session = fake_session(content="hello")
    client = _client(session)
    client.api_key = "secret"
    client.complete("s", "u")
    assert session.calls[0]["headers"]["Authorization"] == "Bearer secret"


def test_complete_raises_on_http_error(fake_session):
    client = _client(fake_session(status_code=503, payload={}))
    with pytest.raises(InferenceError, match="503"):
        client.complete("s", "u")


def test_complete_raises_on_transport_error(fake_session):
    client = _client(fake_session(error=requests.ConnectionError("refused")))
    with pytest.raises(InferenceError):
        client.complete("s", "u")


@pytest.mark.parametrize("payload", [
    {},
    {"choices": []},
    {"choices": [{"message": {"content": ""}}]},
    ValueError("not json"),
])
def test_complete_raises_on_bad_envelope(fake_session, payload):
    client = _client(fake_session(payload=payload))
    with pytest.raises(InferenceError):
        client.complete("s", "u")


def test_infer_builds_remote_record(fake_session):
    client = _client(fake_session(content={
        "dependencies": ["Color Theory"],
        "description": "Visual design fundamentals",
        "difficulty": 14,
        "estimatedHours": 0,
        "enables": ["Brand Design"],
        "category": "creative",
    }))

    record = client.infer("Graphic Design", UserContext(years_of_experience=2))

    assert record.skill_name == "Graphic Design"
    assert record.dependencies == ["Color Theory"]
    assert record.difficulty == 10
    assert record.estimated_hours == 1
    assert record.source == SOURCE_REMOTE
    assert record.resolved_at is not None


def test_infer_degrades_on_unparseable_reply(fake_session):
    record = _client(fake_session(content="not json at all")).infer("Graphic Design")

    assert record.dependencies == []
    assert record.enables == []
    assert record.difficulty == 5
    assert record.estimated_hours == 20
    assert record.category == "general"
    assert record.description == "Graphic Design is a professional skill"
    assert record.source == SOURCE_REMOTE


def test_infer_degrades_on_upstream_failure(fake_session):
    record = _client(fake_session(status_code=500, payload={})).infer("Graphic Design")
    assert record.difficulty == 5
    assert record.dependencies == []


def test_infer_prompt_includes_context(fake_session):
    session = fake_session(content="{}")
    ctx = UserContext(years_of_experience=6, current_role="Designer", existing_skills=["Figma"])
    _client(session).infer("Graphic Design", ctx)

    prompt = session.calls[0]["json"]["messages"][1]["content"]
    assert "6 years of experience as a Designer" in prompt
    assert "Figma" in prompt


def test_discover_prerequisites_uses_suggestion_budget(fake_session):
    session = fake_session(content='[{"name": "Linux", "confidence": "high"}]')
    suggestions = _client(session).discover_prerequisites("Kubernetes")

    assert suggestions[0]["name"] == "Linux"
    assert session.calls[0]["json"]["max_tokens"] == 1000


def test_discover_prerequisites_raises_upstream(fake_session):
    with pytest.raises(InferenceError):
        _client(fake_session(status_code=502, payload={})).discover_prerequisites("Kubernetes")


def test_suggest_missing_skills_swallows_errors(fake_session):
    client = _client(fake_session(error=requests.Timeout("slow")))
    assert client.suggest_missing_skills("Kubernetes") == []


def test_evaluate_explanation(fake_session):
    session = fake_session(content={
        "clarity": 20, "coverage": 15, "depth": 10, "misconceptions": 25, "feedback": "Solid",
    })
    result = _client(session).evaluate_explanation("goroutines", "They are green threads", "beginner")

    assert result["total_score"] == 70
    prompt = session.calls[0]["json"]["messages"][1]["content"]
    assert "beginner-level" in prompt
    assert "goroutines vs threads" in prompt


def test_evaluate_explanation_fallback(fake_session):
    result = _client(fake_session(content="no scores here")).evaluate_explanation("docker", "...")
    assert result == FALLBACK_EVALUATION
    assert result is not FALLBACK_EVALUATION


def test_connection(fake_session):
    session = fake_session(status_code=200, payload={"data": []})
    assert _client(session).test_connection() is True
    assert session.calls[0]["url"] == "http://llm.test/v1/models"

    assert _client(fake_session(error=requests.ConnectionError())).test_connection() is False
