import json
from datetime import datetime

import pytest

from dependencies.models import DependencyRecord, SOURCE_REMOTE
from dependencies.resolver import DependencyResolver
from memory.cache import ResolutionCache
from memory.models import LEARNING, MASTERED, PROFICIENT, WANT_TO_LEARN, SkillRecord
from memory.store import SkillStore


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replies with queued responses in order."""

    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.calls = []

    def _next(self, method, url, kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)


def completion(content):
    return FakeResponse(200, {"choices": [{"message": {"content": content}}]})


class StubClient:
    """Inference client double: counts remote calls, never touches the network."""

    def __init__(self, records=None, suggestions=None):
        self.records = records or {}
        self.suggestions = suggestions or {}
        self.infer_calls = []
        self.suggest_calls = []

    def infer(self, skill_name, user_context=None):
        self.infer_calls.append(skill_name)
        template = self.records.get(skill_name.lower())
        if template is None:
            return DependencyRecord(
                skill_name=skill_name,
                dependencies=[],
                description=f"{skill_name} is a professional skill",
                difficulty=5,
                estimated_hours=20,
                enables=[],
                category="general",
                source=SOURCE_REMOTE,
                resolved_at=datetime.now(),
            )
        return DependencyRecord(skill_name=skill_name, source=SOURCE_REMOTE, resolved_at=datetime.now(), **template)

    def suggest_missing_skills(self, skill_name, user_context=None):
        self.suggest_calls.append(skill_name)
        return list(self.suggestions.get(skill_name.lower(), []))


@pytest.fixture
def fake_session():
    def _make(content=None, status_code=200, payload=None, error=None):
        if content is not None:
            if not isinstance(content, str):
                content = json.dumps(content)
            return FakeSession(responses=[completion(content)], error=error)
        return FakeSession(responses=[FakeResponse(status_code, payload)], error=error)

    return _make


@pytest.fixture
def stub_client():
    return StubClient()


@pytest.fixture
def resolver(stub_client):
    return DependencyResolver(stub_client, cache=ResolutionCache())


@pytest.fixture
def store():
    return SkillStore()


@pytest.fixture
def make_skill():
    counter = {"n": 0}

    def _make(name, proficiency=WANT_TO_LEARN, parent_id=None):
        counter["n"] += 1
        return SkillRecord(id=f"s{counter['n']}", name=name, proficiency=proficiency, parent_id=parent_id)

    return _make


@pytest.fixture
def devops_skills(make_skill):
    return [
        make_skill("Kubernetes", PROFICIENT),
        make_skill("Docker", WANT_TO_LEARN),
        make_skill("Linux", LEARNING),
    ]


@pytest.fixture
def react_master(make_skill):
    return [make_skill("React", MASTERED)]
