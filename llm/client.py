"""
Client for an OpenAI-compatible chat-completions endpoint.

The public helpers (infer, suggest_missing_skills, evaluate_explanation)
never raise: upstream and parse failures are logged and turned into
degraded-but-valid results. The raising variants (analyze_dependencies,
discover_prerequisites) exist for callers that need to report failure,
such as the HTTP analysis endpoint.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from config import Config
from dependencies.models import (
    DEFAULT_CATEGORY,
    DEFAULT_DIFFICULTY,
    DEFAULT_HOURS,
    DependencyRecord,
    SOURCE_REMOTE,
)
from llm.parsing import parse_dependency_analysis, parse_evaluation, parse_suggestions
from llm.prompts import (
    DEPENDENCY_SYSTEM_PROMPT,
    EVALUATION_SYSTEM_PROMPT,
    MISSING_SKILLS_SYSTEM_PROMPT,
    build_dependency_prompt,
    build_evaluation_prompt,
    build_missing_skills_prompt,
)
from memory.models import UserContext

logger = logging.getLogger(__name__)

FALLBACK_EVALUATION = {
    "clarity": 10,
    "coverage": 10,
    "depth": 10,
    "misconceptions": 10,
    "feedback": "Unable to evaluate at this time. Please try again.",
    "total_score": 40,
}


class InferenceError(Exception):
    """The inference endpoint was unreachable or returned an unusable reply."""


def degraded_record(skill_name: str) -> DependencyRecord:
    return DependencyRecord(
        skill_name=skill_name,
        dependencies=[],
        description=f"{skill_name} is a professional skill",
        difficulty=DEFAULT_DIFFICULTY,
        estimated_hours=DEFAULT_HOURS,
        enables=[],
        category=DEFAULT_CATEGORY,
        source=SOURCE_REMOTE,
        resolved_at=datetime.now(),
    )


class InferenceClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        suggestion_max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or Config.LLM_BASE_URL).rstrip("/")
        self.model = model or Config.LLM_MODEL
        self.api_key = api_key if api_key is not None else Config.LLM_API_KEY
        self.temperature = temperature if temperature is not None else Config.LLM_TEMPERATURE
        self.max_tokens = max_tokens or Config.LLM_MAX_TOKENS
        self.suggestion_max_tokens = suggestion_max_tokens or Config.LLM_SUGGESTION_MAX_TOKENS
        self.timeout = timeout or Config.LLM_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def complete(self, system_prompt: str, user_prompt: str, max_tokens: Optional[int] = None) -> str:
        """Send one chat completion and return the message content."""
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": max_tokens or self.max_tokens,
        }

        try:
            response = self.session.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise InferenceError(f"Inference request failed: {e}") from e

        if response.status_code != 200:
            raise InferenceError(f"Inference API error: {response.status_code}")

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise InferenceError("Malformed inference response envelope") from e

        if not isinstance(content, str) or not content.strip():
            raise InferenceError("No content in inference response")
        return content

    def analyze_dependencies(self, skill_name: str, prompt: str) -> Dict[str, Any]:
        """Run a dependency-analysis prompt; raises InferenceError or ValueError."""
        content = self.complete(DEPENDENCY_SYSTEM_PROMPT, prompt)
        return parse_dependency_analysis(content, skill_name)

    def infer(self, skill_name: str, user_context: Optional[UserContext] = None) -> DependencyRecord:
        prompt = build_dependency_prompt(skill_name, user_context)
        try:
            analysis = self.analyze_dependencies(skill_name, prompt)
        except Exception as e:
            logger.warning("Remote skill analysis failed for '%s': %s", skill_name, e)
            return degraded_record(skill_name)

        return DependencyRecord(
            skill_name=skill_name,
            dependencies=analysis["dependencies"],
            description=analysis["description"],
            difficulty=analysis["difficulty"],
            estimated_hours=analysis["estimatedHours"],
            enables=analysis["enables"],
            category=analysis["category"],
            source=SOURCE_REMOTE,
            resolved_at=datetime.now(),
        )

    def discover_prerequisites(
        self, skill_name: str, user_context: Optional[UserContext] = None
    ) -> List[Dict[str, str]]:
        """Ask for missing prerequisite skills; raises InferenceError on upstream failure."""
        content = self.complete(
            MISSING_SKILLS_SYSTEM_PROMPT,
            build_missing_skills_prompt(skill_name, user_context),
            max_tokens=self.suggestion_max_tokens,
        )
        return parse_suggestions(content, skill_name)

    def suggest_missing_skills(
        self, skill_name: str, user_context: Optional[UserContext] = None
    ) -> List[Dict[str, str]]:
        try:
            return self.discover_prerequisites(skill_name, user_context)
        except Exception as e:
            logger.warning("Missing-skill discovery failed for '%s': %s", skill_name, e)
            return []

    def evaluate_explanation(self, topic: str, explanation: str, skill_level: str = "intermediate") -> Dict[str, Any]:
        prompt = build_evaluation_prompt(topic, explanation, skill_level)
        try:
            content = self.complete(EVALUATION_SYSTEM_PROMPT, prompt)
            return parse_evaluation(content)
        except Exception as e:
            logger.warning("Explanation evaluation failed for '%s': %s", topic, e)
            return dict(FALLBACK_EVALUATION)

    def test_connection(self) -> bool:
        try:
            response = self.session.get(
                f"{self.base_url}/models", headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException:
            return False
        return response.status_code == 200
