import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from llm.client import InferenceClient
from memory.models import UserContext

logger = logging.getLogger(__name__)

router = APIRouter()


class AnalyzeSkillRequest(BaseModel):
    skillName: Optional[str] = None
    prompt: Optional[str] = None
    userContext: Optional[Dict[str, Any]] = None


@lru_cache(maxsize=1)
def get_inference_client() -> InferenceClient:
    return InferenceClient()


@router.post("/api/analyze-skill")
def analyze_skill(
    payload: AnalyzeSkillRequest,
    client: InferenceClient = Depends(get_inference_client),
):
    """
    Proxy a skill analysis to the inference endpoint.

    With a prompt the caller gets the validated dependency analysis; without
    one the endpoint asks for missing prerequisites of skillName.
    """
    skill_name = (payload.skillName or "").strip()
    if not skill_name:
        return JSONResponse(status_code=400, content={"error": "Missing skillName"})

    try:
        if payload.prompt:
            return client.analyze_dependencies(skill_name, payload.prompt)

        user_context = UserContext.from_dict(payload.userContext)
        suggestions = client.discover_prerequisites(skill_name, user_context)
    except Exception:
        logger.exception("Error in analyze-skill for '%s'", skill_name)
        return JSONResponse(
            status_code=500, content={"error": "Failed to analyze skill prerequisites"}
        )

    return {
        "success": True,
        "suggestions": suggestions,
        "skillName": skill_name,
        "userContext": payload.userContext or {},
    }
