import logging
from typing import List, Optional

from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP

from api.analyze import router as analyze_router
from config import Config
from dependencies.checker import check_consistency, get_skill_warnings
from dependencies.resolver import DependencyResolver
from llm.client import InferenceClient
from memory.cache import ResolutionCache
from memory.checklists import get_skill_checklist
from memory.models import EVALUATION_LEVEL_MAP, PROFICIENCY_LEVELS, TeachingEvaluation
from memory.store import SkillStore, generate_id
from recommender.engine import (
    generate_learning_path,
    get_skill_learning_recommendations,
    recommend_next,
)
from recommender.missing_skills import DISCOVERY_MODES
from recommender.missing_skills import discover_missing_skills as find_missing_skills

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Skill Tree Mentor")
app.include_router(analyze_router)

mcp = FastMCP("Skill Tree Mentor")

store = SkillStore()
client = InferenceClient()
resolver = DependencyResolver(
    client,
    cache=ResolutionCache(
        max_entries=Config.CACHE_MAX_ENTRIES, ttl_seconds=Config.CACHE_TTL_SECONDS
    ),
)


def _user_context():
    return store.profile.to_context(store.names())


@mcp.tool(
    name="add_skill",
    description="Add a skill to the skill tree at the 'Want to Learn' level",
)
def add_skill(name: str, parent_id: Optional[str] = None):
    skill = store.add_skill(name, parent_id)
    if skill is None:
        return {"error": f"Skill '{name}' was not added (blank, duplicate or unknown parent)."}

    checklist = get_skill_checklist(skill.name)
    if checklist:
        store.initialize_checklist(skill.id, checklist)
    return skill.to_dict()


@mcp.tool(
    name="update_skill_proficiency",
    description="Set a skill's proficiency: Want to Learn, Learning, Proficient, Mastered",
)
def update_skill_proficiency(skill_id: str, proficiency: str):
    if proficiency not in PROFICIENCY_LEVELS:
        return f"Invalid proficiency. Choose from: {', '.join(PROFICIENCY_LEVELS)}"

    skill = store.update_proficiency(skill_id, proficiency)
    if skill is None:
        return {"error": f"Skill '{skill_id}' not found."}
    return skill.to_dict()


@mcp.tool(
    name="remove_skill",
    description="Remove a skill and every skill nested under it",
)
def remove_skill(skill_id: str):
    removed = store.remove_skill(skill_id)
    return {"removed": [s.name for s in removed]}


@mcp.tool(
    name="get_skill_profile",
    description="View the skill tree and the user profile",
)
def get_skill_profile():
    return {
        "profile": _user_context().to_dict(),
        "skills": [s.to_dict() for s in store.skills],
    }


@mcp.tool(
    name="update_user_profile",
    description="Update years of experience, current role and industry",
)
def update_user_profile(
    years_of_experience: Optional[float] = None,
    current_role: Optional[str] = None,
    industry: Optional[str] = None,
):
    store.update_profile(years_of_experience, current_role, industry)
    return _user_context().to_dict()


@mcp.tool(
    name="check_skill_consistency",
    description="Find skills whose prerequisites are missing or rated too low",
)
def check_skill_consistency():
    warnings = check_consistency(store.skills, resolver, _user_context())
    return [w.to_dict() for w in warnings]


@mcp.tool(
    name="get_skill_warnings",
    description="Consistency warnings for a single skill",
)
def get_skill_warnings_tool(skill_id: str):
    warnings = get_skill_warnings(store.skills, skill_id, resolver, _user_context())
    return [w.to_dict() for w in warnings]


@mcp.tool(
    name="get_skill_dependencies",
    description="Prerequisites, difficulty and follow-on skills for any skill name",
)
def get_skill_dependencies(skill_name: str):
    return resolver.resolve(skill_name, _user_context()).to_dict()


@mcp.tool(
    name="get_learning_recommendations",
    description="Ranked list of what to learn next based on the current skill tree",
)
def get_learning_recommendations():
    recommendations = recommend_next(store.skills, resolver, _user_context())
    return [r.to_dict() for r in recommendations]


@mcp.tool(
    name="get_learning_path",
    description="Ordered learning path (prerequisites first) for one or more target skills",
)
def get_learning_path(target_skills: List[str]):
    path = generate_learning_path(target_skills, store.skills, resolver, _user_context())
    return [step.to_dict() for step in path]


@mcp.tool(
    name="get_skill_learning_plan",
    description="Missing prerequisites and natural next steps for one skill",
)
def get_skill_learning_plan(skill_name: str):
    plan = get_skill_learning_recommendations(skill_name, store.skills, resolver, _user_context())
    return plan.to_dict()


@mcp.tool(
    name="discover_missing_skills",
    description="Suggest prerequisite skills missing from the tree (mode: rules, llm, hybrid)",
)
def discover_missing_skills(mode: str = "hybrid"):
    if mode not in DISCOVERY_MODES:
        return f"Invalid mode. Choose from: {', '.join(DISCOVERY_MODES)}"

    missing = find_missing_skills(store.skills, client, mode, _user_context())
    return [m.to_dict() for m in missing]


@mcp.tool(
    name="toggle_checklist_item",
    description="Mark a self-assessment checklist item done or not done",
)
def toggle_checklist_item(skill_id: str, item_id: str):
    item = store.toggle_checklist_item(skill_id, item_id)
    if item is None:
        return {"error": "Checklist item not found."}
    return {"id": item.id, "text": item.text, "completed": item.completed}


@mcp.tool(
    name="evaluate_explanation",
    description="Score a teach-back explanation of a topic for one of your skills",
)
def evaluate_explanation(skill_id: str, topic: str, explanation: str):
    skill = store.get(skill_id)
    if skill is None:
        return {"error": f"Skill '{skill_id}' not found."}

    result = client.evaluate_explanation(topic, explanation, EVALUATION_LEVEL_MAP[skill.proficiency])
    evaluation = TeachingEvaluation(
        id=generate_id(),
        topic=topic,
        user_explanation=explanation,
        clarity=result["clarity"],
        coverage=result["coverage"],
        depth=result["depth"],
        misconceptions=result["misconceptions"],
        total_score=result["total_score"],
        feedback=result["feedback"],
    )
    store.add_teaching_evaluation(skill.id, evaluation)
    return result


app.mount("/mcp", mcp.sse_app())
