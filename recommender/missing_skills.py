"""
Discovery of prerequisite skills the user has not added yet.

Three modes: "rules" reads the static catalog only, "llm" asks the
inference endpoint about complex skills, "hybrid" runs both and promotes
suggestions the two agree on.
"""

import logging
from typing import List, Optional

from dependencies import catalog
from dependencies.models import contains_term, slugify
from memory.models import WANT_TO_LEARN, SkillRecord, UserContext, normalize_skill_name
from recommender.heuristics import COMPLEX_SKILL_KEYWORDS, PREREQUISITE_CATEGORIES
from recommender.models import CONFIDENCE_ORDER, SOURCE_ORDER, MissingSkill

logger = logging.getLogger(__name__)

MAX_LLM_ANALYSES = 3
MAX_MISSING_SKILLS = 10
DISCOVERY_MODES = ("rules", "llm", "hybrid")


def _names_overlap(a: str, b: str) -> bool:
    a, b = normalize_skill_name(a), normalize_skill_name(b)
    return a == b or contains_term(a, b) or contains_term(b, a)


def get_category_for_skill(skill_name: str) -> str:
    for category, keywords in PREREQUISITE_CATEGORIES:
        if any(contains_term(skill_name, keyword) for keyword in keywords):
            return category
    return "other"


def is_complex_skill(skill_name: str) -> bool:
    return any(_names_overlap(skill_name, keyword) for keyword in COMPLEX_SKILL_KEYWORDS)


def remove_duplicate_missing_skills(missing: List[MissingSkill]) -> List[MissingSkill]:
    """First occurrence per name wins; result sorted by confidence, then source."""
    seen = set()
    unique = []
    for item in missing:
        key = normalize_skill_name(item.name)
        if key not in seen:
            seen.add(key)
            unique.append(item)

    return sorted(
        unique,
        key=lambda m: (-CONFIDENCE_ORDER.get(m.confidence, 0), -SOURCE_ORDER.get(m.source, 0)),
    )


def discover_missing_skills_from_rules(skills: List[SkillRecord]) -> List[MissingSkill]:
    missing = []

    for skill in skills:
        if skill.proficiency == WANT_TO_LEARN:
            continue

        rule = catalog.lookup(skill.name)
        if rule is None:
            continue

        for dependency in rule.dependencies:
            if any(_names_overlap(s.name, dependency) for s in skills):
                continue
            missing.append(MissingSkill(
                id=f"rule-{skill.id}-{slugify(dependency)}",
                name=dependency,
                reason=f"Required for {skill.name} - {rule.description}",
                confidence="high",
                source="rules",
                parent_skill=skill.name,
                category=get_category_for_skill(dependency),
            ))

    return remove_duplicate_missing_skills(missing)


def analyze_skill_with_llm(client, skill_name: str, user_context: Optional[UserContext] = None) -> List[MissingSkill]:
    """Remote prerequisite suggestions for one skill; [] when the endpoint fails."""
    suggestions = client.suggest_missing_skills(skill_name, user_context)
    return [
        MissingSkill(
            id=f"llm-{slugify(skill_name)}-{index}",
            name=suggestion["name"],
            reason=suggestion["reason"],
            confidence=suggestion["confidence"],
            source="llm",
            parent_skill=skill_name,
            category=suggestion.get("category"),
        )
        for index, suggestion in enumerate(suggestions)
    ]


def _complex_skills(skills: List[SkillRecord]) -> List[SkillRecord]:
    return [
        s for s in skills
        if s.proficiency != WANT_TO_LEARN and is_complex_skill(s.name)
    ][:MAX_LLM_ANALYSES]


def _not_already_held(suggestions: List[MissingSkill], skills: List[SkillRecord]) -> List[MissingSkill]:
    return [
        suggestion for suggestion in suggestions
        if not any(_names_overlap(s.name, suggestion.name) for s in skills)
    ]


def mark_hybrid_confidence(suggestions: List[MissingSkill]) -> List[MissingSkill]:
    llm_names = {normalize_skill_name(s.name) for s in suggestions if s.source == "llm"}

    marked = []
    for suggestion in suggestions:
        if suggestion.source == "rules" and normalize_skill_name(suggestion.name) in llm_names:
            suggestion = MissingSkill(
                id=suggestion.id,
                name=suggestion.name,
                reason=f"{suggestion.reason} (Confirmed by AI analysis)",
                confidence="high",
                source="hybrid",
                parent_skill=suggestion.parent_skill,
                category=suggestion.category,
            )
        marked.append(suggestion)
    return marked


def discover_missing_skills_from_llm(
    skills: List[SkillRecord], client, user_context: Optional[UserContext] = None
) -> List[MissingSkill]:
    ctx = (user_context or UserContext()).with_existing_skills([s.name for s in skills])
    suggestions = []
    for skill in _complex_skills(skills):
        suggestions.extend(analyze_skill_with_llm(client, skill.name, ctx))
    return remove_duplicate_missing_skills(_not_already_held(suggestions, skills))[:MAX_MISSING_SKILLS]


def discover_missing_skills_hybrid(
    skills: List[SkillRecord], client, user_context: Optional[UserContext] = None
) -> List[MissingSkill]:
    ctx = (user_context or UserContext()).with_existing_skills([s.name for s in skills])

    rule_based = discover_missing_skills_from_rules(skills)
    llm_based = []
    for skill in _complex_skills(skills):
        llm_based.extend(analyze_skill_with_llm(client, skill.name, ctx))

    validated = _not_already_held(rule_based + llm_based, skills)
    return remove_duplicate_missing_skills(mark_hybrid_confidence(validated))[:MAX_MISSING_SKILLS]


def discover_missing_skills(
    skills: List[SkillRecord], client, mode: str = "hybrid", user_context: Optional[UserContext] = None
) -> List[MissingSkill]:
    if mode not in DISCOVERY_MODES:
        raise ValueError(f"Unknown discovery mode '{mode}', expected one of {', '.join(DISCOVERY_MODES)}")

    logger.info("Discovering missing skills for %d skills (mode=%s)", len(skills), mode)
    if mode == "rules":
        return discover_missing_skills_from_rules(skills)
    if mode == "llm":
        return discover_missing_skills_from_llm(skills, client, user_context)
    return discover_missing_skills_hybrid(skills, client, user_context)
