"""
Learning recommendations built on top of the dependency resolver.

recommend_next() merges four sources in a fixed order (direct "enables"
edges, algorithmic suggestions, semantic alternatives) and keeps the first
occurrence of each skill, so earlier sources win ties. Learning paths walk
prerequisites depth-first and emit them before the skill that needs them.
"""

import logging
from typing import Dict, List, Optional, Set

from dependencies.models import contains_term, slugify
from dependencies.resolver import DependencyResolver
from memory.models import (
    MASTERED,
    PROFICIENT,
    SkillRecord,
    UserContext,
    has_meaningful_proficiency,
    normalize_skill_name,
)
from recommender.heuristics import (
    BROAD_SIMILARITY,
    COMPLEMENTARY_SKILLS,
    FALLBACK_NEXT_STEPS,
    FOUNDATIONAL_SKILLS,
    GENERIC_NEXT_STEPS,
    ROLE_SKILLS,
    SIMILAR_SKILL_DIFFICULTY,
    SIMILAR_SKILL_HOURS,
    SKILL_CLUSTERS,
    TRENDING_SKILLS,
)
from recommender.models import (
    ADVANCED,
    NEXT_STEP,
    PREREQUISITE,
    PRIORITY_ORDER,
    LearningPath,
    LearningRecommendation,
)

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 8
MAX_ALGORITHMIC_SUGGESTIONS = 5
MAX_SEMANTIC_SUGGESTIONS = 3
MAX_SIMILAR_PER_SKILL = 3
MAX_PER_HEURISTIC = 2
MAX_NEXT_STEPS = 5
MAX_FALLBACK_NEXT_STEPS = 3
# Remote-inferred prerequisites can chain indefinitely through novel names
MAX_PATH_DEPTH = 8


def calculate_priority(proficiency: str, difficulty: int) -> str:
    if proficiency == MASTERED and difficulty <= 6:
        return "high"
    if proficiency == PROFICIENT and difficulty <= 5:
        return "high"
    if difficulty <= 4:
        return "medium"
    return "low"


def priority_from_difficulty(difficulty: int) -> str:
    if difficulty <= 4:
        return "high"
    if difficulty <= 6:
        return "medium"
    return "low"


def remove_duplicate_recommendations(
    recommendations: List[LearningRecommendation],
) -> List[LearningRecommendation]:
    seen = set()
    unique = []
    for rec in recommendations:
        key = normalize_skill_name(rec.skill_name)
        if key not in seen:
            seen.add(key)
            unique.append(rec)
    return unique


def _skill_map(skills: List[SkillRecord]) -> Dict[str, SkillRecord]:
    return {normalize_skill_name(s.name): s for s in skills}


def _with_existing(user_context: Optional[UserContext], skills: List[SkillRecord]) -> UserContext:
    return (user_context or UserContext()).with_existing_skills([s.name for s in skills])


def recommend_next(
    skills: List[SkillRecord],
    resolver: DependencyResolver,
    user_context: Optional[UserContext] = None,
    limit: int = MAX_RECOMMENDATIONS,
) -> List[LearningRecommendation]:
    """Ranked "what to learn next" list, at most `limit` unique skills."""
    recommendations = []
    skill_map = _skill_map(skills)
    ctx = _with_existing(user_context, skills)

    for skill in skills:
        if not has_meaningful_proficiency(skill.proficiency):
            continue

        try:
            record = resolver.resolve(skill.name, ctx)
            for enabled in record.enables:
                if normalize_skill_name(enabled) in skill_map:
                    continue
                enabled_record = resolver.resolve(enabled, ctx)
                recommendations.append(LearningRecommendation(
                    id=f"next-{slugify(enabled)}",
                    skill_name=enabled,
                    type=NEXT_STEP,
                    reason=f"You know {skill.name}, which enables learning {enabled}",
                    difficulty=enabled_record.difficulty,
                    estimated_hours=enabled_record.estimated_hours,
                    category=enabled_record.category,
                    priority=calculate_priority(skill.proficiency, enabled_record.difficulty),
                    current_skill_proficiency=skill.proficiency,
                ))
        except Exception:
            logger.exception("Failed to analyze enablements for %s", skill.name)

    recommendations.extend(generate_algorithmic_suggestions(skills, resolver, ctx))
    recommendations = add_semantic_similarity_recommendations(skills, recommendations)

    ranked = sorted(
        remove_duplicate_recommendations(recommendations),
        key=lambda r: (-PRIORITY_ORDER[r.priority], r.difficulty),
    )
    return ranked[:limit]


def analyze_skill_categories(
    skills: List[SkillRecord], resolver: DependencyResolver, user_context: Optional[UserContext] = None
) -> Dict[str, int]:
    categories: Dict[str, int] = {}
    for skill in skills:
        try:
            record = resolver.resolve(skill.name, user_context)
        except Exception:
            logger.exception("Failed to categorize %s", skill.name)
            continue
        categories[record.category] = categories.get(record.category, 0) + 1
    return categories


def get_complementary_skills(category: str, skill_map: Dict[str, SkillRecord]) -> List[LearningRecommendation]:
    candidates = [
        s for s in COMPLEMENTARY_SKILLS.get(category, [])
        if normalize_skill_name(s) not in skill_map
    ]
    return [
        LearningRecommendation(
            id=f"comp-{slugify(name)}",
            skill_name=name,
            type=NEXT_STEP,
            reason=f"Complements your {category} skills",
            difficulty=4,
            estimated_hours=25,
            category=category,
            priority="medium",
        )
        for name in candidates[:MAX_PER_HEURISTIC]
    ]


def get_role_based_suggestions(role: str, skill_map: Dict[str, SkillRecord]) -> List[LearningRecommendation]:
    normalized_role = role.lower().strip()
    if not normalized_role:
        return []

    # A known role inside the given one wins before a partial role like "data".
    suggested = next((skills for key, skills in ROLE_SKILLS if key in normalized_role), None)
    if suggested is None:
        suggested = next((skills for key, skills in ROLE_SKILLS if normalized_role in key), [])

    candidates = [s for s in suggested if normalize_skill_name(s) not in skill_map]
    return [
        LearningRecommendation(
            id=f"role-{slugify(name)}",
            skill_name=name,
            type=NEXT_STEP,
            reason=f"Essential for {role.strip()} role",
            difficulty=4,
            estimated_hours=20,
            category="professional",
            priority="high",
        )
        for name in candidates[:MAX_PER_HEURISTIC]
    ]


def get_trending_suggestions(skill_map: Dict[str, SkillRecord]) -> List[LearningRecommendation]:
    candidates = [s for s in TRENDING_SKILLS if normalize_skill_name(s) not in skill_map]
    return [
        LearningRecommendation(
            id=f"trend-{slugify(name)}",
            skill_name=name,
            type=ADVANCED,
            reason="High-demand skill in current market",
            difficulty=6,
            estimated_hours=40,
            category="trending",
            priority="medium",
        )
        for name in candidates[:MAX_PER_HEURISTIC]
    ]


def generate_algorithmic_suggestions(
    skills: List[SkillRecord],
    resolver: DependencyResolver,
    user_context: Optional[UserContext] = None,
) -> List[LearningRecommendation]:
    suggestions = []
    skill_map = _skill_map(skills)

    for category, count in analyze_skill_categories(skills, resolver, user_context).items():
        if count > 0:
            suggestions.extend(get_complementary_skills(category, skill_map))

    if user_context and user_context.current_role:
        suggestions.extend(get_role_based_suggestions(user_context.current_role, skill_map))

    suggestions.extend(get_trending_suggestions(skill_map))
    return suggestions[:MAX_ALGORITHMIC_SUGGESTIONS]


def get_semantically_similar_skills(skill_name: str) -> List[Dict]:
    normalized = normalize_skill_name(skill_name)
    similar = []

    for terms, alternatives, category in SKILL_CLUSTERS:
        if any(contains_term(normalized, term) for term in terms):
            for alternative in alternatives:
                if normalize_skill_name(alternative) == normalized:
                    continue
                similar.append({
                    "name": alternative,
                    "reason": f"alternative to {skill_name}",
                    "difficulty": SIMILAR_SKILL_DIFFICULTY.get(alternative, 5),
                    "estimated_hours": SIMILAR_SKILL_HOURS.get(alternative, 25),
                    "category": category,
                })
            break

    if not similar:
        for terms, entries in BROAD_SIMILARITY:
            if any(term in normalized for term in terms):
                similar = [
                    {"name": n, "reason": r, "difficulty": d, "estimated_hours": h, "category": c}
                    for n, r, d, h, c in entries
                ]
                break

    return similar[:MAX_SIMILAR_PER_SKILL]


def add_semantic_similarity_recommendations(
    skills: List[SkillRecord], existing: List[LearningRecommendation]
) -> List[LearningRecommendation]:
    skill_map = _skill_map(skills)
    suggested_names = {normalize_skill_name(r.skill_name) for r in existing}
    semantic = []

    for skill in skills:
        if not has_meaningful_proficiency(skill.proficiency):
            continue
        for similar in get_semantically_similar_skills(skill.name):
            key = normalize_skill_name(similar["name"])
            if key in skill_map or key in suggested_names:
                continue
            semantic.append(LearningRecommendation(
                id=f"semantic-{slugify(similar['name'])}",
                skill_name=similar["name"],
                type=NEXT_STEP,
                reason=f"Similar to your {skill.name} skill ({similar['reason']})",
                difficulty=similar["difficulty"],
                estimated_hours=similar["estimated_hours"],
                category=similar["category"],
                priority="medium",
            ))
            suggested_names.add(key)

    return existing + semantic[:MAX_SEMANTIC_SUGGESTIONS]


def get_skill_learning_recommendations(
    target_skill: str,
    skills: List[SkillRecord],
    resolver: DependencyResolver,
    user_context: Optional[UserContext] = None,
) -> LearningPath:
    """Prerequisites still to learn for one skill, plus what it unlocks."""
    skill_map = _skill_map(skills)
    ctx = _with_existing(user_context, skills)

    try:
        record = resolver.resolve(target_skill, ctx)

        prerequisites = []
        for dependency in record.dependencies:
            held = skill_map.get(normalize_skill_name(dependency))
            if held is not None and has_meaningful_proficiency(held.proficiency):
                continue

            dep_record = resolver.resolve(dependency, ctx)
            prerequisites.append(LearningRecommendation(
                id=f"prereq-{slugify(dependency)}",
                skill_name=dependency,
                type=PREREQUISITE,
                reason=(
                    f"Required prerequisite for {record.skill_name}" if held is None
                    else f"Strengthen prerequisite for {record.skill_name}"
                ),
                difficulty=dep_record.difficulty,
                estimated_hours=dep_record.estimated_hours,
                category=dep_record.category,
                priority="high" if held is None else "medium",
                current_skill_proficiency=held.proficiency if held is not None else None,
            ))

        next_steps = []
        for enabled in record.enables:
            if normalize_skill_name(enabled) in skill_map:
                continue
            enabled_record = resolver.resolve(enabled, ctx)
            next_steps.append(LearningRecommendation(
                id=f"next-{slugify(enabled)}",
                skill_name=enabled,
                type=NEXT_STEP,
                reason=f"Natural progression from {record.skill_name}",
                difficulty=enabled_record.difficulty,
                estimated_hours=enabled_record.estimated_hours,
                category=enabled_record.category,
                priority=priority_from_difficulty(enabled_record.difficulty),
            ))
        next_steps.sort(key=lambda r: r.difficulty)

    except Exception:
        logger.exception("Failed to analyze skill dependencies for %s", target_skill)
        return generate_fallback_learning_path(target_skill, skills)

    return LearningPath(
        target_skill=target_skill,
        prerequisites=prerequisites,
        next_steps=next_steps[:MAX_NEXT_STEPS],
        estimated_total_hours=sum(r.estimated_hours for r in prerequisites),
    )


def _fallback_recommendation(skill_name: str, rec_type: str, reason: str) -> LearningRecommendation:
    difficulty = {PREREQUISITE: 3, NEXT_STEP: 4, ADVANCED: 6}[rec_type]
    hours = {PREREQUISITE: 15, NEXT_STEP: 20, ADVANCED: 30}[rec_type]
    return LearningRecommendation(
        id=f"fallback-{slugify(skill_name)}",
        skill_name=skill_name,
        type=rec_type,
        reason=reason,
        difficulty=difficulty,
        estimated_hours=hours,
        category="general",
        priority="high" if rec_type == PREREQUISITE else "medium",
    )


def generate_fallback_next_steps(skill_name: str) -> List[LearningRecommendation]:
    normalized = normalize_skill_name(skill_name)
    entries = GENERIC_NEXT_STEPS
    for terms, pattern_entries in FALLBACK_NEXT_STEPS:
        if any(contains_term(normalized, term) for term in terms):
            entries = pattern_entries
            break

    return [
        _fallback_recommendation(name, rec_type, reason.format(skill=skill_name))
        for name, rec_type, reason in entries
    ][:MAX_FALLBACK_NEXT_STEPS]


def generate_fallback_learning_path(target_skill: str, skills: List[SkillRecord]) -> LearningPath:
    prerequisites = []
    skill_map = _skill_map(skills)

    # Users just getting started also get soft-skill foundations
    if len(skills) < 3:
        for name in FOUNDATIONAL_SKILLS:
            if normalize_skill_name(name) in skill_map:
                continue
            prerequisites.append(LearningRecommendation(
                id=f"fallback-{slugify(name)}",
                skill_name=name,
                type=PREREQUISITE,
                reason=f"Foundational skill that supports learning {target_skill}",
                difficulty=2,
                estimated_hours=10,
                category="foundational",
                priority="medium",
            ))

    return LearningPath(
        target_skill=target_skill,
        prerequisites=prerequisites,
        next_steps=generate_fallback_next_steps(target_skill),
        estimated_total_hours=sum(r.estimated_hours for r in prerequisites),
    )


def _placeholder_step(skill_name: str) -> LearningRecommendation:
    return LearningRecommendation(
        id=f"path-{slugify(skill_name)}",
        skill_name=skill_name,
        type=PREREQUISITE,
        reason="Foundational skill",
        difficulty=3,
        estimated_hours=15,
        category="general",
        priority="medium",
    )


def _walk_prerequisites(
    skill_name: str,
    skill_map: Dict[str, SkillRecord],
    resolver: DependencyResolver,
    ctx: UserContext,
    visited: Set[str],
    depth: int,
) -> List[LearningRecommendation]:
    key = normalize_skill_name(skill_name)
    if key in visited:
        return []
    visited.add(key)

    held = skill_map.get(key)
    if held is not None and has_meaningful_proficiency(held.proficiency):
        return []

    try:
        record = resolver.resolve(skill_name, ctx)
    except Exception:
        logger.exception("Failed to analyze dependencies for %s", skill_name)
        return [_placeholder_step(skill_name)]

    path = []
    if depth < MAX_PATH_DEPTH:
        for dependency in record.dependencies:
            path.extend(_walk_prerequisites(dependency, skill_map, resolver, ctx, visited, depth + 1))

    path.append(LearningRecommendation(
        id=f"path-{slugify(skill_name)}",
        skill_name=skill_name,
        type=PREREQUISITE,
        reason="Target skill" if depth == 0 else "Required for learning path",
        difficulty=record.difficulty,
        estimated_hours=record.estimated_hours,
        category=record.category,
        priority=priority_from_difficulty(record.difficulty),
        current_skill_proficiency=held.proficiency if held is not None else None,
    ))
    return path


def build_learning_path(
    target_skill: str,
    skills: List[SkillRecord],
    resolver: DependencyResolver,
    user_context: Optional[UserContext] = None,
) -> List[LearningRecommendation]:
    """
    Ordered steps to reach target_skill: prerequisites first, target last.

    Skills the user already holds at Learning or above are skipped (and so
    is everything behind them). Cycles are cut by the visited set.
    """
    return _walk_prerequisites(
        target_skill, _skill_map(skills), resolver, _with_existing(user_context, skills), set(), 0
    )


def generate_learning_path(
    target_skills: List[str],
    skills: List[SkillRecord],
    resolver: DependencyResolver,
    user_context: Optional[UserContext] = None,
) -> List[LearningRecommendation]:
    path = []
    for target in target_skills:
        path.extend(build_learning_path(target, skills, resolver, user_context))
    return remove_duplicate_recommendations(path)
