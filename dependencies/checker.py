import logging
from typing import List, Optional, Tuple

from dependencies.models import (
    ConsistencyWarning,
    LOW,
    MEDIUM,
    MISSING_DEPENDENCY,
    PROFICIENCY_MISMATCH,
    contains_term,
    slugify,
)
from dependencies.resolver import DependencyResolver
from memory.models import (
    SkillRecord,
    UserContext,
    has_meaningful_proficiency,
    normalize_skill_name,
)

logger = logging.getLogger(__name__)


def find_matching_skill(
    skills: List[SkillRecord], dependency: str, exclude_id: Optional[str] = None
) -> Tuple[bool, Optional[SkillRecord]]:
    """
    Look up a dependency in the collection.

    Exact (normalized) names win; otherwise the skill name must contain the
    dependency as whole words, so "Docker Compose" satisfies "Docker" but
    "Design" does not satisfy "Database Design".
    """
    target = normalize_skill_name(dependency)
    candidates = [s for s in skills if s.id != exclude_id]

    for skill in candidates:
        if normalize_skill_name(skill.name) == target:
            return True, skill

    for skill in candidates:
        name = normalize_skill_name(skill.name)
        if contains_term(name, target):
            return True, skill

    return False, None


def check_consistency(
    skills: List[SkillRecord],
    resolver: DependencyResolver,
    user_context: Optional[UserContext] = None,
) -> List[ConsistencyWarning]:
    warnings = []
    ctx = (user_context or UserContext()).with_existing_skills([s.name for s in skills])

    for skill in skills:
        if not has_meaningful_proficiency(skill.proficiency):
            continue

        try:
            rule = resolver.resolve(skill.name, ctx)
        except Exception:
            logger.exception("Failed to analyze dependencies for %s", skill.name)
            continue

        for dependency in rule.dependencies:
            exists, dependency_skill = find_matching_skill(skills, dependency, exclude_id=skill.id)

            if not exists:
                warnings.append(ConsistencyWarning(
                    id=f"{skill.id}-missing-{slugify(dependency)}",
                    type=MISSING_DEPENDENCY,
                    skill_name=skill.name,
                    message=f"You know {skill.name} but don't have {dependency} in your skills",
                    suggestion=(
                        f"Consider adding {dependency} to your skill tree "
                        f"as it's foundational for {skill.name}"
                    ),
                    severity=MEDIUM,
                ))
            elif not has_meaningful_proficiency(dependency_skill.proficiency):
                warnings.append(ConsistencyWarning(
                    id=f"{skill.id}-proficiency-{slugify(dependency)}",
                    type=PROFICIENCY_MISMATCH,
                    skill_name=skill.name,
                    message=(
                        f"You're {skill.proficiency.lower()} in {skill.name} "
                        f"but only want to learn {dependency}"
                    ),
                    suggestion=(
                        f"Consider updating your {dependency} proficiency "
                        f"since it's foundational for {skill.name}"
                    ),
                    severity=LOW,
                ))

    return warnings


def get_skill_warnings(
    skills: List[SkillRecord],
    skill_id: str,
    resolver: DependencyResolver,
    user_context: Optional[UserContext] = None,
) -> List[ConsistencyWarning]:
    target = next((s for s in skills if s.id == skill_id), None)
    if target is None:
        return []

    all_warnings = check_consistency(skills, resolver, user_context)
    return [w for w in all_warnings if w.skill_name == target.name]
