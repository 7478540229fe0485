"""
In-memory skill collection for a single user session.

Skills are kept as a flat list; hierarchy is expressed through an optional
parent_id back-reference and walked with children()/subtree().
Nothing here is persisted.
"""

import logging
import uuid
from typing import List, Optional

from memory.models import (
    ChecklistItem,
    SkillRecord,
    TeachingEvaluation,
    UserProfile,
    WANT_TO_LEARN,
    normalize_skill_name,
    proficiency_rank,
)

logger = logging.getLogger(__name__)


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


class SkillStore:
    def __init__(self, skills: Optional[List[SkillRecord]] = None, profile: Optional[UserProfile] = None):
        self.skills: List[SkillRecord] = list(skills or [])
        self.profile: UserProfile = profile or UserProfile()

    def __len__(self) -> int:
        return len(self.skills)

    def get(self, skill_id: str) -> Optional[SkillRecord]:
        for skill in self.skills:
            if skill.id == skill_id:
                return skill
        return None

    def find_by_name(self, name: str) -> Optional[SkillRecord]:
        target = normalize_skill_name(name)
        for skill in self.skills:
            if normalize_skill_name(skill.name) == target:
                return skill
        return None

    def names(self) -> List[str]:
        return [s.name for s in self.skills]

    def add_skill(self, name: str, parent_id: Optional[str] = None) -> Optional[SkillRecord]:
        """
        Add a skill at the Want to Learn tier.

        Returns None without touching the collection when the name is blank,
        already present (case-insensitive), or the parent does not exist.
        """
        clean_name = name.strip() if name else ""
        if not clean_name:
            return None

        if self.find_by_name(clean_name):
            logger.debug("Skipping duplicate skill '%s'", clean_name)
            return None

        if parent_id is not None and self.get(parent_id) is None:
            logger.warning("Parent skill '%s' not found; '%s' not added", parent_id, clean_name)
            return None

        skill = SkillRecord(
            id=generate_id(),
            name=clean_name,
            proficiency=WANT_TO_LEARN,
            parent_id=parent_id,
        )
        self.skills.append(skill)
        return skill

    def update_proficiency(self, skill_id: str, proficiency: str) -> Optional[SkillRecord]:
        proficiency_rank(proficiency)  # raises ValueError on unknown tiers
        skill = self.get(skill_id)
        if skill is None:
            return None
        skill.proficiency = proficiency
        return skill

    def remove_skill(self, skill_id: str) -> List[SkillRecord]:
        """Remove a skill together with everything nested under it."""
        if self.get(skill_id) is None:
            return []
        removed = self.subtree(skill_id)
        removed_ids = {s.id for s in removed}
        self.skills = [s for s in self.skills if s.id not in removed_ids]
        return removed

    def children(self, skill_id: str) -> List[SkillRecord]:
        return [s for s in self.skills if s.parent_id == skill_id]

    def subtree(self, skill_id: str) -> List[SkillRecord]:
        """The skill followed by all of its descendants, depth-first."""
        root = self.get(skill_id)
        if root is None:
            return []

        result = []
        seen = set()

        def _walk(skill: SkillRecord):
            if skill.id in seen:
                return
            seen.add(skill.id)
            result.append(skill)
            for child in self.children(skill.id):
                _walk(child)

        _walk(root)
        return result

    def initialize_checklist(self, skill_id: str, items: List[ChecklistItem]) -> Optional[SkillRecord]:
        skill = self.get(skill_id)
        if skill is None:
            return None
        skill.checklist = list(items)
        return skill

    def toggle_checklist_item(self, skill_id: str, item_id: str) -> Optional[ChecklistItem]:
        skill = self.get(skill_id)
        if skill is None or not skill.checklist:
            return None
        for item in skill.checklist:
            if item.id == item_id:
                item.completed = not item.completed
                return item
        return None

    def add_teaching_evaluation(self, skill_id: str, evaluation: TeachingEvaluation) -> Optional[SkillRecord]:
        skill = self.get(skill_id)
        if skill is None:
            return None
        skill.teaching_evaluations.append(evaluation)
        return skill

    def update_profile(
        self,
        years_of_experience: Optional[float] = None,
        current_role: Optional[str] = None,
        industry: Optional[str] = None,
    ) -> UserProfile:
        if years_of_experience is not None:
            self.profile.years_of_experience = years_of_experience
        if current_role is not None:
            self.profile.current_role = current_role
        if industry is not None:
            self.profile.industry = industry
        return self.profile
