from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


WANT_TO_LEARN = "Want to Learn"
LEARNING = "Learning"
PROFICIENT = "Proficient"
MASTERED = "Mastered"

PROFICIENCY_LEVELS = [WANT_TO_LEARN, LEARNING, PROFICIENT, MASTERED]

# Maps proficiency tiers to the evaluation level used in teaching rubrics.
EVALUATION_LEVEL_MAP = {
    WANT_TO_LEARN: "beginner",
    LEARNING: "beginner",
    PROFICIENT: "intermediate",
    MASTERED: "advanced",
}


def proficiency_rank(proficiency: str) -> int:
    if proficiency not in PROFICIENCY_LEVELS:
        raise ValueError(
            f"Unknown proficiency '{proficiency}'. Choose from: {', '.join(PROFICIENCY_LEVELS)}"
        )
    return PROFICIENCY_LEVELS.index(proficiency)


def has_meaningful_proficiency(proficiency: str) -> bool:
    """Anything at or above Learning counts as knowing the skill."""
    return proficiency_rank(proficiency) >= PROFICIENCY_LEVELS.index(LEARNING)


def normalize_skill_name(name: str) -> str:
    return name.lower().strip()


@dataclass
class ChecklistItem:
    id: str
    text: str
    completed: bool = False


@dataclass
class TeachingEvaluation:
    id: str
    topic: str
    user_explanation: str
    clarity: int = 0
    coverage: int = 0
    depth: int = 0
    misconceptions: int = 0
    total_score: int = 0
    feedback: str = ""
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class SkillRecord:
    id: str
    name: str
    proficiency: str = WANT_TO_LEARN
    parent_id: Optional[str] = None
    checklist: Optional[List[ChecklistItem]] = None
    teaching_evaluations: List[TeachingEvaluation] = field(default_factory=list)

    def to_dict(self) -> Dict:
        data = asdict(self)
        for evaluation in data["teaching_evaluations"]:
            evaluation["timestamp"] = evaluation["timestamp"].isoformat()
        return data


@dataclass
class UserContext:
    years_of_experience: Optional[float] = None
    current_role: Optional[str] = None
    existing_skills: List[str] = field(default_factory=list)
    industry: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "UserContext":
        """
        Build a context from wire data.

        Accepts the camelCase keys (yearsOfExperience, currentRole, ...) as
        well as the short experience/role keys used by discovery requests.
        """
        if not isinstance(data, dict):
            return cls()

        years = data.get("yearsOfExperience", data.get("experience"))
        if isinstance(years, bool) or not isinstance(years, (int, float)):
            years = None

        role = data.get("currentRole", data.get("role"))
        industry = data.get("industry")
        existing = data.get("existingSkills") or []

        return cls(
            years_of_experience=years,
            current_role=role if isinstance(role, str) and role.strip() else None,
            existing_skills=[s for s in existing if isinstance(s, str)],
            industry=industry if isinstance(industry, str) and industry.strip() else None,
        )

    def with_existing_skills(self, names: List[str]) -> "UserContext":
        return UserContext(
            years_of_experience=self.years_of_experience,
            current_role=self.current_role,
            existing_skills=list(names),
            industry=self.industry,
        )

    def to_dict(self) -> Dict:
        return {
            "yearsOfExperience": self.years_of_experience,
            "currentRole": self.current_role,
            "existingSkills": list(self.existing_skills),
            "industry": self.industry,
        }


@dataclass
class UserProfile:
    years_of_experience: float = 0
    current_role: str = ""
    industry: str = ""

    def to_context(self, existing_skills: Optional[List[str]] = None) -> UserContext:
        return UserContext(
            years_of_experience=self.years_of_experience,
            current_role=self.current_role or None,
            existing_skills=list(existing_skills or []),
            industry=self.industry or None,
        )
