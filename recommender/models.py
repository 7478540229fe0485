from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

PREREQUISITE = "prerequisite"
NEXT_STEP = "next_step"
ADVANCED = "advanced"

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}
CONFIDENCE_ORDER = {"high": 3, "medium": 2, "low": 1}
SOURCE_ORDER = {"hybrid": 3, "rules": 2, "llm": 1}


@dataclass
class LearningRecommendation:
    id: str
    skill_name: str
    type: str
    reason: str
    difficulty: int
    estimated_hours: float
    category: str
    priority: str
    current_skill_proficiency: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class LearningPath:
    target_skill: str
    prerequisites: List[LearningRecommendation] = field(default_factory=list)
    next_steps: List[LearningRecommendation] = field(default_factory=list)
    estimated_total_hours: float = 0

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class MissingSkill:
    id: str
    name: str
    reason: str
    confidence: str
    source: str
    parent_skill: str
    category: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)
