import re
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

SOURCE_STATIC = "static_table"
SOURCE_PATTERN = "pattern_matched"
SOURCE_CACHED = "cached"
SOURCE_REMOTE = "remote_inferred"

MISSING_DEPENDENCY = "missing_dependency"
PROFICIENCY_MISMATCH = "proficiency_mismatch"

LOW = "low"
MEDIUM = "medium"
HIGH = "high"

DEFAULT_DIFFICULTY = 5
DEFAULT_HOURS = 20
DEFAULT_CATEGORY = "general"


def slugify(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower().strip())


def clamp_difficulty(value) -> int:
    return max(1, min(10, int(round(value))))


def clamp_hours(value):
    return max(1, value)


@dataclass
class DependencyRecord:
    skill_name: str
    dependencies: List[str] = field(default_factory=list)
    description: str = ""
    difficulty: int = DEFAULT_DIFFICULTY
    estimated_hours: float = DEFAULT_HOURS
    enables: List[str] = field(default_factory=list)
    category: str = DEFAULT_CATEGORY
    source: str = SOURCE_REMOTE
    resolved_at: Optional[datetime] = None

    def __post_init__(self):
        self.difficulty = clamp_difficulty(self.difficulty)
        self.estimated_hours = clamp_hours(self.estimated_hours)

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["resolved_at"] = self.resolved_at.isoformat() if self.resolved_at else None
        return data


@dataclass
class ConsistencyWarning:
    id: str
    type: str
    skill_name: str
    message: str
    suggestion: str
    severity: str = MEDIUM

    def to_dict(self) -> Dict:
        return asdict(self)


def contains_term(text: str, term: str) -> bool:
    """True when term occurs in text as a whole word (case-insensitive)."""
    text = text.lower()
    term = term.lower().strip()
    if not term:
        return False
    pattern = r"(?<![a-z0-9])" + re.escape(term) + r"(?![a-z0-9])"
    return re.search(pattern, text) is not None
