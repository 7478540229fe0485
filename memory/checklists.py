from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from memory.models import ChecklistItem, normalize_skill_name
from memory.store import generate_id

CHECKLIST_PATH = Path(__file__).with_name("checklists.yaml")


@lru_cache(maxsize=1)
def _load_templates() -> Dict[str, List[str]]:
    with open(CHECKLIST_PATH, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    return {normalize_skill_name(k): [str(t) for t in v] for k, v in raw.items()}


def get_skill_checklist(skill_name: str) -> Optional[List[ChecklistItem]]:
    """Fresh, uncompleted checklist items for a known skill, or None."""
    texts = _load_templates().get(normalize_skill_name(skill_name))
    if texts is None:
        return None
    return [ChecklistItem(id=generate_id(), text=text) for text in texts]
