"""
Static rule table: hand-authored dependency records for well-known skills.

The table is the highest-precedence source. Lookups are exact matches on the
normalized name and never touch the network.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from dependencies.models import DependencyRecord, SOURCE_STATIC
from memory.models import normalize_skill_name

CATALOG_PATH = Path(__file__).with_name("catalog.yaml")

REQUIRED_FIELDS = (
    "skill_name",
    "dependencies",
    "description",
    "difficulty",
    "estimated_hours",
    "enables",
    "category",
)


@lru_cache(maxsize=1)
def _load_catalog() -> Dict[str, Dict]:
    with open(CATALOG_PATH, encoding="utf-8") as fh:
        entries = yaml.safe_load(fh) or []

    catalog = {}
    for entry in entries:
        missing = [f for f in REQUIRED_FIELDS if f not in entry]
        if missing:
            raise ValueError(f"Catalog entry {entry!r} is missing {', '.join(missing)}")
        catalog[normalize_skill_name(entry["skill_name"])] = entry
    return catalog


def _to_record(entry: Dict) -> DependencyRecord:
    return DependencyRecord(
        skill_name=entry["skill_name"],
        dependencies=list(entry["dependencies"]),
        description=entry["description"],
        difficulty=entry["difficulty"],
        estimated_hours=entry["estimated_hours"],
        enables=list(entry["enables"]),
        category=entry["category"],
        source=SOURCE_STATIC,
    )


def lookup(name: str) -> Optional[DependencyRecord]:
    entry = _load_catalog().get(normalize_skill_name(name))
    if entry is None:
        return None
    return _to_record(entry)


def catalog_entries() -> List[DependencyRecord]:
    return [_to_record(entry) for entry in _load_catalog().values()]
