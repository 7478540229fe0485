"""
Single strategy chain for turning a skill name into a dependency record.

Order is fixed: static catalog, pattern heuristics, resolution cache,
remote inference. The first two are pure and network-free, so well-known
technologies never cost a remote call. Remote inference always yields a
record, which means resolve() never comes back empty-handed.
"""

import logging
from typing import List, Optional

from dependencies import catalog, patterns
from dependencies.models import DependencyRecord
from memory.cache import ResolutionCache
from memory.models import UserContext

logger = logging.getLogger(__name__)


class DependencyResolver:
    def __init__(self, client, cache: Optional[ResolutionCache] = None):
        """
        Args:
            client: anything with infer(skill_name, user_context) -> DependencyRecord,
                normally llm.client.InferenceClient.
            cache: memo for remote results; a fresh unbounded one when omitted.
        """
        self.client = client
        self.cache = cache if cache is not None else ResolutionCache()

    def resolve(self, skill_name: str, user_context: Optional[UserContext] = None) -> DependencyRecord:
        record = catalog.lookup(skill_name)
        if record is not None:
            return record

        record = patterns.match(skill_name)
        if record is not None:
            return record

        record = self.cache.get(skill_name)
        if record is not None:
            return record

        # Concurrent misses may both reach the endpoint; the second put just overwrites
        logger.info("Resolving '%s' through remote inference", skill_name)
        record = self.client.infer(skill_name, user_context)
        self.cache.put(skill_name, record)
        return record

    def resolve_many(
        self, skill_names: List[str], user_context: Optional[UserContext] = None
    ) -> List[DependencyRecord]:
        return [self.resolve(name, user_context) for name in skill_names]
