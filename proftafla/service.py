"""
ExamService: cache-aside access to the exam timetable.

    get_tests(slug)  -> cached ExamGroups of one department, or None if unknown
    get_stats()      -> cached Stats over all departments
    clear_cache()    -> drop every key in the store

The store is passed in, so the same service runs against Redis in
production and against a MemoryStore in tests.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Callable, Dict, List, Optional, TypeVar

from proftafla.departments import find_department, list_departments
from proftafla.model import Department, ExamGroup, Stats
from proftafla.scrape import Fetcher, compute_stats, fetch_department_exams, fetch_html
from proftafla.storage import CacheStore

logger = logging.getLogger(__name__)

# Reserved cache key for statistics. Slugs are lowercase words, never this.
STATS_KEY = "stats"

T = TypeVar("T")


def dump_groups(groups: List[ExamGroup]) -> str:
    return json.dumps([g.to_dict() for g in groups], ensure_ascii=False)


def load_groups(payload: str) -> List[ExamGroup]:
    return [ExamGroup.from_dict(g) for g in json.loads(payload)]


def dump_stats(stats: Stats) -> str:
    return json.dumps(stats.to_dict(), ensure_ascii=False, allow_nan=False)


def load_stats(payload: str) -> Stats:
    return Stats.from_dict(json.loads(payload))


class ExamService:
    """
    Cache-aside coordinator around the scrape pipeline.

    With single_flight=True, concurrent misses for the same key inside this
    process wait for each other, so only one of them hits the upstream
    endpoint. A clear_cache() running at the same time as a population is
    not ordered against it: the population may write right after the flush.
    """

    def __init__(
        self,
        store: CacheStore,
        ttl_seconds: int,
        fetch: Fetcher = fetch_html,
        single_flight: bool = True,
    ):
        self.store = store
        self.ttl_seconds = ttl_seconds
        self.fetch = fetch
        self.single_flight = single_flight
        self._key_locks: Dict[str, threading.Lock] = {}
        self._key_locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_departments(self) -> List[Department]:
        return list_departments()

    def get_tests(self, slug: str) -> Optional[List[ExamGroup]]:
        """
        Exams of one department, grouped by table. None for an unknown slug.
        """
        department = find_department(slug)
        if department is None:
            logger.debug("Unknown department %r", slug)
            return None

        cached = self.store.get(slug)
        if cached is not None:
            logger.debug("Cache hit for %s", slug)
            return load_groups(cached)

        return self._populate(
            slug,
            lambda: fetch_department_exams(department, fetch=self.fetch),
            dump_groups,
            load_groups,
        )

    def get_stats(self) -> Stats:
        """
        Statistics over the students column of every exam of every department.
        """
        cached = self.store.get(STATS_KEY)
        if cached is not None:
            logger.debug("Cache hit for %s", STATS_KEY)
            return load_stats(cached)

        return self._populate(STATS_KEY, lambda: compute_stats(fetch=self.fetch), dump_stats, load_stats)

    def clear_cache(self) -> bool:
        """
        Delete every key in the store.

        True if every listed key was deleted; False if some disappeared in
        between (e.g. expired), which means they were not counted.
        """
        keys = self.store.keys("*")
        deleted = self.store.delete(keys) if keys else 0
        logger.info("Cleared cache: %d of %d keys deleted", deleted, len(keys))
        return deleted == len(keys)

    # ------------------------------------------------------------------
    # Miss path
    # ------------------------------------------------------------------

    def _lock_for(self, key: str) -> threading.Lock:
        with self._key_locks_guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def _populate(
        self,
        key: str,
        produce: Callable[[], T],
        dump: Callable[[T], str],
        load: Callable[[str], T],
    ) -> T:
        if not self.single_flight:
            return self._produce_and_store(key, produce, dump)

        with self._lock_for(key):
            # another thread may have filled the key while we waited
            cached = self.store.get(key)
            if cached is not None:
                logger.debug("Cache filled by concurrent lookup for %s", key)
                return load(cached)
            return self._produce_and_store(key, produce, dump)

    def _produce_and_store(self, key: str, produce: Callable[[], T], dump: Callable[[T], str]) -> T:
        logger.debug("Cache miss for %s", key)
        value = produce()
        self.store.set(key, dump(value), self.ttl_seconds)
        logger.info("Cached %s for %d seconds", key, self.ttl_seconds)
        return value
