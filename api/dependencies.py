from __future__ import annotations

import os
from functools import lru_cache

from lexicon.dictionary import Dictionary, SchedulerConfig


@lru_cache(maxsize=1)
def get_dictionary() -> Dictionary:
    source = os.getenv("DICTIONARY_URL")
    if not source:
        raise RuntimeError("DICTIONARY_URL is not set")
    timeout = float(os.getenv("DICTIONARY_FETCH_TIMEOUT", "30"))
    return Dictionary.from_url(source, timeout=timeout)


def get_scheduler_config() -> SchedulerConfig:
    return SchedulerConfig(interval_seconds=float(os.getenv("DICTIONARY_REFRESH_SECONDS", "3600")))
