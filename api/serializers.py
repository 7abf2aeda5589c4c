from __future__ import annotations

from dataclasses import asdict

from lexicon.dictionary import Counters, Dictionary, Entry


def entry_to_dict(entry: Entry) -> dict:
    return {
        "id": entry.id,
        "sem_id": entry.sem_id,
        "topic": entry.topic.value if entry.topic else None,
        "essential_flag": entry.essential_flag,
        "basic_flag": entry.basic_flag,
        "texts": {lang.value: value for lang, value in entry.texts().items()},
    }


def counters_to_dict(counters: Counters) -> dict:
    return asdict(counters)


def dictionary_info(dictionary: Dictionary) -> dict:
    snapshot = dictionary.snapshot()
    return {
        "source": dictionary.source,
        "entry_count": len(snapshot.entries),
        "last_update": snapshot.last_update.isoformat(),
        "version": snapshot.version,
        "counters": counters_to_dict(snapshot.counters),
    }
