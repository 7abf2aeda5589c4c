from __future__ import annotations

import logging
import threading
from copy import copy
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .errors import DictionaryError, EntryNotFound
from .feed import CsvFeedParser, FeedParser
from .fetcher import FeedFetcher, fetcher_for
from .models import Counters, DictionarySnapshot, Entry, LanguageCode, Topic

logger = logging.getLogger(__name__)


class Dictionary:
    """
    In-memory dictionary built from the remote feed.

    The dataset lives in an immutable DictionarySnapshot. Readers grab the
    current snapshot reference once per call and work on it alone; refresh
    builds a complete new snapshot off to the side and publishes it with a
    single reference assignment, so a reader sees either the old or the new
    dataset and never a mix. Refreshes are serialized by a writer lock that
    readers never touch.

    Construction performs the first refresh; if it fails the error propagates
    and no dictionary is created.
    """

    def __init__(
        self,
        source: str,
        fetcher: Optional[FeedFetcher] = None,
        parser: Optional[FeedParser] = None,
    ):
        self.source = source
        self.fetcher = fetcher if fetcher is not None else fetcher_for(source)
        self.parser = parser if parser is not None else CsvFeedParser()
        self._write_lock = threading.Lock()
        self._snapshot: Optional[DictionarySnapshot] = None
        self.refresh()

    @classmethod
    def from_url(cls, url: str, timeout: float = 30.0) -> "Dictionary":
        return cls(url, fetcher=fetcher_for(url, timeout=timeout))

    def refresh(self) -> DictionarySnapshot:
        """
        Re-fetch and re-parse the feed, then swap the dataset in one step.
        On failure the published snapshot is left untouched and the error is
        raised to the caller.
        """
        with self._write_lock:
            try:
                raw = self.fetcher.fetch(self.source)
                parsed = self.parser.parse(raw)
            except DictionaryError as exc:
                logger.info("Refresh of %s failed, keeping current data: %s", self.source, exc)
                raise

            previous = self._snapshot
            snapshot = DictionarySnapshot(
                entries=parsed.entries,
                counters=parsed.counters,
                last_update=datetime.now(timezone.utc),
                version=previous.version + 1 if previous else 1,
            )
            self._snapshot = snapshot

        logger.info(
            "Dictionary refreshed from %s: %d entries (version %d)",
            self.source,
            len(snapshot.entries),
            snapshot.version,
        )
        return self._clone_snapshot(snapshot)

    # region Reads
    def snapshot(self) -> DictionarySnapshot:
        """Independent copy of the published dataset."""
        return self._clone_snapshot(self._current())

    @property
    def counters(self) -> Counters:
        return self._clone(self._current().counters)

    @property
    def last_update(self) -> datetime:
        return self._current().last_update

    @property
    def version(self) -> int:
        return self._current().version

    def __len__(self) -> int:
        return len(self._current().entries)

    def get(self, entry_id: int) -> Entry:
        entry = self._current().entries.get(entry_id)
        if entry is None:
            raise EntryNotFound(entry_id)
        return self._clone(entry)

    def search(
        self,
        text: Optional[str] = None,
        text_langs: Iterable[LanguageCode] = (),
        sem_id: Optional[int] = None,
        topics: Iterable[Topic] = (),
    ) -> List[Entry]:
        langs = list(text_langs) or list(LanguageCode)
        wanted_topics = set(topics)

        def keep(entry: Entry) -> bool:
            if sem_id is not None and entry.sem_id != sem_id:
                return False
            if wanted_topics and entry.topic not in wanted_topics:
                return False
            if text is not None and not entry.matches(text, langs):
                return False
            return True

        entries = self._current().entries
        return [self._clone(e) for e in entries.values() if keep(e)]

    # endregion

    def _current(self) -> DictionarySnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise RuntimeError("Dictionary has not been loaded")
        return snapshot

    def _clone(self, obj):
        # Entry and Counters hold only immutable values, a shallow copy is a full copy.
        return copy(obj)

    def _clone_snapshot(self, snapshot: DictionarySnapshot) -> DictionarySnapshot:
        return DictionarySnapshot(
            entries={entry_id: self._clone(e) for entry_id, e in snapshot.entries.items()},
            counters=self._clone(snapshot.counters),
            last_update=snapshot.last_update,
            version=snapshot.version,
        )
