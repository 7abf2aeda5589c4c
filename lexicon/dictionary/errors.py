from __future__ import annotations


class DictionaryError(Exception):
    """Base class for everything the dictionary raises."""


class FetchFailed(DictionaryError):
    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to fetch dictionary feed from {source}: {reason}")
        self.source = source
        self.reason = reason


class FeedError(DictionaryError):
    """The feed was fetched but its header rows could not be read."""


class MissingHeaders(FeedError):
    def __init__(self, detail: str = "counters row is missing"):
        super().__init__(f"Missing dictionary headers: {detail}")
        self.detail = detail


class MalformedNumber(FeedError):
    def __init__(self, column: int, value: str):
        super().__init__(f"Malformed number {value!r} in counters column {column}")
        self.column = column
        self.value = value


class EntryNotFound(DictionaryError, LookupError):
    def __init__(self, entry_id: int):
        super().__init__(f"Entry not found: {entry_id}")
        self.entry_id = entry_id
