"""
Dictionary subsystem exports.
"""

from .errors import DictionaryError, EntryNotFound, FeedError, FetchFailed, MalformedNumber, MissingHeaders
from .feed import CsvFeedParser, FeedParser, parse_feed
from .fetcher import FeedFetcher, FileFeedFetcher, HttpFeedFetcher, StaticFeedFetcher, fetcher_for
from .models import Counters, DictionarySnapshot, Entry, LanguageCode, ParsedFeed, Topic
from .scheduler import RefreshScheduler, SchedulerConfig
from .store import Dictionary

__all__ = [
    "Counters",
    "CsvFeedParser",
    "Dictionary",
    "DictionaryError",
    "DictionarySnapshot",
    "Entry",
    "EntryNotFound",
    "FeedError",
    "FeedFetcher",
    "FeedParser",
    "FetchFailed",
    "FileFeedFetcher",
    "HttpFeedFetcher",
    "LanguageCode",
    "MalformedNumber",
    "MissingHeaders",
    "ParsedFeed",
    "RefreshScheduler",
    "SchedulerConfig",
    "StaticFeedFetcher",
    "Topic",
    "fetcher_for",
    "parse_feed",
]
