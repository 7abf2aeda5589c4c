from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, Optional


class LanguageCode(str, Enum):
    """Languages carried by the feed, in feed column order."""

    LAT = "lat"
    IRO = "iro"
    POR = "por"
    SPA = "spa"
    CAT = "cat"
    OCC = "occ"
    FRA = "fra"
    SRD = "srd"
    ITA = "ita"
    ROM = "rom"
    ENG = "eng"
    FOL = "fol"
    FRK = "frk"
    SLA = "sla"


class Topic(str, Enum):
    ANIMALS = "animals"
    BODY = "body"
    CLOTHING = "clothing"
    COLOURS = "colours"
    EMOTIONS = "emotions"
    FAMILY = "family"
    FOOD = "food"
    HOUSE = "house"
    NATURE = "nature"
    NUMBERS = "numbers"
    PLACES = "places"
    PROFESSIONS = "professions"
    RELIGION = "religion"
    TIME = "time"
    TOOLS = "tools"
    TRANSPORT = "transport"
    WEATHER = "weather"

    @classmethod
    def from_cell(cls, value: Optional[str]) -> Optional["Topic"]:
        """Map a raw feed cell to a topic; unknown or empty values yield None."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass
class Entry:
    id: int
    sem_id: Optional[int] = None
    topic: Optional[Topic] = None
    essential_flag: bool = False
    basic_flag: bool = False
    lat: Optional[str] = None
    iro: Optional[str] = None
    por: Optional[str] = None
    spa: Optional[str] = None
    cat: Optional[str] = None
    occ: Optional[str] = None
    fra: Optional[str] = None
    srd: Optional[str] = None
    ita: Optional[str] = None
    rom: Optional[str] = None
    eng: Optional[str] = None
    fol: Optional[str] = None
    frk: Optional[str] = None
    sla: Optional[str] = None

    def text(self, lang: LanguageCode) -> Optional[str]:
        return getattr(self, lang.value)

    def texts(self) -> Dict[LanguageCode, Optional[str]]:
        return {lang: self.text(lang) for lang in LanguageCode}

    def matches(self, text: str, langs: Iterable[LanguageCode]) -> bool:
        """
        Case-insensitive substring match against the given language fields.
        Absent fields never match.
        """
        needle = text.casefold()
        for lang in langs:
            value = self.text(lang)
            if value and needle in value.casefold():
                return True
        return False


@dataclass
class Counters:
    total: int = 0
    sem: int = 0
    lat: int = 0
    iro: int = 0
    por: int = 0
    spa: int = 0
    cat: int = 0
    occ: int = 0
    fra: int = 0
    srd: int = 0
    ita: int = 0
    rom: int = 0
    eng: int = 0
    fol: int = 0
    frk: int = 0
    sla: int = 0


@dataclass
class ParsedFeed:
    entries: Dict[int, Entry]
    counters: Counters
    rows_read: int = 0
    rows_dropped: int = 0


@dataclass(frozen=True)
class DictionarySnapshot:
    """
    One published dataset. A snapshot is never mutated once a store has
    made it visible; a refresh builds and publishes a new one.
    """

    entries: Dict[int, Entry]
    counters: Counters
    last_update: datetime
    version: int = 0
