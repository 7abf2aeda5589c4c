from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from lexicon.dictionary import Dictionary, EntryNotFound, LanguageCode, Topic

from api.dependencies import get_dictionary
from api.serializers import entry_to_dict

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("")
def search_entries(
    text: Optional[str] = Query(None, description="Case-insensitive substring to look for"),
    lang: List[LanguageCode] = Query(default=[], description="Languages to search; all when omitted"),
    sem_id: Optional[int] = Query(None, ge=0),
    topic: List[Topic] = Query(default=[]),
    dictionary: Dictionary = Depends(get_dictionary),
):
    entries = dictionary.search(text=text, text_langs=lang, sem_id=sem_id, topics=topic)
    return [entry_to_dict(e) for e in entries]


@router.get("/{entry_id}")
def get_entry(entry_id: int, dictionary: Dictionary = Depends(get_dictionary)):
    try:
        entry = dictionary.get(entry_id)
    except EntryNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return entry_to_dict(entry)
