from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from lexicon.dictionary import Dictionary, DictionaryError

from api.dependencies import get_dictionary
from api.serializers import dictionary_info

router = APIRouter(prefix="/dictionary", tags=["dictionary"])


@router.get("")
def get_dictionary_info(dictionary: Dictionary = Depends(get_dictionary)):
    return dictionary_info(dictionary)


@router.post("/refresh")
def refresh_dictionary(dictionary: Dictionary = Depends(get_dictionary)):
    try:
        dictionary.refresh()
    except DictionaryError as exc:
        # The previous dataset is still being served.
        raise HTTPException(status_code=502, detail=f"Refresh failed: {exc}")
    return dictionary_info(dictionary)
