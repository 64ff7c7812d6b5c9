"""
Phrase API endpoints - random picks, term and category lookups, Dutch explanations
"""
from typing import List

from fastapi import APIRouter, Depends

from app.core.dependencies import get_phrase_index
from app.core.exceptions import PhraseNotFoundError
from app.core.metrics import record_phrase_latency
from app.models.phrase import Phrase
from app.services.phrase_index import PhraseIndex

router = APIRouter(prefix="/phrase", tags=["Phrases"])


@router.get(
    "",
    response_model=Phrase,
    name="GetRandomPhrase",
    summary="Get a random South African phrase",
    description="Returns a random South African slang term or expression. Sharp sharp!",
)
async def get_random_phrase(index: PhraseIndex = Depends(get_phrase_index)):
    with record_phrase_latency("get_random"):
        return index.get_random()


@router.get(
    "/dutch",
    response_model=Phrase,
    name="GetRandomDutchPhrase",
    summary="Get a random phrase explained for Dutchies",
    description="Returns a random South African phrase with a playful Dutch explanation.",
)
async def get_random_dutch_phrase(index: PhraseIndex = Depends(get_phrase_index)):
    with record_phrase_latency("get_random_for_dutch"):
        return index.get_random_for_dutch()


@router.get(
    "/dutch/all",
    response_model=List[Phrase],
    name="GetDutchPhrases",
    summary="Get every phrase that has a Dutch explanation",
)
async def get_dutch_phrases(index: PhraseIndex = Depends(get_phrase_index)):
    with record_phrase_latency("get_for_dutch"):
        return index.get_for_dutch()


@router.get(
    "/category/{category}",
    response_model=List[Phrase],
    name="GetPhrasesByCategory",
    summary="Get phrases filtered by category (slang, cultural, expression)",
)
async def get_phrases_by_category(
    category: str,
    index: PhraseIndex = Depends(get_phrase_index),
):
    """
    Unknown categories return an empty list.
    """
    with record_phrase_latency("get_by_category"):
        return index.get_by_category(category)


@router.get(
    "/{term}",
    response_model=Phrase,
    name="GetPhraseByTerm",
    summary="Get a phrase by exact term",
)
async def get_phrase_by_term(
    term: str,
    index: PhraseIndex = Depends(get_phrase_index),
):
    """
    Case-insensitive exact match on the phrase text.

    - **term**: phrase text, e.g. `lekker`
    """
    with record_phrase_latency("get_by_term"):
        phrase = index.get_by_term(term)
    if phrase is None:
        raise PhraseNotFoundError(term)
    return phrase
