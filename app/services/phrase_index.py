"""
Phrase Index - in-memory lookup structures over the phrase dataset.

The index is built once from a JSON dataset and is read-only afterwards.
All derived views are computed in the constructor, so an index object is
never observable in a partially built state.
"""
import json
import logging
import os
import random
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from app.core.exceptions import PhraseDecodeError, PhraseSourceNotFoundError
from app.models.phrase import Phrase

logger = logging.getLogger(__name__)

PhraseSource = Union[str, os.PathLike, bytes, bytearray]

# Lowercased wire names and attribute names -> attribute name
_FIELD_LOOKUP: Dict[str, str] = {}
for _name, _field in Phrase.model_fields.items():
    _FIELD_LOOKUP[_name.lower()] = _name
    if _field.alias:
        _FIELD_LOOKUP[_field.alias.lower()] = _name


def fold_key(value: str) -> str:
    """Fold a term or category into its lookup key (locale-invariant)."""
    return value.lower()


class PhraseIndex:
    """Immutable index answering random, term, category and Dutch-subset queries"""

    def __init__(self, phrases: Iterable[Phrase], rng: Optional[random.Random] = None):
        all_phrases = tuple(phrases)
        by_term: Dict[str, Phrase] = {}
        by_category: Dict[str, List[Phrase]] = {}
        dutch: List[Phrase] = []

        for phrase in all_phrases:
            # Duplicate terms: the later record wins
            by_term[fold_key(phrase.text)] = phrase
            by_category.setdefault(fold_key(phrase.category), []).append(phrase)
            if phrase.has_dutch_explanation:
                dutch.append(phrase)

        self._all: Tuple[Phrase, ...] = all_phrases
        self._by_term: Mapping[str, Phrase] = MappingProxyType(by_term)
        self._by_category: Mapping[str, Tuple[Phrase, ...]] = MappingProxyType(
            {key: tuple(group) for key, group in by_category.items()}
        )
        self._dutch: Tuple[Phrase, ...] = tuple(dutch)

        self._rng = rng if rng is not None else random.Random()
        self._rng_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._all)

    def _pick(self, pool: Tuple[Phrase, ...]) -> Phrase:
        if not pool:
            return Phrase()
        with self._rng_lock:
            position = self._rng.randrange(len(pool))
        return pool[position]

    def get_random(self) -> Phrase:
        """
        Get a uniformly random phrase.

        Returns:
            A phrase from the dataset, or a zero-valued Phrase if the dataset is empty
        """
        return self._pick(self._all)

    def get_random_for_dutch(self) -> Phrase:
        """
        Get a uniformly random phrase that has a Dutch explanation.

        Returns:
            A phrase from the Dutch subset, or a zero-valued Phrase if there is none
        """
        return self._pick(self._dutch)

    def get_by_term(self, term: str) -> Optional[Phrase]:
        """
        Get a phrase by exact, case-insensitive term match.

        Args:
            term: Phrase text to look up

        Returns:
            Matching phrase or None
        """
        return self._by_term.get(fold_key(term))

    def get_by_category(self, category: str) -> List[Phrase]:
        """
        Get phrases by category (e.g., "slang", "cultural", "expression").

        Args:
            category: Category name, matched case-insensitively

        Returns:
            New list of matching phrases in dataset order, empty if the category is unknown
        """
        return list(self._by_category.get(fold_key(category), ()))

    def all_phrases(self) -> List[Phrase]:
        """Get every phrase in dataset order."""
        return list(self._all)

    def get_for_dutch(self) -> List[Phrase]:
        """Get all phrases with a Dutch explanation, in dataset order."""
        return list(self._dutch)

    def categories(self) -> List[str]:
        """Folded category keys in first-seen order."""
        return list(self._by_category)

    def stats(self) -> Dict[str, int]:
        return {
            "total_count": len(self._all),
            "dutch_count": len(self._dutch),
            "category_count": len(self._by_category),
        }


def _reject_constant(token: str) -> Any:
    raise PhraseDecodeError(
        f"Phrases payload contains non-standard JSON constant {token}",
        details={"token": token}
    )


def _normalize_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Map case-insensitive field names onto Phrase attributes, dropping unknowns and nulls."""
    data: Dict[str, Any] = {}
    for key, value in raw.items():
        name = _FIELD_LOOKUP.get(key.lower())
        if name is None or value is None:
            continue
        data[name] = value
    return data


def decode_phrases(payload: Union[str, bytes, bytearray]) -> List[Phrase]:
    """
    Decode a JSON array of phrase objects.

    Args:
        payload: JSON document

    Returns:
        Phrases in document order

    Raises:
        PhraseDecodeError: If the payload is not a well-formed array of phrase objects
    """
    try:
        document = json.loads(payload, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as e:
        raise PhraseDecodeError(f"Phrases payload is not valid JSON: {e}") from e

    if document is None:
        return []
    if not isinstance(document, list):
        raise PhraseDecodeError(
            "Phrases payload must be a JSON array",
            details={"root_type": type(document).__name__}
        )

    phrases = []
    for position, raw in enumerate(document):
        if not isinstance(raw, dict):
            raise PhraseDecodeError(
                f"Phrase at index {position} is not a JSON object",
                details={"index": position, "type": type(raw).__name__}
            )
        try:
            phrases.append(Phrase.model_validate(_normalize_record(raw)))
        except ValidationError as e:
            raise PhraseDecodeError(
                f"Phrase at index {position} is malformed",
                details={
                    "index": position,
                    "errors": [
                        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                        for err in e.errors()
                    ],
                }
            ) from e
    return phrases


def load_phrase_index(source: PhraseSource, rng: Optional[random.Random] = None) -> PhraseIndex:
    """
    Load the phrase dataset and build the index.

    Args:
        source: Path to a JSON dataset, or the JSON payload itself as bytes
        rng: Random source for random picks (a fresh one if omitted)

    Returns:
        Fully built PhraseIndex

    Raises:
        PhraseSourceNotFoundError: If the dataset path does not exist
        PhraseDecodeError: If the dataset is malformed
    """
    if isinstance(source, (bytes, bytearray)):
        payload: Union[str, bytes, bytearray] = source
        origin = "<memory>"
    else:
        path = Path(source)
        origin = str(path)
        if not path.is_file():
            raise PhraseSourceNotFoundError(origin)
        payload = path.read_bytes()

    index = PhraseIndex(decode_phrases(payload), rng=rng)

    logger.info(
        f"Loaded {len(index)} phrases from {origin}",
        extra={"source": origin, **index.stats()}
    )
    return index
