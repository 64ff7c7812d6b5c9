# Business logic services

from .phrase_index import PhraseIndex, decode_phrases, fold_key, load_phrase_index

__all__ = [
    "PhraseIndex",
    "decode_phrases",
    "fold_key",
    "load_phrase_index",
]
