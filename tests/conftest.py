"""
Shared fixtures: phrase datasets on disk, settings and a running test client.
"""
import json
import random
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.config.settings import Settings
from app.main import create_app
from app.services.phrase_index import PhraseIndex, decode_phrases

SAMPLE_DATASET = Path(__file__).resolve().parent.parent / "data" / "phrases.json"

SCENARIO_RECORDS = [
    {"text": "Eish", "category": "expression", "explainLikeImDutch": ""},
    {"text": "Lekker", "category": "slang", "explainLikeImDutch": "Means cool/nice"},
]

FIVE_RECORDS = [
    {"text": "Eish", "category": "expression"},
    {"text": "Lekker", "category": "slang", "explainLikeImDutch": "Means cool/nice"},
    {"text": "Braai", "category": "cultural", "explainLikeImDutch": "A barbecue"},
    {"text": "Robot", "category": "slang", "explainLikeImDutch": "A traffic light"},
    {"text": "Howzit", "category": "slang"},
]


@pytest.fixture
def write_dataset(tmp_path):
    """Write a list of records as a JSON dataset and return its path."""
    def _write(records, name="phrases.json"):
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def scenario_index():
    return PhraseIndex(
        decode_phrases(json.dumps(SCENARIO_RECORDS)),
        rng=random.Random(42),
    )


@pytest.fixture
def five_index():
    return PhraseIndex(
        decode_phrases(json.dumps(FIVE_RECORDS)),
        rng=random.Random(1234),
    )


@pytest.fixture
def empty_index():
    return PhraseIndex([], rng=random.Random(0))


@pytest.fixture
def app_settings(write_dataset):
    return Settings(
        environment="testing",
        phrases_file=str(write_dataset(SCENARIO_RECORDS)),
        random_seed=7,
        log_format="text",
    )


@pytest.fixture
def client(app_settings):
    with TestClient(create_app(app_settings)) as test_client:
        yield test_client
