"""
Performance tests for phrase lookup latency
"""
import time

import pytest
from httpx import ASGITransport, AsyncClient

from app.config.settings import RateLimitSettings, Settings
from app.main import create_app


def _p95(latencies):
    latencies = sorted(latencies)
    return latencies[int(len(latencies) * 0.95)]


@pytest.fixture
def perf_settings(write_dataset):
    records = [
        {
            "text": f"Phrase {i}",
            "category": ["slang", "cultural", "expression"][i % 3],
            "actualMeaning": f"Meaning {i}",
            "explainLikeImDutch": f"Dutch explanation {i}" if i % 2 else "",
        }
        for i in range(1000)
    ]
    return Settings(
        environment="testing",
        phrases_file=str(write_dataset(records)),
        random_seed=11,
        log_format="text",
        rate_limit=RateLimitSettings(enabled=False),
    )


@pytest.mark.perf
@pytest.mark.asyncio
async def test_phrase_lookup_latency_p95(perf_settings):
    """Term, category and random lookups stay under 50ms at p95 in-process"""
    app = create_app(perf_settings)

    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            latencies = []
            for i in range(60):
                path = [
                    f"/phrase/phrase%20{i}",
                    "/phrase/category/slang",
                    "/phrase",
                    "/phrase/dutch",
                ][i % 4]
                start = time.perf_counter()
                response = await client.get(path)
                latencies.append((time.perf_counter() - start) * 1000)
                assert response.status_code == 200

    p95_latency = _p95(latencies)
    print(f"\nPhrase lookup p95 latency: {p95_latency:.2f}ms")
    assert p95_latency <= 50.0, f"p95 latency {p95_latency:.2f}ms exceeds 50ms threshold"


@pytest.mark.perf
def test_index_build_and_lookup_speed(perf_settings):
    from app.services.phrase_index import load_phrase_index

    start = time.perf_counter()
    index = load_phrase_index(perf_settings.get_phrases_path())
    build_ms = (time.perf_counter() - start) * 1000

    start = time.perf_counter()
    for i in range(10_000):
        index.get_by_term(f"PHRASE {i % 1000}")
    lookup_us = (time.perf_counter() - start) * 1_000_000 / 10_000

    assert len(index) == 1000
    assert build_ms < 1000.0, f"building 1000 phrases took {build_ms:.2f}ms"
    assert lookup_us < 100.0, f"term lookup averaged {lookup_us:.2f}us"
