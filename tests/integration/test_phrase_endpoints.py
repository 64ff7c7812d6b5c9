"""
Integration tests for the phrase HTTP API against a loaded dataset
"""
import pytest
from fastapi.testclient import TestClient

from app.api.metrics_endpoints import metrics_collector
from app.config.settings import Environment, SecuritySettings, Settings
from app.core.dependencies import ServiceContainer
from app.core.exceptions import PhraseDecodeError, PhraseSourceNotFoundError
from app.main import create_app

PHRASE_KEYS = {
    "text",
    "category",
    "actualMeaning",
    "afrikaansInfluence",
    "explainLikeImDutch",
    "misunderstandingProbability",
    "confidence",
}


def test_root_banner(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"name": "Saffa as a Service", "status": "Sharp sharp!"}


def test_random_phrase_uses_camel_case_keys(client):
    r = client.get("/phrase")
    assert r.status_code == 200
    body = r.json()
    assert set(body) == PHRASE_KEYS
    assert body["text"] in {"Eish", "Lekker"}


def test_lookup_scenario_over_http(client):
    r = client.get("/phrase/lekker")
    assert r.status_code == 200
    lekker = r.json()
    assert lekker["text"] == "Lekker"
    assert lekker["explainLikeImDutch"] == "Means cool/nice"

    assert client.get("/phrase/LEKKER").json() == lekker
    assert client.get("/phrase/category/slang").json() == [lekker]
    assert client.get("/phrase/category/Slang").json() == [lekker]
    assert client.get("/phrase/category/unknown").json() == []
    assert client.get("/phrase/dutch/all").json() == [lekker]


def test_random_dutch_phrase_only_returns_explained_phrases(client):
    for _ in range(20):
        r = client.get("/phrase/dutch")
        assert r.status_code == 200
        assert r.json()["text"] == "Lekker"


def test_term_with_spaces(write_dataset):
    settings = Settings(
        environment="testing",
        phrases_file=str(write_dataset([{"text": "Ja nee", "category": "expression"}])),
        log_format="text",
    )
    with TestClient(create_app(settings)) as client:
        r = client.get("/phrase/JA%20NEE")
        assert r.status_code == 200
        assert r.json()["text"] == "Ja nee"


def test_empty_dataset_serves_zero_valued_phrase(write_dataset):
    settings = Settings(
        environment="testing",
        phrases_file=str(write_dataset([])),
        log_format="text",
    )
    with TestClient(create_app(settings)) as client:
        r = client.get("/phrase")
        assert r.status_code == 200
        assert r.json() == {
            "text": "",
            "category": "",
            "actualMeaning": "",
            "afrikaansInfluence": False,
            "explainLikeImDutch": "",
            "misunderstandingProbability": 0.0,
            "confidence": "High",
        }
        assert client.get("/phrase/dutch/all").json() == []


def test_health_reports_dataset_counts(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["phrases"] == {"total_count": 2, "dutch_count": 1, "category_count": 2}
    assert "error_statistics" in body


def test_health_unavailable_before_startup(app_settings):
    # No context manager: lifespan never runs, so nothing is published
    client = TestClient(create_app(app_settings))

    r = client.get("/health")
    assert r.status_code == 503
    assert r.json()["status"] == "unhealthy"

    r = client.get("/phrase")
    assert r.status_code == 503
    assert r.json()["error_code"] == "SERVICE_UNAVAILABLE"


def test_metrics_grouped_by_route_template(client):
    metrics_collector.reset()
    client.get("/phrase/lekker")
    client.get("/phrase/eish")
    client.get("/phrase/missing")

    body = client.get("/metrics").json()
    by_term = body["endpoints"]["GET /phrase/{term}"]
    assert by_term["request_count"] == 3
    assert by_term["error_count"] == 1
    assert by_term["status_codes"] == {"200": 2, "404": 1}
    assert "GET /metrics" not in body["endpoints"]
    assert body["phrase_queries"]["get_by_term"]["count"] >= 3


def test_missing_dataset_aborts_startup(tmp_path):
    settings = Settings(
        environment="testing",
        phrases_file=str(tmp_path / "missing.json"),
        log_format="text",
    )
    with pytest.raises(PhraseSourceNotFoundError):
        with TestClient(create_app(settings)):
            pass


def test_malformed_dataset_aborts_startup(tmp_path):
    path = tmp_path / "phrases.json"
    path.write_text("{not json", encoding="utf-8")
    settings = Settings(environment="testing", phrases_file=str(path), log_format="text")

    with pytest.raises(PhraseDecodeError):
        with TestClient(create_app(settings)):
            pass


@pytest.mark.asyncio
async def test_service_container_lifecycle(app_settings):
    container = ServiceContainer(app_settings)
    assert not container.initialized
    with pytest.raises(RuntimeError):
        container.get_phrase_index()

    await container.initialize_services()
    index = container.get_phrase_index()
    assert len(index) == 2

    # Second initialization keeps the published index
    await container.initialize_services()
    assert container.get_phrase_index() is index

    await container.cleanup_services()
    assert not container.initialized


@pytest.mark.asyncio
async def test_service_container_propagates_load_errors(tmp_path):
    container = ServiceContainer(
        Settings(environment="testing", phrases_file=str(tmp_path / "missing.json"))
    )
    with pytest.raises(PhraseSourceNotFoundError):
        await container.initialize_services()
    assert not container.initialized


def test_seeded_settings_give_reproducible_draws(app_settings):
    def draws():
        with TestClient(create_app(app_settings)) as client:
            return [client.get("/phrase").json()["text"] for _ in range(15)]

    assert draws() == draws()


def test_hsts_header_outside_development(client):
    r = client.get("/phrase/lekker")
    assert r.headers["Strict-Transport-Security"] == (
        "max-age=5184000; includeSubDomains; preload"
    )


def test_no_hsts_header_in_development(app_settings):
    settings = app_settings.model_copy(update={"environment": Environment.DEVELOPMENT})
    with TestClient(create_app(settings)) as client:
        assert "Strict-Transport-Security" not in client.get("/").headers


def test_hsts_can_be_disabled(app_settings):
    settings = app_settings.model_copy(
        update={"security": SecuritySettings(hsts_enabled=False)}
    )
    with TestClient(create_app(settings)) as client:
        assert "Strict-Transport-Security" not in client.get("/").headers


def test_cors_preflight(client):
    r = client.options(
        "/phrase",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] in {"*", "https://example.com"}


def test_production_redirects_plain_http(app_settings):
    settings = app_settings.model_copy(update={"environment": Environment.PRODUCTION})
    with TestClient(create_app(settings)) as client:
        r = client.get("/phrase/lekker", follow_redirects=False)
        assert r.status_code == 307
        assert r.headers["location"] == "https://testserver/phrase/lekker"

        r = client.get("https://testserver/phrase/lekker")
        assert r.status_code == 200
        assert r.json()["text"] == "Lekker"


def test_no_redirect_in_testing(client):
    r = client.get("/phrase/lekker", follow_redirects=False)
    assert r.status_code == 200


def test_non_standard_json_constant_aborts_startup(tmp_path):
    path = tmp_path / "phrases.json"
    path.write_text('[{"text": "Eish", "misunderstandingProbability": NaN}]', encoding="utf-8")
    settings = Settings(environment="testing", phrases_file=str(path), log_format="text")

    with pytest.raises(PhraseDecodeError):
        with TestClient(create_app(settings)):
            pass
