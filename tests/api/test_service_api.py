from datetime import datetime

from presentation.app import create_app
from presentation.container import Container


def test_service_descriptor(client):
    response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "active"
    assert body["usage"]["download"] == "http://localhost:3000/api/data?url=INSTAGRAM_POST_OR_REEL_URL"
    assert body["usage"]["example_reel"].startswith("http://localhost:3000/api/data?url=https://www.instagram.com/")


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert datetime.fromisoformat(body["timestamp"])


def test_unmatched_route_is_json_404(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}


def test_cors_preflight_short_circuits(client):
    response = client.options(
        "/api/data",
        headers={
            "Origin": "https://frontend.example",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://frontend.example"
    assert response.headers["access-control-allow-credentials"] == "true"
    assert "GET" in response.headers["access-control-allow-methods"]


def test_cors_headers_on_simple_request(client):
    response = client.get("/health", headers={"Origin": "https://frontend.example"})

    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers


def test_stream_links_use_public_base_url(settings, downloader, fetcher, registry):
    server = settings.server.model_copy(update={"koyeb_app_url": "relay.koyeb.app"})
    app_settings = settings.model_copy(update={"server": server})
    downloader.payload = {"status": True, "data": [{"url": "http://x/a.mp4"}]}
    container = Container(app_settings, downloader=downloader, fetcher=fetcher, registry=registry)

    from fastapi.testclient import TestClient

    client = TestClient(create_app(app_settings, container))
    body = client.get("/api/data", params={"url": "https://www.instagram.com/p/x/"}).json()

    assert body["media"][0]["download_api_url"].startswith("https://relay.koyeb.app/api/media/stream/")


def test_lifespan_starts_and_stops_registry(settings, downloader, fetcher, registry):
    container = Container(settings, downloader=downloader, fetcher=fetcher, registry=registry)

    from fastapi.testclient import TestClient

    with TestClient(create_app(settings, container)) as client:
        assert client.get("/health").status_code == 200
        assert registry._sweeper is not None

    assert registry._sweeper is None


def test_openapi_documents_error_body(client):
    schema = client.get("/openapi.json").json()

    resolve = schema["paths"]["/api/data"]["get"]["responses"]
    stream = schema["paths"]["/api/media/stream/{media_id}"]["get"]["responses"]

    assert resolve["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert stream["504"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert set(schema["components"]["schemas"]["ErrorResponse"]["properties"]) == {"success", "error"}
