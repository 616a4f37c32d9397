from __future__ import annotations

import os

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("LOG_TO_FILES", "false")

from core.config import (  # noqa: E402
    ApiSettings,
    DownloaderSettings,
    LoggingSettings,
    RegistrySettings,
    ServerSettings,
    Settings,
    StreamSettings,
)
from infrastructure.http_clients.media_fetcher import OriginMediaFetcher  # noqa: E402
from infrastructure.repositories.in_memory_links import InMemoryMediaLinkRepository  # noqa: E402
from presentation.app import create_app  # noqa: E402
from presentation.container import Container  # noqa: E402
from presentation.schemas.downloader import DownloaderPayload  # noqa: E402
from use_cases.mappers.downloader_to_domain import downloader_payload_to_domain  # noqa: E402


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubDownloader:
    """Downloader double fed with a raw ``{status, msg, username, title, data}`` payload."""

    def __init__(self, payload: dict | None = None, error: Exception | None = None):
        self.payload = payload if payload is not None else {"status": False}
        self.error = error
        self.calls: list[str] = []

    async def extract(self, url: str):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return downloader_payload_to_domain(DownloaderPayload.model_validate(self.payload))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        server=ServerSettings(
            host="127.0.0.1",
            port=3000,
            node_env="development",
            public_url=None,
            koyeb_app_url=None,
            render_external_url=None,
        ),
        api=ApiSettings(
            include_stream_link=True,
            brand_prefix="VibeDownloader.me - ",
            source_domain="instagram.com",
        ),
        downloader=DownloaderSettings(base_url="http://downloader.test", api_key=None),
        stream=StreamSettings(timeout=5.0, max_redirects=3, chunk_size=4),
        registry=RegistrySettings(ttl_seconds=3600, sweep_interval_seconds=3600),
        logging=LoggingSettings(to_files=False),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock) -> InMemoryMediaLinkRepository:
    return InMemoryMediaLinkRepository(ttl_seconds=3600, clock=clock)


@pytest.fixture
def origin_routes() -> dict:
    """Map of absolute origin URL -> ``httpx.Response`` or ``callable(request)``."""
    return {}


@pytest.fixture
def origin_requests() -> list:
    return []


@pytest.fixture
def fetcher(settings, origin_routes, origin_requests) -> OriginMediaFetcher:
    def handler(request: httpx.Request) -> httpx.Response:
        origin_requests.append(request)
        route = origin_routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        if callable(route):
            return route(request)
        return route

    return OriginMediaFetcher(settings.stream, transport=httpx.MockTransport(handler))


@pytest.fixture
def downloader() -> StubDownloader:
    return StubDownloader()


@pytest.fixture
def make_client(settings, downloader, fetcher, registry):
    def _make(app_settings: Settings | None = None, **client_kwargs) -> TestClient:
        app_settings = app_settings or settings
        container = Container(app_settings, downloader=downloader, fetcher=fetcher, registry=registry)
        return TestClient(create_app(app_settings, container), **client_kwargs)

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def stub_downloader():
    """Factory for downloader doubles: ``stub_downloader(payload)`` or ``stub_downloader(error=...)``."""
    return StubDownloader
