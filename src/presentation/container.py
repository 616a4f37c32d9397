import logging
from typing import Optional

from core.config import Settings
from domain.ports import LinkRegistry, MediaDownloader
from infrastructure.http_clients.downloader_client import SnapsaveDownloaderClient
from infrastructure.http_clients.media_fetcher import OriginMediaFetcher
from infrastructure.repositories.in_memory_links import InMemoryMediaLinkRepository
from use_cases import MediaFetcher, ResolveMediaUseCase, StreamMediaUseCase


# --- DI Container ---
class Container:
	def __init__(
		self,
		settings: Settings,
		downloader: Optional[MediaDownloader] = None,
		fetcher: Optional[MediaFetcher] = None,
		registry: Optional[LinkRegistry] = None,
	):
		self.settings = settings
		self.public_base_url = settings.public_base_url()

		self.link_registry = registry if registry is not None else InMemoryMediaLinkRepository(
			ttl_seconds=settings.registry.ttl_seconds,
			sweep_interval_seconds=settings.registry.sweep_interval_seconds,
		)
		self.downloader = downloader if downloader is not None else SnapsaveDownloaderClient(settings=settings.downloader)
		self.media_fetcher = fetcher if fetcher is not None else OriginMediaFetcher(settings=settings.stream)

		self.resolve_media_uc = ResolveMediaUseCase(
			downloader=self.downloader,
			registry=self.link_registry,
			api_settings=settings.api,
			logger=logging.getLogger("relay.resolve"),
		)
		self.stream_media_uc = StreamMediaUseCase(
			registry=self.link_registry,
			fetcher=self.media_fetcher,
			logger=logging.getLogger("relay.stream"),
		)

	def stream_link(self, media_id: str) -> str:
		return f"{self.public_base_url}/api/media/stream/{media_id}"

	async def startup(self) -> None:
		start = getattr(self.link_registry, "start", None)
		if start is not None:
			start()

	async def shutdown(self) -> None:
		stop = getattr(self.link_registry, "stop", None)
		if stop is not None:
			await stop()
		for client in (self.downloader, self.media_fetcher):
			aclose = getattr(client, "aclose", None)
			if aclose is not None:
				await aclose()
