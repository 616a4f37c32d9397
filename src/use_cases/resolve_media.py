from __future__ import annotations
import logging
from typing import Optional
from urllib.parse import urlsplit

from core.config import ApiSettings
from domain.errors import InvalidSourceUrlError, MediaNotFoundError
from domain.models import ExtractionFailure, ResolvedMedia, ResolvedMediaItem
from domain.ports import LinkRegistry, MediaDownloader
from domain.services.filenames import build_filename, sanitize_title
from domain.services.media_classifier import classify, content_type_for


DEFAULT_USERNAME = "unknown_user"
DEFAULT_DISPLAY_TITLE = "Instagram Content"
DEFAULT_QUALITY = "Standard"


def validate_source_url(url: Optional[str], source_domain: str) -> str:
	"""Проверить, что url - абсолютная http(s) ссылка на нужный домен"""
	if url is None or not url.strip():
		raise InvalidSourceUrlError("URL parameter is missing")
	url = url.strip()

	try:
		parts = urlsplit(url)
		host = (parts.hostname or "").lower()
	except ValueError as e:
		raise InvalidSourceUrlError("Invalid URL format.") from e
	if parts.scheme not in ("http", "https") or not host:
		raise InvalidSourceUrlError("Invalid URL format.")

	domain = source_domain.lower()
	if host != domain and not host.endswith("." + domain):
		raise InvalidSourceUrlError("Invalid Instagram URL provided.")
	return url


class ResolveMediaUseCase:
	def __init__(
		self,
		downloader: MediaDownloader,
		registry: LinkRegistry,
		api_settings: ApiSettings,
		logger: Optional[logging.Logger] = None,
	) -> None:
		self._downloader = downloader
		self._registry = registry
		self._settings = api_settings
		self._logger = logger or logging.getLogger("relay.resolve")

	async def execute(self, url: Optional[str]) -> ResolvedMedia:
		source_url = validate_source_url(url, self._settings.source_domain)
		self._logger.info("Processing Instagram URL: %s", source_url)

		result = await self._downloader.extract(source_url)
		if isinstance(result, ExtractionFailure):
			self._logger.info("Загрузчик не нашел медиа для %s: %s", source_url, result.message)
			raise MediaNotFoundError(result.message)

		if result.reported_items == 0:
			raise MediaNotFoundError("No downloadable media links found by the provider.")

		# заголовок для имени файла считаем один раз на запрос
		safe_title = sanitize_title(
			result.title,
			default=self._settings.default_title,
			fallback=self._settings.fallback_title,
			max_length=self._settings.title_max_length,
		)

		items: list[ResolvedMediaItem] = []
		for raw in result.items:
			kind, extension = classify(raw.url, raw.hint)
			filename = build_filename(self._settings.brand_prefix, safe_title, extension)
			content_type = content_type_for(kind, extension)
			media_id = self._registry.insert(raw.url, filename, content_type)
			items.append(
				ResolvedMediaItem(
					media_id=media_id,
					type=kind,
					quality=raw.hint or DEFAULT_QUALITY,
					url=raw.url,
					thumbnail=raw.thumbnail,
					filename=filename,
					content_type=content_type,
				)
			)

		if not items:
			raise MediaNotFoundError("Could not prepare any media for download from the provided links.")

		self._logger.info("Подготовлено %d медиа для %s", len(items), source_url)
		return ResolvedMedia(
			username=result.username or DEFAULT_USERNAME,
			title=result.title or DEFAULT_DISPLAY_TITLE,
			items=items,
		)
