from __future__ import annotations
import logging
from typing import AsyncIterator, Optional, Protocol

from core.error_logger import get_error_reporter, is_error_reporting_configured
from domain.errors import (
	LinkNotFoundError,
	UpstreamStatusError,
	UpstreamStreamInterruptedError,
	UpstreamUnreachableError,
)
from domain.models import RegistryEntry
from domain.ports import LinkRegistry
from domain.services.filenames import content_disposition


class UpstreamBody(Protocol):
	content_length: Optional[str]
	def aiter_bytes(self) -> AsyncIterator[bytes]: ...
	async def aclose(self) -> None: ...


class MediaFetcher(Protocol):
	async def open(self, url: str) -> UpstreamBody: ...


class MediaStream:
	"""Открытый поток медиа для одного запроса /api/media/stream/{id}"""

	def __init__(self, entry: RegistryEntry, upstream: UpstreamBody, logger: logging.Logger):
		self.entry = entry
		self._upstream = upstream
		self._logger = logger
		self._closed = False

	@property
	def media_type(self) -> str:
		return self.entry.content_type

	@property
	def headers(self) -> dict[str, str]:
		headers = {"Content-Disposition": content_disposition(self.entry.filename)}
		if self._upstream.content_length:
			headers["Content-Length"] = self._upstream.content_length
		return headers

	async def body(self) -> AsyncIterator[bytes]:
		sent = 0
		try:
			async for chunk in self._upstream.aiter_bytes():
				sent += len(chunk)
				yield chunk
		except UpstreamStreamInterruptedError as e:
			# заголовки уже ушли клиенту: только обрываем соединение
			self._logger.error(
				"Error streaming media from source media_id=%s after %d bytes", self.entry.id, sent
			)
			if is_error_reporting_configured():
				get_error_reporter().log_stream_error(
					e.__cause__ or e, media_id=self.entry.id, origin_url=self.entry.origin_url, stage="body"
				)
			raise
		finally:
			# отмена при отключении клиента и закрытие генератора тоже попадают сюда
			await self.aclose()
		self._logger.debug("Стрим завершен media_id=%s bytes=%d", self.entry.id, sent)

	async def aclose(self) -> None:
		if self._closed:
			return
		self._closed = True
		await self._upstream.aclose()


class StreamMediaUseCase:
	def __init__(
		self,
		registry: LinkRegistry,
		fetcher: MediaFetcher,
		logger: Optional[logging.Logger] = None,
	) -> None:
		self._registry = registry
		self._fetcher = fetcher
		self._logger = logger or logging.getLogger("relay.stream")

	async def execute(self, media_id: str) -> MediaStream:
		entry = self._registry.lookup(media_id)
		if entry is None:
			self._logger.info("Ссылка не найдена или истекла: media_id=%s", media_id)
			raise LinkNotFoundError()

		try:
			upstream = await self._fetcher.open(entry.origin_url)
		except UpstreamUnreachableError as e:
			self._report(e, entry, stage="connect")
			raise
		except UpstreamStatusError as e:
			self._report(e, entry, stage="status", status_code=e.upstream_status)
			raise

		self._logger.info("Стрим media_id=%s content_type=%s", media_id, entry.content_type)
		return MediaStream(entry, upstream, self._logger)

	def _report(self, error: Exception, entry: RegistryEntry, stage: str, status_code: Optional[int] = None) -> None:
		self._logger.error("Error in media stream for media_id=%s: %s", entry.id, error)
		if is_error_reporting_configured():
			get_error_reporter().log_stream_error(
				error, media_id=entry.id, origin_url=entry.origin_url, stage=stage, status_code=status_code
			)
