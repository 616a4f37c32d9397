import logging
from typing import AsyncIterator, Optional

import httpx

from core.config import StreamSettings
from domain.errors import (
	UpstreamStatusError,
	UpstreamStreamInterruptedError,
	UpstreamUnreachableError,
)


class UpstreamMedia:
	"""Открытый ответ источника: заголовки уже получены, тело еще не прочитано"""

	def __init__(self, response: httpx.Response, chunk_size: int):
		self._response = response
		self._chunk_size = chunk_size

	@property
	def status_code(self) -> int:
		return self._response.status_code

	@property
	def content_length(self) -> Optional[str]:
		return self._response.headers.get("Content-Length")

	@property
	def final_url(self) -> str:
		return str(self._response.url)

	async def aiter_bytes(self) -> AsyncIterator[bytes]:
		# сырые байты без декодирования: их длину и считает Content-Length
		try:
			async for chunk in self._response.aiter_raw(self._chunk_size):
				yield chunk
		except httpx.TransportError as e:
			raise UpstreamStreamInterruptedError() from e

	async def aclose(self) -> None:
		await self._response.aclose()


class OriginMediaFetcher:
	"""GET исходного медиа с браузерными заголовками, ограничением редиректов и таймаутом"""

	def __init__(
		self,
		settings: StreamSettings,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	):
		self._logger = logging.getLogger("media_fetcher")
		self._chunk_size = settings.chunk_size
		self._client = httpx.AsyncClient(
			headers={
				"User-Agent": settings.user_agent,
				"Referer": settings.referer,
				"Origin": settings.origin,
				# тело отдаем клиенту как есть, Content-Length должен совпасть
				"Accept-Encoding": "identity",
			},
			follow_redirects=True,
			max_redirects=settings.max_redirects,
			timeout=settings.timeout,
			transport=transport,
		)

	async def open(self, url: str) -> UpstreamMedia:
		try:
			request = self._client.build_request("GET", url)
			response = await self._client.send(request, stream=True)
		except httpx.TooManyRedirects as e:
			self._logger.warning("Слишком много редиректов для %s", url)
			raise UpstreamStatusError(502, "Too many redirects from media source.") from e
		except (httpx.TransportError, httpx.InvalidURL) as e:
			self._logger.warning("Источник недоступен %s: %s", url, str(e))
			raise UpstreamUnreachableError() from e

		if response.history:
			self._logger.info("Redirected from %s to %s", url, response.url)

		if response.status_code >= 400:
			await response.aclose()
			self._logger.warning("Источник ответил %s для %s", response.status_code, url)
			raise UpstreamStatusError(response.status_code)

		return UpstreamMedia(response, self._chunk_size)

	async def aclose(self) -> None:
		await self._client.aclose()
