import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from core.config import DownloaderSettings
from core.error_logger import get_error_reporter, is_error_reporting_configured
from domain.errors import DownloaderUnavailableError
from domain.models import ExtractionResult
from domain.ports.media_downloader import MediaDownloader
from presentation.schemas.downloader import DownloaderPayload
from use_cases.mappers.downloader_to_domain import downloader_payload_to_domain


class SnapsaveDownloaderClient(MediaDownloader):
	"""HTTP-адаптер к внешнему сервису извлечения медиа (snapsave-совместимый ответ)"""

	def __init__(
		self,
		settings: DownloaderSettings,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	):
		self._logger = logging.getLogger("downloader")
		self._base_url = settings.base_url.rstrip("/")
		self._extract_path = settings.extract_path
		headers = {"Accept": "application/json"}
		if settings.api_key:
			headers["X-API-KEY"] = settings.api_key
		self._client = httpx.AsyncClient(
			base_url=self._base_url,
			headers=headers,
			timeout=settings.timeout,
			transport=transport,
		)
		self._logger.info("Downloader client initialized base_url=%s", self._base_url)

	async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
		resp = await self._client.get(path, params=params)
		self._logger.debug("GET %s params=%s status=%s", path, params, resp.status_code)
		resp.raise_for_status()
		data = resp.json() if resp.content else {}
		if not isinstance(data, dict):
			raise ValueError(f"Unexpected downloader response type: {type(data).__name__}")
		return data

	async def extract(self, url: str) -> ExtractionResult:
		params = {"url": url}
		try:
			data = await self._get(self._extract_path, params=params)
			payload = DownloaderPayload.model_validate(data)
		except (httpx.HTTPError, ValueError, ValidationError) as e:
			self._logger.error("Загрузчик не смог обработать url=%s: %s", url, str(e))
			status_code = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
			if is_error_reporting_configured():
				get_error_reporter().log_api_error(
					error=e,
					service_name="Downloader",
					endpoint=self._extract_path,
					request_data=params,
					status_code=status_code,
				)
			raise DownloaderUnavailableError() from e

		result = downloader_payload_to_domain(payload)
		self._logger.info(
			"Загрузчик ответил: url=%s ok=%s items=%s",
			url, result.ok, len(result.items) if result.ok else 0
		)
		return result

	async def aclose(self) -> None:
		await self._client.aclose()
