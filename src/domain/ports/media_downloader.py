from __future__ import annotations
from typing import Protocol
from domain.models import ExtractionResult


class MediaDownloader(Protocol):
	"""Внешний загрузчик: ссылка на пост -> список медиа"""

	async def extract(self, url: str) -> ExtractionResult: ...
