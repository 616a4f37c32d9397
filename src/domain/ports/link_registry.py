from __future__ import annotations
from typing import Protocol, Optional
from domain.models import RegistryEntry


class LinkRegistry(Protocol):
	"""Реестр временных ссылок: id -> исходный URL медиа"""

	def insert(self, origin_url: str, filename: str, content_type: str) -> str:
		"""Зарегистрировать URL, вернуть новый id (живет ttl секунд)"""
		...

	def lookup(self, media_id: str) -> Optional[RegistryEntry]:
		"""None для неизвестного или просроченного id"""
		...

	def remove(self, media_id: str) -> None:
		"""Идемпотентное удаление"""
		...
