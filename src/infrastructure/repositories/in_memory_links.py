import asyncio
import heapq
import logging
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from uuid import uuid4

from domain.models import RegistryEntry


class InMemoryMediaLinkRepository:
	"""Реестр временных ссылок на медиа, живет только в памяти процесса.

	Вместо таймера на каждую запись: куча дедлайнов и периодическая зачистка.
	``lookup`` сам проверяет дедлайн, поэтому просроченная запись не отдается
	даже до ближайшей зачистки.
	"""

	def __init__(
		self,
		ttl_seconds: float = 3600.0,
		sweep_interval_seconds: float = 30.0,
		clock: Callable[[], float] = time.monotonic,
	) -> None:
		self._ttl = ttl_seconds
		self._sweep_interval = sweep_interval_seconds
		self._clock = clock
		self._links: dict[str, tuple[float, RegistryEntry]] = {}  # media_id -> (deadline, entry)
		self._deadlines: list[tuple[float, str]] = []
		self._lock = threading.Lock()
		self._sweeper: Optional[asyncio.Task] = None
		self._logger = logging.getLogger("relay.registry")

	def __len__(self) -> int:
		now = self._clock()
		with self._lock:
			return sum(1 for deadline, _ in self._links.values() if deadline > now)

	def insert(self, origin_url: str, filename: str, content_type: str) -> str:
		media_id = str(uuid4())
		now = self._clock()
		deadline = now + self._ttl
		created_at = datetime.now(timezone.utc)
		entry = RegistryEntry(
			id=media_id,
			origin_url=origin_url,
			filename=filename,
			content_type=content_type,
			created_at=created_at,
			expires_at=created_at + timedelta(seconds=self._ttl),
		)
		with self._lock:
			self._links[media_id] = (deadline, entry)
			heapq.heappush(self._deadlines, (deadline, media_id))
		self._logger.debug("Зарегистрирована ссылка media_id=%s content_type=%s", media_id, content_type)
		return media_id

	def lookup(self, media_id: str) -> Optional[RegistryEntry]:
		with self._lock:
			row = self._links.get(media_id)
		if row is None:
			return None
		deadline, entry = row
		if deadline <= self._clock():
			return None
		return entry

	def remove(self, media_id: str) -> None:
		with self._lock:
			removed = self._links.pop(media_id, None)
		if removed is not None:
			self._logger.debug("Ссылка удалена media_id=%s", media_id)

	def purge_expired(self) -> int:
		"""Удалить все записи с истекшим дедлайном, вернуть их количество"""
		now = self._clock()
		expired: list[str] = []
		with self._lock:
			while self._deadlines and self._deadlines[0][0] <= now:
				deadline, media_id = heapq.heappop(self._deadlines)
				row = self._links.get(media_id)
				# id мог быть удален раньше через remove()
				if row is not None and row[0] == deadline:
					expired.append(media_id)
		for media_id in expired:
			self.remove(media_id)
		if expired:
			self._logger.info("Удалено просроченных ссылок: %d", len(expired))
		return len(expired)

	async def _sweep_loop(self) -> None:
		while True:
			await asyncio.sleep(self._sweep_interval)
			try:
				self.purge_expired()
			except Exception:
				self._logger.exception("Ошибка при зачистке реестра ссылок")

	def start(self) -> None:
		if self._sweeper is None or self._sweeper.done():
			self._sweeper = asyncio.get_running_loop().create_task(self._sweep_loop())
			self._logger.info(
				"Зачистка реестра запущена: ttl=%ss, interval=%ss", self._ttl, self._sweep_interval
			)

	async def stop(self) -> None:
		if self._sweeper is None:
			return
		self._sweeper.cancel()
		try:
			await self._sweeper
		except asyncio.CancelledError:
			pass
		self._sweeper = None
