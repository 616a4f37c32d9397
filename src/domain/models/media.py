from __future__ import annotations
from enum import Enum
from typing import Literal, Optional, Union
from datetime import datetime
from pydantic import BaseModel


class MediaKind(str, Enum):
	video = "video"
	image = "image"
	unknown = "unknown"


class RegistryEntry(BaseModel):
	"""Запись реестра: непрозрачный id -> исходный URL медиа"""
	id: str
	origin_url: str
	filename: str
	content_type: str
	created_at: datetime
	expires_at: datetime


class RawMediaItem(BaseModel):
	url: str
	quality: Optional[str] = None
	type: Optional[str] = None
	thumbnail: Optional[str] = None

	@property
	def hint(self) -> str:
		# quality/type от загрузчика: "HD", "Download Video", "Photo" и т.п.
		return self.quality or self.type or ""


class ExtractionSuccess(BaseModel):
	ok: Literal[True] = True
	username: Optional[str] = None
	title: Optional[str] = None
	items: list[RawMediaItem] = []
	# сколько элементов вернул загрузчик, включая элементы без url
	reported_items: int = 0


class ExtractionFailure(BaseModel):
	ok: Literal[False] = False
	message: Optional[str] = None


ExtractionResult = Union[ExtractionSuccess, ExtractionFailure]


class ResolvedMediaItem(BaseModel):
	media_id: str
	type: MediaKind
	quality: str
	url: str
	thumbnail: Optional[str] = None
	filename: str
	content_type: str


class ResolvedMedia(BaseModel):
	username: str
	title: str
	items: list[ResolvedMediaItem]
