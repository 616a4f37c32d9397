from __future__ import annotations
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


# Ответ внешнего загрузчика: {status, msg, username, title, data: [...]}
class DownloaderMediaItem(BaseModel):
	model_config = ConfigDict(extra="ignore")

	url: Optional[str] = None
	quality: Optional[str] = None
	type: Optional[str] = None
	thumbnail: Optional[str] = None


class DownloaderPayload(BaseModel):
	model_config = ConfigDict(extra="ignore")

	status: bool = False
	msg: Optional[str] = None
	username: Optional[str] = None
	title: Optional[Any] = None  # загрузчик не гарантирует строку
	data: Optional[list[DownloaderMediaItem]] = None
