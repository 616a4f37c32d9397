from __future__ import annotations
from typing import Optional
from pydantic import BaseModel

from domain.models import MediaKind


class MediaItemOut(BaseModel):
	type: MediaKind
	quality: str
	url: str
	download_api_url: Optional[str] = None
	thumbnail: Optional[str] = None


class ResolveResponse(BaseModel):
	success: bool = True
	developer: str
	username: str
	title: str
	media: list[MediaItemOut]


class ErrorResponse(BaseModel):
	success: bool = False
	error: str
