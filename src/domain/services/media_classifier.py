"""Определение типа медиа и расширения по URL и подсказке загрузчика."""

import re
from typing import Tuple
from urllib.parse import urlsplit

from domain.models import MediaKind


VIDEO_EXTENSIONS = ("mp4", "mov", "avi", "mkv")
IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "webp")

DEFAULT_VIDEO_EXTENSION = "mp4"
DEFAULT_IMAGE_EXTENSION = "jpg"
UNKNOWN_EXTENSION = "bin"

_VIDEO_SUFFIX_RE = re.compile(r"\.(mp4|mov|avi|mkv)(?![a-z0-9])", re.IGNORECASE)
_IMAGE_SUFFIX_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp)(?![a-z0-9])", re.IGNORECASE)

_IMAGE_KEYWORDS = ("photo", "image")


def _url_path(url: str) -> str:
	try:
		return urlsplit(url).path.lower()
	except ValueError:
		return url.lower()


def classify(url: str, hint: str = "") -> Tuple[MediaKind, str]:
	"""Вернуть (тип, расширение).

	Суффикс в URL важнее ключевого слова в подсказке, видео проверяется раньше картинки.
	"""
	url = url or ""
	hint = (hint or "").lower()

	match = _VIDEO_SUFFIX_RE.search(url)
	if match:
		return MediaKind.video, match.group(1).lower()

	match = _IMAGE_SUFFIX_RE.search(url)
	if match:
		return MediaKind.image, match.group(1).lower()

	path = _url_path(url)
	if "video" in hint or "video" in path:
		return MediaKind.video, DEFAULT_VIDEO_EXTENSION

	if any(keyword in hint or keyword in path for keyword in _IMAGE_KEYWORDS):
		return MediaKind.image, DEFAULT_IMAGE_EXTENSION

	return MediaKind.unknown, UNKNOWN_EXTENSION


def content_type_for(kind: MediaKind, extension: str) -> str:
	extension = extension.lower()
	if kind == MediaKind.video:
		# даже при "картиночном" расширении отдаем проигрываемый тип
		subtype = extension if extension in VIDEO_EXTENSIONS else DEFAULT_VIDEO_EXTENSION
		return f"video/{subtype}"
	if kind == MediaKind.image:
		# jpg отдаем как зарегистрированный image/jpeg, не image/jpg: браузеры и плееры
		# различают тип по сигнатуре файла, расширение в Content-Disposition остается .jpg
		if extension in IMAGE_EXTENSIONS and extension not in ("jpg", "jpeg"):
			return f"image/{extension}"
		return "image/jpeg"
	return "application/octet-stream"
