import re
from typing import Any
from urllib.parse import quote


DEFAULT_TITLE = "Instagram_Media"
FALLBACK_TITLE = "media"
TITLE_MAX_LENGTH = 50

_DISALLOWED_RE = re.compile(r"[^\w\s.\-]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_title(
	title: Any,
	default: str = DEFAULT_TITLE,
	fallback: str = FALLBACK_TITLE,
	max_length: int = TITLE_MAX_LENGTH,
) -> str:
	"""Безопасная для имени файла часть из произвольного заголовка поста"""
	text = title.strip() if isinstance(title, str) else ""
	if not text:
		text = default
	text = text[:max_length]
	text = _DISALLOWED_RE.sub("", text)
	text = _WHITESPACE_RE.sub("_", text)
	return text or fallback


def build_filename(prefix: str, title: str, extension: str) -> str:
	return f"{prefix}{title}.{extension}"


def encode_header_filename(filename: str) -> str:
	# как encodeURIComponent, плюс ' ( ) * тоже кодируются
	return quote(filename, safe="!")


def content_disposition(filename: str) -> str:
	return f'attachment; filename="{encode_header_filename(filename)}"'
