from typing import Optional


class RelayError(Exception):
	"""Базовая ошибка сервиса: статус и безопасное для клиента сообщение"""

	status_code: int = 500
	default_message: str = "Internal Server Error"

	def __init__(self, message: Optional[str] = None) -> None:
		self.message = message or self.default_message
		super().__init__(self.message)


class InvalidSourceUrlError(RelayError):
	status_code = 400
	default_message = "Invalid URL format."


class MediaNotFoundError(RelayError):
	status_code = 404
	default_message = "Failed to process the URL or no media found."


class LinkNotFoundError(RelayError):
	status_code = 404
	default_message = "Media not found or link expired."


class DownloaderUnavailableError(RelayError):
	status_code = 500
	default_message = "Internal Server Error"


class UpstreamUnreachableError(RelayError):
	status_code = 504
	default_message = "No response from media source (timeout or network issue)."


class UpstreamStatusError(RelayError):
	"""Источник ответил статусом >= 400 (или ушел в бесконечные редиректы)"""

	def __init__(self, upstream_status: int, message: Optional[str] = None) -> None:
		self.upstream_status = upstream_status
		self.status_code = client_status_for_upstream(upstream_status)
		super().__init__(message or f"Failed to fetch media from source: Status {upstream_status}")


class UpstreamStreamInterruptedError(RelayError):
	"""Обрыв после отправки заголовков: второй ответ уже невозможен"""

	status_code = 502
	default_message = "Error streaming media from the source."


def client_status_for_upstream(upstream_status: int) -> int:
	if upstream_status == 403:
		return 403
	if upstream_status == 404:
		return 404
	if upstream_status >= 500:
		return 502
	return upstream_status
