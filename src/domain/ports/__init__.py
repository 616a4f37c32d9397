from .link_registry import LinkRegistry
from .media_downloader import MediaDownloader

__all__ = [
	"LinkRegistry",
	"MediaDownloader",
]
