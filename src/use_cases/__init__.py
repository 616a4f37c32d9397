from .resolve_media import ResolveMediaUseCase, validate_source_url
from .stream_media import StreamMediaUseCase, MediaStream, MediaFetcher

__all__ = [
	"ResolveMediaUseCase",
	"StreamMediaUseCase",
	"MediaStream",
	"MediaFetcher",
	"validate_source_url",
]
