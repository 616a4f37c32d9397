from .media import (
	MediaKind,
	RegistryEntry,
	RawMediaItem,
	ExtractionSuccess,
	ExtractionFailure,
	ExtractionResult,
	ResolvedMediaItem,
	ResolvedMedia,
)

__all__ = [
	"MediaKind",
	"RegistryEntry",
	"RawMediaItem",
	"ExtractionSuccess",
	"ExtractionFailure",
	"ExtractionResult",
	"ResolvedMediaItem",
	"ResolvedMedia",
]
