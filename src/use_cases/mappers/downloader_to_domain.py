from domain.models import ExtractionFailure, ExtractionResult, ExtractionSuccess, RawMediaItem
from presentation.schemas.downloader import DownloaderPayload


def downloader_payload_to_domain(payload: DownloaderPayload) -> ExtractionResult:
	if not payload.status:
		return ExtractionFailure(message=payload.msg or None)

	items = [
		RawMediaItem(
			url=item.url,
			quality=item.quality,
			type=item.type,
			thumbnail=item.thumbnail,
		)
		for item in payload.data or []
		if item.url  # элементы без url молча пропускаем
	]
	return ExtractionSuccess(
		username=payload.username or None,
		title=payload.title if isinstance(payload.title, str) else None,
		items=items,
		reported_items=len(payload.data or []),
	)
