from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from presentation.container import Container
from presentation.schemas.media import ErrorResponse, MediaItemOut, ResolveResponse

router = APIRouter(prefix="/api")

_RESOLVE_ERRORS = {status: {"model": ErrorResponse} for status in (400, 404, 500)}
_STREAM_ERRORS = {status: {"model": ErrorResponse} for status in (403, 404, 502, 504)}


def get_container(request: Request) -> Container:
	return request.app.state.container


@router.get("/data", responses=_RESOLVE_ERRORS)
async def resolve_media(
	url: Optional[str] = Query(None, description="Instagram post or reel URL"),
	container: Container = Depends(get_container),
):
	resolved = await container.resolve_media_uc.execute(url)
	include_link = container.settings.api.include_stream_link

	response = ResolveResponse(
		developer=container.settings.api.developer,
		username=resolved.username,
		title=resolved.title,
		media=[
			MediaItemOut(
				type=item.type,
				quality=item.quality,
				url=item.url,
				download_api_url=container.stream_link(item.media_id) if include_link else None,
				thumbnail=item.thumbnail,
			)
			for item in resolved.items
		],
	)
	exclude = None if include_link else {"media": {"__all__": {"download_api_url"}}}
	return response.model_dump(mode="json", exclude=exclude)


@router.get("/media/stream/{media_id}", responses=_STREAM_ERRORS)
async def stream_media(
	media_id: str,
	container: Container = Depends(get_container),
):
	stream = await container.stream_media_uc.execute(media_id)
	# background выполняется и при обрыве клиента: исходящий запрос закрывается
	return StreamingResponse(
		stream.body(),
		media_type=stream.media_type,
		headers=stream.headers,
		background=BackgroundTask(stream.aclose),
	)
