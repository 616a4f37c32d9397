from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from presentation.container import Container
from presentation.routers.media import get_container

router = APIRouter()


@router.get("/")
async def service_descriptor(container: Container = Depends(get_container)):
	base_url = container.public_base_url
	return {
		"message": "VibeDownloader.me API - Instagram Downloader",
		"status": "active",
		"author": container.settings.api.developer,
		"usage": {
			"download": f"{base_url}/api/data?url=INSTAGRAM_POST_OR_REEL_URL",
			"example_reel": f"{base_url}/api/data?url=https://www.instagram.com/reel/C2sOu0sy02A/",
		},
	}


@router.get("/health")
async def health():
	return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
