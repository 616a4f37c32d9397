import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import Settings, settings as default_settings
from core.error_logger import is_error_reporting_configured, setup_error_reporting
from core.log_config import ERROR_LOGGER_NAME
from presentation.container import Container
from presentation.errors import register_error_handlers
from presentation.middleware.logging import log_request_middleware
from presentation.routers.health import router as health_router
from presentation.routers.media import router as media_router


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
	"""Собрать FastAPI-приложение с контейнером зависимостей"""
	settings = settings or default_settings
	container = container or Container(settings)

	if not is_error_reporting_configured():
		setup_error_reporting(logging.getLogger(ERROR_LOGGER_NAME))

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		logger = logging.getLogger("startup")
		await container.startup()
		logger.info("Using BASE_URL: %s", container.public_base_url)
		try:
			yield
		finally:
			await container.shutdown()

	app = FastAPI(title="instagram-media-relay", lifespan=lifespan)
	app.state.container = container

	app.add_middleware(
		CORSMiddleware,
		allow_origins=["*"],
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	app.middleware("http")(log_request_middleware)
	register_error_handlers(app)

	app.include_router(health_router)
	app.include_router(media_router)
	return app
