import logging
from core.config import settings
from core.log_config import configure_logging
from presentation.app import create_app
import uvicorn

configure_logging(settings.logging)

app = create_app(settings)

if __name__ == "__main__":
	port = settings.server.port
	base_url = settings.public_base_url()
	logger = logging.getLogger("startup")
	logger.info("Server is running at http://localhost:%s", port)
	if base_url != f"http://localhost:{port}":
		logger.info("Publicly accessible at: %s", base_url)

	# Исключаем директорию logs из отслеживания изменений для предотвращения бесконечных перезапусков
	uvicorn.run(
		"main:app",
		host=settings.server.host,
		port=port,
		reload_excludes=["logs/*", "logs/**/*", "*.log"],
		log_level=settings.logging.level.lower(),
	)
