from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv, find_dotenv

# Ensure .env is loaded regardless of current working directory
load_dotenv(find_dotenv(), override=False)


class ServerSettings(BaseSettings):
	# Переменные окружения без префикса: их выставляют хостинги (Koyeb, Render)
	model_config = SettingsConfigDict(env_prefix="")
	host: str = "0.0.0.0"
	port: int = 3000
	node_env: str = "development"
	public_url: Optional[str] = None
	koyeb_app_url: Optional[str] = None  # только домен, без схемы
	render_external_url: Optional[str] = None


class ApiSettings(BaseSettings):
	model_config = SettingsConfigDict(env_prefix="API_")
	include_stream_link: bool = True
	brand_prefix: str = "VibeDownloader.me - "
	developer: str = "Naeem"
	source_domain: str = "instagram.com"
	default_title: str = "Instagram_Media"
	fallback_title: str = "media"
	title_max_length: int = 50


class DownloaderSettings(BaseSettings):
	model_config = SettingsConfigDict(env_prefix="DOWNLOADER_")
	base_url: str = "http://localhost:8080"
	extract_path: str = "/api/extract"
	api_key: Optional[str] = None
	timeout: float = 60.0


class StreamSettings(BaseSettings):
	model_config = SettingsConfigDict(env_prefix="STREAM_")
	timeout: float = 30.0
	max_redirects: int = 5
	chunk_size: int = 64 * 1024
	user_agent: str = (
		"Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
		"(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
	)
	referer: str = "https://www.instagram.com/"
	origin: str = "https://www.instagram.com"


class RegistrySettings(BaseSettings):
	model_config = SettingsConfigDict(env_prefix="REGISTRY_")
	ttl_seconds: float = 3600.0
	sweep_interval_seconds: float = 30.0


class LoggingSettings(BaseSettings):
	model_config = SettingsConfigDict(env_prefix="LOG_")
	level: str = "INFO"
	directory: str = "logs"
	to_files: bool = True


class Settings(BaseSettings):
	server: ServerSettings = Field(default_factory=ServerSettings)
	api: ApiSettings = Field(default_factory=ApiSettings)
	downloader: DownloaderSettings = Field(default_factory=DownloaderSettings)
	stream: StreamSettings = Field(default_factory=StreamSettings)
	registry: RegistrySettings = Field(default_factory=RegistrySettings)
	logging: LoggingSettings = Field(default_factory=LoggingSettings)

	def public_base_url(self) -> str:
		"""Базовый URL для ссылок на стрим (PUBLIC_URL > Koyeb > Render > localhost)"""
		server = self.server
		if server.node_env == "production" and server.public_url:
			base_url = server.public_url
		elif server.koyeb_app_url:
			# Koyeb отдаёт только домен, схему добавляем сами
			base_url = f"https://{server.koyeb_app_url}"
		elif server.render_external_url:
			base_url = server.render_external_url
		else:
			base_url = f"http://localhost:{server.port}"
		return base_url.rstrip("/")


settings = Settings()
