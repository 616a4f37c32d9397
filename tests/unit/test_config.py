from core.config import ServerSettings, Settings


def _settings(**server) -> Settings:
    values = {
        "port": 3000,
        "node_env": "development",
        "public_url": None,
        "koyeb_app_url": None,
        "render_external_url": None,
    }
    values.update(server)
    return Settings(server=ServerSettings(**values))


def test_public_url_used_in_production():
    settings = _settings(
        node_env="production",
        public_url="https://relay.example/",
        koyeb_app_url="relay.koyeb.app",
    )

    assert settings.public_base_url() == "https://relay.example"


def test_public_url_ignored_outside_production():
    settings = _settings(public_url="https://relay.example", koyeb_app_url="relay.koyeb.app")

    assert settings.public_base_url() == "https://relay.koyeb.app"


def test_render_external_url():
    settings = _settings(render_external_url="https://relay.onrender.com")

    assert settings.public_base_url() == "https://relay.onrender.com"


def test_localhost_default_uses_port():
    assert _settings(port=8081).public_base_url() == "http://localhost:8081"


def test_server_settings_read_platform_environment(monkeypatch):
    for name in ("NODE_ENV", "PUBLIC_URL", "RENDER_EXTERNAL_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("KOYEB_APP_URL", "relay.koyeb.app")

    server = ServerSettings()

    assert server.port == 8080
    assert Settings(server=server).public_base_url() == "https://relay.koyeb.app"
