import pytest

import config


@pytest.fixture()
def clean_env(monkeypatch):
    for name in (
        "API_BASE_URL",
        "AUTH_ROUTES",
        "WAREHOUSE_ENDPOINT",
        "STORAGE_PATH",
        "LOG_DIR",
        "LOG_LEVEL",
        "DETAILED_LOGGING",
        "LOW_STOCK_THRESHOLD",
        "RECENT_PROJECTS_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda *a, **k: False)
    config.get_settings.cache_clear()
    yield monkeypatch
    config.get_settings.cache_clear()


def test_defaults(clean_env):
    settings = config.get_settings()

    assert settings.api_base_url == config.DEFAULT_API_BASE_URL
    assert settings.auth_routes == "auth"
    assert settings.warehouse_endpoint == "warehouse-racks"
    assert settings.low_stock_threshold == 10
    assert settings.detailed_logging is False


def test_env_overrides(clean_env):
    clean_env.setenv("API_BASE_URL", "https://api.example.com/api/")
    clean_env.setenv("AUTH_ROUTES", "Managers")
    clean_env.setenv("WAREHOUSE_ENDPOINT", "/warehouses/")
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("DETAILED_LOGGING", "yes")
    clean_env.setenv("LOW_STOCK_THRESHOLD", "3")

    settings = config.get_settings()

    assert settings.api_base_url == "https://api.example.com/api"
    assert settings.auth_routes == "managers"
    assert settings.warehouse_endpoint == "warehouses"
    assert settings.log_level == "DEBUG"
    assert settings.detailed_logging is True
    assert settings.low_stock_threshold == 3


def test_invalid_values_fall_back(clean_env):
    clean_env.setenv("AUTH_ROUTES", "oauth")
    clean_env.setenv("RECENT_PROJECTS_LIMIT", "много")

    settings = config.get_settings()

    assert settings.auth_routes == "auth"
    assert settings.recent_projects_limit == 5


def test_settings_are_cached(clean_env):
    assert config.get_settings() is config.get_settings()
