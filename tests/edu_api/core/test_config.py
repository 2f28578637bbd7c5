import pytest

from edu_api.core import config
from edu_api.core.errors import ConfigError


def test_build_database_url_prefers_explicit_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('DATABASE_URL', 'sqlite:///./explicit.db')

    assert config.build_database_url() == 'sqlite:///./explicit.db'


def test_build_database_url_assembles_postgres_parts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('DATABASE_URL', raising=False)
    monkeypatch.setattr(config, 'DB_USER', 'api')
    monkeypatch.setattr(config, 'DB_PASSWORD', 'p@ss')
    monkeypatch.setattr(config, 'DB_HOST', 'db.internal')
    monkeypatch.setattr(config, 'DB_PORT', 6543)
    monkeypatch.setattr(config, 'DB_NAME', 'courses')

    url = config.build_database_url()

    assert url.drivername == 'postgresql+psycopg2'
    assert url.username == 'api'
    assert url.password == 'p@ss'
    assert url.host == 'db.internal'
    assert url.port == 6543
    assert url.database == 'courses'


def test_validate_runtime_config_requires_secret_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'production')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', '')

    with pytest.raises(ConfigError):
        config.validate_runtime_config()


def test_validate_runtime_config_allows_missing_secret_in_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'development')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', '')

    config.validate_runtime_config()
