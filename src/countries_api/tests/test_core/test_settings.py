from countries_api.config import Settings


def make(**values) -> Settings:
    return Settings(_env_file=None, **values)


def test_sqlite_is_used_without_postgres_host():
    settings = make(POSTGRES_HOST=None, SQLITE_PATH="/tmp/countries.db")

    assert settings.DATABASE_URL == "sqlite+aiosqlite:////tmp/countries.db"


def test_postgres_url_is_built_from_parts():
    settings = make(
        POSTGRES_HOST="db",
        POSTGRES_PORT=5433,
        POSTGRES_USERNAME="app",
        POSTGRES_PASSWORD="pw",
        POSTGRES_DB="geo",
    )

    assert settings.DATABASE_URL == "postgresql+asyncpg://app:pw@db:5433/geo"


def test_log_settings_are_normalized():
    settings = make(LOG_LEVEL="debug", LOG_FORMAT="TEXT")

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"


def test_environment_variables_are_read(monkeypatch):
    monkeypatch.setenv("RATE_LIMIT", "5/second")
    monkeypatch.setenv("AUTH_ENABLED", "false")

    settings = make()

    assert settings.RATE_LIMIT == "5/second"
    assert settings.AUTH_ENABLED is False
