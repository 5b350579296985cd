from skillswap.core.config import Settings


def test_async_database_url_normalises_postgres_scheme() -> None:
    settings = Settings(DATABASE_URL="postgres://user:pw@db:5432/skillswap")

    assert settings.async_database_url == "postgresql+asyncpg://user:pw@db:5432/skillswap"


def test_secret_key_environment_variable(monkeypatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("AUTH_COOKIE_NAME", "sid")

    settings = Settings()

    assert settings.jwt_secret == "from-env"
    assert settings.auth_cookie_name == "sid"
