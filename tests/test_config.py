"""Settings — environment-driven configuration."""

from sanitas.config import Settings


def test_plain_postgres_url_uses_asyncpg_driver():
    settings = Settings(postgres_url="postgresql://u:p@db:5432/sanitas")

    assert settings.postgres_url == "postgresql+asyncpg://u:p@db:5432/sanitas"


def test_test_run_never_points_at_a_file_database():
    assert Settings().postgres_url.endswith(":memory:")
