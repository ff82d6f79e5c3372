"""Settings loading."""
from catalog.config import Settings


def test_database_url_built_from_parts():
    settings = Settings(
        _env_file=None,
        DATABASE_URL=None,
        DATABASE_USER="catalog",
        DATABASE_PASSWORD="secret",
        DATABASE_HOST="db",
        DATABASE_PORT=3307,
        DATABASE_NAME="attractions",
    )
    assert settings.database_url == "mysql+pymysql://catalog:secret@db:3307/attractions"


def test_explicit_database_url_wins():
    settings = Settings(_env_file=None, DATABASE_URL="sqlite:///:memory:", DATABASE_HOST="db")
    assert settings.database_url == "sqlite:///:memory:"


def test_unknown_keys_are_ignored():
    settings = Settings(_env_file=None, NOT_A_SETTING="value")
    assert not hasattr(settings, "NOT_A_SETTING")
    assert Settings.model_config["case_sensitive"] is True
