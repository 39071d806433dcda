from litclock.settings import Settings


def test_plain_sqlite_url_gets_async_driver():
    settings = Settings(DATABASE_URL="sqlite:///quotes.db", _env_file=None)
    assert settings.async_database_url == "sqlite+aiosqlite:///quotes.db"


def test_async_url_is_left_alone():
    settings = Settings(LIT_CLOCK_DB="sqlite+aiosqlite:////data/lit.db", _env_file=None)
    assert settings.async_database_url == "sqlite+aiosqlite:////data/lit.db"


def test_cors_origins_accepts_json_and_csv():
    assert Settings(CORS_ORIGINS='["https://a.com", "http://b"]', _env_file=None).cors_origins == [
        "https://a.com",
        "http://b",
    ]
    assert Settings(CORS_ORIGINS="https://a.com, http://b", _env_file=None).cors_origins == [
        "https://a.com",
        "http://b",
    ]
    assert Settings(CORS_ORIGINS="", _env_file=None).cors_origins == []


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.timezone == ""
    assert settings.template_path == ""


def test_read_only_url_for_file_databases():
    settings = Settings(DATABASE_URL="sqlite:////data/lit_clock.db", _env_file=None)
    assert settings.read_only_database_url == "sqlite+aiosqlite:///file:/data/lit_clock.db?mode=ro&uri=true"

    relative = Settings(DATABASE_URL="sqlite+aiosqlite:///lit_clock.db", _env_file=None)
    assert relative.read_only_database_url == "sqlite+aiosqlite:///file:lit_clock.db?mode=ro&uri=true"


def test_read_only_url_leaves_memory_and_explicit_options_alone():
    memory = Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:", _env_file=None)
    assert memory.read_only_database_url == "sqlite+aiosqlite:///:memory:"

    explicit = "sqlite+aiosqlite:///file:lit.db?mode=ro&uri=true"
    assert Settings(DATABASE_URL=explicit, _env_file=None).read_only_database_url == explicit
