"""
Unit Tests for Configuration Management.

Black box tests against the public interface of config.py.
Tests run against the real project files (YAML configs).
Failure scenarios use tmp_path to create controlled filesystems.
"""

import pytest
import yaml

from stickyboard.backend.core.config import (
    AppConfig,
    Settings,
    find_project_root,
    get_app_config,
    get_database_url,
    get_server_base_url,
    get_settings,
    load_yaml_config,
    validate_project_root,
)
from stickyboard.backend.core.config_schema import (
    ApplicationSchema,
    BoardSchema,
    DatabaseSchema,
    LoggingSchema,
)


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


def _write_settings(root, **files):
    (root / ".project_root").touch()
    settings_dir = root / "config" / "settings"
    settings_dir.mkdir(parents=True)
    for name, content in files.items():
        (settings_dir / f"{name}.yaml").write_text(content)


# =============================================================================
# find_project_root
# =============================================================================


class TestFindProjectRoot:
    """Tests for .project_root marker discovery."""

    def test_finds_root_from_project_directory(self):
        root = find_project_root()
        assert (root / ".project_root").exists()
        assert (root / "config" / "settings").is_dir()

    def test_raises_when_no_marker_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(RuntimeError, match="Project root not found"):
            find_project_root()


class TestValidateProjectRoot:
    def test_returns_path_when_marker_exists(self):
        root = validate_project_root()
        assert (root / ".project_root").exists()

    def test_exits_when_marker_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            validate_project_root()


# =============================================================================
# load_yaml_config
# =============================================================================


class TestLoadYamlConfig:
    def test_loads_all_config_files(self):
        for filename in ["application.yaml", "database.yaml", "logging.yaml", "board.yaml"]:
            data = load_yaml_config(filename)
            assert isinstance(data, dict), f"{filename} did not return a dict"
            assert len(data) > 0, f"{filename} returned empty dict"

    def test_raises_for_nonexistent_file(self):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_yaml_config("does_not_exist.yaml")

    def test_returns_empty_dict_for_empty_yaml(self, tmp_path, monkeypatch):
        _write_settings(tmp_path, empty="")
        monkeypatch.chdir(tmp_path)

        assert load_yaml_config("empty.yaml") == {}


# =============================================================================
# Settings and AppConfig
# =============================================================================


class TestSettings:
    def test_db_password_defaults_to_empty(self, monkeypatch):
        monkeypatch.delenv("DB_PASSWORD", raising=False)
        settings = Settings()
        assert settings.db_password == ""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DB_PASSWORD", "s3cret")
        assert Settings().db_password == "s3cret"


class TestAppConfig:
    def test_sections_are_typed(self):
        config = AppConfig()
        assert isinstance(config.application, ApplicationSchema)
        assert isinstance(config.database, DatabaseSchema)
        assert isinstance(config.logging, LoggingSchema)
        assert isinstance(config.board, BoardSchema)

    def test_board_defaults(self):
        board = AppConfig().board
        assert board.save_debounce_ms == 300
        assert board.default_color == "yellow"
        assert board.default_size.width > 0
        assert board.default_position.x >= 0

    def test_application_has_attribute_access(self):
        app = AppConfig().application
        assert app.api_prefix == "/api/v1"
        assert isinstance(app.server.port, int)

    def test_default_database_is_sqlite(self):
        assert AppConfig().database.is_sqlite is True

    def test_rejects_yaml_with_missing_required_fields(self, tmp_path, monkeypatch):
        _write_settings(
            tmp_path,
            application="name: 'Incomplete'",
            database="host: localhost",
            logging="level: INFO",
            board="save_debounce_ms: 300",
        )
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError, match="Invalid configuration"):
            AppConfig()

    def test_rejects_unknown_board_fields(self):
        from pydantic import ValidationError as PydanticValidationError

        data = load_yaml_config("board.yaml")
        data["snap_to_grid"] = True
        with pytest.raises(PydanticValidationError, match="Extra inputs are not permitted"):
            BoardSchema(**data)

    def test_rejects_negative_debounce(self):
        from pydantic import ValidationError as PydanticValidationError

        data = load_yaml_config("board.yaml")
        data["save_debounce_ms"] = -1
        with pytest.raises(PydanticValidationError):
            BoardSchema(**data)


class TestCachedAccessors:
    def test_get_app_config_is_cached(self):
        assert get_app_config() is get_app_config()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


# =============================================================================
# URL builders
# =============================================================================


class TestGetDatabaseUrl:
    def test_sqlite_url_points_inside_project(self):
        url = get_database_url()
        db = get_app_config().database
        assert url.startswith(f"{db.driver}:///")
        assert url.endswith(db.name)
        assert str(find_project_root()) in url

    def test_server_url_uses_password_from_secrets(self, tmp_path, monkeypatch):
        database = {**load_yaml_config("database.yaml"), "driver": "postgresql+asyncpg", "name": "boards"}
        _write_settings(
            tmp_path,
            application=yaml.safe_dump(load_yaml_config("application.yaml")),
            logging=yaml.safe_dump(load_yaml_config("logging.yaml")),
            board=yaml.safe_dump(load_yaml_config("board.yaml")),
            database=yaml.safe_dump(database),
        )
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DB_PASSWORD", "pw")

        url = get_database_url()

        db = get_app_config().database
        assert url == f"postgresql+asyncpg://{db.user}:pw@{db.host}:{db.port}/boards"


class TestGetServerBaseUrl:
    def test_url_contains_host_and_port(self):
        base_url, _ = get_server_base_url()
        server = get_app_config().application.server
        assert base_url == f"http://{server.host}:{server.port}"

    def test_timeout_is_positive_float(self):
        _, timeout = get_server_base_url()
        assert isinstance(timeout, float)
        assert timeout > 0

