"""Tests for config defaults, migration, validation and loading."""

import json

import pytest

from servers.hackathon_feed.config import (
    CONCURRENCY_ENV_VAR,
    CONFIG_ENV_VAR,
    CURRENT_VERSION,
    ConfigError,
    get_default_config,
    load_config,
    migrate_config,
    validate_config,
)
from servers.hackathon_feed.sources import SOURCE_REGISTRY


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(CONCURRENCY_ENV_VAR, raising=False)


class TestDefaults:

    def test_default_config_is_valid(self):
        assert validate_config(get_default_config()) == []

    def test_every_source_enabled(self):
        sources = get_default_config()["sources"]

        assert list(sources) == list(SOURCE_REGISTRY)
        assert all(s["enabled"] for s in sources.values())

    def test_rendered_source_gets_longer_timeout(self):
        sources = get_default_config()["sources"]

        assert sources["devfolio"]["timeout_seconds"] > sources["devpost"]["timeout_seconds"]

    def test_defaults_are_independent_copies(self):
        first = get_default_config()
        first["sources"]["mlh"]["enabled"] = False

        assert get_default_config()["sources"]["mlh"]["enabled"] is True


class TestMigration:

    def test_current_version_unchanged(self):
        config = get_default_config()

        assert migrate_config(config) == get_default_config()

    def test_v1_source_list(self):
        migrated = migrate_config({"sources": ["Devpost", "mlh"], "timeout": 15})

        assert migrated["version"] == CURRENT_VERSION
        assert migrated["sources"]["devpost"] == {"enabled": True, "timeout_seconds": 15}
        assert migrated["sources"]["mlh"]["enabled"] is True
        assert migrated["sources"]["unstop"]["enabled"] is False
        assert "timeout" not in migrated

    def test_v1_sequential_flag(self):
        assert migrate_config({"sequential": True})["concurrency"] == "sequential"
        assert migrate_config({"sequential": False})["concurrency"] == "concurrent"

    def test_v1_mlh_season(self):
        migrated = migrate_config({"mlh_season": 2024})

        assert migrated["sources"]["mlh"]["season"] == 2024
        assert "mlh_season" not in migrated

    def test_v1_unknown_source_kept_for_validation(self):
        migrated = migrate_config({"sources": ["devpost", "eventbrite"]})

        assert "Unknown source: eventbrite" in validate_config(migrated)

    def test_newer_version_left_for_validation(self):
        config = {"version": CURRENT_VERSION + 1, "concurrency": "sequential"}

        migrated = migrate_config(config)

        assert migrated["version"] == CURRENT_VERSION + 1
        assert migrated["concurrency"] == "sequential"

    @pytest.mark.parametrize("version", ["2", 1.5, None, True])
    def test_malformed_version_left_for_validation(self, version):
        assert migrate_config({"version": version})["version"] == version

    def test_does_not_mutate_input(self):
        original = {"sources": ["devpost"], "sequential": True}

        migrate_config(original)

        assert original == {"sources": ["devpost"], "sequential": True}


class TestValidation:

    def test_newer_version_rejected(self):
        config = get_default_config()
        config["version"] = CURRENT_VERSION + 1

        errors = validate_config(config)

        assert any("newer than supported" in e for e in errors)

    @pytest.mark.parametrize("version", ["2", 1.5, None, True, 0])
    def test_malformed_version_rejected(self, version):
        config = get_default_config()
        config["version"] = version

        assert validate_config(config) == [f"Invalid config version: {version!r}"]

    def test_transport_must_be_mapping(self):
        config = get_default_config()
        config["transport"] = 30

        assert validate_config(config) == ["transport must be a mapping of transport settings"]

    def test_invalid_concurrency(self):
        config = get_default_config()
        config["concurrency"] = "parallel"

        assert any("Invalid concurrency" in e for e in validate_config(config))

    @pytest.mark.parametrize("value", [0, -1, "20", True])
    def test_invalid_max_events(self, value):
        config = get_default_config()
        config["max_events_per_source"] = value

        assert any("max_events_per_source" in e for e in validate_config(config))

    def test_invalid_transport_timeout(self):
        config = get_default_config()
        config["transport"]["render_timeout_seconds"] = 0

        assert validate_config(config) == [
            "Invalid transport.render_timeout_seconds: 0 (must be > 0)"
        ]

    def test_invalid_source_timeout(self):
        config = get_default_config()
        config["sources"]["unstop"]["timeout_seconds"] = -5

        assert validate_config(config) == [
            "Invalid sources.unstop.timeout_seconds: -5 (must be > 0)"
        ]

    def test_all_sources_disabled(self):
        config = get_default_config()
        for source in config["sources"].values():
            source["enabled"] = False

        assert validate_config(config) == ["At least one source must be enabled"]

    def test_sources_must_be_mapping(self):
        config = get_default_config()
        config["sources"] = ["devpost"]

        assert "sources must be a mapping of source name to settings" in validate_config(config)


class TestLoadConfig:

    def test_defaults_without_file(self):
        assert load_config() == get_default_config()

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "version": 2,
            "max_events_per_source": 5,
            "sources": {"devfolio": {"enabled": False}},
        }))

        config = load_config(path)

        assert config["max_events_per_source"] == 5
        assert config["sources"]["devfolio"]["enabled"] is False
        assert config["sources"]["devfolio"]["timeout_seconds"] == 60.0
        assert config["sources"]["devpost"]["enabled"] is True

    def test_v1_file_is_migrated(self, tmp_path):
        path = tmp_path / "legacy.json"
        path.write_text(json.dumps({"sources": ["devpost", "mlh"], "sequential": True}))

        config = load_config(path)

        assert config["version"] == CURRENT_VERSION
        assert config["concurrency"] == "sequential"
        assert config["sources"]["unstop"]["enabled"] is False

    def test_newer_version_file_rejected(self, tmp_path):
        path = tmp_path / "future.json"
        path.write_text(json.dumps({"version": CURRENT_VERSION + 1}))

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert any("newer than supported" in e for e in exc_info.value.errors)

    def test_malformed_version_file_rejected(self, tmp_path):
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"version": "two"}))

        with pytest.raises(ConfigError, match="Invalid config version"):
            load_config(path)

    def test_scalar_transport_file_rejected(self, tmp_path):
        path = tmp_path / "transport.json"
        path.write_text(json.dumps({"version": 2, "transport": 30}))

        with pytest.raises(ConfigError, match="transport must be a mapping"):
            load_config(path)

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"version": 2, "max_events_per_source": 3}))
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert load_config()["max_events_per_source"] == 3

    def test_concurrency_from_environment(self, monkeypatch):
        monkeypatch.setenv(CONCURRENCY_ENV_VAR, " Sequential ")

        assert load_config()["concurrency"] == "sequential"

    def test_invalid_environment_concurrency(self, monkeypatch):
        monkeypatch.setenv(CONCURRENCY_ENV_VAR, "parallel")

        with pytest.raises(ConfigError) as exc_info:
            load_config()

        assert any("Invalid concurrency" in e for e in exc_info.value.errors)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(path)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigError, match="must contain a JSON object"):
            load_config(path)

    def test_config_error_is_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(tmp_path / "missing.json")
