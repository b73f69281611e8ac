"""
Tests for forgerelease.config.loader module.

Tests configuration loading including:
- Built-in defaults
- YAML overlay with deep merge
- Environment variable expansion
- Validation of value types
- Builders for messages, options and transport
"""

from __future__ import annotations

from pathlib import Path

import pytest

from forgerelease.config import (
    DEFAULT_CONFIG,
    load_config,
    messages_from_config,
    options_from_config,
    transport_from_config,
)
from forgerelease.config.loader import _deep_merge_dicts
from forgerelease.exceptions import ConfigError
from forgerelease.logging import get_logger, set_global_logger


class TestDeepMerge:
    """Tests for deep merge functionality."""

    def test_merge_simple_dicts(self):
        """Test merging simple flat dictionaries."""
        base = {"a": 1, "b": 2}
        overlay = {"b": 3, "c": 4}
        result = _deep_merge_dicts(base, overlay)

        assert result == {"a": 1, "b": 3, "c": 4}

    def test_merge_nested_dicts(self):
        """Test recursive merging of nested dictionaries."""
        base = {"http": {"timeout": 15, "headers": {}}}
        overlay = {"http": {"timeout": 30}}
        result = _deep_merge_dicts(base, overlay)

        assert result == {"http": {"timeout": 30, "headers": {}}}

    def test_merge_replaces_lists(self):
        """Test that lists are replaced, not merged."""
        result = _deep_merge_dicts({"items": [1, 2, 3]}, {"items": [4, 5]})

        assert result["items"] == [4, 5]

    def test_merge_does_not_mutate_inputs(self):
        """Test that merge creates new dict without mutating inputs."""
        base = {"a": {"b": 1}}
        overlay = {"a": {"c": 2}}
        _deep_merge_dicts(base, overlay)

        assert base == {"a": {"b": 1}}
        assert overlay == {"a": {"c": 2}}


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults_without_file(self):
        """Test that no path returns a copy of the defaults."""
        cfg = load_config()

        assert cfg == DEFAULT_CONFIG
        cfg["http"]["headers"]["X"] = "y"
        assert DEFAULT_CONFIG["http"]["headers"] == {}

    def test_file_overrides_defaults(self, create_yaml_file):
        """Test that file values are merged over defaults."""
        path = create_yaml_file(
            "forgerelease.yaml",
            {
                "http": {"timeout": 30},
                "source": {"base_url": "https://codeberg.org", "user": "forgejo"},
                "version": {"options": {"die_if_older": True}},
            },
        )

        cfg = load_config(path)

        assert cfg["http"]["timeout"] == 30
        assert cfg["http"]["headers"] == {}
        assert cfg["source"]["base_url"] == "https://codeberg.org"
        assert cfg["source"]["repo"] == ""
        assert cfg["version"]["options"]["die_if_older"] is True
        assert cfg["version"]["options"]["die_if_newer"] is False

    def test_env_expansion(self, create_yaml_file, monkeypatch):
        """Test that ${NAME} references are expanded."""
        monkeypatch.setenv("GITEA_TOKEN", "s3cret")
        path = create_yaml_file(
            "cfg.yaml",
            {"http": {"headers": {"Authorization": "token ${GITEA_TOKEN}"}}},
        )

        cfg = load_config(path)

        assert cfg["http"]["headers"]["Authorization"] == "token s3cret"

    def test_missing_env_var_warns(self, create_yaml_file, monkeypatch, capsys):
        """Test that an unset variable expands to an empty string."""
        monkeypatch.delenv("FORGERELEASE_UNSET_VAR", raising=False)
        set_global_logger(get_logger())
        path = create_yaml_file(
            "cfg.yaml", {"source": {"user": "${FORGERELEASE_UNSET_VAR}"}}
        )

        cfg = load_config(path)

        assert cfg["source"]["user"] == ""
        assert "FORGERELEASE_UNSET_VAR" in capsys.readouterr().out

    def test_missing_file(self, tmp_test_dir: Path):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="file not found"):
            load_config(tmp_test_dir / "nope.yaml")

    def test_invalid_yaml(self, tmp_test_dir: Path):
        """Test that a YAML syntax error raises ConfigError."""
        path = tmp_test_dir / "bad.yaml"
        path.write_text("http: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Error parsing YAML"):
            load_config(path)

    def test_empty_file(self, tmp_test_dir: Path):
        """Test that an empty file raises ConfigError."""
        path = tmp_test_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ConfigError, match="empty"):
            load_config(path)

    def test_top_level_must_be_mapping(self, create_yaml_file):
        """Test that a list at the top level is rejected."""
        path = create_yaml_file("list.yaml", ["a", "b"])

        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"http": {"timeout": "fast"}}, "http.timeout"),
            ({"http": {"timeout": True}}, "http.timeout"),
            ({"http": {"headers": ["a"]}}, "http.headers"),
            ({"http": {"headers": {"X-Count": 3}}}, "http.headers.X-Count"),
            ({"source": {"user": 42}}, "source.user"),
            ({"version": {"messages": {"older": ["x"]}}}, "version.messages.older"),
            ({"version": {"options": {"die_if_older": "yes"}}}, "die_if_older"),
            ({"version": "strict"}, "version"),
        ],
    )
    def test_invalid_values(self, create_yaml_file, data, message):
        """Test that values of the wrong type are rejected."""
        path = create_yaml_file("cfg.yaml", data)

        with pytest.raises(ConfigError, match=message):
            load_config(path)

    def test_unknown_keys_allowed(self, create_yaml_file):
        """Test that extra keys do not fail validation."""
        path = create_yaml_file("cfg.yaml", {"extra": {"anything": 1}})

        assert load_config(path)["extra"] == {"anything": 1}


class TestBuilders:
    """Tests for the config-to-object helpers."""

    def test_messages_and_options(self):
        """Test building VersionMessages and VersionOptions."""
        cfg = load_config()
        cfg["version"]["messages"]["upgrade_url"] = "https://example.com/dl"
        cfg["version"]["options"]["show_message_on_current"] = True

        messages = messages_from_config(cfg)
        options = options_from_config(cfg)

        assert messages.upgrade_url == "https://example.com/dl"
        assert messages.older == ""
        assert options.show_message_on_current is True
        assert options.die_if_older is False

    def test_null_message_is_empty(self):
        """Test that a null message falls back to an empty string."""
        cfg = load_config()
        cfg["version"]["messages"]["equal"] = None

        assert messages_from_config(cfg).equal == ""

    def test_transport(self):
        """Test building an HttpTransport from the http section."""
        cfg = load_config()
        cfg["http"]["timeout"] = 60
        cfg["http"]["headers"] = {"Authorization": "Bearer x"}

        transport = transport_from_config(cfg)

        assert transport.timeout == 60
        assert transport.headers == {"Authorization": "Bearer x"}

    def test_transport_defaults(self):
        """Test that default config gives the default transport."""
        assert transport_from_config(load_config()).timeout == 15
