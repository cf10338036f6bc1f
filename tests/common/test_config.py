"""Tests for configuration schema and loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from meeturi.common.config import ConfigValidationError, load_config
from meeturi.common.config_schema import DEFAULT_CONFIG, HierPartRuleConfig, MeetUriConfig
from meeturi.uri.fixers import fix_uri_string_hier_part, fix_uri_string_scheme

REPO_CONFIG = Path(__file__).resolve().parents[2] / "config" / "default.yml"


def _write(tmp_path, text):
    path = tmp_path / "meeturi.yml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    """loading from files and the environment"""

    def test_defaults_without_file(self, clean_env):
        assert load_config() == DEFAULT_CONFIG

    def test_repo_default_file_matches_defaults(self, clean_env):
        assert load_config(REPO_CONFIG) == DEFAULT_CONFIG

    def test_path_from_environment(self, clean_env, tmp_path):
        path = _write(tmp_path, "fallback_scheme: http\n")
        clean_env.setenv("MEETURI_CONFIG", str(path))
        assert load_config().fallback_scheme == "http:"

    def test_empty_file_means_defaults(self, clean_env, tmp_path):
        assert load_config(_write(tmp_path, "")) == DEFAULT_CONFIG

    def test_missing_file(self, clean_env, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yml")

    def test_top_level_must_be_mapping(self, clean_env, tmp_path):
        with pytest.raises(ConfigValidationError):
            load_config(_write(tmp_path, "- a\n- b\n"))

    def test_env_log_level_override(self, clean_env):
        clean_env.setenv("MEETURI_LOG_LEVEL", "debug")
        assert load_config().logging.log_level == "DEBUG"

    def test_env_fallback_scheme_override(self, clean_env):
        clean_env.setenv("MEETURI_FALLBACK_SCHEME", "HTTP")
        config = load_config()
        assert config.fallback_scheme == "http:"
        assert fix_uri_string_scheme("app:ftp://meet.example.com/r", config) == "http://meet.example.com/r"

    def test_unknown_key_is_reported(self, clean_env, tmp_path):
        with pytest.raises(ConfigValidationError, match="Unknown key 'fallback_schema'"):
            load_config(_write(tmp_path, "fallback_schema: https\n"))

    def test_fallback_must_be_well_known(self, clean_env, tmp_path):
        with pytest.raises(ConfigValidationError, match="fallback_scheme"):
            load_config(_write(tmp_path, "fallback_scheme: ftp\n"))

    def test_invalid_scheme(self, clean_env, tmp_path):
        with pytest.raises(ConfigValidationError):
            load_config(_write(tmp_path, "domain_placeholder_scheme: '1app'\n"))

    def test_custom_rule_from_file(self, clean_env, tmp_path):
        path = _write(
            tmp_path,
            "hier_part_rules:\n"
            "  - host: old.example.com\n"
            "    path_prefixes: [/join/]\n"
            "    canonical_host: meet.example.com\n",
        )
        config = load_config(path)
        assert config.hier_part_rules[0].path_prefixes == ("join",)
        assert (
            fix_uri_string_hier_part("https://old.example.com/join/room1", config)
            == "https://meet.example.com/room1"
        )
        # the defaults are replaced, not extended
        assert fix_uri_string_hier_part("https://enso.me/call/x", config) == "https://enso.me/call/x"


class TestSchema:
    """schema validation without files"""

    def test_schemes_are_normalized(self):
        config = MeetUriConfig(well_known_schemes=["HTTP", "https:"], fallback_scheme="HTTPS")
        assert config.well_known_schemes == ("http:", "https:")
        assert config.fallback_scheme == "https:"

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.fallback_scheme = "http:"

    def test_override_group_names_must_be_identifiers(self):
        with pytest.raises(ValidationError):
            MeetUriConfig(override_groups=["config", "not valid"])

    def test_rule_needs_prefixes(self):
        with pytest.raises(ValidationError):
            HierPartRuleConfig(host="a.example.com", path_prefixes=[], canonical_host="b.example.com")

    def test_rule_pattern(self):
        rule = HierPartRuleConfig(host="a.example.com", path_prefixes=["x", "y/z"], canonical_host="b")
        pattern = rule.pattern()
        assert pattern.match("HTTPS://A.Example.com/y/z/room")
        assert not pattern.match("https://aXexample.com/x/room")
        assert not pattern.match("https://a.example.com/w/room")

    def test_round_trip_dict(self):
        assert MeetUriConfig.from_dict(DEFAULT_CONFIG.to_dict()) == DEFAULT_CONFIG
