# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for Config loading, env overrides, placeholders and binding."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from edgetoken.config.properties.token import TokenProperties
from edgetoken.core.config import Config, config_properties


class TestConfigGet:
    def test_get_nested_value(self):
        config = Config({"edgetoken": {"token": {"token_byte_length": 16}}})
        assert config.get("edgetoken.token.token_byte_length") == 16

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_get_through_non_dict(self):
        assert Config({"a": "scalar"}).get("a.b", 1) == 1

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("EDGETOKEN_TOKEN_ALGORITHM", "SHA-512")
        config = Config({"edgetoken": {"token": {"algorithm": "SHA-256"}}})
        assert config.get("edgetoken.token.algorithm") == "SHA-512"

    def test_env_key(self):
        assert Config.env_key("edgetoken.token.token-byte-length") == "EDGETOKEN_TOKEN_TOKEN_BYTE_LENGTH"

    def test_get_section(self):
        config = Config({"edgetoken": {"logging": {"level": {"root": "INFO"}}}})
        assert config.get_section("edgetoken.logging.level") == {"root": "INFO"}
        assert config.get_section("edgetoken.missing") == {}


class TestPlaceholderResolution:
    def test_resolve_env_var(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CSRF_SECRET", "s3cret")
        config = Config({"edgetoken": {"token": {"secret": "${CSRF_SECRET}"}}})
        assert config.get("edgetoken.token.secret") == "s3cret"

    def test_resolve_config_reference(self):
        config = Config({"base": "app", "name": "${base}-tokens"})
        assert config.get("name") == "app-tokens"

    def test_resolve_with_default(self):
        config = Config({"key": "${EDGETOKEN_TEST_MISSING_VAR:fallback}"})
        assert config.get("key") == "fallback"

    def test_empty_default(self):
        config = Config({"key": "${EDGETOKEN_TEST_MISSING_VAR:}"})
        assert config.get("key") == ""

    def test_unresolvable_placeholder(self):
        config = Config({"key": "${EDGETOKEN_TEST_MISSING_VAR}"})
        with pytest.raises(ValueError):
            config.get("key")

    def test_circular_reference(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ValueError):
            config.get("a")


class TestConfigFiles:
    def test_defaults_are_loaded(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "missing.yaml")
        assert config.get("edgetoken.token.algorithm") == "SHA-256"
        assert config.get("edgetoken.token.token_byte_length") == 32
        assert config.loaded_sources == ["edgetoken-defaults.yaml (defaults)"]

    def test_defaults_can_be_skipped(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "missing.yaml", load_defaults=False)
        assert config.loaded_sources == []
        assert config.get("edgetoken.token.algorithm") is None

    def test_yaml_file(self, tmp_path: Path):
        path = tmp_path / "edgetoken.yaml"
        path.write_text("edgetoken:\n  token:\n    secret: abc\n    separator: '~'\n")
        config = Config.from_file(path)
        assert config.get("edgetoken.token.secret") == "abc"
        assert config.get("edgetoken.token.separator") == "~"
        assert config.get("edgetoken.token.algorithm") == "SHA-256"

    def test_toml_file(self, tmp_path: Path):
        path = tmp_path / "edgetoken.toml"
        path.write_text('[edgetoken.token]\nsecret = "abc"\ntoken_byte_length = 8\n')
        config = Config.from_file(path)
        assert config.get("edgetoken.token.token_byte_length") == 8

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "edgetoken.yaml").write_text("edgetoken:\n  token:\n    secret: base\n    algorithm: SHA-256\n")
        (tmp_path / "edgetoken-prod.yaml").write_text("edgetoken:\n  token:\n    secret: prod\n")
        config = Config.from_file(tmp_path / "edgetoken.yaml", active_profiles=["prod"])
        assert config.get("edgetoken.token.secret") == "prod"
        assert config.get("edgetoken.token.algorithm") == "SHA-256"
        assert len(config.loaded_sources) == 3


class TestBinding:
    def test_bind_token_properties(self):
        config = Config({"edgetoken": {"token": {"secret": "abc", "token_byte_length": "24"}}})
        props = config.bind(TokenProperties)
        assert props.secret == "abc"
        assert props.token_byte_length == 24
        assert props.algorithm == "SHA-256"
        assert props.separator == "."

    def test_bind_coerces_env_values(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("EDGETOKEN_TOKEN_TOKEN_BYTE_LENGTH", "12")
        assert Config({}).bind(TokenProperties).token_byte_length == 12

    def test_bind_bool_and_float(self):
        @config_properties(prefix="feature")
        @dataclass
        class FeatureProperties:
            enabled: bool = False
            ratio: float = 0.0

        props = Config({"feature": {"enabled": "yes", "ratio": "0.5"}}).bind(FeatureProperties)
        assert props.enabled is True
        assert props.ratio == 0.5

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            value: int = 0

        with pytest.raises(ValueError):
            Config({}).bind(Plain)

    def test_token_properties_repr_hides_secret(self):
        assert "abc" not in repr(TokenProperties(secret="abc"))
