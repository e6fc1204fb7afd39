"""
Configuration Unit Tests
Tests for core/config/runtime.py and forest_cli/config.py
"""
import json

import pytest

from core.config import RuntimeConfig
from core.crypto.hashing import sha256, sha3_256
from core.schemas.errors import ConfigurationException, UnsupportedHashAlgorithmException
from forest_cli.config import get_default_config_template, load_config


class TestRuntimeConfig:
    """Tests for RuntimeConfig loading."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.hash.algorithm == "sha256"
        assert config.logging.level == "INFO"
        assert config.logging.file is None
        assert config.get_hash_function() is sha256

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"hash": {"algorithm": "sha3_256"}})

        assert config.get_hash_function() is sha3_256
        assert config.logging.level == "INFO"

    def test_from_dict_unknown_field_raises(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"hash": {"algo": "sha256"}})

    def test_unknown_algorithm_fails_on_resolve(self):
        config = RuntimeConfig.from_dict({"hash": {"algorithm": "md5"}})

        with pytest.raises(UnsupportedHashAlgorithmException):
            config.get_hash_function()

    def test_from_env(self, clean_env):
        clean_env.setenv("FOREST_HASH_ALGORITHM", "blake2b_256")
        clean_env.setenv("FOREST_LOG_LEVEL", "DEBUG")

        config = RuntimeConfig.from_env()

        assert config.hash.algorithm == "blake2b_256"
        assert config.logging.level == "DEBUG"

    def test_with_env_overrides(self, clean_env):
        base = RuntimeConfig.from_dict({"logging": {"level": "WARNING", "file": "forest.log"}})
        clean_env.setenv("FOREST_LOG_LEVEL", "ERROR")

        config = base.with_env_overrides()

        assert config.logging.level == "ERROR"
        assert config.logging.file == "forest.log"

    def test_with_env_overrides_without_env_returns_self(self, clean_env):
        base = RuntimeConfig()
        assert base.with_env_overrides() is base

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "forest.yaml"
        path.write_text("hash:\n  algorithm: sha3_256\nlogging:\n  level: DEBUG\n")

        config = RuntimeConfig.from_yaml(path)

        assert config.hash.algorithm == "sha3_256"
        assert config.logging.level == "DEBUG"

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_malformed_raises(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("hash: [unclosed\n")

        with pytest.raises(ConfigurationException) as exc_info:
            RuntimeConfig.from_yaml(path)

        assert exc_info.value.details["path"] == str(path)

    def test_from_yaml_non_mapping_raises(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- sha256\n")

        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_yaml(path)

    def test_to_dict(self):
        assert RuntimeConfig().to_dict() == {
            "hash": {"algorithm": "sha256"},
            "logging": {"level": "INFO", "file": None},
            "extra": {},
        }


class TestLoadConfig:
    """Tests for CLI config discovery."""

    def test_template_is_valid_json(self):
        data = json.loads(get_default_config_template())
        assert RuntimeConfig.from_dict(data) == RuntimeConfig()

    def test_explicit_json_file(self, tmp_path, clean_env):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"hash": {"algorithm": "sha512"}}))

        assert load_config(path).hash.algorithm == "sha512"

    def test_default_location_in_cwd(self, tmp_path, clean_env):
        clean_env.chdir(tmp_path)
        (tmp_path / "forest.json").write_text(json.dumps({"logging": {"level": "DEBUG"}}))

        assert load_config().logging.level == "DEBUG"

    def test_env_overrides_file(self, tmp_path, clean_env):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"hash": {"algorithm": "sha512"}}))
        clean_env.setenv("FOREST_HASH_ALGORITHM", "sha3_256")

        assert load_config(path).hash.algorithm == "sha3_256"

    def test_invalid_json_raises(self, tmp_path, clean_env):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationException):
            load_config(path)

    def test_invalid_yaml_raises(self, tmp_path, clean_env):
        path = tmp_path / "broken.yaml"
        path.write_text("hash: [unclosed\n")

        with pytest.raises(ConfigurationException):
            load_config(path)

    def test_missing_explicit_file_raises(self, tmp_path, clean_env):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.json")
