"""Tests for the environment-backed configuration loader."""
import logging

import pytest

from config import ConfigLoader


@pytest.fixture
def loader(tmp_path):
    return ConfigLoader(str(tmp_path / "missing.env"))


class TestConfigLoader:
    def test_default_when_unset(self, loader, monkeypatch):
        monkeypatch.delenv("GAMELAB_TEST_PORT", raising=False)
        assert loader.get("GAMELAB_TEST_PORT", 8081) == 8081

    def test_int_coercion(self, loader, monkeypatch):
        monkeypatch.setenv("GAMELAB_TEST_PORT", "9000")
        assert loader.get("GAMELAB_TEST_PORT", 8081) == 9000

    def test_bad_int_falls_back(self, loader, monkeypatch, caplog):
        monkeypatch.setenv("GAMELAB_TEST_PORT", "ninety")
        with caplog.at_level(logging.WARNING):
            assert loader.get("GAMELAB_TEST_PORT", 8081) == 8081
        assert "GAMELAB_TEST_PORT" in caplog.text

    @pytest.mark.parametrize("raw, expected", [
        ("true", True), ("1", True), ("Yes", True), ("off", False), ("0", False),
    ])
    def test_bool_coercion(self, loader, monkeypatch, raw, expected):
        monkeypatch.setenv("GAMELAB_TEST_FLAG", raw)
        assert loader.get("GAMELAB_TEST_FLAG", True) is expected

    def test_float_coercion(self, loader, monkeypatch):
        monkeypatch.setenv("GAMELAB_TEST_TIMEOUT", "2.5")
        assert loader.get("GAMELAB_TEST_TIMEOUT", 10.0) == 2.5

    def test_env_file_does_not_override_environment(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("GAMELAB_TEST_NAME=from-file\nGAMELAB_TEST_ONLY_FILE=file-value\n")
        monkeypatch.setenv("GAMELAB_TEST_NAME", "from-env")
        monkeypatch.delenv("GAMELAB_TEST_ONLY_FILE", raising=False)

        loader = ConfigLoader(str(env_file))

        assert loader.get("GAMELAB_TEST_NAME", "default") == "from-env"
        assert loader.get("GAMELAB_TEST_ONLY_FILE", "default") == "file-value"
        monkeypatch.delenv("GAMELAB_TEST_ONLY_FILE")

    def test_missing_secret_warns_without_value(self, loader, monkeypatch, caplog):
        monkeypatch.delenv("GAMELAB_TEST_SECRET", raising=False)
        with caplog.at_level(logging.WARNING):
            assert loader.get_secret("GAMELAB_TEST_SECRET") == ""
        assert "GAMELAB_TEST_SECRET is not set" in caplog.text

    def test_secret_value_never_logged(self, loader, monkeypatch, caplog):
        monkeypatch.setenv("GAMELAB_TEST_SECRET", "s3cr3t-value")
        with caplog.at_level(logging.DEBUG):
            assert loader.get_secret("GAMELAB_TEST_SECRET") == "s3cr3t-value"
        assert "s3cr3t-value" not in caplog.text
