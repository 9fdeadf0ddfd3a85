"""Tests for ServiceConfig and logging setup."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from apiservice import ServiceConfig
from apiservice.logging_config import setup_logging
from apiservice.models import DEFAULT_BASE_URL


class TestServiceConfig:
    """Tests for ServiceConfig."""

    def test_defaults(self):
        config = ServiceConfig()
        assert config.base_url == DEFAULT_BASE_URL
        assert config.token is None
        assert config.request_timeout == 5.0
        assert config.log_level == "WARNING"

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ServiceConfig(request_timeout=0)

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            ServiceConfig(retries=3)

    def test_token_env_expansion(self, monkeypatch):
        monkeypatch.setenv("MY_API_TOKEN", "secret-123")
        assert ServiceConfig(token="$MY_API_TOKEN").token == "secret-123"
        assert ServiceConfig(token="${MY_API_TOKEN}").token == "secret-123"

    def test_token_unknown_env_kept(self, monkeypatch):
        monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)
        assert ServiceConfig(token="$NOT_SET_ANYWHERE").token == "$NOT_SET_ANYWHERE"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("APISERVICE_BASE_URL", "https://staging.example.com")
        monkeypatch.setenv("APISERVICE_TOKEN", "abc")
        monkeypatch.setenv("APISERVICE_TIMEOUT", "2.5")
        monkeypatch.setenv("APISERVICE_LOG_LEVEL", "debug")
        config = ServiceConfig.from_env()
        assert config.base_url == "https://staging.example.com"
        assert config.token == "abc"
        assert config.request_timeout == 2.5
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("BASE_URL", "TOKEN", "TIMEOUT", "LOG_LEVEL", "LOG_FILE"):
            monkeypatch.delenv(f"APISERVICE_{name}", raising=False)
        assert ServiceConfig.from_env() == ServiceConfig()

    def test_yaml_round_trip(self):
        config = ServiceConfig(base_url="https://api.example.com", token="abc", request_timeout=3)
        yaml_str = config.to_yaml()
        assert "base_url: https://api.example.com" in yaml_str
        assert ServiceConfig.from_yaml(yaml_str) == config

    def test_from_yaml_file(self, tmp_path: Path):
        path = tmp_path / "service.yaml"
        path.write_text("base_url: https://files.example.com\nrequest_timeout: 9\n")
        config = ServiceConfig.from_yaml_file(path)
        assert config.base_url == "https://files.example.com"
        assert config.request_timeout == 9.0

    def test_empty_yaml(self):
        assert ServiceConfig.from_yaml("") == ServiceConfig()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_configures_package_logger(self, tmp_path: Path):
        log_file = tmp_path / "apiservice.log"
        logger = setup_logging("DEBUG", log_file=str(log_file), force=True)
        try:
            assert logger.name == "apiservice"
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2
            assert logger.propagate is False

            logging.getLogger("apiservice.http.client").debug("GET https://api.example.com/users")
            for handler in logger.handlers:
                handler.flush()
            assert "GET https://api.example.com/users" in log_file.read_text()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()
            logger.propagate = True
            logger.setLevel(logging.NOTSET)

    def test_invalid_level_falls_back(self):
        logger = setup_logging("LOUD", force=True)
        try:
            assert logger.level == logging.WARNING
        finally:
            logger.handlers.clear()
            logger.propagate = True
            logger.setLevel(logging.NOTSET)
