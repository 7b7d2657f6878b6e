"""
Unit tests for design service configuration.

Tests cover:
- Defaults and validation
- Environment variable loading
- .env file loading
"""

import os
from unittest.mock import patch

import pytest

from structassist.services.config import DEFAULT_SERVICE_URL, DesignServiceConfig

ENV_KEYS = ("STRUCTURAL_SERVICES_URL", "DESIGN_API_TIMEOUT", "DESIGN_API_MAX_RETRIES")


def _clean_environ():
    return {k: v for k, v in os.environ.items() if k not in ENV_KEYS}


class TestDesignServiceConfigInitialization:

    def test_defaults(self):
        config = DesignServiceConfig()

        assert config.base_url == DEFAULT_SERVICE_URL
        assert config.timeout == 60.0
        assert config.max_retries == 3
        assert config.retry_base_delay == 1.0

    def test_trailing_slash_stripped(self):
        assert DesignServiceConfig(base_url="http://design.test/").base_url == "http://design.test"

    def test_empty_url_rejected(self):
        with pytest.raises(ValueError, match="Service URL is required"):
            DesignServiceConfig(base_url="")

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError, match="Timeout must be positive"):
            DesignServiceConfig(timeout=0)

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError, match="Max retries cannot be negative"):
            DesignServiceConfig(max_retries=-1)


class TestDesignServiceConfigFromEnv:
    """Tests for loading configuration from the environment."""

    def test_defaults_when_unset(self):
        with patch.dict(os.environ, _clean_environ(), clear=True):
            config = DesignServiceConfig.from_env()

        assert config.base_url == DEFAULT_SERVICE_URL
        assert config.max_retries == 3

    def test_reads_variables(self):
        env = {
            "STRUCTURAL_SERVICES_URL": "https://design.example.org/",
            "DESIGN_API_TIMEOUT": "15",
            "DESIGN_API_MAX_RETRIES": "1",
        }
        with patch.dict(os.environ, env):
            config = DesignServiceConfig.from_env()

        assert config.base_url == "https://design.example.org"
        assert config.timeout == 15.0
        assert config.max_retries == 1

    def test_invalid_number_rejected(self):
        with patch.dict(os.environ, {"DESIGN_API_TIMEOUT": "soon"}):
            with pytest.raises(ValueError, match="Invalid design service setting"):
                DesignServiceConfig.from_env()

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("STRUCTURAL_SERVICES_URL=http://from-file.test\nDESIGN_API_MAX_RETRIES=0\n")

        with patch.dict(os.environ, _clean_environ(), clear=True):
            config = DesignServiceConfig.from_env(str(env_file))

        assert config.base_url == "http://from-file.test"
        assert config.max_retries == 0

    def test_missing_env_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DesignServiceConfig.from_env(str(tmp_path / "missing.env"))
