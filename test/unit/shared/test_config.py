"""
ScrapeConfig 校验与 load_config 环境变量读取测试
"""

import os
from unittest.mock import patch

import pytest

from metascrape.scrape.domain.value_objects.scrape_config import ScrapeConfig, DEFAULT_LOGO_ENDPOINT
from metascrape.shared.config import load_config


class TestScrapeConfig:

    def test_defaults(self):
        config = ScrapeConfig()
        assert config.http_timeout == 10.0
        assert config.max_workers == 8
        assert config.logo_endpoint == DEFAULT_LOGO_ENDPOINT
        assert config.logo_size is None
        assert config.html_parser == "html.parser"

    @pytest.mark.parametrize("timeout", [0, -1, None])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(ValueError):
            ScrapeConfig(http_timeout=timeout)

    def test_workers_are_clamped(self):
        assert ScrapeConfig(max_workers=0).max_workers == 1

    def test_logo_endpoint_gets_trailing_slash(self):
        assert ScrapeConfig(logo_endpoint="https://logos.test").logo_endpoint == "https://logos.test/"
        assert ScrapeConfig(logo_endpoint="  ").logo_endpoint == DEFAULT_LOGO_ENDPOINT

    def test_blank_user_agent_uses_default(self):
        assert ScrapeConfig(user_agent=" ").user_agent == "MetaScrape/1.0"


class TestLoadConfig:

    def test_defaults_without_environment(self, tmp_path):
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(str(tmp_path / "missing.env"))

        assert config == ScrapeConfig()

    def test_reads_environment(self, tmp_path):
        env = {
            "METASCRAPE_HTTP_TIMEOUT": "2.5",
            "METASCRAPE_MAX_WORKERS": "3",
            "METASCRAPE_USER_AGENT": "Bot/2",
            "METASCRAPE_LOGO_ENDPOINT": "https://logos.test",
            "METASCRAPE_LOGO_SIZE": "64",
            "METASCRAPE_HTML_PARSER": "lxml",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config(str(tmp_path / "missing.env"))

        assert config.http_timeout == 2.5
        assert config.max_workers == 3
        assert config.user_agent == "Bot/2"
        assert config.logo_endpoint == "https://logos.test/"
        assert config.logo_size == 64
        assert config.html_parser == "lxml"

    def test_env_file_does_not_override_environment(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("METASCRAPE_MAX_WORKERS=2\nMETASCRAPE_USER_AGENT=FromFile/1\n", encoding="utf-8")

        with patch.dict(os.environ, {"METASCRAPE_USER_AGENT": "FromEnv/1"}, clear=True):
            config = load_config(str(env_file))

        assert config.max_workers == 2
        assert config.user_agent == "FromEnv/1"
