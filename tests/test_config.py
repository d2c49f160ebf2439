"""
Tests for configuration loading.
"""

import pytest

from shici_search.infrastructure.config.config_manager import ConfigManager
from shici_search.infrastructure.config.config_validator import ConfigValidator
from shici_search.infrastructure.search.factory import SearchFactory
from shici_search.infrastructure.search.http_transport import HttpTransport


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("SHICI_SEARCH_URL", "LOG_LEVEL", "APP_ENV", "SHICI_SEARCH_CONFIG_DIR"):
        monkeypatch.delenv(name, raising=False)


class TestConfigManager:

    def test_base_config(self, config_dir):
        config = ConfigManager(config_dir=str(config_dir)).get_config()
        assert config.get_search_engine_url() == "http://es.test:9200/"
        assert config.get_search_engine_timeout() == (5.0, 30.0)
        assert config.get_search_engine_headers() is None
        assert config.get_default_index() == "shici"
        assert config.get_default_max_results() == 5
        assert config.get_max_results_limit() == 10
        assert config.get_min_score() == 0.0
        assert config.get_log_level() == "INFO"

    def test_environment_file_overrides_base(self, config_dir):
        (config_dir / "production.yaml").write_text(
            "search_engine:\n"
            "  timeout_seconds: 10\n"
            "search:\n"
            "  min_score: 0.5\n"
            "logging:\n"
            "  level: warning\n",
            encoding="utf-8"
        )
        config = ConfigManager(config_dir=str(config_dir), environment="production").get_config()
        assert config.get_search_engine_url() == "http://es.test:9200/"
        assert config.get_search_engine_timeout() == (5.0, 10)
        assert config.get_min_score() == 0.5
        assert config.get_default_max_results() == 5
        assert config.get_log_level() == "WARNING"

    def test_environment_variables_win(self, config_dir, monkeypatch):
        monkeypatch.setenv("SHICI_SEARCH_URL", "https://search.internal:9243")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = ConfigManager(config_dir=str(config_dir)).get_config()
        assert config.get_search_engine_url() == "https://search.internal:9243"
        assert config.get_log_level() == "DEBUG"

    def test_config_dir_from_environment(self, config_dir, monkeypatch):
        monkeypatch.setenv("SHICI_SEARCH_CONFIG_DIR", str(config_dir))
        assert ConfigManager().get_config().get_default_max_results() == 5

    def test_missing_base_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(config_dir=str(tmp_path)).get_config()

    def test_invalid_url(self, tmp_path):
        (tmp_path / "base.yaml").write_text("search_engine:\n  url: es.test:9200\n", encoding="utf-8")
        with pytest.raises(ValueError, match="http"):
            ConfigManager(config_dir=str(tmp_path)).get_config()

    def test_config_is_loaded_once(self, config_dir):
        manager = ConfigManager(config_dir=str(config_dir))
        assert manager.get_config() is manager.get_config()


class TestConfigValidator:

    def test_all_errors_are_reported(self):
        validator = ConfigValidator()
        with pytest.raises(ValueError) as exc_info:
            validator.validate_config({
                "search_engine": {"url": "http://es", "timeout_seconds": 0},
                "search": {"max_results_limit": -1, "min_score": -0.1},
                "logging": {"level": "LOUD"}
            })
        assert len(validator.errors) == 4
        assert "timeout" in str(exc_info.value)

    def test_missing_engine_section(self):
        with pytest.raises(ValueError, match="search_engine"):
            ConfigValidator().validate_config({})


class TestSearchFactory:

    def test_services_share_caches_and_transport(self, config_dir):
        config = ConfigManager(config_dir=str(config_dir)).get_config()
        factory = SearchFactory(config)

        first = factory.create_search_service()
        second = factory.create_search_service()

        assert isinstance(first.transport, HttpTransport)
        assert first.transport is second.transport
        assert first.transport.base_url == "http://es.test:9200"
        assert first.decoders is second.decoders
        assert first.mapping_builder is second.mapping_builder
        factory.close()

    def test_injected_transport(self, config_dir, mock_transport):
        factory = SearchFactory(ConfigManager(config_dir=str(config_dir)).get_config())
        service = factory.create_search_service(transport=mock_transport)
        assert service.transport is mock_transport
        factory.close()
        mock_transport.close.assert_not_called()
