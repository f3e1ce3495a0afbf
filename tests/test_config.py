"""
Tests for settings and logging setup.
"""

import json
import logging
import sys

import pytest
from pydantic import ValidationError

from backend.ads.config import (
    Settings,
    configure,
    get_settings,
    load_settings,
    reset_settings,
    settings_from_env,
)
from backend.ads.errors import ConfigError
from backend.ads.logging_config import (
    ROOT_LOGGER,
    JsonFormatter,
    build_formatter,
    get_logger,
    setup_logging,
)


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings()
        assert settings.integer_bits is None
        assert settings.max_integer is None
        assert settings.log_level == "WARNING"
        assert settings.log_format == "simple"

    def test_max_integer(self):
        """Test max_integer follows integer_bits."""
        assert Settings(integer_bits=8).max_integer == 255

    def test_log_level_normalised(self):
        """Test log level is upper-cased."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test an unknown log level is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_level="chatty")
        assert "log_level" in str(exc_info.value)

    def test_invalid_integer_bits(self):
        """Test non-positive widths are rejected."""
        with pytest.raises(ValidationError):
            Settings(integer_bits=0)

    def test_unknown_field_rejected(self):
        """Test extra keys are not silently accepted."""
        with pytest.raises(ValidationError):
            Settings(bits=64)


class TestLoadSettings:
    """Tests for YAML loading."""

    def test_top_level_keys(self, tmp_path):
        """Test keys at the top level of the file."""
        path = tmp_path / "ads.yaml"
        path.write_text("integer_bits: 64\nlog_level: info\n")
        settings = load_settings(path)
        assert settings.integer_bits == 64
        assert settings.log_level == "INFO"

    def test_ads_section(self, tmp_path):
        """Test keys nested under an ads section."""
        path = tmp_path / "config.yaml"
        path.write_text("ads:\n  integer_bits: 32\nother: ignored\n")
        assert load_settings(path).integer_bits == 32

    def test_empty_file(self, tmp_path):
        """Test an empty file yields defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            load_settings(tmp_path / "missing.yaml")
        assert "not found" in str(exc_info.value)

    def test_malformed_yaml(self, tmp_path):
        """Test a YAML syntax error raises ConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("integer_bits: [64\n")
        with pytest.raises(ConfigError) as exc_info:
            load_settings(path)
        assert "YAML parse error" in str(exc_info.value)

    def test_not_utf8(self, tmp_path):
        """Test undecodable bytes raise ConfigError."""
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"integer_bits: \xff\xfe\n")
        with pytest.raises(ConfigError) as exc_info:
            load_settings(path)
        assert "UTF-8" in str(exc_info.value)

    def test_directory_path(self, tmp_path):
        """Test a directory instead of a file raises ConfigError."""
        with pytest.raises(ConfigError):
            load_settings(tmp_path)

    def test_not_a_mapping(self, tmp_path):
        """Test a list document raises ConfigError."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_invalid_values(self, tmp_path):
        """Test bad values raise ConfigError instead of ValidationError."""
        path = tmp_path / "values.yaml"
        path.write_text("integer_bits: -1\n")
        with pytest.raises(ConfigError):
            load_settings(path)


class TestSettingsFromEnv:
    """Tests for environment variables."""

    def test_empty_environment(self):
        """Test no variables gives defaults."""
        assert settings_from_env({}) == Settings()

    def test_overrides(self):
        """Test individual variables."""
        settings = settings_from_env({"ADS_INTEGER_BITS": "64", "ADS_LOG_LEVEL": "error"})
        assert settings.integer_bits == 64
        assert settings.log_level == "ERROR"

    def test_config_file_with_override(self, tmp_path):
        """Test variables override values from ADS_CONFIG."""
        path = tmp_path / "ads.yaml"
        path.write_text("integer_bits: 32\nlog_format: json\n")
        settings = settings_from_env({"ADS_CONFIG": str(path), "ADS_INTEGER_BITS": "16"})
        assert settings.integer_bits == 16
        assert settings.log_format == "json"

    def test_bad_integer_bits(self):
        """Test a non-numeric width raises ConfigError."""
        with pytest.raises(ConfigError):
            settings_from_env({"ADS_INTEGER_BITS": "lots"})


class TestActiveSettings:
    """Tests for configure, get_settings and reset_settings."""

    def test_configure_overrides(self):
        """Test overriding one field keeps the others."""
        configure(log_level="DEBUG")
        configure(integer_bits=16)
        settings = get_settings()
        assert settings.integer_bits == 16
        assert settings.log_level == "DEBUG"

    def test_configure_with_instance(self):
        """Test passing a full Settings instance."""
        configure(Settings(integer_bits=8))
        assert get_settings().integer_bits == 8

    def test_configure_invalid(self):
        """Test bad overrides raise ConfigError and keep the old settings."""
        with pytest.raises(ConfigError):
            configure(integer_bits=-5)
        assert get_settings() == Settings()

    def test_reset(self):
        """Test reset restores defaults."""
        configure(integer_bits=8)
        reset_settings()
        assert get_settings() == Settings()


class TestLogging:
    """Tests for logging helpers."""

    def teardown_method(self):
        logger = logging.getLogger(ROOT_LOGGER)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_root_logger_name(self):
        """Test the package logger is the parent of module loggers."""
        assert ROOT_LOGGER == "backend.ads"

    def test_setup_uses_settings(self):
        """Test level comes from the active settings."""
        configure(log_level="INFO")
        logger = setup_logging()
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_setup_is_idempotent(self):
        """Test repeated setup does not stack handlers."""
        setup_logging(level="DEBUG")
        logger = setup_logging(level="DEBUG", log_format="json")
        assert len(logger.handlers) == 1

    def test_get_logger_prefixes(self):
        """Test names outside the package are nested under it."""
        assert get_logger("custom").name == "backend.ads.custom"
        assert get_logger("backend.ads.v1").name == "backend.ads.v1"

    def test_rotation_is_logged(self, caplog):
        """Test TreeMap rebalancing emits debug records."""
        from backend.ads.v1.collection import TreeMap

        with caplog.at_level(logging.DEBUG, logger=ROOT_LOGGER):
            TreeMap((i, i) for i in range(3))
        assert any("Rotating left" in r.getMessage() for r in caplog.records)

    def test_unknown_level_rejected(self):
        """Test an unknown level override raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            setup_logging(level="chatty")
        assert "log_level" in str(exc_info.value)

    def test_unknown_format_rejected(self):
        """Test an unknown format override raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            setup_logging(log_format="xml")
        assert "log_format" in str(exc_info.value)
        assert logging.getLogger(ROOT_LOGGER).handlers == []


class TestJsonFormatter:
    """Tests for JSON log output."""

    def make_record(self, msg, *args):
        return logging.LogRecord(
            name="backend.ads.v1.collection.tree_map",
            level=logging.DEBUG,
            pathname=__file__,
            lineno=42,
            msg=msg,
            args=args,
            exc_info=None,
        )

    def test_output_is_valid_json(self):
        """Test the record fields serialise to a parseable object."""
        formatter = build_formatter("json")
        data = json.loads(formatter.format(self.make_record("Rotating left at key %r", 7)))
        assert data["message"] == "Rotating left at key 7"
        assert data["level"] == "DEBUG"
        assert data["logger"] == "backend.ads.v1.collection.tree_map"
        assert data["line"] == 42

    def test_quotes_are_escaped(self):
        """Test messages containing quotes still produce valid JSON."""
        formatter = build_formatter("json")
        record = self.make_record("Rotating left at key %r", "it's \"quoted\"")
        data = json.loads(formatter.format(record))
        assert data["message"] == "Rotating left at key 'it\\'s \"quoted\"'"

    def test_exception_included(self):
        """Test exception text is carried in its own field."""
        formatter = build_formatter("json")
        try:
            raise ValueError("boom")
        except ValueError:
            record = self.make_record("failed")
            record.exc_info = sys.exc_info()
        data = json.loads(formatter.format(record))
        assert "ValueError: boom" in data["exception"]

    def test_setup_installs_json_formatter(self):
        """Test setup_logging uses JsonFormatter for the json format."""
        logger = setup_logging(log_format="json")
        try:
            assert isinstance(logger.handlers[0].formatter, JsonFormatter)
        finally:
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
