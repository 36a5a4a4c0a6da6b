"""
Tests for ConverterConfig
=========================

These tests verify default settings, range checks, environment variable
loading and command-line overrides.
"""

import pytest

from hexconv.config import ConverterConfig


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Make sure no HEXCONV_* variables leak in from the shell."""
    for name in ("HEXCONV_MAX_DATA_SIZE", "HEXCONV_ZERO_THRESHOLD", "HEXCONV_FILL_BYTE"):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Defaults and Validation
# =============================================================================

class TestValidation:
    """Tests for ConverterConfig.validate()."""

    def test_defaults(self):
        config = ConverterConfig()
        assert config.max_data_size == 16
        assert config.zero_threshold == 2
        assert config.line_ending == "\n"
        assert config.fill_byte == 0x00
        assert config.image_size is None

    def test_defaults_valid(self):
        config = ConverterConfig()
        assert config.validate() is config

    def test_record_size_limits(self):
        """Should accept 1 and 255 data bytes per record."""
        ConverterConfig(max_data_size=1).validate()
        ConverterConfig(max_data_size=255).validate()

    @pytest.mark.parametrize("changes", [
        {"max_data_size": 0},
        {"max_data_size": 256},
        {"zero_threshold": -1},
        {"fill_byte": -1},
        {"fill_byte": 0x100},
        {"image_size": -1},
        {"line_ending": "\r"},
    ])
    def test_out_of_range(self, changes):
        with pytest.raises(ValueError):
            ConverterConfig(**changes).validate()

    def test_zero_threshold_zero_valid(self):
        ConverterConfig(zero_threshold=0).validate()


# =============================================================================
# Overrides and Environment
# =============================================================================

class TestOverrides:
    """Tests for with_overrides()."""

    def test_none_ignored(self):
        """Should keep existing values where the override is None."""
        config = ConverterConfig(max_data_size=32).with_overrides(
            max_data_size=None, zero_threshold=5
        )
        assert config.max_data_size == 32
        assert config.zero_threshold == 5

    def test_returns_copy(self):
        original = ConverterConfig()
        changed = original.with_overrides(fill_byte=0xFF)
        assert changed.fill_byte == 0xFF
        assert original.fill_byte == 0x00

    def test_zero_is_not_none(self):
        """Should apply falsy values other than None."""
        config = ConverterConfig().with_overrides(zero_threshold=0)
        assert config.zero_threshold == 0


class TestFromEnv:
    """Tests for ConverterConfig.from_env()."""

    def test_no_variables(self):
        assert ConverterConfig.from_env() == ConverterConfig()

    def test_all_variables(self, monkeypatch):
        monkeypatch.setenv("HEXCONV_MAX_DATA_SIZE", "32")
        monkeypatch.setenv("HEXCONV_ZERO_THRESHOLD", "8")
        monkeypatch.setenv("HEXCONV_FILL_BYTE", "0xFF")

        config = ConverterConfig.from_env()

        assert config.max_data_size == 32
        assert config.zero_threshold == 8
        assert config.fill_byte == 0xFF

    def test_invalid_values_ignored(self, monkeypatch):
        """Should fall back to defaults for unparseable values."""
        monkeypatch.setenv("HEXCONV_MAX_DATA_SIZE", "lots")
        monkeypatch.setenv("HEXCONV_FILL_BYTE", "0xZZ")

        config = ConverterConfig.from_env()

        assert config.max_data_size == 16
        assert config.fill_byte == 0x00

    def test_range_checked_by_validate(self, monkeypatch):
        """Should load out-of-range values and leave rejection to validate()."""
        monkeypatch.setenv("HEXCONV_MAX_DATA_SIZE", "300")
        config = ConverterConfig.from_env()
        assert config.max_data_size == 300
        with pytest.raises(ValueError):
            config.validate()
