"""
Paper Configuration Tests
=========================
"""

import pytest

from hp82240b.config import PaperConfig
from hp82240b.errors import ConfigurationError, PrinterError


class TestDefaults:
    """Test default geometry."""

    def test_defaults(self):
        config = PaperConfig()
        assert config.paper_width == 168
        assert config.line_height == 10
        assert config.max_lines == 1000
        assert config.initial_lines == 10

    def test_derived_values(self):
        config = PaperConfig()
        assert config.base_width == 188
        assert config.base_width == config.paper_width + config.horizontal_margin

    def test_default_is_valid(self):
        config = PaperConfig()
        assert config.validate() is config


class TestFromEnv:
    """Test environment variable configuration."""

    def test_no_variables(self, monkeypatch):
        for name in ("HP82240B_MAX_LINES", "HP82240B_DISPLAY_WIDTH", "HP82240B_LINE_HEIGHT"):
            monkeypatch.delenv(name, raising=False)
        assert PaperConfig.from_env() == PaperConfig()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("HP82240B_MAX_LINES", "50")
        monkeypatch.setenv("HP82240B_DISPLAY_WIDTH", "376")
        monkeypatch.setenv("HP82240B_LINE_HEIGHT", "12")
        config = PaperConfig.from_env()
        assert config.max_lines == 50
        assert config.display_width == 376
        assert config.line_height == 12

    def test_invalid_values_ignored(self, monkeypatch):
        monkeypatch.setenv("HP82240B_MAX_LINES", "lots")
        assert PaperConfig.from_env().max_lines == 1000


class TestValidate:
    """Test configuration validation."""

    @pytest.mark.parametrize("field", ["paper_width", "line_height", "max_lines", "display_width"])
    def test_must_be_positive(self, field):
        with pytest.raises(ConfigurationError) as exc_info:
            PaperConfig(**{field: 0}).validate()
        assert exc_info.value.field == field
        assert str(exc_info.value).startswith(f"{field}: ")

    @pytest.mark.parametrize("field", ["horizontal_margin", "vertical_margin", "initial_lines"])
    def test_must_not_be_negative(self, field):
        with pytest.raises(ConfigurationError):
            PaperConfig(**{field: -1}).validate()

    def test_zero_margins_allowed(self):
        PaperConfig(horizontal_margin=0, vertical_margin=0).validate()

    def test_line_height_must_fit_underline(self):
        with pytest.raises(ConfigurationError, match="line_height"):
            PaperConfig(line_height=8).validate()
        PaperConfig(line_height=9).validate()

    def test_is_printer_error(self):
        with pytest.raises(PrinterError):
            PaperConfig(max_lines=0).validate()
