"""
Paper Configuration
===================

Geometry and limits for the virtual paper. Configuration can come from:
- Default values (defined here)
- Environment variables (PaperConfig.from_env)
- Command-line options (the CLI applies them with dataclasses.replace)

All lengths are in logical printer dots unless stated otherwise. Device
pixels are logical dots multiplied by the zoom factor, plus the margins.

The printer prints 24 characters per line. Each character cell is 7 dots
wide (1 blank column, 5 glyph columns, 1 blank column), giving 168 dots.

Copyright (c) 2026 hp82240b contributors
"""

import os
from dataclasses import dataclass

from hp82240b.errors import ConfigurationError


@dataclass(frozen=True)
class PaperConfig:
    """
    Configuration for a paper session.

    Attributes:
        paper_width: Printable width in dots (default: 168)
        horizontal_margin: Left + right margin in device pixels (default: 20)
        vertical_margin: Top + bottom margin in device pixels (default: 20)
        line_height: Line pitch in dots (default: 10)
        initial_lines: Lines the first raster is sized for (default: 10)
        max_lines: Lines kept before the oldest is evicted (default: 1000)
        display_width: Available display width in device pixels (default: 188)
        display_height: Minimum raster height in device pixels (default: 0)
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PRINT HEAD GEOMETRY
    # ═══════════════════════════════════════════════════════════════════════════

    paper_width: int = 168  # 24 cells x 7 dots
    line_height: int = 10  # glyph rows + underline row + gap

    # ═══════════════════════════════════════════════════════════════════════════
    # RASTER LAYOUT
    # ═══════════════════════════════════════════════════════════════════════════

    horizontal_margin: int = 20
    vertical_margin: int = 20
    initial_lines: int = 10
    max_lines: int = 1000

    # ═══════════════════════════════════════════════════════════════════════════
    # DISPLAY
    # ═══════════════════════════════════════════════════════════════════════════

    display_width: int = 188  # paper_width + horizontal_margin: zoom 1
    display_height: int = 0

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "PaperConfig":
        """
        Create PaperConfig from environment variables.

        Environment variables (all optional):
            HP82240B_MAX_LINES: Lines kept before eviction
            HP82240B_DISPLAY_WIDTH: Display width in device pixels
            HP82240B_LINE_HEIGHT: Line pitch in dots

        Invalid integers are ignored.

        Returns:
            PaperConfig with values from environment variables
        """
        overrides = {}

        for env_name, field_name in (
            ("HP82240B_MAX_LINES", "max_lines"),
            ("HP82240B_DISPLAY_WIDTH", "display_width"),
            ("HP82240B_LINE_HEIGHT", "line_height"),
        ):
            if value := os.environ.get(env_name):
                try:
                    overrides[field_name] = int(value)
                except ValueError:
                    pass  # Ignore invalid values

        return cls(**overrides)

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def base_width(self) -> int:
        """Display width needed for zoom 1."""
        return self.paper_width + self.horizontal_margin

    def validate(self) -> "PaperConfig":
        """
        Check that the configuration can be rendered.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigurationError: If a value is out of range
        """
        from hp82240b.printer.font import CHARACTER_HEIGHT

        for name in (
            "paper_width",
            "line_height",
            "max_lines",
            "display_width",
        ):
            if getattr(self, name) < 1:
                raise ConfigurationError("must be at least 1", field=name)

        for name in ("horizontal_margin", "vertical_margin", "initial_lines", "display_height"):
            if getattr(self, name) < 0:
                raise ConfigurationError("must not be negative", field=name)

        if self.line_height <= CHARACTER_HEIGHT:
            raise ConfigurationError(
                f"must exceed the character height ({CHARACTER_HEIGHT}) "
                "to leave room for the underline",
                field="line_height",
            )

        return self
