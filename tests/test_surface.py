"""
Render Surface Unit Tests
=========================

Tests for the zoomable paper raster: geometry, glyph drawing, graphics
columns, growth and eviction.
"""

import io

import pytest
from PIL import Image

from hp82240b.config import PaperConfig
from hp82240b.printer import CodePage, RenderSurface


@pytest.fixture
def config():
    return PaperConfig()


@pytest.fixture
def surface(config):
    """Zoom 1 surface with default geometry."""
    return RenderSurface.build(config, display_width=188)


# =============================================================================
# Geometry Tests
# =============================================================================

class TestGeometry:
    """Test zoom, offsets and coordinate mapping."""

    def test_default_zoom(self, surface):
        assert surface.zoom == 1
        assert surface.x_offset == 0
        assert surface.width == 188
        assert surface.height == 100  # initial_lines * line_height

    def test_double_width_zooms(self, config):
        surface = RenderSurface.build(config, display_width=376)
        assert surface.zoom == 2
        assert surface.width == 376
        assert surface.height == 200

    def test_narrow_display_keeps_zoom_one(self, config):
        surface = RenderSurface.build(config, display_width=50)
        assert surface.zoom == 1

    def test_display_narrower_than_margins(self, config):
        """No offset when the display is narrower than the margins."""
        surface = RenderSurface.build(config, display_width=15)
        assert surface.x_offset == 0
        surface.draw_graphics_column(0b1)
        assert surface.is_inked(0, 0)

    def test_mapping(self, surface):
        assert surface.to_x(0) == 10
        assert surface.to_y(0) == 10
        assert surface.to_x(5) == 15
        assert surface.to_y(12) == 22

    def test_mapping_scales_with_zoom(self, config):
        surface = RenderSurface.build(config, display_width=376)
        assert surface.to_y(10) - surface.to_y(0) == 20
        assert surface.to_x(3) - surface.to_x(0) == 6

    def test_display_height_is_minimum(self, config):
        surface = RenderSurface.build(config, display_width=188, display_height=500)
        assert surface.height == 500

    def test_sized_for_lines(self, config):
        surface = RenderSurface.build(config, display_width=188, sized_for_lines=30)
        assert surface.height == 300

    def test_starts_blank(self, surface):
        assert surface.ink_bbox() is None
        assert surface.line_count == 0
        assert (surface.cursor.x, surface.cursor.y) == (0, 0)

    def test_invalid_zoom(self, config):
        with pytest.raises(ValueError):
            RenderSurface(config, 100, 100, zoom=0)

    def test_invalid_display_width(self, config):
        with pytest.raises(ValueError):
            RenderSurface.build(config, display_width=0)


# =============================================================================
# Drawing Tests
# =============================================================================

class TestDrawing:
    """Test glyph and graphics drawing."""

    def test_glyph_cell_layout(self, surface):
        """A glyph has a blank leading column, 5 glyph columns, then advances 7."""
        surface.draw_glyph(ord("H"))
        assert not any(surface.is_inked(0, row) for row in range(8))
        assert all(surface.is_inked(1, row) for row in range(7))
        assert surface.is_inked(2, 3)
        assert not surface.is_inked(2, 0)
        assert surface.cursor.x == 7

    def test_expanded_is_double_width(self, surface, config):
        surface.draw_glyph(ord("A"), expanded=True)
        wide = surface.ink_bbox()
        assert surface.cursor.x == 14

        normal = RenderSurface.build(config, display_width=188)
        normal.draw_glyph(ord("A"))
        narrow = normal.ink_bbox()

        assert wide[2] - wide[0] == 2 * (narrow[2] - narrow[0])
        assert wide[3] - wide[1] == narrow[3] - narrow[1]

    def test_underline_spans_cell(self, surface):
        """The rule covers the whole 7-dot cell on row 8."""
        surface.draw_glyph(ord("A"), underline=True)
        assert all(surface.is_inked(x, 8) for x in range(7))
        assert not surface.is_inked(7, 8)

    def test_expanded_underline(self, surface):
        surface.draw_glyph(ord("A"), expanded=True, underline=True)
        assert all(surface.is_inked(x, 8) for x in range(14))
        assert not surface.is_inked(14, 8)

    def test_code_page_changes_glyph(self, config):
        roman8 = RenderSurface.build(config, display_width=188)
        ecma94 = RenderSurface.build(config, display_width=188)
        roman8.draw_glyph(0xE9, CodePage.ROMAN8)
        ecma94.draw_glyph(0xE9, CodePage.ECMA94)
        assert roman8.tobytes() != ecma94.tobytes()

    def test_graphics_column(self, surface):
        """Bit 0 is the top dot; each column advances one dot."""
        surface.draw_graphics_column(0b10000001)
        surface.draw_graphics_column(0b00000010)
        assert surface.is_inked(0, 0)
        assert surface.is_inked(0, 7)
        assert not surface.is_inked(0, 1)
        assert surface.is_inked(1, 1)
        assert surface.cursor.x == 2

    def test_zoomed_dot_is_square(self, config):
        surface = RenderSurface.build(config, display_width=376)
        surface.draw_graphics_column(0b1)
        left, top = surface.to_x(0), surface.to_y(0)
        assert surface.ink_bbox() == (left, top, left + 2, top + 2)

    def test_drawing_past_right_edge_is_clipped(self, surface):
        """A 25th character runs off the paper without error."""
        for _ in range(30):
            surface.draw_glyph(ord("W"))
        assert surface.cursor.x == 210


# =============================================================================
# Line Feed Tests
# =============================================================================

class TestLineFeed:
    """Test line advance, growth and eviction."""

    def test_line_feed_returns_head(self, surface):
        surface.draw_glyph(ord("A"))
        assert surface.line_feed() is False
        assert (surface.cursor.x, surface.cursor.y) == (0, 10)
        assert surface.line_count == 1

    def test_grows_when_full(self, surface):
        for _ in range(12):
            surface.line_feed()
        assert surface.height == surface.to_y(13 * 10)

    def test_growth_keeps_content(self, surface):
        surface.draw_glyph(ord("A"))
        for _ in range(20):
            surface.line_feed()
        assert surface.is_inked(1, 1)

    def test_evicts_at_max_lines(self):
        config = PaperConfig(max_lines=2)
        surface = RenderSurface.build(config, display_width=188)
        assert surface.line_feed() is False
        assert surface.line_feed() is False
        assert surface.line_feed() is True
        assert surface.line_count == 2
        assert surface.cursor.y == 20

    def test_evict_moves_content_up(self, surface):
        """After eviction the second line sits where the first was."""
        surface.draw_glyph(ord("A"))
        surface.line_feed()
        surface.draw_glyph(ord("B"))
        surface.line_feed()

        # A has no dot at column 1, row 0; B does
        assert not surface.is_inked(1, 0)
        surface.evict_first_line()
        assert surface.is_inked(1, 0)
        assert not surface.is_inked(1, 10)
        assert surface.line_count == 1
        assert surface.cursor.y == 10

    def test_evict_keeps_size(self, surface):
        size = surface.image.size
        surface.line_feed()
        surface.evict_first_line()
        assert surface.image.size == size


# =============================================================================
# Output Tests
# =============================================================================

class TestOutput:
    """Test raster export."""

    def test_png_roundtrip_size(self, surface):
        surface.draw_glyph(ord("A"))
        image = Image.open(io.BytesIO(surface.to_png()))
        assert image.size == (188, 100)
        assert image.mode == "L"

    def test_tobytes_length(self, surface):
        assert len(surface.tobytes()) == surface.width * surface.height

    def test_pixel_values(self, surface):
        surface.draw_graphics_column(0b1)
        assert surface.pixel(10, 10) == 0
        assert surface.pixel(0, 0) == 255
