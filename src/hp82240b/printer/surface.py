"""
Paper Render Surface
====================

The raster the printer draws on. It owns a Pillow greyscale image (white
paper, black ink) and the print head cursor.

Coordinates
-----------
Drawing code works in logical printer dots: ``(x, y)`` with ``x`` across
the paper (0-167 for a full line) and ``y`` down the paper. Every write goes
through :meth:`RenderSurface.to_x` / :meth:`RenderSurface.to_y`, which add the
margins and multiply by the zoom factor, so zoom never changes the drawing
logic.

Buffer management
-----------------
The image is never resized in place. Growing the paper or evicting the top
line allocates a new image, copies the visible region into it and adopts it.

- growth: when a line feed moves the next line below the raster
- eviction: when a line feed would exceed ``max_lines``; the content moves
  up one line height and the oldest line is lost

Copyright (c) 2026 hp82240b contributors
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageOps

from hp82240b.config import PaperConfig

from .font import CHARACTER_HEIGHT, CHARACTER_WIDTH, CodePage, get_glyph

logger = logging.getLogger(__name__)

INK = 0
PAPER = 255


@dataclass
class Cursor:
    """Print head position in logical dots."""
    x: int = 0
    y: int = 0


class RenderSurface:
    """
    Zoomable raster for the virtual paper.

    Use :meth:`build` to create a surface for a given display width; the
    constructor takes already computed geometry.

    Example:
        >>> surface = RenderSurface.build(PaperConfig(), display_width=376)
        >>> surface.zoom
        2
        >>> surface.draw_glyph(ord("A"))
        >>> surface.line_feed()
        False
    """

    def __init__(
        self,
        config: PaperConfig,
        width: int,
        height: int,
        zoom: int = 1,
        x_offset: int = 0,
    ):
        """
        Initialize surface.

        Args:
            config: Paper geometry
            width: Raster width in device pixels
            height: Raster height in device pixels
            zoom: Device pixels per logical dot (>= 1)
            x_offset: Extra left offset in device pixels
        """
        if zoom < 1:
            raise ValueError(f"zoom must be at least 1, got {zoom}")
        if width < 1 or height < 1:
            raise ValueError(f"Invalid raster size {width}x{height}")

        self._config = config
        self._zoom = zoom
        self._x_offset = x_offset
        self._image = Image.new("L", (width, height), PAPER)
        self._draw = ImageDraw.Draw(self._image)

        self.cursor = Cursor()
        self.line_count = 0

    @classmethod
    def build(
        cls,
        config: PaperConfig,
        display_width: int,
        display_height: int = 0,
        sized_for_lines: Optional[int] = None,
    ) -> "RenderSurface":
        """
        Create an empty surface for a display.

        The zoom is the largest whole factor at which the paper plus margins
        fits the display width. The height covers ``sized_for_lines`` lines
        (default: ``config.initial_lines``) so a rebuild does not have to
        grow the raster line by line.

        Args:
            config: Paper geometry
            display_width: Available width in device pixels
            display_height: Minimum height in device pixels
            sized_for_lines: Number of lines to pre-allocate

        Returns:
            New surface with cursor at origin and no lines
        """
        if display_width < 1:
            raise ValueError(f"display_width must be at least 1, got {display_width}")

        zoom = max(1, display_width // config.base_width)
        x_offset = max(0, display_width - config.horizontal_margin) % (config.paper_width * zoom)

        if sized_for_lines is None:
            sized_for_lines = config.initial_lines
        height = max(
            display_height,
            sized_for_lines * config.line_height * zoom,
            config.vertical_margin // 2 + config.line_height * zoom,
        )

        logger.debug(
            "Building surface %dx%d (zoom %d, x offset %d)",
            display_width, height, zoom, x_offset,
        )
        return cls(config, display_width, height, zoom, x_offset)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> PaperConfig:
        return self._config

    @property
    def zoom(self) -> int:
        """Device pixels per logical dot."""
        return self._zoom

    @property
    def x_offset(self) -> int:
        return self._x_offset

    @property
    def width(self) -> int:
        """Raster width in device pixels."""
        return self._image.width

    @property
    def height(self) -> int:
        """Raster height in device pixels."""
        return self._image.height

    @property
    def image(self) -> Image.Image:
        """The live raster. Replaced on growth and eviction, do not cache."""
        return self._image

    # =========================================================================
    # Coordinate Mapping
    # =========================================================================

    def to_x(self, x: int) -> int:
        """Map a logical column to a device x coordinate."""
        return self._config.horizontal_margin // 2 + self._x_offset + x * self._zoom

    def to_y(self, y: int) -> int:
        """Map a logical row to a device y coordinate."""
        return self._config.vertical_margin // 2 + y * self._zoom

    # =========================================================================
    # Drawing
    # =========================================================================

    def fill_run(self, x: int, y: int, length: int = 1) -> None:
        """
        Ink a horizontal run of logical dots.

        Writes outside the raster are clipped.

        Args:
            x: First logical column
            y: Logical row
            length: Number of dots
        """
        if length < 1:
            return
        left = self.to_x(x)
        top = self.to_y(y)
        self._draw.rectangle(
            [left, top, left + length * self._zoom - 1, top + self._zoom - 1],
            fill=INK,
        )

    def draw_glyph(
        self,
        code: int,
        code_page: CodePage = CodePage.ROMAN8,
        expanded: bool = False,
        underline: bool = False,
    ) -> None:
        """
        Print one character at the cursor and advance.

        A character cell is one blank column, the 5 glyph columns and one
        blank column. Expanded characters double every column.

        Args:
            code: Byte value (32-255)
            code_page: Character set to take the glyph from
            expanded: Double width
            underline: Draw a rule under the whole cell
        """
        increment = 2 if expanded else 1
        glyph = get_glyph(code_page, code)

        self.cursor.x += increment
        x, y = self.cursor.x, self.cursor.y
        for column, bits in enumerate(glyph):
            for row in range(CHARACTER_HEIGHT):
                if bits & (1 << row):
                    self.fill_run(x + column * increment, y + row, increment)

        if underline:
            self.fill_run(
                x - increment,
                y + CHARACTER_HEIGHT,
                (CHARACTER_WIDTH + 2) * increment,
            )

        self.cursor.x += (CHARACTER_WIDTH + 1) * increment

    def draw_graphics_column(self, mask: int) -> None:
        """
        Print one graphics column at the cursor and advance one dot.

        Args:
            mask: 8-bit column, bit 0 at the top
        """
        for row in range(CHARACTER_HEIGHT):
            if mask & (1 << row):
                self.fill_run(self.cursor.x, self.cursor.y + row)
        self.cursor.x += 1

    def line_feed(self) -> bool:
        """
        Advance the paper one line and return the head to column 0.

        Evicts the oldest line first if the line limit is reached, and
        grows the raster when the next line would not fit.

        Returns:
            True if a line was evicted
        """
        evicted = False
        if self.line_count >= self._config.max_lines:
            self.evict_first_line()
            evicted = True

        self.cursor.y += self._config.line_height
        new_height = self.to_y(self.cursor.y + self._config.line_height)
        if new_height >= self.height:
            self._grow(new_height)

        self.cursor.x = 0
        self.line_count += 1
        return evicted

    def evict_first_line(self) -> None:
        """Drop the top line, moving everything below it up one line."""
        line_top = self.to_y(self._config.line_height)
        replacement = Image.new("L", self._image.size, PAPER)
        if line_top < self.height:
            band = self._image.crop((0, line_top, self.width, self.height))
            replacement.paste(band, (0, self.to_y(0)))
        self._adopt(replacement)

        self.line_count -= 1
        self.cursor.y -= self._config.line_height

    def _grow(self, new_height: int) -> None:
        logger.debug("Growing surface from %d to %d rows", self.height, new_height)
        replacement = Image.new("L", (self.width, new_height), PAPER)
        replacement.paste(self._image, (0, 0))
        self._adopt(replacement)

    def _adopt(self, image: Image.Image) -> None:
        self._image = image
        self._draw = ImageDraw.Draw(image)

    # =========================================================================
    # Pixel Access API (for presentation and testing)
    # =========================================================================

    def pixel(self, x: int, y: int) -> int:
        """Device pixel value (0 = ink, 255 = paper)."""
        return self._image.getpixel((x, y))

    def is_inked(self, x: int, y: int) -> bool:
        """True if the logical dot at (x, y) is inked."""
        device_x, device_y = self.to_x(x), self.to_y(y)
        if not (0 <= device_x < self.width and 0 <= device_y < self.height):
            return False
        return self.pixel(device_x, device_y) == INK

    def ink_bbox(self) -> Optional[Tuple[int, int, int, int]]:
        """Bounding box of all ink in device pixels, or None if blank."""
        return ImageOps.invert(self._image).getbbox()

    def tobytes(self) -> bytes:
        """Raw raster, one byte per pixel, row-major."""
        return self._image.tobytes()

    def to_png(self) -> bytes:
        """
        Render the paper as PNG.

        Returns:
            PNG image bytes
        """
        buffer = io.BytesIO()
        self._image.save(buffer, format="PNG")
        return buffer.getvalue()
