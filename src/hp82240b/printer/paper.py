"""
Virtual Paper
=============

A printer session: the decoder, the render surface and the retained byte
history that lets the surface be rebuilt at any zoom.

Data flow::

    append(bytes) ──► history (bytearray)
                 └──► Decoder ──► actions ──► RenderSurface

    width change ──► rebuild(): new surface, replay the whole history

History and raster are kept in lockstep. When the surface evicts its oldest
line, the bytes up to and including the first line terminator are dropped
from the history, so a rebuild reproduces exactly the visible lines.

Example:
    >>> paper = Paper()
    >>> paper.append(b"HELLO\\n")
    30
    >>> paper.line_count
    1
    >>> paper.on_display_width_changed(376)
    >>> paper.zoom
    2

Copyright (c) 2026 hp82240b contributors
"""

import logging
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, List, Optional, Union

from PIL import Image

from hp82240b.config import PaperConfig

from .decoder import (
    Action,
    Decoder,
    DecoderState,
    DrawGlyph,
    DrawGraphicsColumn,
    EndOfLine,
    LINE_TERMINATORS,
    LineFeed,
    SelfTest,
)
from .surface import Cursor, RenderSurface

logger = logging.getLogger(__name__)

PrintedListener = Callable[[int], None]
SelfTestListener = Callable[[], None]


class Paper:
    """
    HP82240B printer session with scrollable paper.

    The render surface is created lazily on first access and discarded when
    the display width changes or the paper is cleared. The byte history
    survives rebuilds and is only emptied by :meth:`clear`.

    Attributes:
        config: Paper geometry and limits

    Notifications:
        printed(y): after every :meth:`append`, with the device row just
            below the current line, so a view can scroll to it
        self test: when ESC 254 is received
    """

    def __init__(self, config: Optional[PaperConfig] = None):
        """
        Initialize paper session.

        Args:
            config: Paper configuration (default: PaperConfig())

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = (config or PaperConfig()).validate()

        self._history = bytearray()
        self._decoder = Decoder()
        # Decoder state at the first byte of the history
        self._origin_state = DecoderState()
        # History offsets where reset_printer() was called
        self._reset_offsets: List[int] = []

        self._surface: Optional[RenderSurface] = None
        self._display_width = self.config.display_width
        self._display_height = self.config.display_height
        self._last_line_count = 0
        self._replaying = False

        self._printed_listeners: List[PrintedListener] = []
        self._self_test_listeners: List[SelfTestListener] = []

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def history(self) -> bytes:
        """Retained byte history (copy)."""
        return bytes(self._history)

    @property
    def decoder_state(self) -> DecoderState:
        return self._decoder.state

    @property
    def surface(self) -> RenderSurface:
        """Render surface, rebuilt from the history if needed."""
        if self._surface is None:
            self.rebuild()
        return self._surface

    @property
    def has_surface(self) -> bool:
        """True if a surface currently exists (no rebuild pending)."""
        return self._surface is not None

    @property
    def cursor(self) -> Cursor:
        return self.surface.cursor

    @property
    def line_count(self) -> int:
        return self.surface.line_count

    @property
    def zoom(self) -> int:
        return self.surface.zoom

    @property
    def display_width(self) -> int:
        return self._display_width

    @property
    def image(self) -> Image.Image:
        """Current raster (repaint-ready)."""
        return self.surface.image

    # =========================================================================
    # Listeners
    # =========================================================================

    def add_listener(self, callback: PrintedListener) -> None:
        """Register a printed(y) callback."""
        self._printed_listeners.append(callback)

    def remove_listener(self, callback: PrintedListener) -> None:
        self._printed_listeners.remove(callback)

    def add_self_test_listener(self, callback: SelfTestListener) -> None:
        """Register a callback for the self-test command (ESC 254)."""
        self._self_test_listeners.append(callback)

    # =========================================================================
    # Printing
    # =========================================================================

    def append(self, data: Union[bytes, bytearray, Iterable[int]]) -> int:
        """
        Print bytes.

        The bytes are added to the history first, then decoded and drawn.

        Args:
            data: Text and control codes

        Returns:
            Device row just below the current line (also sent to listeners)
        """
        data = bytes(data)
        surface = self.surface

        self._history.extend(data)
        self._feed(data)

        grown_to = surface.to_y(surface.cursor.y + self.config.line_height)
        for listener in self._printed_listeners:
            listener(grown_to)
        return grown_to

    def clear(self) -> None:
        """Empty the history and discard the raster."""
        logger.debug("Clearing paper (%d bytes of history)", len(self._history))
        self._history.clear()
        self._reset_offsets.clear()
        self._origin_state = self._decoder.state.copy()
        self._surface = None
        self._last_line_count = 0

    def reset_printer(self) -> None:
        """
        Reset decoding state (code page, underline, expanded, escape).

        Does not touch the raster or the cursor. The reset is recorded at the
        current end of the history so a rebuild replays it in the same place.
        """
        self._reset_offsets.append(len(self._history))
        self._decoder.reset()

    # =========================================================================
    # Resize / Zoom
    # =========================================================================

    def on_display_width_changed(self, width: int, height: Optional[int] = None) -> None:
        """
        Adapt to a new display size.

        Args:
            width: Available width in device pixels
            height: Minimum raster height (unchanged if None)
        """
        if width < 1:
            raise ValueError(f"Display width must be at least 1, got {width}")

        self._display_width = width
        if height is not None:
            self._display_height = height
        self.rebuild()

    def rebuild(self) -> RenderSurface:
        """
        Discard the raster and regenerate it by replaying the history.

        The new raster is pre-sized for the previous line count. The
        decoder state the caller sees afterwards is the state before the
        rebuild.

        Returns:
            The new surface
        """
        if self._surface is not None:
            self._last_line_count = self._surface.line_count
        live_state = self._decoder.state.copy()

        self._surface = RenderSurface.build(
            self.config,
            self._display_width,
            self._display_height,
            sized_for_lines=max(self._last_line_count, self.config.initial_lines),
        )
        logger.debug(
            "Rebuilding paper at zoom %d from %d bytes",
            self._surface.zoom, len(self._history),
        )

        self._decoder = Decoder(self._origin_state)
        self._replaying = True
        try:
            # Iterate over snapshots: eviction may trim the history
            self._feed(bytes(self._history), frozenset(self._reset_offsets))
        finally:
            self._replaying = False
            self._decoder = Decoder(live_state)

        return self._surface

    # =========================================================================
    # Output
    # =========================================================================

    def to_png(self) -> bytes:
        return self.surface.to_png()

    def save_png(self, path: Union[str, Path]) -> Path:
        """
        Write the paper to a PNG file.

        Returns:
            The path written
        """
        path = Path(path)
        path.write_bytes(self.to_png())
        logger.info("Wrote %dx%d paper image to %s", self.surface.width, self.surface.height, path)
        return path

    # =========================================================================
    # Internals
    # =========================================================================

    def _feed(self, data: bytes, resets: FrozenSet[int] = frozenset()) -> None:
        for offset, byte in enumerate(data):
            if offset in resets:
                self._decoder.reset()
            for action in self._decoder.decode(byte):
                self._apply(action)

    def _apply(self, action: Action) -> None:
        surface = self._surface

        if isinstance(action, DrawGlyph):
            surface.draw_glyph(action.code, action.code_page, action.expanded, action.underline)
        elif isinstance(action, DrawGraphicsColumn):
            surface.draw_graphics_column(action.mask)
        elif isinstance(action, (LineFeed, EndOfLine)):
            if surface.line_feed():
                self._drop_first_line()
        elif isinstance(action, SelfTest):
            if not self._replaying:
                for listener in self._self_test_listeners:
                    listener()
        # Mode changes are already applied by the decoder

    def _drop_first_line(self) -> None:
        for index, byte in enumerate(self._history):
            if byte in LINE_TERMINATORS:
                dropped = bytes(self._history[:index + 1])
                del self._history[:index + 1]

                # Carry the mode changes made on the dropped line forward
                decoder = Decoder(self._origin_state)
                for offset, dropped_byte in enumerate(dropped):
                    if offset in self._reset_offsets:
                        decoder.reset()
                    decoder.decode(dropped_byte)
                if len(dropped) in self._reset_offsets:
                    decoder.reset()
                self._origin_state = decoder.state.copy()
                self._reset_offsets = [
                    offset - len(dropped)
                    for offset in self._reset_offsets
                    if offset > len(dropped)
                ]
                return

        # History is left unchanged; the raster has still lost its top line
        logger.warning(
            "Evicted a raster line but found no line terminator in %d bytes of history",
            len(self._history),
        )
