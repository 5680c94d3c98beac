"""
HP82240B Printer Core
=====================

- **font**: 5x8 glyph tables for the Roman8 and ECMA-94 code pages
- **decoder**: byte stream to drawing/control actions
- **surface**: zoomable Pillow raster with print head cursor
- **paper**: byte history, eviction and rebuild
"""

from hp82240b.printer.decoder import (
    Action,
    Decoder,
    DecoderState,
    DrawGlyph,
    DrawGraphicsColumn,
    EndOfLine,
    LineFeed,
    ResetPrinter,
    SelfTest,
    SetCodePage,
    SetExpanded,
    SetUnderline,
)
from hp82240b.printer.font import CodePage, get_glyph
from hp82240b.printer.paper import Paper
from hp82240b.printer.surface import Cursor, RenderSurface

__all__ = [
    "Action",
    "CodePage",
    "Cursor",
    "Decoder",
    "DecoderState",
    "DrawGlyph",
    "DrawGraphicsColumn",
    "EndOfLine",
    "LineFeed",
    "Paper",
    "RenderSurface",
    "ResetPrinter",
    "SelfTest",
    "SetCodePage",
    "SetExpanded",
    "SetUnderline",
    "get_glyph",
]
