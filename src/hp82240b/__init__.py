"""
HP82240B - Infrared Thermal Printer Emulator
============================================

This package emulates the HP82240B, the 24-column infrared thermal printer
used with HP calculators. It decodes the printer's byte stream and renders
it onto virtual paper that can be zoomed and exported as PNG.

Main Components
---------------
- **printer**: protocol decoder, font tables, render surface and paper log
- **comms**: serial port capture from an IR or serial bridge
- **cli**: the ``hp82240b`` command

Quick Start
-----------
    >>> from hp82240b import Paper
    >>> paper = Paper()
    >>> paper.append(b"HELLO\\n")
    30
    >>> paper.save_png("hello.png")

Or use the command-line tool:
    $ hp82240b render printout.bin -o printout.png

Version History
---------------
1.0.0 - Initial release with decoder, renderer, eviction and serial capture
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hp82240b.config import PaperConfig
from hp82240b.errors import (
    CommsError,
    ConfigurationError,
    ConnectionError,
    PrinterError,
)
from hp82240b.printer import (
    CodePage,
    Decoder,
    DecoderState,
    Paper,
    RenderSurface,
)

__all__ = [
    "__version__",
    "PaperConfig",
    "PrinterError",
    "ConfigurationError",
    "CommsError",
    "ConnectionError",
    "CodePage",
    "Decoder",
    "DecoderState",
    "Paper",
    "RenderSurface",
]
