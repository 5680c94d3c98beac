"""
HP82240B Protocol Decoder
=========================

Turns the byte stream sent to the printer into drawing and control actions.

The protocol is small:

- bytes 32-255 print a character from the active code page
- byte 10 (end of line) and byte 4 (line feed) advance the paper one line
- byte 27 (escape) turns the next byte into a command
- other bytes below 32 are ignored

Escape commands::

    ESC 255   reset printer (code page, underline, expanded)
    ESC 254   self test
    ESC 253   expanded characters on
    ESC 252   expanded characters off
    ESC 251   underline on
    ESC 250   underline off
    ESC 249   select ECMA-94 code page
    ESC 248   select Roman8 code page
    ESC n     n <= 166: the next n bytes are graphics columns

A graphics byte is an 8-dot column, bit 0 at the top. Graphics bytes are
never interpreted as text or commands.

The decoder is total: every byte value is meaningful in every state, and
unknown commands are silently dropped.

Example:
    >>> decoder = Decoder()
    >>> decoder.decode_bytes(b"Hi\\n")
    [DrawGlyph(code=72, ...), DrawGlyph(code=105, ...), EndOfLine()]

Copyright (c) 2026 hp82240b contributors
"""

import logging
from dataclasses import dataclass, replace
from typing import Final, Iterable, List, Optional, Union

from .font import CodePage, FIRST_PRINTABLE_CHAR

logger = logging.getLogger(__name__)

# =============================================================================
# PROTOCOL CONSTANTS
# =============================================================================

LINE_FEED: Final[int] = 4
END_OF_LINE: Final[int] = 10
ESCAPE: Final[int] = 27

RESET_PRINTER: Final[int] = 255
SELF_TEST: Final[int] = 254
USE_EXPANDED_CHARACTERS: Final[int] = 253
USE_NORMAL_CHARACTERS: Final[int] = 252
START_UNDERLINING: Final[int] = 251
STOP_UNDERLINING: Final[int] = 250
USE_ECMA94: Final[int] = 249
USE_ROMAN8: Final[int] = 248
GRAPHICS_MAX: Final[int] = 166

LINE_TERMINATORS: Final[frozenset] = frozenset((END_OF_LINE, LINE_FEED))

# =============================================================================
# ACTIONS
# =============================================================================


@dataclass(frozen=True)
class DrawGlyph:
    """Print one character with the attributes in force when it arrived."""
    code: int
    code_page: CodePage = CodePage.ROMAN8
    expanded: bool = False
    underline: bool = False

    def describe(self) -> str:
        flags = []
        if self.expanded:
            flags.append("expanded")
        if self.underline:
            flags.append("underline")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"glyph {self.code} ({self.code_page.name}){suffix}"


@dataclass(frozen=True)
class DrawGraphicsColumn:
    """Print one 8-dot graphics column."""
    mask: int

    def describe(self) -> str:
        return f"graphics {self.mask:08b}"


@dataclass(frozen=True)
class LineFeed:
    """Advance one line (byte 4)."""

    def describe(self) -> str:
        return "line feed"


@dataclass(frozen=True)
class EndOfLine:
    """End of line (byte 10): line feed plus carriage return."""

    def describe(self) -> str:
        return "end of line"


@dataclass(frozen=True)
class ResetPrinter:
    def describe(self) -> str:
        return "reset printer"


@dataclass(frozen=True)
class SelfTest:
    def describe(self) -> str:
        return "self test"


@dataclass(frozen=True)
class SetExpanded:
    enabled: bool

    def describe(self) -> str:
        return f"expanded {'on' if self.enabled else 'off'}"


@dataclass(frozen=True)
class SetUnderline:
    enabled: bool

    def describe(self) -> str:
        return f"underline {'on' if self.enabled else 'off'}"


@dataclass(frozen=True)
class SetCodePage:
    code_page: CodePage

    def describe(self) -> str:
        return f"code page {self.code_page.name}"


Action = Union[
    DrawGlyph,
    DrawGraphicsColumn,
    LineFeed,
    EndOfLine,
    ResetPrinter,
    SelfTest,
    SetExpanded,
    SetUnderline,
    SetCodePage,
]

# =============================================================================
# DECODER STATE
# =============================================================================


@dataclass
class DecoderState:
    """
    Complete decoder state.

    Invariant: graphics_remaining > 0 implies escape_pending is False.

    Attributes:
        escape_pending: Previous byte was ESC
        graphics_remaining: Graphics bytes still expected
        code_page: Active character set
        underline: Underline mode
        expanded: Double-width mode
    """
    escape_pending: bool = False
    graphics_remaining: int = 0
    code_page: CodePage = CodePage.ROMAN8
    underline: bool = False
    expanded: bool = False

    def copy(self) -> "DecoderState":
        return replace(self)


class Decoder:
    """
    HP82240B byte stream decoder.

    One decoder belongs to one printer session. The state is updated as
    each byte is decoded, so a DrawGlyph always carries the attributes that
    were in force when its byte arrived.

    Example:
        >>> decoder = Decoder()
        >>> decoder.decode(27)
        []
        >>> decoder.decode(251)
        [SetUnderline(enabled=True)]
        >>> decoder.state.underline
        True
    """

    def __init__(self, state: Optional[DecoderState] = None):
        """
        Initialize decoder.

        Args:
            state: Starting state (copied); defaults to power-on state
        """
        self._state = state.copy() if state is not None else DecoderState()

    @property
    def state(self) -> DecoderState:
        """Current decoder state (live object, do not mutate)."""
        return self._state

    def reset(self) -> None:
        """Return to power-on state (same as ESC 255)."""
        self._state = DecoderState()

    def decode(self, byte: int) -> List[Action]:
        """
        Decode one byte.

        Args:
            byte: Byte value (0-255)

        Returns:
            Zero or more actions, in order

        Raises:
            ValueError: If byte is outside 0-255
        """
        if not 0 <= byte <= 255:
            raise ValueError(f"Byte value out of range: {byte}")

        state = self._state

        if state.graphics_remaining > 0:
            state.graphics_remaining -= 1
            return [DrawGraphicsColumn(byte)]

        if state.escape_pending:
            state.escape_pending = False
            return self._decode_escape(byte)

        if byte == END_OF_LINE:
            return [EndOfLine()]
        if byte == LINE_FEED:
            return [LineFeed()]
        if byte == ESCAPE:
            state.escape_pending = True
            return []
        if byte >= FIRST_PRINTABLE_CHAR:
            return [DrawGlyph(byte, state.code_page, state.expanded, state.underline)]
        return []

    def decode_bytes(self, data: Iterable[int]) -> List[Action]:
        """Decode a byte sequence and return all actions in order."""
        actions: List[Action] = []
        for byte in data:
            actions.extend(self.decode(byte))
        return actions

    def _decode_escape(self, command: int) -> List[Action]:
        state = self._state

        if command == RESET_PRINTER:
            self.reset()
            logger.debug("ESC %d: reset printer", command)
            return [ResetPrinter()]
        if command == SELF_TEST:
            logger.debug("ESC %d: self test", command)
            return [SelfTest()]
        if command == USE_EXPANDED_CHARACTERS:
            state.expanded = True
            return [SetExpanded(True)]
        if command == USE_NORMAL_CHARACTERS:
            state.expanded = False
            return [SetExpanded(False)]
        if command == START_UNDERLINING:
            state.underline = True
            return [SetUnderline(True)]
        if command == STOP_UNDERLINING:
            state.underline = False
            return [SetUnderline(False)]
        if command == USE_ECMA94:
            state.code_page = CodePage.ECMA94
            return [SetCodePage(CodePage.ECMA94)]
        if command == USE_ROMAN8:
            state.code_page = CodePage.ROMAN8
            return [SetCodePage(CodePage.ROMAN8)]
        if command <= GRAPHICS_MAX:
            state.graphics_remaining = command
            logger.debug("ESC %d: graphics block", command)
            return []

        # 167-247: no assigned meaning
        logger.debug("ESC %d: ignored", command)
        return []
