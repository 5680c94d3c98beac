"""
HP82240B Character Font
=======================

Glyph tables for the two code pages the HP82240B understands:

- **Roman8**: HP's own 8-bit character set (printer default)
- **ECMA-94**: ISO Latin-1, selected with ESC 249

Glyph format
------------
Every glyph is 5 columns wide and 8 rows tall. A glyph is stored as a tuple
of 5 column masks; bit 0 is the top row, bit 7 the bottom (descender) row.
This is the same column orientation the printer uses for graphics bytes, so
text and graphics share one drawing routine.

Only byte values 32-255 have glyphs. A table is indexed directly with
``code - FIRST_PRINTABLE_CHAR``.

Table construction
------------------
The printable ASCII range (32-126) is identical in both code pages and is
stored literally below. The upper half is built once at import:

1. the byte is decoded with Python's ``hp_roman8`` or ``latin-1`` codec;
2. characters with a hand-drawn glyph (currency, ligatures, ...) use it;
3. accented letters are composed from the ASCII base letter plus an accent
   mark (capitals are shifted down one row to make room for the mark);
4. compatibility forms (ª, ², ...) fall back to their ASCII equivalent;
5. control and unassigned positions print blank or a hollow box.

Copyright (c) 2026 hp82240b contributors
"""

import unicodedata
from enum import IntEnum
from typing import Dict, Final, Tuple


class CodePage(IntEnum):
    """Character sets selectable with ESC 248 / ESC 249."""
    ROMAN8 = 0
    ECMA94 = 1


Glyph = Tuple[int, int, int, int, int]

CHARACTER_WIDTH: Final[int] = 5
CHARACTER_HEIGHT: Final[int] = 8
FIRST_PRINTABLE_CHAR: Final[int] = 32
GLYPH_COUNT: Final[int] = 256 - FIRST_PRINTABLE_CHAR

BLANK_GLYPH: Final[Glyph] = (0x00, 0x00, 0x00, 0x00, 0x00)
UNDEFINED_GLYPH: Final[Glyph] = (0x7F, 0x41, 0x41, 0x41, 0x7F)

# =============================================================================
# ASCII GLYPHS (32-126)
# =============================================================================

ASCII_GLYPHS: Final[Tuple[Glyph, ...]] = (
    (0x00, 0x00, 0x00, 0x00, 0x00),  # space
    (0x00, 0x00, 0x5F, 0x00, 0x00),  # !
    (0x00, 0x07, 0x00, 0x07, 0x00),  # "
    (0x14, 0x7F, 0x14, 0x7F, 0x14),  # #
    (0x24, 0x2A, 0x7F, 0x2A, 0x12),  # $
    (0x23, 0x13, 0x08, 0x64, 0x62),  # %
    (0x36, 0x49, 0x55, 0x22, 0x50),  # &
    (0x00, 0x05, 0x03, 0x00, 0x00),  # '
    (0x00, 0x1C, 0x22, 0x41, 0x00),  # (
    (0x00, 0x41, 0x22, 0x1C, 0x00),  # )
    (0x08, 0x2A, 0x1C, 0x2A, 0x08),  # *
    (0x08, 0x08, 0x3E, 0x08, 0x08),  # +
    (0x00, 0x50, 0x30, 0x00, 0x00),  # ,
    (0x08, 0x08, 0x08, 0x08, 0x08),  # -
    (0x00, 0x60, 0x60, 0x00, 0x00),  # .
    (0x20, 0x10, 0x08, 0x04, 0x02),  # /
    (0x3E, 0x51, 0x49, 0x45, 0x3E),  # 0
    (0x00, 0x42, 0x7F, 0x40, 0x00),  # 1
    (0x42, 0x61, 0x51, 0x49, 0x46),  # 2
    (0x21, 0x41, 0x45, 0x4B, 0x31),  # 3
    (0x18, 0x14, 0x12, 0x7F, 0x10),  # 4
    (0x27, 0x45, 0x45, 0x45, 0x39),  # 5
    (0x3C, 0x4A, 0x49, 0x49, 0x30),  # 6
    (0x01, 0x71, 0x09, 0x05, 0x03),  # 7
    (0x36, 0x49, 0x49, 0x49, 0x36),  # 8
    (0x06, 0x49, 0x49, 0x29, 0x1E),  # 9
    (0x00, 0x36, 0x36, 0x00, 0x00),  # :
    (0x00, 0x56, 0x36, 0x00, 0x00),  # ;
    (0x08, 0x14, 0x22, 0x41, 0x00),  # <
    (0x14, 0x14, 0x14, 0x14, 0x14),  # =
    (0x00, 0x41, 0x22, 0x14, 0x08),  # >
    (0x02, 0x01, 0x51, 0x09, 0x06),  # ?
    (0x32, 0x49, 0x79, 0x41, 0x3E),  # @
    (0x7E, 0x11, 0x11, 0x11, 0x7E),  # A
    (0x7F, 0x49, 0x49, 0x49, 0x36),  # B
    (0x3E, 0x41, 0x41, 0x41, 0x22),  # C
    (0x7F, 0x41, 0x41, 0x22, 0x1C),  # D
    (0x7F, 0x49, 0x49, 0x49, 0x41),  # E
    (0x7F, 0x09, 0x09, 0x01, 0x01),  # F
    (0x3E, 0x41, 0x41, 0x51, 0x32),  # G
    (0x7F, 0x08, 0x08, 0x08, 0x7F),  # H
    (0x00, 0x41, 0x7F, 0x41, 0x00),  # I
    (0x20, 0x40, 0x41, 0x3F, 0x01),  # J
    (0x7F, 0x08, 0x14, 0x22, 0x41),  # K
    (0x7F, 0x40, 0x40, 0x40, 0x40),  # L
    (0x7F, 0x02, 0x04, 0x02, 0x7F),  # M
    (0x7F, 0x04, 0x08, 0x10, 0x7F),  # N
    (0x3E, 0x41, 0x41, 0x41, 0x3E),  # O
    (0x7F, 0x09, 0x09, 0x09, 0x06),  # P
    (0x3E, 0x41, 0x51, 0x21, 0x5E),  # Q
    (0x7F, 0x09, 0x19, 0x29, 0x46),  # R
    (0x46, 0x49, 0x49, 0x49, 0x31),  # S
    (0x01, 0x01, 0x7F, 0x01, 0x01),  # T
    (0x3F, 0x40, 0x40, 0x40, 0x3F),  # U
    (0x1F, 0x20, 0x40, 0x20, 0x1F),  # V
    (0x7F, 0x20, 0x18, 0x20, 0x7F),  # W
    (0x63, 0x14, 0x08, 0x14, 0x63),  # X
    (0x03, 0x04, 0x78, 0x04, 0x03),  # Y
    (0x61, 0x51, 0x49, 0x45, 0x43),  # Z
    (0x00, 0x7F, 0x41, 0x41, 0x00),  # [
    (0x02, 0x04, 0x08, 0x10, 0x20),  # backslash
    (0x00, 0x41, 0x41, 0x7F, 0x00),  # ]
    (0x04, 0x02, 0x01, 0x02, 0x04),  # ^
    (0x80, 0x80, 0x80, 0x80, 0x80),  # _
    (0x00, 0x01, 0x02, 0x04, 0x00),  # `
    (0x20, 0x54, 0x54, 0x54, 0x78),  # a
    (0x7F, 0x48, 0x44, 0x44, 0x38),  # b
    (0x38, 0x44, 0x44, 0x44, 0x20),  # c
    (0x38, 0x44, 0x44, 0x48, 0x7F),  # d
    (0x38, 0x54, 0x54, 0x54, 0x18),  # e
    (0x08, 0x7E, 0x09, 0x01, 0x02),  # f
    (0x18, 0xA4, 0xA4, 0xA4, 0x7C),  # g
    (0x7F, 0x08, 0x04, 0x04, 0x78),  # h
    (0x00, 0x44, 0x7D, 0x40, 0x00),  # i
    (0x40, 0x80, 0x84, 0x7D, 0x00),  # j
    (0x7F, 0x10, 0x28, 0x44, 0x00),  # k
    (0x00, 0x41, 0x7F, 0x40, 0x00),  # l
    (0x7C, 0x04, 0x18, 0x04, 0x78),  # m
    (0x7C, 0x08, 0x04, 0x04, 0x78),  # n
    (0x38, 0x44, 0x44, 0x44, 0x38),  # o
    (0xFC, 0x24, 0x24, 0x24, 0x18),  # p
    (0x18, 0x24, 0x24, 0x18, 0xFC),  # q
    (0x7C, 0x08, 0x04, 0x04, 0x08),  # r
    (0x48, 0x54, 0x54, 0x54, 0x20),  # s
    (0x04, 0x3F, 0x44, 0x40, 0x20),  # t
    (0x3C, 0x40, 0x40, 0x20, 0x7C),  # u
    (0x1C, 0x20, 0x40, 0x20, 0x1C),  # v
    (0x3C, 0x40, 0x30, 0x40, 0x3C),  # w
    (0x44, 0x28, 0x10, 0x28, 0x44),  # x
    (0x4C, 0x90, 0x90, 0x90, 0x7C),  # y
    (0x44, 0x64, 0x54, 0x4C, 0x44),  # z
    (0x00, 0x08, 0x36, 0x41, 0x00),  # {
    (0x00, 0x00, 0x7F, 0x00, 0x00),  # |
    (0x00, 0x41, 0x36, 0x08, 0x00),  # }
    (0x08, 0x04, 0x08, 0x10, 0x08),  # ~
)

# Accented i and j are drawn without their dot
DOTLESS_I: Final[Glyph] = (0x00, 0x44, 0x7C, 0x40, 0x00)

# =============================================================================
# ACCENT MARKS
# =============================================================================
# Marks above the letter live in rows 0-2 (lowercase x-height starts at row 2).
# The cedilla lives in row 7, below the baseline.

_GRAVE: Final[Glyph] = (0x00, 0x01, 0x02, 0x00, 0x00)
_ACUTE: Final[Glyph] = (0x00, 0x00, 0x02, 0x01, 0x00)
_CIRCUMFLEX: Final[Glyph] = (0x00, 0x02, 0x01, 0x02, 0x00)
_TILDE: Final[Glyph] = (0x02, 0x01, 0x02, 0x01, 0x00)
_MACRON: Final[Glyph] = (0x01, 0x01, 0x01, 0x01, 0x01)
_DIAERESIS: Final[Glyph] = (0x00, 0x01, 0x00, 0x01, 0x00)
_RING: Final[Glyph] = (0x00, 0x02, 0x05, 0x02, 0x00)
_CARON: Final[Glyph] = (0x00, 0x01, 0x02, 0x01, 0x00)
_CEDILLA: Final[Glyph] = (0x00, 0x00, 0x80, 0x80, 0x00)

# Combining character -> mark
ACCENTS: Final[Dict[str, Glyph]] = {
    "\u0300": _GRAVE,
    "\u0301": _ACUTE,
    "\u0302": _CIRCUMFLEX,
    "\u0303": _TILDE,
    "\u0304": _MACRON,
    "\u0308": _DIAERESIS,
    "\u030A": _RING,
    "\u030C": _CARON,
    "\u0327": _CEDILLA,
}

# =============================================================================
# HAND-DRAWN SYMBOLS
# =============================================================================

SYMBOL_GLYPHS: Final[Dict[str, Glyph]] = {
    "¡": (0x00, 0x00, 0x7D, 0x00, 0x00),  # inverted !
    "¢": (0x38, 0x44, 0xFE, 0x44, 0x28),  # cent
    "£": (0x48, 0x7E, 0x49, 0x41, 0x42),  # pound
    "₤": (0x48, 0x7E, 0x49, 0x41, 0x42),  # lira (Roman8)
    "¤": (0x22, 0x1C, 0x14, 0x1C, 0x22),  # currency sign
    "¥": (0x29, 0x2A, 0x7C, 0x2A, 0x29),  # yen
    "¦": (0x00, 0x00, 0x77, 0x00, 0x00),  # broken bar
    "§": (0x0A, 0x55, 0x55, 0x55, 0x28),  # section
    "«": (0x08, 0x14, 0x2A, 0x14, 0x22),  # left guillemet
    "¬": (0x08, 0x08, 0x08, 0x08, 0x38),  # not
    "°": (0x00, 0x06, 0x09, 0x09, 0x06),  # degree
    "±": (0x44, 0x44, 0x5F, 0x44, 0x44),  # plus-minus
    "µ": (0xFC, 0x20, 0x20, 0x10, 0x3C),  # micro
    "¶": (0x06, 0x0F, 0x7F, 0x01, 0x7F),  # pilcrow
    "·": (0x00, 0x00, 0x08, 0x00, 0x00),  # middle dot
    "»": (0x22, 0x14, 0x2A, 0x14, 0x08),  # right guillemet
    "¿": (0x30, 0x48, 0x45, 0x40, 0x20),  # inverted ?
    "Æ": (0x7E, 0x09, 0x7F, 0x49, 0x41),  # AE
    "Ð": (0x08, 0x7F, 0x49, 0x41, 0x3E),  # Eth
    "×": (0x22, 0x14, 0x08, 0x14, 0x22),  # multiply
    "Ø": (0x5E, 0x31, 0x49, 0x46, 0x3D),  # O slash
    "Þ": (0x7F, 0x22, 0x22, 0x22, 0x1C),  # Thorn
    "ß": (0xFE, 0x01, 0x49, 0x4E, 0x30),  # sharp s
    "æ": (0x20, 0x54, 0x78, 0x54, 0x58),  # ae
    "ð": (0x38, 0x45, 0x46, 0x45, 0x3A),  # eth
    "÷": (0x08, 0x08, 0x2A, 0x08, 0x08),  # divide
    "ø": (0x58, 0x64, 0x54, 0x4C, 0x34),  # o slash
    "þ": (0xFF, 0x28, 0x44, 0x44, 0x38),  # thorn
    "ƒ": (0x40, 0x88, 0x7E, 0x09, 0x02),  # florin
    "—": (0x08, 0x08, 0x08, 0x08, 0x08),  # em dash
    "■": (0x3E, 0x3E, 0x3E, 0x3E, 0x3E),  # black square
    # Spacing accents print the bare mark
    "´": _ACUTE,
    "¨": _DIAERESIS,
    "¯": _MACRON,
    "¸": _CEDILLA,
    "ˋ": _GRAVE,
    "ˆ": _CIRCUMFLEX,
    "˜": _TILDE,
}

# Codec used to map a byte to the character it stands for
CODEC_NAMES: Final[Dict[CodePage, str]] = {
    CodePage.ROMAN8: "hp_roman8",
    CodePage.ECMA94: "latin-1",
}


def _ascii_glyph(char: str) -> Glyph:
    return ASCII_GLYPHS[ord(char) - FIRST_PRINTABLE_CHAR]


def _is_ascii_printable(char: str) -> bool:
    return len(char) == 1 and FIRST_PRINTABLE_CHAR <= ord(char) < 127


def compose_accented(base: str, mark: Glyph) -> Glyph:
    """
    Combine an ASCII letter with an accent mark.

    Lowercase letters leave rows 0-1 free, so the mark is simply OR-ed in.
    Capitals fill rows 0-6: they are shifted down one row and the mark is
    folded into row 0. The cedilla sits below the baseline and never needs
    a shift.

    Args:
        base: Single ASCII letter
        mark: Accent mark columns

    Returns:
        Composed glyph
    """
    letter = DOTLESS_I if base == "i" else _ascii_glyph(base)
    below = mark == _CEDILLA
    if below or not base.isupper():
        return tuple(col | accent for col, accent in zip(letter, mark))
    return tuple(
        ((col << 1) & 0xFF) | (0x01 if accent else 0x00)
        for col, accent in zip(letter, mark)
    )


def glyph_for_char(char: str) -> Glyph:
    """
    Return the glyph used to print a Unicode character.

    Args:
        char: Single character (as decoded from a code page)

    Returns:
        5-column glyph; UNDEFINED_GLYPH if nothing suitable exists
    """
    if _is_ascii_printable(char):
        return _ascii_glyph(char)
    if char in SYMBOL_GLYPHS:
        return SYMBOL_GLYPHS[char]
    if unicodedata.category(char) in ("Cc", "Zs"):
        return BLANK_GLYPH

    decomposed = unicodedata.normalize("NFD", char)
    if (
        len(decomposed) == 2
        and _is_ascii_printable(decomposed[0])
        and decomposed[1] in ACCENTS
    ):
        return compose_accented(decomposed[0], ACCENTS[decomposed[1]])

    compatible = unicodedata.normalize("NFKD", char)
    if _is_ascii_printable(compatible):
        return _ascii_glyph(compatible)

    return UNDEFINED_GLYPH


def decode_char(code_page: CodePage, code: int) -> str:
    """Return the character a byte stands for in a code page."""
    return bytes([code]).decode(CODEC_NAMES[code_page], errors="replace")


def build_font(code_page: CodePage) -> Tuple[Glyph, ...]:
    """
    Build the glyph table for a code page.

    Returns:
        Tuple of GLYPH_COUNT glyphs, index 0 is byte 32
    """
    return tuple(
        glyph_for_char(decode_char(code_page, code))
        for code in range(FIRST_PRINTABLE_CHAR, 256)
    )


ROMAN8_FONT: Final[Tuple[Glyph, ...]] = build_font(CodePage.ROMAN8)
ECMA94_FONT: Final[Tuple[Glyph, ...]] = build_font(CodePage.ECMA94)

FONTS: Final[Dict[CodePage, Tuple[Glyph, ...]]] = {
    CodePage.ROMAN8: ROMAN8_FONT,
    CodePage.ECMA94: ECMA94_FONT,
}


def get_glyph(code_page: CodePage, code: int) -> Glyph:
    """
    Look up the glyph for a printable byte.

    Args:
        code_page: Active character set
        code: Byte value (32-255)

    Returns:
        5-column glyph

    Raises:
        ValueError: If code is not printable
    """
    if not FIRST_PRINTABLE_CHAR <= code <= 255:
        raise ValueError(f"Code {code} has no glyph (printable range is 32-255)")
    return FONTS[code_page][code - FIRST_PRINTABLE_CHAR]
