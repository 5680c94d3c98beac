"""
Protocol Decoder Unit Tests
===========================

Tests for the HP82240B byte stream decoder: text, line terminators, escape
commands and graphics blocks.
"""

import pytest

from hp82240b.printer import (
    CodePage,
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


@pytest.fixture
def decoder():
    """Fresh decoder in power-on state."""
    return Decoder()


# =============================================================================
# Text Tests
# =============================================================================

class TestText:
    """Test printable bytes and line terminators."""

    def test_hi_newline(self, decoder):
        """[72, 105, 10] prints H, i and ends the line."""
        actions = decoder.decode_bytes([72, 105, 10])
        assert actions == [DrawGlyph(72), DrawGlyph(105), EndOfLine()]

    def test_line_feed(self, decoder):
        assert decoder.decode(4) == [LineFeed()]

    def test_glyph_count_matches_printable_bytes(self, decoder):
        """Without control bytes, every byte >= 32 is one glyph."""
        data = bytes(range(32, 256))
        actions = decoder.decode_bytes(data)
        assert len(actions) == len(data)
        assert [a.code for a in actions] == list(data)

    @pytest.mark.parametrize("byte", [0, 1, 3, 5, 9, 11, 13, 26, 28, 31])
    def test_other_controls_ignored(self, decoder, byte):
        """Bytes below 32 other than 4, 10 and 27 do nothing."""
        assert decoder.decode(byte) == []
        assert decoder.state == DecoderState()

    @pytest.mark.parametrize("byte", [-1, 256, 1000])
    def test_out_of_range_raises(self, decoder, byte):
        with pytest.raises(ValueError):
            decoder.decode(byte)


# =============================================================================
# Escape Command Tests
# =============================================================================

class TestEscape:
    """Test ESC commands."""

    def test_escape_alone_emits_nothing(self, decoder):
        assert decoder.decode(27) == []
        assert decoder.state.escape_pending is True

    @pytest.mark.parametrize("command, action", [
        (254, SelfTest()),
        (253, SetExpanded(True)),
        (252, SetExpanded(False)),
        (251, SetUnderline(True)),
        (250, SetUnderline(False)),
        (249, SetCodePage(CodePage.ECMA94)),
        (248, SetCodePage(CodePage.ROMAN8)),
    ])
    def test_commands(self, decoder, command, action):
        assert decoder.decode_bytes([27, command]) == [action]
        assert decoder.state.escape_pending is False

    def test_attributes_apply_to_following_glyphs(self, decoder):
        """A glyph carries the attributes in force when it arrived."""
        actions = decoder.decode_bytes([65, 27, 251, 27, 253, 27, 249, 66])
        assert actions[0] == DrawGlyph(65)
        assert actions[-1] == DrawGlyph(66, CodePage.ECMA94, expanded=True, underline=True)

    def test_reset_restores_defaults(self, decoder):
        """ESC 255 clears underline, expanded and code page."""
        decoder.decode_bytes([27, 251, 27, 253, 27, 249])
        assert decoder.decode_bytes([27, 255]) == [ResetPrinter()]
        assert decoder.state == DecoderState()
        assert decoder.decode(97) == [DrawGlyph(97)]

    def test_reset_method(self, decoder):
        decoder.decode_bytes([27, 251, 27])
        decoder.reset()
        assert decoder.state == DecoderState()

    @pytest.mark.parametrize("command", [167, 200, 247])
    def test_unassigned_commands_ignored(self, decoder, command):
        """ESC 167-247 are dropped and the next byte prints normally."""
        assert decoder.decode_bytes([27, command, 65]) == [DrawGlyph(65)]

    def test_escape_escape(self, decoder):
        """ESC ESC starts a 27-column graphics block."""
        decoder.decode_bytes([27, 27])
        assert decoder.state.graphics_remaining == 27
        assert decoder.state.escape_pending is False


# =============================================================================
# Graphics Tests
# =============================================================================

class TestGraphics:
    """Test ESC n graphics blocks."""

    def test_three_columns(self, decoder):
        """[27, 3, 1, 2, 4] gives 3 columns and no glyph or line feed."""
        actions = decoder.decode_bytes([27, 3, 1, 2, 4])
        assert actions == [
            DrawGraphicsColumn(1),
            DrawGraphicsColumn(2),
            DrawGraphicsColumn(4),
        ]

    def test_graphics_bytes_not_interpreted(self, decoder):
        """Control and escape bytes inside a block are column data."""
        actions = decoder.decode_bytes([27, 4, 10, 27, 255, 65])
        assert actions == [
            DrawGraphicsColumn(10),
            DrawGraphicsColumn(27),
            DrawGraphicsColumn(255),
            DrawGraphicsColumn(65),
        ]
        assert decoder.state.graphics_remaining == 0

    def test_zero_length_block(self, decoder):
        """ESC 0 is an empty block."""
        assert decoder.decode_bytes([27, 0, 65]) == [DrawGlyph(65)]

    def test_maximum_block(self, decoder):
        decoder.decode_bytes([27, 166])
        assert decoder.state.graphics_remaining == 166

    def test_block_ends_after_count(self, decoder):
        assert decoder.decode_bytes([27, 1, 65, 65]) == [
            DrawGraphicsColumn(65),
            DrawGlyph(65),
        ]


# =============================================================================
# Totality Tests
# =============================================================================

class TestTotality:
    """Every byte in every state is accepted."""

    @pytest.mark.parametrize("prefix", [[], [27], [27, 5], [27, 251], [27, 249]])
    def test_every_byte_decodes(self, prefix):
        for byte in range(256):
            decoder = Decoder()
            decoder.decode_bytes(prefix)
            decoder.decode(byte)
            state = decoder.state
            assert not (state.graphics_remaining > 0 and state.escape_pending)

    def test_initial_state_is_copied(self):
        """A decoder never shares its state with the caller."""
        state = DecoderState(underline=True)
        decoder = Decoder(state)
        decoder.decode_bytes([27, 250])
        assert state.underline is True
        assert decoder.state.underline is False


# =============================================================================
# Describe Tests
# =============================================================================

class TestDescribe:
    """Test the one-line action descriptions."""

    def test_glyph(self):
        assert DrawGlyph(72).describe() == "glyph 72 (ROMAN8)"

    def test_glyph_with_flags(self):
        action = DrawGlyph(72, CodePage.ECMA94, expanded=True, underline=True)
        assert action.describe() == "glyph 72 (ECMA94) [expanded, underline]"

    def test_graphics(self):
        assert DrawGraphicsColumn(5).describe() == "graphics 00000101"
