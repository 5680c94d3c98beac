#!/usr/bin/env python3
"""
HP82240B Printer Emulator Demo
==============================

This script demonstrates how to use the printer emulator to:
1. Print text with underline and expanded characters
2. Switch code pages
3. Print a graphics block
4. Zoom the paper and save PNG images

Usage:
    python examples/printer_demo.py

Copyright (c) 2026 hp82240b contributors
"""

import math
from pathlib import Path

from hp82240b import Paper, PaperConfig

ESC = 27


def sine_wave(columns: int) -> bytes:
    """One 8-dot graphics column per x, with a single dot on a sine curve."""
    return bytes(
        1 << round(3.5 - 3.5 * math.sin(2 * math.pi * x / columns))
        for x in range(columns)
    )


def main():
    output_dir = Path("trash")
    output_dir.mkdir(exist_ok=True)

    # ==========================================================================
    # 1. Create a paper session
    # ==========================================================================
    # max_lines bounds the retained paper; older lines scroll off the top.

    paper = Paper(PaperConfig(max_lines=200))
    paper.add_listener(lambda y: print(f"  printed, paper now {y} px tall"))

    # ==========================================================================
    # 2. Text and attributes
    # ==========================================================================

    print("Printing text...")
    paper.append(b"HP82240B PRINTER\n")
    paper.append(bytes([ESC, 251]) + b"Underlined" + bytes([ESC, 250]) + b" normal\n")
    paper.append(bytes([ESC, 253]) + b"EXPANDED" + bytes([ESC, 252]) + b"\n")

    # ==========================================================================
    # 3. Code pages
    # ==========================================================================
    # The same bytes print different accented letters in Roman8 and ECMA-94.

    upper_half = bytes(range(0xC0, 0xD8))
    paper.append(b"Roman8:\n" + upper_half + b"\n")
    paper.append(bytes([ESC, 249]) + b"ECMA-94:\n" + upper_half + b"\n")
    paper.append(bytes([ESC, 248]))

    # ==========================================================================
    # 4. Graphics
    # ==========================================================================
    # ESC n announces n graphics columns (n <= 166).

    wave = sine_wave(160)
    paper.append(bytes([ESC, len(wave)]) + wave + b"\n")

    # ==========================================================================
    # 5. Save at two zoom levels
    # ==========================================================================

    paper.save_png(output_dir / "printer_zoom1.png")

    paper.on_display_width_changed(3 * paper.config.base_width)
    print(f"\nZoom {paper.zoom}: {paper.image.width}x{paper.image.height}")
    paper.save_png(output_dir / "printer_zoom3.png")

    print(f"\n{paper.line_count} lines, {len(paper.history)} bytes of history")


if __name__ == "__main__":
    main()
