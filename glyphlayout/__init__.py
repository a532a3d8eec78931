"""Glyph layout: line breaking, wrapping and alignment of positioned glyphs."""

__version__ = "0.1.0"

__all__ = ["align", "layout", "linebreak", "primitives", "text"]