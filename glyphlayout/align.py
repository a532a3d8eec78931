"""Horizontal and vertical alignment preferences for positioning and bounds."""

from __future__ import annotations

import enum
import math


def _floor(value: float) -> float:
    return float(math.floor(value)) if math.isfinite(value) else value


def _ceil(value: float) -> float:
    return float(math.ceil(value)) if math.isfinite(value) else value


class HorizontalAlign(enum.Enum):
    """Horizontal alignment of glyphs and bounds relative to the render position."""

    LEFT = "left"
    """Leftmost character starts at the render position; bounds extend rightwards."""
    CENTER = "center"
    """Line is centred on the render position; bounds extend equally both ways."""
    RIGHT = "right"
    """Rightmost character ends at the render position; bounds extend leftwards."""

    def x_bounds(self, screen_x: float, bound_w: float) -> tuple[float, float]:
        """The (min, max) x range of the bounds, widened to whole pixels."""
        if self is HorizontalAlign.LEFT:
            low, high = screen_x, screen_x + bound_w
        elif self is HorizontalAlign.CENTER:
            low, high = screen_x - bound_w / 2.0, screen_x + bound_w / 2.0
        else:
            low, high = screen_x - bound_w, screen_x
        return _floor(low), _ceil(high)


class VerticalAlign(enum.Enum):
    """Vertical alignment of glyphs and bounds relative to the render position."""

    TOP = "top"
    """Characters and bounds start below the render position and progress downwards."""
    CENTER = "center"
    """Characters and bounds centre on the render position."""
    BOTTOM = "bottom"
    """Characters and bounds start above the render position and progress upwards."""

    def y_bounds(self, screen_y: float, bound_h: float) -> tuple[float, float]:
        """The (min, max) y range of the bounds, widened to whole pixels."""
        if self is VerticalAlign.TOP:
            low, high = screen_y, screen_y + bound_h
        elif self is VerticalAlign.CENTER:
            low, high = screen_y - bound_h / 2.0, screen_y + bound_h / 2.0
        else:
            low, high = screen_y - bound_h, screen_y
        return _floor(low), _ceil(high)