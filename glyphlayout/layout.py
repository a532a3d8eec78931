"""Built-in glyph positioning: single-line and wrapping layouts."""

from __future__ import annotations

import abc
import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from .align import HorizontalAlign, VerticalAlign
from .linebreak import BuiltInLineBreaker, LineBreaker
from .primitives import (
    Font,
    GlyphChange,
    Point,
    Rect,
    SectionGeometry,
    SectionGlyph,
    SectionText,
    as_scaled,
)
from .text import characters, lines, words


def _shifted(sg: SectionGlyph, offset: Point) -> SectionGlyph:
    return replace(sg, glyph=replace(sg.glyph, position=sg.glyph.position + offset))


class GlyphPositioner(abc.ABC):
    """Calculates positioned glyphs for sections of text."""

    @abc.abstractmethod
    def calculate_glyphs(
        self,
        fonts: Sequence[Font],
        geometry: SectionGeometry,
        sections: Sequence[SectionText],
    ) -> list[SectionGlyph]:
        """The positioned glyphs to render; the same arguments give the same result."""

    @abc.abstractmethod
    def bounds_rect(self, geometry: SectionGeometry) -> Rect:
        """The screen rectangle for the render position and bounds of this layout."""

    def recalculate_glyphs(
        self,
        previous: Iterable[SectionGlyph],
        change: GlyphChange,
        fonts: Sequence[Font],
        geometry: SectionGeometry,
        sections: Sequence[SectionText],
    ) -> list[SectionGlyph]:
        """Recalculate glyphs after a change; by default a full calculation."""
        return self.calculate_glyphs(fonts, geometry, sections)


class LayoutKind(enum.Enum):
    """Whether text stays on one line or wraps onto several."""

    SINGLE_LINE = "single_line"
    """One line; a hard break or reaching the width bound ends it."""
    WRAP = "wrap"
    """Several lines; hard breaks and the width bound start new lines."""


@dataclass(frozen=True)
class Layout(GlyphPositioner):
    """The built-in layouts, with a line breaker and alignment preferences."""

    kind: LayoutKind = LayoutKind.WRAP
    line_breaker: LineBreaker = BuiltInLineBreaker.UNICODE
    h_align: HorizontalAlign = HorizontalAlign.LEFT
    v_align: VerticalAlign = VerticalAlign.TOP

    @classmethod
    def default_single_line(cls) -> Layout:
        return cls(kind=LayoutKind.SINGLE_LINE)

    @classmethod
    def default_wrap(cls) -> Layout:
        return cls(kind=LayoutKind.WRAP)

    def with_h_align(self, h_align: HorizontalAlign) -> Layout:
        return replace(self, h_align=h_align)

    def with_v_align(self, v_align: VerticalAlign) -> Layout:
        return replace(self, v_align=v_align)

    def with_line_breaker(self, line_breaker: LineBreaker) -> Layout:
        return replace(self, line_breaker=line_breaker)

    def _lines(self, fonts, sections, width_bound):
        return lines(words(characters(fonts, sections, self.line_breaker)), width_bound)

    def calculate_glyphs(
        self,
        fonts: Sequence[Font],
        geometry: SectionGeometry,
        sections: Sequence[SectionText],
    ) -> list[SectionGlyph]:
        screen_position = geometry.screen_position
        bound_w, bound_h = geometry.bounds

        if self.kind is LayoutKind.SINGLE_LINE:
            line = next(iter(self._lines(fonts, sections, bound_w)), None)
            if line is None:
                return []
            return line.aligned_on_screen(screen_position, self.h_align, self.v_align)

        out: list[SectionGlyph] = []
        caret_x, caret_y = screen_position
        top = self.v_align is VerticalAlign.TOP

        for line in self._lines(fonts, sections, bound_w):
            # top alignment can stop as soon as the height bound is reached
            if top and caret_y >= screen_position[1] + bound_h:
                break
            height = line.line_height()
            out.extend(line.aligned_on_screen((caret_x, caret_y), self.h_align, VerticalAlign.TOP))
            caret_y += height

        if not out or top:
            return out

        total = caret_y - screen_position[1]
        shift_up = total / 2.0 if self.v_align is VerticalAlign.CENTER else total
        min_x, max_x = self.h_align.x_bounds(screen_position[0], bound_w)
        min_y, max_y = self.v_align.y_bounds(screen_position[1], bound_h)

        kept: list[SectionGlyph] = []
        for sg in out:
            sg = _shifted(sg, Point(0.0, -shift_up))
            sfont = as_scaled(fonts[sg.font_id], sg.glyph.scale)
            h_advance = sfont.h_advance(sg.glyph.id)
            h_side_bearing = sfont.h_side_bearing(sg.glyph.id)
            height = sfont.height()
            pos = sg.glyph.position
            if (
                pos.x - h_side_bearing <= max_x
                and pos.x + h_advance >= min_x
                and pos.y - height <= max_y
                and pos.y + height >= min_y
            ):
                kept.append(sg)
        return kept

    def bounds_rect(self, geometry: SectionGeometry) -> Rect:
        screen_x, screen_y = geometry.screen_position
        bound_w, bound_h = geometry.bounds
        x_min, x_max = self.h_align.x_bounds(screen_x, bound_w)
        y_min, y_max = self.v_align.y_bounds(screen_y, bound_h)
        return Rect(Point(x_min, y_min), Point(x_max, y_max))

    def recalculate_glyphs(
        self,
        previous: Iterable[SectionGlyph],
        change: GlyphChange,
        fonts: Sequence[Font],
        geometry: SectionGeometry,
        sections: Sequence[SectionText],
    ) -> list[SectionGlyph]:
        old = change.geometry
        if old is not None and old.bounds == geometry.bounds:
            adjustment = Point(
                geometry.screen_position[0] - old.screen_position[0],
                geometry.screen_position[1] - old.screen_position[1],
            )
            return [_shifted(sg, adjustment) for sg in previous]
        return self.calculate_glyphs(fonts, geometry, sections)