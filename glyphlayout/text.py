"""Turn section text into characters, words and width-bounded lines."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace

from .align import HorizontalAlign, VerticalAlign
from .linebreak import LineBreak, LineBreaker, eol_line_break
from .primitives import Font, Glyph, Point, ScaledFont, SectionGlyph, SectionText, as_scaled

_F32_EPSILON = 1.1920929e-07

# Python's str.isspace also accepts these separators, which are not Unicode white space.
_NOT_WHITE_SPACE = frozenset("\x1c\x1d\x1e\x1f")


def _is_whitespace(c: str) -> bool:
    return c.isspace() and c not in _NOT_WHITE_SPACE


def _is_control(c: str) -> bool:
    return unicodedata.category(c) == "Cc"


def _relative_eq(a: float, b: float) -> bool:
    if a == b:
        return True
    if a in (float("inf"), float("-inf")) or b in (float("inf"), float("-inf")):
        return False
    diff = abs(a - b)
    if diff <= _F32_EPSILON:
        return True
    return diff <= max(abs(a), abs(b)) * _F32_EPSILON


@dataclass(frozen=True)
class Character:
    """A single character of a section with its glyph and break information."""

    glyph: Glyph
    scale_font: ScaledFont
    font_id: int
    line_break: LineBreak | None
    """The line break following this character, if any."""
    control: bool
    whitespace: bool
    section_index: int
    char_index: int


@dataclass(frozen=True)
class VMetrics:
    """Vertical metrics of a font at some scale."""

    ascent: float = 0.0
    descent: float = 0.0
    line_gap: float = 0.0

    def height(self) -> float:
        return self.ascent - self.descent + self.line_gap

    def max(self, other: VMetrics) -> VMetrics:
        """The taller of the two metrics; ``self`` on a tie."""
        return other if other.height() > self.height() else self

    @classmethod
    def from_scaled_font(cls, scale_font: ScaledFont) -> VMetrics:
        return cls(scale_font.ascent(), scale_font.descent(), scale_font.line_gap())


@dataclass(frozen=True)
class Word:
    """A run of glyphs ending in a line break, positioned from the origin."""

    glyphs: list[SectionGlyph]
    layout_width: float
    """Advance width including trailing spaces and invisibles."""
    layout_width_no_trail: float
    """Advance width without trailing spaces and invisibles."""
    max_v_metrics: VMetrics
    hard_break: bool


@dataclass
class Line:
    """Words laid out along one line, limited to a width bound."""

    glyphs: list[SectionGlyph] = field(default_factory=list)
    max_v_metrics: VMetrics = field(default_factory=VMetrics)
    rightmost: float = 0.0

    def line_height(self) -> float:
        return self.max_v_metrics.height()

    def aligned_on_screen(
        self,
        screen_position: tuple[float, float],
        h_align: HorizontalAlign,
        v_align: VerticalAlign,
    ) -> list[SectionGlyph]:
        """The line's glyphs moved onto the screen according to the alignment."""
        if not self.glyphs:
            return []
        screen_x, screen_y = screen_position
        if h_align is HorizontalAlign.LEFT:
            shift_left = 0.0
        elif h_align is HorizontalAlign.CENTER:
            shift_left = self.rightmost / 2.0
        else:
            shift_left = self.rightmost

        if v_align is VerticalAlign.TOP:
            shift_up = 0.0
        elif v_align is VerticalAlign.CENTER:
            shift_up = self.line_height() / 2.0
        else:
            shift_up = self.line_height()

        offset = Point(screen_x - shift_left, screen_y - shift_up)
        return [_moved(sg, offset) for sg in self.glyphs]


def _moved(sg: SectionGlyph, offset: Point) -> SectionGlyph:
    return replace(sg, glyph=replace(sg.glyph, position=sg.glyph.position + offset))


def _valid_section(section: SectionText) -> bool:
    return section.scale.x > 0.0 and section.scale.y > 0.0


def characters(
    fonts: Sequence[Font],
    sections: Iterable[SectionText],
    line_breaker: LineBreaker,
) -> Iterator[Character]:
    """Yield every character of the sections, skipping sections with non-positive scale."""
    for section_index, section in enumerate(sections):
        if not _valid_section(section):
            continue
        text = section.text
        breaks = iter(line_breaker.line_breaks(text))
        next_break: LineBreak | None = None
        scale_font = as_scaled(fonts[section.font_id], section.scale)

        for index, c in enumerate(text):
            if next_break is None or next_break.offset <= index:
                while True:
                    candidate = next(breaks, None)
                    if candidate is None or candidate.offset > index:
                        next_break = candidate
                        break

            end = index + 1
            line_break = next_break if next_break is not None and next_break.offset == end else None
            if line_break is not None and end == len(text):
                # the end of a text always reports a break; keep only one the character itself causes
                line_break = eol_line_break(c, line_breaker)

            yield Character(
                glyph=scale_font.scaled_glyph(c),
                scale_font=scale_font,
                font_id=section.font_id,
                line_break=line_break,
                control=_is_control(c),
                whitespace=_is_whitespace(c),
                section_index=section_index,
                char_index=index,
            )


def words(chars: Iterable[Character]) -> Iterator[Word]:
    """Group characters into words, each ending at a line break or the end of input."""
    it = iter(chars)
    pending = next(it, None)
    while pending is not None:
        glyphs: list[SectionGlyph] = []
        caret = 0.0
        caret_no_trail = 0.0
        last_glyph_id: int | None = None
        max_v_metrics = VMetrics()
        hard_break = False

        while pending is not None:
            ch = pending
            pending = next(it, None)

            max_v_metrics = max_v_metrics.max(VMetrics.from_scaled_font(ch.scale_font))

            if last_glyph_id is not None:
                caret += ch.scale_font.kern(last_glyph_id, ch.glyph.id)
            last_glyph_id = ch.glyph.id

            if not ch.control:
                advance = ch.scale_font.h_advance(ch.glyph.id)
                glyphs.append(
                    SectionGlyph(
                        section_index=ch.section_index,
                        char_index=ch.char_index,
                        glyph=replace(ch.glyph, position=Point(caret, 0.0)),
                        font_id=ch.font_id,
                    )
                )
                caret += advance
                if not ch.whitespace:
                    caret_no_trail = caret

            if ch.line_break is not None:
                # the end of all sections counts as a hard break
                if ch.line_break.is_hard or pending is None:
                    hard_break = True
                break

        yield Word(
            glyphs=glyphs,
            layout_width=caret,
            layout_width_no_trail=caret_no_trail,
            max_v_metrics=max_v_metrics,
            hard_break=hard_break,
        )


def lines(word_iter: Iterable[Word], width_bound: float) -> Iterator[Line]:
    """Fill lines with words until the next word would pass ``width_bound``.

    Each line takes at least one word, even one wider than the bound.
    """
    it = iter(word_iter)
    pending = next(it, None)
    while True:
        caret_x = 0.0
        caret_y = 0.0
        line = Line()
        progressed = False

        while pending is not None:
            word = pending
            # trailing spaces do not count when wrapping, unless a hard break follows them
            wrap_width = word.layout_width if word.hard_break else word.layout_width_no_trail
            word_right = caret_x + wrap_width
            in_bounds = word_right < width_bound or _relative_eq(word_right, width_bound)
            if not in_bounds and progressed:
                break

            pending = next(it, None)
            progressed = True
            line.rightmost = word_right

            if (not line.glyphs or word.glyphs) and (
                word.max_v_metrics.height() > line.max_v_metrics.height()
            ):
                diff_y = word.max_v_metrics.ascent - caret_y
                caret_y += diff_y
                shift = Point(0.0, diff_y)
                line.glyphs = [_moved(sg, shift) for sg in line.glyphs]
                line.max_v_metrics = word.max_v_metrics

            caret = Point(caret_x, caret_y)
            line.glyphs.extend(_moved(sg, caret) for sg in word.glyphs)
            caret_x += word.layout_width

            if word.hard_break:
                break

        if not progressed:
            return
        yield line