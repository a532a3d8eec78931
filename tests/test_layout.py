import math

import pytest

from glyphlayout.align import HorizontalAlign, VerticalAlign
from glyphlayout.layout import GlyphPositioner, Layout, LayoutKind
from glyphlayout.linebreak import BuiltInLineBreaker
from glyphlayout.primitives import (
    Font,
    GlyphChange,
    Point,
    PxScale,
    Rect,
    SectionGeometry,
    SectionText,
    as_scaled,
)

TEST_CHARS = (
    "ABCDEFGHIJKLMNOPQRSTUVWXQZabcdefghijklmnopqrstuvwxyz ,."
    "提高代碼執行率❤éß'_?"
)

A_FONT = Font(
    {c: 1233.0 for c in TEST_CHARS},
    units_per_em=2048.0,
    ascent=1901.0,
    descent=-483.0,
)
CJK_FONT = Font(
    {c: 1000.0 for c in TEST_CHARS},
    units_per_em=1000.0,
    ascent=800.0,
    descent=-200.0,
)
FONTS = [A_FONT, CJK_FONT]

ANY_CHAR = BuiltInLineBreaker.ANY_CHAR


def glyph_string(glyphs, font=A_FONT):
    out = []
    for sg in glyphs:
        match = next((c for c in TEST_CHARS if font.glyph_id(c) == sg.glyph.id), "☐")
        out.append(match)
    return "".join(out)


def distinct_ys(glyphs):
    return {sg.glyph.position.y for sg in glyphs}


def test_default_layout_is_wrap_left_top():
    layout = Layout()
    assert layout == Layout.default_wrap()
    assert layout.kind is LayoutKind.WRAP
    assert layout.line_breaker is BuiltInLineBreaker.UNICODE
    assert layout.h_align is HorizontalAlign.LEFT
    assert layout.v_align is VerticalAlign.TOP
    assert isinstance(layout, GlyphPositioner)


def test_builders_replace_only_their_field():
    layout = (
        Layout.default_single_line()
        .with_h_align(HorizontalAlign.RIGHT)
        .with_v_align(VerticalAlign.BOTTOM)
        .with_line_breaker(ANY_CHAR)
    )
    assert layout.kind is LayoutKind.SINGLE_LINE
    assert layout.h_align is HorizontalAlign.RIGHT
    assert layout.v_align is VerticalAlign.BOTTOM
    assert layout.line_breaker is ANY_CHAR
    assert hash(layout) == hash(
        Layout(LayoutKind.SINGLE_LINE, ANY_CHAR, HorizontalAlign.RIGHT, VerticalAlign.BOTTOM)
    )


def test_zero_scale_glyphs():
    glyphs = Layout.default_single_line().with_line_breaker(ANY_CHAR).calculate_glyphs(
        FONTS, SectionGeometry(), [SectionText("hello world", scale=0.0)]
    )
    assert glyphs == []


def test_negative_scale_glyphs():
    glyphs = Layout.default_single_line().with_line_breaker(ANY_CHAR).calculate_glyphs(
        FONTS, SectionGeometry(), [SectionText("hello world", scale=PxScale(-20.0))]
    )
    assert glyphs == []


def test_single_line_chars_left_simple():
    glyphs = Layout.default_single_line().with_line_breaker(ANY_CHAR).calculate_glyphs(
        FONTS, SectionGeometry(), [SectionText("hello world", scale=20.0)]
    )
    assert glyph_string(glyphs) == "hello world"
    assert glyphs[0].glyph.position.x == pytest.approx(0.0)
    assert glyphs[-1].glyph.position.x > 0.0


def test_single_line_chars_right():
    glyphs = (
        Layout.default_single_line()
        .with_line_breaker(ANY_CHAR)
        .with_h_align(HorizontalAlign.RIGHT)
        .calculate_glyphs(FONTS, SectionGeometry(), [SectionText("hello world", scale=20.0)])
    )
    assert glyph_string(glyphs) == "hello world"
    last = glyphs[-1].glyph
    assert glyphs[0].glyph.position.x < last.position.x
    assert last.position.x <= 0.0
    rightmost_x = last.position.x + as_scaled(A_FONT, 20.0).h_advance(last.id)
    assert rightmost_x == pytest.approx(0.0, abs=1e-1)


def test_single_line_chars_center():
    glyphs = (
        Layout.default_single_line()
        .with_line_breaker(ANY_CHAR)
        .with_h_align(HorizontalAlign.CENTER)
        .calculate_glyphs(FONTS, SectionGeometry(), [SectionText("hello world", scale=20.0)])
    )
    assert glyph_string(glyphs) == "hello world"
    assert glyphs[0].glyph.position.x < 0.0
    last = glyphs[-1].glyph
    assert last.position.x > 0.0
    leftmost_x = glyphs[0].glyph.position.x
    rightmost_x = last.position.x + as_scaled(A_FONT, 20.0).h_advance(last.id)
    assert rightmost_x == pytest.approx(-leftmost_x, abs=1e-1)


def test_single_line_chars_left_finish_at_newline():
    glyphs = Layout.default_single_line().with_line_breaker(ANY_CHAR).calculate_glyphs(
        FONTS, SectionGeometry(), [SectionText("hello\nworld", scale=20.0)]
    )
    assert glyph_string(glyphs) == "hello"
    assert glyphs[0].glyph.position.x == pytest.approx(0.0)
    assert glyphs[4].glyph.position.x > 0.0


@pytest.mark.parametrize(
    ("width", "expected"),
    [(85.0, "hello "), (125.0, "hello what's ")],
)
def test_wrap_word_left(width, expected):
    glyphs = Layout.default_single_line().calculate_glyphs(
        FONTS,
        SectionGeometry(bounds=(width, math.inf)),
        [SectionText("hello what's _happening_?", scale=20.0)],
    )
    assert glyph_string(glyphs) == expected
    assert glyphs[0].glyph.position.x == pytest.approx(0.0)
    assert glyphs[-1].glyph.position.x > 0.0


def test_single_line_limited_horizontal_room():
    glyphs = Layout.default_single_line().with_line_breaker(ANY_CHAR).calculate_glyphs(
        FONTS,
        SectionGeometry(bounds=(50.0, math.inf)),
        [SectionText("hello world", scale=20.0)],
    )
    assert glyph_string(glyphs) == "hell"
    assert glyphs[0].glyph.position.x == pytest.approx(0.0)


def test_wrap_layout_with_new_lines():
    text = "Autumn moonlight\na worm digs silently\ninto the chestnut."
    glyphs = Layout.default_wrap().calculate_glyphs(
        FONTS, SectionGeometry(), [SectionText(text, scale=20.0)]
    )
    assert glyph_string(glyphs) == "Autumn moonlighta worm digs silentlyinto the chestnut."
    assert glyphs[16].glyph.position.y > glyphs[0].glyph.position.y
    assert glyphs[36].glyph.position.y > glyphs[16].glyph.position.y


def test_leftover_max_vmetrics():
    glyphs = Layout.default_single_line().calculate_glyphs(
        FONTS,
        SectionGeometry(bounds=(750.0, math.inf)),
        [
            SectionText("Autumn moonlight, ", scale=30.0),
            SectionText("a worm digs silently ", scale=40.0),
            SectionText("into the chestnut.", scale=10.0),
        ],
    )
    expected_y = as_scaled(A_FONT, 40.0).ascent()
    assert glyphs
    for sg in glyphs:
        assert sg.glyph.position.y == pytest.approx(expected_y)


def test_eol_new_line_hard_breaks():
    glyphs = Layout.default_wrap().calculate_glyphs(
        FONTS,
        SectionGeometry(),
        [
            SectionText("Autumn moonlight, \n"),
            SectionText("a worm digs silently "),
            SectionText("\n"),
            SectionText("into the chestnut."),
        ],
    )
    assert len(distinct_ys(glyphs)) == 3
    assert glyph_string(glyphs) == "Autumn moonlight, a worm digs silently into the chestnut."

    line_2 = glyphs[18].glyph
    line_3 = glyphs[39].glyph
    assert line_2.id == A_FONT.glyph_id("a")
    assert line_2.position.y > glyphs[0].glyph.position.y
    assert line_3.id == A_FONT.glyph_id("i")
    assert line_3.position.y > line_2.position.y


def test_single_line_multibyte_chars_finish_at_break():
    text = "\u2764\u2764\u00e9\u2764\u2764\n\u2764\u00df\u2764"
    glyphs = Layout.default_single_line().calculate_glyphs(
        FONTS, SectionGeometry(), [SectionText(text, scale=20.0)]
    )
    assert glyph_string(glyphs) == "\u2764\u2764\u00e9\u2764\u2764"
    assert glyphs[0].glyph.position.x == pytest.approx(0.0)
    assert glyphs[4].glyph.position.x > 0.0


def test_no_inherent_section_break():
    glyphs = Layout.default_wrap().calculate_glyphs(
        FONTS,
        SectionGeometry(bounds=(50.0, math.inf)),
        [SectionText("The "), SectionText("moon"), SectionText("light")],
    )
    assert glyph_string(glyphs) == "The moonlight"
    ys = distinct_ys(glyphs)
    assert len(ys) == 2
    assert glyphs[0].glyph.position.y == pytest.approx(min(ys))
    assert glyphs[4].glyph.position.y == pytest.approx(max(ys))


def test_recalculate_identical():
    sections = [SectionText("hello world", scale=20.0)]
    glyphs = Layout().calculate_glyphs(FONTS, SectionGeometry(), sections)
    recalc = Layout().recalculate_glyphs(
        glyphs, GlyphChange.unknown(), FONTS, SectionGeometry(), sections
    )
    assert glyph_string(recalc) == "hello world"
    assert recalc[0].glyph.position.x == pytest.approx(0.0)
    assert recalc[-1].glyph.position.x > 0.0
    assert recalc == glyphs


def test_recalculate_position():
    geometry_1 = SectionGeometry(screen_position=(0.0, 0.0))
    sections = [SectionText("hello world", scale=20.0, font_id=0)]
    glyphs = Layout().calculate_glyphs(FONTS, geometry_1, sections)
    original_y = glyphs[0].glyph.position.y

    recalc = Layout().recalculate_glyphs(
        glyphs,
        GlyphChange.geometry_changed(geometry_1),
        FONTS,
        SectionGeometry(screen_position=(0.0, 50.0), bounds=geometry_1.bounds),
        sections,
    )
    assert glyph_string(recalc) == "hello world"
    assert recalc[0].glyph.position.x == pytest.approx(0.0)
    assert recalc[0].glyph.position.y == pytest.approx(original_y + 50.0)
    assert recalc[-1].glyph.position.x > 0.0


def test_recalculate_with_changed_bounds_recomputes():
    old = SectionGeometry(bounds=(math.inf, math.inf))
    new = SectionGeometry(bounds=(50.0, math.inf))
    sections = [SectionText("Foo bar")]
    glyphs = Layout().calculate_glyphs(FONTS, old, sections)
    recalc = Layout().recalculate_glyphs(
        glyphs, GlyphChange.geometry_changed(old), FONTS, new, sections
    )
    assert len(distinct_ys(glyphs)) == 1
    assert len(distinct_ys(recalc)) == 2


def test_wrap_word_chinese():
    glyphs = Layout().calculate_glyphs(
        FONTS,
        SectionGeometry(bounds=(25.0, math.inf)),
        [SectionText("提高代碼執行率", scale=20.0, font_id=1)],
    )
    assert glyph_string(glyphs, CJK_FONT) == "提高代碼執行率"
    assert {sg.glyph.position.x for sg in glyphs} == {0.0}
    assert len(distinct_ys(glyphs)) == 7


def test_include_spaces_in_layout_width_preceded_hard_break():
    layout = Layout().with_h_align(HorizontalAlign.RIGHT)
    geometry = SectionGeometry(bounds=(50.0, math.inf))

    no_newline = layout.calculate_glyphs(FONTS, geometry, [SectionText("Foo bar")])
    assert len(distinct_ys(no_newline)) == 2

    newline = layout.calculate_glyphs(FONTS, geometry, [SectionText("Foo \nbar")])
    assert len(distinct_ys(newline)) == 2

    assert newline[0].glyph.position.x < no_newline[0].glyph.position.x


def test_include_spaces_in_layout_width_preceded_end():
    layout = Layout().with_h_align(HorizontalAlign.RIGHT)
    no_space = layout.calculate_glyphs(FONTS, SectionGeometry(), [SectionText("Foo")])
    with_space = layout.calculate_glyphs(FONTS, SectionGeometry(), [SectionText("Foo   ")])
    assert with_space[0].glyph.position.x < no_space[0].glyph.position.x


def test_wrap_top_stops_at_height_bound():
    glyphs = Layout().calculate_glyphs(
        FONTS, SectionGeometry(bounds=(math.inf, 1.0)), [SectionText("a\nb\nc")]
    )
    assert glyph_string(glyphs) == "a"


def test_wrap_bottom_places_lines_above_position():
    glyphs = Layout().with_v_align(VerticalAlign.BOTTOM).calculate_glyphs(
        FONTS, SectionGeometry(), [SectionText("a\nb")]
    )
    assert glyph_string(glyphs) == "ab"
    assert all(sg.glyph.position.y < 0.0 for sg in glyphs)
    line_height = as_scaled(A_FONT, 16.0).height()
    assert glyphs[1].glyph.position.y - glyphs[0].glyph.position.y == pytest.approx(line_height)


def test_wrap_center_straddles_position():
    top = Layout().calculate_glyphs(FONTS, SectionGeometry(), [SectionText("a\nb")])
    center = Layout().with_v_align(VerticalAlign.CENTER).calculate_glyphs(
        FONTS, SectionGeometry(), [SectionText("a\nb")]
    )
    bottom = Layout().with_v_align(VerticalAlign.BOTTOM).calculate_glyphs(
        FONTS, SectionGeometry(), [SectionText("a\nb")]
    )
    for t, c, b in zip(top, center, bottom):
        assert c.glyph.position.y == pytest.approx((t.glyph.position.y + b.glyph.position.y) / 2)


def test_wrap_bottom_filters_glyphs_outside_height_bound():
    glyphs = Layout().with_v_align(VerticalAlign.BOTTOM).calculate_glyphs(
        FONTS, SectionGeometry(bounds=(math.inf, 10.0)), [SectionText("a\nb\nc")]
    )
    assert glyph_string(glyphs) == "bc"


def test_single_line_empty_sections_give_no_glyphs():
    assert Layout.default_single_line().calculate_glyphs(FONTS, SectionGeometry(), []) == []
    assert Layout.default_wrap().calculate_glyphs(FONTS, SectionGeometry(), []) == []


def test_glyphs_carry_section_and_char_indices():
    glyphs = Layout().calculate_glyphs(
        FONTS,
        SectionGeometry(screen_position=(150.0, 50.0)),
        [SectionText("hello ", scale=20.0, font_id=0), SectionText("glyph", scale=25.0, font_id=1)],
    )
    assert len(glyphs) == 11
    assert glyphs[4].glyph.id == A_FONT.glyph_id("o")
    assert (glyphs[4].font_id, glyphs[4].section_index, glyphs[4].char_index) == (0, 0, 4)
    assert glyphs[8].glyph.id == CJK_FONT.glyph_id("y")
    assert (glyphs[8].font_id, glyphs[8].section_index, glyphs[8].char_index) == (1, 1, 2)
    assert glyphs[0].glyph.position.x == pytest.approx(150.0)


def test_bounds_rect_left_top():
    rect = Layout().bounds_rect(SectionGeometry(screen_position=(10.5, 20.0), bounds=(100.0, 50.0)))
    assert rect == Rect(Point(10.0, 20.0), Point(111.0, 70.0))


def test_bounds_rect_center_bottom():
    layout = Layout.default_single_line().with_h_align(HorizontalAlign.CENTER).with_v_align(
        VerticalAlign.BOTTOM
    )
    rect = layout.bounds_rect(SectionGeometry(screen_position=(10.5, 20.0), bounds=(100.0, 50.0)))
    assert rect == Rect(Point(-40.0, -30.0), Point(61.0, 20.0))


def test_bounds_rect_unbounded():
    rect = Layout().with_h_align(HorizontalAlign.RIGHT).bounds_rect(SectionGeometry())
    assert rect == Rect(Point(-math.inf, 0.0), Point(0.0, math.inf))