# glyphlayout

Text layout for glyph rendering. You give it a list of fonts, some sections of
text (each with its own scale and font), and a screen geometry. It returns
positioned glyphs that are ready to draw.

The package has no dependencies beyond the standard library.

## What it provides

- **Line breaking** (`glyphlayout.linebreak`).
  - `BuiltInLineBreaker.UNICODE` breaks between words and follows the Unicode
    line breaking rules.
  - `BuiltInLineBreaker.ANY_CHAR` allows a soft break after every character.
    It keeps the same hard breaks as `UNICODE`.
  - Newlines and other mandatory breaks produce hard breaks.
  - `unicode_line_breaks(text)` yields the `LineBreak` values for a text.
  - `eol_line_break(c, line_breaker)` reports the break a character causes when
    it is the last character of a text.
- **Layouts** (`glyphlayout.layout`).
  - `Layout` is a frozen dataclass with four fields: `kind` (a `LayoutKind`,
    either `SINGLE_LINE` or `WRAP`), `line_breaker`, `h_align` and `v_align`.
  - `Layout.default_single_line()` and `Layout.default_wrap()` give the two
    kinds with left/top alignment and the Unicode line breaker.
  - `with_h_align`, `with_v_align` and `with_line_breaker` return changed
    copies.
- **Alignment** (`glyphlayout.align`).
  - `HorizontalAlign` has the members `LEFT`, `CENTER` and `RIGHT`.
  - `VerticalAlign` has the members `TOP`, `CENTER` and `BOTTOM`.
  - `x_bounds` and `y_bounds` give the pixel range the bounds cover. The range
    is widened to whole pixels.
- **Mixed scales and kerning.** Sections of different sizes on one line share a
  common baseline, which is set by the tallest font metrics on the line. Kerning
  between adjacent glyphs is applied.
- **Cheap repositioning.** When only the screen position has changed,
  `Layout.recalculate_glyphs` moves the previous glyphs instead of laying the
  text out again.

The lower-level building blocks are in `glyphlayout.text`:

- `characters` yields the characters of the sections.
- `words` groups them into `Word`s.
- `lines` fills width-bounded `Line`s.

## Fonts

`glyphlayout.primitives.Font` is a font held in memory and described by its
metric tables in font units. You pass:

- a mapping from each supported character to its horizontal advance;
- optionally `units_per_em`, `ascent`, `descent`, `line_gap`, `notdef_advance`,
  `side_bearings` and `kerning`, the last one keyed by character pairs.

Glyph ids are assigned in mapping order starting at 1. Any unsupported
character gets glyph id 0.

To view a font at a pixel scale, call `as_scaled(font, scale)`. It returns a
`ScaledFont`, where the scale sets the height from ascent to descent.

## Usage

```python
from glyphlayout.align import HorizontalAlign
from glyphlayout.layout import Layout
from glyphlayout.primitives import Font, PxScale, SectionGeometry, SectionText

font = Font({c: 600 for c in "abcdefghijklmnopqrstuvwxyz "})
fonts = [font]

layout = Layout.default_wrap().with_h_align(HorizontalAlign.CENTER)
glyphs = layout.calculate_glyphs(
    fonts,
    SectionGeometry(screen_position=(150.0, 50.0), bounds=(300.0, float("inf"))),
    [
        SectionText(text="hello ", scale=PxScale(20.0)),
        SectionText(text="world", scale=PxScale(25.0), font_id=0),
    ],
)

for sg in glyphs:
    print(sg.section_index, sg.char_index, sg.glyph.id, sg.glyph.position)
```

Each `SectionGlyph` records the following:

- `section_index`: the index of the section it came from;
- `char_index`: the index of its character in that section's text;
- `font_id`: the index of its font in the font list;
- `glyph`: the positioned `Glyph`.

A few details of how text is handled:

- Control characters such as newlines do not produce glyphs.
- A section with a zero or negative scale is skipped.
- To get the screen rectangle of a layout's bounds, call
  `layout.bounds_rect(geometry)`. It returns a `Rect`.

### Moving text without laying it out again

```python
from glyphlayout.primitives import GlyphChange

moved = layout.recalculate_glyphs(
    glyphs,
    GlyphChange.geometry_changed(old_geometry),
    fonts,
    new_geometry,
    sections,
)
```

If the old and new geometry have the same bounds, the previous glyphs are
shifted by the change in screen position. For any other change, including
`GlyphChange.unknown()`, the layout is calculated again from the start.

## What it does not do

- It does not read font files. Font metrics must be supplied to `Font`
  directly.
- It does not rasterise or draw anything. It only computes where glyphs go.

## Running the tests

```
pip install -e ".[test]"
pytest
```