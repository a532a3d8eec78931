"""Geometry, font metrics and section types shared by the layout code."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Point:
    """A 2D point in pixels."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other):
        if isinstance(other, Point):
            return Point(self.x + other.x, self.y + other.y)
        if isinstance(other, tuple) and len(other) == 2:
            return Point(self.x + other[0], self.y + other[1])
        return NotImplemented


@dataclass(frozen=True)
class PxScale:
    """Pixel scale of text; a single value gives a uniform scale."""

    x: float
    y: float = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.y is None:
            object.__setattr__(self, "y", self.x)


def _px_scale(scale: PxScale | float) -> PxScale:
    return scale if isinstance(scale, PxScale) else PxScale(float(scale))


@dataclass(frozen=True)
class Glyph:
    """A glyph id together with its scale and position."""

    id: int
    scale: PxScale
    position: Point = Point()


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle."""

    min: Point
    max: Point


class Font:
    """An in-memory font described by its metric tables, in font units.

    ``advances`` maps each supported character to its horizontal advance.
    Glyph ids are assigned in mapping order starting at 1; id 0 is the
    "not defined" glyph used for every unsupported character.
    """

    def __init__(
        self,
        advances: Mapping[str, float],
        *,
        units_per_em: float = 1000.0,
        ascent: float = 800.0,
        descent: float = -200.0,
        line_gap: float = 0.0,
        notdef_advance: float = 500.0,
        side_bearings: Mapping[str, float] | None = None,
        kerning: Mapping[tuple[str, str], float] | None = None,
    ) -> None:
        if units_per_em <= 0:
            raise ValueError("units_per_em must be positive")
        if ascent - descent <= 0:
            raise ValueError("ascent must lie above descent")
        for c in advances:
            if len(c) != 1:
                raise ValueError(f"font entries must be single characters, got {c!r}")

        self._units_per_em = float(units_per_em)
        self._ascent = float(ascent)
        self._descent = float(descent)
        self._line_gap = float(line_gap)
        self._ids = {c: gid for gid, c in enumerate(advances, start=1)}
        self._advances = (float(notdef_advance), *(float(v) for v in advances.values()))
        self._side_bearings = {
            self._known_id(c): float(v) for c, v in (side_bearings or {}).items()
        }
        self._kerning = {
            (self._known_id(a), self._known_id(b)): float(v)
            for (a, b), v in (kerning or {}).items()
        }

    def _known_id(self, c: str) -> int:
        try:
            return self._ids[c]
        except KeyError:
            raise ValueError(f"character {c!r} is not in the font") from None

    def glyph_id(self, c: str) -> int:
        """Glyph id of ``c``, or 0 when the font has no glyph for it."""
        return self._ids.get(c, 0)

    def units_per_em(self) -> float:
        return self._units_per_em

    def ascent_unscaled(self) -> float:
        return self._ascent

    def descent_unscaled(self) -> float:
        return self._descent

    def line_gap_unscaled(self) -> float:
        return self._line_gap

    def h_advance_unscaled(self, glyph_id: int) -> float:
        if 0 <= glyph_id < len(self._advances):
            return self._advances[glyph_id]
        return 0.0

    def h_side_bearing_unscaled(self, glyph_id: int) -> float:
        return self._side_bearings.get(glyph_id, 0.0)

    def kern_unscaled(self, first: int, second: int) -> float:
        return self._kerning.get((first, second), 0.0)


@dataclass(frozen=True)
class ScaledFont:
    """A font viewed at a pixel scale; the scale sets the ascent-to-descent height."""

    font: Font
    scale: PxScale

    @property
    def _unscaled_height(self) -> float:
        return self.font.ascent_unscaled() - self.font.descent_unscaled()

    @property
    def _h_factor(self) -> float:
        return self.scale.x / self._unscaled_height

    @property
    def _v_factor(self) -> float:
        return self.scale.y / self._unscaled_height

    def ascent(self) -> float:
        return self._v_factor * self.font.ascent_unscaled()

    def descent(self) -> float:
        return self._v_factor * self.font.descent_unscaled()

    def line_gap(self) -> float:
        return self._v_factor * self.font.line_gap_unscaled()

    def height(self) -> float:
        return self._v_factor * self._unscaled_height

    def h_advance(self, glyph_id: int) -> float:
        return self._h_factor * self.font.h_advance_unscaled(glyph_id)

    def h_side_bearing(self, glyph_id: int) -> float:
        return self._h_factor * self.font.h_side_bearing_unscaled(glyph_id)

    def kern(self, first: int, second: int) -> float:
        return self._h_factor * self.font.kern_unscaled(first, second)

    def scaled_glyph(self, c: str) -> Glyph:
        """The glyph for ``c`` at this scale, positioned at the origin."""
        return Glyph(self.font.glyph_id(c), self.scale, Point())


def as_scaled(font: Font, scale: PxScale | float) -> ScaledFont:
    """View ``font`` at ``scale`` (a ``PxScale`` or a uniform number)."""
    return ScaledFont(font, _px_scale(scale))


@dataclass(frozen=True)
class SectionGeometry:
    """Screen position and (width, height) bounds of a section, in pixels."""

    screen_position: tuple[float, float] = (0.0, 0.0)
    bounds: tuple[float, float] = (math.inf, math.inf)


@dataclass(frozen=True)
class SectionText:
    """Text to lay out together using one font and scale."""

    text: str = ""
    scale: PxScale = field(default=PxScale(16.0))
    font_id: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", _px_scale(self.scale))


@dataclass(frozen=True)
class SectionGlyph:
    """A positioned glyph and where in the sections it came from."""

    section_index: int
    char_index: int
    glyph: Glyph
    font_id: int


@dataclass(frozen=True)
class GlyphChange:
    """What changed since glyphs were last calculated.

    ``geometry`` holds the previous geometry when only the geometry changed,
    and is ``None`` when the change is unknown.
    """

    geometry: SectionGeometry | None = None

    @classmethod
    def geometry_changed(cls, old: SectionGeometry) -> GlyphChange:
        return cls(old)

    @classmethod
    def unknown(cls) -> GlyphChange:
        return cls(None)