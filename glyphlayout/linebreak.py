"""Line break opportunities, following the Unicode line breaking rules."""

from __future__ import annotations

import enum
import unicodedata
from collections.abc import Iterator
from dataclasses import dataclass
from itertools import pairwise
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class LineBreak:
    """A break opportunity at ``offset``, the index after the breaking character."""

    offset: int
    is_hard: bool = False

    @classmethod
    def soft(cls, offset: int) -> LineBreak:
        return cls(offset, False)

    @classmethod
    def hard(cls, offset: int) -> LineBreak:
        return cls(offset, True)


@runtime_checkable
class LineBreaker(Protocol):
    """Anything that yields the line breaks of a piece of text."""

    def line_breaks(self, text: str) -> Iterator[LineBreak]:
        """Yield the break opportunities of ``text`` in order."""
        ...


class _Cls(enum.Enum):
    BK = enum.auto()
    CR = enum.auto()
    LF = enum.auto()
    NL = enum.auto()
    SP = enum.auto()
    ZW = enum.auto()
    ZWJ = enum.auto()
    CM = enum.auto()
    WJ = enum.auto()
    GL = enum.auto()
    BA = enum.auto()
    BB = enum.auto()
    B2 = enum.auto()
    HY = enum.auto()
    CL = enum.auto()
    CP = enum.auto()
    OP = enum.auto()
    EX = enum.auto()
    IS = enum.auto()
    SY = enum.auto()
    NS = enum.auto()
    IN = enum.auto()
    QU = enum.auto()
    PR = enum.auto()
    PO = enum.auto()
    NU = enum.auto()
    AL = enum.auto()
    HL = enum.auto()
    ID = enum.auto()
    RI = enum.auto()


C = _Cls

_EXPLICIT: dict[str, _Cls] = {
    "\n": C.LF, "\r": C.CR, "\x0b": C.BK, "\x0c": C.BK,
    "\u2028": C.BK, "\u2029": C.BK, "\x85": C.NL,
    " ": C.SP, "\u200b": C.ZW, "\u2060": C.WJ, "\ufeff": C.WJ, "\u200d": C.ZWJ,
    "\xa0": C.GL, "\u2007": C.GL, "\u202f": C.GL, "\u2011": C.GL,
    "\u034f": C.GL, "\u180e": C.GL,
    "\t": C.BA, "|": C.BA, "\xad": C.BA, "\u2010": C.BA, "\u2012": C.BA, "\u2013": C.BA,
    "-": C.HY, "\u2014": C.B2,
    "\xb4": C.BB, "\u02c8": C.BB, "\u02cc": C.BB, "\u02df": C.BB,
    ")": C.CP, "]": C.CP, "}": C.CL,
    "\u3001": C.CL, "\u3002": C.CL, "\uff0c": C.CL, "\uff0e": C.CL,
    "\ufe50": C.CL, "\ufe52": C.CL, "\uff61": C.CL, "\uff64": C.CL,
    "\xa1": C.OP, "\xbf": C.OP,
    "!": C.EX, "?": C.EX, "\uff01": C.EX, "\uff1f": C.EX,
    ",": C.IS, ".": C.IS, ":": C.IS, ";": C.IS,
    "\u037e": C.IS, "\u0589": C.IS, "\u060c": C.IS, "\u2044": C.IS,
    "/": C.SY,
    '"': C.QU, "'": C.QU,
    "%": C.PO, "\xa2": C.PO, "\xb0": C.PO, "\u2030": C.PO, "\u2031": C.PO,
    "\u2032": C.PO, "\u2033": C.PO, "\u2034": C.PO, "\u2035": C.PO,
    "\u2036": C.PO, "\u2037": C.PO, "\u2103": C.PO, "\u2109": C.PO,
    "\uff05": C.PO, "\uffe0": C.PO,
    "+": C.PR, "\\": C.PR, "\xb1": C.PR, "\u2116": C.PR, "\u2212": C.PR, "\u2213": C.PR,
    "\u2024": C.IN, "\u2025": C.IN, "\u2026": C.IN, "\ufe19": C.IN,
    **{c: C.NS for c in (
        "\u3005\u303b\u309d\u309e\u30fd\u30fe\u30fb\u30a0\u301c\u30fc"
        "\u203c\u203d\u2047\u2048\u2049"
        "\u3041\u3043\u3045\u3047\u3049\u3063\u3083\u3085\u3087\u308e\u3095\u3096"
        "\u30a1\u30a3\u30a5\u30a7\u30a9\u30c3\u30e3\u30e5\u30e7\u30ee\u30f5\u30f6"
    )},
}

_SPACE_BA = frozenset("\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2008\u2009\u200a\u205f\u3000")

_ID_RANGES = (
    (0x2E80, 0x2FFF),
    (0x3040, 0x30FF),
    (0x3100, 0x4DBF),
    (0x4E00, 0x9FFF),
    (0xA000, 0xA4CF),
    (0xAC00, 0xD7A3),
    (0xF900, 0xFAFF),
    (0xFE30, 0xFE4F),
    (0xFF01, 0xFF60),
    (0xFFE0, 0xFFE6),
    (0x1F000, 0x1FAFF),
    (0x20000, 0x2FFFD),
    (0x30000, 0x3FFFD),
)

_HEBREW_LETTERS = ((0x05D0, 0x05EA), (0x05EF, 0x05F2), (0xFB1D, 0xFB4F))


def _in_ranges(cp: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    return any(lo <= cp <= hi for lo, hi in ranges)


def _classify(c: str) -> _Cls:
    explicit = _EXPLICIT.get(c)
    if explicit is not None:
        return explicit
    category = unicodedata.category(c)
    cp = ord(c)
    if category[0] == "M" or category in ("Cc", "Cf"):
        return C.CM
    if category == "Ps":
        return C.OP
    if category == "Pe":
        return C.CL
    if category in ("Pi", "Pf"):
        return C.QU
    if category == "Zs":
        return C.BA if c in _SPACE_BA else C.GL
    if 0x1F1E6 <= cp <= 0x1F1FF:
        return C.RI
    if 0x1F3FB <= cp <= 0x1F3FF:
        return C.CM
    if category == "Nd" and not 0xFF10 <= cp <= 0xFF19:
        return C.NU
    if category == "Sc":
        return C.PR
    if _in_ranges(cp, _ID_RANGES):
        return C.ID
    if _in_ranges(cp, _HEBREW_LETTERS):
        return C.HL
    return C.AL


def _is_wide(c: str) -> bool:
    return unicodedata.east_asian_width(c) in ("F", "W", "H")


_HARD_BEFORE = frozenset({C.BK, C.LF, C.NL})
_NO_BREAK_BEFORE = frozenset({C.BK, C.CR, C.LF, C.NL, C.SP, C.ZW})
_NOT_ABSORBING = frozenset({C.BK, C.CR, C.LF, C.NL, C.SP, C.ZW})
_ATTACHING = frozenset({C.CM, C.ZWJ})
_LETTERS = frozenset({C.AL, C.HL})
_LETTERS_NUMBERS = frozenset({C.AL, C.HL, C.NU})

_NO_BREAK_PAIRS = frozenset({
    (C.AL, C.NU), (C.HL, C.NU), (C.NU, C.AL), (C.NU, C.HL),
    (C.PR, C.ID), (C.ID, C.PO),
    (C.PR, C.AL), (C.PR, C.HL), (C.PO, C.AL), (C.PO, C.HL),
    (C.AL, C.PR), (C.AL, C.PO), (C.HL, C.PR), (C.HL, C.PO),
    (C.CL, C.PO), (C.CP, C.PO), (C.CL, C.PR), (C.CP, C.PR),
    (C.NU, C.PO), (C.NU, C.PR), (C.PO, C.OP), (C.PO, C.NU),
    (C.PR, C.OP), (C.PR, C.NU), (C.HY, C.NU), (C.IS, C.NU),
    (C.NU, C.NU), (C.SY, C.NU),
    (C.AL, C.AL), (C.AL, C.HL), (C.HL, C.AL), (C.HL, C.HL),
    (C.IS, C.AL), (C.IS, C.HL),
})


@dataclass
class _BreakState:
    """Context carried across the text while deciding breaks."""

    left: _Cls | None = None
    left_wide: bool = False
    before_left: _Cls | None = None
    spaced: bool = False
    ri_run: int = 0

    @classmethod
    def start(cls, first: tuple[_Cls, bool]) -> _BreakState:
        kind, wide = first
        if kind is C.SP:
            return cls(spaced=True)
        kind = C.AL if kind in _ATTACHING else kind
        return cls(left=kind, left_wide=wide, ri_run=int(kind is C.RI))

    def step(self, before: tuple[_Cls, bool], after: tuple[_Cls, bool]) -> bool | None:
        """Decide the break between two characters: True hard, False soft, None none."""
        verdict = self._decide(before[0], after[0], after[1])
        self._advance(before[0], after)
        return verdict

    def _decide(self, before: _Cls, after: _Cls, after_wide: bool) -> bool | None:
        if before in _HARD_BEFORE:
            return True
        if before is C.CR:
            return None if after is C.LF else True
        if after in _NO_BREAK_BEFORE:
            return None
        if self.left is C.ZW:
            return False
        if before is C.ZWJ:
            return None
        if after in _ATTACHING:
            if before not in _NOT_ABSORBING:
                return None
            after = C.AL

        left = None if self.spaced else self.left
        if after is C.WJ or left is C.WJ:
            return None
        if left is C.GL:
            return None
        if after is C.GL and not self.spaced and left not in (C.BA, C.HY):
            return None
        if after in (C.CL, C.CP, C.EX, C.IS, C.SY):
            return None
        if self.left is C.OP:
            return None
        if self.left is C.QU and after is C.OP:
            return None
        if self.left in (C.CL, C.CP) and after is C.NS:
            return None
        if self.left is C.B2 and after is C.B2:
            return None
        if self.spaced:
            return False
        if after is C.QU or left is C.QU:
            return None
        if after in (C.BA, C.HY, C.NS) or left is C.BB:
            return None
        if left in (C.HY, C.BA) and self.before_left is C.HL:
            return None
        if left is C.SY and after is C.HL:
            return None
        if after is C.IN:
            return None
        if (left, after) in _NO_BREAK_PAIRS:
            return None
        if left in _LETTERS_NUMBERS and after is C.OP and not after_wide:
            return None
        if left is C.CP and not self.left_wide and after in _LETTERS_NUMBERS:
            return None
        if left is C.RI and after is C.RI and self.ri_run % 2 == 1:
            return None
        return False

    def _advance(self, before: _Cls, after: tuple[_Cls, bool]) -> None:
        kind, wide = after
        if kind in _ATTACHING and before not in _NOT_ABSORBING:
            return
        if kind is C.SP:
            self.spaced = True
            return
        kind = C.AL if kind in _ATTACHING else kind
        if kind is C.RI:
            self.ri_run = self.ri_run + 1 if (self.left is C.RI and not self.spaced) else 1
        else:
            self.ri_run = 0
        self.before_left = None if self.spaced else self.left
        self.left = kind
        self.left_wide = wide
        self.spaced = False


def unicode_line_breaks(text: str) -> Iterator[LineBreak]:
    """Yield the break opportunities of ``text`` per the Unicode line breaking rules.

    The end of the text is always reported as a hard break.
    """
    items = [(_classify(c), _is_wide(c)) for c in text]
    if items:
        state = _BreakState.start(items[0])
        for offset, (before, after) in enumerate(pairwise(items), start=1):
            verdict = state.step(before, after)
            if verdict is not None:
                yield LineBreak(offset, verdict)
    yield LineBreak.hard(len(text))


def _any_char_line_breaks(text: str) -> Iterator[LineBreak]:
    breaks = unicode_line_breaks(text)
    current = next(breaks, None)
    for offset in range(1, len(text) + 1):
        while current is not None and current.offset < offset:
            current = next(breaks, None)
        if current is not None and current.is_hard and current.offset == offset:
            yield LineBreak.hard(offset)
        else:
            yield LineBreak.soft(offset)


class BuiltInLineBreaker(enum.Enum):
    """The built-in line breaking strategies."""

    UNICODE = "unicode"
    """Breaks words following the Unicode line breaking rules."""
    ANY_CHAR = "any_char"
    """Soft breaks after every character; hard breaks as in ``UNICODE``."""

    def line_breaks(self, text: str) -> Iterator[LineBreak]:
        if self is BuiltInLineBreaker.UNICODE:
            return unicode_line_breaks(text)
        return _any_char_line_breaks(text)


def eol_line_break(c: str, line_breaker: LineBreaker) -> LineBreak | None:
    """The break that ``c`` causes when it ends a text, if any.

    Checks whether ``c`` followed by a space breaks right after ``c``, and
    failing that whether ``c`` followed by a letter does.
    """
    for follower in (" ", "a"):
        first = next(iter(line_breaker.line_breaks(c + follower)), None)
        if first is not None and first.offset == 1:
            return first
    return None