"""Random sampling of strings that match a regular expression."""

from __future__ import annotations

import bisect
import functools
import random
import string
from dataclasses import dataclass, field
from typing import Iterable

from .errors import InvalidRegexError

Ranges = tuple[tuple[int, int], ...]

_MAX_CODE_POINT = 0x10FFFF
_ASCII_UNIVERSE: Ranges = ((0, 0x7F),)
_UNICODE_UNIVERSE: Ranges = ((0, 0xD7FF), (0xE000, _MAX_CODE_POINT))
_FOLD_LIMIT = 0x4000

_ASCII_CLASSES: dict[str, Ranges] = {
    "d": ((0x30, 0x39),),
    "w": ((0x30, 0x39), (0x41, 0x5A), (0x5F, 0x5F), (0x61, 0x7A)),
    "s": ((0x09, 0x0D), (0x20, 0x20)),
}

_UNICODE_PREDICATES = {
    "d": str.isdecimal,
    "s": str.isspace,
    "w": lambda ch: ch.isalnum() or ch == "_",
}

_SIMPLE_ESCAPES = {"n": 10, "t": 9, "r": 13, "f": 12, "v": 11, "a": 7}


def _normalize(ranges: Iterable[tuple[int, int]]) -> Ranges:
    merged: list[tuple[int, int]] = []
    for lo, hi in sorted(ranges):
        if merged and lo <= merged[-1][1] + 1:
            if hi > merged[-1][1]:
                merged[-1] = (merged[-1][0], hi)
        else:
            merged.append((lo, hi))
    return tuple(merged)


def _intersect(left: Ranges, right: Ranges) -> Ranges:
    return _normalize(
        (max(l1, l2), min(h1, h2))
        for l1, h1 in left
        for l2, h2 in right
        if max(l1, l2) <= min(h1, h2)
    )


def _complement(ranges: Ranges, universe: Ranges) -> Ranges:
    gaps = []
    start = 0
    for lo, hi in _normalize(ranges):
        if lo > start:
            gaps.append((start, lo - 1))
        start = hi + 1
    if start <= _MAX_CODE_POINT:
        gaps.append((start, _MAX_CODE_POINT))
    return _intersect(tuple(gaps), universe)


def _utf8_len(code_point: int) -> int:
    if code_point < 0x80:
        return 1
    if code_point < 0x800:
        return 2
    if code_point < 0x10000:
        return 3
    return 4


@functools.cache
def _unicode_class(name: str) -> Ranges:
    test = _UNICODE_PREDICATES[name]
    ranges = []
    start = None
    for cp in range(_MAX_CODE_POINT + 1):
        if test(chr(cp)):
            if start is None:
                start = cp
        elif start is not None:
            ranges.append((start, cp - 1))
            start = None
    if start is not None:
        ranges.append((start, _MAX_CODE_POINT))
    return tuple(ranges)


@dataclass(frozen=True)
class _CharSet:
    ranges: Ranges
    _offsets: tuple[int, ...] = field(init=False, repr=False, compare=False)
    _size: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.ranges:
            raise InvalidRegexError("character class matches nothing")
        offsets = []
        total = 0
        for lo, hi in self.ranges:
            offsets.append(total)
            total += hi - lo + 1
        object.__setattr__(self, "_offsets", tuple(offsets))
        object.__setattr__(self, "_size", total)

    def emit(self, rng: random.Random, out: list[str]) -> None:
        k = rng.randrange(self._size)
        i = bisect.bisect_right(self._offsets, k) - 1
        out.append(chr(self.ranges[i][0] + k - self._offsets[i]))

    @property
    def capacity(self) -> int:
        return _utf8_len(self.ranges[-1][1])

    @property
    def is_ascii(self) -> bool:
        return self.ranges[-1][1] < 0x80


@dataclass(frozen=True)
class _Empty:
    def emit(self, rng: random.Random, out: list[str]) -> None:
        pass

    capacity = 0
    is_ascii = True


@dataclass(frozen=True)
class _Concat:
    items: tuple

    def emit(self, rng: random.Random, out: list[str]) -> None:
        for item in self.items:
            item.emit(rng, out)

    @property
    def capacity(self) -> int:
        return sum(item.capacity for item in self.items)

    @property
    def is_ascii(self) -> bool:
        return all(item.is_ascii for item in self.items)


@dataclass(frozen=True)
class _Alternation:
    options: tuple

    def emit(self, rng: random.Random, out: list[str]) -> None:
        rng.choice(self.options).emit(rng, out)

    @property
    def capacity(self) -> int:
        return max(option.capacity for option in self.options)

    @property
    def is_ascii(self) -> bool:
        return all(option.is_ascii for option in self.options)


@dataclass(frozen=True)
class _Repeat:
    node: object
    low: int
    high: int

    def emit(self, rng: random.Random, out: list[str]) -> None:
        for _ in range(rng.randint(self.low, self.high)):
            self.node.emit(rng, out)

    @property
    def capacity(self) -> int:
        return self.high * self.node.capacity

    @property
    def is_ascii(self) -> bool:
        return self.node.is_ascii


class _Parser:
    """Recursive-descent parser turning a pattern into sampling nodes."""

    def __init__(self, pattern: str, *, unicode: bool, max_repeat: int) -> None:
        self._text = pattern
        self._pos = 0
        self._unicode = unicode
        self._universe = _UNICODE_UNIVERSE if unicode else _ASCII_UNIVERSE
        self._max_repeat = max_repeat
        self._flags: frozenset[str] = frozenset()

    def parse(self):
        node = self._alternation()
        if self._pos < len(self._text):
            raise self._error("unopened group")
        return node

    def _error(self, message: str) -> InvalidRegexError:
        return InvalidRegexError(f"{message} at position {self._pos}")

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _next(self) -> str:
        ch = self._peek()
        if not ch:
            raise self._error("unexpected end of pattern")
        self._pos += 1
        return ch

    def _eat(self, token: str) -> bool:
        if self._text.startswith(token, self._pos):
            self._pos += len(token)
            return True
        return False

    def _skip_verbose(self) -> None:
        if "x" not in self._flags:
            return
        while self._pos < len(self._text):
            ch = self._text[self._pos]
            if ch.isspace():
                self._pos += 1
            elif ch == "#":
                end = self._text.find("\n", self._pos)
                self._pos = len(self._text) if end < 0 else end + 1
            else:
                break

    def _alternation(self):
        options = [self._concat()]
        while self._eat("|"):
            options.append(self._concat())
        return options[0] if len(options) == 1 else _Alternation(tuple(options))

    def _concat(self):
        items = []
        while True:
            self._skip_verbose()
            if self._peek() in ("", "|", ")"):
                break
            atom = self._atom()
            if atom is not None:
                items.append(self._quantified(atom))
        if len(items) == 1:
            return items[0]
        return _Concat(tuple(items)) if items else _Empty()

    def _quantified(self, atom):
        while True:
            self._skip_verbose()
            bounds = self._quantifier()
            if bounds is None:
                return atom
            low, high = bounds
            self._eat("?")
            atom = _Repeat(atom, low, low + self._max_repeat if high is None else high)

    def _quantifier(self) -> tuple[int, int | None] | None:
        ch = self._peek()
        if ch == "*":
            self._pos += 1
            return 0, None
        if ch == "+":
            self._pos += 1
            return 1, None
        if ch == "?":
            self._pos += 1
            return 0, 1
        if ch != "{":
            return None
        self._pos += 1
        low = self._number()
        if low is None:
            raise self._error("invalid counted repetition")
        high: int | None = self._number() if self._eat(",") else low
        if not self._eat("}"):
            raise self._error("unclosed counted repetition")
        if high is not None and high < low:
            raise self._error("invalid counted repetition range")
        return low, high

    def _number(self) -> int | None:
        start = self._pos
        while self._peek() and self._peek() in string.digits:
            self._pos += 1
        digits = self._text[start:self._pos]
        return int(digits) if digits else None

    def _atom(self):
        ch = self._next()
        if ch == "(":
            return self._group()
        if ch == "[":
            return self._class()
        if ch == ".":
            if "s" in self._flags:
                return _CharSet(self._universe)
            return _CharSet(_complement(((10, 10),), self._universe))
        if ch in "^$":
            return _Empty()
        if ch == "\\":
            return self._escape_atom()
        if ch in "*+?{":
            raise self._error("repetition operator missing expression")
        return self._literal(ord(ch))

    def _literal(self, code_point: int) -> _CharSet:
        return _CharSet(self._case_fold(((code_point, code_point),)))

    def _case_fold(self, ranges: Iterable[tuple[int, int]]) -> Ranges:
        ranges = _normalize(ranges)
        if "i" not in self._flags or sum(hi - lo + 1 for lo, hi in ranges) > _FOLD_LIMIT:
            return ranges
        extra = []
        for lo, hi in ranges:
            for cp in range(lo, hi + 1):
                ch = chr(cp)
                for variant in {ch.lower(), ch.upper(), ch.swapcase()}:
                    if len(variant) == 1:
                        extra.append((ord(variant), ord(variant)))
        return _normalize([*ranges, *extra])

    def _group(self):
        saved = self._flags
        if self._eat("?"):
            if self._eat(":"):
                pass
            elif self._text.startswith(("<=", "<!"), self._pos) or self._peek() in ("=", "!"):
                raise self._error("look-around is not supported")
            elif self._eat("P<") or self._eat("<"):
                end = self._text.find(">", self._pos)
                if end < 0 or not self._text[self._pos:end].isidentifier():
                    raise self._error("invalid capture group name")
                self._pos = end + 1
            elif self._read_flags():
                return None
        body = self._alternation()
        if not self._eat(")"):
            raise self._error("unclosed group")
        self._flags = saved
        return body

    def _read_flags(self) -> bool:
        """Apply an inline flag group; return True if it had no body."""
        flags = set(self._flags)
        enable = True
        while True:
            ch = self._next()
            if ch == "-":
                if not enable:
                    raise self._error("repeated negation in flags")
                enable = False
            elif ch in "imsxuU":
                if enable:
                    flags.add(ch)
                else:
                    flags.discard(ch)
            elif ch in ":)":
                self._flags = frozenset(flags)
                return ch == ")"
            else:
                raise self._error(f"unrecognized flag {ch!r}")

    def _perl_class(self, letter: str) -> Ranges:
        name = letter.lower()
        ranges = _unicode_class(name) if self._unicode else _ASCII_CLASSES[name]
        return _complement(ranges, self._universe) if letter.isupper() else ranges

    def _escape_atom(self):
        ch = self._next()
        if ch in "dwsDWS":
            return _CharSet(self._perl_class(ch))
        if ch in "bBAzZ":
            return _Empty()
        return self._literal(self._escape_char(ch))

    def _escape_char(self, ch: str) -> int:
        if ch in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[ch]
        if ch == "x":
            return self._hex(2)
        if ch == "u":
            return self._hex(4)
        if ch == "U":
            return self._hex(8)
        if ch.isdigit():
            raise self._error("backreferences are not supported")
        if ch.isalnum():
            raise self._error(f"unrecognized escape \\{ch}")
        return ord(ch)

    def _hex(self, width: int) -> int:
        if self._eat("{"):
            end = self._text.find("}", self._pos)
            if end < 0:
                raise self._error("unclosed hexadecimal escape")
            digits = self._text[self._pos:end]
            self._pos = end + 1
        else:
            digits = self._text[self._pos:self._pos + width]
            self._pos += len(digits)
            if len(digits) != width:
                raise self._error("incomplete hexadecimal escape")
        if not digits or any(d not in string.hexdigits for d in digits):
            raise self._error("invalid hexadecimal escape")
        value = int(digits, 16)
        if value > _MAX_CODE_POINT or 0xD800 <= value <= 0xDFFF:
            raise self._error("invalid code point in escape")
        return value

    def _class(self) -> _CharSet:
        negated = self._eat("^")
        ranges: list[tuple[int, int]] = []
        first = True
        while True:
            if not self._peek():
                raise self._error("unclosed character class")
            ch = self._next()
            if ch == "]" and not first:
                break
            first = False
            if ch == "\\":
                escaped = self._next()
                if escaped in "dwsDWS":
                    ranges.extend(self._perl_class(escaped))
                    continue
                lo = 8 if escaped == "b" else self._escape_char(escaped)
            else:
                lo = ord(ch)
            if self._peek() == "-" and self._text[self._pos + 1:self._pos + 2] not in ("]", ""):
                self._pos += 1
                end = self._next()
                hi = self._escape_char(self._next()) if end == "\\" else ord(end)
                if hi < lo:
                    raise self._error("invalid character class range")
                ranges.append((lo, hi))
            else:
                ranges.append((lo, lo))
        folded = self._case_fold(ranges)
        if negated:
            folded = _complement(folded, self._universe)
        return _CharSet(folded)


class RegexSampler:
    """Draws random strings that match a regular expression."""

    def __init__(self, pattern: str, max_repeat: int = 100, ascii_only: bool = False) -> None:
        if max_repeat < 0:
            raise ValueError("max_repeat must not be negative")
        self.pattern = pattern
        self.max_repeat = max_repeat
        self._root = _Parser(pattern, unicode=not ascii_only, max_repeat=max_repeat).parse()

    def sample(self, rng: random.Random) -> str:
        """Return one string matching the pattern, drawn with ``rng``."""
        out: list[str] = []
        self._root.emit(rng, out)
        return "".join(out)

    @property
    def is_ascii(self) -> bool:
        """True if every string the sampler can produce is ASCII."""
        return self._root.is_ascii

    @property
    def capacity(self) -> int:
        """Upper bound on the UTF-8 length of a generated string."""
        return self._root.capacity