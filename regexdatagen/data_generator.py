"""Generation of data items from a regular expression."""

from __future__ import annotations

import enum
import random
import re
from collections.abc import Iterator

from .errors import GenerationFailedError
from .regex_engine import RegexEngine
from .sampler import RegexSampler

_MAX_REPEAT = 100
_LETTER_CLASS = re.compile(r"\[([a-z])-([a-z])\]\{([0-9]+)\}")
_DIGIT_CLASS = re.compile(r"\[0-9\]\{([0-9]+)\}")


class GenerationMode(enum.Enum):
    """How a generator produces its items."""

    RANDOM = "random"
    SEQUENTIAL = "sequential"
    REVERSE_SEQUENTIAL = "reverse_sequential"


class DataGenerator:
    """Produces strings matching a pattern, randomly or in sequence."""

    def __init__(self, pattern: str, seed: int | None = None, ascii_only: bool = False) -> None:
        self._engine = RegexEngine(pattern)
        self._sampler = RegexSampler(pattern, _MAX_REPEAT, ascii_only)
        self._rng = random.Random(seed)

    def generate(self, count: int, mode: GenerationMode | str = GenerationMode.RANDOM) -> list[str]:
        """Return up to ``count`` items produced in the given mode."""
        if count < 0:
            raise ValueError("count must not be negative")
        mode = GenerationMode(mode)
        if mode is GenerationMode.RANDOM:
            return [self._sampler.sample(self._rng) for _ in range(count)]
        return list(self._sequential(count, reverse=mode is GenerationMode.REVERSE_SEQUENTIAL))

    @property
    def is_ascii(self) -> bool:
        """True if only ASCII text can be generated."""
        return self._sampler.is_ascii

    @property
    def capacity(self) -> int:
        """Upper bound on the UTF-8 length of a generated item."""
        return self._sampler.capacity

    @property
    def pattern(self) -> str:
        """The pattern items are generated from."""
        return self._engine.pattern

    def _sequential(self, count: int, reverse: bool) -> Iterator[str]:
        if match := _LETTER_CLASS.fullmatch(self.pattern):
            start, end, length = match.group(1), match.group(2), int(match.group(3))
            return _letter_sequence(start, end, length, count, reverse)
        if match := _DIGIT_CLASS.fullmatch(self.pattern):
            return _digit_sequence(int(match.group(1)), count, reverse)
        raise GenerationFailedError("Sequential generation not supported for complex patterns")


def _letter_sequence(start: str, end: str, length: int, count: int, reverse: bool) -> Iterator[str]:
    alphabet = [chr(cp) for cp in range(ord(start), ord(end) + 1)]
    base = len(alphabet)
    total = base**length
    for i in range(count):
        if reverse:
            if i >= total:
                return
            index = total - 1 - i
        else:
            index = i
        letters = []
        rest = index
        for _ in range(length):
            rest, digit = divmod(rest, base)
            letters.append(alphabet[digit])
        if not reverse:
            letters.reverse()
        yield "".join(letters)
        # Forward order emits one wrapped-around value before stopping.
        if index >= total:
            return


def _digit_sequence(length: int, count: int, reverse: bool) -> Iterator[str]:
    total = 10**length
    for i in range(min(count, total)):
        number = total - 1 - i if reverse else i
        yield f"{number:0{length}d}"