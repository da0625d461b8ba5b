"""Compilation and matching of user supplied regular expressions."""

from __future__ import annotations

import re

from .errors import InvalidRegexError


class RegexEngine:
    """A compiled pattern that can be checked against text."""

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._compiled = self._compile(pattern)

    @staticmethod
    def _compile(pattern: str) -> re.Pattern[str]:
        try:
            return re.compile(pattern)
        except re.error as exc:
            raise InvalidRegexError(str(exc)) from exc

    @property
    def pattern(self) -> str:
        """The pattern as it was given."""
        return self._pattern

    def is_match(self, text: str) -> bool:
        """Return True if the pattern matches anywhere in ``text``."""
        return self._compiled.search(text) is not None

    @staticmethod
    def validate_pattern(pattern: str) -> None:
        """Raise InvalidRegexError if ``pattern`` does not compile."""
        RegexEngine._compile(pattern)