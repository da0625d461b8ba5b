"""Exceptions raised while compiling patterns, generating data and exporting it."""

from __future__ import annotations


class RegexDataGenError(Exception):
    """Base class for every error raised by this package."""

    prefix = "Error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class InvalidRegexError(RegexDataGenError, ValueError):
    """The pattern cannot be compiled or cannot be sampled."""

    prefix = "Invalid regex pattern"


class GenerationFailedError(RegexDataGenError):
    """Data could not be produced for the requested pattern and mode."""

    prefix = "Data generation failed"


class ExportFailedError(RegexDataGenError):
    """Generated data could not be written out."""

    prefix = "Export failed"