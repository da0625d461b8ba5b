"""Writers that store generated data as CSV, JSON, TSV or XML files."""

from __future__ import annotations

import abc
import contextlib
import csv
import json
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from .errors import ExportFailedError

_DEFAULT_HEADER = "generated_data"

_XML_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", "'": "&apos;", '"': "&quot;"}
)


@contextlib.contextmanager
def _step(description: str) -> Iterator[None]:
    """Turn I/O and encoding failures inside the block into ExportFailedError."""
    try:
        yield
    except (OSError, csv.Error, ValueError) as exc:
        raise ExportFailedError(f"{description}: {exc}") from exc


def _create(output_path: str, kind: str) -> TextIO:
    try:
        return open(output_path, "w", encoding="utf-8", newline="")
    except OSError as exc:
        raise ExportFailedError(f"Failed to create {kind} file: {exc}") from exc


def _default_headers() -> list[str]:
    return [_DEFAULT_HEADER]


class Exporter(abc.ABC):
    """Something that writes a list of strings to a file."""

    @abc.abstractmethod
    def export(self, data: Sequence[str], output_path: str) -> None:
        """Write ``data`` to ``output_path``, raising ExportFailedError on failure."""

    @abc.abstractmethod
    def format_name(self) -> str:
        """Upper-case name of the file format."""


@dataclass
class CsvExporter(Exporter):
    """Writes one item per CSV row below a header row."""

    headers: list[str] = field(default_factory=_default_headers)

    def export(self, data: Sequence[str], output_path: str) -> None:
        with _create(output_path, "CSV") as fh:
            writer = csv.writer(fh, lineterminator="\n")
            with _step("Failed to write CSV headers"):
                writer.writerow(self.headers)
            for item in data:
                if len(self.headers) != 1:
                    raise ExportFailedError(
                        "Failed to write CSV record: found record with 1 fields, "
                        f"but the previous record has {len(self.headers)} fields"
                    )
                with _step("Failed to write CSV record"):
                    writer.writerow([item])
            with _step("Failed to flush CSV writer"):
                fh.flush()

    def format_name(self) -> str:
        return "CSV"


@dataclass
class JsonExporter(Exporter):
    """Writes the items as a JSON array of strings or of id/value objects."""

    pretty: bool = True
    array_format: bool = True

    def export(self, data: Sequence[str], output_path: str) -> None:
        with _create(output_path, "JSON") as fh:
            if self.array_format:
                document: list = list(data)
            else:
                document = [{"id": index, "value": item} for index, item in enumerate(data)]
            with _step("Failed to serialize JSON"):
                if self.pretty:
                    text = json.dumps(document, indent=2, ensure_ascii=False)
                else:
                    text = json.dumps(document, separators=(",", ":"), ensure_ascii=False)
            with _step("Failed to write JSON file"):
                fh.write(text)

    def format_name(self) -> str:
        return "JSON"


@dataclass
class TsvExporter(Exporter):
    """Writes one item per line below a tab separated header line."""

    headers: list[str] = field(default_factory=_default_headers)

    def export(self, data: Sequence[str], output_path: str) -> None:
        with _create(output_path, "TSV") as fh:
            with _step("Failed to write TSV headers"):
                fh.write("\t".join(self.headers) + "\n")
            for item in data:
                escaped = item.replace("\t", "\\t").replace("\n", "\\n")
                with _step("Failed to write TSV record"):
                    fh.write(escaped + "\n")

    def format_name(self) -> str:
        return "TSV"


@dataclass
class XmlExporter(Exporter):
    """Writes each item as a child element of a single root element."""

    root_element: str = "data"
    item_element: str = "item"

    def export(self, data: Sequence[str], output_path: str) -> None:
        with _create(output_path, "XML") as fh:
            with _step("Failed to write XML declaration"):
                fh.write('<?xml version="1.0" encoding="UTF-8"?>')
            with _step("Failed to write root element"):
                fh.write(f"<{self.root_element}>")
            for item in data:
                # Item text is escaped twice; existing consumers expect this output.
                content = item.translate(_XML_ESCAPES).translate(_XML_ESCAPES)
                with _step("Failed to write item content"):
                    fh.write(f"<{self.item_element}>{content}</{self.item_element}>")
            with _step("Failed to write root end"):
                fh.write(f"</{self.root_element}>")

    def format_name(self) -> str:
        return "XML"


_EXPORTERS: dict[str, type[Exporter]] = {
    "csv": CsvExporter,
    "json": JsonExporter,
    "xml": XmlExporter,
    "tsv": TsvExporter,
}

EXPORT_FORMATS: tuple[str, ...] = tuple(_EXPORTERS)


def exporter_for(format_name: str) -> Exporter:
    """Return a default exporter for a format name such as ``"csv"``."""
    try:
        return _EXPORTERS[format_name.lower()]()
    except KeyError:
        raise ValueError(f"unknown output format: {format_name!r}") from None