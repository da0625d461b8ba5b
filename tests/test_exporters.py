import json
import re

import pytest

from regexdatagen.data_generator import DataGenerator
from regexdatagen.errors import ExportFailedError
from regexdatagen.exporters import (
    CsvExporter,
    Exporter,
    JsonExporter,
    TsvExporter,
    XmlExporter,
    exporter_for,
)


@pytest.fixture
def ssn_like_data():
    return DataGenerator(r"\d{3}-\d{2}-\d{4}", seed=42).generate(5)


def test_end_to_end_csv(tmp_path, ssn_like_data):
    path = tmp_path / "test.csv"
    CsvExporter().export(ssn_like_data, str(path))
    content = path.read_text(encoding="utf-8")
    assert "generated_data" in content
    assert len(content.splitlines()) == 6
    assert content.splitlines()[1:] == ssn_like_data


def test_end_to_end_json(tmp_path, ssn_like_data):
    path = tmp_path / "test.json"
    JsonExporter().export(ssn_like_data, str(path))
    content = path.read_text(encoding="utf-8")
    assert content.startswith("[")
    assert content.endswith("]")
    assert json.loads(content) == ssn_like_data


def test_end_to_end_xml(tmp_path, ssn_like_data):
    path = tmp_path / "test.xml"
    XmlExporter().export(ssn_like_data, str(path))
    content = path.read_text(encoding="utf-8")
    assert "<?xml" in content
    assert "<data>" in content
    assert "<item>" in content
    assert re.findall(r"<item>(.*?)</item>", content) == ssn_like_data


def test_end_to_end_tsv(tmp_path, ssn_like_data):
    path = tmp_path / "test.tsv"
    TsvExporter().export(ssn_like_data, str(path))
    content = path.read_text(encoding="utf-8")
    assert "generated_data" in content
    assert len(content.splitlines()) == 6


@pytest.mark.parametrize(
    "name, exporter",
    [
        ("csv", CsvExporter()),
        ("json", JsonExporter()),
        ("xml", XmlExporter()),
        ("tsv", TsvExporter()),
    ],
)
def test_multiple_format_exports(tmp_path, name, exporter):
    data = DataGenerator("[A-Z]{3}[0-9]{3}", seed=123).generate(3)
    path = tmp_path / f"test.{name}"
    exporter.export(data, str(path))
    assert path.read_text(encoding="utf-8") != ""
    assert exporter.format_name() == name.upper()


def test_csv_quotes_special_fields(tmp_path):
    path = tmp_path / "out.csv"
    CsvExporter().export(["a,b", 'say "hi"', "plain"], str(path))
    assert path.read_text(encoding="utf-8") == (
        'generated_data\n"a,b"\n"say ""hi"""\nplain\n'
    )


def test_csv_custom_header(tmp_path):
    path = tmp_path / "out.csv"
    CsvExporter(headers=["code"]).export(["x"], str(path))
    assert path.read_text(encoding="utf-8") == "code\nx\n"


def test_csv_header_width_mismatch_fails(tmp_path):
    path = tmp_path / "out.csv"
    with pytest.raises(ExportFailedError, match="Failed to write CSV record"):
        CsvExporter(headers=["a", "b"]).export(["x"], str(path))


def test_json_pretty_layout(tmp_path):
    path = tmp_path / "out.json"
    JsonExporter().export(["a", "b"], str(path))
    assert path.read_text(encoding="utf-8") == '[\n  "a",\n  "b"\n]'


def test_json_compact_objects(tmp_path):
    path = tmp_path / "out.json"
    JsonExporter(pretty=False, array_format=False).export(["a", "b"], str(path))
    assert path.read_text(encoding="utf-8") == '[{"id":0,"value":"a"},{"id":1,"value":"b"}]'


def test_json_keeps_unicode(tmp_path):
    path = tmp_path / "out.json"
    JsonExporter(pretty=False).export(["é"], str(path))
    assert path.read_text(encoding="utf-8") == '["é"]'


def test_tsv_escapes_tabs_and_newlines(tmp_path):
    path = tmp_path / "out.tsv"
    TsvExporter(headers=["a", "b"]).export(["x\ty", "1\n2"], str(path))
    assert path.read_text(encoding="utf-8") == "a\tb\nx\\ty\n1\\n2\n"


def test_xml_exact_document(tmp_path):
    path = tmp_path / "out.xml"
    XmlExporter().export(["1", "2"], str(path))
    assert path.read_text(encoding="utf-8") == (
        '<?xml version="1.0" encoding="UTF-8"?><data><item>1</item><item>2</item></data>'
    )


def test_xml_custom_elements_and_empty_data(tmp_path):
    path = tmp_path / "out.xml"
    XmlExporter(root_element="rows", item_element="row").export([], str(path))
    assert path.read_text(encoding="utf-8") == '<?xml version="1.0" encoding="UTF-8"?><rows></rows>'


def test_xml_text_is_escaped(tmp_path):
    path = tmp_path / "out.xml"
    XmlExporter().export(["a<b"], str(path))
    content = path.read_text(encoding="utf-8")
    assert "a<b" not in content
    assert "&amp;lt;" in content


@pytest.mark.parametrize("exporter", [CsvExporter(), JsonExporter(), XmlExporter(), TsvExporter()])
def test_missing_directory_fails(tmp_path, exporter):
    path = tmp_path / "missing" / "out.txt"
    with pytest.raises(ExportFailedError, match="Failed to create"):
        exporter.export(["x"], str(path))


@pytest.mark.parametrize("name", ["csv", "JSON", "Xml", "tsv"])
def test_exporter_for_known_formats(name):
    exporter = exporter_for(name)
    assert isinstance(exporter, Exporter)
    assert exporter.format_name() == name.upper()


def test_exporter_for_unknown_format():
    with pytest.raises(ValueError, match="unknown output format"):
        exporter_for("yaml")