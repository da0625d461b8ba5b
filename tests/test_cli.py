import json
import re

import pytest

from regexdatagen.cli import main


def test_validate_valid_pattern(capsys):
    assert main(["validate", r"\d{3}-\d{2}-\d{4}"]) == 0
    assert "is valid" in capsys.readouterr().out


@pytest.mark.parametrize("pattern", ["[invalid", "*invalid"])
def test_validate_invalid_pattern(capsys, pattern):
    assert main(["validate", pattern]) == 1
    out = capsys.readouterr().out
    assert "is invalid" in out
    assert "Invalid regex pattern" in out


def test_generate_csv_matches_pattern(tmp_path, capsys):
    path = tmp_path / "out.csv"
    status = main(["generate", "-p", "[A-Z]{3}[0-9]{3}", "-n", "4", "-o", str(path), "-s", "7"])
    assert status == 0
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "generated_data"
    assert len(lines) == 5
    assert all(re.fullmatch("[A-Z]{3}[0-9]{3}", line) for line in lines[1:])
    out = capsys.readouterr().out
    assert "Using seed: 7" in out
    assert "Exporting to CSV format" in out


def test_generate_sequential_digits(tmp_path):
    path = tmp_path / "out.json"
    status = main(
        ["generate", "-p", "[0-9]{3}", "-n", "3", "-f", "json", "-m", "sequential", "-o", str(path)]
    )
    assert status == 0
    assert json.loads(path.read_text(encoding="utf-8")) == ["000", "001", "002"]


def test_generate_reverse_letters(tmp_path):
    path = tmp_path / "out.tsv"
    status = main(
        ["generate", "-p", "[a-z]{2}", "-n", "3", "-f", "tsv", "-m", "reverse", "-o", str(path)]
    )
    assert status == 0
    assert path.read_text(encoding="utf-8").splitlines()[1:] == ["zz", "yz", "xz"]


def test_same_seed_gives_same_file(tmp_path):
    first = tmp_path / "a.xml"
    second = tmp_path / "b.xml"
    for path in (first, second):
        assert main(["generate", "-p", r"\d{2}", "-f", "xml", "-s", "42", "-o", str(path)]) == 0
    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")
    assert first.read_text(encoding="utf-8").count("<item>") == 10


def test_missing_output_directory(tmp_path, capsys):
    path = tmp_path / "missing" / "out.csv"
    assert main(["generate", "-p", "[a-z]", "-o", str(path)]) == 1
    assert "does not exist" in capsys.readouterr().err
    assert not path.exists()


def test_invalid_pattern_fails_generation(tmp_path, capsys):
    path = tmp_path / "out.csv"
    assert main(["generate", "-p", "[invalid", "-o", str(path)]) == 1
    assert "Failed to create generator" in capsys.readouterr().err


def test_sequential_complex_pattern_fails(tmp_path, capsys):
    path = tmp_path / "out.csv"
    status = main(["generate", "-p", r"[a-z]+@[a-z]+\.com", "-m", "sequential", "-o", str(path)])
    assert status == 1
    assert "Sequential generation not supported" in capsys.readouterr().err


def test_missing_required_argument_exits():
    with pytest.raises(SystemExit) as info:
        main(["generate", "-p", "[a-z]"])
    assert info.value.code == 2


def test_negative_count_rejected(tmp_path):
    with pytest.raises(SystemExit) as info:
        main(["generate", "-p", "[a-z]", "-n", "-1", "-o", str(tmp_path / "out.csv")])
    assert info.value.code == 2