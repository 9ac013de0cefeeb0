from __future__ import annotations

import csv
import io
from pathlib import Path

import pytest

from url_splitter import cli
from url_splitter.constants import COMPONENT_COLUMNS
from url_splitter.models import SplitStats


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    monkeypatch.delenv("URL_SPLITTER_CONFIG", raising=False)
    monkeypatch.delenv("URL_SPLITTER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("URL_SPLITTER_LOG_FORMAT", raising=False)


def _read_csv(text: str, delimiter: str = ","):
    return list(csv.reader(io.StringIO(text), delimiter=delimiter))


def test_cli_reads_file_and_writes_output_file(tmp_path: Path):
    input_path = tmp_path / "urls.txt"
    input_path.write_text("https://a.b/c?d=e#f\nnot a url\n", encoding="utf-8")
    output_path = tmp_path / "out.csv"

    exit_code = cli.main([str(input_path), "-o", str(output_path)])

    assert exit_code == 0
    rows = _read_csv(output_path.read_text(encoding="utf-8"))
    assert rows[0] == ["url", *COMPONENT_COLUMNS]
    assert rows[1][:7] == ["https://a.b/c?d=e#f", "https", "a.b", "", "/c", "d=e", "f"]
    assert rows[2][0] == "not a url"
    assert len(rows) == 3


def test_cli_reads_stdin_and_writes_stdout(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("http://user@example.com:8080/path?q=1#frag\n"))

    exit_code = cli.main(["-", "--no-headers"])

    captured = capsys.readouterr()
    assert exit_code == 0
    rows = _read_csv(captured.out)
    assert len(rows) == 1
    assert rows[0][:8] == ["http://user@example.com:8080/path?q=1#frag", "http", "example.com", "8080", "/path", "q=1", "frag", "user"]


def test_cli_csv_input_with_named_column_and_delimiter(tmp_path: Path, capsys):
    input_path = tmp_path / "sites.csv"
    input_path.write_text("name;site\nExample;https://www.example.com/\nBroken;www.example.com\n", encoding="utf-8")

    exit_code = cli.main([str(input_path), "--csv", "--column", "site", "-d", ";"])

    captured = capsys.readouterr()
    assert exit_code == 0
    rows = _read_csv(captured.out, delimiter=";")
    assert rows[0] == ["name", "site", *COMPONENT_COLUMNS]
    assert rows[1][:4] == ["Example", "https://www.example.com/", "https", "www.example.com"]
    assert rows[2][-1] == "relative URL without a scheme"


def test_cli_missing_input_file_exits_non_zero(tmp_path: Path, capsys):
    exit_code = cli.main([str(tmp_path / "missing.txt")])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "ERROR" in captured.err
    assert "missing.txt" in captured.err


def test_cli_invalid_delimiter_exits_non_zero(tmp_path: Path, capsys):
    input_path = tmp_path / "urls.txt"
    input_path.write_text("https://example.com\n", encoding="utf-8")

    exit_code = cli.main([str(input_path), "-d", "ab"])

    assert exit_code == 1
    assert "invalid configuration" in capsys.readouterr().err


def test_cli_unknown_column_exits_non_zero(tmp_path: Path, capsys):
    input_path = tmp_path / "sites.csv"
    input_path.write_text("id,link\n1,https://example.com\n", encoding="utf-8")

    exit_code = cli.main([str(input_path), "--csv", "--column", "website"])

    assert exit_code == 1
    assert "website" in capsys.readouterr().err


def test_cli_non_ascii_digit_column_exits_cleanly(tmp_path: Path, capsys):
    input_path = tmp_path / "sites.csv"
    input_path.write_text("id,link\n1,https://example.com\n", encoding="utf-8")

    exit_code = cli.main([str(input_path), "--csv", "--column", "\u00b2"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "ERROR" in captured.err


def test_cli_unwritable_output_exits_non_zero(tmp_path: Path, capsys):
    input_path = tmp_path / "urls.txt"
    input_path.write_text("https://example.com\n", encoding="utf-8")

    exit_code = cli.main([str(input_path), "-o", str(tmp_path / "no-such-dir" / "out.csv")])

    assert exit_code == 1
    assert "ERROR" in capsys.readouterr().err


def test_cli_uses_config_file_defaults(tmp_path: Path, capsys):
    config_path = tmp_path / "url-splitter.yaml"
    config_path.write_text("csv: true\ncolumn: 1\nheaders: false\n", encoding="utf-8")
    input_path = tmp_path / "sites.csv"
    input_path.write_text("7,https://example.org/x\n", encoding="utf-8")

    exit_code = cli.main([str(input_path), "--config", str(config_path)])

    rows = _read_csv(capsys.readouterr().out)
    assert exit_code == 0
    assert len(rows) == 1
    assert rows[0][:4] == ["7", "https://example.org/x", "https", "example.org"]


def test_cli_summary_goes_to_stderr(monkeypatch, tmp_path: Path, capsys):
    input_path = tmp_path / "urls.txt"
    input_path.write_text("https://example.com\n", encoding="utf-8")

    def fake_split_urls(source, sink, options):
        sink.write("url\n")
        return SplitStats(rows_read=5, rows_written=5, parse_errors=2)

    monkeypatch.setattr(cli, "split_urls", fake_split_urls)

    exit_code = cli.main([str(input_path), "--summary"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out == "url\n"
    assert "Rows read" in captured.err
    assert "Parse errors" in captured.err
