import csv
from io import StringIO

from url_splitter.constants import COMPONENT_COLUMNS
from url_splitter.models import SplitOptions
from url_splitter.splitter import split_urls


def _rows(text: str, delimiter: str = ","):
    return list(csv.reader(StringIO(text), delimiter=delimiter))


def test_split_urls_emits_header_and_one_row_per_line():
    source = StringIO("http://user@example.com:8080/path?q=1#frag\nnot a url\n\n")
    sink = StringIO()

    stats = split_urls(source, sink)

    rows = _rows(sink.getvalue())
    assert rows[0] == ["url", *COMPONENT_COLUMNS]
    assert len(rows) == 4
    assert stats.rows_read == 3
    assert stats.rows_written == 3
    assert stats.parse_errors == 2

    good = dict(zip(rows[0], rows[1]))
    assert good["scheme"] == "http"
    assert good["host"] == "example.com"
    assert good["port"] == "8080"
    assert good["path"] == "/path"
    assert good["query"] == "q=1"
    assert good["fragment"] == "frag"
    assert good["userinfo"] == "user"
    assert good["error"] == ""

    bad = dict(zip(rows[0], rows[2]))
    assert bad["url"] == "not a url"
    assert all(bad[column] == "" for column in COMPONENT_COLUMNS[:-1])
    assert bad["error"] != ""


def test_split_urls_without_headers():
    sink = StringIO()

    split_urls(StringIO("https://example.com/\n"), sink, SplitOptions(headers=False))

    rows = _rows(sink.getvalue())
    assert len(rows) == 1
    assert rows[0][:3] == ["https://example.com/", "https", "example.com"]


def test_split_urls_csv_input_appends_components_after_original_columns():
    source = StringIO('id,website,notes\n1,"https://shop.example.co.uk/a?x=1,2",first\n2,oops,"has ""quotes"""\n')
    sink = StringIO()

    stats = split_urls(source, sink, SplitOptions(csv_input=True, column="website"))

    rows = _rows(sink.getvalue())
    assert rows[0] == ["id", "website", "notes", *COMPONENT_COLUMNS]
    assert rows[1][:3] == ["1", "https://shop.example.co.uk/a?x=1,2", "first"]
    first = dict(zip(rows[0], rows[1]))
    assert first["query"] == "x=1,2"
    assert first["registration"] == "example.co.uk"
    assert rows[2][:3] == ["2", "oops", 'has "quotes"']
    assert stats.parse_errors == 1
    assert all(len(row) == len(rows[0]) for row in rows)


def test_split_urls_tab_delimited_output():
    sink = StringIO()

    split_urls(StringIO("https://example.com/a\tb\n"), sink, SplitOptions(delimiter="\t"))

    rows = _rows(sink.getvalue(), delimiter="\t")
    assert rows[1][0] == "https://example.com/a\tb"
    assert rows[1][-1] != ""


def test_split_urls_empty_input_writes_only_header():
    sink = StringIO()

    stats = split_urls(StringIO(""), sink)

    assert _rows(sink.getvalue()) == [["url", *COMPONENT_COLUMNS]]
    assert stats.rows_read == 0
