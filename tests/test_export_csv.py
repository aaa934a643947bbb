from datetime import date

import pytest

from pagescrape_core.data_export import CSV_HEADER, export_csv, export_filename, to_csv
from pagescrape_core.errors import NoDataError


def test_quotes_are_doubled():
    content = to_csv(["A", 'B"C'])
    lines = content.split("\n")
    assert lines[0] == "Index,Content"
    assert lines[1:] == ['1,"A"', '2,"B""C"']


def test_commas_and_newlines_stay_inside_quotes():
    content = to_csv(["x, y", "line1\nline2"])
    assert content == 'Index,Content\n1,"x, y"\n2,"line1\nline2"'


def test_no_trailing_newline():
    assert not to_csv(["a"]).endswith("\n")
    assert to_csv([]) == CSV_HEADER


def test_filename_pattern():
    assert export_filename(date(2024, 3, 9)) == "scraped-data-2024-03-09.csv"
    assert export_filename().startswith("scraped-data-")


def test_export_writes_file(tmp_path):
    path = export_csv(["A", "B"], tmp_path, filename="out.csv")
    assert path == tmp_path / "out.csv"
    assert path.read_text(encoding="utf-8") == 'Index,Content\n1,"A"\n2,"B"'


def test_export_nothing_raises(tmp_path):
    with pytest.raises(NoDataError):
        export_csv([], tmp_path)
