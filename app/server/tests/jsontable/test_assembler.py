import pytest

from jsontable.assembler import assemble_object, assemble_table, build_rows
from jsontable.config import resolve_config
from jsontable.errors import ColumnAlignmentError
from jsontable.flattener import FlatEntry
from jsontable.headers import Header


@pytest.fixture
def headers():
    return [Header("id", 2), Header("name", 2), Header("email", 1)]


@pytest.fixture
def records():
    return [
        [FlatEntry("id", "1"), FlatEntry("name", "Alice"), FlatEntry("email", "a@example.com")],
        [FlatEntry("name", "Bob"), FlatEntry("id", "2")],
    ]


class TestTableAssembly:

    def test_build_rows_aligns_cells(self, records, headers):
        rows = build_rows(records, headers)

        assert rows == [["1", "Alice", "a@example.com"], ["2", "Bob", ""]]
        assert all(len(row) == len(headers) for row in rows)

    def test_build_rows_last_repeated_value_wins(self):
        rows = build_rows([[FlatEntry("x", "1"), FlatEntry("x", "2")]], [Header("x", 2)])
        assert rows == [["2"]]

    def test_build_rows_unknown_column(self, headers):
        with pytest.raises(ColumnAlignmentError) as exc_info:
            build_rows([[FlatEntry("phone", "555")]], headers)

        assert "phone" in str(exc_info.value)

    def test_assemble_table_with_headers(self, records, headers):
        config = resolve_config(end_of_line="\n")
        assert assemble_table(records, headers, config) == (
            "id;name;email\n"
            "1;Alice;a@example.com\n"
            "2;Bob;"
        )

    def test_assemble_table_without_headers(self, records, headers):
        config = resolve_config(end_of_line="\r\n", row_delimiter=",", include_headers=False)
        assert assemble_table(records, headers, config) == "1,Alice,a@example.com\r\n2,Bob,"


class TestObjectAssembly:

    def test_vertical(self):
        config = resolve_config(end_of_line="\n")
        entries = [FlatEntry("a", "1"), FlatEntry("b", "s")]
        assert assemble_object(entries, config) == "a;1\nb;s"

    def test_horizontal(self):
        config = resolve_config(end_of_line="\n", vertical_object_output=False)
        entries = [FlatEntry("a", "1"), FlatEntry("b", "s")]
        assert assemble_object(entries, config) == "a;b\n1;s"

    def test_empty_value_is_kept(self):
        config = resolve_config(end_of_line="\n", undefined_placeholder="N/A")
        assert assemble_object([FlatEntry("a", "")], config) == "a;"
