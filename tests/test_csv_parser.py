"""
Tests for the permissive CSV parser.
"""

import pytest

from showsheet.csv_parser import parse_csv, data_rows, get_field


class TestParseCsv:

    @pytest.mark.unit
    def test_simple_rows(self):
        assert parse_csv("a,b,c\n1,2,3\n") == [["a", "b", "c"], ["1", "2", "3"]]

    @pytest.mark.unit
    def test_quoted_field_with_comma_newline_and_escaped_quote(self):
        rows = parse_csv('"a,b\nc""d"')
        assert rows == [['a,b\nc"d']]

    @pytest.mark.unit
    def test_doubled_quote_inside_quotes_is_literal(self):
        assert parse_csv('""""') == [['"']]

    @pytest.mark.unit
    def test_empty_quoted_field_between_delimiters(self):
        assert parse_csv('a,"",b\n') == [["a", "", "b"]]

    @pytest.mark.unit
    def test_crlf_and_lone_cr_are_discarded(self):
        assert parse_csv("a,b\r\nc,d\r\n") == [["a", "b"], ["c", "d"]]
        assert parse_csv("a\rb\n") == [["ab"]]

    @pytest.mark.unit
    def test_no_trailing_newline_flushes_last_row(self):
        assert parse_csv("a,b\n1,2") == [["a", "b"], ["1", "2"]]

    @pytest.mark.unit
    def test_trailing_empty_field_without_newline(self):
        assert parse_csv("a,") == [["a", ""]]

    @pytest.mark.unit
    def test_trailing_newline_produces_no_phantom_row(self):
        assert parse_csv("a,b\n") == [["a", "b"]]

    @pytest.mark.unit
    def test_blank_line_in_middle_is_a_row(self):
        assert parse_csv("a\n\nb\n") == [["a"], [""], ["b"]]

    @pytest.mark.unit
    def test_backslash_does_not_escape_quotes(self):
        assert parse_csv('"a\\",b\n') == [['a\\', 'b']]

    @pytest.mark.unit
    def test_empty_input(self):
        assert parse_csv("") == []

    @pytest.mark.unit
    def test_rows_may_have_different_lengths(self):
        assert parse_csv("a,b,c\n1\n") == [["a", "b", "c"], ["1"]]


class TestDataRows:

    @pytest.mark.unit
    def test_header_is_dropped(self, venues_csv):
        rows = data_rows(venues_csv)
        assert rows[0][0] == "7th St Entry"
        assert rows[1] == ["Cedar Cultural Center", "416 Cedar Ave S, Minneapolis", "", "West Bank", "550"]

    @pytest.mark.unit
    def test_header_only(self):
        assert data_rows("Name,Address\n") == []

    @pytest.mark.unit
    def test_get_field_missing_column_is_empty(self):
        assert get_field(["a"], 0) == "a"
        assert get_field(["a"], 5) == ""
