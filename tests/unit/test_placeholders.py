"""Unit tests for placeholder translation, generation and renumbering."""

import pytest

from querycraft import Dialect
from querycraft.placeholders import (
    count_placeholders,
    generate_placeholders,
    has_numbered_placeholders,
    shift_placeholders,
    translate_condition,
)


class TestTranslateCondition:
    def test_postgres_numbers_markers_from_start_index(self) -> None:
        assert translate_condition(Dialect.POSTGRES, "a = ? AND b = ?", 1) == "a = $1 AND b = $2"
        assert translate_condition(Dialect.POSTGRES, "a = ? AND b = ?", 4) == "a = $4 AND b = $5"

    @pytest.mark.parametrize("dialect", [Dialect.MYSQL, Dialect.MARIADB])
    def test_mysql_is_identity(self, dialect: Dialect) -> None:
        assert translate_condition(dialect, "a = ? AND b = ?", 7) == "a = ? AND b = ?"

    def test_markers_inside_string_literals_are_kept(self) -> None:
        assert translate_condition(Dialect.POSTGRES, "name = '?' AND id = ?", 1) == "name = '?' AND id = $1"

    def test_markers_inside_quoted_identifiers_are_kept(self) -> None:
        assert translate_condition(Dialect.POSTGRES, '"what?" = ?', 3) == '"what?" = $3'

    def test_markers_inside_comments_are_kept(self) -> None:
        assert translate_condition(Dialect.POSTGRES, "a = ? -- why?", 1) == "a = $1 -- why?"
        assert translate_condition(Dialect.POSTGRES, "a = ? /* ? */ OR b = ?", 1) == "a = $1 /* ? */ OR b = $2"

    def test_json_operators_are_not_markers(self) -> None:
        assert translate_condition(Dialect.POSTGRES, "tags ?| ? AND doc ?& ?", 1) == "tags ?| $1 AND doc ?& $2"

    def test_dollar_quoted_strings_are_kept(self) -> None:
        condition = "body = $tag$ ? $1 $tag$ AND id = ?"

        assert translate_condition(Dialect.POSTGRES, condition, 1) == "body = $tag$ ? $1 $tag$ AND id = $1"

    def test_condition_without_markers(self) -> None:
        assert translate_condition(Dialect.POSTGRES, "deleted_at IS NULL", 5) == "deleted_at IS NULL"


class TestGeneratePlaceholders:
    def test_postgres(self) -> None:
        assert generate_placeholders(Dialect.POSTGRES, 3, 2) == "$3, $4"

    def test_mysql(self) -> None:
        assert generate_placeholders(Dialect.MYSQL, 3, 3) == "?, ?, ?"

    def test_zero_count(self, dialect: Dialect) -> None:
        assert generate_placeholders(dialect, 1, 0) == ""

    def test_negative_count(self) -> None:
        with pytest.raises(ValueError, match="must not be negative"):
            generate_placeholders(Dialect.POSTGRES, 1, -1)


class TestShiftPlaceholders:
    def test_shift(self) -> None:
        assert shift_placeholders("a = $1 AND b = $2", 3) == "a = $4 AND b = $5"

    def test_multi_digit_indices(self) -> None:
        assert shift_placeholders("x = $9 AND y = $10 AND z = $11", 5) == "x = $14 AND y = $15 AND z = $16"

    def test_neighbouring_digits_are_not_corrupted(self) -> None:
        assert shift_placeholders("$1 AND $12", 1) == "$2 AND $13"
        assert shift_placeholders("$1,$2", 9) == "$10,$11"

    def test_literals_are_not_shifted(self) -> None:
        assert shift_placeholders("note = '$1' AND id = $1", 2) == "note = '$1' AND id = $3"

    def test_zero_offset_returns_input(self) -> None:
        condition = "a = $1"

        assert shift_placeholders(condition, 0) is condition

    def test_qmark_text_is_untouched(self) -> None:
        assert shift_placeholders("a = ?", 4) == "a = ?"


def test_count_placeholders() -> None:
    assert count_placeholders("SELECT ?, '?', $3 -- ?") == 2
    assert count_placeholders("SELECT 1") == 0


def test_count_placeholders_depends_on_dialect() -> None:
    condition = "a ?| ? AND b ?? c"

    assert count_placeholders(condition, Dialect.POSTGRES) == 1
    assert count_placeholders(condition, Dialect.MYSQL) == 4
    assert count_placeholders(condition) == 1


def test_concatenation_after_marker_is_not_a_json_operator() -> None:
    assert translate_condition(Dialect.POSTGRES, "name LIKE ?||'%'", 2) == "name LIKE $2||'%'"
    assert count_placeholders("name LIKE ?||'%'", Dialect.POSTGRES) == 1


def test_has_numbered_placeholders() -> None:
    assert has_numbered_placeholders("a = $1")
    assert not has_numbered_placeholders("a = ? AND note = '$1' -- $2")
    assert not has_numbered_placeholders("body = $tag$ $1 $tag$")
