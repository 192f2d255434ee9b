"""
/tests/test_clauses.py

子句解析单元测试：引号感知切分、WHERE、SET、语句切分
"""
import pytest

from sql.clauses import (
    Predicate,
    extract_identifier_after_keyword,
    find_unquoted_equals,
    parse_assignments,
    parse_paren_list,
    parse_where_equals,
    split_assignments_outside_quotes,
    split_statements,
)
from sql.errors import SQLSyntaxError


def test_quoted_comma_is_one_value():
    assert parse_paren_list("(1, \"a,b\", 'x')") == ["1", "a,b", "x"]


def test_empty_paren_list_yields_single_empty_value():
    assert parse_paren_list("()") == [""]


def test_trailing_comma_yields_empty_last_value():
    assert parse_paren_list("(a, b,)") == ["a", "b", ""]


def test_opposite_quote_inside_literal():
    assert parse_paren_list("('it\"s', \"don't\")") == ['it"s', "don't"]


def test_paren_list_without_parentheses():
    assert parse_paren_list(" name, age ") == ["name", "age"]


def test_find_unquoted_equals_skips_quoted():
    assert find_unquoted_equals("name = 'a=b'") == 5
    assert find_unquoted_equals("'a=b'") == -1


def test_extract_identifier_after_keyword():
    assert extract_identifier_after_keyword("SELECT * FROM people WHERE x=1", "FROM") == "people"
    assert extract_identifier_after_keyword("drop table t;", "TABLE") == "t"
    assert extract_identifier_after_keyword("CREATE TABLE t(a)", "TABLE") == "t"
    assert extract_identifier_after_keyword("SELECT 1", "FROM") == ""


def test_parse_where_equals():
    assert parse_where_equals("SELECT * FROM t WHERE name = 'Bob';") == Predicate("name", "Bob")
    assert parse_where_equals("SELECT * FROM t") is None


def test_where_without_equals_is_an_error():
    with pytest.raises(SQLSyntaxError):
        parse_where_equals("DELETE FROM t WHERE name")


def test_where_with_quoted_equals_only_is_an_error():
    with pytest.raises(SQLSyntaxError):
        parse_where_equals("DELETE FROM t WHERE 'a=b'")


def test_parse_assignments():
    assert parse_assignments("SET age = 31, name = 'Smith, J'") == {
        "age": "31",
        "name": "Smith, J",
    }


def test_parse_assignments_skips_malformed_pieces():
    assert parse_assignments("SET age 31, name=x;") == {"name": "x"}


def test_parse_assignments_keeps_setting_column():
    # 以 SET 开头的列名不能被当成关键字去掉
    assert parse_assignments("setting = 1") == {"setting": "1"}


def test_split_assignments_outside_quotes():
    assert split_assignments_outside_quotes("a=1, b='x,y',") == ["a=1", "b='x,y'"]


def test_split_statements():
    statements, rest = split_statements("CREATE TABLE t (a);\nINSERT INTO t VALUES ('x;y'); SELECT")
    assert statements == ["CREATE TABLE t (a);", "INSERT INTO t VALUES ('x;y');"]
    assert rest == "SELECT"


def test_split_statements_ignores_empty_statements():
    statements, rest = split_statements(" ; ;")
    assert statements == []
    assert rest == ""
