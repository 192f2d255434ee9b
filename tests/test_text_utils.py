"""
/tests/test_text_utils.py

词法辅助函数单元测试
"""
from sql.text_utils import (
    NOT_FOUND,
    case_insensitive_find,
    case_insensitive_starts_with,
    clean_literal,
    strip_trailing_semicolon,
    trim,
)


def test_trim_removes_all_whitespace_kinds():
    assert trim(" \t\r\n abc \n") == "abc"
    assert trim("   ") == ""


def test_strip_trailing_semicolon():
    assert strip_trailing_semicolon("  DROP TABLE t ; ") == "DROP TABLE t"
    assert strip_trailing_semicolon("x") == "x"
    # 只去掉一个分号
    assert strip_trailing_semicolon("x;;") == "x;"


def test_case_insensitive_helpers():
    assert case_insensitive_starts_with("select * from t", "SELECT")
    assert not case_insensitive_starts_with("sel", "SELECT")
    assert case_insensitive_find("SELECT a from t", "FROM") == 9
    assert case_insensitive_find("SELECT a", "WHERE") == NOT_FOUND


def test_clean_literal():
    assert clean_literal("  'abc' ;") == "abc"
    assert clean_literal('"Smith, John"') == "Smith, John"
    assert clean_literal("' padded '") == "padded"
    assert clean_literal("bare") == "bare"
    # 引号不匹配时原样保留
    assert clean_literal("'abc\"") == "'abc\""
    assert clean_literal("''") == ""
