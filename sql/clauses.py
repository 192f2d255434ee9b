"""
子句解析：括号列表/赋值列表的引号感知切分、关键字后标识符提取、WHERE/SET 解析

所有切分都遵循同一套引号规则：
  - 维护两个状态（单引号内、双引号内）
  - 某种引号只有在不处于另一种引号内时才翻转自己的状态
  - 引号字符保留在 token 中，由 clean_literal 负责剥离
  - 逗号/等号只有在两种引号之外才算分隔符
"""

import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from .errors import SQLSyntaxError
from .text_utils import (
    NOT_FOUND,
    case_insensitive_find,
    case_insensitive_starts_with,
    clean_literal,
    strip_trailing_semicolon,
    trim,
)

logger = logging.getLogger("minisql.clauses")

# extract_identifier_after_keyword 使用的分隔符
IDENTIFIER_SEPARATORS = " \t\n\r(),;"


class Predicate(NamedTuple):
    """WHERE col = value 形式的等值谓词"""

    column: str
    value: str


class _QuoteState:
    """单/双引号嵌套状态"""

    def __init__(self):
        self.in_single = False
        self.in_double = False

    def feed(self, char: str):
        if char == '"' and not self.in_single:
            self.in_double = not self.in_double
        elif char == "'" and not self.in_double:
            self.in_single = not self.in_single

    @property
    def outside(self) -> bool:
        return not self.in_single and not self.in_double


def _split_outside_quotes(s: str, separator: str = ",") -> List[str]:
    """按引号外的分隔符切分，返回原始片段（最后一段总会返回，即使为空）"""
    pieces = []
    state = _QuoteState()
    token = []
    for char in s:
        if char == separator and state.outside:
            pieces.append("".join(token))
            token = []
            continue
        state.feed(char)
        token.append(char)
    pieces.append("".join(token))
    return pieces


def find_unquoted_equals(s: str) -> int:
    """返回第一个位于引号之外的 '=' 的下标，没有则返回 NOT_FOUND"""
    state = _QuoteState()
    for i, char in enumerate(s):
        if char == "=" and state.outside:
            return i
        state.feed(char)
    return NOT_FOUND


def parse_paren_list(s: str) -> List[str]:
    """解析 (v1, v2, ...) 形式的列表，每个元素都经过 clean_literal

    空列表 "()" 返回 [""]，调用方需要自行区分“没有值”的情况。
    """
    work = trim(s)
    if len(work) >= 2 and work[0] == "(" and work[-1] == ")":
        work = work[1:-1]
    return [clean_literal(piece) for piece in _split_outside_quotes(work)]


def split_assignments_outside_quotes(s: str) -> List[str]:
    """把 SET 子句切分成 key=value 片段（不处理括号）"""
    pieces = [trim(piece) for piece in _split_outside_quotes(s)]
    if pieces and not pieces[-1]:
        pieces.pop()
    return pieces


def extract_identifier_after_keyword(statement: str, keyword: str) -> str:
    """提取关键字后紧跟的标识符（例如表名），关键字不存在时返回空串"""
    if keyword:
        pos = case_insensitive_find(statement, keyword)
        if pos == NOT_FOUND:
            return ""
        rest = statement[pos + len(keyword) :]
    else:
        rest = statement
    rest = trim(rest)
    for i, char in enumerate(rest):
        if char in IDENTIFIER_SEPARATORS:
            rest = rest[:i]
            break
    return strip_trailing_semicolon(rest)


def _split_equality(text: str) -> Optional[Tuple[str, str]]:
    eq = find_unquoted_equals(text)
    if eq == NOT_FOUND:
        return None
    return trim(text[:eq]), clean_literal(text[eq + 1 :])


def parse_equality(text: str) -> Predicate:
    """解析谓词主体 "col = value"（不含 WHERE 关键字）"""
    body = strip_trailing_semicolon(text)
    parts = _split_equality(body)
    if parts is None or not parts[0]:
        raise SQLSyntaxError(f"WHERE clause must have the form column = value, got: {body!r}")
    return Predicate(*parts)


def parse_where_equals(statement: str) -> Optional[Predicate]:
    """从整条语句中解析 WHERE 子句

    没有 WHERE 时返回 None（匹配所有行）；有 WHERE 但找不到引号外的 '='
    时抛出 SQLSyntaxError，绝不当作“匹配所有行”。
    """
    pos = case_insensitive_find(statement, "WHERE")
    if pos == NOT_FOUND:
        return None
    return parse_equality(statement[pos + len("WHERE") :])


def parse_assignments(set_clause_text: str) -> Dict[str, str]:
    """解析 SET c1=v1, c2=v2，缺少 '=' 的片段会被跳过"""
    text = trim(set_clause_text)
    if case_insensitive_starts_with(text, "SET") and text[3:4] in ("", " ", "\t", "\n", "\r"):
        text = text[3:]
    text = strip_trailing_semicolon(text)

    assignments: Dict[str, str] = {}
    for piece in split_assignments_outside_quotes(text):
        parts = _split_equality(piece)
        if parts is None or not parts[0]:
            logger.warning("skipping malformed assignment %r", piece)
            continue
        key, value = parts
        assignments[key] = value
    return assignments


def split_statements(text: str) -> Tuple[List[str], str]:
    """把累积的输入切分成完整语句（以引号外的 ';' 结尾）和剩余部分"""
    statements = []
    state = _QuoteState()
    start = 0
    for i, char in enumerate(text):
        if char == ";" and state.outside:
            statement = trim(text[start : i + 1])
            if strip_trailing_semicolon(statement):
                statements.append(statement)
            start = i + 1
            continue
        state.feed(char)
    return statements, trim(text[start:])
