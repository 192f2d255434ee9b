"""
词法辅助函数：去空白、去分号、大小写不敏感查找、字面量清洗
"""

WHITESPACE = " \t\n\r"
QUOTES = ("'", '"')
NOT_FOUND = -1


def trim(s: str) -> str:
    """去掉首尾的空格、制表符、换行和回车"""
    return s.strip(WHITESPACE)


def strip_trailing_semicolon(s: str) -> str:
    s = trim(s)
    if s.endswith(";"):
        s = s[:-1]
    return trim(s)


def case_insensitive_starts_with(s: str, prefix: str) -> bool:
    if len(s) < len(prefix):
        return False
    return s[: len(prefix)].lower() == prefix.lower()


def case_insensitive_find(haystack: str, needle: str) -> int:
    """返回 needle 第一次(忽略大小写)出现的位置，找不到返回 NOT_FOUND"""
    if not needle:
        return 0
    hay = haystack.lower()
    target = needle.lower()
    for i in range(len(hay) - len(target) + 1):
        if hay[i : i + len(target)] == target:
            return i
    return NOT_FOUND


def clean_literal(raw: str) -> str:
    """清洗字面量：去空白、去结尾分号、去掉一对匹配的外层引号

    注意：不处理字面量内部的双写引号，那是 CSV 编解码的职责。
    """
    s = strip_trailing_semicolon(raw)
    if len(s) >= 2 and s[0] in QUOTES and s[-1] == s[0]:
        s = s[1:-1]
    return trim(s)
