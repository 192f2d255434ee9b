"""
SQL词法分析器
"""

import re
from enum import Enum
from typing import List, NamedTuple

from .errors import SQLSyntaxError


class TokenType(Enum):
    # 关键字
    CREATE = "CREATE"
    TABLE = "TABLE"
    INSERT = "INSERT"
    INTO = "INTO"
    VALUES = "VALUES"
    UPDATE = "UPDATE"
    SET = "SET"
    WHERE = "WHERE"
    DELETE = "DELETE"
    FROM = "FROM"
    ALTER = "ALTER"
    ADD = "ADD"
    DROP = "DROP"
    COLUMN = "COLUMN"
    SELECT = "SELECT"
    SHOW = "SHOW"
    PATH = "PATH"

    # 标识符和字面量
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING = "STRING"

    # 运算符 / 分隔符
    EQUALS = "="
    STAR = "*"
    COMMA = ","
    SEMICOLON = ";"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"

    EOF = "EOF"


class Token(NamedTuple):
    type: TokenType
    value: str
    line: int
    column: int
    # 在原始SQL中的偏移 [start, end)，用于按原文切出子句
    start: int
    end: int


# 单字符 token
_PUNCTUATION = {
    "=": TokenType.EQUALS,
    "*": TokenType.STAR,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")


class SQLLexer:
    """SQL词法分析器

    - 关键字大小写不敏感，标识符保留原样
    - 裸词一直读到空白、引号或标点为止（允许 my-table、3.5 这类写法）
    - 字符串支持单引号和双引号，内部可以包含另一种引号和逗号，不处理转义
    """

    KEYWORDS = {
        "CREATE": TokenType.CREATE,
        "TABLE": TokenType.TABLE,
        "INSERT": TokenType.INSERT,
        "INTO": TokenType.INTO,
        "VALUES": TokenType.VALUES,
        "UPDATE": TokenType.UPDATE,
        "SET": TokenType.SET,
        "WHERE": TokenType.WHERE,
        "DELETE": TokenType.DELETE,
        "FROM": TokenType.FROM,
        "ALTER": TokenType.ALTER,
        "ADD": TokenType.ADD,
        "DROP": TokenType.DROP,
        "COLUMN": TokenType.COLUMN,
        "SELECT": TokenType.SELECT,
        "SHOW": TokenType.SHOW,
        "PATH": TokenType.PATH,
    }

    def __init__(self, sql: str):
        self.sql = sql
        self.position = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """将SQL文本分解为Token列表"""
        while self.position < len(self.sql):
            self._skip_whitespace()

            if self.position >= len(self.sql):
                break

            char = self.sql[self.position]

            if char in ("'", '"'):
                self._read_string(char)
            elif char in _PUNCTUATION:
                self._add_single_char_token(_PUNCTUATION[char], char)
            else:
                self._read_word()

        self.tokens.append(
            Token(TokenType.EOF, "", self.line, self.column, self.position, self.position)
        )
        return self.tokens

    def _skip_whitespace(self):
        """跳过空白字符"""
        while self.position < len(self.sql) and self.sql[self.position].isspace():
            self._step()

    def _step(self):
        if self.sql[self.position] == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1

    def _is_word_char(self, char: str) -> bool:
        return not char.isspace() and char not in _PUNCTUATION and char not in ("'", '"')

    def _read_word(self):
        """读取关键字、标识符或数字"""
        start = self.position
        start_line, start_column = self.line, self.column

        while self.position < len(self.sql) and self._is_word_char(self.sql[self.position]):
            self._step()

        value = self.sql[start : self.position]
        if _NUMBER_RE.match(value):
            token_type = TokenType.NUMBER
        else:
            token_type = self.KEYWORDS.get(value.upper(), TokenType.IDENTIFIER)
        self.tokens.append(Token(token_type, value, start_line, start_column, start, self.position))

    def _read_string(self, quote_char: str):
        """读取字符串字面量，value 为去掉引号后的内容"""
        start = self.position
        start_line, start_column = self.line, self.column
        self._step()  # 跳过开始引号

        content_start = self.position
        while self.position < len(self.sql):
            if self.sql[self.position] == quote_char:
                value = self.sql[content_start : self.position]
                self._step()  # 跳过结束引号
                self.tokens.append(
                    Token(TokenType.STRING, value, start_line, start_column, start, self.position)
                )
                return
            self._step()

        raise SQLSyntaxError("Unterminated string literal", start_line, start_column)

    def _add_single_char_token(self, token_type: TokenType, char: str):
        """添加单字符Token并移动位置"""
        token = Token(token_type, char, self.line, self.column, self.position, self.position + 1)
        self.tokens.append(token)
        self._step()
