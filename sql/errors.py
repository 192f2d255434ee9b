"""
SQL错误类型定义
"""

from typing import Optional


class MiniSQLError(Exception):
    """所有可报告给用户的错误的基类"""

    category = "ERROR"

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self):
        if self.line is not None and self.column is not None:
            return f"{self.message} (line {self.line}, column {self.column})"
        return self.message


class SQLSyntaxError(MiniSQLError):
    """语法错误：缺少关键字/子句、括号不匹配、谓词中没有未加引号的 '='"""

    category = "SyntaxError"


class SchemaError(MiniSQLError):
    """模式错误：未知列、重复列、INSERT 列数不匹配"""

    category = "SchemaError"


class NotFoundError(MiniSQLError):
    """表不存在（或 CREATE 的目标已存在）"""

    category = "NotFoundError"


class TableExistsError(NotFoundError):
    """CREATE TABLE 的目标表已存在"""


class StorageError(MiniSQLError):
    """表文件无法读取：编码错误或 CSV 格式损坏"""

    category = "StorageError"
