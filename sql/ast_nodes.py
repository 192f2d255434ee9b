"""
抽象语法树节点定义
"""

from abc import ABC
from typing import Dict, List, Optional

from .clauses import Predicate


class ASTNode(ABC):
    """抽象语法树节点基类"""

    pass


class Statement(ASTNode):
    """语句基类"""

    pass


class CreateTableStatement(Statement):
    """CREATE TABLE 语句"""

    def __init__(self, table_name: str, columns: List[str]):
        self.table_name = table_name
        self.columns = columns

    def __repr__(self):
        return f"CREATE TABLE {self.table_name} ({self.columns})"


class InsertStatement(Statement):
    """INSERT 语句"""

    def __init__(self, table_name: str, values: List[str]):
        self.table_name = table_name
        self.values = values

    def __repr__(self):
        return f"INSERT INTO {self.table_name} VALUES {self.values}"


class UpdateStatement(Statement):
    """UPDATE 语句"""

    def __init__(
        self,
        table_name: str,
        assignments: Dict[str, str],
        where_clause: Optional[Predicate] = None,
    ):
        self.table_name = table_name
        self.assignments = assignments  # {列名: 新值}
        self.where_clause = where_clause

    def __repr__(self):
        where = f" WHERE {self.where_clause}" if self.where_clause else ""
        return f"UPDATE {self.table_name} SET {self.assignments}{where}"


class DeleteStatement(Statement):
    """DELETE 语句"""

    def __init__(self, table_name: str, where_clause: Optional[Predicate] = None):
        self.table_name = table_name
        self.where_clause = where_clause

    def __repr__(self):
        where = f" WHERE {self.where_clause}" if self.where_clause else ""
        return f"DELETE FROM {self.table_name}{where}"


class AlterTableStatement(Statement):
    """ALTER TABLE ... ADD|DROP 语句"""

    def __init__(self, table_name: str, action: str, column_name: str):
        self.table_name = table_name
        self.action = action  # 'ADD' / 'DROP'
        self.column_name = column_name

    def __repr__(self):
        return f"ALTER TABLE {self.table_name} {self.action} {self.column_name}"


class DropTableStatement(Statement):
    """DROP TABLE 语句"""

    def __init__(self, table_name: str):
        self.table_name = table_name

    def __repr__(self):
        return f"DROP TABLE {self.table_name}"


class SelectStatement(Statement):
    """SELECT 语句"""

    def __init__(
        self,
        columns: Optional[List[str]],
        table_name: str,
        where_clause: Optional[Predicate] = None,
    ):
        self.columns = columns  # None 表示 '*'
        self.table_name = table_name
        self.where_clause = where_clause

    @property
    def select_all(self) -> bool:
        return self.columns is None

    def __repr__(self):
        cols = "*" if self.select_all else self.columns
        where = f" WHERE {self.where_clause}" if self.where_clause else ""
        return f"SELECT {cols} FROM {self.table_name}{where}"


class ShowTableStatement(Statement):
    """SHOW TABLE 语句：显示整张表"""

    def __init__(self, table_name: str):
        self.table_name = table_name

    def __repr__(self):
        return f"SHOW TABLE {self.table_name}"


class ShowPathStatement(Statement):
    """SHOW PATH 语句：显示数据目录"""

    def __repr__(self):
        return "SHOW PATH"
