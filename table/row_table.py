"""
内存中的行表：表头 + 数据行
"""

import logging
from typing import Dict, Iterator, List, Optional

from sql.clauses import Predicate
from sql.errors import SchemaError

logger = logging.getLogger("minisql.table")


class RowTable:
    """一张表在内存中的表示，rows 不包含表头

    列索引（列名 -> 下标）每次操作都通过 column_index() 重新构建，
    不做缓存：ALTER 可能让任何缓存的下标失效。
    """

    def __init__(self, name: str, header: List[str], rows: Optional[List[List[str]]] = None):
        self.name = name
        self.header = list(header)
        self.rows = rows if rows is not None else []

    @classmethod
    def from_rows(cls, name: str, rows: List[List[str]]) -> "RowTable":
        """从存储读出的行构建表，第 0 行为表头；宽度不一致的行会被补齐或截断"""
        header = list(rows[0])
        width = len(header)
        data = []
        for line_no, row in enumerate(rows[1:], start=2):
            row = list(row)
            if len(row) != width:
                logger.warning(
                    "table %s line %d has %d cells, expected %d; reshaping",
                    name, line_no, len(row), width,
                )
                row = (row + [""] * width)[:width]
            data.append(row)
        return cls(name, header, data)

    def to_rows(self) -> List[List[str]]:
        return [list(self.header)] + self.rows

    @property
    def width(self) -> int:
        return len(self.header)

    def __len__(self):
        return len(self.rows)

    def column_index(self) -> Dict[str, int]:
        """列名 -> 下标；重名列取第一次出现的位置"""
        index: Dict[str, int] = {}
        for i, column in enumerate(self.header):
            index.setdefault(column, i)
        return index

    @staticmethod
    def require_column(index: Dict[str, int], column: str, context: str) -> int:
        if column not in index:
            raise SchemaError(f"Unknown column in {context}: {column}")
        return index[column]

    def matching_rows(self, predicate: Optional[Predicate], index: Dict[str, int]) -> Iterator[List[str]]:
        """按等值谓词过滤数据行；predicate 为 None 时返回全部行"""
        if predicate is None:
            yield from self.rows
            return
        position = self.require_column(index, predicate.column, "WHERE")
        for row in self.rows:
            if row[position] == predicate.value:
                yield row

    def append_row(self, values: List[str]):
        if len(values) != self.width:
            raise SchemaError(
                f"Column count mismatch: expected {self.width} values, got {len(values)}."
            )
        self.rows.append(list(values))

    def add_column(self, column: str):
        """在末尾追加一列，所有数据行补空单元格"""
        if column in self.header:
            raise SchemaError(f'Column "{column}" already exists.')
        self.header.append(column)
        for row in self.rows:
            row.append("")

    def drop_column(self, column: str):
        """删除一列，以及每一行中对应位置的单元格"""
        position = self.require_column(self.column_index(), column, "ALTER DROP")
        if self.width == 1:
            raise SchemaError(
                f'Cannot drop "{column}": it is the only column of "{self.name}". '
                "Use DROP TABLE instead."
            )
        del self.header[position]
        for row in self.rows:
            del row[position]
