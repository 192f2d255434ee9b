"""
表管理器 - 提供表级操作接口
"""

import os
from typing import List

from sql.errors import NotFoundError, SQLSyntaxError, TableExistsError
from storage import CSVTableStore
from .row_table import RowTable


class TableManager:
    """表管理器：在存储编解码之上提供按表名的加载、保存、创建和删除"""

    def __init__(self, store: CSVTableStore):
        self.store = store

    @property
    def data_dir(self) -> str:
        return self.store.data_dir

    @staticmethod
    def validate_table_name(table_name: str):
        """表名直接作为文件名使用，不允许包含路径"""
        if (
            not table_name
            or table_name in (".", "..")
            or "/" in table_name
            or "\\" in table_name
            or (os.sep in table_name)
        ):
            raise SQLSyntaxError(f"Invalid table name: {table_name!r}")

    def exists(self, table_name: str) -> bool:
        self.validate_table_name(table_name)
        return self.store.exists(table_name)

    def create_table(self, table_name: str, columns: List[str]) -> RowTable:
        """创建只有表头的新表"""
        if self.exists(table_name):
            raise TableExistsError(f'Table "{table_name}" already exists.')
        table = RowTable(table_name, columns)
        self.save_table(table)
        return table

    def load_table(self, table_name: str) -> RowTable:
        """整表读入内存"""
        if not self.exists(table_name):
            raise NotFoundError(f'Table "{table_name}" not found.')
        rows = self.store.load(table_name)
        if not rows:
            raise NotFoundError(f'Table "{table_name}" is empty (no header row).')
        return RowTable.from_rows(table_name, rows)

    def save_table(self, table: RowTable):
        """整表重写"""
        self.store.save(table.name, table.to_rows())

    def drop_table(self, table_name: str):
        if not self.exists(table_name):
            raise NotFoundError(f'Table "{table_name}" not found.')
        self.store.remove(table_name)

    def list_tables(self) -> List[str]:
        return self.store.list_tables()
