"""
CSV 存储编解码：一张表对应数据目录下的一个 <表名>.csv 文件
"""

import csv
import os
from typing import List

from sql.errors import StorageError


class CSVTableStore:
    """表存储，负责整文件读取和整文件重写"""

    SUFFIX = ".csv"

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        os.makedirs(data_dir, exist_ok=True)

    def path_for(self, table_name: str) -> str:
        return os.path.join(self.data_dir, table_name + self.SUFFIX)

    def exists(self, table_name: str) -> bool:
        return os.path.isfile(self.path_for(table_name))

    def load(self, table_name: str) -> List[List[str]]:
        """读取整张表；文件不存在或为空时返回空列表"""
        path = self.path_for(table_name)
        if not os.path.isfile(path):
            return []
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                # 跳过空行
                return [row for row in csv.reader(f) if row]
        except (UnicodeDecodeError, csv.Error) as e:
            raise StorageError(f"Cannot read table \"{table_name}\" from {path}: {e}") from e

    def save(self, table_name: str, rows: List[List[str]]):
        """用 rows 覆盖整个文件"""
        with open(self.path_for(table_name), "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerows(rows)

    def remove(self, table_name: str) -> bool:
        path = self.path_for(table_name)
        if not os.path.isfile(path):
            return False
        os.remove(path)
        return True

    def list_tables(self) -> List[str]:
        """列出数据目录中的所有表名"""
        tables = []
        for entry in os.listdir(self.data_dir):
            name, ext = os.path.splitext(entry)
            if ext == self.SUFFIX and os.path.isfile(os.path.join(self.data_dir, entry)):
                tables.append(name)
        return sorted(tables)
