"""
存储层模块 - 提供 CSV 表文件的读写
"""

from .csv_store import CSVTableStore

__all__ = ["CSVTableStore"]
