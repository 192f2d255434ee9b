"""
表管理层模块
"""

from .row_table import RowTable
from .table_manager import TableManager

__all__ = ["RowTable", "TableManager"]
