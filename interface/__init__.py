"""
用户接口层模块
"""

from .config import resolve_data_dir
from .database import CSVDatabase
from .formatter import format_query_result, format_rows, format_table_info
from .shell import SQLShell, interactive_sql_shell

__all__ = [
    "CSVDatabase",
    "SQLShell",
    "interactive_sql_shell",
    "format_query_result",
    "format_rows",
    "format_table_info",
    "resolve_data_dir",
]
