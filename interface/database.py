"""
数据库主接口
"""

import os
import time
from typing import Any, Callable, Dict, List, Optional

from db_logging import LogLevel, LogManager
from sql import MiniSQLError, SQLExecutor, SQLLexer, SQLParser
from sql.clauses import split_statements
from sql.text_utils import strip_trailing_semicolon
from storage import CSVTableStore
from table import TableManager
from .config import default_log_dir


class CSVDatabase:
    """基于 CSV 文件的简化数据库主接口"""

    def __init__(
        self,
        data_dir: str,
        confirm: Optional[Callable[[str], bool]] = None,
        log_dir: Optional[str] = None,
    ):
        self.data_dir = data_dir

        db_name = os.path.basename(os.path.normpath(data_dir)) or "minisql"
        self.log_manager = LogManager(db_name, log_dir or default_log_dir(data_dir))

        # 存储层 / 表管理层
        self.store = CSVTableStore(data_dir)
        self.table_manager = TableManager(self.store)

        self.sql_executor = SQLExecutor(
            self.table_manager, confirm=confirm, log_manager=self.log_manager
        )

    def set_confirm(self, confirm: Callable[[str], bool]):
        """设置 DELETE 不带 WHERE 时使用的确认回调"""
        self.sql_executor.confirm = confirm

    def parse(self, sql: str):
        """词法 + 语法分析，返回语句节点"""
        tokens = SQLLexer(sql).tokenize()
        return SQLParser(tokens, sql).parse()

    def execute_sql(self, sql: str) -> Dict[str, Any]:
        """执行一条SQL语句，返回结果字典；错误不会抛出，而是以 success=False 返回"""
        start = time.perf_counter()
        try:
            ast = self.parse(sql.strip())
            result = self.sql_executor.execute(ast)
        except MiniSQLError as e:
            result = {
                "success": False,
                "type": "ERROR",
                "error": str(e),
                "error_type": e.category,
                "message": f"{e.category}: {e}",
                "data": [],
            }
        except OSError as e:
            # 文件系统错误也只影响当前语句
            self.log_manager.log_error("STORAGE", str(e), sql)
            result = {
                "success": False,
                "type": "ERROR",
                "error": str(e),
                "error_type": "StorageError",
                "message": f"StorageError: {e}",
                "data": [],
            }

        elapsed_ms = (time.perf_counter() - start) * 1000
        result_count = len(result.get("data") or []) if "data" in result else result.get("rows_affected", 0)
        self.log_manager.log_sql_execution(sql, result["success"], elapsed_ms, result_count)
        return result

    def execute_script(self, text: str) -> List[Dict[str, Any]]:
        """按 ';' 切分并依次执行多条语句；末尾缺少分号的语句也会执行"""
        statements, remainder = split_statements(text)
        if strip_trailing_semicolon(remainder):
            statements.append(remainder)
        return [self.execute_sql(statement) for statement in statements]

    def list_tables(self) -> List[str]:
        return self.table_manager.list_tables()

    def get_table_info(self, table_name: str) -> Dict[str, Any]:
        """表结构信息：列名和行数"""
        try:
            table = self.table_manager.load_table(table_name)
        except MiniSQLError as e:
            return {"error": str(e)}
        return {
            "table_name": table_name,
            "columns": list(table.header),
            "record_count": len(table),
            "file": self.store.path_for(table_name),
        }

    def set_log_level(self, level: str) -> Dict[str, Any]:
        """设置日志级别"""
        try:
            log_level = LogLevel[level.upper()]
        except KeyError:
            return {"success": False, "message": f"Unknown log level: {level}"}
        self.log_manager.set_log_level(log_level)
        return {"success": True, "message": f"Log level set to {log_level.name}"}

    def close(self):
        self.log_manager.close()
