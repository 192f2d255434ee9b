"""
SQL执行器：把解析好的语句应用到内存中的行表上

每个操作都是无状态的：整表读入 -> 在内存中完成修改 -> （若有修改）整表重写。
任何错误都在重写之前抛出，因此不会出现部分修改。
"""

import os
from typing import Any, Callable, Dict, Optional

from .ast_nodes import (
    AlterTableStatement,
    CreateTableStatement,
    DeleteStatement,
    DropTableStatement,
    InsertStatement,
    SelectStatement,
    ShowPathStatement,
    ShowTableStatement,
    Statement,
    UpdateStatement,
)
from .errors import SchemaError, SQLSyntaxError

ConfirmCallback = Callable[[str], bool]


def refuse_all(message: str) -> bool:
    """默认的确认回调：拒绝（非交互环境下不会清空整张表）"""
    return False


class SQLExecutor:
    """SQL执行器"""

    def __init__(self, table_manager, confirm: Optional[ConfirmCallback] = None, log_manager=None):
        self.table_manager = table_manager
        self.confirm = confirm or refuse_all
        self.log_manager = log_manager

    def execute(self, ast: Statement) -> Dict[str, Any]:
        """执行SQL语句，失败时抛出 MiniSQLError 的子类"""
        if isinstance(ast, CreateTableStatement):
            return self._execute_create_table(ast)
        elif isinstance(ast, InsertStatement):
            return self._execute_insert(ast)
        elif isinstance(ast, UpdateStatement):
            return self._execute_update(ast)
        elif isinstance(ast, DeleteStatement):
            return self._execute_delete(ast)
        elif isinstance(ast, AlterTableStatement):
            return self._execute_alter_table(ast)
        elif isinstance(ast, DropTableStatement):
            return self._execute_drop_table(ast)
        elif isinstance(ast, SelectStatement):
            return self._execute_select(ast)
        elif isinstance(ast, ShowTableStatement):
            return self._execute_show_table(ast)
        elif isinstance(ast, ShowPathStatement):
            return self._execute_show_path()
        raise SQLSyntaxError(f"Unsupported statement: {type(ast).__name__}")

    def _log_table_operation(self, operation: str, table_name: str, details: str = ""):
        if self.log_manager:
            self.log_manager.log_table_operation(operation, table_name, details)

    def _execute_create_table(self, stmt: CreateTableStatement) -> Dict[str, Any]:
        """执行CREATE TABLE：只写入表头"""
        seen = set()
        for column in stmt.columns:
            if column in seen:
                raise SchemaError(f'Duplicate column name "{column}" in CREATE TABLE.')
            seen.add(column)

        self.table_manager.create_table(stmt.table_name, stmt.columns)
        self._log_table_operation("CREATE", stmt.table_name, f"columns={stmt.columns}")

        return {
            "type": "CREATE_TABLE",
            "table_name": stmt.table_name,
            "columns_created": len(stmt.columns),
            "success": True,
            "message": f'Created table "{stmt.table_name}" with {len(stmt.columns)} column(s).',
        }

    def _execute_insert(self, stmt: InsertStatement) -> Dict[str, Any]:
        """执行INSERT：值的个数必须与表头列数完全相等"""
        table = self.table_manager.load_table(stmt.table_name)
        table.append_row(stmt.values)
        self.table_manager.save_table(table)

        return {
            "type": "INSERT",
            "table_name": stmt.table_name,
            "rows_affected": 1,
            "success": True,
            "message": f'Inserted 1 row into "{stmt.table_name}".',
        }

    def _execute_update(self, stmt: UpdateStatement) -> Dict[str, Any]:
        """执行UPDATE：任意一个SET列不存在则整体放弃，不做部分更新"""
        table = self.table_manager.load_table(stmt.table_name)
        index = table.column_index()

        targets = {}
        for column, value in stmt.assignments.items():
            targets[table.require_column(index, column, "SET")] = value

        updated = 0
        for row in table.matching_rows(stmt.where_clause, index):
            for position, value in targets.items():
                row[position] = value
            updated += 1

        self.table_manager.save_table(table)
        self._log_table_operation("UPDATE", stmt.table_name, f"{updated} row(s)")

        return {
            "type": "UPDATE",
            "table_name": stmt.table_name,
            "rows_affected": updated,
            "success": True,
            "message": f'Updated {updated} row(s) in "{stmt.table_name}".',
        }

    def _execute_delete(self, stmt: DeleteStatement) -> Dict[str, Any]:
        """执行DELETE；没有WHERE时需要通过确认回调"""
        table = self.table_manager.load_table(stmt.table_name)

        if stmt.where_clause is None:
            warning = f'WARNING: This will delete ALL records from table "{stmt.table_name}"!'
            if not self.confirm(warning):
                return {
                    "type": "DELETE",
                    "table_name": stmt.table_name,
                    "rows_affected": 0,
                    "cancelled": True,
                    "success": True,
                    "message": "Operation cancelled.",
                }
            deleted = len(table.rows)
            table.rows = []
            self.table_manager.save_table(table)
            self._log_table_operation("DELETE", stmt.table_name, f"all {deleted} row(s)")
            return {
                "type": "DELETE",
                "table_name": stmt.table_name,
                "rows_affected": deleted,
                "success": True,
                "message": f'All records deleted from "{stmt.table_name}".',
            }

        index = table.column_index()
        doomed = {id(row) for row in table.matching_rows(stmt.where_clause, index)}
        table.rows = [row for row in table.rows if id(row) not in doomed]
        deleted = len(doomed)

        self.table_manager.save_table(table)
        self._log_table_operation("DELETE", stmt.table_name, f"{deleted} row(s)")

        return {
            "type": "DELETE",
            "table_name": stmt.table_name,
            "rows_affected": deleted,
            "success": True,
            "message": f'Deleted {deleted} row(s) from "{stmt.table_name}".',
        }

    def _execute_alter_table(self, stmt: AlterTableStatement) -> Dict[str, Any]:
        """执行ALTER TABLE ADD/DROP：表头与所有数据行同步增删"""
        table = self.table_manager.load_table(stmt.table_name)

        if stmt.action == "ADD":
            table.add_column(stmt.column_name)
            message = f'Added column "{stmt.column_name}" to table "{stmt.table_name}".'
        elif stmt.action == "DROP":
            table.drop_column(stmt.column_name)
            message = f'Dropped column "{stmt.column_name}" from table "{stmt.table_name}".'
        else:
            raise SQLSyntaxError(f"Unsupported ALTER action: {stmt.action}")

        self.table_manager.save_table(table)
        self._log_table_operation(f"ALTER {stmt.action}", stmt.table_name, stmt.column_name)

        return {
            "type": "ALTER_TABLE",
            "table_name": stmt.table_name,
            "action": stmt.action,
            "column_name": stmt.column_name,
            "success": True,
            "message": message,
        }

    def _execute_drop_table(self, stmt: DropTableStatement) -> Dict[str, Any]:
        """执行DROP TABLE：直接删除表文件"""
        path = self.table_manager.store.path_for(stmt.table_name)
        self.table_manager.drop_table(stmt.table_name)
        self._log_table_operation("DROP", stmt.table_name, path)

        return {
            "type": "DROP_TABLE",
            "table_name": stmt.table_name,
            "success": True,
            "message": f"File '{path}' deleted successfully.",
        }

    def _execute_select(self, stmt: SelectStatement) -> Dict[str, Any]:
        """执行SELECT：先在完整行上按WHERE过滤，再做投影"""
        table = self.table_manager.load_table(stmt.table_name)
        index = table.column_index()

        if stmt.select_all:
            # 按位置投影，重名列也各自输出自己的数据
            columns = list(table.header)
            positions = list(range(table.width))
        else:
            columns = list(stmt.columns)
            for column in columns:
                if column not in index:
                    raise SchemaError(f'Unknown column "{column}".')
            positions = [index[column] for column in columns]

        data = [
            [row[position] for position in positions]
            for row in table.matching_rows(stmt.where_clause, index)
        ]

        return {
            "type": "SELECT",
            "table_name": stmt.table_name,
            "columns": columns,
            "data": data,
            "success": True,
            "message": f"{len(data)} row(s) returned.",
        }

    def _execute_show_table(self, stmt: ShowTableStatement) -> Dict[str, Any]:
        """执行SHOW TABLE：原样返回整张表"""
        table = self.table_manager.load_table(stmt.table_name)
        return {
            "type": "SHOW_TABLE",
            "table_name": stmt.table_name,
            "columns": list(table.header),
            "data": [list(row) for row in table.rows],
            "success": True,
            "message": f"{len(table.rows)} row(s).",
        }

    def _execute_show_path(self) -> Dict[str, Any]:
        data_dir = os.path.abspath(self.table_manager.data_dir)
        cwd = os.getcwd()
        return {
            "type": "SHOW_PATH",
            "data_dir": data_dir,
            "cwd": cwd,
            "success": True,
            "message": f"Current working directory: {cwd}\nData directory:           {data_dir}",
        }
