"""
日志管理器 - 为不同组件提供统一的日志接口
"""

from .logger import DatabaseLogger, LogLevel


class LogManager:
    """日志管理器"""

    def __init__(self, db_name: str, log_dir: str = "logs"):
        self.logger = DatabaseLogger(db_name, log_dir)

    @property
    def log_file(self) -> str:
        return self.logger.log_file

    def log_sql_execution(
        self, sql: str, success: bool, execution_time: float, result_count: int = 0
    ):
        """记录SQL执行日志"""
        status = "succeeded" if success else "failed"
        sql_preview = sql[:100] + "..." if len(sql) > 100 else sql
        message = f"SQL {status}: {sql_preview} (time: {execution_time:.3f}ms, rows: {result_count})"

        if success:
            self.logger.info(message, "SQL_EXECUTOR")
        else:
            self.logger.error(message, "SQL_EXECUTOR")

    def log_table_operation(self, operation: str, table_name: str, details: str = ""):
        """记录表操作"""
        message = f"table {operation}: {table_name}"
        if details:
            message += f" - {details}"
        self.logger.info(message, "TABLE_MANAGER")

    def log_error(self, component: str, error_message: str, details: str = ""):
        """记录错误"""
        message = f"{error_message}"
        if details:
            message += f" - {details}"
        self.logger.error(message, component)

    def set_log_level(self, level: LogLevel):
        """设置日志级别"""
        self.logger.set_log_level(level)

    def get_log_level(self) -> LogLevel:
        return self.logger.min_level

    def close(self):
        self.logger.close()
