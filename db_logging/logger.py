"""
数据库日志器
"""

import logging
import os
from enum import Enum


class LogLevel(Enum):
    """日志级别"""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


# 库内各模块使用的 logger 都挂在这个名字下面
LIBRARY_LOGGER = "minisql"


class _ComponentFilter(logging.Filter):
    """没有 component 的记录（来自模块 logger）用 logger 名补上"""

    def filter(self, record):
        if not hasattr(record, "component"):
            record.component = record.name
        return True


class DatabaseLogger:
    """数据库日志器：每个数据库一个日志文件，每行带组件标记"""

    LINE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(component)s] %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(self, db_name: str, log_dir: str = "logs"):
        self.db_name = db_name
        self.log_dir = log_dir
        self.log_file = os.path.join(log_dir, f"{db_name}.log")
        self.min_level = LogLevel.INFO

        # 确保日志目录存在
        os.makedirs(log_dir, exist_ok=True)

        # 每个实例独立的 logger，避免重复挂载 handler
        self._logger = logging.getLogger(f"minisql.db.{db_name}.{id(self):x}")
        self._logger.propagate = False
        self._logger.setLevel(self.min_level.value)
        self._handler = logging.FileHandler(self.log_file, encoding="utf-8")
        self._handler.setFormatter(logging.Formatter(self.LINE_FORMAT, self.DATE_FORMAT))
        self._handler.addFilter(_ComponentFilter())
        self._logger.addHandler(self._handler)

        # 解析、表模型中的警告也写进同一个日志文件
        self._library_logger = logging.getLogger(LIBRARY_LOGGER)
        self._library_logger.addHandler(self._handler)

        self.info(f"database {self.db_name} opened")

    def _write_log(self, level: LogLevel, message: str, component: str = "SYSTEM"):
        self._logger.log(level.value, message, extra={"component": component})

    def debug(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.DEBUG, message, component)

    def info(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.INFO, message, component)

    def warning(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.WARNING, message, component)

    def error(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.ERROR, message, component)

    def critical(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.CRITICAL, message, component)

    def set_log_level(self, level: LogLevel):
        self.min_level = level
        self._logger.setLevel(level.value)

    def close(self):
        self.info(f"database {self.db_name} closed")
        self._logger.removeHandler(self._handler)
        self._library_logger.removeHandler(self._handler)
        self._handler.close()
