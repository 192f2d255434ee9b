"""
运行配置：数据目录解析
"""

import os
from typing import Optional

DATA_DIR_ENV = "MINISQL_DATA"
DEFAULT_DATA_DIR = "data"
LOG_SUBDIR = "logs"


def resolve_data_dir(explicit: Optional[str] = None) -> str:
    """确定数据目录：显式参数 > 环境变量 MINISQL_DATA > ./data

    目录不存在时自动创建，返回绝对路径。
    """
    path = explicit or os.environ.get(DATA_DIR_ENV) or DEFAULT_DATA_DIR
    path = os.path.abspath(os.path.expanduser(path))
    os.makedirs(path, exist_ok=True)
    return path


def default_log_dir(data_dir: str) -> str:
    return os.path.join(data_dir, LOG_SUBDIR)
