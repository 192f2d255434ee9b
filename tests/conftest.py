"""
/tests/conftest.py

公共测试夹具
"""
import os
import sys

import pytest

# 将上级目录（项目根目录）添加到 sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from interface.database import CSVDatabase
from sql.executor import SQLExecutor
from sql.lexer import SQLLexer
from sql.parser import SQLParser
from storage import CSVTableStore
from table import TableManager


def parse(sql):
    return SQLParser(SQLLexer(sql).tokenize(), sql).parse()


@pytest.fixture
def executor(tmp_path):
    return SQLExecutor(TableManager(CSVTableStore(str(tmp_path))))


@pytest.fixture
def run(executor):
    """解析并执行一条语句，错误直接抛出"""

    def _run(sql):
        return executor.execute(parse(sql))

    return _run


@pytest.fixture
def db(tmp_path):
    database = CSVDatabase(str(tmp_path))
    yield database
    database.close()
