"""
SQL处理层模块
"""

from .lexer import SQLLexer, Token, TokenType
from .parser import SQLParser
from .executor import SQLExecutor
from .ast_nodes import *
from .clauses import Predicate
from .errors import (
    MiniSQLError,
    SQLSyntaxError,
    SchemaError,
    NotFoundError,
    TableExistsError,
    StorageError,
)

__all__ = [
    "SQLLexer",
    "SQLParser",
    "SQLExecutor",
    "Token",
    "TokenType",
    "Predicate",
    "Statement",
    "CreateTableStatement",
    "InsertStatement",
    "UpdateStatement",
    "DeleteStatement",
    "AlterTableStatement",
    "DropTableStatement",
    "SelectStatement",
    "ShowTableStatement",
    "ShowPathStatement",
    "MiniSQLError",
    "SQLSyntaxError",
    "SchemaError",
    "NotFoundError",
    "TableExistsError",
    "StorageError",
]
