"""
SQL语法分析器
"""

from typing import List, Optional, Tuple

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
from .clauses import Predicate, parse_assignments, parse_equality, parse_paren_list
from .errors import SQLSyntaxError
from .lexer import Token, TokenType
from .text_utils import trim

# 可以同时充当名字的关键字，例如 "ALTER TABLE t ADD path"
SOFT_KEYWORDS = (TokenType.ADD, TokenType.COLUMN, TokenType.PATH)

# 子句结束标志
_END_TYPES = (TokenType.SEMICOLON, TokenType.EOF)


class SQLParser:
    """SQL语法分析器

    每种语句一个递归下降方法。token 流只负责定位子句边界；子句内容
    （列列表、值列表、SET、WHERE）按原文切出后交给 clauses 模块解释，
    因此字面量的引号/逗号语义与子句解析函数完全一致。
    """

    def __init__(self, tokens: List[Token], sql: str):
        self.tokens = tokens
        self.sql = sql
        self.position = 0
        self.current_token = tokens[0] if tokens else None

    def parse(self) -> Statement:
        """解析一条SQL语句，末尾分号可选"""
        if not self.current_token or self.current_token.type == TokenType.EOF:
            raise SQLSyntaxError("Empty statement")

        token_type = self.current_token.type
        if token_type == TokenType.CREATE:
            result = self._parse_create_table()
        elif token_type == TokenType.INSERT:
            result = self._parse_insert()
        elif token_type == TokenType.UPDATE:
            result = self._parse_update()
        elif token_type == TokenType.DELETE:
            result = self._parse_delete()
        elif token_type == TokenType.ALTER:
            result = self._parse_alter_table()
        elif token_type == TokenType.DROP:
            result = self._parse_drop_table()
        elif token_type == TokenType.SELECT:
            result = self._parse_select()
        elif token_type == TokenType.SHOW:
            result = self._parse_show()
        else:
            raise self._error(f"Unknown command: {self.current_token.value}")

        self._finish()
        return result

    # ---------- token 操作 ----------

    def _advance(self):
        """移动到下一个token"""
        if self.position < len(self.tokens) - 1:
            self.position += 1
            self.current_token = self.tokens[self.position]

    def _error(self, message: str, token: Optional[Token] = None) -> SQLSyntaxError:
        token = token or self.current_token
        return SQLSyntaxError(message, token.line, token.column)

    def _expect(self, expected_type: TokenType, message: str) -> Token:
        """期望特定类型的token，不符时抛出带行列号的语法错误"""
        if self.current_token.type != expected_type:
            raise self._error(message)
        token = self.current_token
        self._advance()
        return token

    def _match(self, token_type: TokenType) -> bool:
        if self.current_token.type == token_type:
            self._advance()
            return True
        return False

    def _at_end(self) -> bool:
        return self.current_token.type in _END_TYPES

    def _finish(self):
        """语句结束：允许一个分号，之后必须是EOF"""
        self._match(TokenType.SEMICOLON)
        if self.current_token.type != TokenType.EOF:
            raise self._error(f"Unexpected token: {self.current_token.value}")

    def _expect_name(self, what: str, allow_string: bool = False) -> str:
        """读取表名/列名"""
        token = self.current_token
        if token.type in (TokenType.IDENTIFIER, TokenType.NUMBER) or token.type in SOFT_KEYWORDS:
            self._advance()
            return token.value
        if allow_string and token.type == TokenType.STRING:
            self._advance()
            name = trim(token.value)
            if name:
                return name
        raise self._error(f"Missing {what}")

    def _slice(self, first: Token, last: Token) -> str:
        """按原文切出 [first, last] 覆盖的文本"""
        return self.sql[first.start : last.end]

    def _collect_until(self, *stop_types: TokenType) -> List[Token]:
        """收集token直到遇到 stop_types 或语句结束"""
        collected = []
        while not self._at_end() and self.current_token.type not in stop_types:
            collected.append(self.current_token)
            self._advance()
        return collected

    def _parse_paren_group(self, what: str) -> Tuple[str, bool]:
        """解析 ( ... )，返回括号原文以及括号内是否为空"""
        left = self._expect(TokenType.LEFT_PAREN, f"{what} required in parentheses")
        inner = []
        while self.current_token.type != TokenType.RIGHT_PAREN:
            if self.current_token.type == TokenType.EOF:
                raise self._error("Missing closing ')'")
            if self.current_token.type == TokenType.LEFT_PAREN:
                raise self._error("Nested parentheses are not supported")
            inner.append(self.current_token)
            self._advance()
        right = self.current_token
        self._advance()
        return self._slice(left, right), not inner

    def _parse_where(self) -> Optional[Predicate]:
        """可选的 WHERE col = value"""
        where_token = self.current_token
        if not self._match(TokenType.WHERE):
            return None
        body = self._collect_until()
        if not body:
            raise self._error("Missing condition after WHERE", where_token)
        return parse_equality(self._slice(body[0], body[-1]))

    # ---------- 各类语句 ----------

    def _parse_create_table(self) -> CreateTableStatement:
        self._advance()  # CREATE
        self._expect(TokenType.TABLE, "Missing keyword TABLE")
        table_name = self._expect_name("table name")
        text, empty = self._parse_paren_group("Column list")
        if empty:
            raise self._error("No columns specified")
        columns = parse_paren_list(text)
        if any(not column for column in columns):
            raise self._error("Empty column name in column list")
        return CreateTableStatement(table_name, columns)

    def _parse_insert(self) -> InsertStatement:
        self._advance()  # INSERT
        self._expect(TokenType.INTO, "Missing keyword INTO in INSERT")
        table_name = self._expect_name("table name in INSERT")
        self._expect(TokenType.VALUES, "Missing VALUES in INSERT")
        text, _ = self._parse_paren_group("Value list")
        # "()" 得到一个空字符串值，由列数检查决定是否接受
        return InsertStatement(table_name, parse_paren_list(text))

    def _parse_update(self) -> UpdateStatement:
        self._advance()  # UPDATE
        table_name = self._expect_name("table name in UPDATE")
        set_token = self._expect(TokenType.SET, "Missing SET in UPDATE")
        body = self._collect_until(TokenType.WHERE)
        if not body:
            raise self._error("Missing assignments after SET", set_token)
        assignments = parse_assignments(self._slice(body[0], body[-1]))
        if not assignments:
            raise self._error("SET requires at least one column=value assignment", set_token)
        where_clause = self._parse_where()
        return UpdateStatement(table_name, assignments, where_clause)

    def _parse_delete(self) -> DeleteStatement:
        self._advance()  # DELETE
        self._expect(TokenType.FROM, "Missing keyword FROM in DELETE")
        table_name = self._expect_name("table name in DELETE")
        where_clause = self._parse_where()
        return DeleteStatement(table_name, where_clause)

    def _parse_alter_table(self) -> AlterTableStatement:
        self._advance()  # ALTER
        self._expect(TokenType.TABLE, "Missing keyword TABLE in ALTER")
        table_name = self._expect_name("table name in ALTER")

        action_token = self.current_token
        if action_token.type not in (TokenType.ADD, TokenType.DROP):
            raise self._error("Expected ADD or DROP after table name")
        self._advance()

        # 可选的 COLUMN 关键字；"ADD column" 时 column 本身就是列名
        if self.current_token.type == TokenType.COLUMN and self.tokens[self.position + 1].type not in _END_TYPES:
            self._advance()
        column_name = self._expect_name(f"column name for {action_token.type.value}", allow_string=True)

        rest = self._collect_until()
        if any(t.type in (TokenType.ADD, TokenType.DROP) for t in rest):
            raise self._error("Cannot use both ADD and DROP in one command", action_token)
        if rest:
            raise self._error(f"Unexpected token: {rest[0].value}", rest[0])
        return AlterTableStatement(table_name, action_token.type.value, column_name)

    def _parse_drop_table(self) -> DropTableStatement:
        self._advance()  # DROP
        self._expect(TokenType.TABLE, "Missing keyword TABLE in DROP")
        table_name = self._expect_name("table name in DROP")
        return DropTableStatement(table_name)

    def _parse_select(self) -> SelectStatement:
        select_token = self.current_token
        self._advance()  # SELECT
        projection = self._collect_until(TokenType.FROM)
        if self.current_token.type != TokenType.FROM:
            raise self._error("Malformed SELECT statement: missing FROM")
        if not projection:
            raise self._error("Missing column list in SELECT", select_token)
        self._advance()  # FROM

        text = self._slice(projection[0], projection[-1])
        if trim(text) == "*":
            columns = None
        else:
            columns = parse_paren_list(text)
            if any(not column for column in columns):
                raise self._error("Empty column name in SELECT list", select_token)

        table_name = self._expect_name("table name in SELECT")
        where_clause = self._parse_where()
        return SelectStatement(columns, table_name, where_clause)

    def _parse_show(self) -> Statement:
        self._advance()  # SHOW
        if self._match(TokenType.PATH):
            return ShowPathStatement()
        self._expect(TokenType.TABLE, "Expected TABLE or PATH after SHOW")
        table_name = self._expect_name("table name in SHOW")
        return ShowTableStatement(table_name)
