"""
交互式SQL Shell
"""

from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from sql.clauses import extract_identifier_after_keyword, split_statements
from sql.lexer import SQLLexer
from sql.text_utils import case_insensitive_starts_with, strip_trailing_semicolon
from .database import CSVDatabase
from .formatter import format_query_result, format_table_info


class _SQLCompleter(Completer):
    """关键字、表名、以及语句中已出现的表的列名补全"""

    def __init__(self, database: CSVDatabase):
        self.db = database
        self.keywords = sorted(SQLLexer.KEYWORDS)

    def get_completions(self, document: Document, complete_event):
        text = document.text_before_cursor
        word = document.get_word_before_cursor(WORD=True)
        low = word.lower()

        tables = self.db.list_tables()
        candidates = list(self.keywords) + tables
        # 简单列补全：文本中出现了某个表名，则补全该表的列
        for table in tables:
            if table.lower() in text.lower():
                info = self.db.get_table_info(table)
                candidates.extend(info.get("columns", []))

        seen = set()
        for candidate in candidates:
            if candidate in seen:
                continue
            seen.add(candidate)
            if candidate.lower().startswith(low):
                yield Completion(candidate, start_position=-len(word))


class _InlineSuggest(AutoSuggest):
    """基于固定词典和表名的灰色联想"""

    def __init__(self, database: CSVDatabase):
        self.db = database
        self.seed_words = [
            "help", "tables", "describe ", "exit",
            "CREATE TABLE ", "SELECT * FROM ", "INSERT INTO ", "UPDATE ",
            "DELETE FROM ", "ALTER TABLE ", "DROP TABLE ", "SHOW TABLE ", "SHOW PATH;",
        ]

    def get_suggestion(self, buffer, document: Document) -> Optional[Suggestion]:
        text = document.text_before_cursor
        if not text:
            return None
        for w in self.seed_words + self.db.list_tables():
            if w.lower().startswith(text.lower()) and w.lower() != text.lower():
                return Suggestion(w[len(text):])
        return None


class SQLShell:
    """SQL交互式Shell：逐行读取，累积到出现 ';' 为止再执行"""

    PROMPT_MAIN = "sql> "
    PROMPT_MORE = "...> "
    CONFIRM_PROMPT = "Are you sure you want to continue? (Y/N): "

    def __init__(self, database: CSVDatabase, session: Optional[PromptSession] = None):
        self.database = database
        self.running = True
        self.pending = ""
        self._session = session
        self.database.set_confirm(self._confirm)

    @property
    def session(self) -> PromptSession:
        # 延迟创建，只有真正交互时才需要终端
        if self._session is None:
            self._session = PromptSession(
                completer=_SQLCompleter(self.database),
                auto_suggest=_InlineSuggest(self.database),
            )
        return self._session

    def start(self):
        """启动Shell"""
        print("Welcome to MiniSQL!")
        print(
            "Commands end with ';'. Supported: CREATE, INSERT, UPDATE, DELETE, "
            "ALTER, DROP, SELECT, SHOW TABLE, SHOW PATH, EXIT"
        )
        print("Type 'help' for help.\n")

        while self.running:
            try:
                line = self.session.prompt(self.PROMPT_MORE if self.pending else self.PROMPT_MAIN)
            except KeyboardInterrupt:
                # Ctrl-C 丢弃尚未完成的语句
                self.pending = ""
                continue
            except EOFError:
                break
            self.handle_line(line)

        print("Goodbye!")

    def handle_line(self, line: str):
        """处理一行输入：Shell 命令立即执行，SQL 累积到完整语句后执行"""
        if not self.pending and self._process_command(line):
            return

        self.pending = f"{self.pending}\n{line}" if self.pending else line
        statements, self.pending = split_statements(self.pending)
        for statement in statements:
            if not self.running:
                break
            if self._process_command(statement):
                continue
            format_query_result(self.database.execute_sql(statement))

    def _process_command(self, raw: str) -> bool:
        """处理 Shell 自身的命令，返回 True 表示已处理"""
        command = strip_trailing_semicolon(raw)
        if not command:
            return not self.pending
        lower = command.lower()

        if lower in ("exit", "quit"):
            self.running = False
            return True

        if lower in ("help", "?"):
            self._show_help()
            return True

        if lower == "clear":
            print("\033[2J\033[H", end="")  # 清屏
            return True

        if lower == "tables":
            self._show_tables()
            return True

        for keyword in ("describe", "desc"):
            if case_insensitive_starts_with(command, keyword + " "):
                table_name = extract_identifier_after_keyword(command, keyword)
                format_table_info(self.database.get_table_info(table_name))
                return True

        if case_insensitive_starts_with(command, "log level "):
            result = self.database.set_log_level(command.split()[2])
            print(f"{'✅' if result['success'] else '❌'} {result['message']}")
            return True

        return False

    def _confirm(self, message: str) -> bool:
        """DELETE 不带 WHERE 时的确认提示"""
        print(message)
        try:
            answer = self.session.prompt(self.CONFIRM_PROMPT)
        except (EOFError, KeyboardInterrupt):
            return False
        return answer.strip().lower().startswith("y")

    def _show_tables(self):
        """显示所有表"""
        tables = self.database.list_tables()
        if not tables:
            print("No tables in data directory")
        else:
            print(f"Tables ({len(tables)}):")
            for table in tables:
                print(f"  📋 {table}")

    def _show_help(self):
        """显示帮助信息"""
        print(
            """
📚 MiniSQL help

📋 SQL statements (keywords are case-insensitive, end with ';'):
CREATE TABLE name (col1, col2, ...)              - create a table
INSERT INTO name VALUES (v1, v2, ...)            - insert one row
SELECT * | col1, col2 FROM name [WHERE col=val]  - query rows
UPDATE name SET col=val[, col=val] [WHERE col=val]
DELETE FROM name [WHERE col=val]                 - without WHERE asks for confirmation
ALTER TABLE name ADD col | ALTER TABLE name DROP col
DROP TABLE name                                  - delete the table file
SHOW TABLE name                                  - print the whole table
SHOW PATH                                        - print the data directory

💡 Values may be bare, 'single-quoted' or "double-quoted";
   quoted values may contain commas and the other quote character.

📊 Shell commands:
tables                 - list tables
describe <table>       - show columns (alias: desc)
log level <LEVEL>      - DEBUG/INFO/WARNING/ERROR/CRITICAL
clear                  - clear the screen
help, ?                - this help
exit, quit             - leave the shell
"""
        )


def interactive_sql_shell(database: CSVDatabase):
    """启动交互式SQL Shell"""
    shell = SQLShell(database)
    shell.start()
