"""
/tests/test_shell.py

交互式Shell测试：用假的会话对象代替终端
"""
import os

import pytest

from interface.shell import SQLShell


class FakeSession:
    """按顺序返回预设输入，输入用完后模拟 Ctrl-D"""

    def __init__(self, *lines):
        self.lines = list(lines)
        self.prompts = []

    def prompt(self, message):
        self.prompts.append(message)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture
def shell(db):
    return SQLShell(db, session=FakeSession())


def test_statement_spanning_several_lines(shell, db):
    shell.handle_line("CREATE TABLE t (a,")
    assert shell.pending == "CREATE TABLE t (a,"
    assert db.list_tables() == []
    shell.handle_line("b);")
    assert shell.pending == ""
    assert db.get_table_info("t")["columns"] == ["a", "b"]


def test_several_statements_on_one_line(shell, db, capsys):
    shell.handle_line("CREATE TABLE t (a); INSERT INTO t VALUES (1); SELECT * FROM t;")
    out = capsys.readouterr().out
    assert "| 1 |" in out
    assert "1 row(s) returned." in out


def test_errors_do_not_stop_the_shell(shell, capsys):
    shell.handle_line("SELECT * FROM nowhere;")
    assert shell.running
    assert capsys.readouterr().out.startswith("❌ NotFoundError")


def test_meta_commands(shell, db, capsys):
    db.execute_sql("CREATE TABLE people (id, name);")
    shell.handle_line("tables")
    shell.handle_line("describe people")
    shell.handle_line("DESC people;")
    out = capsys.readouterr().out
    assert "📋 people" in out
    assert out.count("Table: people") == 2
    shell.handle_line("exit")
    assert not shell.running


def test_start_loop_with_confirmed_delete(db, capsys):
    session = FakeSession(
        "CREATE TABLE t (a);",
        "INSERT INTO t VALUES (1);",
        "DELETE FROM t;",
        "y",
        "quit",
    )
    SQLShell(db, session=session).start()
    out = capsys.readouterr().out
    assert 'WARNING: This will delete ALL records from table "t"!' in out
    assert "All records deleted" in out
    assert out.rstrip().endswith("Goodbye!")
    assert SQLShell.CONFIRM_PROMPT in session.prompts
    assert db.get_table_info("t")["record_count"] == 0


def test_refused_delete_keeps_rows(db, capsys):
    session = FakeSession("CREATE TABLE t (a);", "INSERT INTO t VALUES (1);", "DELETE FROM t;", "N")
    SQLShell(db, session=session).start()
    assert "Operation cancelled." in capsys.readouterr().out
    assert db.get_table_info("t")["record_count"] == 1


def test_continuation_prompt(db):
    session = FakeSession("SELECT *", "FROM t")
    SQLShell(db, session=session).start()
    assert session.prompts == [SQLShell.PROMPT_MAIN, SQLShell.PROMPT_MORE, SQLShell.PROMPT_MORE]


def test_log_level_command(shell, db, capsys):
    shell.handle_line("log level warning")
    assert "Log level set to WARNING" in capsys.readouterr().out
    assert db.log_manager.get_log_level().name == "WARNING"
    assert os.path.isdir(os.path.dirname(db.log_manager.log_file))


def test_unreadable_table_does_not_end_session(shell, tmp_path, capsys):
    (tmp_path / "legacy.csv").write_bytes(b"id,name\n1,Jos\xe9\n")
    shell.handle_line("SELECT * FROM legacy;")
    assert shell.running
    assert capsys.readouterr().out.startswith("❌ StorageError")
