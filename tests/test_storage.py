"""
/tests/test_storage.py

CSV 存储与行表测试
"""
import os

import pytest

from sql.clauses import Predicate
from sql.errors import NotFoundError, SchemaError, SQLSyntaxError, StorageError
from storage import CSVTableStore
from table import RowTable, TableManager


@pytest.fixture
def store(tmp_path):
    return CSVTableStore(str(tmp_path))


def test_store_round_trip_with_special_characters(store, tmp_path):
    rows = [["id", "text"], ["1", 'say "hi", then\nleave'], ["2", ""]]
    store.save("t", rows)
    assert store.load("t") == rows
    with open(os.path.join(str(tmp_path), "t.csv"), encoding="utf-8", newline="") as f:
        assert f.readline() == "id,text\n"


def test_store_skips_blank_lines(store, tmp_path):
    with open(os.path.join(str(tmp_path), "b.csv"), "w", encoding="utf-8") as f:
        f.write("a\n\n1\n\n")
    assert store.load("b") == [["a"], ["1"]]


def test_store_missing_and_listing(store, tmp_path):
    assert store.load("missing") == []
    assert not store.remove("missing")
    store.save("zeta", [["a"]])
    store.save("alpha", [["a"]])
    (tmp_path / "notes.txt").write_text("x")
    assert store.list_tables() == ["alpha", "zeta"]
    assert store.remove("zeta")
    assert store.list_tables() == ["alpha"]


def test_row_table_column_index_first_occurrence():
    table = RowTable("t", ["a", "b", "a"], [["1", "2", "3"]])
    assert table.column_index() == {"a": 0, "b": 1}
    assert list(table.matching_rows(Predicate("a", "1"), table.column_index())) == [["1", "2", "3"]]


def test_row_table_alter_keeps_rows_aligned():
    table = RowTable.from_rows("t", [["a", "b"], ["1", "2"], ["3"]])
    assert table.rows == [["1", "2"], ["3", ""]]
    table.add_column("c")
    assert table.to_rows() == [["a", "b", "c"], ["1", "2", ""], ["3", "", ""]]
    table.drop_column("a")
    assert table.to_rows() == [["b", "c"], ["2", ""], ["", ""]]
    with pytest.raises(SchemaError):
        table.drop_column("a")


def test_table_manager(store):
    manager = TableManager(store)
    manager.create_table("t", ["a"])
    assert manager.exists("t")
    assert manager.load_table("t").header == ["a"]
    manager.drop_table("t")
    with pytest.raises(NotFoundError):
        manager.load_table("t")
    with pytest.raises(SQLSyntaxError):
        manager.exists("a/b")


def test_table_without_header_is_not_found(store, tmp_path):
    (tmp_path / "empty.csv").write_text("")
    with pytest.raises(NotFoundError):
        TableManager(store).load_table("empty")


def test_store_rejects_non_utf8_file(store, tmp_path):
    (tmp_path / "legacy.csv").write_bytes(b"id,name\n1,Jos\xe9\n")
    with pytest.raises(StorageError) as excinfo:
        store.load("legacy")
    assert "legacy" in str(excinfo.value)


def test_drop_only_column_is_refused():
    table = RowTable("s", ["a"], [["1"]])
    with pytest.raises(SchemaError):
        table.drop_column("a")
    assert table.to_rows() == [["a"], ["1"]]
