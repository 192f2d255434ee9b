"""
/tests/test_main.py

命令行入口与数据目录配置测试
"""
import os

from interface.config import DATA_DIR_ENV, resolve_data_dir
import main


def test_resolve_data_dir_precedence(tmp_path, monkeypatch):
    monkeypatch.chdir(str(tmp_path))
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    assert resolve_data_dir() == os.path.join(str(tmp_path), "data")

    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "from_env"))
    assert resolve_data_dir() == str(tmp_path / "from_env")
    assert resolve_data_dir(str(tmp_path / "explicit")) == str(tmp_path / "explicit")
    assert os.path.isdir(str(tmp_path / "explicit"))


def test_run_script(tmp_path, capsys):
    script = tmp_path / "setup.sql"
    script.write_text(
        "CREATE TABLE people (id, name);\n"
        "INSERT INTO people VALUES (1, 'Bob');\n"
        "SELECT name FROM people WHERE id = 1;\n"
        "SELECT age FROM people;\n",
        encoding="utf-8",
    )
    failures = main.run_script(str(script), str(tmp_path / "data"))
    assert failures == 1
    out = capsys.readouterr().out
    assert "| Bob  |" in out
    assert "❌ SchemaError" in out


def test_demo_cleans_up(capsys):
    main.run_demo()
    out = capsys.readouterr().out
    assert "Demo finished" in out
    assert "❌" in out  # SELECT salary 故意失败
