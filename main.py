#!/usr/bin/env python3
"""
CSV 简化数据库主程序
"""

import os
import shutil
import sys
import tempfile

from interface import CSVDatabase, format_query_result, interactive_sql_shell, resolve_data_dir


def run_demo():
    """运行演示程序：在临时目录中完整走一遍 people 表的生命周期"""
    print("🗄️  MiniSQL demo")
    print("=" * 40)
    data_dir = tempfile.mkdtemp(prefix="minisql-demo-")
    db = CSVDatabase(data_dir, confirm=lambda message: True)

    try:
        commands = [
            "CREATE TABLE people (id, name, age);",
            "INSERT INTO people VALUES (1, 'Bob', 30);",
            "INSERT INTO people VALUES (2, \"Smith, John\", 41);",
            "INSERT INTO people VALUES (3, 'Alice', 30);",
            "SELECT * FROM people;",
            "SELECT name FROM people WHERE age = 30;",
            "UPDATE people SET age = 31 WHERE name = 'Bob';",
            "ALTER TABLE people ADD email;",
            "UPDATE people SET email = 'alice@example.com' WHERE id = 3;",
            "SHOW TABLE people;",
            "DELETE FROM people WHERE id = 2;",
            "ALTER TABLE people DROP age;",
            "SELECT * FROM people;",
            "SELECT salary FROM people;",
            "DELETE FROM people;",
            "SHOW TABLE people;",
            "DROP TABLE people;",
        ]

        for i, cmd in enumerate(commands, 1):
            print(f"\n[{i}/{len(commands)}] {cmd}")
            format_query_result(db.execute_sql(cmd))

        print("\n✨ Demo finished!")

    finally:
        db.close()
        shutil.rmtree(data_dir, ignore_errors=True)
        print("🗑️  Demo directory removed")


def run_script(path: str, data_dir: str) -> int:
    """执行 SQL 脚本文件，返回失败语句的数量"""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()

    db = CSVDatabase(data_dir)
    failures = 0
    try:
        for result in db.execute_script(text):
            format_query_result(result)
            if not result["success"]:
                failures += 1
    finally:
        db.close()
    return failures


def run_shell(data_dir: str):
    print(f"🗄️  Starting SQL shell, data directory: {data_dir}")
    db = CSVDatabase(data_dir)
    try:
        interactive_sql_shell(db)
    finally:
        db.close()


def print_usage():
    print("🗄️  MiniSQL - SQL over CSV files")
    print("=" * 40)
    print("Usage:")
    print("  python main.py                          # start the interactive shell")
    print("  python main.py shell [data_dir]         # start the shell on a data directory")
    print("  python main.py run <file.sql> [data_dir]  # execute a script")
    print("  python main.py demo                     # run the demo")
    print()
    print("The data directory defaults to $MINISQL_DATA, then ./data")


def main():
    """主程序"""
    args = sys.argv[1:]
    command = args[0].lower() if args else "shell"

    if command == "shell":
        run_shell(resolve_data_dir(args[1] if len(args) > 1 else None))
    elif command == "demo":
        run_demo()
    elif command == "run":
        if len(args) < 2:
            print_usage()
            sys.exit(2)
        if not os.path.isfile(args[1]):
            print(f"❌ Cannot open script file: {args[1]}")
            sys.exit(1)
        failures = run_script(args[1], resolve_data_dir(args[2] if len(args) > 2 else None))
        sys.exit(1 if failures else 0)
    else:
        print_usage()
        if command not in ("help", "-h", "--help"):
            sys.exit(2)


if __name__ == "__main__":
    main()
