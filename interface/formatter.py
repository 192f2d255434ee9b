"""
查询结果格式化器
"""

from typing import Any, Dict, List


def compute_widths(rows: List[List[str]]) -> List[int]:
    """按列计算显示宽度，rows[0] 为表头"""
    if not rows:
        return []
    widths = [0] * len(rows[0])
    for row in rows:
        for i, cell in enumerate(row[: len(widths)]):
            widths[i] = max(widths[i], len(cell))
    return widths


def format_rows(rows: List[List[str]]) -> str:
    """把 表头+数据行 渲染成带边框的表格

    +----+------+
    | id | name |
    +----+------+
    | 1  | Bob  |
    +----+------+
    """
    widths = compute_widths(rows)
    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def render(row: List[str]) -> str:
        cells = [(row[i] if i < len(row) else "").ljust(w) for i, w in enumerate(widths)]
        return "| " + " | ".join(cells) + " |"

    lines = [border, render(rows[0]), border]
    lines.extend(render(row) for row in rows[1:])
    lines.append(border)
    return "\n".join(lines)


def format_query_result(result: Dict[str, Any]):
    """格式化并打印执行结果"""
    if not result.get("success", True):
        print(f"❌ {result.get('message', result.get('error', 'Unknown error'))}")
        return

    result_type = result.get("type", "UNKNOWN")

    if result_type in ("SELECT", "SHOW_TABLE"):
        print(format_rows([result["columns"]] + result["data"]))
        print(result.get("message", ""))
    elif result.get("cancelled"):
        print(f"⚠️  {result.get('message', 'Operation cancelled.')}")
    elif result_type == "SHOW_PATH":
        print(result["message"])
    else:
        print(f"✅ {result.get('message', 'OK')}")


def format_table_info(table_info: Dict[str, Any]):
    """格式化表信息"""
    if "error" in table_info:
        print(f"❌ {table_info['error']}")
        return

    print(f"\nTable: {table_info['table_name']}")
    print("=" * 50)
    print("Columns:")
    for position, column in enumerate(table_info["columns"]):
        print(f"  {position:<4} {column}")
    print(f"\nRows: {table_info['record_count']}")
    print(f"File: {table_info['file']}")
