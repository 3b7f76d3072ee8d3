from __future__ import annotations

import os
from pathlib import Path

from vtabscan.reporting.summary import build_summary
from vtabscan.vtable.model import VTableResult


def _markdown_file_link(report_path: Path, file_path: Path, line: int | None = None) -> str:
    rel = Path(os.path.relpath(file_path.resolve(), report_path.parent.resolve())).as_posix()
    return f"{rel}#L{line}" if line else rel


def _markdown_link(label: str, uri: str) -> str:
    return f"[{label}]({uri})"


def _summary_lines(result: VTableResult) -> list[str]:
    summary = build_summary(result)
    lines = [
        "## Summary",
        "",
        f"- Total Methods: **{summary['total_methods']}**",
        f"- Own: {summary['own_methods']}",
        f"- Inherited: {summary['inherited_methods']}",
        "",
        "| Interface | Methods |",
        "|---|---:|",
    ]
    for name, count in summary["by_interface"].items():
        lines.append(f"| {name} | {count} |")
    return lines


def _table_lines(path: Path, result: VTableResult) -> list[str]:
    source = Path(result.source_path) if result.source_path else None
    lines = [
        "## VTable",
        "",
        "| Index | Method | Line | Interface | IID |",
        "|---:|---|---:|---|---|",
    ]
    for m in result.methods:
        if m.line is not None and source is not None:
            line = _markdown_link(str(m.line), _markdown_file_link(path, source, m.line))
        else:
            line = "-"
        lines.append(f"| {m.index} | `{m.name}` | {line} | {m.interface} | {m.iid or '-'} |")
    return lines


def write_markdown_report(path: Path, result: VTableResult) -> None:
    lines = [f"# {result.interface} VTable", ""]
    if result.source_path:
        source = Path(result.source_path)
        lines.extend([f"- Source: {_markdown_link(source.name, _markdown_file_link(path, source))}", ""])
    lines.extend(_table_lines(path, result))
    lines.append("")
    lines.extend(_summary_lines(result))

    path.write_text("\n".join(lines).rstrip() + "\n", encoding="utf-8")
