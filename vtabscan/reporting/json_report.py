from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from vtabscan.reporting.summary import build_summary
from vtabscan.vtable.model import MethodRecord, VTableResult


def _method_to_json_item(m: MethodRecord) -> dict:
    return {
        "index": m.index,
        "name": m.name,
        "line": m.line,
        "interface": m.interface,
        "iid": m.iid,
    }


def build_json_document(result: VTableResult, pattern: str | None = None) -> dict:
    return {
        "scan_metadata": {
            "tool": "vtabscan",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "pattern": pattern,
        },
        "interface": result.interface,
        "source_path": result.source_path,
        "methods": [_method_to_json_item(m) for m in result.methods],
        "summary": build_summary(result),
    }


def write_json_report(path: Path, result: VTableResult, pattern: str | None = None) -> None:
    text = json.dumps(build_json_document(result, pattern), indent=2)
    path.write_text(text + "\n", encoding="utf-8")
