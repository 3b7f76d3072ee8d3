from __future__ import annotations

import csv
from pathlib import Path

from vtabscan.vtable.model import VTableResult

CSV_COLUMNS = ["Index", "Method", "Line", "Interface", "IID"]


def write_csv_report(path: Path, result: VTableResult) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(CSV_COLUMNS)
        for m in result.methods:
            w.writerow([m.index, m.name, "" if m.line is None else m.line, m.interface, m.iid or ""])
