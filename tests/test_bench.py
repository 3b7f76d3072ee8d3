from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def test_bench_outputs_throughput_metrics():
    root = Path(__file__).resolve().parents[1]
    fixture_dir = root / "tests" / "fixtures" / "headers"
    bench = root / "scripts" / "bench.py"

    proc = subprocess.run(
        [sys.executable, str(bench), "ID2D1Bitmap", str(fixture_dir), "--repeat", "3"],
        capture_output=True,
        text=True,
        check=True,
    )

    out = proc.stdout
    assert "files: 1" in out
    assert "methods: 7" in out
    assert "lookups: 3" in out
    assert "lookups/sec:" in out
