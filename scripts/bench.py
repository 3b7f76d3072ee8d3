from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Allow running as `python scripts/bench.py` without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from vtabscan.config import FilesConfig
from vtabscan.scanner.file_scanner import discover_headers
from vtabscan.vtable.resolver import find_vtable


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Benchmark vtabscan lookup throughput")
    p.add_argument("interface")
    p.add_argument("path", nargs="?", default=".")
    p.add_argument("-r", "--recurse", action="store_true")
    p.add_argument("--exclude", action="append")
    p.add_argument("--max-file-bytes", type=int, default=FilesConfig().max_file_bytes)
    p.add_argument("--repeat", type=int, default=10)
    return p


def main() -> None:
    args = build_parser().parse_args()
    files_cfg = FilesConfig(
        exclude=args.exclude or FilesConfig().exclude,
        max_file_bytes=args.max_file_bytes,
    )

    t0 = time.perf_counter()
    files = discover_headers(args.path, args.recurse, files_cfg)
    result = None
    for _ in range(max(1, args.repeat)):
        result = find_vtable(args.interface, args.path, recurse=args.recurse, files_cfg=files_cfg)
    elapsed = max(1e-9, time.perf_counter() - t0)
    lookups = max(1, args.repeat)

    print(f"files: {len(files)}")
    print(f"methods: {len(result) if result is not None else 0}")
    print(f"source: {result.source_path if result is not None else '-'}")
    print(f"lookups: {lookups}")
    print(f"lookups/sec: {lookups / elapsed:.2f}")


if __name__ == "__main__":
    main()
