from __future__ import annotations

import glob
from pathlib import Path, PurePosixPath

from vtabscan.config import FilesConfig
from vtabscan.scanner.size_filter import within_size_limit

HEADER_SUFFIX = ".h"


def _match_any(path: str, patterns: list[str]) -> bool:
    p = PurePosixPath(path)
    for pattern in patterns:
        if p.match(pattern):
            return True
        # Treat "**/" as zero-or-more directories for common glob expectations.
        if "**/" in pattern and p.match(pattern.replace("**/", "")):
            return True
    return False


def _expand(pattern: str, recurse: bool) -> tuple[Path, list[Path]]:
    base = Path(pattern)
    if base.is_file():
        return base.parent, [base]
    if base.is_dir():
        iterator = base.rglob(f"*{HEADER_SUFFIX}") if recurse else base.glob(f"*{HEADER_SUFFIX}")
        return base, [p for p in iterator if p.is_file()]
    matches = [Path(m) for m in glob.glob(pattern, recursive=recurse)]
    return _glob_root(pattern), [p for p in matches if p.is_file()]


def _glob_root(pattern: str) -> Path:
    parts = Path(pattern).parts
    fixed: list[str] = []
    for part in parts:
        if glob.has_magic(part):
            break
        fixed.append(part)
    return Path(*fixed) if fixed else Path(".")


def discover_headers(pattern: str, recurse: bool = False, files_cfg: FilesConfig | None = None) -> list[Path]:
    """Resolve a file, directory or glob pattern to candidate header paths.

    Directories yield their ``*.h`` files (descending when ``recurse`` is set);
    anything else is expanded as a glob. The result is sorted and filtered by
    the ``exclude`` globs and size limit of ``files_cfg``.
    """
    files_cfg = files_cfg or FilesConfig()
    root, candidates = _expand(pattern, recurse)

    filtered: list[Path] = []
    seen: set[Path] = set()
    for p in sorted(candidates):
        key = p.resolve()
        if key in seen:
            continue
        seen.add(key)
        try:
            rel = p.relative_to(root).as_posix()
        except ValueError:
            rel = p.as_posix()
        if files_cfg.exclude and _match_any(rel, files_cfg.exclude):
            continue
        if not within_size_limit(p, files_cfg.max_file_bytes):
            continue
        filtered.append(p)

    return filtered
