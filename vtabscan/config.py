from __future__ import annotations

import argparse
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_EXCLUDES = [
    ".git/**",
    "build/**",
    "out/**",
]

OUTPUT_FORMATS = {"json", "csv", "md"}


@dataclass
class LookupConfig:
    interface: str | None = None
    recurse: bool = False


@dataclass
class FilesConfig:
    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    max_file_bytes: int = 16_000_000


@dataclass
class OutputConfig:
    formats: list[str] = field(default_factory=list)
    out_dir: str = "./vtabscan_reports"
    out_prefix: str = "vtable"
    overwrite: bool = False


@dataclass
class LoggingConfig:
    progress: bool = True
    quiet: bool = False
    verbose: bool = False
    log_file: str | None = None
    status_handle: str = "vtabscan"


@dataclass
class Config:
    path: str = "."
    config_path: str | None = None
    dry_run: bool = False

    lookup: LookupConfig = field(default_factory=LookupConfig)
    files: FilesConfig = field(default_factory=FilesConfig)
    output_cfg: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="vtabscan", description="Extract COM interface vtable layouts from C/C++ headers")
    p.add_argument("interface", nargs="?", help="Interface name (case-insensitive)")
    p.add_argument("path", nargs="?", default=None, help="Header file, directory or glob pattern")
    p.add_argument("--config", dest="config_path")
    p.add_argument("--dry-run", action="store_true", help="Print candidate headers and exit")
    p.add_argument("-r", "--recurse", action="store_true", help="Descend into subdirectories")

    p.add_argument("--output", help="Comma-separated: json,csv,md")
    p.add_argument("--out-dir")
    p.add_argument("--out-prefix")
    p.add_argument("--overwrite", action="store_true")

    p.add_argument("--exclude", action="append")
    p.add_argument("--max-file-bytes", type=int)

    p.add_argument("--status-handle")
    p.add_argument("--no-progress", action="store_true")
    p.add_argument("--quiet", action="store_true")
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--log-file")

    return p


def _deep_update(dst: dict[str, Any], src: dict[str, Any]) -> dict[str, Any]:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _deep_update(dst[k], v)
        else:
            dst[k] = v
    return dst


def _discover_config_path() -> Path | None:
    candidates = [
        Path("./vtabscan.toml"),
        Path("./.vtabscan.toml"),
        Path.home() / ".config" / "vtabscan" / "config.toml",
    ]
    for c in candidates:
        if c.exists():
            return c
    return None


def _load_toml(path: Path | None) -> dict[str, Any]:
    if not path:
        return {}
    with path.open("rb") as f:
        return tomllib.load(f)


def _parse_env_value(raw: str) -> Any:
    low = raw.lower()
    if low in {"true", "false"}:
        return low == "true"
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        if "," in raw:
            return [x.strip() for x in raw.split(",") if x.strip()]
        return raw


def _load_env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith("VTABSCAN_"):
            continue
        key = k[len("VTABSCAN_") :].lower()
        parts = key.split("__")
        cur = out
        for part in parts[:-1]:
            cur = cur.setdefault(part, {})
        cur[parts[-1]] = _parse_env_value(v)
    return out


def _apply_cli_overrides(data: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    cli: dict[str, Any] = {
        "config_path": args.config_path,
        "dry_run": args.dry_run,
    }

    def sec(section: str) -> dict[str, Any]:
        return cli.setdefault(section, {})

    if args.path is not None:
        cli["path"] = args.path
    if args.output is not None:
        sec("output")["formats"] = [x.strip() for x in args.output.split(",") if x.strip()]
    if args.overwrite:
        sec("output")["overwrite"] = True
    if args.recurse:
        sec("lookup")["recurse"] = True
    if args.no_progress:
        sec("logging")["progress"] = False
    if args.quiet:
        sec("logging")["quiet"] = True
    if args.verbose:
        sec("logging")["verbose"] = True

    mapping = {
        ("lookup", "interface"): args.interface,
        ("output", "out_dir"): args.out_dir,
        ("output", "out_prefix"): args.out_prefix,
        ("files", "exclude"): args.exclude,
        ("files", "max_file_bytes"): args.max_file_bytes,
        ("logging", "log_file"): args.log_file,
        ("logging", "status_handle"): args.status_handle,
    }
    for (s, k), v in mapping.items():
        if v is not None:
            sec(s)[k] = v

    _deep_update(data, cli)
    return data


def _from_dict(d: dict[str, Any]) -> Config:
    return Config(
        path=d.get("path", "."),
        config_path=d.get("config_path"),
        dry_run=d.get("dry_run", False),
        lookup=LookupConfig(**d.get("lookup", {})),
        files=FilesConfig(**d.get("files", {})),
        output_cfg=OutputConfig(**d.get("output", {})),
        logging=LoggingConfig(**d.get("logging", {})),
    )


def resolve_config(args: argparse.Namespace) -> Config:
    data: dict[str, Any] = {}

    config_path = Path(args.config_path) if args.config_path else _discover_config_path()
    if config_path:
        _deep_update(data, _load_toml(config_path))
        data["config_path"] = str(config_path)

    _deep_update(data, _load_env_overrides())
    _apply_cli_overrides(data, args)

    cfg = _from_dict(data)

    if not cfg.lookup.interface and not cfg.dry_run:
        raise ValueError("Missing required config: lookup.interface (pass INTERFACE or TOML [lookup].interface)")
    if cfg.files.max_file_bytes < 0:
        raise ValueError("files.max_file_bytes must be >= 0")

    for fmt in cfg.output_cfg.formats:
        if fmt == "markdown":
            continue
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format: {fmt}")
    cfg.output_cfg.formats = ["md" if f == "markdown" else f for f in cfg.output_cfg.formats]

    return cfg
