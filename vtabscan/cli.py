from __future__ import annotations

import logging
import sys
from pathlib import Path

from vtabscan.config import Config, build_parser, resolve_config
from vtabscan.reporting.csv_report import write_csv_report
from vtabscan.reporting.json_report import write_json_report
from vtabscan.reporting.markdown_report import write_markdown_report
from vtabscan.scanner.file_scanner import discover_headers
from vtabscan.utils.logging import configure_logging
from vtabscan.utils.progress import ConsoleStatus
from vtabscan.vtable.errors import VTableError
from vtabscan.vtable.model import VTableResult
from vtabscan.vtable.resolver import find_vtable

log = logging.getLogger("vtabscan")


def _collect_outputs(cfg: Config) -> dict[str, Path]:
    outputs: dict[str, Path] = {}
    if not cfg.output_cfg.formats:
        return outputs
    out_dir = Path(cfg.output_cfg.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    for fmt in cfg.output_cfg.formats:
        p = out_dir / f"{cfg.output_cfg.out_prefix}.{fmt}"
        if p.exists() and not cfg.output_cfg.overwrite:
            raise ValueError(f"Output file already exists: {p} (use --overwrite)")
        outputs[fmt] = p
    return outputs


def _print_vtable(result: VTableResult) -> None:
    rows = [
        (str(m.index), m.name, "-" if m.line is None else str(m.line), m.interface, m.iid or "-")
        for m in result.methods
    ]
    header = ("index", "name", "line", "interface", "iid")
    widths = [max(len(r[i]) for r in [header, *rows]) for i in range(len(header))]
    for row in [header, *rows]:
        print("  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip())
    print(f"source: {result.source_path}")


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = resolve_config(args)
    except ValueError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2

    configure_logging(cfg.logging.verbose, cfg.logging.quiet, cfg.logging.log_file)

    try:
        if cfg.dry_run:
            files = discover_headers(cfg.path, cfg.lookup.recurse, cfg.files)
            if not files:
                log.warning("No headers matched %s", cfg.path)
            for file_path in files:
                print(file_path.as_posix())
            return 0

        outputs = _collect_outputs(cfg)
        progress_enabled = cfg.logging.progress and not cfg.logging.quiet
        status = ConsoleStatus(enabled=progress_enabled and sys.stderr.isatty())

        result = find_vtable(
            cfg.lookup.interface,
            cfg.path,
            recurse=cfg.lookup.recurse,
            status=status,
            status_handle=cfg.logging.status_handle,
            files_cfg=cfg.files,
        )
        log.info("%s: %d methods from %s", result.interface, len(result), result.source_path)

        if "json" in outputs:
            write_json_report(outputs["json"], result, pattern=cfg.path)
        if "csv" in outputs:
            write_csv_report(outputs["csv"], result)
        if "md" in outputs:
            write_markdown_report(outputs["md"], result)
        if outputs:
            for p in outputs.values():
                print(str(p))
        else:
            _print_vtable(result)
        return 0

    except VTableError as e:
        print(f"Lookup error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Usage error: {e}", file=sys.stderr)
        return 2
    except Exception as e:  # noqa: BLE001
        print(f"Runtime error: {e}", file=sys.stderr)
        return 3


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
