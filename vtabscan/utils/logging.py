from __future__ import annotations

import logging
import sys
from pathlib import Path


def configure_logging(verbose: bool = False, quiet: bool = False, log_file: str | None = None) -> None:
    level = logging.WARNING if quiet else logging.DEBUG if verbose else logging.INFO

    # stdout carries the vtable listing.
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
