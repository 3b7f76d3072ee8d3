from __future__ import annotations

import logging
from pathlib import Path

from vtabscan.config import FilesConfig
from vtabscan.parsing.base_table import ROOT_INTERFACE, root_methods
from vtabscan.parsing.declarations import DeclarationMatch, DeclarativeMatch, locate_declaration
from vtabscan.parsing.methods import scan_methods
from vtabscan.scanner.file_scanner import discover_headers
from vtabscan.utils.progress import StatusDisplay
from vtabscan.vtable.errors import BaseInterfaceUnresolved, InheritanceCycleError, InterfaceNotFound, NoMatchingFiles
from vtabscan.vtable.model import MethodRecord, VTableResult

log = logging.getLogger(__name__)

MAX_INHERITANCE_DEPTH = 32


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="ignore")


def _inherited_methods(
    decl: DeclarationMatch,
    path: Path,
    status: StatusDisplay | None,
    status_handle: str | None,
    chain: list[str],
) -> tuple[MethodRecord, ...]:
    # MIDL Vtbl structs already list every inherited slot.
    if not isinstance(decl, DeclarativeMatch):
        return ()
    if decl.base == ROOT_INTERFACE:
        return root_methods()

    base = _search(decl.base, [path], status, status_handle, chain)
    if base is None:
        raise BaseInterfaceUnresolved(decl.name, decl.base, str(path))
    return base.methods


def _assemble(
    text: str,
    path: Path,
    decl: DeclarationMatch,
    status: StatusDisplay | None,
    status_handle: str | None,
    chain: list[str],
) -> VTableResult:
    prefix = _inherited_methods(decl, path, status, status_handle, chain)
    own = scan_methods(text, decl.end, decl.kind, decl.name)
    methods = prefix + tuple(
        MethodRecord(index=len(prefix) + i, name=name, line=line, interface=decl.name, iid=decl.iid)
        for i, (name, line) in enumerate(own)
    )
    log.debug(
        "%s in %s: %d inherited, %d own (%s grammar)",
        decl.name,
        path,
        len(prefix),
        len(own),
        decl.kind.value,
    )
    return VTableResult(interface=decl.name, methods=methods, source_path=str(path))


def _search(
    interface_name: str,
    candidates: list[Path],
    status: StatusDisplay | None,
    status_handle: str | None,
    chain: list[str],
) -> VTableResult | None:
    key = interface_name.lower()
    if key in chain or len(chain) >= MAX_INHERITANCE_DEPTH:
        raise InheritanceCycleError([*chain, key])
    chain = [*chain, key]

    for path in candidates:
        if status is not None and status_handle:
            status.show(status_handle, str(path))
        text = _read_text(path)
        decl = locate_declaration(text, interface_name)
        if decl is None:
            log.debug("%s: no declaration of %s", path, interface_name)
            continue
        return _assemble(text, path, decl, status, status_handle, chain)
    return None


def find_vtable(
    interface_name: str,
    file_pattern: str,
    recurse: bool = False,
    status: StatusDisplay | None = None,
    status_handle: str | None = None,
    files_cfg: FilesConfig | None = None,
) -> VTableResult:
    """Resolve the full vtable of ``interface_name`` from the headers matching ``file_pattern``.

    ``file_pattern`` may be a header path, a directory (its ``*.h`` files,
    descending into subdirectories when ``recurse`` is set) or a glob. The
    first header declaring the interface wins. Base interfaces of
    ``interface ... : public Base`` declarations are resolved from that same
    header and prepended, so indices are the real vtable slots.

    Raises NoMatchingFiles, InterfaceNotFound, BaseInterfaceUnresolved or
    InheritanceCycleError. When ``status`` and ``status_handle`` are given,
    each header path is shown on that channel while it is read and the
    channel is cleared before returning.
    """
    if not interface_name:
        raise ValueError("interface_name is required")

    try:
        if files_cfg is None:
            files_cfg = FilesConfig(exclude=[], max_file_bytes=0)
        candidates = discover_headers(file_pattern, recurse, files_cfg)
        if not candidates:
            raise NoMatchingFiles(file_pattern)
        log.debug("Searching %d header(s) for %s", len(candidates), interface_name)

        result = _search(interface_name, candidates, status, status_handle, [])
        if result is None:
            raise InterfaceNotFound(interface_name, file_pattern, len(candidates))
        return result
    finally:
        if status is not None and status_handle:
            status.clear(status_handle)
