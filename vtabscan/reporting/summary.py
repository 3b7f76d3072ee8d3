from __future__ import annotations

from vtabscan.vtable.model import VTableResult


def build_summary(result: VTableResult) -> dict:
    by_interface: dict[str, int] = {}
    for m in result.methods:
        by_interface[m.interface] = by_interface.get(m.interface, 0) + 1
    own = by_interface.get(result.interface, 0)
    return {
        "total_methods": len(result.methods),
        "own_methods": own,
        "inherited_methods": len(result.methods) - own,
        "by_interface": by_interface,
    }
