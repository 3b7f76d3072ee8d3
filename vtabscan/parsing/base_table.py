from __future__ import annotations

from functools import lru_cache

from vtabscan.vtable.model import MethodRecord

ROOT_INTERFACE = "IUnknown"
ROOT_METHOD_NAMES = ("QueryInterface", "AddRef", "Release")


@lru_cache(maxsize=None)
def root_methods() -> tuple[MethodRecord, ...]:
    """Vtable slots every COM interface inherits from IUnknown."""
    return tuple(
        MethodRecord(index=i, name=name, line=None, interface=ROOT_INTERFACE, iid=None)
        for i, name in enumerate(ROOT_METHOD_NAMES)
    )
