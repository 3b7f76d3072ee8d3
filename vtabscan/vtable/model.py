from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MethodRecord:
    index: int
    name: str
    line: int | None
    interface: str
    iid: str | None = None


@dataclass(frozen=True)
class VTableResult:
    interface: str
    methods: tuple[MethodRecord, ...] = field(default_factory=tuple)
    source_path: str | None = None

    @property
    def found(self) -> bool:
        return self.source_path is not None

    def __len__(self) -> int:
        return len(self.methods)

    def __iter__(self) -> Iterator[MethodRecord]:
        return iter(self.methods)
