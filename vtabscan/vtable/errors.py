from __future__ import annotations


class VTableError(Exception):
    """Base class for lookup failures that abort the whole call."""


class NoMatchingFiles(VTableError):
    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"Pattern matched no files: {pattern}")


class InterfaceNotFound(VTableError):
    def __init__(self, interface: str, pattern: str, files_searched: int):
        self.interface = interface
        self.pattern = pattern
        self.files_searched = files_searched
        super().__init__(
            f"Interface {interface} not declared in any of {files_searched} file(s) matching {pattern}"
        )


class BaseInterfaceUnresolved(VTableError):
    def __init__(self, interface: str, base: str, path: str):
        self.interface = interface
        self.base = base
        self.path = path
        super().__init__(f"Base interface {base} of {interface} not declared in {path}")


class InheritanceCycleError(VTableError):
    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__("Base interface chain does not terminate: " + " -> ".join(self.chain))
