from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

GUID_PATTERN = r"[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}"

# MIDL output:
#     MIDL_INTERFACE("ec5ec8a9-c395-4314-9c77-54d7a935ff70")
#     IWICImagingFactory : public IUnknown
_CLASSIC_TEMPLATE = (
    r'MIDL_INTERFACE\(\s*"(?P<guid>' + GUID_PATTERN + r')"\s*\)[ \t]*\r?\n'
    r"[ \t]*(?P<name>(?i:{name}))\b"
    r"(?:[ \t]*:[ \t]*public[ \t]+\w+)?"
)

# Hand-written SDK headers (d2d1.h, dwrite.h, ...):
#     interface DX_DECLARE_INTERFACE("2cd90691-12e2-11dc-9fed-001143a055f9") ID2D1Resource  : public IUnknown
_DECLARATIVE_TEMPLATE = (
    r"\binterface[ \t]+(?:\w*DECLARE_INTERFACE|DECLSPEC_UUID)"
    r'\(\s*"(?P<guid>' + GUID_PATTERN + r')"\s*\)\s*'
    r"(?P<name>(?i:{name}))\b\s*:\s*public\s+(?P<base>\w+)"
)


class GrammarKind(Enum):
    CLASSIC = "classic"
    DECLARATIVE = "declarative"


@dataclass(frozen=True)
class ClassicMatch:
    start: int
    end: int
    name: str
    iid: str

    kind = GrammarKind.CLASSIC


@dataclass(frozen=True)
class DeclarativeMatch:
    start: int
    end: int
    name: str
    iid: str
    base: str

    kind = GrammarKind.DECLARATIVE


DeclarationMatch = ClassicMatch | DeclarativeMatch


def format_iid(guid: str) -> str:
    return "{" + guid + "}"


def _compile(template: str, interface_name: str) -> re.Pattern[str]:
    return re.compile(template.replace("{name}", re.escape(interface_name)))


def locate_declaration(text: str, interface_name: str) -> DeclarationMatch | None:
    """Find the first declaration of ``interface_name`` in either grammar.

    When both grammars match, the one starting earlier in the text wins.
    Returns ``None`` if the file declares nothing by that name.
    """
    if not interface_name:
        raise ValueError("interface_name is required")

    candidates: list[DeclarationMatch] = []

    m = _compile(_CLASSIC_TEMPLATE, interface_name).search(text)
    if m:
        candidates.append(
            ClassicMatch(start=m.start(), end=m.end(), name=m.group("name"), iid=format_iid(m.group("guid")))
        )

    m = _compile(_DECLARATIVE_TEMPLATE, interface_name).search(text)
    if m:
        candidates.append(
            DeclarativeMatch(
                start=m.start(),
                end=m.end(),
                name=m.group("name"),
                iid=format_iid(m.group("guid")),
                base=m.group("base"),
            )
        )

    if not candidates:
        return None
    return min(candidates, key=lambda c: c.start)
