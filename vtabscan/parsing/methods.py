from __future__ import annotations

import logging
import re

from vtabscan.parsing.declarations import GrammarKind

log = logging.getLogger(__name__)

# HRESULT ( STDMETHODCALLTYPE *QueryInterface )(
CLASSIC_METHOD_RE = re.compile(r"STDMETHODCALLTYPE\s*\*\s*(\w+)\s*\)\s*\(")
CLASSIC_END_RE = re.compile(r"\bEND_INTERFACE\b")

# STDMETHOD(CreateStreamFromKey)(
# STDMETHOD_(void, GetFactory)(
DECLARATIVE_METHOD_RE = re.compile(r"\bSTDMETHOD(?:_\(\s*[^,()\n]+?\s*,|\()\s*(\w+)\s*\)(?=[^\n]*\n)")


def _declarative_end_re(interface_name: str) -> re.Pattern[str]:
    # }; // interface ID2D1Resource
    return re.compile(
        r"^[ \t]*\}[ \t]*;[ \t]*//[ \t]*interface[ \t]+(?i:" + re.escape(interface_name) + r")\b",
        re.MULTILINE,
    )


def _scan(
    text: str,
    pos: int,
    method_re: re.Pattern[str],
    end_re: re.Pattern[str],
) -> list[tuple[str, int]]:
    terminator = end_re.search(text, pos)
    limit = terminator.start() if terminator else len(text)

    out: list[tuple[str, int]] = []
    line = text.count("\n", 0, pos) + 1
    while True:
        m = method_re.search(text, pos)
        if m is None or m.start() >= limit:
            break
        line += text.count("\n", pos, m.end())
        out.append((m.group(1), line))
        pos = m.end()
    return out


def scan_methods(text: str, start: int, kind: GrammarKind, interface_name: str) -> list[tuple[str, int]]:
    """Return ``(method, line)`` pairs declared after ``start``, in text order.

    Line numbers are 1-based and refer to the line holding the end of each
    method match.
    """
    if kind is GrammarKind.CLASSIC:
        vtbl = re.compile(r"\b" + re.escape(interface_name) + r"Vtbl\b").search(text, start)
        if vtbl is None:
            log.debug("No %sVtbl struct after offset %d", interface_name, start)
            return []
        return _scan(text, vtbl.end(), CLASSIC_METHOD_RE, CLASSIC_END_RE)
    return _scan(text, start, DECLARATIVE_METHOD_RE, _declarative_end_re(interface_name))
