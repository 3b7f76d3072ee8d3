from __future__ import annotations

import pytest

from tests.headers import EXAMPLE_HEADER, EXAMPLE_IID, FIXTURES
from vtabscan.parsing.declarations import ClassicMatch, DeclarativeMatch, GrammarKind, locate_declaration


def _text(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def test_locates_midl_interface():
    decl = locate_declaration(_text("sdk/widget.h"), "IWidget")
    assert isinstance(decl, ClassicMatch)
    assert decl.kind is GrammarKind.CLASSIC
    assert decl.name == "IWidget"
    assert decl.iid == "{6f1c3e1a-8a2b-4c7d-9e0f-112233445566}"


def test_locates_midl_interface_without_base():
    decl = locate_declaration(_text("sdk/widget.h"), "IEmpty")
    assert isinstance(decl, ClassicMatch)
    assert decl.iid == "{00000000-1111-2222-3333-444444444444}"


def test_locates_declarative_interface_and_base():
    decl = locate_declaration(_text("d2d_like.h"), "ID2D1Bitmap")
    assert isinstance(decl, DeclarativeMatch)
    assert decl.kind is GrammarKind.DECLARATIVE
    assert decl.name == "ID2D1Bitmap"
    assert decl.base == "ID2D1Image"
    assert decl.iid == "{a2296057-ea42-4099-983b-539fb6505426}"


def test_interface_name_is_case_insensitive():
    decl = locate_declaration(EXAMPLE_HEADER, "iexample")
    assert decl is not None
    assert decl.name == "IExample"
    assert decl.iid == EXAMPLE_IID
    assert decl.base == "IUnknown"


def test_other_tokens_are_case_sensitive():
    text = EXAMPLE_HEADER.replace("DX_DECLARE_INTERFACE", "dx_declare_interface")
    assert locate_declaration(text, "IExample") is None


def test_name_must_match_whole_identifier():
    assert locate_declaration(EXAMPLE_HEADER, "IExam") is None
    assert locate_declaration(_text("d2d_like.h"), "ID2D1Bitmap1") is None


def test_no_match_in_unrelated_text():
    assert locate_declaration("int main(void) { return 0; }\n", "IWidget") is None


def test_guid_must_have_8_4_4_4_12_shape():
    text = EXAMPLE_HEADER.replace("8d5a3b1e-2f4c", "8d5a3b1-2f4c")
    assert locate_declaration(text, "IExample") is None


def test_earliest_declaration_wins():
    text = EXAMPLE_HEADER + (
        '\nMIDL_INTERFACE("11111111-2222-3333-4444-555555555555")\n'
        "IExample : public IUnknown\n"
    )
    decl = locate_declaration(text, "IExample")
    assert isinstance(decl, DeclarativeMatch)

    text = (
        'MIDL_INTERFACE("11111111-2222-3333-4444-555555555555")\n'
        "IExample : public IUnknown\n"
    ) + EXAMPLE_HEADER
    decl = locate_declaration(text, "IExample")
    assert isinstance(decl, ClassicMatch)
    assert decl.iid == "{11111111-2222-3333-4444-555555555555}"


def test_empty_name_rejected():
    with pytest.raises(ValueError):
        locate_declaration(EXAMPLE_HEADER, "")
