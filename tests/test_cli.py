from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests.headers import EXAMPLE_HEADER, FIXTURES, write_header
from vtabscan.cli import run


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def test_prints_vtable_table(capsys):
    rc = run(["ID2D1Bitmap", str(FIXTURES / "d2d_like.h"), "--quiet"])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert out[0].split() == ["index", "name", "line", "interface", "iid"]
    assert out[1].split() == ["0", "QueryInterface", "-", "IUnknown", "-"]
    assert out[4].split() == ["3", "GetFactory", "13", "ID2D1Resource", "{2cd90691-12e2-11dc-9fed-001143a055f9}"]
    assert out[-1] == f"source: {FIXTURES / 'd2d_like.h'}"


def test_writes_reports(tmp_path: Path, capsys):
    header = write_header(tmp_path, "include/x.h", EXAMPLE_HEADER)
    out_dir = tmp_path / "reports"

    rc = run(["IExample", str(header.parent), "--output", "json,csv,md", "--out-dir", str(out_dir), "--quiet"])
    out = capsys.readouterr().out

    assert rc == 0
    assert str(out_dir / "vtable.json") in out
    data = json.loads((out_dir / "vtable.json").read_text(encoding="utf-8"))
    assert [m["name"] for m in data["methods"]] == ["QueryInterface", "AddRef", "Release", "Foo", "Bar"]
    assert (out_dir / "vtable.csv").exists()
    assert (out_dir / "vtable.md").exists()


def test_refuses_to_overwrite_reports(tmp_path: Path, capsys):
    header = write_header(tmp_path, "x.h", EXAMPLE_HEADER)
    out_dir = tmp_path / "reports"
    out_dir.mkdir()
    (out_dir / "vtable.json").write_text("{}", encoding="utf-8")

    rc = run(["IExample", str(header), "--output", "json", "--out-dir", str(out_dir), "--quiet"])
    assert rc == 2
    assert "use --overwrite" in capsys.readouterr().err

    rc = run(["IExample", str(header), "--output", "json", "--out-dir", str(out_dir), "--overwrite", "--quiet"])
    assert rc == 0


def test_no_matching_files_exit_code(tmp_path: Path, capsys):
    rc = run(["IExample", str(tmp_path / "*.h"), "--quiet"])
    err = capsys.readouterr().err
    assert rc == 1
    assert "Lookup error: Pattern matched no files" in err


def test_unresolved_base_exit_code(capsys):
    rc = run(["ID2D1Orphan", str(FIXTURES / "d2d_like.h"), "--quiet"])
    err = capsys.readouterr().err
    assert rc == 1
    assert "ID2D1Missing" in err


def test_dry_run_lists_candidates(capsys):
    rc = run(["IWidget", str(FIXTURES), "--dry-run", "--recurse", "--quiet"])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert out == [(FIXTURES / "d2d_like.h").as_posix(), (FIXTURES / "sdk" / "widget.h").as_posix()]


def test_missing_interface_is_config_error(capsys):
    rc = run([])
    assert rc == 2
    assert "Config error" in capsys.readouterr().err


def test_table_lookup_creates_no_report_directory(tmp_path: Path, capsys):
    header = write_header(tmp_path, "x.h", EXAMPLE_HEADER)

    rc = run(["IExample", str(header), "--quiet"])

    assert rc == 0
    assert "source:" in capsys.readouterr().out
    assert not (tmp_path / "vtabscan_reports").exists()
