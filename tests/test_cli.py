from __future__ import annotations

import pytest

from swc2dot import __version__
from swc2dot.cli import main

from conftest import EXAMPLE_LINES, write_swc


def test_convert_single_file(tmp_path, capsys):
    src = write_swc(tmp_path / "cell.swc", EXAMPLE_LINES)
    dst = tmp_path / "cell.dot"

    assert main([str(src), "-o", str(dst), "--quiet"]) == 0
    assert dst.read_text(encoding="utf-8").startswith("graph{")
    assert capsys.readouterr().out == ""


def test_style_override_file(tmp_path):
    src = write_swc(tmp_path / "cell.swc", EXAMPLE_LINES)
    style = tmp_path / "style.yml"
    style.write_text("soma:\n  color: blue\n", encoding="utf-8")
    dst = tmp_path / "cell.dot"

    assert main([str(src), "-o", str(dst), "-c", str(style), "-q"]) == 0
    assert "color: blue; " in dst.read_text(encoding="utf-8")


def test_conversion_error_exit_status(tmp_path, capsys):
    src = write_swc(tmp_path / "cell.swc", ["1 1 0 0 0 1.0"])
    dst = tmp_path / "cell.dot"

    assert main([str(src), "-o", str(dst), "-q"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: line 1: ")
    assert "got 6 items" in err
    assert not dst.exists()


def test_missing_input_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.swc"), "-o", str(tmp_path / "out.dot"), "-q"]) == 1
    assert "File not found" in capsys.readouterr().err


def test_output_is_required_for_files(tmp_path):
    src = write_swc(tmp_path / "cell.swc", EXAMPLE_LINES)
    with pytest.raises(SystemExit) as excinfo:
        main([str(src)])
    assert excinfo.value.code == 2


def test_table_export(tmp_path):
    src = write_swc(tmp_path / "cell.swc", EXAMPLE_LINES)
    table = tmp_path / "cell.csv"

    assert main([str(src), "-o", str(tmp_path / "cell.dot"), "--table", str(table), "-q"]) == 0
    assert table.read_text(encoding="utf-8").splitlines()[0] == "ID,Type,X,Y,Z,Radius,Parent"


def test_table_is_rejected_in_directory_mode(tmp_path):
    write_swc(tmp_path / "traces" / "a.swc", EXAMPLE_LINES)
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "traces"), "--output-dir", str(tmp_path / "dot"), "--table", str(tmp_path / "a.csv")])
    assert excinfo.value.code == 2


def test_directory_mode(tmp_path):
    write_swc(tmp_path / "traces" / "a.swc", EXAMPLE_LINES)
    write_swc(tmp_path / "traces" / "b.swc", ["1 1 0 0 0 1"])

    code = main([str(tmp_path / "traces"), "--output-dir", str(tmp_path / "dot"), "--keep-going", "-q"])

    assert code == 1
    assert (tmp_path / "dot" / "a.dot").is_file()
    assert not (tmp_path / "dot" / "b.dot").exists()


def test_directory_mode_requires_output_dir(tmp_path):
    (tmp_path / "traces").mkdir()
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "traces"), "-o", "x.dot"])
    assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])
    assert __version__ in capsys.readouterr().out
