import json

import pytest

from confmux import __version__
from confmux.cli import main


def test_convert(tmp_path):
    src = tmp_path / "settings.yaml"
    src.write_text("db:\n  port: 5432\n", encoding="utf-8")
    dst = tmp_path / "out" / "settings.json"

    assert main(["convert", str(src), str(dst)]) == 0
    assert json.loads(dst.read_text(encoding="utf-8")) == {"db": {"port": 5432}}


def test_convert_with_explicit_formats(tmp_path):
    src = tmp_path / "settings.conf"
    src.write_text("[db]\nport=5432\n", encoding="utf-8")
    dst = tmp_path / "settings.out"

    assert main(["convert", str(src), str(dst), "--from", "ini", "--to", "env"]) == 0
    assert dst.read_text(encoding="utf-8") == "DB_PORT=5432\n"


def test_convert_missing_source(tmp_path):
    assert main(["convert", str(tmp_path / "nope.json"), str(tmp_path / "x.json")]) == 1


def test_convert_unknown_format(tmp_path):
    src = tmp_path / "a.json"
    src.write_text("{}", encoding="utf-8")
    assert main(["convert", str(src), str(tmp_path / "a.toon")]) == 1


def test_formats(capsys):
    assert main(["formats"]) == 0
    out = capsys.readouterr().out.split()
    assert "yml" in out and "properties" in out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_missing_command():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2
