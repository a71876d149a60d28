import sys
import runpy
import pytest
import concat_sha1
from cli.main import concat_sha1_cli


def test_entry_point_exposes_cli_group():
    assert concat_sha1.concat_sha1_cli is concat_sha1_cli


def test_running_module_invokes_cli(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(sys, "argv", ["concat_sha1.py", "-c", str(tmp_path / "absent.ini"), "sha1", "ab", "c"])

    with pytest.raises(SystemExit) as exc_info:
        runpy.run_module("concat_sha1", run_name="__main__")

    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip() == "a9993e364706816aba3e25717850c26c9cd0d89d"
