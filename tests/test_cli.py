"""Tests for mmake.cli."""

from __future__ import annotations

import errno
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from mmake.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MMAKE_FILE", raising=False)


def _write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


def _script(tmp_path: Path, name: str, status: int) -> str:
    script = tmp_path / f"{name}.py"
    script.write_text(f"import sys\nsys.exit({status})\n")
    return f"{name}:\n\t{sys.executable} {script}\n"


class TestMain:
    def test_builds_default_target(self, runner, tmp_path):
        _write(tmp_path / "mmakefile", _script(tmp_path, "ok", 0))
        result = runner.invoke(main, [])
        assert result.exit_code == 0
        assert f"{sys.executable} {tmp_path / 'ok.py'}" in result.output

    def test_exit_status_of_last_command(self, runner, tmp_path):
        _write(tmp_path / "mmakefile", _script(tmp_path, "fail", 3))
        result = runner.invoke(main, [])
        assert result.exit_code == 3

    def test_silent_suppresses_echo(self, runner, tmp_path):
        _write(tmp_path / "mmakefile", _script(tmp_path, "fail", 4))
        result = runner.invoke(main, ["-s"])
        assert result.exit_code == 4
        assert result.output == ""

    def test_explicit_file(self, runner, tmp_path):
        rules = _write(tmp_path / "other.mk", _script(tmp_path, "fail", 5))
        result = runner.invoke(main, ["-f", str(rules)])
        assert result.exit_code == 5

    def test_file_from_environment(self, runner, tmp_path):
        rules = _write(tmp_path / "env.mk", _script(tmp_path, "fail", 6))
        result = runner.invoke(main, [], env={"MMAKE_FILE": str(rules)})
        assert result.exit_code == 6

    def test_targets_in_order_last_status_wins(self, runner, tmp_path):
        _write(tmp_path / "mmakefile", _script(tmp_path, "first", 2) + _script(tmp_path, "second", 0))
        result = runner.invoke(main, ["first", "second"])
        assert result.exit_code == 0
        assert result.output.index("first.py") < result.output.index("second.py")

        result = runner.invoke(main, ["second", "first"])
        assert result.exit_code == 2

    def test_unknown_target_does_nothing(self, runner, tmp_path):
        _write(tmp_path / "mmakefile", _script(tmp_path, "fail", 1))
        result = runner.invoke(main, ["nothing"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_missing_rule_file(self, runner):
        result = runner.invoke(main, ["-f", "nope.mk"])
        assert result.exit_code == errno.ENOENT
        assert "mmake: nope.mk:" in result.output

    def test_parse_error(self, runner, tmp_path):
        _write(tmp_path / "mmakefile", "not a rule\n")
        result = runner.invoke(main, [])
        assert result.exit_code == 1
        assert "mmakefile:1:" in result.output

    def test_no_rule_for_prerequisite(self, runner, tmp_path):
        _write(tmp_path / "mmakefile", "app: missing.c\n\ttrue\n")
        result = runner.invoke(main, [])
        assert result.exit_code == 1
        assert "mmake: No rule to make target 'missing.c'" in result.output

    def test_undecodable_rule_file(self, runner, tmp_path):
        (tmp_path / "mmakefile").write_bytes(b"app:\n\techo \xff\n")
        result = runner.invoke(main, [])
        assert result.exit_code == 1
        assert "mmake: mmakefile: not valid UTF-8" in result.output

    def test_command_not_found(self, runner, tmp_path):
        _write(tmp_path / "mmakefile", "app:\n\tmmake-test-no-such-program\n")
        result = runner.invoke(main, ["-s"])
        assert result.exit_code == errno.ENOENT
        assert "mmake: mmake-test-no-such-program:" in result.output

    def test_defines_reach_hcl_templates(self, runner, tmp_path):
        script = tmp_path / "fail.py"
        script.write_text("import sys\nsys.exit(int(sys.argv[1]))\n")
        rules = _write(
            tmp_path / "rules.hcl",
            f'rule "run" {{\n  command = ["{sys.executable}", "{script}", "{{{{ status }}}}"]\n}}\n',
        )
        result = runner.invoke(main, ["-f", str(rules), "-D", "status=7"])
        assert result.exit_code == 7

    def test_bad_define(self, runner, tmp_path):
        _write(tmp_path / "mmakefile", "all:\n")
        result = runner.invoke(main, ["-D", "novalue"])
        assert result.exit_code == 2
        assert "NAME=VALUE" in result.output
