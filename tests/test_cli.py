# tests/test_cli.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from flakerun.cli import run_cli

_ENV: dict[str, str] = {}


def _py(code: str) -> list[str]:
    return [sys.executable, "-c", code]


def _flaky(counter: Path, failures: int, code: int = 1) -> list[str]:
    """Command that exits with `code` on its first `failures` runs, then 0."""
    return _py(
        "import sys; from pathlib import Path; "
        f"p = Path(r'{counter}'); "
        "n = int(p.read_text()) if p.exists() else 0; "
        "p.write_text(str(n + 1)); "
        f"sys.exit({code} if n < {failures} else 0)"
    )


def test_always_succeeding_command(capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(["--runs", "3", *_py("pass")], environ=_ENV)
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == [
        "ok\t(1 successes, 0 failures)",
        "ok\t(2 successes, 0 failures)",
        "ok\t(3 successes, 0 failures)",
        "successes: 3",
        "failures: 0",
    ]


def test_mixed_results_are_tallied(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    counter = tmp_path / "counter.txt"

    code = run_cli(["-r", "5", *_flaky(counter, 3)], environ=_ENV)
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out[0] == "failed: 1\t(0 successes, 1 failures)"
    assert out[-3:] == ["successes: 2", "failures: 3", "(exit code 1): 3"]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
def test_killed_command_is_reported(capsys: pytest.CaptureFixture[str]) -> None:
    cmd = _py("import os, signal; os.kill(os.getpid(), signal.SIGKILL)")

    code = run_cli(["--runs", "1", *cmd], environ=_ENV)
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == [
        "killed\t(0 successes, 1 failures)",
        "successes: 0",
        "failures: 1",
        "(killed): 1",
    ]


def test_zero_runs_prints_empty_report(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = run_cli(["--runs", "0", str(tmp_path / "never-spawned")], environ=_ENV)
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == ["successes: 0", "failures: 0"]


def test_missing_command_is_a_spawn_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = run_cli(["--runs", "3", str(tmp_path / "nope")], environ=_ENV)
    captured = capsys.readouterr()

    assert code == 1
    assert "couldn't execute command" in captured.err
    assert "successes:" not in captured.out


def test_options_after_command_belong_to_it(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out_file = tmp_path / "argv.txt"
    cmd = _py(
        "import sys; open(sys.argv[1], 'w').write(' '.join(sys.argv[2:]))"
    )

    code = run_cli(
        ["-r", "1", *cmd, str(out_file), "--runs", "9", "-s", "always"], environ=_ENV
    )
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out_file.read_text() == "--runs 9 -s always"
    assert out[-2:] == ["successes: 1", "failures: 0"]


def test_show_output_on_failure(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    counter = tmp_path / "counter.txt"
    cmd = _py(
        "import sys; from pathlib import Path; "
        f"p = Path(r'{counter}'); "
        "n = int(p.read_text()) if p.exists() else 0; "
        "p.write_text(str(n + 1)); "
        "print(f'run {n}'); "
        "sys.exit(2 if n == 0 else 0)"
    )

    code = run_cli(["-r", "2", "-s", "on-failure", *cmd], environ=_ENV)
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out[:3] == ["failed: 2\t(0 successes, 1 failures)", "stdout:", "run 0"]
    assert "run 1" not in out
    assert "stderr:" not in out


def test_show_output_always_includes_stderr(
    capsys: pytest.CaptureFixture[str],
) -> None:
    cmd = _py("import sys; sys.stderr.write('warned')")

    code = run_cli(["-r", "1", "--show-output", "always", *cmd], environ=_ENV)
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out[:3] == ["ok\t(1 successes, 0 failures)", "stderr:", "warned"]


def test_show_output_never_is_default(capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(["-r", "1", *_py("print('hidden')")], environ=_ENV)
    out = capsys.readouterr().out

    assert code == 0
    assert "hidden" not in out


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--runs", "-1", "true"],
        ["--runs", "many", "true"],
        ["--show-output", "sometimes", "true"],
        [""],
    ],
)
def test_usage_errors_exit_2(
    argv: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_cli(argv, environ=_ENV)

    assert excinfo.value.code == 2
    assert capsys.readouterr().err != ""


def test_invalid_log_level_env_returns_2(
    capsys: pytest.CaptureFixture[str],
) -> None:
    code = run_cli(["-r", "1", *_py("pass")], environ={"FLAKERUN_LOG_LEVEL": "loud"})
    captured = capsys.readouterr()

    assert code == 2
    assert "FLAKERUN_LOG_LEVEL" in captured.err
    assert captured.out == ""


def test_debug_level_logs_arguments_and_output(
    caplog: pytest.LogCaptureFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    caplog.set_level(logging.DEBUG)

    code = run_cli(
        ["-r", "1", *_py("print('captured')")],
        environ={"FLAKERUN_LOG_LEVEL": "DEBUG"},
    )
    _ = capsys.readouterr()

    assert code == 0
    assert "parsed arguments" in caplog.text
    assert "captured" in caplog.text


def test_settings_file_supplies_defaults(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "flakerun.yml"
    cfg.write_text("runs: 2\nshow_output: always\n", encoding="utf-8")

    code = run_cli(["-c", str(cfg), *_py("print('shown')")], environ=_ENV)
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out.count("shown") == 2
    assert out[-2:] == ["successes: 2", "failures: 0"]


def test_command_line_overrides_settings_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "flakerun.json"
    cfg.write_text('{"runs": 5}', encoding="utf-8")

    code = run_cli(["-c", str(cfg), "-r", "1", *_py("pass")], environ=_ENV)
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out[-2:] == ["successes: 1", "failures: 0"]


def test_bad_settings_file_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = run_cli(["-c", str(tmp_path / "missing.yml"), "true"], environ=_ENV)
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err != ""
