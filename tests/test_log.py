"""Tests for log.py — timestamped output."""

import re


def test_info(capsys):
    from spawn_shell.log import info

    info("test message")
    out = capsys.readouterr().out
    assert re.match(r"\[\d{2}:\d{2}:\d{2}\] test message\n", out)


def test_command(capsys):
    from spawn_shell.log import command

    command("git", ["commit", "-m", "msg"])
    out = capsys.readouterr().out
    assert re.match(r"\[\d{2}:\d{2}:\d{2}\] git commit -m msg\n", out)


def test_command_no_args(capsys):
    from spawn_shell.log import command

    command("true", [])
    assert capsys.readouterr().out.endswith("] true\n")


def test_debug_off_by_default(capsys, monkeypatch):
    monkeypatch.delenv("SPAWN_SHELL_DEBUG", raising=False)
    from spawn_shell.log import debug

    debug("hidden")
    assert capsys.readouterr().out == ""


def test_debug_enabled(capsys, monkeypatch):
    monkeypatch.setenv("SPAWN_SHELL_DEBUG", "1")
    from spawn_shell.log import debug

    debug("started pid 42")
    assert "debug: started pid 42" in capsys.readouterr().out


def test_error(capsys, monkeypatch):
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    from spawn_shell.log import error

    error("something broke")
    captured = capsys.readouterr()
    assert "ERROR: something broke" in captured.err
    assert captured.out == ""


def test_github_actions_error(capsys, monkeypatch):
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    from spawn_shell.log import error

    error("spawn failed")
    out = capsys.readouterr().out
    assert "::error::spawn failed" in out
