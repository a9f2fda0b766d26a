"""Tests for options.py — layering and resolution."""

import pytest

from spawn_shell.options import DEFAULTS, Options, merge, resolve


def test_later_layers_win():
    merged = merge({"ignore_error": False, "shell_name": "bash"}, {"ignore_error": True})
    assert merged == {"ignore_error": True, "shell_name": "bash"}


def test_none_layers_skipped():
    assert merge(None, {"a": 1}, None) == {"a": 1}


def test_env_deep_merged():
    merged = merge({"env": {"BAR": "2"}}, {"env": {"FOO": "1"}}, {"env": {"FOO": "9"}})
    assert merged["env"] == {"BAR": "2", "FOO": "9"}


def test_env_replaces_when_accumulator_has_none():
    merged = merge({"ignore_error": True}, {"env": {"FOO": "1"}})
    assert merged["env"] == {"FOO": "1"}


def test_raw_env_not_deep_merged():
    merged = merge({"raw_env": {"A": "1"}}, {"raw_env": {"B": "2"}})
    assert merged["raw_env"] == {"B": "2"}


def test_merge_does_not_mutate_layers():
    base = {"env": {"BAR": "2"}}
    override = {"env": {"FOO": "1"}}
    merged = merge(base, override)
    assert base == {"env": {"BAR": "2"}}
    assert override == {"env": {"FOO": "1"}}
    assert merged["env"] is not base["env"]


def test_unknown_keys_pass_through():
    merged = merge(DEFAULTS, {"cwd": "/tmp", "start_new_session": True})
    assert merged["cwd"] == "/tmp"
    assert merged["start_new_session"] is True


def test_resolve_splits_extra():
    opts = resolve({"ignore_error": True, "cwd": "/tmp"})
    assert opts.ignore_error is True
    assert opts.extra == {"cwd": "/tmp"}


def test_resolve_defaults_baseline():
    opts = resolve(DEFAULTS)
    assert opts.echo_command is True
    assert opts.normalize_text is True
    assert opts.capture_output is False
    assert opts.capture_error is False
    assert opts.input_content is None
    assert opts.extra == {}


def test_resolve_shell_switch_tuple():
    opts = resolve({"shell_switch": ["-e", "-c"]})
    assert opts.shell_switch == ("-e", "-c")


def test_resolve_rejects_bad_stdio():
    with pytest.raises(ValueError, match="stdio needs 3 entries"):
        resolve({"stdio": [None, None]})


def test_options_usable_as_layer():
    merged = merge(DEFAULTS, Options(ignore_error=True, extra={"cwd": "/srv"}))
    assert merged["ignore_error"] is True
    assert merged["echo_command"] is True
    assert merged["cwd"] == "/srv"
    assert merged["shell_name"] is None


def test_as_mapping_skips_unset():
    mapping = Options(shell_name="bash").as_mapping()
    assert mapping["shell_name"] == "bash"
    assert "env" not in mapping
    assert "raw_env" not in mapping


def test_as_mapping_omits_unset_switches():
    assert Options(capture_output=True).as_mapping() == {"capture_output": True}


def test_resolve_fills_unset_switches():
    opts = resolve({"capture_output": None})
    assert opts.echo_command is False
    assert opts.ignore_error is False
    assert opts.capture_output is False
    assert opts.normalize_text is True


def test_merge_copies_env_mappings():
    env = {"FOO": "1"}
    raw = {"A": "1"}
    merged = merge({"env": env, "raw_env": raw})
    env["FOO"] = "changed"
    raw["A"] = "changed"
    assert merged["env"] == {"FOO": "1"}
    assert merged["raw_env"] == {"A": "1"}
