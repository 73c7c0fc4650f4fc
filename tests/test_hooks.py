"""Tests for gardencore/hooks.py: hook system."""

import json

import yaml

from gardencore.hooks import load_hooks_config, run_hooks


def _write_hooks(workspace, config):
    config_path = workspace / "garden" / "hooks.yaml"
    config_path.write_text(yaml.dump(config), encoding="utf-8")


def test_run_hooks_no_config(workspace):
    """No hooks.yaml -> no hooks run."""
    assert load_hooks_config(workspace) == {}
    results = run_hooks("post_check_in", {"habitId": 1}, workspace)
    assert results == []


def test_run_hooks_with_echo(workspace):
    """Hook that echoes context via stdin."""
    _write_hooks(workspace, {"post_check_in": ["cat"]})

    results = run_hooks("post_check_in", {"habitId": 1, "date": "2026-02-11"}, workspace)
    assert len(results) == 1
    assert results[0]["exit_code"] == 0
    output = json.loads(results[0]["stdout"])
    assert output["date"] == "2026-02-11"


def test_run_hooks_invalid_hook_point(workspace):
    results = run_hooks("post_finalize", {}, workspace)
    assert results == []


def test_run_hooks_timeout(workspace):
    """Hook timeout protection."""
    _write_hooks(workspace, {"on_milestone": [{"command": "sleep 10", "timeout": 1}]})

    results = run_hooks("on_milestone", {"habitId": 1}, workspace)
    assert len(results) == 1
    assert results[0]["exit_code"] == -1
    assert "timed out" in results[0].get("error", "").lower()


def test_run_hooks_nonzero_exit(workspace):
    _write_hooks(workspace, {"on_habit_created": ["echo oops >&2; exit 2"]})

    results = run_hooks("on_habit_created", {}, workspace)
    assert results[0]["exit_code"] == 2
    assert "oops" in results[0]["stderr"]


def test_run_hooks_skips_malformed_entries(workspace):
    _write_hooks(workspace, {"on_habit_deleted": [42, {"timeout": 5}, "true"]})

    results = run_hooks("on_habit_deleted", {}, workspace)
    assert [r["command"] for r in results] == ["true"]
