"""Lifecycle hooks: shell commands run at key points in the garden.

Configured via garden/hooks.yaml. This is how reminders and celebrations
reach an external notification service.

Hook points:
- post_check_in
- on_milestone
- on_habit_created, on_habit_archived, on_habit_deleted
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

from gardencore.fileio import read_yaml
from gardencore.workspace import hooks_config_path, workspace_root

logger = logging.getLogger(__name__)


VALID_HOOK_POINTS = {
    "post_check_in",
    "on_milestone",
    "on_habit_created",
    "on_habit_archived",
    "on_habit_deleted",
}

DEFAULT_TIMEOUT = 30
OUTPUT_LIMIT = 4096


def load_hooks_config(root: Path | None = None) -> dict[str, Any]:
    return read_yaml(hooks_config_path(root))


def run_hooks(
    hook_point: str,
    context: dict[str, Any],
    root: Path | None = None,
) -> list[dict[str, Any]]:
    """Run every command registered for *hook_point*.

    The context is passed as JSON on stdin. Failures are logged and reported
    in the results, never raised.
    """
    if hook_point not in VALID_HOOK_POINTS:
        logger.warning("Unknown hook point %r", hook_point)
        return []

    if root is None:
        root = workspace_root()

    hooks = load_hooks_config(root).get(hook_point, [])
    if not hooks or not isinstance(hooks, list):
        return []

    results = []
    context_json = json.dumps(context, ensure_ascii=False)

    for hook in hooks:
        if isinstance(hook, str):
            command, timeout = hook, DEFAULT_TIMEOUT
        elif isinstance(hook, dict):
            command = hook.get("command", "")
            timeout = hook.get("timeout", DEFAULT_TIMEOUT)
        else:
            continue
        if not command:
            continue

        result: dict[str, Any] = {"command": command, "hook_point": hook_point}
        try:
            proc = subprocess.run(
                command,
                shell=True,
                input=context_json,
                capture_output=True,
                text=True,
                timeout=timeout,
                cwd=str(root),
            )
            result["exit_code"] = proc.returncode
            result["stdout"] = proc.stdout[:OUTPUT_LIMIT]
            result["stderr"] = proc.stderr[:OUTPUT_LIMIT]
            if proc.returncode != 0:
                logger.warning("Hook %r (%s) exited with %s", command, hook_point, proc.returncode)
        except subprocess.TimeoutExpired:
            result["exit_code"] = -1
            result["error"] = f"Hook timed out after {timeout}s"
            logger.warning("Hook %r (%s) timed out after %ss", command, hook_point, timeout)
        except OSError as e:
            result["exit_code"] = -1
            result["error"] = str(e)
            logger.warning("Hook %r (%s) failed: %s", command, hook_point, e)

        results.append(result)

    return results
