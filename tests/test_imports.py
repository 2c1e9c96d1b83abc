"""Each public module must import cleanly in a fresh interpreter."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"


def _import_in_fresh_interpreter(statement: str) -> subprocess.CompletedProcess:
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [str(SRC), os.environ.get("PYTHONPATH")]))}
    return subprocess.run(
        [sys.executable, "-c", statement],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )


@pytest.mark.parametrize(
    "module",
    [
        "slack_linker.service",
        "slack_linker.slack",
        "slack_linker.slack.router",
        "slack_linker.connections",
        "slack_linker.app",
    ],
)
def test_module_imports_standalone(module: str):
    """Importing a module first (not via the app) must not hit an import cycle."""
    result = _import_in_fresh_interpreter(f"import {module}")

    assert result.returncode == 0, result.stderr


def test_service_class_importable_first():
    result = _import_in_fresh_interpreter(
        "from slack_linker.service import MessageResolutionService"
    )

    assert result.returncode == 0, result.stderr
