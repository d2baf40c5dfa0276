"""Each API module must import on its own, in a fresh interpreter."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[3] / "src"


@pytest.mark.parametrize(
    "module",
    [
        "api.dependencies.auth",
        "api.dependencies.profile",
        "api.v1.dependencies",
        "api.v1",
        "main",
    ],
)
def test_module_imports_standalone(module: str) -> None:
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=SRC_DIR,
        capture_output=True,
        text=True,
        env={**os.environ, "RATE_LIMIT_ENABLED": "false"},
    )

    assert result.returncode == 0, result.stderr
