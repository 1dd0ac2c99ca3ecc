"""Smoke tests for example scripts.

These tests ensure that the example scripts run their main execution paths
without raising exceptions.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

# Determine the repo root
ROOT = Path(__file__).resolve().parents[1]


def test_hadamard_demo_runs() -> None:
    """Test that examples/hadamard_demo.py runs successfully."""
    script = ROOT / "examples" / "hadamard_demo.py"
    assert script.exists(), f"Example script not found: {script}"

    pythonpath = os.pathsep.join(p for p in (str(ROOT), os.environ.get("PYTHONPATH")) if p)
    result = subprocess.run(
        [sys.executable, str(script)],
        capture_output=True,
        text=True,
        encoding="utf-8",
        env={**os.environ, "PYTHONIOENCODING": "utf-8", "PYTHONPATH": pythonpath},
        check=False,
        timeout=60,
    )

    assert result.returncode == 0, (
        f"Example script failed with return code {result.returncode}.\n"
        f"STDOUT:\n{result.stdout}\n"
        f"STDERR:\n{result.stderr}"
    )

    assert "Final state vector:" in result.stdout
    assert "|110⟩" in result.stdout
    assert "Total probability: 1.000000000000" in result.stdout
