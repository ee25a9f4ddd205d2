"""Test eval runner execution."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]

SCENARIO_IDS = [
    "cairo_day_group_tier_a",
    "cairo_day_group_tier_b",
    "odd_party_with_services",
    "guide_assigned_but_not_required",
]


@pytest.fixture(scope="module")
def runner_result() -> subprocess.CompletedProcess[str]:
    """Run eval/runner.py once from the repository root."""
    env = {**os.environ, "PYTHONPATH": str(REPO_ROOT)}
    return subprocess.run(
        [sys.executable, "eval/runner.py"],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
        env=env,
    )


def test_eval_runner_executes(runner_result: subprocess.CompletedProcess[str]) -> None:
    """Test that eval runner runs every scenario."""
    for scenario_id in SCENARIO_IDS:
        assert f"Scenario: {scenario_id}" in runner_result.stdout


def test_all_predicates_pass(runner_result: subprocess.CompletedProcess[str]) -> None:
    """Test that the bundled scenarios match the engine."""
    assert "✗" not in runner_result.stdout
    assert runner_result.returncode == 0, runner_result.stdout + runner_result.stderr


def test_runner_reports_summary(runner_result: subprocess.CompletedProcess[str]) -> None:
    """Test that eval runner reports a summary and the scenario totals."""
    assert "=== Summary ===" in runner_result.stdout
    assert "Grand total: 1235" in runner_result.stdout
