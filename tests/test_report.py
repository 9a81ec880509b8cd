# File: tests/test_report.py
"""
TEST: Text reports and summary
==============================
"""

import numpy as np
import pytest

from cross_beam import CrossSolver, Support
from cross_beam.report import (
    beam_summary,
    format_moment,
    model_info_text,
    results_text,
    steps_text,
)


@pytest.mark.parametrize("value, dp, expected", [
    (86.4999, 1, "86.5"),
    (-109.0, 0, "-109"),
    (-0.04, 1, "0.0"),
    (-0.004, 2, "0.00"),
    (0.0, 2, "0.00"),
])
def test_format_moment(value, dp, expected):
    assert format_moment(value, dp) == expected


def test_model_info_lists_members_and_hinges():
    solver = CrossSolver.default()
    text = model_info_text(solver)
    lines = text.splitlines()

    assert "M O D E L" in lines[0]
    assert len(lines) == 2 + 3 + 1
    # pinned left end: first member has a hinge at its start only
    assert "yes" in lines[2]
    assert "yes" not in lines[3]
    assert "yes" not in lines[4]
    assert "PINNED" in lines[-1]
    assert "FIXED" in lines[-1]


def test_results_text_fixed_end_moments():
    solver = CrossSolver.default()
    text = results_text(solver)

    assert "-64.0" in text
    assert "114.0" in text
    assert "-84.0" in text
    assert len(text.splitlines()) == 5


def test_steps_text_uses_one_based_nodes():
    solver = CrossSolver.default()
    solver.auto_step()
    solver.auto_step()
    lines = steps_text(solver).splitlines()

    assert len(lines) == 4
    assert lines[2].split()[:2] == ["1", "1"]
    assert lines[3].split()[:2] == ["2", "2"]
    assert "-32.0" in lines[2]
    assert "11.5" in lines[3]


def test_summary_at_fixed_end_moments():
    summary = beam_summary(CrossSolver.default())

    assert summary["n_members"] == 3
    assert summary["n_nodes"] == 2
    assert summary["total_length"] == 20.0
    assert summary["state"] == "initialized"
    assert summary["num_steps"] == 0
    assert summary["converged"] is False
    assert summary["critical_member"] == 1
    assert summary["max_end_moment"] == 114.0


def test_summary_after_convergence():
    solver = CrossSolver.default()
    solver.run_to_convergence()
    summary = beam_summary(solver)

    assert summary["state"] == "converged"
    assert summary["converged"] is True
    assert summary["num_steps"] == solver.num_steps
    assert np.isclose(abs(summary["max_end_moment"]), 109.0, atol=0.05)


def test_summary_of_uninitialized_solver():
    summary = beam_summary(CrossSolver())
    assert summary["n_members"] == 0
    assert summary["critical_member"] is None
    assert summary["state"] == "uninitialized"


def test_summary_single_span():
    solver = CrossSolver.from_spans([(4, 10)], left=Support.FIXED, right=Support.FIXED)
    summary = beam_summary(solver)
    assert summary["n_nodes"] == 0
    assert summary["converged"] is True
    assert np.isclose(summary["max_end_moment"], 10 * 16 / 12)
