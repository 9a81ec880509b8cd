# cross_beam/report.py
"""Text reports and summary of a Cross process solution."""

from typing import Dict

import numpy as np

from .model import Support
from .solve import CrossSolver, format_moment


def model_info_text(solver: CrossSolver) -> str:
    """Members table: EI, hinges at the outer ends, length and load."""
    lines = [
        "____________ M O D E L  I N F O R M A T I O N ____________",
        " MEMBERS  EI [kNm^2]    HINGEi HINGEf  LENGTH [m]  Distrib. Load [kN/m]",
    ]
    last = solver.n_members - 1
    for i, m in enumerate(solver.members):
        hinge_i = "yes" if i == 0 and solver.left == Support.PINNED else "no"
        hinge_f = "yes" if i == last and solver.right == Support.PINNED else "no"
        lines.append(
            f"{i + 1:5d}  {m.EI:9.0f} {hinge_i:>12s} {hinge_f:>6s}  {m.L:6.2f} {m.q:15.2f}"
        )
    lines.append(f" Supports: left {solver.left.name}, right {solver.right.name}")
    return "\n".join(lines) + "\n"


def results_text(solver: CrossSolver) -> str:
    """Members table of end moments, formatted to the solver's precision."""
    lines = [
        "_____________ A N A L Y S I S  R E S U L T S _____________",
        " MEMBERS      Mom.Init [kNm]   Mom.End [kNm]",
    ]
    d = solver.decimal_places
    for i, m in enumerate(solver.members):
        lines.append(f"{i + 1:5d} {format_moment(m.ml, d):>15s} {format_moment(m.mr, d):>16s}")
    return "\n".join(lines) + "\n"


def steps_text(solver: CrossSolver) -> str:
    """Replay table of every balancing step."""
    d = solver.decimal_places
    lines = [
        "_____________ C R O S S  S T E P S _____________",
        "  STEP  NODE         tml         bml         bmr         tmr",
    ]
    for k, s in enumerate(solver.steps, start=1):
        lines.append(
            f"{k:6d} {s.node + 1:5d} "
            f"{format_moment(s.tml, d):>11s} {format_moment(s.bml, d):>11s} "
            f"{format_moment(s.bmr, d):>11s} {format_moment(s.tmr, d):>11s}"
        )
    return "\n".join(lines) + "\n"


def beam_summary(solver: CrossSolver) -> Dict:
    """Summary statistics of the current solution."""
    moments = solver.end_moments()
    if moments.size == 0:
        return {
            "n_members": 0,
            "n_nodes": 0,
            "total_length": 0.0,
            "state": solver.state.value,
            "num_steps": 0,
            "converged": False,
            "max_end_moment": 0.0,
            "critical_member": None,
        }

    abs_m = np.abs(moments)
    flat = int(np.argmax(abs_m))
    member, end = divmod(flat, 2)

    return {
        "n_members": solver.n_members,
        "n_nodes": solver.n_nodes,
        "total_length": solver.total_length,
        "state": solver.state.value,
        "num_steps": solver.num_steps,
        "converged": not solver.has_more_steps(),
        "max_end_moment": float(moments[member, end]),
        "critical_member": member,
    }
