# cross_beam/diagrams.py
"""
BENDING MOMENT AND SHEAR DIAGRAMS
=================================

Once the Cross process has converged, the end moments of each span fully
determine its internal forces: each span is a simply supported beam under
its uniform load plus the two end moments.

SIGN CONVENTIONS:
-----------------
- End moments ml, mr: Cross convention, counter-clockwise positive on the
  member end (as stored on Member)
- Diagram moment M(x): beam convention, sagging positive
- Shear V(x) = dM/dx
- q positive top-down; reactions positive upward

For a span of length L:

    M(x) = -ml·(L - x)/L + mr·x/L + q·L·x/2 - q·x²/2
    V(x) = (ml + mr)/L + q·L/2 - q·x
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .config import CONFIG
from .model import Member, Support


@dataclass
class SpanDiagram:
    """Diagram data for one member."""
    member: int
    x0: float             # global position of the member's left end
    x: np.ndarray         # local positions, 0 to L
    M: np.ndarray         # bending moment (sagging positive)
    V: np.ndarray         # shear force
    max_M: float          # largest sagging moment in the span
    x_max_M: float        # local position of max_M


def member_moment(member: Member, x) -> np.ndarray:
    """Bending moment M(x) at local positions x of a member."""
    x = np.asarray(x, dtype=float)
    L, q = member.L, member.q
    return -member.ml * (L - x) / L + member.mr * x / L + q * L * x / 2.0 - q * x ** 2 / 2.0


def member_shear(member: Member, x) -> np.ndarray:
    """Shear force V(x) = dM/dx at local positions x of a member."""
    x = np.asarray(x, dtype=float)
    L, q = member.L, member.q
    return (member.ml + member.mr) / L + q * L / 2.0 - q * x


def member_moment_diagram(member: Member, n_points: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Sampled (x, M) along a member, x from 0 to L inclusive."""
    n_points = CONFIG.diagram_points if n_points is None else n_points
    if n_points < 2:
        raise ValueError(f"n_points must be at least 2, got {n_points}.")
    x = np.linspace(0.0, member.L, n_points)
    return x, member_moment(member, x)


def member_shear_diagram(member: Member, n_points: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Sampled (x, V) along a member."""
    n_points = CONFIG.diagram_points if n_points is None else n_points
    if n_points < 2:
        raise ValueError(f"n_points must be at least 2, got {n_points}.")
    x = np.linspace(0.0, member.L, n_points)
    return x, member_shear(member, x)


def span_diagrams(solver, n_points: Optional[int] = None) -> List[SpanDiagram]:
    """Moment and shear diagrams of every member of a solver's beam."""
    diagrams = []
    x0 = 0.0
    for i, m in enumerate(solver.members):
        x, M = member_moment_diagram(m, n_points)
        V = member_shear(m, x)

        # Extreme of the parabola where V = 0, if inside the span
        candidates = [0.0, m.L]
        if m.q != 0.0:
            x_star = ((m.ml + m.mr) / m.L + m.q * m.L / 2.0) / m.q
            if 0.0 < x_star < m.L:
                candidates.append(x_star)
        values = member_moment(m, np.array(candidates))
        k = int(np.argmax(values))

        diagrams.append(SpanDiagram(
            member=i,
            x0=x0,
            x=x,
            M=M,
            V=V,
            max_M=float(values[k]),
            x_max_M=float(candidates[k]),
        ))
        x0 += m.L
    return diagrams


def beam_moment_diagram(solver, n_points: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Moment diagram of the whole beam as global (x, M) arrays."""
    xs = []
    Ms = []
    for d in span_diagrams(solver, n_points):
        xs.append(d.x0 + d.x)
        Ms.append(d.M)
    return np.concatenate(xs), np.concatenate(Ms)


def support_reactions(solver) -> np.ndarray:
    """
    Vertical reaction at every support, left end to right end.

    Returns n_members + 1 values: the left outer support, each interior
    support, then the right outer support. A free end gets 0.
    """
    members = solver.members
    R = np.zeros(len(members) + 1, dtype=float)
    for i, m in enumerate(members):
        V_left = float(member_shear(m, 0.0))
        V_right = float(member_shear(m, m.L))
        R[i] += V_left
        R[i + 1] -= V_right
    if solver.left == Support.FREE:
        R[0] = 0.0
    if solver.right == Support.FREE:
        R[-1] = 0.0
    return R


def max_span_moments(solver) -> List[float]:
    """Largest sagging moment of each span."""
    return [d.max_M for d in span_diagrams(solver, n_points=2)]
