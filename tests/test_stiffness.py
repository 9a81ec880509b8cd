# File: tests/test_stiffness.py
"""
TEST: Member stiffness and node coefficients
============================================

Rotational stiffness depends on the far-end condition:
    continuous / fixed  -> 4EI/L
    pinned              -> 3EI/L
    free                -> 0

Distribution coefficients at a node are the relative stiffnesses of the two
adjacent members, so dl + dr = 1. Carry-over factors are 1/2, except toward
a pinned or free outer end one member away.
"""

import numpy as np
import pytest

from cross_beam import CrossSolver, Support, DegenerateStiffnessError, Member
from cross_beam.elements import rotational_stiffness, assign_stiffness, build_nodes


def test_rotational_stiffness_by_far_end():
    EI = 10000.0
    L = 8.0

    assert np.isclose(rotational_stiffness(EI, L), 4 * EI / L)
    assert np.isclose(rotational_stiffness(EI, L, Support.FIXED), 4 * EI / L)
    assert np.isclose(rotational_stiffness(EI, L, Support.PINNED), 3 * EI / L)
    assert rotational_stiffness(EI, L, Support.FREE) == 0.0


def test_rotational_stiffness_rejects_zero_length():
    with pytest.raises(ValueError):
        rotational_stiffness(10000.0, 0.0)


def test_reference_beam_coefficients():
    """
    Three spans 8-6-6, EI = 10000, pinned left, fixed right.

    k1 = 3EI/8 = 3750, k2 = k3 = 4EI/6 = 6666.67
    Node 0: dl = 3750 / 10416.67 = 0.36, dr = 0.64
    Node 1: dl = dr = 0.5
    """
    solver = CrossSolver.default()

    k = [m.k for m in solver.members]
    np.testing.assert_allclose(k, [3750.0, 40000.0 / 6, 40000.0 / 6])

    n0, n1 = solver.nodes
    assert np.isclose(n0.dl, 0.36)
    assert np.isclose(n0.dr, 0.64)
    assert np.isclose(n1.dl, 0.5)
    assert np.isclose(n1.dr, 0.5)

    # Pinned left end takes no carry-over, fixed right end does
    assert n0.tl == 0.0
    assert n0.tr == 0.5
    assert n1.tl == 0.5
    assert n1.tr == 0.5

    for node in solver.nodes:
        assert node.rot == 0.0


@pytest.mark.parametrize("left", list(Support))
@pytest.mark.parametrize("right", list(Support))
def test_distribution_coefficients_sum_to_one(left, right):
    solver = CrossSolver.from_spans(
        [(5.0, 10.0, 12000.0), (4.0, 20.0, 8000.0), (7.0, 5.0, 15000.0), (3.0, 12.0)],
        left=left, right=right,
    )
    for node in solver.nodes:
        assert np.isclose(node.dl + node.dr, 1.0, rtol=0, atol=1e-12)


def test_free_left_end_has_zero_stiffness_and_carry_over():
    solver = CrossSolver.from_spans([(2.0, 10.0), (6.0, 10.0), (6.0, 10.0)],
                                    left=Support.FREE, right=Support.FIXED)

    assert solver.members[0].k == 0.0
    assert solver.nodes[0].dl == 0.0
    assert solver.nodes[0].dr == 1.0
    assert solver.nodes[0].tl == 0.0


def test_free_right_end_has_zero_stiffness_and_carry_over():
    solver = CrossSolver.from_spans([(6.0, 10.0), (6.0, 10.0), (2.0, 10.0)],
                                    left=Support.FIXED, right=Support.FREE)

    assert solver.members[-1].k == 0.0
    assert solver.nodes[-1].dr == 0.0
    assert solver.nodes[-1].tr == 0.0
    # The left side of the same node still carries over toward the interior
    assert solver.nodes[-1].tl == 0.5


def test_pinned_right_end_zeroes_right_carry_over():
    solver = CrossSolver.from_spans([(6.0, 10.0), (6.0, 10.0)],
                                    left=Support.FIXED, right=Support.PINNED)

    node = solver.nodes[0]
    assert node.tl == 0.5
    assert node.tr == 0.0


def test_single_span_free_free_is_degenerate():
    """A single member free at both ends must fail, not produce NaN coefficients."""
    with pytest.raises(DegenerateStiffnessError):
        CrossSolver.from_spans([(5.0, 10.0)], left=Support.FREE, right=Support.FREE)


def test_single_span_free_pinned_is_degenerate():
    with pytest.raises(DegenerateStiffnessError):
        CrossSolver.from_spans([(5.0, 10.0)], left=Support.FREE, right=Support.PINNED)


def test_two_free_outer_members_make_degenerate_node():
    with pytest.raises(DegenerateStiffnessError):
        CrossSolver.from_spans([(2.0, 10.0), (2.0, 10.0)], left=Support.FREE, right=Support.FREE)


def test_build_nodes_checks_before_dividing():
    members = [Member(EI=1.0, L=1.0), Member(EI=1.0, L=1.0)]
    members[0].k = 0.0
    members[1].k = 0.0
    with pytest.raises(DegenerateStiffnessError):
        build_nodes(members, Support.FIXED, Support.FIXED)


def test_assign_stiffness_interior_members():
    members = [Member(EI=10000.0, L=L) for L in (4.0, 5.0, 8.0, 2.0)]
    assign_stiffness(members, Support.PINNED, Support.PINNED)

    assert np.isclose(members[0].k, 3 * 10000.0 / 4.0)
    assert np.isclose(members[1].k, 4 * 10000.0 / 5.0)
    assert np.isclose(members[2].k, 4 * 10000.0 / 8.0)
    assert np.isclose(members[3].k, 3 * 10000.0 / 2.0)
