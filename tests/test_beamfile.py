# File: tests/test_beamfile.py
"""
TEST: Plain-text beam file
==========================

The beam file stores decimal places, the two outer support codes and
(length, load) per member. Stiffness is not stored: every loaded member
gets the default EI.
"""

import logging

import numpy as np
import pytest

from cross_beam import (
    CONFIG,
    BeamFileError,
    CrossSolver,
    Support,
    dumps_beam,
    load_beam,
    loads_beam,
    save_beam,
)


REFERENCE_TEXT = "1\n0  1\n3\n8  8\n6  38\n6  28\n"


def test_dump_reference_beam():
    solver = CrossSolver.default()
    assert dumps_beam(solver) == REFERENCE_TEXT


def test_load_reference_beam():
    solver = loads_beam(REFERENCE_TEXT)

    assert solver.decimal_places == 1
    assert solver.left == Support.PINNED
    assert solver.right == Support.FIXED
    assert solver.spans() == [(8.0, 8.0, CONFIG.default_EI),
                              (6.0, 38.0, CONFIG.default_EI),
                              (6.0, 28.0, CONFIG.default_EI)]
    assert solver.num_steps == 0


def test_non_integral_values_survive():
    solver = CrossSolver.from_spans([(2.5, 7.25), (6.0, 0.1)], left=Support.FIXED,
                                    right=Support.FREE, decimal_places=2)
    text = dumps_beam(solver)
    assert text == "2\n1  2\n2\n2.5  7.25\n6  0.1\n"

    again = loads_beam(text)
    assert again.spans() == solver.spans()
    assert again.left == Support.FIXED
    assert again.right == Support.FREE
    assert again.decimal_places == 2


def test_stiffness_is_not_stored():
    solver = CrossSolver.from_spans([(8, 8, 25000.0), (6, 38, 25000.0)])
    again = loads_beam(dumps_beam(solver))
    assert [m.EI for m in again.members] == [CONFIG.default_EI] * 2

    again = loads_beam(dumps_beam(solver), EI=25000.0)
    assert [m.EI for m in again.members] == [25000.0] * 2


def test_whitespace_is_flexible():
    solver = loads_beam("  1\n0 1 2\n\t8 8\n6   38\n")
    assert solver.n_members == 2
    np.testing.assert_allclose([m.L for m in solver.members], [8.0, 6.0])


def test_out_of_range_decimal_places_fall_back(caplog):
    with caplog.at_level(logging.WARNING):
        solver = loads_beam("7\n0 1\n1\n5 10\n")
    assert solver.decimal_places == CONFIG.default_decimal_places
    assert "out of range" in caplog.text


@pytest.mark.parametrize("text", [
    "",                              # nothing at all
    "1\n0\n",                        # missing right support
    "1\n0 1\n",                      # missing member count
    "1\n0 1\n2\n8 8\n",              # missing second member
    "1\n0 1\n1\n8\n",                # missing load
    "x\n0 1\n1\n8 8\n",              # decimal places not a number
    "1\n0 1.5\n1\n8 8\n",            # support code not an integer
    "1\n0 3\n1\n8 8\n",              # unknown support code
    "1\n0 1\n0\n",                   # no members
    "1\n0 1\n1\n-8 8\n",             # negative length
    "1\n0 1\n1\n0 8\n",              # zero length
    "1\n0 1\n1\n8 abc\n",            # load not a number
    "1\n0 1\n1\n8 8\n9\n",           # trailing values
    "1\n0 1\n1\nnan 8\n",            # non-finite length
    "1\n0 1\n1\n8 inf\n",            # non-finite load
    "nan\n0 1\n1\n8 8\n",            # non-finite decimal places
])
def test_malformed_files(text):
    with pytest.raises(BeamFileError):
        loads_beam(text)


def test_beam_file_error_is_value_error():
    with pytest.raises(ValueError, match="invalid beam file"):
        loads_beam("1\n0 7\n1\n8 8\n")


def test_save_and_load(tmp_path):
    solver = CrossSolver.default()
    solver.run_to_convergence()
    path = tmp_path / "beams" / "reference.txt"

    save_beam(solver, str(path))

    assert path.read_text(encoding="utf-8") == REFERENCE_TEXT
    loaded = load_beam(str(path))
    assert loaded.spans() == solver.spans()
    # a loaded beam starts from the fixed-end moments
    assert loaded.num_steps == 0
    np.testing.assert_allclose(loaded.end_moments()[0], [0.0, -64.0])
