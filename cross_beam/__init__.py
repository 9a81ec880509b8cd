# cross_beam - Cross process (moment distribution) for continuous beams
"""
CROSS-BEAM: Iterative Moment Distribution for Continuous Beams
==============================================================

This package provides:
- Rotational stiffness, distribution and carry-over coefficients
- Fixed-end moments for uniform span loads
- An iterative Cross process solver with manual, automatic and batch steps
- Live topology edits (insert / delete / move supports, change loads)
- A plain-text beam file, text reports and moment/shear diagrams

ARCHITECTURE:
-------------
    model.py        Support, Member, Node, StepRecord
    elements.py     Member stiffness k, node coefficients
    loads.py        Fixed-end moments (UDL)
    topology.py     Pure support insertion / deletion / move
    solve.py        CrossSolver (initialize, step, converge, edit)
    beamfile.py     Plain-text beam file read/write
    diagrams.py     Bending moment, shear, support reactions
    report.py       Text reports and summary
    config.py       Solver defaults (CONFIG)
"""

from .model import Support, Member, Node, StepRecord
from .elements import DegenerateStiffnessError
from .topology import InvalidTopologyEditError
from .solve import CrossSolver, SolverState, StepOverflowError
from .beamfile import BeamFileError, dumps_beam, loads_beam, save_beam, load_beam
from .config import CONFIG, SolverConfig

__version__ = "0.1.0"

__all__ = [
    "Support",
    "Member",
    "Node",
    "StepRecord",
    "CrossSolver",
    "SolverState",
    "StepOverflowError",
    "DegenerateStiffnessError",
    "InvalidTopologyEditError",
    "BeamFileError",
    "dumps_beam",
    "loads_beam",
    "save_beam",
    "load_beam",
    "CONFIG",
    "SolverConfig",
]
