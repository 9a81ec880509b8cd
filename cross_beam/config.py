# cross_beam/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .model import Support


@dataclass
class SolverConfig:
    """Global solver configuration."""

    # Default flexural stiffness, reapplied when a beam file is loaded
    default_EI: float = 10000.0  # kN·m²

    # Maximum number of iterative Cross steps kept in the history
    max_steps: int = 50

    # Moment precision (number of decimal places)
    decimal_places_range: Tuple[int, int] = (0, 2)
    default_decimal_places: int = 1

    # Minimum member length as a fraction of the total beam length
    min_member_length_fac: float = 0.05

    # Sample points per member for diagrams
    diagram_points: int = 50

    # Default continuous beam: (length, load) per span
    default_spans: List[Tuple[float, float]] = None
    default_left: Support = Support.PINNED
    default_right: Support = Support.FIXED

    def __post_init__(self):
        if self.default_spans is None:
            self.default_spans = [(8.0, 8.0), (6.0, 38.0), (6.0, 28.0)]

    def valid_decimal_places(self, decimal_places) -> bool:
        lo, hi = self.decimal_places_range
        try:
            return lo <= int(decimal_places) <= hi and int(decimal_places) == decimal_places
        except (TypeError, ValueError):
            return False


# Global config instance
CONFIG = SolverConfig()
