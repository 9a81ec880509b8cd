# Support, Member, Node, StepRecord (dataclasses)

from dataclasses import dataclass
from enum import IntEnum


class Support(IntEnum):
    """Boundary condition at an outer end of the beam (codes match the beam file)."""
    PINNED = 0
    FIXED = 1
    FREE = 2

    @classmethod
    def parse(cls, value) -> "Support":
        """Accept a Support, an integer code or a name ('pinned', 'FIXED', ...)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown support condition: {value!r}")
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"Unknown support condition: {value!r}")


@dataclass
class Member:
    """
    One span of a continuous beam.

    EI, L and q are input data. ml, mr and k are owned by the solver:
    k is derived at initialization, ml/mr hold the current end moments
    (counter-clockwise positive on the member end).
    """
    EI: float
    L: float
    q: float = 0.0
    ml: float = 0.0
    mr: float = 0.0
    k: float = 0.0

    def copy_span(self) -> "Member":
        """Fresh member with the same input data and no solver state."""
        return Member(EI=self.EI, L=self.L, q=self.q)


@dataclass
class Node:
    """Interior joint between member i (left) and member i+1 (right)."""
    dl: float = 0.0     # left distribution coefficient
    dr: float = 0.0     # right distribution coefficient
    tl: float = 0.5     # left carry-over factor
    tr: float = 0.5     # right carry-over factor
    rot: float = 0.0    # accumulated rotation


@dataclass(frozen=True)
class StepRecord:
    """One balancing operation of the Cross process."""
    node: int
    bml: float   # balancing moment at left of node
    bmr: float   # balancing moment at right of node
    tml: float   # carry-over moment at far end of left member
    tmr: float   # carry-over moment at far end of right member
