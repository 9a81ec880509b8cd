# loads.py - Fixed-end moments for uniform span loads

from typing import Optional, Tuple

from .elements import DegenerateStiffnessError
from .model import Member, Support


def fixed_end_moments(
    q: float,
    L: float,
    left: Optional[Support] = None,
    right: Optional[Support] = None
) -> Tuple[float, float]:
    """
    Fixed-end moments (ml, mr) of a span under a uniform load q.

    Each end is either continuous (None, locked by the Cross process and so
    treated as clamped) or an outer support. Moments act on the member ends,
    counter-clockwise positive, with q positive top-down.

    Parameters:
    -----------
    q : float
        Uniform distributed load (force per length)
    L : float
        Span length, must be positive
    left, right : Support or None
        Condition at each end of the span

    Returns:
    --------
    (ml, mr) : tuple of float
        clamped / clamped:  ( qL²/12, -qL²/12)
        pinned  / clamped:  ( 0,      -qL²/8 )
        clamped / pinned:   ( qL²/8,   0     )
        pinned  / pinned:   ( 0,       0     )
        free    / clamped:  ( 0,      -qL²/2 )
        clamped / free:     ( qL²/2,   0     )

    Raises:
    -------
    DegenerateStiffnessError
        For a free end combined with anything but a clamp (a mechanism).
    """
    if L <= 0.0:
        raise ValueError(f"Member length must be positive, got {L}.")

    lc = Support.FIXED if left is None else left
    rc = Support.FIXED if right is None else right
    w = q * L * L

    if lc == Support.FIXED and rc == Support.FIXED:
        return w / 12.0, -w / 12.0
    if lc == Support.PINNED and rc == Support.FIXED:
        return 0.0, -w / 8.0
    if lc == Support.FIXED and rc == Support.PINNED:
        return w / 8.0, 0.0
    if lc == Support.PINNED and rc == Support.PINNED:
        return 0.0, 0.0
    if lc == Support.FREE and rc == Support.FIXED:
        return 0.0, -w / 2.0
    if lc == Support.FIXED and rc == Support.FREE:
        return w / 2.0, 0.0

    raise DegenerateStiffnessError(
        f"Span with ends {lc.name}/{rc.name} is a mechanism; no fixed-end moments."
    )


def assign_fixed_end_moments(members: list[Member], left: Support, right: Support) -> None:
    """Set ml/mr of every member to its fixed-end values."""
    nmemb = len(members)
    for i, m in enumerate(members):
        end_l = left if i == 0 else None
        end_r = right if i == nmemb - 1 else None
        m.ml, m.mr = fixed_end_moments(m.q, m.L, end_l, end_r)
