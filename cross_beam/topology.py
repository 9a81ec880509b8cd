# topology.py - Support insertion / deletion / move on a member list
"""
Topology edits on an ordered list of members.

Every function here is pure: it returns a NEW list of fresh members (input
data only, no solver state) and never touches the list it was given. The
solver re-initializes from the returned list, so a failed edit leaves the
beam exactly as it was.
"""

from typing import List, Tuple

from .model import Member


class InvalidTopologyEditError(ValueError):
    """Raised when an edit would produce an invalid beam."""
    pass


def total_length(members: List[Member]) -> float:
    return sum(m.L for m in members)


def min_member_length(members: List[Member], fac: float) -> float:
    """Minimum allowed member length: a fraction of the total beam length."""
    return fac * total_length(members)


def insert_support(
    members: List[Member],
    member_index: int,
    offset: float,
    min_length: float = 0.0
) -> List[Member]:
    """
    Split member `member_index` at `offset` (measured from its left end).

    Both parts inherit the load and stiffness of the original member and
    their lengths sum to its length.
    """
    if not 0 <= member_index < len(members):
        raise InvalidTopologyEditError(f"No member with index {member_index}.")
    old = members[member_index]
    len1 = offset
    len2 = old.L - offset
    if len1 <= 0.0 or len2 <= 0.0:
        raise InvalidTopologyEditError(
            f"Support offset {offset} is outside member {member_index} (length {old.L})."
        )
    if len1 < min_length or len2 < min_length:
        raise InvalidTopologyEditError(
            f"Support at offset {offset} is too close to an existing support "
            f"(minimum member length {min_length:g})."
        )

    new = [m.copy_span() for m in members]
    new[member_index] = Member(EI=old.EI, L=len1, q=old.q)
    new.insert(member_index + 1, Member(EI=old.EI, L=len2, q=old.q))
    return new


def delete_support(members: List[Member], node_index: int) -> List[Member]:
    """
    Remove interior support `node_index`, merging its two adjacent members.

    The merged member has the summed length and the mean load and stiffness
    of the two originals. A beam keeps at least one interior support.
    """
    nnode = len(members) - 1
    if nnode <= 1:
        raise InvalidTopologyEditError("Single interior support cannot be deleted.")
    if not 0 <= node_index < nnode:
        raise InvalidTopologyEditError(f"No interior support with index {node_index}.")

    a = members[node_index]
    b = members[node_index + 1]
    merged = Member(
        EI=(a.EI + b.EI) / 2.0,
        L=a.L + b.L,
        q=(a.q + b.q) / 2.0,
    )
    new = [m.copy_span() for m in members]
    new[node_index:node_index + 2] = [merged]
    return new


def clamp_support_shift(
    members: List[Member],
    node_index: int,
    shift: float,
    min_length: float = 0.0
) -> float:
    """Largest part of `shift` that keeps both adjacent members >= min_length."""
    left = members[node_index].L
    right = members[node_index + 1].L
    # shift > 0 moves the support to the right: left grows, right shrinks
    hi = max(right - min_length, 0.0)
    lo = -max(left - min_length, 0.0)
    return min(max(shift, lo), hi)


def move_support(
    members: List[Member],
    node_index: int,
    shift: float,
    min_length: float = 0.0
) -> Tuple[List[Member], float]:
    """
    Move interior support `node_index` by `shift` along the beam.

    Returns the new member list and the shift actually applied after
    clamping to the minimum member length.
    """
    if not 0 <= node_index < len(members) - 1:
        raise InvalidTopologyEditError(f"No interior support with index {node_index}.")
    applied = clamp_support_shift(members, node_index, shift, min_length)

    new = [m.copy_span() for m in members]
    new[node_index].L = members[node_index].L + applied
    new[node_index + 1].L = members[node_index + 1].L - applied
    return new, applied


def set_member_load(members: List[Member], member_index: int, q: float) -> List[Member]:
    if not 0 <= member_index < len(members):
        raise InvalidTopologyEditError(f"No member with index {member_index}.")
    new = [m.copy_span() for m in members]
    new[member_index].q = q
    return new
