# Member rotational stiffness + node distribution / carry-over coefficients

from typing import Optional

from .model import Member, Node, Support


class DegenerateStiffnessError(RuntimeError):
    """Raised when a joint (or a single span) has no rotational stiffness."""
    pass


def rotational_stiffness(EI: float, L: float, far_end: Optional[Support] = None) -> float:
    """
    Rotational stiffness of a member end whose far end is `far_end`.

    far_end=None means the far end is continuous into another member, which
    is locked during the Cross process and behaves as a clamp.

        clamped / Fixed far end:  k = 4EI/L
        Pinned far end:           k = 3EI/L
        Free far end:             k = 0
    """
    if L <= 0.0:
        raise ValueError(f"Member length must be positive, got {L}.")
    if far_end is None or far_end == Support.FIXED:
        return 4.0 * EI / L
    if far_end == Support.PINNED:
        return 3.0 * EI / L
    return 0.0


def is_mechanism(left: Support, right: Support) -> bool:
    """True if a single span with these outer supports cannot resist rotation."""
    if left == Support.FIXED or right == Support.FIXED:
        return False
    return left == Support.FREE or right == Support.FREE


def assign_stiffness(members: list[Member], left: Support, right: Support) -> None:
    """Set k on every member according to its position in the beam."""
    nmemb = len(members)
    if nmemb == 1:
        if is_mechanism(left, right):
            raise DegenerateStiffnessError(
                f"Single span with supports {left.name}/{right.name} is a mechanism."
            )
        m = members[0]
        m.k = rotational_stiffness(m.EI, m.L, right)
        return

    first = members[0]
    first.k = rotational_stiffness(first.EI, first.L, left)
    last = members[-1]
    last.k = rotational_stiffness(last.EI, last.L, right)
    for m in members[1:-1]:
        m.k = rotational_stiffness(m.EI, m.L)


def build_nodes(members: list[Member], left: Support, right: Support) -> list[Node]:
    """
    Distribution coefficients and carry-over factors of each interior node.

    Members must already carry their stiffness k (see assign_stiffness).
    """
    nodes = []
    for i in range(len(members) - 1):
        kl = members[i].k
        kr = members[i + 1].k
        ksum = kl + kr
        if ksum <= 0.0:
            raise DegenerateStiffnessError(
                f"Node {i}: both adjacent members have zero rotational stiffness."
            )
        nodes.append(Node(dl=kl / ksum, dr=kr / ksum, tl=0.5, tr=0.5, rot=0.0))

    if not nodes:
        return nodes

    # A hinge or a free tip one member away cannot take a carry-over moment
    if left in (Support.PINNED, Support.FREE):
        nodes[0].tl = 0.0
    if right in (Support.PINNED, Support.FREE):
        nodes[-1].tr = 0.0
    return nodes
