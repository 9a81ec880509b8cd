# cross_beam/solve.py
"""Cross process (moment distribution) solver for continuous beams."""

import logging
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from . import topology
from .config import CONFIG
from .elements import assign_stiffness, build_nodes
from .loads import assign_fixed_end_moments
from .model import Member, Node, StepRecord, Support

logger = logging.getLogger(__name__)


def format_moment(value: float, decimal_places: int) -> str:
    text = f"{value:.{decimal_places}f}"
    # avoid "-0.0" for values that round to zero
    if float(text) == 0.0:
        text = f"{0.0:.{decimal_places}f}"
    return text


class StepOverflowError(RuntimeError):
    """Raised when the Cross process does not converge within the step budget."""
    pass


class SolverState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    BALANCING = "balancing"
    CONVERGED = "converged"


class CrossSolver:
    """
    Continuous beam solved by the Cross process.

    The solver owns the beam: a list of members, the list of interior nodes
    between them (node i joins member i and member i+1) and the ordered
    history of balancing steps. Every topology edit rebuilds all three from
    the member input data.

    Usage:
    ------
        solver = CrossSolver.from_spans([(8, 8), (6, 38), (6, 28)],
                                        left="pinned", right="fixed")
        solver.auto_step()            # balance the most unbalanced node
        solver.run_to_convergence()   # restart and balance until done
        solver.end_moments()          # (n_members, 2) array of ml, mr
    """

    def __init__(
        self,
        members: Optional[Sequence[Member]] = None,
        left=Support.PINNED,
        right=Support.FIXED,
        decimal_places: int = 1,
        max_steps: Optional[int] = None
    ):
        self.max_steps = CONFIG.max_steps if max_steps is None else int(max_steps)
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps}.")

        self._members: List[Member] = []
        self._nodes: List[Node] = []
        self._steps: List[StepRecord] = []
        self.left = Support.parse(left)
        self.right = Support.parse(right)
        self.decimal_places = CONFIG.default_decimal_places
        self._initialized = False
        self._batch_converged = False

        if members is not None:
            self.initialize(members, left, right, decimal_places)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_spans(
        cls,
        spans: Iterable[Sequence[float]],
        left=Support.PINNED,
        right=Support.FIXED,
        decimal_places: int = 1,
        max_steps: Optional[int] = None
    ) -> "CrossSolver":
        """Build a solver from (length, load) or (length, load, EI) tuples."""
        members = []
        for span in spans:
            if len(span) == 2:
                L, q = span
                EI = CONFIG.default_EI
            else:
                L, q, EI = span
            members.append(Member(EI=float(EI), L=float(L), q=float(q)))
        return cls(members, left, right, decimal_places, max_steps)

    @classmethod
    def default(cls) -> "CrossSolver":
        """Three-span reference beam: Pinned / Fixed, lengths 8-6-6, loads 8-38-28."""
        return cls.from_spans(CONFIG.default_spans, CONFIG.default_left, CONFIG.default_right,
                              CONFIG.default_decimal_places)

    def initialize(
        self,
        members: Sequence[Member],
        left,
        right,
        decimal_places: int = 1
    ) -> None:
        """
        (Re)build the whole beam: stiffnesses, node coefficients and
        fixed-end moments. Clears the step history and node rotations.

        Everything is computed on fresh copies and only swapped in at the
        end, so a failure leaves the previous beam untouched.
        """
        left = Support.parse(left)
        right = Support.parse(right)
        if not members:
            raise ValueError("A beam needs at least one member.")

        new_members = []
        for i, m in enumerate(members):
            if not all(np.isfinite([m.EI, m.L, m.q])):
                raise ValueError(f"Member {i}: EI, length and load must be finite, got {(m.EI, m.L, m.q)}.")
            if not m.EI > 0.0:
                raise ValueError(f"Member {i}: flexural stiffness EI must be positive, got {m.EI}.")
            if not m.L > 0.0:
                raise ValueError(f"Member {i}: length must be positive, got {m.L}.")
            new_members.append(Member(EI=float(m.EI), L=float(m.L), q=float(m.q)))

        assign_stiffness(new_members, left, right)
        new_nodes = build_nodes(new_members, left, right)
        assign_fixed_end_moments(new_members, left, right)

        self._members = new_members
        self._nodes = new_nodes
        self._steps = []
        self.left = left
        self.right = right
        self.decimal_places = self._checked_decimal_places(decimal_places)
        self._initialized = True
        self._batch_converged = False
        logger.debug(
            "Initialized beam: %d members, supports %s/%s, %d decimal places",
            len(new_members), left.name, right.name, self.decimal_places,
        )

    @staticmethod
    def _checked_decimal_places(decimal_places) -> int:
        if CONFIG.valid_decimal_places(decimal_places):
            return int(decimal_places)
        logger.warning(
            "Moment precision of %r decimal places is out of range %s; using %d",
            decimal_places, CONFIG.decimal_places_range, CONFIG.default_decimal_places,
        )
        return CONFIG.default_decimal_places

    def set_decimal_places(self, decimal_places: int) -> None:
        """Change the moment tolerance. Moments and history are kept."""
        self.decimal_places = self._checked_decimal_places(decimal_places)
        self._batch_converged = False

    def reset_moments(self) -> None:
        """Restart the process: fixed-end moments, empty history, zero rotations."""
        self._require_initialized()
        assign_fixed_end_moments(self._members, self.left, self.right)
        for node in self._nodes:
            node.rot = 0.0
        self._steps = []
        self._batch_converged = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def members(self) -> Tuple[Member, ...]:
        return tuple(self._members)

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def steps(self) -> Tuple[StepRecord, ...]:
        return tuple(self._steps)

    @property
    def n_members(self) -> int:
        return len(self._members)

    @property
    def n_nodes(self) -> int:
        return len(self._nodes)

    @property
    def num_steps(self) -> int:
        return len(self._steps)

    @property
    def total_length(self) -> float:
        return topology.total_length(self._members)

    @property
    def tolerance(self) -> float:
        """Moment tolerance used to decide whether a node is unbalanced."""
        return 10.0 ** -(self.decimal_places + 1)

    @property
    def state(self) -> SolverState:
        if not self._initialized:
            return SolverState.UNINITIALIZED
        if not self.has_more_steps():
            return SolverState.CONVERGED
        if self._steps:
            return SolverState.BALANCING
        return SolverState.INITIALIZED

    def spans(self) -> List[Tuple[float, float, float]]:
        """Input data of every member as (length, load, EI)."""
        return [(m.L, m.q, m.EI) for m in self._members]

    def end_moments(self) -> np.ndarray:
        """Current end moments, shape (n_members, 2): columns ml, mr."""
        return np.array([[m.ml, m.mr] for m in self._members], dtype=float).reshape(-1, 2)

    def node_rotations(self) -> np.ndarray:
        return np.array([n.rot for n in self._nodes], dtype=float)

    def formatted_moments(self) -> List[Tuple[str, str]]:
        """End moments as text with the configured number of decimal places."""
        d = self.decimal_places
        return [(format_moment(m.ml, d), format_moment(m.mr, d)) for m in self._members]

    def unbalanced_flags(self) -> List[bool]:
        return [self.is_node_unbalanced(n) for n in range(self.n_nodes)]

    # ------------------------------------------------------------------
    # Cross process
    # ------------------------------------------------------------------
    def unbalanced_moment(self, n: int) -> float:
        """Continuity residual at node n: mr of the left member + ml of the right one."""
        self._check_node_index(n)
        return self._members[n].mr + self._members[n + 1].ml

    def is_node_unbalanced(self, n: int) -> bool:
        return abs(self.unbalanced_moment(n)) > self.tolerance

    def most_unbalanced_node(self) -> Optional[int]:
        """
        Node with the largest absolute unbalanced moment above tolerance.

        Scans nodes in increasing order and only replaces the current best on
        a strictly greater value, so ties go to the lowest index.
        """
        best = None
        max_unbal = self.tolerance
        for n in range(self.n_nodes):
            unbal = abs(self._members[n].mr + self._members[n + 1].ml)
            if unbal > max_unbal:
                best = n
                max_unbal = unbal
        return best

    def has_more_steps(self) -> bool:
        return self.most_unbalanced_node() is not None

    def process_node(self, n: int) -> StepRecord:
        """
        Balance node n: distribute its unbalanced moment to the two adjacent
        member ends and carry over to their far ends.

        The algebra is always performed, balanced or not. Raises
        StepOverflowError, without touching any state, when the step history
        is already full.
        """
        self._check_node_index(n)
        if len(self._steps) >= self.max_steps:
            logger.warning("Cross process exceeded %d steps at node %d", self.max_steps, n)
            raise StepOverflowError(
                f"Cross process did not converge within {self.max_steps} steps."
            )

        node = self._nodes[n]
        left = self._members[n]
        right = self._members[n + 1]

        unbal = left.mr + right.ml
        bml = -unbal * node.dl
        bmr = -unbal * node.dr
        tml = bml * node.tl
        tmr = bmr * node.tr

        left.mr += bml
        left.ml += tml
        right.mr += tmr
        right.ml += bmr

        node.rot += -unbal / (left.k + right.k)

        record = StepRecord(node=n, bml=bml, bmr=bmr, tml=tml, tmr=tmr)
        self._steps.append(record)
        self._batch_converged = False
        logger.debug(
            "Step %d: node %d unbalanced %.6g -> bml=%.6g bmr=%.6g tml=%.6g tmr=%.6g",
            len(self._steps), n, unbal, bml, bmr, tml, tmr,
        )
        return record

    def step_at(self, n: int) -> bool:
        """
        Manual step at node n. Returns False (no-op) for an invalid index or
        a node that is already balanced.
        """
        if not self._initialized:
            return False
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or not 0 <= n < self.n_nodes:
            logger.warning("Ignoring step request for invalid node index %r", n)
            return False
        if not self.is_node_unbalanced(n):
            logger.debug("Ignoring step request for balanced node %d", n)
            return False
        self.process_node(int(n))
        return True

    def auto_step(self) -> bool:
        """Balance the most unbalanced node. Returns False when none is left."""
        if not self._initialized:
            return False
        n = self.most_unbalanced_node()
        if n is None:
            return False
        self.process_node(n)
        return True

    def run_to_convergence(self) -> List[StepRecord]:
        """
        Restart from fixed-end moments and balance until no node is left.

        Returns the steps performed by this call. When the beam was already
        brought to convergence by a previous batch run, nothing is redone and
        an empty list is returned.
        """
        self._require_initialized()
        if self._batch_converged and not self.has_more_steps():
            return []

        self.reset_moments()
        while self.auto_step():
            pass
        self._batch_converged = True
        logger.info(
            "Cross process converged in %d steps (tolerance %g)",
            len(self._steps), self.tolerance,
        )
        return list(self._steps)

    # ------------------------------------------------------------------
    # Topology edits
    # ------------------------------------------------------------------
    def _min_length(self) -> float:
        return topology.min_member_length(self._members, CONFIG.min_member_length_fac)

    def _rebuild(self, members: List[Member], left=None, right=None) -> None:
        # initialize swaps state in only on success, so a failed edit keeps the old beam
        left = self.left if left is None else left
        right = self.right if right is None else right
        self.initialize(members, left, right, self.decimal_places)

    def insert_support(self, member_index: int, offset: float) -> None:
        """Insert an interior support inside a member, `offset` from its left end."""
        self._require_initialized()
        new = topology.insert_support(self._members, member_index, offset, self._min_length())
        self._rebuild(new)
        logger.debug("Inserted support in member %d at offset %g", member_index, offset)

    def delete_support(self, node_index: int) -> None:
        """Delete an interior support, merging its two adjacent members."""
        self._require_initialized()
        new = topology.delete_support(self._members, node_index)
        self._rebuild(new)
        logger.debug("Deleted interior support %d", node_index)

    def move_support(self, node_index: int, shift: float) -> float:
        """
        Move an interior support by `shift` (positive to the right).
        Returns the shift actually applied after clamping.
        """
        self._require_initialized()
        new, applied = topology.move_support(self._members, node_index, shift, self._min_length())
        if applied == 0.0:
            return 0.0
        self._rebuild(new)
        logger.debug("Moved interior support %d by %g", node_index, applied)
        return applied

    def set_member_load(self, member_index: int, q: float) -> None:
        self._require_initialized()
        new = topology.set_member_load(self._members, member_index, float(q))
        self._rebuild(new)
        logger.debug("Member %d load set to %g", member_index, q)

    def set_supports(self, left=None, right=None) -> None:
        """Change the outer support conditions and restart the process."""
        self._require_initialized()
        left = self.left if left is None else Support.parse(left)
        right = self.right if right is None else Support.parse(right)
        self._rebuild([m.copy_span() for m in self._members], left, right)

    # ------------------------------------------------------------------
    def _check_node_index(self, n: int) -> None:
        if not 0 <= n < self.n_nodes:
            raise IndexError(f"Node index {n} out of range (beam has {self.n_nodes} interior nodes).")

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("Solver has no beam; call initialize() first.")
