# cross_beam/beamfile.py
"""
Plain-text beam file.

Layout (one value group per line, columns separated by two spaces):

    <decimal places>
    <left support code>  <right support code>
    <number of members>
    <length>  <load>          (one line per member)

Support codes: 0 = Pinned, 1 = Fixed, 2 = Free.

Flexural stiffness is NOT stored. On load every member gets
CONFIG.default_EI, so a beam with custom EI values does not survive a
save/load round trip.
"""

import math
from pathlib import Path
from typing import Optional

from .config import CONFIG
from .model import Support
from .solve import CrossSolver


class BeamFileError(ValueError):
    """Raised for a malformed beam file."""
    pass


def _fmt_number(x: float) -> str:
    x = float(x)
    if x.is_integer():
        return str(int(x))
    return repr(x)


def dumps_beam(solver: CrossSolver) -> str:
    lines = [
        f"{solver.decimal_places:d}",
        f"{int(solver.left):d}  {int(solver.right):d}",
        f"{solver.n_members:d}",
    ]
    for m in solver.members:
        lines.append(f"{_fmt_number(m.L)}  {_fmt_number(m.q)}")
    return "\n".join(lines) + "\n"


def _take(tokens: list, what: str) -> str:
    if not tokens:
        raise BeamFileError(f"invalid beam file: missing {what}")
    return tokens.pop(0)


def _to_int(token: str, what: str) -> int:
    try:
        value = float(token)
    except ValueError:
        raise BeamFileError(f"invalid beam file: {what} is not a number: {token!r}")
    if not value.is_integer():
        raise BeamFileError(f"invalid beam file: {what} must be an integer, got {token!r}")
    return int(value)


def _to_float(token: str, what: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise BeamFileError(f"invalid beam file: {what} is not a number: {token!r}")
    if not math.isfinite(value):
        raise BeamFileError(f"invalid beam file: {what} must be finite, got {token!r}")
    return value


def loads_beam(text: str, EI: Optional[float] = None, max_steps: Optional[int] = None) -> CrossSolver:
    """Parse beam file text into an initialized solver."""
    EI = CONFIG.default_EI if EI is None else EI
    tokens = text.split()

    # out-of-range values fall back inside the solver, which logs a warning
    decimal_places = _to_int(_take(tokens, "decimal places"), "decimal places")

    supports = []
    for side in ("left support", "right support"):
        code = _to_int(_take(tokens, side), side)
        try:
            supports.append(Support(code))
        except ValueError:
            raise BeamFileError(f"invalid beam file: unknown {side} code {code}")

    nmemb = _to_int(_take(tokens, "number of members"), "number of members")
    if nmemb < 1:
        raise BeamFileError(f"invalid beam file: number of members must be positive, got {nmemb}")

    spans = []
    for i in range(nmemb):
        L = _to_float(_take(tokens, f"length of member {i + 1}"), f"length of member {i + 1}")
        q = _to_float(_take(tokens, f"load of member {i + 1}"), f"load of member {i + 1}")
        if L <= 0.0:
            raise BeamFileError(f"invalid beam file: member {i + 1} has non-positive length {L}")
        spans.append((L, q, EI))

    if tokens:
        raise BeamFileError(f"invalid beam file: {len(tokens)} unexpected trailing values")

    return CrossSolver.from_spans(spans, supports[0], supports[1], decimal_places, max_steps)


def save_beam(solver: CrossSolver, path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_beam(solver))


def load_beam(path: str, EI: Optional[float] = None, max_steps: Optional[int] = None) -> CrossSolver:
    with open(path, "r", encoding="utf-8") as f:
        return loads_beam(f.read(), EI, max_steps)
