# api/main.py
"""
FastAPI backend for Cross-Beam - exposes the cross_beam solver as REST API.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Any, Union
import sys
from pathlib import Path

# Add project root to path to import cross_beam
sys.path.insert(0, str(Path(__file__).parent.parent))

from cross_beam import (
    CrossSolver,
    Support,
    StepOverflowError,
    DegenerateStiffnessError,
    dumps_beam,
    loads_beam,
    CONFIG,
)
from cross_beam.diagrams import support_reactions, max_span_moments
from cross_beam.report import beam_summary


app = FastAPI(
    title="Cross-Beam API",
    description="Moment distribution (Cross process) for continuous beams",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class SpanParams(BaseModel):
    """One beam span."""
    length: float = Field(..., gt=0.0, description="Span length (m)")
    load: float = Field(0.0, description="Uniform load, top-down positive (kN/m)")
    EI: float = Field(CONFIG.default_EI, gt=0.0, description="Flexural stiffness (kNm²)")


class BeamParams(BaseModel):
    """Continuous beam input."""
    spans: List[SpanParams] = Field(..., min_length=1)
    left_support: Union[int, str] = Field("pinned", description="pinned / fixed / free or 0 / 1 / 2")
    right_support: Union[int, str] = Field("fixed", description="pinned / fixed / free or 0 / 1 / 2")
    decimal_places: int = Field(CONFIG.default_decimal_places, description="Moment precision")
    max_steps: int = Field(CONFIG.max_steps, ge=1, le=10000, description="Step budget")


class StepRequest(BeamParams):
    """Beam input plus a sequence of step requests (node index, or null for automatic)."""
    picks: List[Optional[int]] = Field(default_factory=list)


class MemberData(BaseModel):
    EI: float
    length: float
    load: float
    k: float
    ml: float
    mr: float
    ml_text: str
    mr_text: str
    max_span_moment: float


class NodeData(BaseModel):
    dl: float
    dr: float
    tl: float
    tr: float
    rot: float
    unbalanced_moment: float
    unbalanced: bool


class StepData(BaseModel):
    node: int
    bml: float
    bmr: float
    tml: float
    tmr: float


class BeamResult(BaseModel):
    """Solver state after a request."""
    success: bool
    error: Optional[str] = None
    state: Optional[str] = None
    converged: bool = False
    accepted: Optional[List[bool]] = None
    members: Optional[List[MemberData]] = None
    nodes: Optional[List[NodeData]] = None
    steps: Optional[List[StepData]] = None
    reactions: Optional[List[float]] = None
    summary: Optional[Dict[str, Any]] = None


class BeamFileText(BaseModel):
    text: str


# =============================================================================
# Helpers
# =============================================================================

def build_solver(params: BeamParams) -> CrossSolver:
    """Create an initialized solver; bad input becomes HTTP 400."""
    try:
        left = Support.parse(params.left_support)
        right = Support.parse(params.right_support)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    spans = [(s.length, s.load, s.EI) for s in params.spans]
    return CrossSolver.from_spans(spans, left, right, params.decimal_places, params.max_steps)


def solver_result(solver: CrossSolver, accepted: Optional[List[bool]] = None) -> BeamResult:
    formatted = solver.formatted_moments()
    span_max = max_span_moments(solver)
    members = [
        MemberData(
            EI=m.EI, length=m.L, load=m.q, k=m.k, ml=m.ml, mr=m.mr,
            ml_text=formatted[i][0], mr_text=formatted[i][1],
            max_span_moment=span_max[i],
        )
        for i, m in enumerate(solver.members)
    ]
    nodes = [
        NodeData(
            dl=n.dl, dr=n.dr, tl=n.tl, tr=n.tr, rot=n.rot,
            unbalanced_moment=solver.unbalanced_moment(i),
            unbalanced=solver.is_node_unbalanced(i),
        )
        for i, n in enumerate(solver.nodes)
    ]
    steps = [StepData(node=s.node, bml=s.bml, bmr=s.bmr, tml=s.tml, tmr=s.tmr) for s in solver.steps]

    return BeamResult(
        success=True,
        state=solver.state.value,
        converged=not solver.has_more_steps(),
        accepted=accepted,
        members=members,
        nodes=nodes,
        steps=steps,
        reactions=[float(r) for r in support_reactions(solver)],
        summary=beam_summary(solver),
    )


def beam_params_from_solver(solver: CrossSolver) -> BeamParams:
    return BeamParams(
        spans=[SpanParams(length=L, load=q, EI=EI) for L, q, EI in solver.spans()],
        left_support=solver.left.name.lower(),
        right_support=solver.right.name.lower(),
        decimal_places=solver.decimal_places,
        max_steps=solver.max_steps,
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "Cross-Beam API"}


@app.post("/api/solve", response_model=BeamResult)
async def solve_beam(params: BeamParams):
    """Run the Cross process to convergence."""
    try:
        solver = build_solver(params)
        solver.run_to_convergence()
    except (StepOverflowError, DegenerateStiffnessError) as e:
        return BeamResult(success=False, error=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return solver_result(solver)


@app.post("/api/steps", response_model=BeamResult)
async def replay_steps(request: StepRequest):
    """Replay manual (node index) and automatic (null) step requests."""
    try:
        solver = build_solver(request)
        accepted = []
        for pick in request.picks:
            if pick is None:
                accepted.append(solver.auto_step())
            else:
                accepted.append(solver.step_at(pick))
    except (StepOverflowError, DegenerateStiffnessError) as e:
        return BeamResult(success=False, error=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return solver_result(solver, accepted)


@app.post("/api/export/beam", response_class=PlainTextResponse)
async def export_beam(params: BeamParams):
    """Export the beam as a plain-text beam file."""
    try:
        solver = build_solver(params)
    except (DegenerateStiffnessError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PlainTextResponse(
        dumps_beam(solver),
        headers={"Content-Disposition": "attachment; filename=beam.txt"}
    )


@app.post("/api/import/beam", response_model=BeamParams)
async def import_beam(body: BeamFileText):
    """Parse a plain-text beam file into beam parameters."""
    try:
        solver = loads_beam(body.text)
    except (ValueError, DegenerateStiffnessError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return beam_params_from_solver(solver)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
