# main.py
import uvicorn
from typing import List, Optional
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel

from crucible.entities.grid import CostGrid
from crucible.pathfinding.dijkstra import CrucibleSearch
from crucible.pathfinding.policy import MovementPolicy, POLICIES, get_policy
from crucible.utils.consts import DEFAULT_POLICY, SERVER_HOST, SERVER_PORT
from crucible.utils.errors import GridParseError, NoSolutionError

app = FastAPI(title="Crucible Path Server")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class SolveInput(BaseModel):
    grid: List[str]                        # one string of digits per row
    policy: Optional[str] = DEFAULT_POLICY
    # Both given -> custom policy, overriding `policy`
    min_run: Optional[int] = None
    max_run: Optional[int] = None
    early_exit: Optional[bool] = False

class PolicyInfo(BaseModel):
    name: str
    min_run: int
    max_run: int

class PathPoint(BaseModel):
    x: int
    y: int
    d: int
    r: int

class SolveOutput(BaseModel):
    cost: int
    policy: PolicyInfo
    path: List[PathPoint]
    expanded: int


# =============================================================================
# CORE
# =============================================================================

def resolve_policy(input_data: SolveInput) -> MovementPolicy:
    if input_data.min_run is not None and input_data.max_run is not None:
        return MovementPolicy(input_data.min_run, input_data.max_run)
    if input_data.min_run is not None or input_data.max_run is not None:
        raise ValueError("min_run and max_run must be given together")
    return get_policy(input_data.policy or DEFAULT_POLICY)


def run_algorithm(rows: List[str], policy: MovementPolicy, early_exit: bool) -> dict:
    grid = CostGrid.from_rows(rows)
    result = CrucibleSearch(grid, policy, early_exit=early_exit).search()
    return {
        "cost": result.cost,
        "policy": policy.get_dict(),
        "path": [s.get_dict() for s in result.path],
        "expanded": result.expanded,
    }


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/status")
def health_check():
    return {"status": "ok", "message": "Crucible path server is running"}


@app.get("/policies", response_model=List[PolicyInfo])
def list_policies():
    return [p.get_dict() for p in POLICIES]


@app.post("/solve", response_model=SolveOutput)
def compute_path(input_data: SolveInput):
    try:
        policy = resolve_policy(input_data)
        logger.info(f"Solving {len(input_data.grid)}-row grid with {policy.name}")
        result = run_algorithm(input_data.grid, policy, bool(input_data.early_exit))
        logger.info(f"Cost {result['cost']} ({result['expanded']} states expanded)")
        return result
    except GridParseError as e:
        logger.warning(f"Rejected grid: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except NoSolutionError as e:
        logger.warning(str(e))
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected failure while solving")
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
