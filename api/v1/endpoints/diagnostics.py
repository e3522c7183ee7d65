from fastapi import APIRouter

from hydroguard.services.diagnostics import run_diagnostics

router = APIRouter()


@router.get("/diagnostics")
def diagnostics():
    """Run the core self-check suite and report each scenario."""
    results = run_diagnostics()
    return {
        "passed": all(r.passed for r in results),
        "results": [r.to_dict() for r in results],
    }
