from fastapi import APIRouter
from api.v1.endpoints import simulate, prioritize, proposals, cities, diagnostics

api_router = APIRouter()
api_router.include_router(simulate.router, prefix="", tags=["simulate"])
api_router.include_router(prioritize.router, prefix="", tags=["recovery"])
api_router.include_router(proposals.router, prefix="", tags=["proposals"])
api_router.include_router(cities.router, prefix="", tags=["cities"])
api_router.include_router(diagnostics.router, prefix="", tags=["diagnostics"])
