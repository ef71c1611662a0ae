"""API v1 router."""

from fastapi import APIRouter

from parkit.api.v1.endpoints import predictions, pricing, snapshots, spots, stats

api_router = APIRouter()

api_router.include_router(spots.router, prefix="/spots", tags=["spots"])
api_router.include_router(pricing.router, prefix="/pricing", tags=["pricing"])
api_router.include_router(snapshots.router, prefix="/snapshots", tags=["snapshots"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(predictions.router, prefix="/predictions", tags=["predictions"])
