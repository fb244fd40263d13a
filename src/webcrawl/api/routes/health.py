"""
Health Check Router
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health():
    """Simple health check for load balancers."""
    return {"status": "ok"}
