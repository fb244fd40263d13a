"""
Frontier Router

Wire contract used by crawl workers: append discovered URLs, take a batch.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from webcrawl.api.deps import get_frontier
from webcrawl.models.frontier import AddRequest, AddResponse, QueueStatus
from webcrawl.services.frontier import DEFAULT_BATCH_SIZE, FrontierQueue

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/add", response_model=AddResponse)
async def add_urls(
    request: Request,
    frontier: FrontierQueue = Depends(get_frontier),
):
    """
    Append URLs to the frontier

    Body: {"urls": [...]}. Returns 400 when the body cannot be decoded.
    """
    body = await request.body()
    try:
        payload = AddRequest.model_validate_json(body)
    except ValidationError as e:
        logger.warning(f"Rejected /add body: {e.error_count()} validation error(s)")
        raise HTTPException(
            status_code=400, detail=f"Invalid request body: {e.errors()[0]['msg']}"
        )

    added = frontier.add(payload.urls)
    return AddResponse(status="ok", added=added)


@router.get("/fetch", response_model=list[str])
def take_batch(
    batch: str | None = None,
    frontier: FrontierQueue = Depends(get_frontier),
):
    """
    Take up to `batch` URLs (default 10) from the head of the frontier

    Always answers 200; an unusable batch value yields an empty list.
    """
    if batch is None or batch == "":
        batch_size = DEFAULT_BATCH_SIZE
    else:
        try:
            batch_size = int(batch)
        except ValueError:
            logger.warning(f"Ignoring non-numeric batch size: {batch!r}")
            return []

    if batch_size < 1:
        return []
    return frontier.take(batch_size)


@router.get("/status", response_model=QueueStatus)
def get_queue_status(frontier: FrontierQueue = Depends(get_frontier)):
    """Get frontier queue statistics"""
    return QueueStatus(queue_size=frontier.size())
