"""
Search Router

Substring search over the documents collected by the crawl workers.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from webcrawl.api.deps import get_index
from webcrawl.sinks.index import InMemoryIndex

router = APIRouter()


class SearchHit(BaseModel):
    url: str
    title: str
    body: str


@router.get("/search", response_model=list[SearchHit])
def search(q: str | None = None, index: InMemoryIndex = Depends(get_index)):
    """Documents whose title or body contains `q` (case-insensitive)"""
    if not q:
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")
    return [SearchHit(**doc.to_dict()) for doc in index.search(q)]
