"""
API Dependencies

Dependency injection for FastAPI routes. Each application instance owns its
service objects on ``app.state``.
"""

from fastapi import Request

from webcrawl.services.frontier import FrontierQueue
from webcrawl.sinks.index import InMemoryIndex


def get_frontier(request: Request) -> FrontierQueue:
    """Frontier queue owned by the running application"""
    return request.app.state.frontier


def get_index(request: Request) -> InMemoryIndex:
    """Search index owned by the running application"""
    return request.app.state.index
