"""
Frontier Models

Pydantic models for the frontier wire contract.
"""

from pydantic import BaseModel, Field


class AddRequest(BaseModel):
    """Request to append URLs to the frontier"""

    urls: list[str] = Field(
        default_factory=list,
        description="URLs to append, in discovery order (not validated)",
        examples=[["https://example.com", "https://example.org/about"]],
    )


class AddResponse(BaseModel):
    """Response after appending URLs"""

    status: str = Field(default="ok")
    added: int = Field(..., ge=0, description="Number of URLs appended")


class QueueStatus(BaseModel):
    """Frontier queue statistics"""

    queue_size: int = Field(default=0, ge=0, description="URLs waiting in frontier")
