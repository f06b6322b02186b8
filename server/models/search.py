"""Search request models."""

from pydantic import BaseModel, Field


class RecordSearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
