"""Response envelope models shared across routes."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: Any = None
    query: Optional[str] = None
    # Search only: False when the query has unbalanced double quotes
    valid_query: Optional[bool] = Field(default=None, alias="validQuery")
    limit: Optional[int] = None
    timestamp: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str
