"""Pydantic request/response models for the API."""

from .common import ApiResponse, ErrorResponse
from .search import RecordSearchRequest

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "RecordSearchRequest",
]
