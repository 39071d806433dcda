"""Pydantic schemas for API responses."""

from litclock.schemas.common import ErrorDetail, ErrorResponse
from litclock.schemas.quote import QuoteResponse

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "QuoteResponse",
]
