"""Error schemas shared by the clock routes."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint.

    Format: { "error": { "code": str, "message": str, "detail": object } }
    """

    error: ErrorDetail

    @classmethod
    def build(cls, code: str, message: str, detail: dict[str, Any] | None = None) -> dict[str, Any]:
        """Error payload as a plain dict, ready for HTTPException/JSONResponse."""
        return cls(error=ErrorDetail(code=code, message=message, detail=detail)).model_dump()
