from pydantic import BaseModel
from typing import Optional, Any


class ErrorResponse(BaseModel):
    """
    Error envelope for every failed request.

    error is the single human-readable message shown to the user
    (validation rule message, or the store's message on commit failure).
    """
    error: str
    code: str
    details: Optional[Any] = None
