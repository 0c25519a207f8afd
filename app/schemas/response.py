from pydantic import BaseModel
from typing import Optional, Any

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    details: Optional[Any] = None

    def to_content(self) -> dict:
        """Body sent to the client; `details` only when present."""
        return self.model_dump(exclude_none=True)
