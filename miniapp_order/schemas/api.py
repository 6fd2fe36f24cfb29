"""Order service envelope schema."""

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Envelope returned by every order service action."""

    success: bool = False
    data: Any = None
    message: str | None = None
