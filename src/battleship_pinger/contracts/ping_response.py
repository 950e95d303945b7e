from typing import Optional

from pydantic import BaseModel


class PingResponse(BaseModel):
    """
    Payload returned by the probe endpoint when the target was reached.
    """

    success: bool = True
    latency: int
    status: Optional[int] = None
    target: str


class PingErrorResponse(BaseModel):
    """
    Payload returned by the probe endpoint when the probe failed.
    """

    success: bool = False
    error: str
    target: str


class ErrorResponse(BaseModel):
    error: str
