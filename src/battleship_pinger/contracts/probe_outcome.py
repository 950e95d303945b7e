from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProbeErrorKind(str, Enum):
    """
    Classification of a failed probe.
    """

    TIMEOUT = "timeout"
    NETWORK = "network"
    INVALID_TARGET = "invalid_target"
    HTTP_STATUS = "http_status"
    UNEXPECTED = "unexpected"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProbeOutcome(BaseModel):
    """
    Data model representing the result of a single reachability probe.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=_utcnow)
    success: bool
    latency: Optional[int] = Field(default=None, ge=0)
    error_message: Optional[str] = None
    error_kind: Optional[ProbeErrorKind] = None
    status_code: Optional[int] = None

    @model_validator(mode="after")
    def _check_latency_matches_success(self):
        if not self.success and self.latency is not None:
            raise ValueError("latency must be None for a failed probe")
        if self.success and self.latency is None:
            raise ValueError("latency is required for a successful probe")
        return self

    @classmethod
    def hit(cls, latency: int, status_code: Optional[int] = None) -> "ProbeOutcome":
        return cls(success=True, latency=latency, status_code=status_code)

    @classmethod
    def miss(
        cls, error_message: str, error_kind: ProbeErrorKind = ProbeErrorKind.NETWORK
    ) -> "ProbeOutcome":
        return cls(
            success=False,
            error_message=error_message or "Unknown error",
            error_kind=error_kind,
        )
