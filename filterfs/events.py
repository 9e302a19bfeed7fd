"""
Filter Chain Event Models

Pydantic models describing how a single chain call was decided.
"""

from datetime import datetime, UTC
from enum import Enum

from pydantic import BaseModel, Field

from filterfs.base import FSOperationType


class ChainDecision(str, Enum):
    """Which link in the chain produced the result."""

    ALLOWED = "allowed"
    """Every filter passed and the source returned normally."""

    REJECTED = "rejected"
    """A filter raised; the source was not called."""

    SOURCE_ERROR = "source_error"
    """Every filter passed and the source raised."""


class ChainEvent(BaseModel):
    """
    Record of one gated operation passing through a ``FilterChain``.

    Handed to the chain's ``event_callback`` once the call is decided.
    """

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the call was decided"
    )

    operation: FSOperationType = Field(
        description="Operation that was called"
    )

    path: str = Field(
        description="Primary path of the operation"
    )

    target_path: str | None = Field(
        default=None,
        description="New path for rename"
    )

    decision: ChainDecision = Field(
        description="Outcome of the chain evaluation"
    )

    filters_evaluated: int = Field(
        default=0,
        description="Number of filters invoked, including a rejecting one"
    )

    rejected_by: int | None = Field(
        default=None,
        description="Evaluation index of the rejecting filter"
    )

    rejected_by_name: str | None = Field(
        default=None,
        description="repr of the rejecting filter"
    )

    error_type: str | None = Field(
        default=None,
        description="Class name of the relayed exception"
    )

    error_message: str | None = Field(
        default=None,
        description="str() of the relayed exception"
    )

    latency_ms: float = Field(
        default=0.0,
        description="Time spent in filters and source"
    )

    @property
    def succeeded(self) -> bool:
        return self.decision == ChainDecision.ALLOWED
