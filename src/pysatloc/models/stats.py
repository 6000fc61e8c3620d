"""Runtime counters of a stream."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StreamStats(BaseModel):
    """Read-only snapshot of a stream's polling counters."""

    model_config = ConfigDict(frozen=True)

    requests_issued: int = 0
    responses_received: int = 0
    last_observed_lag_ms: float = 0.0
