"""Outcomes returned across service boundaries."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DispatchResult:
    success: bool
    provider_used: str


@dataclass(frozen=True)
class SideEffectResult:
    """Outcome of a best-effort write (delivery log, escalation email).

    Callers are free to ignore it: a failed side effect has already been
    logged and must never change the result of the primary operation.
    """

    ok: bool
    error: Optional[str] = None

    @classmethod
    def succeeded(cls) -> "SideEffectResult":
        return cls(ok=True)

    @classmethod
    def failed(cls, error: Exception) -> "SideEffectResult":
        return cls(ok=False, error=str(error))
