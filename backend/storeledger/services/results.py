# Overview: Result value returned by every public LedgerStore operation.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..validation import LedgerError


@dataclass(frozen=True)
class Result:
    """
    Outcome of an engine call.

    ok=True  -> value holds the created/updated entity (or None)
    ok=False -> error is a message fit for direct display, kind is the
                rejection class name (e.g. "InsufficientStockError")
    """
    ok: bool
    value: Any = None
    error: str | None = None
    kind: str | None = None
    details: dict = field(default_factory=dict)

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, exc: LedgerError) -> "Result":
        return cls(ok=False, error=str(exc), kind=exc.kind, details=dict(exc.details))

    def __bool__(self) -> bool:
        return self.ok

    def to_dict(self) -> dict:
        if not self.ok:
            body = {"error": self.error, "kind": self.kind}
            if self.details:
                body["details"] = self.details
            return body
        value = self.value
        if hasattr(value, "to_dict"):
            value = value.to_dict()
        return {"ok": True, "value": value}
