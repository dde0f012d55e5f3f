"""
Results — Structured outcome envelope for store operations

Stores report validation problems, missing records and conflicts as
values instead of raising. A Result carries:
- outcome: what happened (ok / invalid / not_found / conflict / error)
- value: the payload on success (dataclass with to_dict() or plain dict)
- message: human-readable explanation on failure
- details: context for the caller (searched folders, valid numbers, ...)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Outcome(Enum):
    """Operation outcome."""
    OK = "ok"
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    ERROR = "error"


@dataclass
class Result:
    """Outcome of a store operation."""
    outcome: Outcome
    value: Any = None
    message: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.OK

    @classmethod
    def success(cls, value: Any, **details) -> 'Result':
        return cls(outcome=Outcome.OK, value=value, details=details)

    @classmethod
    def invalid(cls, message: str, **details) -> 'Result':
        return cls(outcome=Outcome.INVALID, message=message, details=details)

    @classmethod
    def not_found(cls, message: str, **details) -> 'Result':
        return cls(outcome=Outcome.NOT_FOUND, message=message, details=details)

    @classmethod
    def conflict(cls, message: str, **details) -> 'Result':
        return cls(outcome=Outcome.CONFLICT, message=message, details=details)

    @classmethod
    def failure(cls, message: str, **details) -> 'Result':
        return cls(outcome=Outcome.ERROR, message=message, details=details)

    def to_dict(self) -> Dict[str, Any]:
        """
        Flatten into the dict shape returned across the API boundary.

        Success: the value's fields plus any details.
        Failure: {"error": message, "kind": outcome} plus details.
        """
        if self.ok:
            if hasattr(self.value, "to_dict"):
                data = self.value.to_dict()
            elif isinstance(self.value, dict):
                data = dict(self.value)
            else:
                data = {"value": self.value}
            data.update(self.details)
            return data

        data = {"error": self.message, "kind": self.outcome.value}
        data.update(self.details)
        return data
