#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .errors import ErrorKind

SCRAPE_ACTION = "scrape"

# Attributes offered in the attribute picker; anything else is looked up
# as a plain element attribute.
NAMED_ATTRIBUTES: Tuple[str, ...] = (
    "textContent",
    "innerHTML",
    "href",
    "src",
    "alt",
    "title",
    "className",
)

ExtractionResult = List[str]


def is_extraction_result(value: Any) -> bool:
    """A well-formed result is a list (possibly empty) of strings."""
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def invalid_selector_message(value: Any) -> Optional[str]:
    """Return the error message when ``value`` is an in-page InvalidSelector reply."""
    if isinstance(value, dict) and value.get("error") == ErrorKind.INVALID_SELECTOR.value:
        return str(value.get("message") or "The CSS selector is not valid")
    return None


@dataclass(frozen=True)
class ExtractionRequest:
    selector: str
    attribute: str = "textContent"

    def to_message(self) -> Dict[str, str]:
        return {
            "action": SCRAPE_ACTION,
            "selector": self.selector,
            "attribute": self.attribute,
        }

    @classmethod
    def from_message(cls, message: Dict[str, Any]) -> "ExtractionRequest":
        return cls(
            selector=str(message.get("selector") or ""),
            attribute=str(message.get("attribute") or "textContent"),
        )


@dataclass
class TierAttempt:
    tier: int
    error: Optional[ErrorKind] = None
    detail: str = ""


@dataclass
class DeliveryOutcome:
    """Success(result) or Failure(error); one per delivery, with the tier log."""

    ok: bool
    result: ExtractionResult = field(default_factory=list)
    error: Optional[ErrorKind] = None
    message: str = ""
    tier: Optional[int] = None
    attempts: List[TierAttempt] = field(default_factory=list)

    @classmethod
    def success(cls, result: ExtractionResult, tier: int, attempts: Optional[List[TierAttempt]] = None) -> "DeliveryOutcome":
        return cls(ok=True, result=list(result), tier=tier, attempts=list(attempts or []))

    @classmethod
    def failure(cls, error: ErrorKind, message: str = "", attempts: Optional[List[TierAttempt]] = None) -> "DeliveryOutcome":
        return cls(ok=False, error=error, message=message, attempts=list(attempts or []))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.ok,
            "count": len(self.result),
            "items": list(self.result),
            "tier": self.tier,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "attempts": [
                {"tier": a.tier, "error": a.error.value if a.error else None, "detail": a.detail}
                for a in self.attempts
            ],
        }
