from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypedDict

SEVERITY_MIN = 1
SEVERITY_MAX = 100


class BadwordsError(Exception):
    pass


class ApiError(BadwordsError):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class FailureReason(str, Enum):
    NETWORK = "network"
    BAD_RESPONSE = "bad-response"
    API_ERROR = "api-error"
    ABORTED = "aborted"
    VALIDATION = "validation"


class PageLinks(TypedDict):
    next: str | None
    previous: str | None


def _as_int(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return default


def json_truthy(value: Any) -> bool:
    """Truthiness of a decoded JSON value as a browser sees it: empty arrays and objects count."""
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _as_link(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass
class AggregatePage:
    success: bool
    message: str
    links: PageLinks
    total_items: int
    total_pages: int
    page_size: int
    current_page: int
    data: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> AggregatePage:
        raw_links = payload.get("links")
        if not isinstance(raw_links, dict):
            raw_links = {}
        links: PageLinks = {
            "next": _as_link(raw_links.get("next")),
            "previous": _as_link(raw_links.get("previous")),
        }
        data = payload.get("data")
        items = [item for item in data if isinstance(item, dict)] if isinstance(data, list) else []
        return cls(
            success=json_truthy(payload.get("success")),
            message=str(payload.get("message") or ""),
            links=links,
            total_items=max(0, _as_int(payload.get("total_items"), 0)),
            total_pages=max(0, _as_int(payload.get("total_pages"), 0)),
            page_size=max(1, _as_int(payload.get("page_size"), max(1, len(items)))),
            current_page=max(1, _as_int(payload.get("current_page"), 1)),
            data=items,
        )


@dataclass(frozen=True, slots=True)
class SubmissionRequest:
    word: str
    severity: int

    def __post_init__(self) -> None:
        if not self.word or self.word != self.word.strip():
            raise ValueError("word must be a non-empty trimmed string")
        if isinstance(self.severity, bool) or not isinstance(self.severity, int):
            raise ValueError("severity must be an integer")
        if not SEVERITY_MIN <= self.severity <= SEVERITY_MAX:
            raise ValueError(f"severity must be in [{SEVERITY_MIN}, {SEVERITY_MAX}]")

    def to_body(self) -> dict[str, Any]:
        return {"word": self.word, "severity": self.severity}


@dataclass(frozen=True, slots=True)
class CountResult:
    total: int
    page: AggregatePage


@dataclass(frozen=True, slots=True)
class SubmitSuccess:
    status: int
    payload: Any = None


@dataclass(frozen=True, slots=True)
class Failure:
    reason: FailureReason
    detail: str = ""

    @property
    def aborted(self) -> bool:
        return self.reason is FailureReason.ABORTED
