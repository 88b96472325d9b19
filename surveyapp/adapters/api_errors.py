"""Errors raised by the survey REST adapter.

The survey service answers failed requests with an error envelope::

    {"error": {"code": "SURVEY_CLOSED", "message": "Survey is closed", "hint": "..."}}

Anything else (proxy pages, empty bodies) is kept as a short text snippet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

_SNIPPET_LIMIT = 400


class ApiError(RuntimeError):
    """Base class for survey REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the survey service."""


class ApiServerError(ApiError):
    """HTTP 5xx from the survey service."""


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""


@dataclass(frozen=True)
class SurveyErrorBody:
    """Fields of a survey-service error envelope; all optional."""

    message: Optional[str] = None
    code: Optional[str] = None
    hint: Optional[str] = None


def parse_error_body(resp: Any) -> SurveyErrorBody:
    """Read the error envelope from ``resp`` without raising."""
    try:
        payload = resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return SurveyErrorBody(message=text[:_SNIPPET_LIMIT] or None)

    envelope = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(envelope, str):
        return SurveyErrorBody(message=_text(envelope))
    if not isinstance(envelope, dict):
        return SurveyErrorBody()
    return SurveyErrorBody(
        message=_text(envelope.get("message")),
        code=_text(envelope.get("code")),
        hint=_text(envelope.get("hint")),
    )


def build_error_message(ctx: str, status: int, body: SurveyErrorBody) -> str:
    if body.message:
        return f"{ctx}: {body.message} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "SurveyErrorBody",
    "build_error_message",
    "parse_error_body",
]
