from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import requests

from surveyapp.domain.entities import Answer, Survey, SurveyResult
from surveyapp.domain.ports import SurveyRepositoryPort
from surveyapp.domain.survey_codec import (
    answers_to_payload,
    survey_from_dict,
    survey_result_from_dict,
)

from .api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    build_error_message,
    parse_error_body,
)
from .http_client import HttpConfig, RetryingSession

log = logging.getLogger(__name__)


class SurveyRestAdapter(SurveyRepositoryPort):
    """REST adapter for a survey service exposing ``/survey`` and ``/survey/result``."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError("SurveyRestAdapter requires a base URL")
        self.base_url = base_url.strip().rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_key, self.cfg)

    def get_survey(self) -> Survey:
        url = self._make_url("/survey")
        resp = self.session.get(url)
        self._ensure_ok(resp, "survey")
        data = self._json_any(resp)
        survey = survey_from_dict(data)
        log.debug("Fetched survey '%s' with %d questions", survey.title, len(survey.questions))
        return survey

    def get_survey_result(self, answers: Sequence[Answer]) -> SurveyResult:
        url = self._make_url("/survey/result")
        resp = self.session.post(url, json_body=answers_to_payload(answers))
        self._ensure_ok(resp, "survey result")
        return survey_result_from_dict(self._json_any(resp))

    # ---------- helpers ----------

    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        body = parse_error_body(resp)
        message = build_error_message(ctx, status, body)
        if 400 <= status < 500:
            error_cls = ApiClientError
        elif 500 <= status < 600:
            error_cls = ApiServerError
        else:
            error_cls = ApiError
        raise error_cls(message, status=status, code=body.code, hint=body.hint, context=ctx)

    @staticmethod
    def _json_any(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            snippet = getattr(resp, "text", "")[:400]
            raise ApiError(f"Invalid JSON response: {snippet}") from exc


__all__ = ["SurveyRestAdapter"]
