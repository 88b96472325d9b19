from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

import pytest
from requests import exceptions as req_exc

from surveyapp.adapters.api_errors import ApiClientError, ApiServerError, ApiTimeoutError
from surveyapp.adapters.survey_rest import SurveyRestAdapter
from surveyapp.domain.entities import ActionAnswer, PhotoResult, SingleChoice, SingleChoiceAnswer
from surveyapp.usecases.error_mapping import map_api_error


class _ResponseStub:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = json.dumps(payload)

    def json(self) -> Any:
        return self._payload


class _TextResponseStub:
    def __init__(self, text: str, status_code: int) -> None:
        self.status_code = status_code
        self.text = text

    def json(self) -> Any:
        raise ValueError("not json")


class _SessionStub:
    def __init__(self, responses: Sequence[Any]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def _next(self) -> _ResponseStub:
        if not self._responses:
            raise RuntimeError("No stub response configured")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url: str, *, params=None, headers=None, timeout: Optional[int] = None):
        self.calls.append({"method": "GET", "url": url, "headers": dict(headers or {}), "timeout": timeout})
        return self._next()

    def post(self, url: str, *, data=None, headers=None, timeout: Optional[int] = None):
        self.calls.append(
            {"method": "POST", "url": url, "data": data, "headers": dict(headers or {}), "timeout": timeout}
        )
        return self._next()


SURVEY_PAYLOAD = {
    "title": "Remote",
    "questions": [
        {"id": 1, "question_text": "Pick one", "answer": {"type": "single_choice", "options": ["A", "B"]}},
    ],
}


def _adapter(stub: _SessionStub, **kwargs: Any) -> SurveyRestAdapter:
    adapter = SurveyRestAdapter("http://survey.local/api/", api_key="secret", **kwargs)
    adapter.session.session = stub  # type: ignore[assignment]
    return adapter


def test_get_survey_parses_payload_and_sends_api_key() -> None:
    stub = _SessionStub([_ResponseStub(SURVEY_PAYLOAD)])

    survey = _adapter(stub, request_timeout_s=3).get_survey()

    assert survey.title == "Remote"
    assert survey.questions[0].answer == SingleChoice(options=("A", "B"))
    call = stub.calls[0]
    assert call["url"] == "http://survey.local/api/survey"
    assert call["headers"]["X-API-Key"] == "secret"
    assert call["timeout"] == 3


def test_get_survey_result_posts_tagged_answers() -> None:
    stub = _SessionStub([_ResponseStub({"library": "Room", "result": "You are Room!"})])
    answers = [SingleChoiceAnswer("Room"), ActionAnswer(PhotoResult("file:///p.jpg"))]

    result = _adapter(stub).get_survey_result(answers)

    assert result.library == "Room"
    call = stub.calls[0]
    assert call["url"] == "http://survey.local/api/survey/result"
    assert call["headers"]["Content-Type"] == "application/json"
    assert json.loads(call["data"]) == {
        "answers": [
            {"type": "single_choice", "answer": "Room"},
            {"type": "photo", "uri": "file:///p.jpg"},
        ]
    }


def test_client_error_reads_survey_error_envelope() -> None:
    body = {"error": {"code": "SURVEY_CLOSED", "message": "Survey is closed", "hint": "Opens again on Monday"}}
    stub = _SessionStub([_ResponseStub(body, status_code=404)])

    with pytest.raises(ApiClientError) as excinfo:
        _adapter(stub).get_survey()

    err = excinfo.value
    assert (err.status, err.code, err.hint, err.context) == (404, "SURVEY_CLOSED", "Opens again on Monday", "survey")
    assert str(err) == "survey: Survey is closed (HTTP 404)"


def test_rejected_answers_keep_envelope_hint_for_mapping() -> None:
    body = {"error": {"code": "INVALID_ANSWERS", "message": "Answer rejected", "hint": "question 3 needs a date"}}
    stub = _SessionStub([_ResponseStub(body, status_code=422)])

    with pytest.raises(ApiClientError) as excinfo:
        _adapter(stub).get_survey_result([SingleChoiceAnswer("Room")])

    mapped = map_api_error(excinfo.value, default_code="COMPUTE_RESULT_FAILED")
    assert (mapped.code, mapped.message) == ("INVALID_ANSWERS", "Invalid answers: question 3 needs a date")


def test_plain_string_error_is_used_as_message() -> None:
    stub = _SessionStub([_ResponseStub({"error": "unknown api key"}, status_code=401)])

    with pytest.raises(ApiClientError) as excinfo:
        _adapter(stub).get_survey()

    assert str(excinfo.value) == "survey: unknown api key (HTTP 401)"
    assert excinfo.value.code is None
    assert excinfo.value.hint is None


def test_non_json_error_body_becomes_snippet() -> None:
    stub = _SessionStub([_TextResponseStub("  <html>Bad Gateway</html>" + "x" * 500, status_code=400)])

    with pytest.raises(ApiClientError) as excinfo:
        _adapter(stub).get_survey()

    message = str(excinfo.value)
    assert message.startswith("survey: <html>Bad Gateway</html>")
    assert len(message) < 440


def test_error_without_envelope_reports_status_only() -> None:
    stub = _SessionStub([_ResponseStub({"unexpected": True}, status_code=409)])

    with pytest.raises(ApiClientError) as excinfo:
        _adapter(stub).get_survey()

    assert str(excinfo.value) == "survey: HTTP 409"


def test_server_error_raises_api_server_error() -> None:
    stub = _SessionStub([_ResponseStub({"error": {"message": "scoring backend down"}}, status_code=502)])

    with pytest.raises(ApiServerError) as excinfo:
        _adapter(stub).get_survey()

    assert str(excinfo.value) == "survey: scoring backend down (HTTP 502)"
    assert excinfo.value.code is None


def test_timeouts_are_retried_then_raised() -> None:
    stub = _SessionStub([req_exc.Timeout(), req_exc.ConnectionError(), req_exc.Timeout()])

    with pytest.raises(ApiTimeoutError):
        _adapter(stub, retries=2).get_survey()

    assert len(stub.calls) == 3


def test_retry_recovers_after_transient_timeout() -> None:
    stub = _SessionStub([req_exc.Timeout(), _ResponseStub(SURVEY_PAYLOAD)])

    survey = _adapter(stub, retries=1).get_survey()

    assert survey.title == "Remote"


def test_blank_base_url_is_rejected() -> None:
    with pytest.raises(ValueError):
        SurveyRestAdapter("  ")
