from __future__ import annotations

"""Translate JSON-shaped payloads to survey domain objects and back."""

from typing import Any, Callable, Dict, List, Mapping, Sequence

from .entities import (
    Action,
    ActionAnswer,
    Answer,
    ContactResult,
    DateResult,
    FreeText,
    MultipleChoice,
    MultipleChoiceAnswer,
    PhotoResult,
    PossibleAnswer,
    Question,
    SingleChoice,
    SingleChoiceAnswer,
    Slider,
    SliderAnswer,
    Survey,
    SurveyActionType,
    SurveyResult,
    TextAnswer,
)


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be an object.")
    return value


def _type_token(payload: Mapping[str, Any], what: str) -> str:
    token = payload.get("type")
    if not isinstance(token, str) or not token.strip():
        raise ValueError(f"{what} requires a 'type'.")
    return token.strip().lower()


def _options(payload: Mapping[str, Any]) -> List[str]:
    raw = payload.get("options") or []
    if not isinstance(raw, list):
        raise ValueError("'options' must be a list.")
    return [str(item) for item in raw]


def _number(data: Mapping[str, Any], key: str, default: float, cast: Callable[[Any], Any] = float) -> Any:
    value = data.get(key)
    if value is None:
        return cast(default)
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{key}' must be a number, got {value!r}.") from exc


def possible_answer_from_dict(payload: Any) -> PossibleAnswer:
    """Build the answer kind a question offers from its ``answer`` object."""
    data = _require_mapping(payload, "Question answer")
    kind = _type_token(data, "Question answer")
    if kind == "single_choice":
        return SingleChoice(options=tuple(_options(data)))
    if kind == "multiple_choice":
        return MultipleChoice(options=tuple(_options(data)))
    if kind == "action":
        try:
            action_type = SurveyActionType(str(data.get("action_type", "")).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown action_type {data.get('action_type')!r}.") from exc
        return Action(label=str(data.get("label") or ""), action_type=action_type)
    if kind == "slider":
        return Slider(
            range_start=_number(data, "range_start", 0.0),
            range_end=_number(data, "range_end", 1.0),
            steps=_number(data, "steps", 0, int),
            start_text=str(data.get("start_text") or ""),
            end_text=str(data.get("end_text") or ""),
            neutral_text=str(data.get("neutral_text") or ""),
        )
    if kind == "text":
        return FreeText(hint=str(data.get("hint") or ""))
    raise ValueError(f"Unknown question answer type '{kind}'.")


def question_from_dict(payload: Any) -> Question:
    data = _require_mapping(payload, "Question")
    if "id" not in data:
        raise ValueError("Question requires an 'id'.")
    try:
        question_id = int(data["id"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid question id {data['id']!r}.") from exc
    description = data.get("description")
    return Question(
        id=question_id,
        question_text=str(data.get("question_text") or ""),
        answer=possible_answer_from_dict(data.get("answer")),
        description=str(description) if description is not None else None,
        permissions_required=tuple(str(p) for p in data.get("permissions_required") or ()),
    )


def survey_from_dict(payload: Any) -> Survey:
    """Build a :class:`Survey` from ``{"title": ..., "questions": [...]}``."""
    data = _require_mapping(payload, "Survey")
    questions = data.get("questions") or []
    if not isinstance(questions, list):
        raise ValueError("Survey 'questions' must be a list.")
    return Survey(
        title=str(data.get("title") or ""),
        questions=tuple(question_from_dict(item) for item in questions),
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Serialize a recorded answer into its tagged JSON shape."""
    if isinstance(answer, TextAnswer):
        return {"type": "text", "text": answer.text}
    if isinstance(answer, SingleChoiceAnswer):
        return {"type": "single_choice", "answer": answer.answer}
    if isinstance(answer, MultipleChoiceAnswer):
        return {"type": "multiple_choice", "answers": sorted(answer.answers)}
    if isinstance(answer, SliderAnswer):
        return {"type": "slider", "value": float(answer.value)}
    if isinstance(answer, ActionAnswer):
        result = answer.result
        if isinstance(result, DateResult):
            return {"type": "date", "date": result.date, "timestamp_ms": result.timestamp_ms}
        if isinstance(result, PhotoResult):
            return {"type": "photo", "uri": result.uri}
        if isinstance(result, ContactResult):
            return {"type": "contact", "contact": result.contact}
    raise TypeError(f"Unsupported answer {answer!r}.")


def answer_from_dict(payload: Any) -> Answer:
    data = _require_mapping(payload, "Answer")
    kind = _type_token(data, "Answer")
    if kind == "text":
        return TextAnswer(text=str(data.get("text") or ""))
    if kind == "single_choice":
        return SingleChoiceAnswer(answer=str(data.get("answer") or ""))
    if kind == "multiple_choice":
        return MultipleChoiceAnswer(answers=frozenset(str(a) for a in data.get("answers") or ()))
    if kind == "slider":
        return SliderAnswer(value=_number(data, "value", 0.0))
    if kind == "date":
        return ActionAnswer(
            DateResult(date=str(data.get("date") or ""), timestamp_ms=_number(data, "timestamp_ms", 0, int))
        )
    if kind == "photo":
        return ActionAnswer(PhotoResult(uri=str(data.get("uri") or "")))
    if kind == "contact":
        return ActionAnswer(ContactResult(contact=str(data.get("contact") or "")))
    raise ValueError(f"Unknown answer type '{kind}'.")


def answers_to_payload(answers: Sequence[Answer]) -> Dict[str, Any]:
    return {"answers": [answer_to_dict(answer) for answer in answers]}


def survey_result_from_dict(payload: Any) -> SurveyResult:
    data = _require_mapping(payload, "Survey result")
    return SurveyResult(
        library=str(data.get("library") or ""),
        result=str(data.get("result") or ""),
        description=str(data.get("description") or ""),
    )


__all__ = [
    "answer_from_dict",
    "answer_to_dict",
    "answers_to_payload",
    "possible_answer_from_dict",
    "question_from_dict",
    "survey_from_dict",
    "survey_result_from_dict",
]
