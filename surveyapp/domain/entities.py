from __future__ import annotations

"""Domain value objects for surveys, answers, and results shared across layers."""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union

QuestionId = int


class SurveyActionType(str, Enum):
    """Kind of out-of-band action a question asks the user to perform."""

    PICK_DATE = "pick_date"
    TAKE_PHOTO = "take_photo"
    SELECT_CONTACT = "select_contact"


# ---- Possible answers (what a question offers) ----
@dataclass(frozen=True)
class SingleChoice:
    """Exactly one option out of ``options`` may be selected."""

    options: Tuple[str, ...]
    """Display labels in presentation order."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        if not self.options:
            raise ValueError("SingleChoice requires at least one option.")


@dataclass(frozen=True)
class MultipleChoice:
    """Any subset of ``options`` may be selected."""

    options: Tuple[str, ...]
    """Display labels in presentation order."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        if not self.options:
            raise ValueError("MultipleChoice requires at least one option.")


@dataclass(frozen=True)
class Action:
    """Answer produced by an external action such as a date picker or camera."""

    label: str
    """Button text shown to trigger the action."""
    action_type: SurveyActionType
    """Which action the UI launches."""


@dataclass(frozen=True)
class Slider:
    """Numeric answer chosen on a bounded slider."""

    range_start: float
    range_end: float
    steps: int = 0
    start_text: str = ""
    end_text: str = ""
    neutral_text: str = ""

    def __post_init__(self) -> None:
        if self.range_end <= self.range_start:
            raise ValueError("Slider range_end must be greater than range_start.")
        if self.steps < 0:
            raise ValueError("Slider steps cannot be negative.")


@dataclass(frozen=True)
class FreeText:
    """Free-form text input."""

    hint: str = ""


PossibleAnswer = Union[SingleChoice, MultipleChoice, Action, Slider, FreeText]


@dataclass(frozen=True)
class Question:
    """One survey question and the kind of answer it accepts."""

    id: QuestionId
    """Identifier, unique within its survey."""
    question_text: str
    """Prompt shown to the user."""
    answer: PossibleAnswer
    """Kind of answer the question offers."""
    description: Optional[str] = None
    """Optional secondary text rendered below the prompt."""
    permissions_required: Tuple[str, ...] = ()
    """Runtime permissions the UI must hold before launching an action."""

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise TypeError("Question id must be an int.")
        object.__setattr__(self, "permissions_required", tuple(self.permissions_required))


@dataclass(frozen=True)
class Survey:
    """Titled, ordered collection of questions. Immutable once loaded."""

    title: str
    questions: Tuple[Question, ...]

    def __post_init__(self) -> None:
        questions = tuple(self.questions)
        object.__setattr__(self, "questions", questions)
        if not questions:
            raise ValueError(f"Survey '{self.title}' has no questions.")
        seen = set()
        for question in questions:
            if question.id in seen:
                raise ValueError(f"Duplicate question id {question.id} in survey '{self.title}'.")
            seen.add(question.id)


# ---- Recorded answers (what the user gave) ----
@dataclass(frozen=True)
class DateResult:
    """Date chosen in a picker, kept both formatted and as epoch milliseconds."""

    date: str
    timestamp_ms: int


@dataclass(frozen=True)
class PhotoResult:
    """Reference to a captured image."""

    uri: str


@dataclass(frozen=True)
class ContactResult:
    contact: str


SurveyActionResult = Union[DateResult, PhotoResult, ContactResult]


@dataclass(frozen=True)
class TextAnswer:
    text: str


@dataclass(frozen=True)
class SingleChoiceAnswer:
    answer: str


@dataclass(frozen=True)
class MultipleChoiceAnswer:
    answers: FrozenSet[str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "answers", frozenset(self.answers))


@dataclass(frozen=True)
class SliderAnswer:
    value: float


@dataclass(frozen=True)
class ActionAnswer:
    result: SurveyActionResult


Answer = Union[TextAnswer, SingleChoiceAnswer, MultipleChoiceAnswer, SliderAnswer, ActionAnswer]


@dataclass(frozen=True)
class SurveyResult:
    """Outcome returned by the scoring collaborator. Opaque to the view model."""

    library: str
    result: str
    description: str = ""
