from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..domain.entities import Answer, Question, SurveyResult


@dataclass(eq=False)
class QuestionState:
    """View state for one question: position metadata plus a mutable answer slot.

    Identity matters: the view model hands out the same instance for a question
    id for the whole session, so equality is identity.
    """

    question: Question
    question_index: int
    total_questions_count: int
    show_previous: bool
    show_done: bool
    answer: Optional[Answer] = None
    enable_next: bool = False

    @property
    def question_id(self) -> int:
        return self.question.id


@dataclass
class QuestionsState:
    """Survey in progress. ``current_question_index`` always points into ``questions_state``."""

    survey_title: str
    questions_state: List[QuestionState] = field(default_factory=list)
    current_question_index: int = 0

    @property
    def current_question(self) -> Optional[QuestionState]:
        if 0 <= self.current_question_index < len(self.questions_state):
            return self.questions_state[self.current_question_index]
        return None

    def answered(self) -> List[QuestionState]:
        return [qs for qs in self.questions_state if qs.answer is not None]


@dataclass(frozen=True)
class ResultState:
    """Terminal state carrying the scored outcome."""

    survey_title: str
    survey_result: SurveyResult


SurveyState = Union[QuestionsState, ResultState]


def build_questions_state(questions: List[Question]) -> List[QuestionState]:
    """Project questions into view states; first hides "previous", last shows "done"."""
    total = len(questions)
    return [
        QuestionState(
            question=question,
            question_index=index,
            total_questions_count=total,
            show_previous=index > 0,
            show_done=index == total - 1,
        )
        for index, question in enumerate(questions)
    ]


__all__ = [
    "QuestionState",
    "QuestionsState",
    "ResultState",
    "SurveyState",
    "build_questions_state",
]
