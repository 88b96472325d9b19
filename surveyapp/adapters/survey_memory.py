from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Union

from surveyapp.domain.entities import (
    Action,
    Answer,
    FreeText,
    MultipleChoice,
    Question,
    SingleChoice,
    SingleChoiceAnswer,
    Slider,
    Survey,
    SurveyActionType,
    SurveyResult,
)
from surveyapp.domain.ports import SurveyRepositoryPort
from surveyapp.domain.survey_codec import survey_from_dict

DEFAULT_LIBRARY = "Compose"


def sample_survey() -> Survey:
    """Built-in survey used when no external source is configured."""
    return Survey(
        title="Which Jetpack library are you?",
        questions=(
            Question(
                id=1,
                question_text="In Android Studio, which library do you reach for first?",
                answer=SingleChoice(options=("Compose", "Room", "WorkManager", "Navigation")),
            ),
            Question(
                id=2,
                question_text="Pick the superheroes you would invite to dinner",
                answer=MultipleChoice(options=("Spark", "Lenz", "Bugchaos", "Frag")),
            ),
            Question(
                id=3,
                question_text="When did you last go to the cinema?",
                answer=Action(label="Select date", action_type=SurveyActionType.PICK_DATE),
                description="Pick the date from the calendar",
            ),
            Question(
                id=4,
                question_text="Take a selfie to show how you feel today",
                answer=Action(label="Add photo", action_type=SurveyActionType.TAKE_PHOTO),
                permissions_required=("android.permission.CAMERA",),
            ),
            Question(
                id=5,
                question_text="How do you feel about selfies?",
                answer=Slider(
                    range_start=1.0,
                    range_end=5.0,
                    steps=3,
                    start_text="I hate them",
                    end_text="I love them",
                    neutral_text="Neutral",
                ),
            ),
            Question(
                id=6,
                question_text="Anything else you would like to share?",
                answer=FreeText(hint="Type your answer"),
            ),
        ),
    )


@dataclass
class InMemorySurveyRepository(SurveyRepositoryPort):
    """Offline survey source with a deterministic scoring rule.

    The library in the result is the first single-choice answer, or
    ``DEFAULT_LIBRARY`` when none was given. Every scored answer list is kept in
    ``scored`` for inspection.
    """

    survey: Survey = field(default_factory=sample_survey)
    scored: List[List[Answer]] = field(default_factory=list)

    def get_survey(self) -> Survey:
        return self.survey

    def get_survey_result(self, answers: Sequence[Answer]) -> SurveyResult:
        answers = list(answers)
        self.scored.append(answers)
        library = next(
            (a.answer for a in answers if isinstance(a, SingleChoiceAnswer) and a.answer),
            DEFAULT_LIBRARY,
        )
        return SurveyResult(
            library=library,
            result=f"You are {library}!",
            description=f"Based on {len(answers)} of {len(self.survey.questions)} answers.",
        )


class JsonFileSurveyRepository(InMemorySurveyRepository):
    """Survey definition read from a JSON file on first access; scoring as in memory."""

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)
        self._loaded = False

    def get_survey(self) -> Survey:
        if not self._loaded:
            with open(self.path, "r", encoding="utf-8") as f:
                self.survey = survey_from_dict(json.load(f))
            self._loaded = True
        return self.survey


__all__ = ["DEFAULT_LIBRARY", "InMemorySurveyRepository", "JsonFileSurveyRepository", "sample_survey"]
