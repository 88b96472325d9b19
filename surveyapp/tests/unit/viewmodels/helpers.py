from __future__ import annotations

import asyncio
from datetime import timezone
from typing import Callable, List, Optional, Sequence

from surveyapp.domain.entities import (
    Action,
    Answer,
    FreeText,
    Question,
    Survey,
    SurveyActionType,
    SurveyResult,
)
from surveyapp.viewmodels.survey_vm import SurveyVM

FIXED_NOW_MS = 1700000000000


class FakeSurveyRepository:
    def __init__(self, survey: Survey, result: Optional[SurveyResult] = None) -> None:
        self.survey = survey
        self.result = result or SurveyResult(library="Compose", result="You are Compose!")
        self.received: List[List[Answer]] = []

    def get_survey(self) -> Survey:
        return self.survey

    def get_survey_result(self, answers: Sequence[Answer]) -> SurveyResult:
        self.received.append(list(answers))
        return self.result


class FakePhotoUris:
    def __init__(self) -> None:
        self.count = 0

    def build_new_uri(self) -> str:
        self.count += 1
        return f"file:///photos/selfie-{self.count}.jpg"


def make_survey(title: str = "Sample", ids: Sequence[int] = (1, 2)) -> Survey:
    return Survey(
        title=title,
        questions=tuple(
            Question(
                id=qid,
                question_text=f"Question {qid}",
                answer=Action(label="Select date", action_type=SurveyActionType.PICK_DATE)
                if qid % 2
                else FreeText(),
            )
            for qid in ids
        ),
    )


def make_loaded_vm(
    survey: Optional[Survey] = None,
    *,
    repository: Optional[FakeSurveyRepository] = None,
    photos: Optional[FakePhotoUris] = None,
    clock: Callable[[], int] = lambda: FIXED_NOW_MS,
) -> SurveyVM:
    repo = repository or FakeSurveyRepository(survey or make_survey())
    vm = SurveyVM(repo, photos or FakePhotoUris(), tz=timezone.utc, clock=clock)
    asyncio.run(vm.load())
    return vm


__all__ = [
    "FIXED_NOW_MS",
    "FakePhotoUris",
    "FakeSurveyRepository",
    "make_loaded_vm",
    "make_survey",
]
