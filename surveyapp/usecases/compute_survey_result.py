from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from ..domain.entities import Answer, SurveyResult
from ..domain.ports import SurveyRepositoryPort
from .error_mapping import map_api_error


@dataclass
class ComputeSurveyResult:
    repository: SurveyRepositoryPort

    def __call__(self, answers: Iterable[Answer]) -> SurveyResult:
        try:
            return self.repository.get_survey_result(list(answers))
        except Exception as e:
            raise map_api_error(e, default_code="COMPUTE_RESULT_FAILED") from e
