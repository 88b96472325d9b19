from __future__ import annotations
from dataclasses import dataclass

from ..domain.entities import Survey
from ..domain.ports import SurveyRepositoryPort
from .error_mapping import map_api_error


@dataclass
class LoadSurvey:
    repository: SurveyRepositoryPort

    def __call__(self) -> Survey:
        try:
            return self.repository.get_survey()
        except Exception as e:
            raise map_api_error(e, default_code="LOAD_SURVEY_FAILED") from e
