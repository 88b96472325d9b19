from __future__ import annotations
from typing import Dict, Protocol, Sequence

from .entities import Answer, Survey, SurveyResult


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class SurveyRepositoryPort(Protocol):
    """Source of the current survey and scorer of its answers."""

    def get_survey(self) -> Survey: ...
    def get_survey_result(self, answers: Sequence[Answer]) -> SurveyResult: ...


class PhotoUriPort(Protocol):
    """Allocates capture destinations. Every call returns a new, unique uri."""

    def build_new_uri(self) -> str: ...


class StoragePort(Protocol):
    """Persistence for user preferences."""

    def save_user_prefs(self, prefs: Dict) -> None: ...
    def load_user_prefs(self) -> Dict: ...
