from __future__ import annotations

import asyncio
import logging
from datetime import tzinfo
from typing import Callable, Optional

from ..domain.entities import (
    ActionAnswer,
    Answer,
    DateResult,
    PhotoResult,
    QuestionId,
    SurveyActionResult,
)
from ..domain.ports import PhotoUriPort, SurveyRepositoryPort
from ..usecases.compute_survey_result import ComputeSurveyResult
from ..usecases.load_survey import LoadSurvey
from .date_format import format_picker_date, now_ms
from .observable import ObservableValue
from .survey_state import (
    QuestionState,
    QuestionsState,
    ResultState,
    SurveyState,
    build_questions_state,
)

log = logging.getLogger(__name__)


class SurveyVM:
    """Owns survey UI state: loads the survey, records answers, computes the result.

    Responsibilities
    - Publish ``QuestionsState`` once the survey is loaded, ``ResultState`` after scoring
    - Mutate exactly one question's answer slot per update event, then re-publish
    - Track the pending photo capture target and the session permission flag

    All methods run on the event loop that called :meth:`start`. Only the survey
    fetch leaves the loop (worker thread); its publish happens back on the loop.
    Calls made in the wrong state are silent no-ops.
    """

    def __init__(
        self,
        survey_repository: SurveyRepositoryPort,
        photo_uri_manager: PhotoUriPort,
        *,
        tz: Optional[tzinfo] = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._load_survey = LoadSurvey(survey_repository)
        self._compute_result = ComputeSurveyResult(survey_repository)
        self._photo_uri_manager = photo_uri_manager
        self._tz = tz
        self._clock = clock

        self.ui_state: ObservableValue[SurveyState] = ObservableValue()
        self._ask_for_permissions = True
        # Uri handed out for the camera to write the next photo into
        self._pending_photo_uri: Optional[str] = None
        self._load_task: Optional[asyncio.Task] = None

    # ---- Lifecycle ----
    def start(self) -> asyncio.Task:
        """Schedule the survey load on the running loop (idempotent)."""
        if self._load_task is None:
            self._load_task = asyncio.get_running_loop().create_task(self.load())
        return self._load_task

    async def load(self) -> QuestionsState:
        survey = await asyncio.to_thread(self._load_survey)
        state = QuestionsState(
            survey_title=survey.title,
            questions_state=build_questions_state(list(survey.questions)),
        )
        log.info("Loaded survey '%s' (%d questions)", survey.title, len(survey.questions))
        self._publish(state)
        return state

    def close(self) -> None:
        """Cancel a pending load; its result is discarded."""
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()

    @property
    def ask_for_permissions(self) -> bool:
        return self._ask_for_permissions

    @property
    def pending_photo_uri(self) -> Optional[str]:
        return self._pending_photo_uri

    # ---- Commands surfaced to View ----
    def compute_result(self, state: Optional[QuestionsState] = None) -> Optional[ResultState]:
        """Score the answered questions of ``state`` (default: current) and publish the result."""
        if isinstance(self.ui_state.value, ResultState):
            log.debug("compute_result ignored: result already published")
            return None
        state = self.ui_state.value if state is None else state
        if not isinstance(state, QuestionsState):
            log.debug("compute_result ignored: no questions state")
            return None
        answers = [qs.answer for qs in state.questions_state if qs.answer is not None]
        result = self._compute_result(answers)
        result_state = ResultState(survey_title=state.survey_title, survey_result=result)
        self._publish(result_state)
        return result_state

    def on_date_picked(self, question_id: QuestionId, picker_selection_ms: Optional[int] = None) -> None:
        timestamp = (
            picker_selection_ms
            if picker_selection_ms is not None
            else self.get_current_date(question_id)
        )
        formatted = format_picker_date(timestamp, self._tz)
        self._update_state_with_action_result(
            question_id, DateResult(date=formatted, timestamp_ms=int(timestamp))
        )

    def get_current_date(self, question_id: QuestionId) -> int:
        """Timestamp (ms) of the date already recorded for ``question_id``, else now."""
        state = self._questions_state()
        if state is not None:
            answer = self._find_question_state(state, question_id).answer
            if isinstance(answer, ActionAnswer) and isinstance(answer.result, DateResult):
                return answer.result.timestamp_ms
        return self._clock()

    def get_uri_to_save_image(self) -> str:
        self._pending_photo_uri = self._photo_uri_manager.build_new_uri()
        log.debug("Allocated photo target %s", self._pending_photo_uri)
        return self._pending_photo_uri

    def on_image_saved(self) -> None:
        uri = self._pending_photo_uri
        if uri is None:
            return
        question_id = self._latest_question_id()
        if question_id is None:
            return
        self._update_state_with_action_result(question_id, PhotoResult(uri=uri))

    def record_answer(self, question_id: QuestionId, answer: Answer) -> None:
        """Store any answer kind (text, choice, slider) for ``question_id``."""
        self._record(question_id, answer)

    def go_to_next(self) -> None:
        self._move_to(1)

    def go_to_previous(self) -> None:
        self._move_to(-1)

    # TODO: persist this once user preferences are wired into the view model
    def do_not_ask_for_permissions(self) -> None:
        self._ask_for_permissions = False

    # ---- Helpers ----
    def _publish(self, state: SurveyState) -> None:
        self.ui_state.set_value(state)

    def _questions_state(self) -> Optional[QuestionsState]:
        latest = self.ui_state.value
        return latest if isinstance(latest, QuestionsState) else None

    def _update_state_with_action_result(
        self, question_id: QuestionId, result: SurveyActionResult
    ) -> None:
        self._record(question_id, ActionAnswer(result=result))

    def _record(self, question_id: QuestionId, answer: Answer) -> None:
        state = self._questions_state()
        if state is None:
            log.debug("Answer for question %s ignored: survey not in progress", question_id)
            return
        question_state = self._find_question_state(state, question_id)
        question_state.answer = answer
        question_state.enable_next = True
        self._publish(state)

    def _move_to(self, step: int) -> None:
        state = self._questions_state()
        if state is None:
            return
        target = state.current_question_index + step
        if not 0 <= target < len(state.questions_state):
            return
        state.current_question_index = target
        self._publish(state)

    def _latest_question_id(self) -> Optional[QuestionId]:
        state = self._questions_state()
        if state is None or state.current_question is None:
            return None
        return state.current_question.question_id

    @staticmethod
    def _find_question_state(state: QuestionsState, question_id: QuestionId) -> QuestionState:
        for question_state in state.questions_state:
            if question_state.question_id == question_id:
                return question_state
        raise KeyError(f"Unknown question id {question_id}")


__all__ = ["SurveyVM"]
