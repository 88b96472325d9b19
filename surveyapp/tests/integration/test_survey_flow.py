from __future__ import annotations

import asyncio
from datetime import timezone

from surveyapp.adapters.photo_uri_local import LocalPhotoUriManager
from surveyapp.adapters.survey_memory import InMemorySurveyRepository
from surveyapp.domain.entities import (
    MultipleChoiceAnswer,
    PhotoResult,
    SingleChoiceAnswer,
    SliderAnswer,
)
from surveyapp.viewmodels.survey_state import QuestionsState, ResultState
from surveyapp.viewmodels.survey_vm import SurveyVM


def test_walk_sample_survey_to_result(tmp_path) -> None:
    repo = InMemorySurveyRepository()
    vm = SurveyVM(repo, LocalPhotoUriManager(tmp_path), tz=timezone.utc)
    published = []
    vm.ui_state.subscribe(published.append)

    async def load() -> None:
        await vm.start()

    asyncio.run(load())
    state = vm.ui_state.value
    assert isinstance(state, QuestionsState)

    vm.record_answer(1, SingleChoiceAnswer("WorkManager"))
    vm.go_to_next()
    vm.record_answer(2, MultipleChoiceAnswer({"Spark", "Frag"}))
    vm.go_to_next()
    vm.on_date_picked(3, 1700000000000)
    vm.go_to_next()
    uri = vm.get_uri_to_save_image()
    vm.on_image_saved()
    vm.go_to_next()
    vm.record_answer(5, SliderAnswer(4.0))

    assert state.questions_state[3].answer.result == PhotoResult(uri)
    assert state.questions_state[5].answer is None

    result_state = vm.compute_result()

    assert isinstance(result_state, ResultState)
    assert result_state.survey_result.library == "WorkManager"
    assert len(repo.scored[0]) == 5
    assert published[-1] is result_state
