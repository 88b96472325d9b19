# surveyapp/app/main.py
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional

from ..adapters.photo_uri_local import LocalPhotoUriManager
from ..adapters.storage_local import StorageLocal
from ..adapters.survey_memory import InMemorySurveyRepository, JsonFileSurveyRepository
from ..adapters.survey_rest import SurveyRestAdapter
from ..domain.ports import SurveyRepositoryPort, UseCaseError
from ..utils import logging as logging_utils
from ..viewmodels.survey_state import QuestionsState, ResultState, SurveyState
from ..viewmodels.survey_vm import SurveyVM
from .settings import SurveySettings

log = logging.getLogger(__name__)


def build_survey_repository(settings: SurveySettings) -> SurveyRepositoryPort:
    source = settings.survey_source.strip()
    if not source or source.lower() == "memory":
        return InMemorySurveyRepository()
    if source.lower().startswith(("http://", "https://")):
        return SurveyRestAdapter(
            source,
            api_key=settings.api_key or None,
            request_timeout_s=settings.request_timeout_s,
            retries=settings.retries,
        )
    return JsonFileSurveyRepository(source)


def build_survey_vm(settings: SurveySettings) -> SurveyVM:
    """Wire the survey view model with adapters chosen by ``settings``."""
    return SurveyVM(
        build_survey_repository(settings),
        LocalPhotoUriManager(settings.photos_dir),
    )


def describe_state(state: Optional[SurveyState]) -> str:
    if isinstance(state, QuestionsState):
        current = state.current_question
        prompt = current.question.question_text if current else "-"
        return (
            f"{state.survey_title}: question {state.current_question_index + 1}"
            f"/{len(state.questions_state)} ({prompt}), "
            f"{len(state.answered())} answered"
        )
    if isinstance(state, ResultState):
        result = state.survey_result
        return f"{state.survey_title}: {result.result} {result.description}".strip()
    return "no survey loaded"


async def run(settings: SurveySettings) -> Optional[SurveyState]:
    """Load the configured survey and log every published state."""
    vm = build_survey_vm(settings)
    unsubscribe = vm.ui_state.subscribe(lambda state: log.info("%s", describe_state(state)))
    try:
        await vm.start()
    finally:
        unsubscribe()
        vm.close()
    return vm.ui_state.value


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Load a survey headlessly and print its state.")
    parser.add_argument("--prefs-dir", default=".", help="Directory holding user_prefs.json")
    parser.add_argument("--source", help="Override survey source (memory, JSON path, or URL)")
    parser.add_argument(
        "--save-prefs",
        action="store_true",
        help="Write the resolved settings to user_prefs.json before loading",
    )
    args = parser.parse_args(argv)

    logging_utils.configure_root()
    storage = StorageLocal(args.prefs_dir)
    settings = SurveySettings.load(storage)
    if args.source:
        settings.apply_dict({"survey_source": args.source})
    if args.save_prefs:
        settings.save(storage)
        log.info("Saved settings to %s", storage.prefs_path)
    logging_utils.apply_preferences(settings.debug_logging)

    try:
        state = asyncio.run(run(settings))
    except UseCaseError as exc:
        log.error("%s: %s", exc.code, exc.message)
        return 1
    print(describe_state(state))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
