"""Domain package exports for survey value objects and codecs."""

from .entities import (
    Action,
    ActionAnswer,
    Answer,
    ContactResult,
    DateResult,
    FreeText,
    MultipleChoice,
    MultipleChoiceAnswer,
    PhotoResult,
    PossibleAnswer,
    Question,
    QuestionId,
    SingleChoice,
    SingleChoiceAnswer,
    Slider,
    SliderAnswer,
    Survey,
    SurveyActionResult,
    SurveyActionType,
    SurveyResult,
    TextAnswer,
)
from .survey_codec import answer_to_dict, survey_from_dict, survey_result_from_dict

__all__ = [
    "Action",
    "ActionAnswer",
    "Answer",
    "ContactResult",
    "DateResult",
    "FreeText",
    "MultipleChoice",
    "MultipleChoiceAnswer",
    "PhotoResult",
    "PossibleAnswer",
    "Question",
    "QuestionId",
    "SingleChoice",
    "SingleChoiceAnswer",
    "Slider",
    "SliderAnswer",
    "Survey",
    "SurveyActionResult",
    "SurveyActionType",
    "SurveyResult",
    "TextAnswer",
    "answer_to_dict",
    "survey_from_dict",
    "survey_result_from_dict",
]
