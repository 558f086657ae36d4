"""Quiz catalogue module: question definitions, loading and answer scoring."""

from .catalogue import (
    QuestionType,
    QuizOption,
    QuizQuestion,
    QuizCatalogue,
    load_catalogue,
    default_catalogue,
    validate_catalogue,
    score_answer,
    score_answers,
    find_missing_answers,
    DEFAULT_CATALOGUE_PATH,
)

__all__ = [
    "QuestionType",
    "QuizOption",
    "QuizQuestion",
    "QuizCatalogue",
    "load_catalogue",
    "default_catalogue",
    "validate_catalogue",
    "score_answer",
    "score_answers",
    "find_missing_answers",
    "DEFAULT_CATALOGUE_PATH",
]
