"""
Quiz catalogue data model and loading.

The catalogue is read-only reference data: an ordered list of questions,
each with options carrying a raw score and a sparse per-goal weight map.
It is loaded once by the caller (from YAML) and passed explicitly into
the profile builder and the answer weight extractor.

YAML layout:
    version, title, description, estimated_time_minutes
    scoring_weights: {goal: base weight}
    metadata: {categories: [...], ...}
    questions:
      - id, order, question, description, type, category, required
        options: [{id, text, value, goal_weights: {goal: weight}}]
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from ..matching.schema import GoalTag

logger = logging.getLogger(__name__)

DEFAULT_CATALOGUE_PATH = Path(__file__).parent / "data" / "tribe_quiz.yaml"


class QuestionType(Enum):
    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    SCALE = "scale"
    TEXT = "text"


@dataclass(frozen=True)
class QuizOption:
    """
    One selectable answer.

    Attributes:
        id: Option identifier, unique within the catalogue
        text: Display text
        value: Raw score on a 0-10 scale
        goal_weights: Sparse goal -> weight (0-10) map; absent goals weigh 0
    """
    id: str
    text: str
    value: int = 0
    goal_weights: Mapping[GoalTag, float] = field(default_factory=dict)

    def weight_for(self, goal: GoalTag) -> float:
        """Weight this option contributes to ``goal`` (0 when absent)."""
        return self.goal_weights.get(goal, 0.0)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuizOption":
        """Create from dictionary, dropping weights for unknown goals."""
        weights: Dict[GoalTag, float] = {}
        for goal, weight in (data.get("goal_weights") or {}).items():
            try:
                weights[GoalTag(goal)] = float(weight)
            except ValueError:
                logger.warning(f"Ignoring weight for unknown goal {goal!r} on option {data.get('id')}")
        return cls(
            id=str(data["id"]),
            text=str(data.get("text", "")),
            value=int(data.get("value", 0)),
            goal_weights=weights,
        )


@dataclass(frozen=True)
class QuizQuestion:
    """
    One quiz question.

    Attributes:
        id: Question identifier
        question: Prompt text
        type: Question type
        options: Ordered options (empty for scale/text questions)
        required: Whether an answer is required
        category: Category tag used to locate designated questions
        order: Display order
        description: Optional helper text
        min_value: Lower bound for scale questions
        max_value: Upper bound for scale questions
    """
    id: str
    question: str
    type: QuestionType
    options: Tuple[QuizOption, ...] = ()
    required: bool = True
    category: str = ""
    order: int = 0
    description: str = ""
    min_value: Optional[int] = None
    max_value: Optional[int] = None

    def option(self, option_id: str) -> Optional[QuizOption]:
        """Look up an option by id."""
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuizQuestion":
        """Create from dictionary."""
        try:
            question_type = QuestionType(data.get("type", "single_choice"))
        except ValueError:
            raise ValueError(f"Unknown question type for {data.get('id')}: {data.get('type')}")

        options = data.get("options") or []
        if not isinstance(options, list):
            raise ValueError(f"Options for question {data.get('id')} must be a list")

        return cls(
            id=str(data["id"]),
            question=str(data.get("question", "")),
            type=question_type,
            options=tuple(QuizOption.from_dict(o) for o in options),
            required=bool(data.get("required", True)),
            category=str(data.get("category", "")),
            order=int(data.get("order", 0)),
            description=str(data.get("description", "")),
            min_value=data.get("min_value"),
            max_value=data.get("max_value"),
        )


@dataclass(frozen=True)
class QuizCatalogue:
    """
    Immutable quiz definition.

    Attributes:
        questions: Questions in display order
        version: Catalogue version
        title: Quiz title
        description: Quiz description
        estimated_time_minutes: Expected completion time
        scoring_weights: Base weight per goal
        categories: Category tags declared in the metadata
    """
    questions: Tuple[QuizQuestion, ...]
    version: int = 1
    title: str = ""
    description: str = ""
    estimated_time_minutes: int = 0
    scoring_weights: Mapping[GoalTag, float] = field(default_factory=dict)
    categories: Tuple[str, ...] = ()

    def question(self, question_id: str) -> Optional[QuizQuestion]:
        """Look up a question by id."""
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def question_for_category(self, category: str) -> Optional[QuizQuestion]:
        """Return the first question tagged with ``category``."""
        for q in self.questions:
            if q.category == category:
                return q
        return None

    @property
    def required_question_ids(self) -> List[str]:
        return [q.id for q in self.questions if q.required]

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuizCatalogue":
        """
        Create from dictionary.

        Raises:
            ValueError: If the questions entry is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Quiz catalogue must be a mapping")
        raw_questions = data.get("questions")
        if not isinstance(raw_questions, list):
            raise ValueError("Quiz catalogue must define a list of questions")
        for raw in raw_questions:
            if not isinstance(raw, dict) or "id" not in raw:
                raise ValueError(f"Malformed question entry: {raw!r}")

        questions = sorted(
            (QuizQuestion.from_dict(q) for q in raw_questions),
            key=lambda q: q.order,
        )

        scoring_weights: Dict[GoalTag, float] = {}
        for goal, weight in (data.get("scoring_weights") or {}).items():
            try:
                scoring_weights[GoalTag(goal)] = float(weight)
            except ValueError:
                logger.warning(f"Ignoring scoring weight for unknown goal {goal!r}")

        metadata = data.get("metadata") or {}
        return cls(
            questions=tuple(questions),
            version=int(data.get("version", 1)),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            estimated_time_minutes=int(data.get("estimated_time_minutes", 0)),
            scoring_weights=scoring_weights,
            categories=tuple(metadata.get("categories") or ()),
        )


def load_catalogue(filepath: Union[str, Path]) -> QuizCatalogue:
    """
    Load a quiz catalogue from a YAML file.

    Args:
        filepath: Path to the catalogue file

    Returns:
        QuizCatalogue instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or malformed
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Quiz catalogue not found: {filepath}")

    logger.info(f"Loading quiz catalogue from {filepath}")
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise ValueError(f"Quiz catalogue file is empty: {filepath}")

    catalogue = QuizCatalogue.from_dict(data)
    logger.info(f"Loaded quiz catalogue v{catalogue.version} with {catalogue.total_questions} questions")
    return catalogue


def default_catalogue() -> QuizCatalogue:
    """Load the bundled "Find Your Perfect Tribe" catalogue."""
    return load_catalogue(DEFAULT_CATALOGUE_PATH)


def validate_catalogue(catalogue: QuizCatalogue) -> List[str]:
    """
    Validate a catalogue and return a list of issues (empty if valid).

    Checks duplicate question/option ids, choice questions without
    options, and values or goal weights outside the 0-10 range.
    """
    issues = []
    seen_questions = set()
    seen_options = set()

    for question in catalogue.questions:
        if question.id in seen_questions:
            issues.append(f"Duplicate question id: {question.id}")
        seen_questions.add(question.id)

        is_choice = question.type in (QuestionType.SINGLE_CHOICE, QuestionType.MULTIPLE_CHOICE)
        if is_choice and not question.options:
            issues.append(f"Question {question.id} has no options")

        for option in question.options:
            if option.id in seen_options:
                issues.append(f"Duplicate option id: {option.id}")
            seen_options.add(option.id)

            if not 0 <= option.value <= 10:
                issues.append(f"Option {option.id} value must be in [0, 10], got {option.value}")
            for goal, weight in option.goal_weights.items():
                if not 0 <= weight <= 10:
                    issues.append(
                        f"Option {option.id} weight for {goal.value} must be in [0, 10], got {weight}"
                    )

    return issues


def selected_option_ids(answer: Any) -> List[str]:
    """Normalise an answer to a list of option ids."""
    if answer is None:
        return []
    if isinstance(answer, str):
        return [answer]
    if isinstance(answer, (list, tuple)):
        return [str(a) for a in answer if a is not None]
    return [str(answer)]


def score_answer(question: QuizQuestion, answer: Any) -> int:
    """
    Raw score of one answer.

    Single choice scores the selected option's value, multiple choice the
    sum of the selected options' values, and scale the answer parsed as an
    integer. Text answers and unknown options score 0.

    Args:
        question: The answered question
        answer: Option id, list of option ids, or scale value

    Returns:
        Integer raw score
    """
    if question.type == QuestionType.SINGLE_CHOICE:
        ids = selected_option_ids(answer)
        option = question.option(ids[0]) if ids else None
        return option.value if option else 0

    if question.type == QuestionType.MULTIPLE_CHOICE:
        total = 0
        for option_id in selected_option_ids(answer):
            option = question.option(option_id)
            if option:
                total += option.value
        return total

    if question.type == QuestionType.SCALE:
        try:
            return int(str(answer).strip())
        except (TypeError, ValueError):
            return 0

    return 0


def score_answers(answers: Mapping[str, Any], catalogue: QuizCatalogue) -> Dict[str, int]:
    """Raw score per answered catalogue question; unknown questions are skipped."""
    scores = {}
    for question_id, answer in answers.items():
        question = catalogue.question(question_id)
        if question is None:
            continue
        scores[question_id] = score_answer(question, answer)
    return scores


def find_missing_answers(answers: Mapping[str, Any], catalogue: QuizCatalogue) -> List[str]:
    """Required question ids that have no answer, in catalogue order."""
    return [
        qid for qid in catalogue.required_question_ids
        if not selected_option_ids(answers.get(qid))
    ]
