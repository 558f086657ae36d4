"""
Goal weight extraction from quiz answers.

Sums each selected option's per-goal weights across every answered
question into a goal -> accumulated weight map. The map is total: every
GoalTag is present and defaults to zero, so callers never need to check
for missing goals.
"""

import logging
from typing import Any, Dict, Mapping

from ..matching.schema import GoalTag
from ..quiz.catalogue import QuizCatalogue, selected_option_ids

logger = logging.getLogger(__name__)


def empty_goal_weights() -> Dict[GoalTag, float]:
    """A goal weight map with every goal at zero."""
    return {goal: 0.0 for goal in GoalTag}


def extract_goal_weights(
    answers: Mapping[str, Any],
    catalogue: QuizCatalogue
) -> Dict[GoalTag, float]:
    """
    Accumulate goal weights from the selected options.

    Multiple choice questions contribute the weights of every selected
    option. Unknown questions, unknown options and questions without
    options (scale/text) contribute nothing.

    Args:
        answers: Mapping of question id to option id or list of option ids
        catalogue: Quiz catalogue holding the option goal weights

    Returns:
        Dictionary mapping every GoalTag to its accumulated weight
    """
    weights = empty_goal_weights()

    for question_id, answer in answers.items():
        question = catalogue.question(question_id)
        if question is None:
            continue
        for option_id in selected_option_ids(answer):
            option = question.option(option_id)
            if option is None:
                continue
            for goal, weight in option.goal_weights.items():
                weights[goal] += weight

    non_zero = {goal.value: weight for goal, weight in weights.items() if weight}
    logger.debug(f"Extracted goal weights: {non_zero}")
    return weights


def normalize_goal_weights(goal_weights: Mapping[Any, float]) -> Dict[GoalTag, float]:
    """
    Convert a caller-supplied weight map to a total GoalTag map.

    Keys may be GoalTag members or their string values; unknown keys
    are dropped.
    """
    weights = empty_goal_weights()
    for key, value in goal_weights.items():
        try:
            goal = key if isinstance(key, GoalTag) else GoalTag(str(key).lower())
        except ValueError:
            logger.warning(f"Ignoring goal weight for unknown goal {key!r}")
            continue
        weights[goal] = float(value or 0.0)
    return weights
