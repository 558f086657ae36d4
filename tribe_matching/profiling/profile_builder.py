"""
Profile building from raw quiz answers.

Maps a user's answer selections (question id -> option id, or list of
option ids for multiple choice questions) into a structured UserProfile
using fixed answer -> attribute tables.

Designated questions are located through their catalogue category
(``primary_goal``, ``interests``, ...). Without a catalogue, the default
question ids of the bundled quiz are used.

Every field is defaulted when its answer is missing or unrecognized,
and answers to unknown questions are ignored, so building a profile
never fails.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..matching.schema import (
    Commitment,
    Experience,
    GoalTag,
    LearningStyle,
    Motivation,
    PersonalityTraits,
    UserProfile,
)
from ..quiz.catalogue import QuizCatalogue, selected_option_ids

logger = logging.getLogger(__name__)

# Category tag -> question id in the bundled quiz
DEFAULT_QUESTION_IDS: Dict[str, str] = {
    "primary_goal": "q1",
    "interests": "q2",
    "commitment": "q3",
    "learning_style": "q4",
    "community_style": "q5",
    "planning_style": "q6",
    "motivation": "q7",
    "personality": "q9",
    "detail_orientation": "q10",
    "experience": "q11",
    "challenge": "q15",
}

GOAL_MAP: Dict[str, GoalTag] = {
    "q1_health": GoalTag.HEALTH,
    "q1_fitness": GoalTag.FITNESS,
    "q1_learning": GoalTag.LEARNING,
    "q1_career": GoalTag.CAREER,
    "q1_mindfulness": GoalTag.MINDFULNESS,
    "q1_relationships": GoalTag.RELATIONSHIPS,
    "q1_financial": GoalTag.FINANCIAL,
    "q1_creative": GoalTag.CREATIVE,
    "q1_purpose": GoalTag.PERSONAL_GROWTH,
}

INTEREST_MAP: Dict[str, str] = {
    "q2_nutrition": "nutrition",
    "q2_workout": "fitness-training",
    "q2_sleep": "sleep-optimization",
    "q2_stress": "stress-management",
    "q2_meditation": "meditation",
    "q2_programming": "programming",
    "q2_language": "language-learning",
    "q2_business": "entrepreneurship",
    "q2_finance": "personal-finance",
    "q2_relationships": "relationships",
    "q2_creative": "creative-arts",
    "q2_spirituality": "spirituality",
}

COMMITMENT_MAP: Dict[str, Commitment] = {
    "q3_casual": Commitment.CASUAL,
    "q3_moderate": Commitment.MODERATE,
    "q3_serious": Commitment.SERIOUS,
    "q3_obsessed": Commitment.OBSESSED,
}

LEARNING_STYLE_MAP: Dict[str, LearningStyle] = {
    "q4_visual": LearningStyle.VISUAL,
    "q4_auditory": LearningStyle.AUDITORY,
    "q4_reading": LearningStyle.READING,
    "q4_kinesthetic": LearningStyle.KINESTHETIC,
    "q4_mixed": LearningStyle.MIXED,
}

MOTIVATION_MAP: Dict[str, Motivation] = {
    "q7_achievement": Motivation.ACHIEVEMENT,
    "q7_community": Motivation.COMMUNITY,
    "q7_growth": Motivation.GROWTH,
    "q7_purpose": Motivation.PURPOSE,
    "q7_autonomy": Motivation.AUTONOMY,
}

EXPERIENCE_MAP: Dict[str, Experience] = {
    "q11_beginner": Experience.BEGINNER,
    "q11_intermediate": Experience.INTERMEDIATE,
    "q11_advanced": Experience.ADVANCED,
}

# Trait tables: 0 = low end of the trait, 10 = high end
INTROVERT_SCORES: Dict[str, int] = {
    "q9_introvert": 8,
    "q9_ambivert": 5,
    "q9_extrovert": 2,
}

DETAIL_SCORES: Dict[str, int] = {
    "q10_details": 8,
    "q10_balanced": 5,
    "q10_big_picture": 2,
}

PLANNER_SCORES: Dict[str, int] = {
    "q6_planner": 8,
    "q6_hybrid": 5,
    "q6_spontaneous": 2,
}

NEUTRAL_TRAIT = 5

DEFAULT_GOAL = GoalTag.PERSONAL_GROWTH
DEFAULT_COMMITMENT = Commitment.MODERATE
DEFAULT_LEARNING_STYLE = LearningStyle.MIXED
DEFAULT_MOTIVATION = Motivation.GROWTH
DEFAULT_EXPERIENCE = Experience.BEGINNER


def _question_id(category: str, catalogue: Optional[QuizCatalogue]) -> str:
    if catalogue is not None:
        question = catalogue.question_for_category(category)
        if question is not None:
            return question.id
    return DEFAULT_QUESTION_IDS[category]


def _single(answers: Mapping[str, Any], question_id: str) -> Optional[str]:
    """Selected option id of a single-answer question (first one for lists)."""
    ids = selected_option_ids(answers.get(question_id))
    return ids[0] if ids else None


def _lookup(table: Mapping[str, Any], answer: Optional[str], default: Any, field_name: str) -> Any:
    if answer is None:
        return default
    if answer not in table:
        logger.debug(f"Unmapped {field_name} answer {answer!r}, using default {default}")
        return default
    return table[answer]


def _passthrough(answers: Mapping[str, Any], question_id: str) -> str:
    answer = answers.get(question_id)
    if answer is None:
        return ""
    return answer if isinstance(answer, str) else str(answer)


def build_profile(
    answers: Mapping[str, Any],
    catalogue: Optional[QuizCatalogue] = None,
    user_id: Optional[str] = None
) -> UserProfile:
    """
    Build a UserProfile from raw quiz answers.

    Args:
        answers: Mapping of question id to option id (single choice / scale)
            or list of option ids (multiple choice)
        catalogue: Quiz catalogue used to locate the designated questions
        user_id: Optional identifier stored on the profile

    Returns:
        Fully populated UserProfile
    """
    def qid(category: str) -> str:
        return _question_id(category, catalogue)

    primary_goal = _lookup(GOAL_MAP, _single(answers, qid("primary_goal")), DEFAULT_GOAL, "goal")

    interests: List[str] = [
        INTEREST_MAP[option_id]
        for option_id in selected_option_ids(answers.get(qid("interests")))
        if option_id in INTEREST_MAP
    ]

    commitment = _lookup(
        COMMITMENT_MAP, _single(answers, qid("commitment")), DEFAULT_COMMITMENT, "commitment"
    )
    learning_style = _lookup(
        LEARNING_STYLE_MAP, _single(answers, qid("learning_style")), DEFAULT_LEARNING_STYLE, "learning style"
    )
    motivation = _lookup(
        MOTIVATION_MAP, _single(answers, qid("motivation")), DEFAULT_MOTIVATION, "motivation"
    )
    experience = _lookup(
        EXPERIENCE_MAP, _single(answers, qid("experience")), DEFAULT_EXPERIENCE, "experience"
    )

    personality = PersonalityTraits(
        introvert=_lookup(INTROVERT_SCORES, _single(answers, qid("personality")), NEUTRAL_TRAIT, "introvert"),
        detail_oriented=_lookup(
            DETAIL_SCORES, _single(answers, qid("detail_orientation")), NEUTRAL_TRAIT, "detail"
        ),
        planner=_lookup(PLANNER_SCORES, _single(answers, qid("planning_style")), NEUTRAL_TRAIT, "planner"),
    )

    profile = UserProfile(
        primary_goal=primary_goal,
        interests=interests,
        learning_style=learning_style,
        motivation=motivation,
        commitment=commitment,
        personality=personality,
        experience=experience,
        challenge_area=_passthrough(answers, qid("challenge")),
        preferred_community_style=_passthrough(answers, qid("community_style")),
        user_id=user_id,
    )

    logger.debug(
        f"Built profile: goal={primary_goal.value}, commitment={commitment.value}, "
        f"interests={len(interests)}"
    )
    return profile
