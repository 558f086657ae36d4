"""
Match scoring between a user profile and one candidate tribe.

Computes five independent sub-scores (0-100 each), fuses them into a
combined score, assigns a recommendation tier and collects up to three
reasons to join.

Sub-scores:
- Goal match (weight 0.40): primary / secondary / other goal base points,
  quiz answer goal weight bonus, commitment bonus
- Interest match (weight 0.25): share of the user's interests found in
  the tribe's interests
- Learning style match (weight 0.15): exact / compatible / mismatched style
- Personality match (weight 0.15): social energy vs. activity level,
  planning style vs. rules, beginners vs. verified tribes
- Engagement match (weight 0.05): commitment x activity level lookup

Scoring is deterministic, side-effect free and total: missing optional
fields and unknown enum values fall back to documented defaults.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .fusion import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    clamp_score,
    fuse_scores,
    recommendation_tier,
    round_half_up,
)
from .schema import (
    ActivityLevel,
    CandidateGroup,
    Commitment,
    Experience,
    GoalTag,
    LearningStyle,
    MatchBreakdown,
    MatchResult,
    UserProfile,
    coerce_enum,
    enum_value,
)

logger = logging.getLogger(__name__)

# Goal match points
PRIMARY_GOAL_POINTS = 70
SECONDARY_GOAL_POINTS = 40
OTHER_GOAL_POINTS = 10
ANSWER_WEIGHT_MAX_POINTS = 20
MAX_ANSWER_WEIGHT = 10.0

COMMITMENT_BONUS = {
    Commitment.OBSESSED: 15,
    Commitment.SERIOUS: 10,
    Commitment.MODERATE: 5,
    Commitment.CASUAL: 0,
}

NEUTRAL_INTEREST_SCORE = 50.0

# Learning style scores
NEUTRAL_STYLE_SCORE = 70.0
EXACT_STYLE_SCORE = 100.0
COMPATIBLE_STYLE_SCORE = 80.0
MISMATCHED_STYLE_SCORE = 60.0

# User style -> tribe styles that still suit the user
COMPATIBLE_STYLES = {
    LearningStyle.VISUAL: {LearningStyle.MIXED},
    LearningStyle.AUDITORY: {LearningStyle.MIXED},
    LearningStyle.READING: {LearningStyle.VISUAL, LearningStyle.MIXED},
    LearningStyle.KINESTHETIC: {LearningStyle.MIXED, LearningStyle.AUDITORY},
    LearningStyle.MIXED: {
        LearningStyle.VISUAL,
        LearningStyle.AUDITORY,
        LearningStyle.READING,
        LearningStyle.KINESTHETIC,
    },
}

BASE_PERSONALITY_SCORE = 50
EXTROVERT_MAX = 3    # introvert score below this leans extrovert
INTROVERT_MIN = 7    # introvert score above this leans introvert
PLANNER_MIN = 6
SPONTANEOUS_MAX = 4

ENGAGEMENT_MAP = {
    Commitment.CASUAL: {ActivityLevel.LOW: 90, ActivityLevel.MEDIUM: 60, ActivityLevel.HIGH: 30},
    Commitment.MODERATE: {ActivityLevel.LOW: 60, ActivityLevel.MEDIUM: 90, ActivityLevel.HIGH: 60},
    Commitment.SERIOUS: {ActivityLevel.LOW: 40, ActivityLevel.MEDIUM: 80, ActivityLevel.HIGH: 100},
    Commitment.OBSESSED: {ActivityLevel.LOW: 20, ActivityLevel.MEDIUM: 70, ActivityLevel.HIGH: 100},
}
DEFAULT_ENGAGEMENT_SCORE = 50.0

HIGH_ENGAGEMENT_MIN = 7


def _answer_weight(goal_weights: Mapping[Any, float], goal: Any) -> float:
    """Weight for ``goal``, accepting GoalTag or plain string keys."""
    if goal in goal_weights:
        return float(goal_weights[goal] or 0.0)
    return float(goal_weights.get(enum_value(goal), 0.0) or 0.0)


def calculate_goal_match(
    profile: UserProfile,
    candidate: CandidateGroup,
    goal_weights: Optional[Mapping[GoalTag, float]] = None
) -> float:
    """
    Goal alignment score.

    70 points when the tribe's goal is the user's primary goal, 40 when it
    is a secondary goal, 10 otherwise. A non-zero quiz answer weight for
    the tribe's goal adds (weight / 10) * 20 points, with the weight
    capped at 10, and the user's commitment adds up to 15. Capped at 100.
    """
    score = 0.0

    if candidate.goal == profile.primary_goal:
        score += PRIMARY_GOAL_POINTS
    elif candidate.goal in profile.secondary_goals:
        score += SECONDARY_GOAL_POINTS
    else:
        score += OTHER_GOAL_POINTS

    if goal_weights:
        answer_weight = _answer_weight(goal_weights, candidate.goal)
        if answer_weight:
            # Accumulated weights exceed 10 with full answers
            capped = min(answer_weight, MAX_ANSWER_WEIGHT)
            score += (capped / MAX_ANSWER_WEIGHT) * ANSWER_WEIGHT_MAX_POINTS

    score += COMMITMENT_BONUS.get(profile.commitment, 0)

    return min(score, 100.0)


def calculate_interest_match(user_interests: Sequence[str], tribe_interests: Sequence[str]) -> float:
    """
    Interest overlap score.

    Neutral 50 when either side has no interests. Otherwise the share of
    the user's interests present in the tribe's interests
    (case-insensitive) maps to: 100 for full overlap, [80, 100) for at
    least half, [0, 40) below half.
    """
    if not user_interests or not tribe_interests:
        return NEUTRAL_INTEREST_SCORE

    tribe_set = {str(i).lower() for i in tribe_interests}
    matches = sum(1 for interest in user_interests if str(interest).lower() in tribe_set)
    overlap_pct = matches / len(user_interests) * 100

    if overlap_pct == 100:
        return 100.0
    if overlap_pct >= 50:
        return 80 + (overlap_pct - 50) * 0.4
    return overlap_pct * 0.8


def calculate_learning_style_match(user_style: Any, tribe_style: Any) -> float:
    """
    Learning style compatibility score.

    70 when the tribe states no style or a mixed one, 100 for an exact
    match, 80 for a compatible pair and 60 otherwise.
    """
    if tribe_style is None or tribe_style == "":
        return NEUTRAL_STYLE_SCORE
    user_style = coerce_enum(LearningStyle, user_style)
    tribe_style = coerce_enum(LearningStyle, tribe_style)

    if tribe_style == LearningStyle.MIXED:
        return NEUTRAL_STYLE_SCORE

    if str(enum_value(user_style)).lower() == str(enum_value(tribe_style)).lower():
        return EXACT_STYLE_SCORE

    if tribe_style in COMPATIBLE_STYLES.get(user_style, ()):
        return COMPATIBLE_STYLE_SCORE

    return MISMATCHED_STYLE_SCORE


def calculate_personality_match(profile: UserProfile, candidate: CandidateGroup) -> float:
    """Personality compatibility score, additive from a neutral 50 and capped at 100."""
    score = BASE_PERSONALITY_SCORE
    traits = profile.personality
    activity = candidate.activity_level

    # Social energy vs. tribe activity
    if traits.introvert < EXTROVERT_MAX:
        if activity == ActivityLevel.HIGH:
            score += 20
        elif activity == ActivityLevel.MEDIUM:
            score += 10
    elif traits.introvert > INTROVERT_MIN:
        if activity in (ActivityLevel.LOW, ActivityLevel.MEDIUM):
            score += 20
    else:
        score += 15

    # Planners like published rules; spontaneous users are not penalized
    if traits.planner > PLANNER_MIN:
        if candidate.has_rules:
            score += 10
    elif traits.planner < SPONTANEOUS_MAX:
        score += 10

    if profile.experience == Experience.BEGINNER and candidate.is_verified:
        score += 15

    return min(float(score), 100.0)


def calculate_engagement_match(commitment: Any, activity_level: Any) -> float:
    """Commitment x activity level lookup; unknown combinations score 50."""
    row = ENGAGEMENT_MAP.get(commitment)
    if row is None:
        return DEFAULT_ENGAGEMENT_SCORE
    return float(row.get(activity_level, DEFAULT_ENGAGEMENT_SCORE))


def _goal_label(goal: Any) -> str:
    return str(enum_value(goal)).replace("_", " ")


def generate_reasons_to_join(
    candidate: CandidateGroup,
    goal_match: float,
    interest_match: float,
    max_reasons: int = 3
) -> List[str]:
    """
    Human-readable reasons to join, in fixed priority order.

    Goal alignment, shared interests, activity level, verified status and
    high engagement are checked in that order; the first ``max_reasons``
    that apply are kept.
    """
    reasons = []
    goal = _goal_label(candidate.goal)

    if goal_match > 80:
        reasons.append(f"Perfectly aligned with your {goal} goals")
    elif goal_match > 60:
        reasons.append(f"Supports your {goal} journey")

    if interest_match > 80:
        reasons.append("Shares your core interests and passions")

    if candidate.activity_level == ActivityLevel.HIGH:
        reasons.append("Very active community for daily engagement")
    elif candidate.activity_level == ActivityLevel.MEDIUM:
        reasons.append("Balanced activity level with consistent support")

    if candidate.is_verified:
        reasons.append("Verified and high-quality community with trusted content")

    if candidate.avg_engagement > HIGH_ENGAGEMENT_MIN:
        reasons.append("High member engagement and supportive atmosphere")

    return reasons[:max_reasons]


def compute_sub_scores(
    profile: UserProfile,
    candidate: CandidateGroup,
    goal_weights: Optional[Mapping[GoalTag, float]] = None
) -> Dict[str, float]:
    """
    Compute the five sub-scores, each clipped to [0, 100].

    Returns:
        Dictionary keyed by component name (see fusion.COMPONENTS)
    """
    return {
        "goal_match": clamp_score(calculate_goal_match(profile, candidate, goal_weights)),
        "interest_match": clamp_score(calculate_interest_match(profile.interests, candidate.interests)),
        "learning_style_match": clamp_score(
            calculate_learning_style_match(profile.learning_style, candidate.preferred_learning_style)
        ),
        "personality_match": clamp_score(calculate_personality_match(profile, candidate)),
        "engagement_match": clamp_score(
            calculate_engagement_match(profile.commitment, candidate.activity_level)
        ),
    }


def score_candidate(
    profile: UserProfile,
    candidate: CandidateGroup,
    goal_weights: Optional[Mapping[GoalTag, float]] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> MatchResult:
    """
    Score one candidate tribe for a user.

    Args:
        profile: The user's profile
        candidate: The tribe being scored
        goal_weights: Optional accumulated quiz answer weight per goal
        config: Scoring configuration (weights, thresholds, reason limit)

    Returns:
        MatchResult with combined score, tier, breakdown and reasons
    """
    sub_scores = compute_sub_scores(profile, candidate, goal_weights)
    combined = fuse_scores(
        [
            sub_scores["goal_match"],
            sub_scores["interest_match"],
            sub_scores["learning_style_match"],
            sub_scores["personality_match"],
            sub_scores["engagement_match"],
        ],
        config,
    )
    rounded = round_half_up(combined)

    breakdown = MatchBreakdown(
        goal_match=round_half_up(sub_scores["goal_match"]),
        interest_match=round_half_up(sub_scores["interest_match"]),
        learning_style_match=round_half_up(sub_scores["learning_style_match"]),
        personality_match=round_half_up(sub_scores["personality_match"]),
        engagement_match=round_half_up(sub_scores["engagement_match"]),
    )

    reasons = generate_reasons_to_join(
        candidate,
        sub_scores["goal_match"],
        sub_scores["interest_match"],
        config.max_reasons,
    )

    result = MatchResult(
        tribe_id=candidate.id,
        tribe_name=candidate.name,
        match_score=rounded,
        match_percentage=f"{rounded}%",
        recommendation=recommendation_tier(combined, config),
        match_breakdown=breakdown,
        reasons_to_join=reasons,
        combined_score=combined,
    )

    logger.debug(f"Scored tribe {candidate.id}: combined={combined:.2f}, tier={result.recommendation.value}")
    return result
