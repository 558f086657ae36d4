"""
Matching module for scoring and ranking candidate tribes.

This module provides the scorer that computes a MatchResult for one
(profile, tribe) pair and the ranker that orders many candidates.
"""

from .schema import (
    GoalTag,
    LearningStyle,
    Motivation,
    Commitment,
    Experience,
    ActivityLevel,
    Recommendation,
    PersonalityTraits,
    UserProfile,
    CandidateGroup,
    MatchBreakdown,
    MatchResult,
)
from .fusion import ScoringConfig, fuse_scores, recommendation_tier, create_scoring_config
from .scorer import score_candidate, compute_sub_scores
from .ranker import (
    rank_candidates,
    score_candidates,
    sort_results,
    exclude_joined,
    popular_candidates,
)

__all__ = [
    "GoalTag",
    "LearningStyle",
    "Motivation",
    "Commitment",
    "Experience",
    "ActivityLevel",
    "Recommendation",
    "PersonalityTraits",
    "UserProfile",
    "CandidateGroup",
    "MatchBreakdown",
    "MatchResult",
    "ScoringConfig",
    "fuse_scores",
    "recommendation_tier",
    "create_scoring_config",
    "score_candidate",
    "compute_sub_scores",
    "rank_candidates",
    "score_candidates",
    "sort_results",
    "exclude_joined",
    "popular_candidates",
]
