"""
Ranking of candidate tribes for a user.

Scores every candidate, orders the results by unrounded combined score
(highest first) and returns the top N. Exact score ties are broken by
candidate id so that the order never depends on the input order.

The ranker performs no membership filtering: callers drop the tribes a
user already belongs to beforehand (see ``exclude_joined``).
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .fusion import DEFAULT_SCORING_CONFIG, ScoringConfig
from .schema import CandidateGroup, GoalTag, MatchResult, UserProfile
from .scorer import score_candidate

logger = logging.getLogger(__name__)


def score_candidates(
    profile: UserProfile,
    candidates: Sequence[CandidateGroup],
    goal_weights: Optional[Mapping[GoalTag, float]] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> List[MatchResult]:
    """
    Score every candidate, preserving the input order.

    Args:
        profile: The user's profile
        candidates: Candidate tribes
        goal_weights: Optional accumulated quiz answer weight per goal
        config: Scoring configuration

    Returns:
        List of MatchResult objects, one per candidate
    """
    results = []
    for candidate in candidates:
        result = score_candidate(profile, candidate, goal_weights, config)
        results.append(result)
    return results


def sort_results(results: Iterable[MatchResult]) -> List[MatchResult]:
    """Order results by combined score descending, then by tribe id."""
    return sorted(results, key=lambda r: (-r.combined_score, str(r.tribe_id)))


def rank_candidates(
    profile: UserProfile,
    candidates: Sequence[CandidateGroup],
    goal_weights: Optional[Mapping[GoalTag, float]] = None,
    limit: Optional[int] = 5,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> List[MatchResult]:
    """
    Rank candidate tribes for a user.

    Args:
        profile: The user's profile
        candidates: Candidate tribes (already filtered by the caller)
        goal_weights: Optional accumulated quiz answer weight per goal
        limit: Maximum number of results; None returns every result,
            0 or less returns none
        config: Scoring configuration

    Returns:
        Top ``limit`` MatchResult objects, best first
    """
    ranked = sort_results(score_candidates(profile, candidates, goal_weights, config))

    if limit is not None:
        ranked = ranked[:max(int(limit), 0)]

    logger.info(f"Ranked {len(candidates)} tribes, returning {len(ranked)}")
    return ranked


def exclude_joined(
    candidates: Iterable[CandidateGroup],
    joined_ids: Iterable[Any]
) -> List[CandidateGroup]:
    """Drop candidates whose id is in ``joined_ids``, preserving order."""
    joined = {str(tribe_id) for tribe_id in joined_ids}
    return [c for c in candidates if str(c.id) not in joined]


def popular_candidates(candidates: Iterable[CandidateGroup], limit: int = 5) -> List[CandidateGroup]:
    """
    Most popular tribes by member count.

    Used as the recommendation fallback when a user skips the quiz.
    Ties keep their input order.
    """
    ordered = sorted(candidates, key=lambda c: -c.members_count)
    return ordered[:max(limit, 0)]
