"""
Tribe recommendations from raw quiz answers.

This module wires the engine's pieces together:
1. Builds a UserProfile from the user's quiz answers
2. Extracts the accumulated goal weights of the selected options
3. Drops the tribes the user already belongs to
4. Scores and ranks the remaining candidates

The engine holds only read-only state (the quiz catalogue and the
scoring configuration), so one instance can serve every request.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .configs.loader import (
    get_config_value,
    load_config,
    resolve_path,
    setup_logging,
    validate_config,
)
from .matching.fusion import ScoringConfig, create_scoring_config
from .matching.ranker import exclude_joined, popular_candidates, rank_candidates
from .matching.schema import CandidateGroup, GoalTag, MatchResult, UserProfile, enum_value
from .profiling.answer_weights import extract_goal_weights
from .profiling.profile_builder import build_profile
from .quiz.catalogue import QuizCatalogue, default_catalogue, load_catalogue

logger = logging.getLogger(__name__)


@dataclass
class Recommendations:
    """
    Output of one recommendation request.

    Attributes:
        profile: Profile built from the answers
        goal_weights: Accumulated answer weight per goal
        results: Ranked match results, best first
    """
    profile: UserProfile
    goal_weights: Dict[GoalTag, float]
    results: List[MatchResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "goal_weights": {enum_value(g): w for g, w in self.goal_weights.items()},
            "results": [r.to_dict() for r in self.results],
        }


class TribeMatchingEngine:
    """
    Recommendation engine for matching users to tribes.

    Attributes:
        catalogue: Quiz catalogue used to interpret answers
        scoring_config: Weights, tier thresholds and limits
    """

    def __init__(
        self,
        catalogue: Optional[QuizCatalogue] = None,
        scoring_config: Optional[ScoringConfig] = None
    ):
        """
        Initialize the engine.

        Args:
            catalogue: Quiz catalogue (the bundled quiz when omitted)
            scoring_config: Scoring configuration (defaults when omitted)
        """
        self.catalogue = catalogue if catalogue is not None else default_catalogue()
        self.scoring_config = scoring_config if scoring_config is not None else ScoringConfig()
        logger.info(
            f"Initialized TribeMatchingEngine with {self.catalogue.total_questions} questions"
        )

    def build_profile(self, answers: Mapping[str, Any], user_id: Optional[str] = None) -> UserProfile:
        """Build a UserProfile from raw quiz answers."""
        return build_profile(answers, self.catalogue, user_id=user_id)

    def extract_goal_weights(self, answers: Mapping[str, Any]) -> Dict[GoalTag, float]:
        """Accumulate goal weights from the selected options."""
        return extract_goal_weights(answers, self.catalogue)

    def _resolve_limit(self, limit: Optional[int]) -> int:
        return self.scoring_config.default_limit if limit is None else limit

    def rank_candidates(
        self,
        profile: UserProfile,
        candidates: Sequence[CandidateGroup],
        goal_weights: Optional[Mapping[GoalTag, float]] = None,
        limit: Optional[int] = None
    ) -> List[MatchResult]:
        """
        Rank candidates with the engine's scoring configuration.

        Args:
            profile: The user's profile
            candidates: Candidate tribes
            goal_weights: Optional accumulated quiz answer weight per goal
            limit: Maximum number of results (the configured default when None)

        Returns:
            Ranked MatchResult objects, best first
        """
        return rank_candidates(
            profile,
            candidates,
            goal_weights,
            limit=self._resolve_limit(limit),
            config=self.scoring_config,
        )

    def recommend(
        self,
        answers: Mapping[str, Any],
        candidates: Iterable[CandidateGroup],
        joined_ids: Iterable[Any] = (),
        limit: Optional[int] = None,
        user_id: Optional[str] = None
    ) -> Recommendations:
        """
        Recommend tribes for a user from their quiz answers.

        Args:
            answers: Mapping of question id to option id or list of option ids
            candidates: Candidate tribes
            joined_ids: Ids of tribes the user already belongs to
            limit: Maximum number of results (the configured default when None)
            user_id: Optional identifier stored on the profile

        Returns:
            Recommendations with the profile, goal weights and ranked results
        """
        profile = self.build_profile(answers, user_id=user_id)
        goal_weights = self.extract_goal_weights(answers)
        remaining = exclude_joined(candidates, joined_ids)
        results = self.rank_candidates(profile, remaining, goal_weights, limit)

        logger.info(
            f"Recommended {len(results)} tribes for user {user_id or '<anonymous>'} "
            f"from {len(remaining)} candidates"
        )
        return Recommendations(profile=profile, goal_weights=goal_weights, results=results)

    def popular(
        self,
        candidates: Iterable[CandidateGroup],
        joined_ids: Iterable[Any] = (),
        limit: Optional[int] = None
    ) -> List[CandidateGroup]:
        """Most popular tribes the user has not joined, for users who skip the quiz."""
        remaining = exclude_joined(candidates, joined_ids)
        return popular_candidates(remaining, limit=self._resolve_limit(limit))


def create_engine(config_path: Optional[str] = None) -> TribeMatchingEngine:
    """
    Factory function to create a TribeMatchingEngine from a config file.

    Args:
        config_path: Path to the YAML configuration (the bundled default
            when omitted)

    Returns:
        Configured TribeMatchingEngine instance

    Raises:
        ValueError: If the scoring section is invalid
    """
    config = load_config(config_path)

    for issue in validate_config(config):
        logger.warning(f"Config issue: {issue}")

    setup_logging(str(get_config_value(config, "global.log_level", "INFO")))

    catalogue_path = get_config_value(config, "quiz.catalogue_path")
    if catalogue_path:
        catalogue = load_catalogue(resolve_path(config_path, catalogue_path))
    else:
        catalogue = default_catalogue()

    scoring_config = create_scoring_config(config)
    return TribeMatchingEngine(catalogue, scoring_config)
