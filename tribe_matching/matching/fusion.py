"""
Score fusion for combining match sub-scores.

The five sub-scores are combined at the score level with fixed weights:

    combined = 0.40 * goal + 0.25 * interest + 0.15 * learning_style
             + 0.15 * personality + 0.05 * engagement

Each sub-score is clipped to [0, 100] before the weighted sum and the
combined value is clipped again afterwards. The weights and the tier
thresholds are hand-authored constants; ScoringConfig only exists so they
can be read from and written to the engine configuration.
"""

import logging
import math
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, Sequence

import numpy as np

from .schema import Recommendation

logger = logging.getLogger(__name__)

COMPONENTS = (
    "goal_match",
    "interest_match",
    "learning_style_match",
    "personality_match",
    "engagement_match",
)

DEFAULT_WEIGHTS = {
    "goal_match": 0.40,
    "interest_match": 0.25,
    "learning_style_match": 0.15,
    "personality_match": 0.15,
    "engagement_match": 0.05,
}

SCORE_MIN = 0.0
SCORE_MAX = 100.0


@dataclass(frozen=True)
class ScoringConfig:
    """
    Configuration for score fusion and ranking.

    Attributes:
        weights: Weight per sub-score (must sum to 1)
        highly_recommended_threshold: Minimum combined score for the top tier
        recommended_threshold: Minimum combined score for the middle tier
        default_limit: Number of results returned by the ranker by default
        max_reasons: Maximum number of justification strings per result
    """
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    highly_recommended_threshold: float = 75.0
    recommended_threshold: float = 60.0
    default_limit: int = 5
    max_reasons: int = 3

    def validate(self) -> None:
        """Validate configuration values."""
        missing = [c for c in COMPONENTS if c not in self.weights]
        if missing:
            raise ValueError(f"Missing weights for: {', '.join(missing)}")
        unknown = sorted(set(self.weights) - set(COMPONENTS))
        if unknown:
            raise ValueError(f"Unknown weight components: {', '.join(unknown)}")
        if any(w < 0 for w in self.weights.values()):
            raise ValueError(f"Weights must be non-negative, got {self.weights}")
        total = sum(self.weights.values())
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Weights must sum to 1, got {total}")
        if not 0 <= self.recommended_threshold <= self.highly_recommended_threshold <= 100:
            raise ValueError(
                f"Thresholds must satisfy 0 <= recommended <= highly_recommended <= 100, "
                f"got {self.recommended_threshold} and {self.highly_recommended_threshold}"
            )
        if self.default_limit < 0:
            raise ValueError(f"default_limit must be non-negative, got {self.default_limit}")
        if self.max_reasons < 0:
            raise ValueError(f"max_reasons must be non-negative, got {self.max_reasons}")

    def weight_vector(self) -> np.ndarray:
        """Weights in component order."""
        return np.array([self.weights[c] for c in COMPONENTS], dtype=float)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoringConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringConfig":
        """Create from main config dictionary."""
        scoring_config = config.get("scoring", {})
        thresholds = scoring_config.get("thresholds", {})

        return cls(
            weights=dict(scoring_config.get("weights", DEFAULT_WEIGHTS)),
            highly_recommended_threshold=thresholds.get("highly_recommended", 75.0),
            recommended_threshold=thresholds.get("recommended", 60.0),
            default_limit=scoring_config.get("default_limit", 5),
            max_reasons=scoring_config.get("max_reasons", 3),
        )


DEFAULT_SCORING_CONFIG = ScoringConfig()


def clamp_score(value: float) -> float:
    """Clip a score to [0, 100]."""
    return float(np.clip(value, SCORE_MIN, SCORE_MAX))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up."""
    return int(math.floor(value + 0.5))


def fuse_scores(sub_scores: Sequence[float], config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    """
    Weighted combination of the five sub-scores.

    Args:
        sub_scores: Sub-scores in component order (see COMPONENTS)
        config: Scoring configuration holding the weights

    Returns:
        Combined score in [0, 100]
    """
    if len(sub_scores) != len(COMPONENTS):
        raise ValueError(f"Expected {len(COMPONENTS)} sub-scores, got {len(sub_scores)}")

    clipped = np.clip(np.asarray(sub_scores, dtype=float), SCORE_MIN, SCORE_MAX)
    # Rounded to 9 places so that e.g. 0.4*70 + ... lands exactly on tier thresholds
    combined = round(float(np.dot(config.weight_vector(), clipped)), 9)
    return clamp_score(combined)


def recommendation_tier(combined: float, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> Recommendation:
    """Map an unrounded combined score to its recommendation tier."""
    if combined >= config.highly_recommended_threshold:
        return Recommendation.HIGHLY_RECOMMENDED
    if combined >= config.recommended_threshold:
        return Recommendation.RECOMMENDED
    return Recommendation.MARGINAL


def create_scoring_config(config: Dict[str, Any]) -> ScoringConfig:
    """
    Factory function to create a validated ScoringConfig from config.

    Args:
        config: Main configuration dictionary

    Returns:
        Validated ScoringConfig instance
    """
    scoring_config = ScoringConfig.from_config(config)
    scoring_config.validate()
    logger.info(f"Initialized scoring with weights={scoring_config.weights}")
    return scoring_config
