"""
Diagnostics for ranked match results.

There is no ground truth for which tribe a user should join, so the
report only describes how a ranking behaves:
1. Combined score distribution
2. Recommendation tier counts
3. Sanity checks (tiers agree with the thresholds, results are ordered)

Nothing here claims that a ranking is correct for a user.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from ..matching.fusion import DEFAULT_SCORING_CONFIG, ScoringConfig, recommendation_tier
from ..matching.schema import MatchResult, Recommendation

logger = logging.getLogger(__name__)

DEFAULT_QUANTILES = (0.1, 0.25, 0.5, 0.75, 0.9)


@dataclass
class ScoreDistributionStats:
    """Statistics about the combined score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g. {"p10": 42.0, "p50": 61.5, "p90": 83.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class TierConsistencyCheck:
    """Results whose tier disagrees with the configured thresholds."""
    n_checked: int
    n_violations: int
    violating_ids: List[str] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return self.n_violations == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_checked": int(self.n_checked),
            "n_violations": int(self.n_violations),
            "is_consistent": self.is_consistent,
            "violating_ids": list(self.violating_ids)
        }


@dataclass
class RankingReport:
    """
    Diagnostic report for one ranked result list.

    Attributes:
        n_results: Number of results in the ranking
        distribution_stats: Combined score statistics
        tier_counts: Number of results per recommendation tier
        tier_check: Tier consistency check
        is_sorted: Whether results are ordered by combined score, then id
    """
    n_results: int
    distribution_stats: ScoreDistributionStats
    tier_counts: Dict[str, int]
    tier_check: TierConsistencyCheck
    is_sorted: bool
    results: List[MatchResult] = field(default_factory=list, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_results": int(self.n_results),
            "distribution_stats": self.distribution_stats.to_dict(),
            "tier_counts": dict(self.tier_counts),
            "tier_check": self.tier_check.to_dict(),
            "is_sorted": bool(self.is_sorted)
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per result with the score, tier and sub-scores."""
        rows = []
        for rank, result in enumerate(self.results, start=1):
            row = {
                "rank": rank,
                "tribe_id": result.tribe_id,
                "tribe_name": result.tribe_name,
                "combined_score": result.combined_score,
                "match_score": result.match_score,
                "recommendation": result.recommendation.value,
            }
            row.update(result.match_breakdown.to_dict())
            rows.append(row)
        columns = [
            "rank", "tribe_id", "tribe_name", "combined_score", "match_score", "recommendation",
            "goal_match", "interest_match", "learning_style_match", "personality_match",
            "engagement_match",
        ]
        return pd.DataFrame(rows, columns=columns)

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved ranking report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Ranking Report ({self.n_results} results)",
            "=" * 50,
            "",
            "Combined Score Distribution:",
            f"  Mean: {self.distribution_stats.mean:.2f}",
            f"  Std:  {self.distribution_stats.std:.2f}",
            f"  Min:  {self.distribution_stats.min:.2f}",
            f"  Max:  {self.distribution_stats.max:.2f}",
        ]

        for q_name, q_value in self.distribution_stats.quantiles.items():
            lines.append(f"  {q_name}: {q_value:.2f}")

        lines.extend(["", "Tiers:"])
        for tier, count in self.tier_counts.items():
            lines.append(f"  {tier}: {count}")

        lines.extend([
            "",
            "Sanity Checks:",
            f"  Tiers consistent: {self.tier_check.is_consistent}",
            f"  Sorted: {self.is_sorted}",
        ])

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: Sequence[float] = DEFAULT_QUANTILES
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for combined scores.

    Args:
        scores: Combined scores (0-100)
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance (all zeros for an empty input)
    """
    values = np.asarray(scores, dtype=float)
    if values.size == 0:
        return ScoreDistributionStats(
            mean=0.0,
            std=0.0,
            min=0.0,
            max=0.0,
            quantiles={f"p{int(round(q * 100))}": 0.0 for q in quantiles}
        )

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(values, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(values)),
        std=float(np.std(values)),
        min=float(np.min(values)),
        max=float(np.max(values)),
        quantiles=quantile_dict
    )


def count_tiers(results: Sequence[MatchResult]) -> Dict[str, int]:
    """Number of results per tier; every tier is present."""
    counts = {tier.value: 0 for tier in Recommendation}
    for result in results:
        counts[result.recommendation.value] += 1
    return counts


def check_tier_consistency(
    results: Sequence[MatchResult],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> TierConsistencyCheck:
    """
    Recompute each result's tier from its unrounded score and compare.

    Args:
        results: Scored results
        config: Scoring configuration holding the tier thresholds

    Returns:
        TierConsistencyCheck instance
    """
    violating = [
        str(r.tribe_id) for r in results
        if recommendation_tier(r.combined_score, config) != r.recommendation
    ]
    if violating:
        logger.warning(f"{len(violating)} results have a tier that disagrees with their score")

    return TierConsistencyCheck(
        n_checked=len(results),
        n_violations=len(violating),
        violating_ids=violating
    )


def is_ranked(results: Sequence[MatchResult]) -> bool:
    """Whether results are ordered by combined score descending, then tribe id."""
    keys = [(-r.combined_score, str(r.tribe_id)) for r in results]
    return all(a <= b for a, b in zip(keys, keys[1:]))


def create_ranking_report(
    results: Sequence[MatchResult],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    quantiles: Sequence[float] = DEFAULT_QUANTILES
) -> RankingReport:
    """
    Create a complete ranking report.

    Args:
        results: Ranked results (as returned by rank_candidates)
        config: Scoring configuration used to produce them
        quantiles: Quantiles to compute

    Returns:
        RankingReport instance
    """
    results = list(results)
    dist_stats = compute_score_distribution_stats([r.combined_score for r in results], quantiles)

    report = RankingReport(
        n_results=len(results),
        distribution_stats=dist_stats,
        tier_counts=count_tiers(results),
        tier_check=check_tier_consistency(results, config),
        is_sorted=is_ranked(results),
        results=results
    )
    logger.info(f"Created ranking report for {len(results)} results")
    return report
