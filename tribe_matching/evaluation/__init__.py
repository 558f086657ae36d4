"""Evaluation module for ranking diagnostics."""

from .metrics import (
    compute_score_distribution_stats,
    count_tiers,
    check_tier_consistency,
    is_ranked,
    RankingReport,
    create_ranking_report
)

__all__ = [
    "compute_score_distribution_stats",
    "count_tiers",
    "check_tier_consistency",
    "is_ranked",
    "RankingReport",
    "create_ranking_report"
]
