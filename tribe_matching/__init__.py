"""
Tribe Matching Engine

This package recommends community groups ("tribes") to a user from
their answers to a short onboarding quiz.

Key Design Decisions:
- Answers are mapped to a structured profile through fixed lookup tables
- Five hand-authored sub-scores are fused with fixed weights
- Ranking is deterministic: exact score ties are broken by tribe id
- No learned model, persistence or I/O beyond reading YAML reference data
"""

from .matching.schema import CandidateGroup, GoalTag, MatchResult, UserProfile
from .matching.scorer import score_candidate
from .matching.ranker import rank_candidates
from .profiling.profile_builder import build_profile
from .profiling.answer_weights import extract_goal_weights
from .quiz.catalogue import QuizCatalogue, default_catalogue, load_catalogue
from .engine import TribeMatchingEngine, Recommendations, create_engine

__version__ = "1.0.0"

__all__ = [
    "CandidateGroup",
    "GoalTag",
    "MatchResult",
    "UserProfile",
    "score_candidate",
    "rank_candidates",
    "build_profile",
    "extract_goal_weights",
    "QuizCatalogue",
    "default_catalogue",
    "load_catalogue",
    "TribeMatchingEngine",
    "Recommendations",
    "create_engine",
]
