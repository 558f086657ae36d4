"""Profiling module: quiz answers to user profile and goal weights."""

from .profile_builder import build_profile, DEFAULT_QUESTION_IDS
from .answer_weights import extract_goal_weights, normalize_goal_weights, empty_goal_weights

__all__ = [
    "build_profile",
    "DEFAULT_QUESTION_IDS",
    "extract_goal_weights",
    "normalize_goal_weights",
    "empty_goal_weights",
]
