"""Shared fixtures for the tribe matching tests."""

import pytest

from tribe_matching.matching.schema import CandidateGroup
from tribe_matching.quiz.catalogue import default_catalogue


@pytest.fixture(scope="session")
def catalogue():
    """The bundled "Find Your Perfect Tribe" catalogue."""
    return default_catalogue()


@pytest.fixture
def fitness_answers():
    """Answers of a serious, extroverted, planning fitness beginner."""
    return {
        "q1": "q1_fitness",
        "q2": ["q2_workout", "q2_nutrition"],
        "q3": "q3_serious",
        "q4": "q4_kinesthetic",
        "q5": "q5_accountability",
        "q6": "q6_planner",
        "q7": "q7_achievement",
        "q9": "q9_extrovert",
        "q10": "q10_details",
        "q11": "q11_beginner",
        "q15": "q15_motivation",
    }


@pytest.fixture
def candidates():
    return [
        CandidateGroup(
            id="t1",
            name="Morning Lifters",
            goal="fitness",
            interests=["fitness-training", "nutrition"],
            activity_level="high",
            preferred_learning_style="kinesthetic",
            rules="Post your workout every week",
            is_verified=True,
            avg_engagement=8.0,
            members_count=120,
        ),
        CandidateGroup(
            id="t2",
            name="Quiet Minds",
            goal="mindfulness",
            interests=["meditation", "stress-management"],
            activity_level="low",
            members_count=300,
            avg_engagement=6.0,
        ),
        CandidateGroup(
            id="t3",
            name="Indie Builders",
            goal="career",
            interests=["programming", "entrepreneurship"],
            activity_level="medium",
            preferred_learning_style="reading",
            is_verified=True,
            avg_engagement=7.5,
            members_count=80,
        ),
        CandidateGroup(
            id="t4",
            name="Polyglots",
            goal="learning",
            interests=["language-learning"],
            activity_level="medium",
            preferred_learning_style="visual",
            members_count=300,
        ),
        CandidateGroup(
            id="t5",
            name="Sleep Well Club",
            goal="health",
            interests=["nutrition", "sleep-optimization"],
            activity_level="medium",
            preferred_learning_style="mixed",
            members_count=50,
        ),
        CandidateGroup(
            id="t6",
            name="Sketchbook Circle",
            goal="creative",
            interests=["creative-arts"],
            activity_level="low",
            preferred_learning_style="auditory",
            members_count=10,
        ),
    ]
