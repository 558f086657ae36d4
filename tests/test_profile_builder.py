"""Tests for building user profiles from quiz answers."""

from tribe_matching.matching.schema import (
    Commitment,
    Experience,
    GoalTag,
    LearningStyle,
    Motivation,
    UserProfile,
)
from tribe_matching.profiling.profile_builder import build_profile
from tribe_matching.quiz.catalogue import QuizCatalogue


def test_full_answers(catalogue, fitness_answers):
    profile = build_profile(fitness_answers, catalogue, user_id="u1")

    assert profile.user_id == "u1"
    assert profile.primary_goal == GoalTag.FITNESS
    assert profile.interests == ["fitness-training", "nutrition"]
    assert profile.commitment == Commitment.SERIOUS
    assert profile.learning_style == LearningStyle.KINESTHETIC
    assert profile.motivation == Motivation.ACHIEVEMENT
    assert profile.experience == Experience.BEGINNER
    assert profile.personality.introvert == 2
    assert profile.personality.detail_oriented == 8
    assert profile.personality.planner == 8
    assert profile.challenge_area == "q15_motivation"
    assert profile.preferred_community_style == "q5_accountability"


def test_empty_answers_use_defaults(catalogue):
    profile = build_profile({}, catalogue)

    assert profile.primary_goal == GoalTag.PERSONAL_GROWTH
    assert profile.interests == []
    assert profile.commitment == Commitment.MODERATE
    assert profile.learning_style == LearningStyle.MIXED
    assert profile.motivation == Motivation.GROWTH
    assert profile.experience == Experience.BEGINNER
    assert profile.personality.to_dict() == {"introvert": 5, "detail_oriented": 5, "planner": 5}
    assert profile.challenge_area == ""
    assert profile.preferred_community_style == ""


def test_unrecognized_options_fall_back(catalogue):
    profile = build_profile({"q1": "q1_bogus", "q3": "q3_unknown", "q9": "q9_other"}, catalogue)

    assert profile.primary_goal == GoalTag.PERSONAL_GROWTH
    assert profile.commitment == Commitment.MODERATE
    assert profile.personality.introvert == 5


def test_purpose_maps_to_personal_growth(catalogue):
    assert build_profile({"q1": "q1_purpose"}, catalogue).primary_goal == GoalTag.PERSONAL_GROWTH


def test_list_answer_for_single_choice_uses_first(catalogue):
    profile = build_profile({"q1": ["q1_career", "q1_health"]}, catalogue)
    assert profile.primary_goal == GoalTag.CAREER


def test_single_id_for_multiple_choice(catalogue):
    profile = build_profile({"q2": "q2_sleep"}, catalogue)
    assert profile.interests == ["sleep-optimization"]


def test_unmapped_interests_dropped(catalogue):
    profile = build_profile({"q2": ["q2_meditation", "q2_bogus"]}, catalogue)
    assert profile.interests == ["meditation"]


def test_unknown_questions_ignored(catalogue):
    profile = build_profile({"q42": "anything", "q1": "q1_financial"}, catalogue)
    assert profile.primary_goal == GoalTag.FINANCIAL


def test_without_catalogue_uses_default_question_ids(fitness_answers):
    profile = build_profile(fitness_answers)
    assert profile.primary_goal == GoalTag.FITNESS
    assert profile.commitment == Commitment.SERIOUS


def test_designated_question_located_by_category():
    catalogue = QuizCatalogue.from_dict({
        "questions": [{
            "id": "goal",
            "type": "single_choice",
            "category": "primary_goal",
            "options": [{"id": "q1_health", "text": "Health", "value": 10}],
        }]
    })
    profile = build_profile({"goal": "q1_health"}, catalogue)
    assert profile.primary_goal == GoalTag.HEALTH


def test_profile_coerces_strings():
    profile = UserProfile(primary_goal="Fitness", commitment="serious", learning_style="VISUAL")
    assert profile.primary_goal == GoalTag.FITNESS
    assert profile.commitment == Commitment.SERIOUS
    assert profile.learning_style == LearningStyle.VISUAL


def test_profile_keeps_unknown_values():
    profile = UserProfile(commitment="extreme")
    assert profile.commitment == "extreme"


def test_profile_dict_round_trip(catalogue, fitness_answers):
    profile = build_profile(fitness_answers, catalogue)
    restored = UserProfile.from_dict(profile.to_dict())
    assert restored == profile
