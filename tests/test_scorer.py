"""
Tests for the match scorer.

Covers each sub-score rule, score fusion, tiers and reasons, plus the
determinism and range properties of score_candidate.
"""

import itertools

import pytest

from tribe_matching.matching.fusion import (
    ScoringConfig,
    fuse_scores,
    recommendation_tier,
    round_half_up,
)
from tribe_matching.matching.schema import (
    ActivityLevel,
    CandidateGroup,
    Commitment,
    GoalTag,
    LearningStyle,
    PersonalityTraits,
    Recommendation,
    UserProfile,
)
from tribe_matching.matching.scorer import (
    calculate_engagement_match,
    calculate_goal_match,
    calculate_interest_match,
    calculate_learning_style_match,
    calculate_personality_match,
    generate_reasons_to_join,
    score_candidate,
)
from tribe_matching.profiling.answer_weights import extract_goal_weights
from tribe_matching.profiling.profile_builder import build_profile


def make_candidate(**overrides):
    fields = {"id": "c1", "name": "Tribe", "goal": "personal_growth"}
    fields.update(overrides)
    return CandidateGroup(**fields)


class TestGoalMatch:
    """Tests for the goal alignment sub-score."""

    def test_primary_goal_obsessed_without_weights(self):
        profile = UserProfile(primary_goal=GoalTag.FITNESS, commitment=Commitment.OBSESSED)
        assert calculate_goal_match(profile, make_candidate(goal="fitness")) == 85

    def test_secondary_goal(self):
        profile = UserProfile(
            primary_goal=GoalTag.CAREER,
            secondary_goals=["fitness"],
            commitment=Commitment.CASUAL,
        )
        assert calculate_goal_match(profile, make_candidate(goal="fitness")) == 40

    def test_other_goal(self):
        profile = UserProfile(primary_goal=GoalTag.CAREER, commitment=Commitment.SERIOUS)
        assert calculate_goal_match(profile, make_candidate(goal="creative")) == 20

    def test_answer_weight_bonus(self):
        profile = UserProfile(primary_goal=GoalTag.FITNESS, commitment=Commitment.MODERATE)
        weights = {GoalTag.FITNESS: 10.0}
        assert calculate_goal_match(profile, make_candidate(goal="fitness"), weights) == 95

    def test_answer_weight_string_keys(self):
        profile = UserProfile(primary_goal=GoalTag.FITNESS, commitment=Commitment.CASUAL)
        assert calculate_goal_match(profile, make_candidate(goal="fitness"), {"fitness": 5}) == 80

    def test_capped_at_100(self):
        profile = UserProfile(primary_goal=GoalTag.FITNESS, commitment=Commitment.OBSESSED)
        weights = {GoalTag.FITNESS: 34.0}
        assert calculate_goal_match(profile, make_candidate(goal="fitness"), weights) == 100

    def test_accumulated_weight_bonus_capped(self):
        profile = UserProfile(primary_goal=GoalTag.CAREER, commitment=Commitment.CASUAL)
        weights = {GoalTag.FITNESS: 72.0}
        assert calculate_goal_match(profile, make_candidate(goal="fitness"), weights) == 30

    def test_full_answers_keep_primary_goal_ahead(self, catalogue, fitness_answers, candidates):
        profile = build_profile(fitness_answers, catalogue)
        weights = extract_goal_weights(fitness_answers, catalogue)
        goal_scores = {c.id: calculate_goal_match(profile, c, weights) for c in candidates}

        assert goal_scores["t1"] == 100
        assert goal_scores["t3"] == 40
        assert goal_scores["t4"] == 40
        assert goal_scores["t5"] == 40
        assert all(score <= 40 for tribe_id, score in goal_scores.items() if tribe_id != "t1")

    def test_unknown_commitment_gets_no_bonus(self):
        profile = UserProfile(primary_goal=GoalTag.FITNESS, commitment="extreme")
        assert calculate_goal_match(profile, make_candidate(goal="fitness")) == 70


class TestInterestMatch:
    """Tests for the interest overlap sub-score."""

    def test_half_overlap_boundary(self):
        assert calculate_interest_match(["fitness", "reading"], ["fitness"]) == 80

    def test_full_overlap(self):
        assert calculate_interest_match(["fitness"], ["fitness", "yoga"]) == 100

    def test_case_insensitive(self):
        assert calculate_interest_match(["Fitness"], ["FITNESS"]) == 100

    def test_empty_profile_interests(self):
        assert calculate_interest_match([], ["fitness"]) == 50

    def test_empty_tribe_interests(self):
        assert calculate_interest_match(["fitness"], []) == 50

    def test_low_overlap(self):
        score = calculate_interest_match(["a", "b", "c", "d"], ["a"])
        assert score == pytest.approx(20.0)

    def test_no_overlap(self):
        assert calculate_interest_match(["a"], ["b"]) == 0


class TestLearningStyleMatch:
    """Tests for the learning style sub-score."""

    @pytest.mark.parametrize("user_style, tribe_style, expected", [
        (LearningStyle.VISUAL, None, 70),
        (LearningStyle.VISUAL, LearningStyle.MIXED, 70),
        (LearningStyle.VISUAL, LearningStyle.VISUAL, 100),
        (LearningStyle.READING, LearningStyle.VISUAL, 80),
        (LearningStyle.KINESTHETIC, LearningStyle.AUDITORY, 80),
        (LearningStyle.MIXED, LearningStyle.READING, 80),
        (LearningStyle.VISUAL, LearningStyle.READING, 60),
        (LearningStyle.AUDITORY, LearningStyle.KINESTHETIC, 60),
    ])
    def test_style_pairs(self, user_style, tribe_style, expected):
        assert calculate_learning_style_match(user_style, tribe_style) == expected

    @pytest.mark.parametrize("user_style, tribe_style, expected", [
        ("visual", "mixed", 70),
        ("visual", "", 70),
        ("reading", "visual", 80),
        ("MIXED", "Kinesthetic", 80),
        ("VISUAL", "visual", 100),
        ("visual", "reading", 60),
    ])
    def test_plain_string_styles(self, user_style, tribe_style, expected):
        assert calculate_learning_style_match(user_style, tribe_style) == expected


class TestPersonalityMatch:
    """Tests for the personality sub-score."""

    def test_extrovert_planner_beginner(self):
        profile = UserProfile(personality=PersonalityTraits(introvert=2, planner=8))
        candidate = make_candidate(activity_level="high", rules="Be kind", is_verified=True)
        assert calculate_personality_match(profile, candidate) == 95

    def test_extrovert_medium_activity(self):
        profile = UserProfile(personality=PersonalityTraits(introvert=1, planner=5), experience="advanced")
        assert calculate_personality_match(profile, make_candidate(activity_level="medium")) == 60

    def test_introvert_low_activity(self):
        profile = UserProfile(personality=PersonalityTraits(introvert=9, planner=5), experience="advanced")
        assert calculate_personality_match(profile, make_candidate(activity_level="low")) == 70

    def test_introvert_high_activity(self):
        profile = UserProfile(personality=PersonalityTraits(introvert=9, planner=5), experience="advanced")
        assert calculate_personality_match(profile, make_candidate(activity_level="high")) == 50

    def test_ambivert_spontaneous(self):
        profile = UserProfile(personality=PersonalityTraits(introvert=5, planner=2), experience="advanced")
        assert calculate_personality_match(profile, make_candidate()) == 75

    def test_planner_without_rules(self):
        profile = UserProfile(personality=PersonalityTraits(introvert=5, planner=8), experience="advanced")
        assert calculate_personality_match(profile, make_candidate(rules="   ")) == 65


class TestEngagementMatch:
    """Tests for the engagement sub-score."""

    def test_serious_high(self):
        assert calculate_engagement_match(Commitment.SERIOUS, ActivityLevel.HIGH) == 100

    def test_casual_high(self):
        assert calculate_engagement_match(Commitment.CASUAL, ActivityLevel.HIGH) == 30

    def test_unknown_values(self):
        assert calculate_engagement_match("extreme", ActivityLevel.LOW) == 50
        assert calculate_engagement_match(Commitment.MODERATE, "frantic") == 50


class TestFusion:
    """Tests for weighted fusion, rounding and tiers."""

    def test_weighted_sum(self):
        assert fuse_scores([75, 50, 70, 65, 90]) == pytest.approx(67.25)

    def test_clips_inputs_and_output(self):
        assert fuse_scores([150, 100, 100, 100, 100]) == 100.0
        assert fuse_scores([-10, 0, 0, 0, 0]) == 0.0

    def test_wrong_length_raises(self):
        with pytest.raises(ValueError):
            fuse_scores([1, 2, 3])

    @pytest.mark.parametrize("value, expected", [(67.25, 67), (74.5, 75), (2.5, 3), (0.49, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("combined, tier", [
        (75.0, Recommendation.HIGHLY_RECOMMENDED),
        (74.99, Recommendation.RECOMMENDED),
        (60.0, Recommendation.RECOMMENDED),
        (59.99, Recommendation.MARGINAL),
    ])
    def test_tier_thresholds(self, combined, tier):
        assert recommendation_tier(combined) == tier

    def test_invalid_weights_rejected(self):
        config = ScoringConfig(weights={
            "goal_match": 0.5,
            "interest_match": 0.25,
            "learning_style_match": 0.15,
            "personality_match": 0.15,
            "engagement_match": 0.05,
        })
        with pytest.raises(ValueError):
            config.validate()

    def test_inverted_thresholds_rejected(self):
        with pytest.raises(ValueError):
            ScoringConfig(highly_recommended_threshold=50, recommended_threshold=60).validate()


class TestReasons:
    """Tests for reasons to join."""

    def test_capped_at_three_in_priority_order(self):
        candidate = make_candidate(goal="fitness", activity_level="high", is_verified=True, avg_engagement=9)
        reasons = generate_reasons_to_join(candidate, goal_match=90, interest_match=100)
        assert reasons == [
            "Perfectly aligned with your fitness goals",
            "Shares your core interests and passions",
            "Very active community for daily engagement",
        ]

    def test_goal_label_is_humanized(self):
        reasons = generate_reasons_to_join(make_candidate(activity_level="low"), goal_match=70, interest_match=0)
        assert reasons == ["Supports your personal growth journey"]

    def test_no_reasons(self):
        assert generate_reasons_to_join(make_candidate(activity_level="low"), 10, 10) == []

    def test_missing_engagement_defaults(self):
        candidate = make_candidate(activity_level="low", avg_engagement=None, members_count=None)
        assert candidate.avg_engagement == 5.0
        assert candidate.members_count == 0
        assert generate_reasons_to_join(candidate, 10, 10) == []


def test_profile_from_dict_accepts_camel_case_traits():
    profile = UserProfile.from_dict({
        "primary_goal": "fitness",
        "personality": {"introvert": 2, "detailOriented": 9, "planner": 7},
    })
    assert profile.personality == PersonalityTraits(introvert=2, detail_oriented=9, planner=7)


class TestScoreCandidate:
    """Tests for the full score of one candidate."""

    def test_default_profile(self):
        result = score_candidate(UserProfile(), make_candidate(activity_level="medium"))

        assert result.combined_score == pytest.approx(67.25)
        assert result.match_score == 67
        assert result.match_percentage == "67%"
        assert result.recommendation == Recommendation.RECOMMENDED
        assert result.match_breakdown.to_dict() == {
            "goal_match": 75,
            "interest_match": 50,
            "learning_style_match": 70,
            "personality_match": 65,
            "engagement_match": 90,
        }
        assert result.reasons_to_join == [
            "Supports your personal growth journey",
            "Balanced activity level with consistent support",
        ]

    def test_to_dict_shape(self):
        data = score_candidate(UserProfile(), make_candidate()).to_dict()
        assert data["tribeId"] == "c1"
        assert data["recommendation"] == "recommended"
        assert set(data["matchBreakdown"]) == {
            "goalMatch", "interestMatch", "learningStyleMatch", "personalityMatch", "engagementMatch",
        }

    def test_deterministic(self, candidates):
        profile = UserProfile(primary_goal="fitness", interests=["nutrition"], commitment="serious")
        for candidate in candidates:
            first = score_candidate(profile, candidate, {"fitness": 7})
            second = score_candidate(profile, candidate, {"fitness": 7})
            assert first == second

    def test_scores_stay_in_range(self, candidates):
        commitments = list(Commitment) + ["unknown"]
        traits = [PersonalityTraits(0, 0, 0), PersonalityTraits(10, 10, 10), PersonalityTraits()]
        for commitment, personality, candidate in itertools.product(commitments, traits, candidates):
            profile = UserProfile(
                primary_goal=candidate.goal,
                interests=["nutrition", "meditation"],
                commitment=commitment,
                personality=personality,
            )
            result = score_candidate(profile, candidate, {g: 50.0 for g in GoalTag})
            assert 0 <= result.match_score <= 100
            assert 0 <= result.combined_score <= 100
            for value in result.match_breakdown.to_dict().values():
                assert 0 <= value <= 100
            assert len(result.reasons_to_join) <= 3

    def test_tier_monotonic_in_score(self, candidates):
        order = {
            Recommendation.MARGINAL: 0,
            Recommendation.RECOMMENDED: 1,
            Recommendation.HIGHLY_RECOMMENDED: 2,
        }
        profile = UserProfile(primary_goal="fitness", interests=["nutrition"], commitment="serious")
        results = sorted(
            (score_candidate(profile, c) for c in candidates),
            key=lambda r: r.combined_score,
        )
        tiers = [order[r.recommendation] for r in results]
        assert tiers == sorted(tiers)
