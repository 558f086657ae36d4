"""
Data structures shared by the profile builder, scorer and ranker.

Defines the closed enumerations used across the engine (goal tags,
learning styles, commitment levels, ...), the derived user profile,
the candidate group snapshot being scored, and the match result.

String inputs are coerced to the enumerations when constructing a
profile or candidate. A value outside an enumeration is kept as the
raw string so that the scorer's documented defaults apply to it.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

logger = logging.getLogger(__name__)


class GoalTag(Enum):
    """Life-goal categories used to classify tribes and weight answers."""
    HEALTH = "health"
    FITNESS = "fitness"
    LEARNING = "learning"
    CAREER = "career"
    MINDFULNESS = "mindfulness"
    RELATIONSHIPS = "relationships"
    FINANCIAL = "financial"
    CREATIVE = "creative"
    PERSONAL_GROWTH = "personal_growth"
    SPIRITUALITY = "spirituality"


class LearningStyle(Enum):
    VISUAL = "visual"
    AUDITORY = "auditory"
    READING = "reading"
    KINESTHETIC = "kinesthetic"
    MIXED = "mixed"


class Motivation(Enum):
    ACHIEVEMENT = "achievement"
    COMMUNITY = "community"
    GROWTH = "growth"
    PURPOSE = "purpose"
    AUTONOMY = "autonomy"


class Commitment(Enum):
    """Self-reported intensity of engagement."""
    CASUAL = "casual"
    MODERATE = "moderate"
    SERIOUS = "serious"
    OBSESSED = "obsessed"


class Experience(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ActivityLevel(Enum):
    """Posting cadence of a tribe."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Recommendation(Enum):
    HIGHLY_RECOMMENDED = "highly_recommended"
    RECOMMENDED = "recommended"
    MARGINAL = "marginal"


EnumValue = Union[Enum, str]


def coerce_enum(enum_cls: Type[Enum], value: Any) -> Any:
    """
    Convert a raw value to a member of ``enum_cls`` when possible.

    Strings are matched case-insensitively against the member values.
    Values that do not belong to the enumeration are returned unchanged.

    Args:
        enum_cls: Target enumeration
        value: Enum member, string, or None

    Returns:
        The matching enum member, or the original value
    """
    if value is None or isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            logger.warning(f"Unrecognized {enum_cls.__name__} value: {value!r}")
    return value


def enum_value(value: Any) -> Any:
    """Return the plain value of an enum member (identity for other values)."""
    return value.value if isinstance(value, Enum) else value


@dataclass
class PersonalityTraits:
    """
    Personality trait scores on a 0-10 scale.

    0 is the low end of the trait and 10 the high end, so an
    ``introvert`` score of 9 describes a strongly introverted user.

    Attributes:
        introvert: Introversion (0 = extrovert, 10 = introvert)
        detail_oriented: Attention to detail (0 = big picture, 10 = detail)
        planner: Planning style (0 = spontaneous, 10 = planner)
    """
    introvert: int = 5
    detail_oriented: int = 5
    planner: int = 5

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {
            "introvert": self.introvert,
            "detail_oriented": self.detail_oriented,
            "planner": self.planner,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalityTraits":
        """Create from dictionary; ``detailOriented`` is accepted for ``detail_oriented``."""
        detail = data.get("detail_oriented", data.get("detailOriented", 5))
        return cls(
            introvert=data.get("introvert", 5),
            detail_oriented=detail,
            planner=data.get("planner", 5),
        )


@dataclass
class UserProfile:
    """
    Structured profile derived from a user's quiz answers.

    The profile is ephemeral: it is rebuilt from answers on every
    scoring request and never persisted by the engine.

    Attributes:
        primary_goal: The user's main goal
        secondary_goals: Additional goals that earn partial goal credit
        interests: Free-form interest tags (compared case-insensitively)
        learning_style: Preferred learning style
        motivation: Primary motivation driver
        commitment: Commitment level
        personality: Personality trait scores
        experience: Experience level in the primary interest
        challenge_area: Free text, carried through but not scored
        preferred_community_style: Free text, carried through but not scored
        user_id: Optional identifier for the user
    """
    primary_goal: EnumValue = GoalTag.PERSONAL_GROWTH
    secondary_goals: List[EnumValue] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    learning_style: EnumValue = LearningStyle.MIXED
    motivation: EnumValue = Motivation.GROWTH
    commitment: EnumValue = Commitment.MODERATE
    personality: PersonalityTraits = field(default_factory=PersonalityTraits)
    experience: EnumValue = Experience.BEGINNER
    challenge_area: str = ""
    preferred_community_style: str = ""
    user_id: Optional[str] = None

    def __post_init__(self):
        """Convert string inputs to enums and nested dicts to dataclasses."""
        self.primary_goal = coerce_enum(GoalTag, self.primary_goal)
        self.secondary_goals = [coerce_enum(GoalTag, g) for g in (self.secondary_goals or [])]
        self.interests = list(self.interests or [])
        self.learning_style = coerce_enum(LearningStyle, self.learning_style)
        self.motivation = coerce_enum(Motivation, self.motivation)
        self.commitment = coerce_enum(Commitment, self.commitment)
        self.experience = coerce_enum(Experience, self.experience)
        if isinstance(self.personality, dict):
            self.personality = PersonalityTraits.from_dict(self.personality)
        elif self.personality is None:
            self.personality = PersonalityTraits()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with string values."""
        return {
            "user_id": self.user_id,
            "primary_goal": enum_value(self.primary_goal),
            "secondary_goals": [enum_value(g) for g in self.secondary_goals],
            "interests": list(self.interests),
            "learning_style": enum_value(self.learning_style),
            "motivation": enum_value(self.motivation),
            "commitment": enum_value(self.commitment),
            "personality": self.personality.to_dict(),
            "experience": enum_value(self.experience),
            "challenge_area": self.challenge_area,
            "preferred_community_style": self.preferred_community_style,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        """Create from dictionary."""
        return cls(
            primary_goal=data.get("primary_goal", GoalTag.PERSONAL_GROWTH),
            secondary_goals=data.get("secondary_goals") or [],
            interests=data.get("interests") or [],
            learning_style=data.get("learning_style", LearningStyle.MIXED),
            motivation=data.get("motivation", Motivation.GROWTH),
            commitment=data.get("commitment", Commitment.MODERATE),
            personality=data.get("personality") or PersonalityTraits(),
            experience=data.get("experience", Experience.BEGINNER),
            challenge_area=data.get("challenge_area") or "",
            preferred_community_style=data.get("preferred_community_style") or "",
            user_id=data.get("user_id"),
        )


@dataclass
class CandidateGroup:
    """
    Snapshot of a tribe being scored for a user.

    Attributes:
        id: Tribe identifier
        name: Display name
        goal: The tribe's primary goal
        interests: Interest tags of the tribe
        activity_level: Observed posting cadence
        preferred_learning_style: Optional learning style the tribe favors
        rules: Optional rules text (only its presence is scored)
        is_verified: Whether the tribe is verified
        avg_engagement: Average member engagement (0-10)
        members_count: Number of members
        description: Optional description, not scored
    """
    id: str
    name: str
    goal: EnumValue
    interests: List[str] = field(default_factory=list)
    activity_level: EnumValue = ActivityLevel.MEDIUM
    preferred_learning_style: Optional[EnumValue] = None
    rules: Optional[str] = None
    is_verified: bool = False
    avg_engagement: float = 5.0
    members_count: int = 0
    description: str = ""

    def __post_init__(self):
        """Validate and convert string inputs to enums if needed."""
        self.goal = coerce_enum(GoalTag, self.goal)
        self.interests = list(self.interests or [])
        self.activity_level = coerce_enum(ActivityLevel, self.activity_level)
        if self.preferred_learning_style == "":
            self.preferred_learning_style = None
        self.preferred_learning_style = coerce_enum(LearningStyle, self.preferred_learning_style)
        if self.avg_engagement is None:
            self.avg_engagement = 5.0
        if self.members_count is None:
            self.members_count = 0

    @property
    def has_rules(self) -> bool:
        """Whether the tribe publishes non-empty rules."""
        return bool(self.rules and str(self.rules).strip())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "goal": enum_value(self.goal),
            "interests": list(self.interests),
            "activity_level": enum_value(self.activity_level),
            "preferred_learning_style": enum_value(self.preferred_learning_style),
            "rules": self.rules,
            "is_verified": self.is_verified,
            "avg_engagement": self.avg_engagement,
            "members_count": self.members_count,
            "description": self.description,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CandidateGroup":
        """
        Create from a raw tribe record.

        Activity level and average engagement may be stored either at the
        top level or inside a nested ``metadata`` mapping; they default to
        ``medium`` and 5 when absent. ``goal_type`` is accepted as an alias
        for ``goal``.

        Args:
            record: Tribe record as fetched by the caller

        Returns:
            CandidateGroup instance
        """
        metadata = record.get("metadata") or {}
        activity_level = record.get("activity_level") or metadata.get("activity_level") or "medium"
        avg_engagement = record.get("avg_engagement")
        if avg_engagement is None:
            avg_engagement = metadata.get("avg_engagement")
        if avg_engagement is None:
            avg_engagement = 5.0

        return cls(
            id=str(record["id"]),
            name=record.get("name", ""),
            goal=record.get("goal") or record.get("goal_type"),
            interests=record.get("interests") or [],
            activity_level=activity_level,
            preferred_learning_style=record.get("preferred_learning_style"),
            rules=record.get("rules"),
            is_verified=bool(record.get("is_verified", False)),
            avg_engagement=float(avg_engagement),
            members_count=int(record.get("members_count") or 0),
            description=record.get("description") or "",
        )


@dataclass
class MatchBreakdown:
    """Rounded, un-weighted sub-scores (each 0-100) behind a match score."""
    goal_match: int
    interest_match: int
    learning_style_match: int
    personality_match: int
    engagement_match: int

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {
            "goal_match": self.goal_match,
            "interest_match": self.interest_match,
            "learning_style_match": self.learning_style_match,
            "personality_match": self.personality_match,
            "engagement_match": self.engagement_match,
        }


@dataclass
class MatchResult:
    """
    Scored output for one candidate tribe.

    Attributes:
        tribe_id: Candidate identifier
        tribe_name: Candidate display name
        match_score: Combined score rounded to an integer in [0, 100]
        match_percentage: Formatted score, e.g. "82%"
        recommendation: Recommendation tier
        match_breakdown: Rounded sub-scores used in the combination
        reasons_to_join: Up to three justification strings
        combined_score: Unrounded combined score, used for ranking
    """
    tribe_id: str
    tribe_name: str
    match_score: int
    match_percentage: str
    recommendation: Recommendation
    match_breakdown: MatchBreakdown
    reasons_to_join: List[str]
    combined_score: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase shape returned to API clients."""
        breakdown = self.match_breakdown
        return {
            "tribeId": self.tribe_id,
            "tribeName": self.tribe_name,
            "matchScore": self.match_score,
            "matchPercentage": self.match_percentage,
            "recommendation": self.recommendation.value,
            "matchBreakdown": {
                "goalMatch": breakdown.goal_match,
                "interestMatch": breakdown.interest_match,
                "learningStyleMatch": breakdown.learning_style_match,
                "personalityMatch": breakdown.personality_match,
                "engagementMatch": breakdown.engagement_match,
            },
            "reasonsToJoin": list(self.reasons_to_join),
        }
