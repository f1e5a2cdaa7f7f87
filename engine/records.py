"""Value objects passed into and returned from the engine.

The engine never touches the database: services fetch rows through
models/ and convert them with the from_row() helpers below.
"""
import json
from dataclasses import dataclass, field
from typing import NamedTuple, Optional


@dataclass(frozen=True)
class Learner:
    id: int
    age: int
    preferred_difficulty: str = 'Easy'
    has_premium: bool = False

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row['id'],
            age=row['age'],
            preferred_difficulty=row.get('preferred_difficulty') or 'Easy',
            has_premium=bool(row.get('has_premium')),
        )


@dataclass(frozen=True)
class ContentItem:
    id: int
    activity_type: str
    difficulty: str = 'Easy'
    min_age: int = 3
    max_age: int = 8
    prerequisites: tuple = ()
    requires_premium: bool = False
    estimated_seconds: int = 600
    is_active: bool = True
    subject_id: Optional[int] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row['id'],
            activity_type=row['activity_type'],
            difficulty=row['difficulty'],
            min_age=row['min_age'],
            max_age=row['max_age'],
            prerequisites=tuple(decode_prerequisites(row.get('prerequisites'))),
            requires_premium=bool(row['requires_premium']),
            estimated_seconds=row['estimated_seconds'],
            is_active=bool(row['is_active']),
            subject_id=row.get('subject_id'),
        )


def decode_prerequisites(raw):
    """Decode the stored prerequisite list. Bad JSON means no prerequisites."""
    if not raw:
        return []
    try:
        ids = json.loads(raw)
    except (ValueError, TypeError):
        return []
    if not isinstance(ids, list):
        return []
    return [i for i in ids if isinstance(i, int) and not isinstance(i, bool)]


@dataclass(frozen=True)
class Question:
    id: int
    question_type: str
    correct_answer: str
    points: int = 10
    hints_enabled: bool = True
    activity_id: Optional[int] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row['id'],
            question_type=row['question_type'],
            correct_answer=row['correct_answer'],
            points=row['points'],
            hints_enabled=bool(row['hints_enabled']),
            activity_id=row.get('activity_id'),
        )


@dataclass(frozen=True)
class ProgressEntry:
    """One activity result as seen by the achievement triggers."""

    activity_id: int
    stars: int
    is_first_completion: bool = False

    @classmethod
    def from_row(cls, row):
        return cls(activity_id=row['activity_id'], stars=row['stars'])


@dataclass(frozen=True)
class AnswerOutcome:
    is_correct: bool
    attempt_number: int = 1


@dataclass(frozen=True)
class SubjectStats:
    subject_id: int
    total_items: int
    completed_items: int
    average_score: float


# --- Results ---

@dataclass(frozen=True)
class AnswerCheck:
    is_correct: bool
    points_earned: int


@dataclass(frozen=True)
class StarRating:
    stars: int
    accuracy: float
    time_ratio: float
    three_star_threshold: float
    two_star_threshold: float
    first_attempt: bool = False


@dataclass(frozen=True)
class DifficultyRecommendation:
    current: str
    recommended: str
    should_adjust: bool
    confidence: float
    reasoning: str
    average_accuracy: float = 0.0
    average_attempts: float = 0.0


class UnlockStatus(NamedTuple):
    unlocked: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class PrerequisiteProgress:
    completed: tuple = ()
    missing: tuple = ()
    percentage: int = 100


@dataclass(frozen=True)
class AchievementTrigger:
    code: str
    category: str
    reason: str = ''
    details: dict = field(default_factory=dict)


@dataclass(frozen=True)
class LearningStreak:
    """Consecutive days with at least one answered question."""
    current: int = 0
    longest: int = 0
    is_active: bool = False
    days_to_next_milestone: int = 0
