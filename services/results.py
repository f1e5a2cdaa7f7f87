"""Result records returned by the service layer.

Expected business outcomes (incorrect, locked) are ordinary results.
Missing learners, activities or questions come back as a Failure.
"""
from dataclasses import dataclass, field
from typing import Optional

from config.settings import VALIDATION_DEFAULTS

NOT_FOUND = 'not_found'
INVALID = 'invalid'


@dataclass(frozen=True)
class Failure:
    kind: str
    message: str


def not_found(what, ident):
    return Failure(NOT_FOUND, f'{what} {ident} not found')


def is_duration(value, limit=VALIDATION_DEFAULTS['max_time_seconds']):
    """True for a number of seconds between 0 and limit."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return 0 <= value <= limit


@dataclass(frozen=True)
class SubmittedAnswer:
    question_id: int
    answer: object
    time_spent_seconds: float = 0


@dataclass(frozen=True)
class AnswerResult:
    question_id: int
    is_correct: bool
    points_earned: int
    attempt_number: int
    failed_attempts: int
    hint_available: bool
    feedback: str = ''
    explanation: Optional[str] = None


@dataclass(frozen=True)
class AwardedAchievement:
    id: int
    achievement_id: int
    code: str
    category: str
    name: str
    earned_at: str
    celebrated: bool = False
    description: Optional[str] = None
    celebration_message: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row['id'],
            achievement_id=row['achievement_id'],
            code=row['code'],
            category=row['category'],
            name=row['name'],
            earned_at=row['earned_at'],
            celebrated=bool(row['celebrated']),
            description=row.get('description'),
            celebration_message=row.get('celebration_message'),
        )


@dataclass(frozen=True)
class ActivityResult:
    activity_id: int
    learner_id: int
    correct_answers: int
    total_questions: int
    accuracy_percentage: float
    stars: int
    time_ratio: float
    total_time_seconds: float
    is_first_completion: bool
    completion_message: str
    question_results: list = field(default_factory=list)
    new_achievements: list = field(default_factory=list)
    newly_unlocked: list = field(default_factory=list)


@dataclass(frozen=True)
class UnlockReport:
    activity_id: int
    unlocked: bool
    reason: Optional[str] = None
    missing_prerequisites: tuple = ()
    progress_percentage: int = 100


@dataclass(frozen=True)
class DifficultyReport:
    learner_id: int
    current: str
    recommended: str
    should_adjust: bool
    confidence: float
    reasoning: str
    sample_size: int = 0
    auto_applied: bool = False


@dataclass(frozen=True)
class SubjectProgress:
    learner_id: int
    subject_id: int
    subject_name: str
    total_activities: int = 0
    completed_activities: int = 0
    completion_percentage: float = 0.0
    average_stars: float = 0.0
    last_completed_at: Optional[str] = None


@dataclass(frozen=True)
class StreakReport:
    learner_id: int
    current_streak: int
    longest_streak: int
    is_active: bool
    days_to_next_milestone: int


@dataclass(frozen=True)
class NextActivity:
    learner_id: int
    target_difficulty: str
    activity_id: Optional[int] = None
    title: Optional[str] = None
    subject_id: Optional[int] = None
    difficulty: Optional[str] = None
