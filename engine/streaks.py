"""Daily learning streaks.

A day counts when the learner answered at least one question on it (UTC).
The current streak must include today; a gap of one day resets it.
"""
from datetime import timedelta

from config.settings import ACHIEVEMENT_DEFAULTS
from engine.records import LearningStreak


def _runs(days):
    """Lengths of consecutive-day runs in a sorted, de-duplicated day list."""
    runs = []
    length = 0
    previous = None
    for day in days:
        if previous is not None and day - previous == timedelta(days=1):
            length += 1
        else:
            if length:
                runs.append(length)
            length = 1
        previous = day
    if length:
        runs.append(length)
    return runs


def days_to_next_milestone(current,
                           milestones=ACHIEVEMENT_DEFAULTS['streak_day_milestones']):
    for m in sorted(milestones):
        if m > current:
            return m - current
    return 0


def learning_streak(active_days, today,
                    milestones=ACHIEVEMENT_DEFAULTS['streak_day_milestones']):
    """Current and longest streak from the dates a learner was active.

    Args:
        active_days: iterable of datetime.date, any order, duplicates allowed.
        today: datetime.date the current streak is measured up to.
    """
    days = sorted(d for d in set(active_days) if d <= today)
    if not days:
        return LearningStreak(days_to_next_milestone=days_to_next_milestone(0, milestones))

    current = 0
    expected = today
    for day in reversed(days):
        if day != expected:
            break
        current += 1
        expected = day - timedelta(days=1)

    return LearningStreak(
        current=current,
        longest=max(_runs(days)),
        is_active=current > 0,
        days_to_next_milestone=days_to_next_milestone(current, milestones),
    )
