"""Achievement trigger detection.

All checks are pure: callers pass in the latest result, the recent
history (newest first) and the codes the learner already holds. A code
that is already earned is never triggered again, which keeps awarding
at-most-once even when the same history is checked repeatedly.
"""
from config.settings import ACHIEVEMENT_DEFAULTS
from engine.records import AchievementTrigger

PERFECT_FIRST_TRY = 'perfect_first_try'
LEARNING_STREAK = 'learning_streak'


def milestone_code(count):
    return f'milestone_{count}'


def subject_mastery_code(subject_id):
    return f'subject_master_{subject_id}'


def check_triggers(learner, latest_progress, recent_history, earned_codes=(),
                   streak_length=ACHIEVEMENT_DEFAULTS['streak_length'],
                   streak_min_stars=ACHIEVEMENT_DEFAULTS['streak_min_stars']):
    """Return newly triggered achievements for one completed activity.

    Args:
        learner: Learner snapshot (kept for age-specific triggers).
        latest_progress: ProgressEntry for the activity just completed, or None.
        recent_history: list of ProgressEntry, newest first.
        earned_codes: achievement codes the learner already holds.
    """
    earned = set(earned_codes)
    triggers = []

    if (latest_progress is not None
            and latest_progress.stars == 3
            and latest_progress.is_first_completion
            and PERFECT_FIRST_TRY not in earned):
        triggers.append(AchievementTrigger(
            code=PERFECT_FIRST_TRY,
            category='first_try',
            reason='Got 3 stars on the first try',
            details={'activity_id': latest_progress.activity_id},
        ))

    window = list(recent_history)[:streak_length]
    if (len(window) == streak_length
            and all(entry.stars >= streak_min_stars for entry in window)
            and LEARNING_STREAK not in earned):
        triggers.append(AchievementTrigger(
            code=LEARNING_STREAK,
            category='streak',
            reason=f'{streak_min_stars}+ stars on {streak_length} activities in a row',
            details={'activity_ids': [entry.activity_id for entry in window]},
        ))

    return triggers


def check_milestones(total_completed, earned_codes=(),
                     thresholds=ACHIEVEMENT_DEFAULTS['milestones']):
    earned = set(earned_codes)
    triggers = []
    for n in sorted(thresholds):
        code = milestone_code(n)
        if total_completed >= n and code not in earned:
            triggers.append(AchievementTrigger(
                code=code,
                category='milestone',
                reason=f'Completed {n} activities',
                details={'total_completed': total_completed},
            ))
    return triggers


def check_subject_mastery(subject_stats, earned_codes=(),
                          min_completion=ACHIEVEMENT_DEFAULTS['mastery_completion'],
                          min_score=ACHIEVEMENT_DEFAULTS['mastery_score']):
    """Subjects with >=80% of items completed at >=85% average score."""
    earned = set(earned_codes)
    triggers = []
    for stats in subject_stats:
        if stats.total_items <= 0:
            continue
        code = subject_mastery_code(stats.subject_id)
        if code in earned:
            continue
        completion = stats.completed_items / stats.total_items
        if completion >= min_completion and stats.average_score >= min_score:
            triggers.append(AchievementTrigger(
                code=code,
                category='subject_mastery',
                reason='Mastered a subject',
                details={
                    'subject_id': stats.subject_id,
                    'completion': round(completion, 3),
                    'average_score': round(stats.average_score, 3),
                },
            ))
    return triggers
