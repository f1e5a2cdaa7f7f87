"""Content unlocking, subject progress, streaks and difficulty for a learner."""
import logging
from datetime import date

from config.settings import DIFFICULTY_DEFAULTS
from engine import difficulty, streaks, unlock
from engine.clock import SystemClock
from engine.records import AnswerOutcome, ContentItem, Learner
from models import activity as activity_model
from models import learner as learner_model
from models import progress as progress_model
from models import question_attempt as attempt_model
from models import subject as subject_model
from services.results import (DifficultyReport, NextActivity, StreakReport,
                              SubjectProgress, UnlockReport, not_found)

logger = logging.getLogger(__name__)


def _report(item, learner, completed_ids, has_premium):
    status = unlock.is_unlocked(item, learner, completed_ids, has_premium)
    prereqs = unlock.prerequisite_progress(item, completed_ids)
    return UnlockReport(
        activity_id=item.id,
        unlocked=status.unlocked,
        reason=status.reason,
        missing_prerequisites=prereqs.missing,
        progress_percentage=prereqs.percentage,
    )


def is_activity_unlocked(learner_id, activity_id):
    learner_row = learner_model.get_by_id(learner_id)
    if not learner_row:
        logger.warning('Learner %s not found', learner_id)
        return not_found('Learner', learner_id)
    activity_row = activity_model.get_by_id(activity_id)
    if not activity_row:
        logger.warning('Activity %s not found', activity_id)
        return not_found('Activity', activity_id)

    learner = Learner.from_row(learner_row)
    report = _report(
        ContentItem.from_row(activity_row), learner,
        progress_model.get_completed_ids(learner_id),
        learner_model.has_premium_access(learner_id),
    )
    logger.info('Unlock check activity %s learner %s: %s (%s)',
                activity_id, learner_id, report.unlocked, report.reason)
    return report


def unlocked_ids(learner, subject_id=None):
    """Ids of every activity the learner can open right now."""
    items = [ContentItem.from_row(r) for r in activity_model.get_all(subject_id)]
    completed = progress_model.get_completed_ids(learner.id)
    has_premium = learner_model.has_premium_access(learner.id)
    return [item.id for item in unlock.unlocked_items(items, learner, completed, has_premium)]


def list_activity_statuses(learner_id, subject_id=None):
    """UnlockReport for every activity (locked ones included, with reasons)."""
    learner_row = learner_model.get_by_id(learner_id)
    if not learner_row:
        return not_found('Learner', learner_id)
    learner = Learner.from_row(learner_row)
    completed = progress_model.get_completed_ids(learner_id)
    has_premium = learner_model.has_premium_access(learner_id)
    return [_report(ContentItem.from_row(r), learner, completed, has_premium)
            for r in activity_model.get_all(subject_id)]


def list_unlocked_activities(learner_id, subject_id=None):
    reports = list_activity_statuses(learner_id, subject_id)
    if not isinstance(reports, list):
        return reports
    return [r for r in reports if r.unlocked]


def recommend_difficulty(learner_id, window=DIFFICULTY_DEFAULTS['recent_window'],
                         auto_apply_confidence=DIFFICULTY_DEFAULTS['auto_apply_confidence']):
    """Recommend a level from the learner's recent answers.

    Confident recommendations are applied to the learner's preferred
    difficulty straight away; the rest are returned for a parent to review.
    """
    learner_row = learner_model.get_by_id(learner_id)
    if not learner_row:
        logger.warning('Learner %s not found', learner_id)
        return not_found('Learner', learner_id)
    learner = Learner.from_row(learner_row)

    recent = attempt_model.get_recent(learner_id, limit=window)
    outcomes = [AnswerOutcome(bool(a['is_correct']), a['attempt_number']) for a in recent]
    rec = difficulty.recommend(outcomes, learner.preferred_difficulty)

    auto_applied = False
    if rec.should_adjust and rec.confidence >= auto_apply_confidence:
        learner_model.set_preferred_difficulty(learner_id, rec.recommended)
        auto_applied = True
        logger.info('Learner %s difficulty %s -> %s (confidence %.2f)',
                    learner_id, rec.current, rec.recommended, rec.confidence)

    return DifficultyReport(
        learner_id=learner_id,
        current=rec.current,
        recommended=rec.recommended,
        should_adjust=rec.should_adjust,
        confidence=round(rec.confidence, 3),
        reasoning=rec.reasoning,
        sample_size=len(outcomes),
        auto_applied=auto_applied,
    )


def recommend_next_activity(learner_id, subject_id=None):
    """Next unlocked activity not yet completed, at the learner's level if possible."""
    learner_row = learner_model.get_by_id(learner_id)
    if not learner_row:
        logger.warning('Learner %s not found', learner_id)
        return not_found('Learner', learner_id)
    learner = Learner.from_row(learner_row)

    rows = {r['id']: r for r in activity_model.get_all(subject_id)}
    item = unlock.next_item(
        [ContentItem.from_row(r) for r in rows.values()], learner,
        progress_model.get_completed_ids(learner_id),
        learner_model.has_premium_access(learner_id),
        learner.preferred_difficulty,
    )
    if item is None:
        logger.info('No open activities left for learner %s', learner_id)
        return NextActivity(learner_id, learner.preferred_difficulty)

    logger.info('Next activity for learner %s: %s (%s)', learner_id, item.id, item.difficulty)
    return NextActivity(
        learner_id=learner_id,
        target_difficulty=learner.preferred_difficulty,
        activity_id=item.id,
        title=rows[item.id]['title'],
        subject_id=item.subject_id,
        difficulty=item.difficulty,
    )


def _subject_progress(learner_id, subject_row, stats_row):
    stats_row = stats_row or {}
    total = stats_row.get('total_items') or 0
    completed = stats_row.get('completed_items') or 0
    return SubjectProgress(
        learner_id=learner_id,
        subject_id=subject_row['id'],
        subject_name=subject_row['name'],
        total_activities=total,
        completed_activities=completed,
        completion_percentage=round(completed / total * 100, 1) if total else 0.0,
        average_stars=round(stats_row.get('average_stars') or 0.0, 2),
        last_completed_at=stats_row.get('last_completed_at'),
    )


def track_subject_progress(learner_id, subject_id):
    """Completion and stars for one subject, over age-appropriate activities."""
    learner_row = learner_model.get_by_id(learner_id)
    if not learner_row:
        logger.warning('Learner %s not found', learner_id)
        return not_found('Learner', learner_id)
    subject_row = subject_model.get_by_id(subject_id)
    if not subject_row:
        logger.warning('Subject %s not found', subject_id)
        return not_found('Subject', subject_id)

    stats = progress_model.get_subject_stats(learner_id, learner_row['age'], subject_id)
    return _subject_progress(learner_id, subject_row, stats[0] if stats else None)


def list_subject_progress(learner_id):
    learner_row = learner_model.get_by_id(learner_id)
    if not learner_row:
        return not_found('Learner', learner_id)
    stats = {r['subject_id']: r
             for r in progress_model.get_subject_stats(learner_id, learner_row['age'])}
    return [_subject_progress(learner_id, s, stats.get(s['id']))
            for s in subject_model.get_all()]


def track_learning_streak(learner_id, clock=None):
    """Daily streak from the days the learner answered questions."""
    if not learner_model.get_by_id(learner_id):
        logger.warning('Learner %s not found', learner_id)
        return not_found('Learner', learner_id)
    clock = clock or SystemClock()

    days = [date.fromisoformat(d) for d in attempt_model.get_active_days(learner_id)]
    streak = streaks.learning_streak(days, clock.now().date())
    return StreakReport(
        learner_id=learner_id,
        current_streak=streak.current,
        longest_streak=streak.longest,
        is_active=streak.is_active,
        days_to_next_milestone=streak.days_to_next_milestone,
    )
