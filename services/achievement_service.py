"""Achievement checking and idempotent awarding.

"Record progress -> check triggers -> award" runs under a per-learner
lock so concurrent requests for one learner cannot double-award. The
UNIQUE(learner_id, achievement_id) constraint backs this up in the DB.
"""
import logging
import threading
import weakref
from contextlib import contextmanager

from config.settings import ACHIEVEMENT_DEFAULTS
from engine import achievements as triggers_engine
from engine.clock import SystemClock, timestamp
from engine.records import Learner, ProgressEntry, SubjectStats
from models import achievement as achievement_model
from models import learner as learner_model
from models import progress as progress_model
from services.results import AwardedAchievement, not_found

logger = logging.getLogger(__name__)

# An entry lives only while some caller holds its lock
_locks = weakref.WeakValueDictionary()
_locks_guard = threading.Lock()


@contextmanager
def learner_lock(learner_id):
    with _locks_guard:
        lock = _locks.get(learner_id)
        if lock is None:
            lock = threading.RLock()
            _locks[learner_id] = lock
    with lock:
        yield


def award(learner_id, achievement_id, clock=None):
    """Award an achievement. Re-awarding is a no-op; returns True only when new."""
    clock = clock or SystemClock()
    with learner_lock(learner_id):
        created = achievement_model.award(learner_id, achievement_id, timestamp(clock))
    if created:
        logger.info('Awarded achievement %s to learner %s', achievement_id, learner_id)
    else:
        logger.debug('Achievement %s already held by learner %s', achievement_id, learner_id)
    return created


def _latest_entry(learner_id):
    rows = progress_model.get_recent(learner_id, limit=1)
    if not rows:
        return None
    row = rows[0]
    return ProgressEntry(row['activity_id'], row['stars'],
                         is_first_completion=row['attempts'] == 1)


def _subject_stats(learner):
    stats = []
    for row in progress_model.get_subject_stats(learner.id, learner.age):
        avg_stars = row['average_stars'] or 0.0
        stats.append(SubjectStats(
            subject_id=row['subject_id'],
            total_items=row['total_items'],
            completed_items=row['completed_items'] or 0,
            average_score=avg_stars / 3.0,
        ))
    return stats


def evaluate(learner, latest=None):
    """All triggers currently satisfied and not yet earned."""
    earned = achievement_model.get_earned_codes(learner.id)
    if latest is None:
        latest = _latest_entry(learner.id)
    history = [ProgressEntry.from_row(r) for r in progress_model.get_recent(
        learner.id, limit=ACHIEVEMENT_DEFAULTS['streak_length'])]

    found = triggers_engine.check_triggers(learner, latest, history, earned)
    found += triggers_engine.check_milestones(
        progress_model.count_completed(learner.id), earned)
    found += triggers_engine.check_subject_mastery(_subject_stats(learner), earned)
    return found


def check_for_achievements(learner_id, latest=None, clock=None):
    """Detect and award new achievements.

    Returns the list of AwardedAchievement created by this call (empty when
    nothing new fired), or a Failure if the learner does not exist.
    """
    row = learner_model.get_by_id(learner_id)
    if not row:
        logger.warning('Learner %s not found', learner_id)
        return not_found('Learner', learner_id)
    learner = Learner.from_row(row)

    awarded = []
    with learner_lock(learner_id):
        for trigger in evaluate(learner, latest):
            definition = achievement_model.get_by_code(trigger.code)
            if not definition:
                logger.warning('No achievement definition for trigger %s', trigger.code)
                continue
            if award(learner_id, definition['id'], clock=clock):
                awarded.append(AwardedAchievement.from_row(
                    achievement_model.get_awarded(learner_id, definition['id'])))

    if awarded:
        logger.info('Learner %s earned %s', learner_id, [a.code for a in awarded])
    return awarded


def get_for_learner(learner_id):
    return [AwardedAchievement.from_row(r) for r in achievement_model.get_for_learner(learner_id)]


def get_uncelebrated(learner_id):
    return [AwardedAchievement.from_row(r) for r in achievement_model.get_uncelebrated(learner_id)]


def mark_celebrated(learner_id, awarded_ids):
    """The only way celebrated flips to true. Returns the number of rows changed."""
    changed = achievement_model.mark_celebrated(learner_id, awarded_ids)
    logger.info('Marked %d achievement(s) celebrated for learner %s', changed, learner_id)
    return changed
