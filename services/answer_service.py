"""Process learner answers: validate, count attempts, rate activities."""
import logging

from engine import answer_validation, star_rating, unlock
from engine.clock import SystemClock, timestamp
from engine.feedback import FeedbackPicker
from engine.records import ContentItem, Learner, ProgressEntry, Question
from models import activity as activity_model
from models import learner as learner_model
from models import progress as progress_model
from models import question as question_model
from models import question_attempt as attempt_model
from services import achievement_service, progression_service
from services.results import (ActivityResult, AnswerResult, Failure, INVALID,
                              is_duration, not_found)

logger = logging.getLogger(__name__)


def _grade(learner, question_row, submitted, time_spent_s, clock, picker):
    """Validate one answer and append it to the attempt counter."""
    question = Question.from_row(question_row)
    check = answer_validation.validate(question, submitted)

    attempt_number = attempt_model.record(
        learner.id, question.id, check.is_correct, time_spent_s, timestamp(clock),
    )
    failed = attempt_model.count_failed(learner.id, question.id)
    hint_available = (not check.is_correct
                      and answer_validation.should_offer_hint(failed, question.hints_enabled))

    if check.is_correct:
        feedback = picker.positive(learner.age, attempt_number == 1)
    else:
        feedback = picker.supportive(learner.age, attempt_number, question.hints_enabled)

    logger.info('Question %s learner %s: correct=%s attempt=%d',
                question.id, learner.id, check.is_correct, attempt_number)

    return AnswerResult(
        question_id=question.id,
        is_correct=check.is_correct,
        points_earned=check.points_earned,
        attempt_number=attempt_number,
        failed_attempts=failed,
        hint_available=hint_available,
        feedback=feedback,
        explanation=question_row.get('explanation'),
    )


def _check_submission(answers, total_time_seconds):
    """Failure for a malformed batch, None when it can be graded."""
    if not is_duration(total_time_seconds):
        return Failure(INVALID, 'total_time_seconds must be a non-negative number')
    seen = set()
    for a in answers:
        if not is_duration(a.time_spent_seconds):
            return Failure(INVALID, 'time_spent_seconds must be a non-negative number')
        if a.question_id in seen:
            return Failure(INVALID, f'Question {a.question_id} submitted more than once')
        seen.add(a.question_id)
    return None


def validate_answer(learner_id, question_id, submitted, time_spent_seconds=0,
                    clock=None, picker=None):
    """Validate a single answer.

    Returns AnswerResult, or Failure when the learner or question is missing.
    """
    learner_row = learner_model.get_by_id(learner_id)
    if not learner_row:
        logger.warning('Learner %s not found', learner_id)
        return not_found('Learner', learner_id)
    question_row = question_model.get_by_id(question_id)
    if not question_row:
        logger.warning('Question %s not found', question_id)
        return not_found('Question', question_id)
    if not is_duration(time_spent_seconds):
        return Failure(INVALID, 'time_spent_seconds must be a non-negative number')

    return _grade(Learner.from_row(learner_row), question_row, submitted,
                  time_spent_seconds, clock or SystemClock(), picker or FeedbackPicker())


def validate_activity_answers(learner_id, activity_id, answers, total_time_seconds,
                              clock=None, picker=None):
    """Validate every answer of an activity, rate it and record the completion.

    Also awards any achievements the completion triggers and reports the
    activities it unlocked.

    Args:
        answers: list of SubmittedAnswer.
    """
    clock = clock or SystemClock()
    picker = picker or FeedbackPicker()

    learner_row = learner_model.get_by_id(learner_id)
    if not learner_row:
        logger.warning('Learner %s not found', learner_id)
        return not_found('Learner', learner_id)
    activity_row = activity_model.get_by_id(activity_id)
    if not activity_row:
        logger.warning('Activity %s not found', activity_id)
        return not_found('Activity', activity_id)
    if not answers:
        return Failure(INVALID, 'No answers submitted')
    invalid = _check_submission(answers, total_time_seconds)
    if invalid:
        logger.warning('Rejected submission for activity %s: %s', activity_id, invalid.message)
        return invalid

    questions = {q['id']: q for q in question_model.get_for_activity(activity_id)}
    for a in answers:
        if a.question_id not in questions:
            logger.warning('Question %s not found in activity %s', a.question_id, activity_id)
            return not_found('Question', a.question_id)

    learner = Learner.from_row(learner_row)
    item = ContentItem.from_row(activity_row)

    with achievement_service.learner_lock(learner_id):
        is_first = not progress_model.has_completed(learner_id, activity_id)
        before = progression_service.unlocked_ids(learner)

        results = [_grade(learner, questions[a.question_id], a.answer,
                          a.time_spent_seconds, clock, picker)
                   for a in answers]
        correct = sum(1 for r in results if r.is_correct)
        total = len(results)

        rating = star_rating.rate(correct, total, total_time_seconds,
                                  item.estimated_seconds, is_first, learner.age)
        progress_model.record_completion(
            learner_id, activity_id, rating.stars, total_time_seconds,
            total - correct, timestamp(clock),
        )

        latest = ProgressEntry(activity_id, rating.stars, is_first_completion=is_first)
        awarded = achievement_service.check_for_achievements(learner_id, latest, clock=clock)
        after = progression_service.unlocked_ids(learner)

    logger.info('Activity %s learner %s: %d/%d correct, %d stars',
                activity_id, learner_id, correct, total, rating.stars)

    return ActivityResult(
        activity_id=activity_id,
        learner_id=learner_id,
        correct_answers=correct,
        total_questions=total,
        accuracy_percentage=round(rating.accuracy * 100, 1),
        stars=rating.stars,
        time_ratio=rating.time_ratio,
        total_time_seconds=total_time_seconds,
        is_first_completion=is_first,
        completion_message=picker.completion(learner.age, rating.stars),
        question_results=results,
        new_achievements=awarded,
        newly_unlocked=unlock.newly_unlocked(before, after),
    )
