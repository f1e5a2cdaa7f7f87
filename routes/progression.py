"""Unlock, progress, streak and difficulty routes."""
from flask import Blueprint, request

from routes.responses import respond
from services import progression_service

progression_bp = Blueprint('progression', __name__)


@progression_bp.route('/learners/<int:learner_id>/activities/<int:activity_id>/unlock')
def unlock_status(learner_id, activity_id):
    return respond(progression_service.is_activity_unlocked(learner_id, activity_id))


@progression_bp.route('/learners/<int:learner_id>/activities')
def activities(learner_id):
    """Unlocked activities, or every activity with ?all=1."""
    subject_id = request.args.get('subject_id', type=int)
    if request.args.get('all') == '1':
        return respond(progression_service.list_activity_statuses(learner_id, subject_id))
    return respond(progression_service.list_unlocked_activities(learner_id, subject_id))


@progression_bp.route('/learners/<int:learner_id>/difficulty')
def difficulty(learner_id):
    return respond(progression_service.recommend_difficulty(learner_id))


@progression_bp.route('/learners/<int:learner_id>/activities/next')
def next_activity(learner_id):
    subject_id = request.args.get('subject_id', type=int)
    return respond(progression_service.recommend_next_activity(learner_id, subject_id))


@progression_bp.route('/learners/<int:learner_id>/subjects/progress')
def subjects_progress(learner_id):
    return respond(progression_service.list_subject_progress(learner_id))


@progression_bp.route('/learners/<int:learner_id>/subjects/<int:subject_id>/progress')
def subject_progress(learner_id, subject_id):
    return respond(progression_service.track_subject_progress(learner_id, subject_id))


@progression_bp.route('/learners/<int:learner_id>/streak')
def streak(learner_id):
    return respond(progression_service.track_learning_streak(learner_id))
