"""Achievement routes: checking, listing and celebrating."""
from flask import Blueprint, jsonify, request

from models import learner as learner_model
from routes.responses import bad_request, respond, to_json
from services import achievement_service
from services.results import not_found

achievements_bp = Blueprint('achievements', __name__)


@achievements_bp.route('/learners/<int:learner_id>/achievements')
def index(learner_id):
    if not learner_model.get_by_id(learner_id):
        return respond(not_found('Learner', learner_id))
    return respond(achievement_service.get_for_learner(learner_id))


@achievements_bp.route('/learners/<int:learner_id>/achievements/check', methods=['POST'])
def check(learner_id):
    return respond(achievement_service.check_for_achievements(learner_id))


@achievements_bp.route('/learners/<int:learner_id>/achievements/uncelebrated')
def uncelebrated(learner_id):
    if not learner_model.get_by_id(learner_id):
        return respond(not_found('Learner', learner_id))
    return respond(achievement_service.get_uncelebrated(learner_id))


@achievements_bp.route('/learners/<int:learner_id>/achievements/celebrate', methods=['POST'])
def celebrate(learner_id):
    body = request.get_json(silent=True) or {}
    ids = body.get('ids')
    if not isinstance(ids, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in ids):
        return bad_request('ids must be a list of awarded achievement ids')
    if not learner_model.get_by_id(learner_id):
        return respond(not_found('Learner', learner_id))
    changed = achievement_service.mark_celebrated(learner_id, ids)
    return jsonify({
        'celebrated': changed,
        'pending': to_json(achievement_service.get_uncelebrated(learner_id)),
    })
