"""Answer submission routes."""
from flask import Blueprint, request

from routes.responses import bad_request, int_field, number_field, respond
from services import answer_service
from services.results import SubmittedAnswer

answers_bp = Blueprint('answers', __name__)


@answers_bp.route('/questions/<int:question_id>/validate', methods=['POST'])
def validate(question_id):
    body = request.get_json(silent=True) or {}
    learner_id = int_field(body, 'learner_id')
    if learner_id is None:
        return bad_request('learner_id is required')
    if 'answer' not in body:
        return bad_request('answer is required')
    time_spent = number_field(body, 'time_spent_seconds')
    if time_spent is None:
        return bad_request('time_spent_seconds must be a non-negative number')

    result = answer_service.validate_answer(
        learner_id, question_id, body['answer'], time_spent_seconds=time_spent,
    )
    return respond(result)


@answers_bp.route('/activities/<int:activity_id>/submit', methods=['POST'])
def submit(activity_id):
    body = request.get_json(silent=True) or {}
    learner_id = int_field(body, 'learner_id')
    if learner_id is None:
        return bad_request('learner_id is required')
    raw_answers = body.get('answers')
    if not isinstance(raw_answers, list):
        return bad_request('answers must be a list')
    total_time = number_field(body, 'total_time_seconds')
    if total_time is None:
        return bad_request('total_time_seconds must be a non-negative number')

    answers = []
    for raw in raw_answers:
        if not isinstance(raw, dict) or int_field(raw, 'question_id') is None:
            return bad_request('each answer needs a question_id')
        time_spent = number_field(raw, 'time_spent_seconds')
        if time_spent is None:
            return bad_request('time_spent_seconds must be a non-negative number')
        answers.append(SubmittedAnswer(
            question_id=raw['question_id'],
            answer=raw.get('answer'),
            time_spent_seconds=time_spent,
        ))

    result = answer_service.validate_activity_answers(
        learner_id, activity_id, answers, total_time_seconds=total_time,
    )
    return respond(result)
