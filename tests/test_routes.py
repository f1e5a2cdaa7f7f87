"""Tests for the JSON API blueprints."""
from models import activity, learner, question, subject


def _setup():
    lid = learner.create('Mia', 5)
    aid = activity.create('Count', 'multiple_choice')
    qid = question.create(aid, 'multiple_choice', 1)
    return lid, aid, qid


# --- Answers ---

def test_validate_answer(client):
    lid, _, qid = _setup()
    resp = client.post(f'/api/questions/{qid}/validate',
                       json={'learner_id': lid, 'answer': 1, 'time_spent_seconds': 4})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['is_correct'] is True
    assert data['points_earned'] == 10
    assert data['attempt_number'] == 1


def test_validate_answer_requires_learner(client):
    _, _, qid = _setup()
    resp = client.post(f'/api/questions/{qid}/validate', json={'answer': 1})
    assert resp.status_code == 400


def test_validate_answer_requires_answer(client):
    lid, _, qid = _setup()
    resp = client.post(f'/api/questions/{qid}/validate', json={'learner_id': lid})
    assert resp.status_code == 400


def test_validate_unknown_question(client):
    lid, _, _ = _setup()
    resp = client.post('/api/questions/999/validate', json={'learner_id': lid, 'answer': 1})
    assert resp.status_code == 404
    assert resp.get_json()['error'] == 'not_found'


def test_submit_activity(client):
    lid, aid, qid = _setup()
    resp = client.post(f'/api/activities/{aid}/submit', json={
        'learner_id': lid,
        'answers': [{'question_id': qid, 'answer': 1, 'time_spent_seconds': 5}],
        'total_time_seconds': 5,
    })
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['stars'] == 3
    assert data['question_results'][0]['is_correct'] is True
    assert {a['code'] for a in data['new_achievements']} == {'perfect_first_try', 'milestone_1'}


def test_submit_empty_answers(client):
    lid, aid, _ = _setup()
    resp = client.post(f'/api/activities/{aid}/submit',
                       json={'learner_id': lid, 'answers': []})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'invalid'


def test_submit_bad_answer_shape(client):
    lid, aid, _ = _setup()
    resp = client.post(f'/api/activities/{aid}/submit',
                       json={'learner_id': lid, 'answers': [{'answer': 1}]})
    assert resp.status_code == 400


def test_submit_unknown_learner(client):
    _, aid, qid = _setup()
    resp = client.post(f'/api/activities/{aid}/submit', json={
        'learner_id': 999, 'answers': [{'question_id': qid, 'answer': 1}],
    })
    assert resp.status_code == 404


# --- Progression ---

def test_unlock_status(client):
    lid, aid, _ = _setup()
    locked = activity.create('Next', 'multiple_choice', prerequisites=[aid])
    resp = client.get(f'/api/learners/{lid}/activities/{locked}/unlock')
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['unlocked'] is False
    assert data['reason'] == 'prerequisites incomplete'
    assert data['missing_prerequisites'] == [aid]


def test_unlock_unknown_activity(client):
    lid, _, _ = _setup()
    assert client.get(f'/api/learners/{lid}/activities/999/unlock').status_code == 404


def test_list_activities(client):
    lid, aid, _ = _setup()
    locked = activity.create('Next', 'multiple_choice', prerequisites=[aid])
    unlocked = client.get(f'/api/learners/{lid}/activities').get_json()
    assert [a['activity_id'] for a in unlocked] == [aid]
    everything = client.get(f'/api/learners/{lid}/activities?all=1').get_json()
    assert [a['activity_id'] for a in everything] == [aid, locked]


def test_difficulty(client):
    lid, _, _ = _setup()
    resp = client.get(f'/api/learners/{lid}/difficulty')
    assert resp.status_code == 200
    assert resp.get_json()['recommended'] == 'Easy'


def test_difficulty_unknown_learner(client):
    assert client.get('/api/learners/999/difficulty').status_code == 404


def test_next_activity(client):
    lid, aid, _ = _setup()
    data = client.get(f'/api/learners/{lid}/activities/next').get_json()
    assert data['activity_id'] == aid
    assert data['title'] == 'Count'
    assert client.get('/api/learners/999/activities/next').status_code == 404


def test_subject_progress(client):
    lid = learner.create('Mia', 5)
    sid = subject.create('Numbers')
    activity.create('N1', 'multiple_choice', subject_id=sid)
    one = client.get(f'/api/learners/{lid}/subjects/{sid}/progress').get_json()
    assert one['subject_name'] == 'Numbers'
    assert one['total_activities'] == 1
    assert one['completed_activities'] == 0
    listed = client.get(f'/api/learners/{lid}/subjects/progress').get_json()
    assert [s['subject_id'] for s in listed] == [sid]
    assert client.get(f'/api/learners/{lid}/subjects/999/progress').status_code == 404


def test_streak(client):
    lid = learner.create('Mia', 5)
    data = client.get(f'/api/learners/{lid}/streak').get_json()
    assert data['current_streak'] == 0
    assert data['days_to_next_milestone'] == 3
    assert client.get('/api/learners/999/streak').status_code == 404


# --- Achievements ---

def test_achievement_flow(client):
    lid, aid, qid = _setup()
    client.post(f'/api/activities/{aid}/submit', json={
        'learner_id': lid, 'answers': [{'question_id': qid, 'answer': 1}],
    })

    held = client.get(f'/api/learners/{lid}/achievements').get_json()
    assert len(held) == 2

    pending = client.get(f'/api/learners/{lid}/achievements/uncelebrated').get_json()
    resp = client.post(f'/api/learners/{lid}/achievements/celebrate',
                       json={'ids': [pending[0]['id']]})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['celebrated'] == 1
    assert len(data['pending']) == 1


def test_check_achievements_endpoint(client):
    lid, _, _ = _setup()
    resp = client.post(f'/api/learners/{lid}/achievements/check')
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_celebrate_requires_id_list(client):
    lid, _, _ = _setup()
    resp = client.post(f'/api/learners/{lid}/achievements/celebrate', json={'ids': 'all'})
    assert resp.status_code == 400


def test_achievements_unknown_learner(client):
    assert client.get('/api/learners/999/achievements').status_code == 404
    assert client.post('/api/learners/999/achievements/check').status_code == 404
    resp = client.post('/api/learners/999/achievements/celebrate', json={'ids': [1]})
    assert resp.status_code == 404


def test_unknown_endpoint(client):
    resp = client.get('/api/nope')
    assert resp.status_code == 404
    assert resp.get_json()['error'] == 'not_found'


def test_submit_rejects_text_total_time(client):
    lid, aid, qid = _setup()
    resp = client.post(f'/api/activities/{aid}/submit', json={
        'learner_id': lid,
        'answers': [{'question_id': qid, 'answer': 1}],
        'total_time_seconds': '30',
    })
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'invalid'
    assert client.post(f'/api/questions/{qid}/validate',
                       json={'learner_id': lid, 'answer': 1}).get_json()['attempt_number'] == 1


def test_submit_rejects_bad_answer_time(client):
    lid, aid, qid = _setup()
    resp = client.post(f'/api/activities/{aid}/submit', json={
        'learner_id': lid,
        'answers': [{'question_id': qid, 'answer': 1, 'time_spent_seconds': None}],
    })
    assert resp.status_code == 400


def test_validate_rejects_negative_time(client):
    lid, _, qid = _setup()
    resp = client.post(f'/api/questions/{qid}/validate',
                       json={'learner_id': lid, 'answer': 1, 'time_spent_seconds': -5})
    assert resp.status_code == 400


def test_submit_rejects_repeated_question(client):
    lid, aid, qid = _setup()
    resp = client.post(f'/api/activities/{aid}/submit', json={
        'learner_id': lid,
        'answers': [{'question_id': qid, 'answer': 1}] * 3,
    })
    assert resp.status_code == 400
