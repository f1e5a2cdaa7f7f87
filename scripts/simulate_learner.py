"""Simulate a learner working through every unlocked activity over the API.

Answers each question correctly with probability --accuracy, then prints
stars, new achievements and newly unlocked activities. Needs a running
server (python3 app.py) seeded with scripts/seed_demo_content.py.

Run from project root: python3 scripts/simulate_learner.py --learner 1
"""
import argparse
import json
import os
import random
import sys

import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config.settings import API_BASE_URL
from models import question as question_model


def _wrong_answer(correct):
    """Something the right shape but wrong."""
    if isinstance(correct, bool):
        return not correct
    if isinstance(correct, int):
        return correct + 1
    if isinstance(correct, list) and correct and isinstance(correct[0], list):
        return [[0.0, 0.0], [0.05, 0.05]]
    if isinstance(correct, list):
        return [i + 1 for i in correct]
    if isinstance(correct, dict):
        return {k: 'wrong' for k in correct}
    return 'wrong'


def _correct_answer(row):
    payload = json.loads(row['correct_answer'])
    if isinstance(payload, dict) and 'path' in payload:
        return payload['path']
    return payload


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--learner', type=int, required=True)
    parser.add_argument('--accuracy', type=float, default=0.85)
    parser.add_argument('--seed', type=int, default=None)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    http = requests.Session()
    base = f'{API_BASE_URL}/api'

    resp = http.get(f'{base}/learners/{args.learner}/activities', timeout=10)
    resp.raise_for_status()
    queue = [a['activity_id'] for a in resp.json()]
    done = set()

    while queue:
        activity_id = queue.pop(0)
        if activity_id in done:
            continue
        answers = []
        for row in question_model.get_for_activity(activity_id):
            correct = _correct_answer(row)
            answer = correct if rng.random() < args.accuracy else _wrong_answer(correct)
            answers.append({'question_id': row['id'], 'answer': answer,
                            'time_spent_seconds': rng.randint(5, 40)})
        if not answers:
            done.add(activity_id)
            continue

        resp = http.post(f'{base}/activities/{activity_id}/submit', json={
            'learner_id': args.learner,
            'answers': answers,
            'total_time_seconds': sum(a['time_spent_seconds'] for a in answers),
        }, timeout=10)
        resp.raise_for_status()
        result = resp.json()
        done.add(activity_id)

        print(f"Activity {activity_id}: {result['correct_answers']}/{result['total_questions']} "
              f"correct, {result['stars']} stars")
        for ach in result['new_achievements']:
            print(f"  Achievement: {ach['name']}")
        for new_id in result['newly_unlocked']:
            print(f'  Unlocked activity {new_id}')
            queue.append(new_id)

    resp = http.get(f'{base}/learners/{args.learner}/difficulty', timeout=10)
    resp.raise_for_status()
    rec = resp.json()
    print(f"\nDifficulty: {rec['current']} -> {rec['recommended']} "
          f"(confidence {rec['confidence']}, applied={rec['auto_applied']})")


if __name__ == '__main__':
    main()
