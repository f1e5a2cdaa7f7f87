"""Seed a small demo catalogue: two subjects, a chain of activities with
prerequisites, one question of every type, and two learners.

Safe to re-run: exits early if the subjects already exist.

Run from project root: python3 scripts/seed_demo_content.py
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from db.database import init_db
from models import activity as activity_model
from models import learner as learner_model
from models import question as question_model
from models import subject as subject_model

# Each activity: (title, type, difficulty, min_age, max_age, premium,
#                 estimated_seconds, prerequisite_indices[], questions[])
# prerequisite_indices reference 0-based position within the subject's list.
# Each question: (prompt, type, correct_answer)
CATALOGUE = {
    'Numbers': (
        'Counting, comparing and simple sums.',
        [
            ('Count to 5', 'multiple_choice', 'Easy', 3, 5, False, 180, [], [
                ('How many apples?', 'multiple_choice', 2),
                ('How many stars?', 'multiple_choice', 4),
                ('Is 3 more than 2?', 'true_false', 'true'),
            ]),
            ('Count to 10', 'multiple_choice', 'Easy', 4, 7, False, 240, [0], [
                ('Which number comes after 7?', 'multiple_choice', 1),
                ('Pick all the even numbers', 'multiple_choice', [1, 3]),
                ('Is 10 less than 9?', 'true_false', 'false'),
            ]),
            ('Match numbers to dots', 'matching', 'Medium', 4, 8, False, 300, [1], [
                ('Match each number to its dots', 'matching', {'1': 'a', '2': 'b', '3': 'c'}),
            ]),
            ('Adding within 10', 'drag_drop', 'Medium', 5, 8, True, 420, [1], [
                ('Drag each sum to its answer', 'drag_drop', {'2+3': '5', '4+4': '8'}),
            ]),
        ],
    ),
    'Letters': (
        'Letter shapes and sounds.',
        [
            ('Trace the letter L', 'tracing', 'Easy', 3, 6, False, 120, [], [
                ('Trace the L', 'tracing',
                 {'path': [[0.3, 0.1], [0.3, 0.9], [0.7, 0.9]], 'tolerance': 0.1}),
            ]),
            ('Beginning sounds', 'multiple_choice', 'Easy', 4, 7, False, 240, [0], [
                ('Which picture starts with B?', 'multiple_choice', 0),
                ('Does cat start with C?', 'true_false', 'true'),
            ]),
        ],
    ),
}

LEARNERS = [
    ('Mia', 5, 'Easy', False),
    ('Leo', 7, 'Medium', True),
]


def main():
    init_db()
    if subject_model.get_by_name('Numbers'):
        print('Demo content already present, nothing to do.')
        return

    for subject_name, (description, activities) in CATALOGUE.items():
        subject_id = subject_model.create(subject_name, description)
        activity_ids = []
        for order, (title, a_type, diff, min_age, max_age, premium, est,
                    prereq_indices, questions) in enumerate(activities):
            prereq_ids = [activity_ids[i] for i in prereq_indices]
            activity_id = activity_model.create(
                title, a_type, subject_id=subject_id, difficulty=diff,
                min_age=min_age, max_age=max_age, prerequisites=prereq_ids,
                requires_premium=premium, estimated_seconds=est, order_index=order,
            )
            activity_ids.append(activity_id)
            for prompt, q_type, correct in questions:
                question_model.create(activity_id, q_type, correct, prompt=prompt)

        print(f'\nSubject "{subject_name}":')
        for i, (title, *_rest) in enumerate(activities):
            prereqs = activities[i][7]
            prereq_str = (f' (prereqs: {", ".join(activities[p][0] for p in prereqs)})'
                          if prereqs else '')
            print(f'  {i + 1:2d}. {title}{prereq_str}')

    for name, age, difficulty, premium in LEARNERS:
        learner_id = learner_model.create(name, age, difficulty, premium)
        print(f'Learner {learner_id}: {name}, age {age}')


if __name__ == '__main__':
    main()
