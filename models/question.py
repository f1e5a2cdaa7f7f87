"""CRUD for questions table."""
import json

from db.database import query_db, execute_db


def get_by_id(question_id):
    return query_db("SELECT * FROM questions WHERE id=?", (question_id,), one=True)


def get_for_activity(activity_id):
    return query_db(
        "SELECT * FROM questions WHERE activity_id=? ORDER BY id", (activity_id,),
    )


def create(activity_id, question_type, correct_answer, prompt=None, points=10,
           hints_enabled=True, explanation=None):
    """Create a question. Non-string answers are stored JSON-encoded."""
    if not isinstance(correct_answer, str):
        correct_answer = json.dumps(correct_answer)
    return execute_db(
        """INSERT INTO questions
           (activity_id, question_type, prompt, correct_answer, points,
            hints_enabled, explanation)
           VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (activity_id, question_type, prompt, correct_answer, points,
         1 if hints_enabled else 0, explanation),
    )
