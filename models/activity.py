"""CRUD for activities table (content items)."""
import json

from db.database import query_db, execute_db


def get_by_id(activity_id):
    return query_db("SELECT * FROM activities WHERE id=?", (activity_id,), one=True)


def get_all(subject_id=None):
    if subject_id is None:
        return query_db("SELECT * FROM activities ORDER BY subject_id, order_index, id")
    return query_db(
        "SELECT * FROM activities WHERE subject_id=? ORDER BY order_index, id",
        (subject_id,),
    )


def create(title, activity_type, subject_id=None, difficulty='Easy', min_age=3,
           max_age=8, prerequisites=None, requires_premium=False,
           estimated_seconds=600, is_active=True, order_index=0):
    return execute_db(
        """INSERT INTO activities
           (subject_id, title, activity_type, difficulty, min_age, max_age,
            prerequisites, requires_premium, estimated_seconds, is_active, order_index)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (subject_id, title, activity_type, difficulty, min_age, max_age,
         json.dumps(list(prerequisites or [])), 1 if requires_premium else 0,
         estimated_seconds, 1 if is_active else 0, order_index),
    )
