"""CRUD for learners table."""
from db.database import query_db, execute_db


def get_all(include_archived=False):
    if include_archived:
        return query_db("SELECT * FROM learners ORDER BY name")
    return query_db("SELECT * FROM learners WHERE archived=0 ORDER BY name")


def get_by_id(learner_id):
    """Active learner by id; archived profiles are treated as missing."""
    return query_db(
        "SELECT * FROM learners WHERE id=? AND archived=0", (learner_id,), one=True,
    )


def create(name, age, preferred_difficulty='Easy', has_premium=False):
    return execute_db(
        """INSERT INTO learners (name, age, preferred_difficulty, has_premium)
           VALUES (?, ?, ?, ?)""",
        (name, age, preferred_difficulty, 1 if has_premium else 0),
    )


def update_age(learner_id, age):
    execute_db("UPDATE learners SET age=? WHERE id=?", (age, learner_id))


def set_preferred_difficulty(learner_id, difficulty):
    execute_db(
        "UPDATE learners SET preferred_difficulty=? WHERE id=?",
        (difficulty, learner_id),
    )


def set_premium(learner_id, has_premium):
    execute_db(
        "UPDATE learners SET has_premium=? WHERE id=?",
        (1 if has_premium else 0, learner_id),
    )


def has_premium_access(learner_id):
    row = query_db("SELECT has_premium FROM learners WHERE id=?", (learner_id,), one=True)
    return bool(row and row['has_premium'])


def archive(learner_id):
    execute_db("UPDATE learners SET archived=1 WHERE id=?", (learner_id,))
