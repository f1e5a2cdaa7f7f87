"""CRUD for question_attempts table (the per-question attempt counter)."""
from db.database import query_db, execute_db


def count_for_question(learner_id, question_id):
    row = query_db(
        "SELECT COUNT(*) as cnt FROM question_attempts WHERE learner_id=? AND question_id=?",
        (learner_id, question_id), one=True,
    )
    return row['cnt'] if row else 0


def count_failed(learner_id, question_id):
    row = query_db(
        """SELECT COUNT(*) as cnt FROM question_attempts
           WHERE learner_id=? AND question_id=? AND is_correct=0""",
        (learner_id, question_id), one=True,
    )
    return row['cnt'] if row else 0


def record(learner_id, question_id, is_correct, time_spent_seconds, answered_at):
    """Append an attempt. Returns its 1-based attempt number."""
    attempt_number = count_for_question(learner_id, question_id) + 1
    execute_db(
        """INSERT INTO question_attempts
           (learner_id, question_id, attempt_number, is_correct,
            time_spent_seconds, answered_at)
           VALUES (?, ?, ?, ?, ?, ?)""",
        (learner_id, question_id, attempt_number, 1 if is_correct else 0,
         time_spent_seconds, answered_at),
    )
    return attempt_number


def get_recent(learner_id, limit=20):
    """Last N attempts, newest first."""
    return query_db(
        """SELECT qa.*, q.activity_id, q.question_type
           FROM question_attempts qa
           JOIN questions q ON qa.question_id = q.id
           WHERE qa.learner_id=?
           ORDER BY qa.answered_at DESC, qa.id DESC
           LIMIT ?""",
        (learner_id, limit),
    )


def get_active_days(learner_id):
    """Distinct UTC dates ('YYYY-MM-DD') with at least one answer, newest first."""
    rows = query_db(
        """SELECT DISTINCT substr(answered_at, 1, 10) as day
           FROM question_attempts
           WHERE learner_id=?
           ORDER BY day DESC""",
        (learner_id,),
    )
    return [r['day'] for r in rows]
