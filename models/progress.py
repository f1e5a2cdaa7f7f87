"""CRUD and history queries for the progress table.

One row per (learner, activity). Completing an activity again overwrites
the row with the newest metrics.
"""
from db.database import query_db, execute_db


def get(learner_id, activity_id):
    return query_db(
        "SELECT * FROM progress WHERE learner_id=? AND activity_id=?",
        (learner_id, activity_id), one=True,
    )


def has_completed(learner_id, activity_id):
    row = query_db(
        """SELECT 1 FROM progress
           WHERE learner_id=? AND activity_id=? AND is_completed=1""",
        (learner_id, activity_id), one=True,
    )
    return row is not None


def record_completion(learner_id, activity_id, stars, time_spent_seconds,
                      error_count, completed_at):
    return execute_db(
        """INSERT INTO progress
           (learner_id, activity_id, is_completed, stars, time_spent_seconds,
            error_count, attempts, completed_at, updated_at)
           VALUES (?, ?, 1, ?, ?, ?, 1, ?, ?)
           ON CONFLICT(learner_id, activity_id) DO UPDATE SET
            is_completed=1,
            stars=excluded.stars,
            time_spent_seconds=excluded.time_spent_seconds,
            error_count=excluded.error_count,
            attempts=progress.attempts + 1,
            completed_at=excluded.completed_at,
            updated_at=excluded.updated_at""",
        (learner_id, activity_id, stars, int(time_spent_seconds), error_count,
         completed_at, completed_at),
    )


def get_completed_ids(learner_id):
    rows = query_db(
        "SELECT activity_id FROM progress WHERE learner_id=? AND is_completed=1",
        (learner_id,),
    )
    return {r['activity_id'] for r in rows}


def count_completed(learner_id):
    row = query_db(
        "SELECT COUNT(*) as cnt FROM progress WHERE learner_id=? AND is_completed=1",
        (learner_id,), one=True,
    )
    return row['cnt'] if row else 0


def get_recent(learner_id, limit=5):
    """Last N completed activities, newest first."""
    return query_db(
        """SELECT * FROM progress
           WHERE learner_id=? AND is_completed=1
           ORDER BY completed_at DESC, id DESC
           LIMIT ?""",
        (learner_id, limit),
    )


def get_subject_stats(learner_id, age, subject_id=None):
    """Per-subject completion counts and average stars.

    Only active activities suitable for the learner's age are counted.
    """
    sql = """SELECT a.subject_id,
                    COUNT(a.id) as total_items,
                    SUM(CASE WHEN p.is_completed=1 THEN 1 ELSE 0 END) as completed_items,
                    AVG(CASE WHEN p.is_completed=1 THEN p.stars END) as average_stars,
                    MAX(CASE WHEN p.is_completed=1 THEN p.completed_at END) as last_completed_at
             FROM activities a
             LEFT JOIN progress p ON p.activity_id = a.id AND p.learner_id=?
             WHERE a.is_active=1 AND a.subject_id IS NOT NULL
               AND a.min_age <= ? AND a.max_age >= ?"""
    params = [learner_id, age, age]
    if subject_id is not None:
        sql += " AND a.subject_id=?"
        params.append(subject_id)
    sql += " GROUP BY a.subject_id ORDER BY a.subject_id"
    return query_db(sql, params)
