"""CRUD for achievements (definitions) and awarded_achievements."""
from db.database import query_db, execute_count


def get_all():
    return query_db("SELECT * FROM achievements ORDER BY id")


def get_by_code(code):
    return query_db("SELECT * FROM achievements WHERE code=?", (code,), one=True)


def award(learner_id, achievement_id, earned_at):
    """Award once. Returns True if a new row was created, False if already held."""
    changed = execute_count(
        """INSERT INTO awarded_achievements (learner_id, achievement_id, earned_at)
           VALUES (?, ?, ?)
           ON CONFLICT(learner_id, achievement_id) DO NOTHING""",
        (learner_id, achievement_id, earned_at),
    )
    return changed > 0


def get_awarded(learner_id, achievement_id):
    return query_db(
        """SELECT aw.*, a.code, a.category, a.name, a.description, a.celebration_message
           FROM awarded_achievements aw
           JOIN achievements a ON aw.achievement_id = a.id
           WHERE aw.learner_id=? AND aw.achievement_id=?""",
        (learner_id, achievement_id), one=True,
    )


def get_for_learner(learner_id):
    return query_db(
        """SELECT aw.*, a.code, a.category, a.name, a.description, a.celebration_message
           FROM awarded_achievements aw
           JOIN achievements a ON aw.achievement_id = a.id
           WHERE aw.learner_id=?
           ORDER BY aw.earned_at, aw.id""",
        (learner_id,),
    )


def get_earned_codes(learner_id):
    rows = query_db(
        """SELECT a.code FROM awarded_achievements aw
           JOIN achievements a ON aw.achievement_id = a.id
           WHERE aw.learner_id=?""",
        (learner_id,),
    )
    return {r['code'] for r in rows}


def get_uncelebrated(learner_id):
    return query_db(
        """SELECT aw.*, a.code, a.category, a.name, a.description, a.celebration_message
           FROM awarded_achievements aw
           JOIN achievements a ON aw.achievement_id = a.id
           WHERE aw.learner_id=? AND aw.celebrated=0
           ORDER BY aw.earned_at, aw.id""",
        (learner_id,),
    )


def mark_celebrated(learner_id, awarded_ids):
    """Flip celebrated for the given awarded rows. Returns rows changed."""
    ids = [int(i) for i in awarded_ids]
    if not ids:
        return 0
    placeholders = ','.join('?' * len(ids))
    return execute_count(
        f"""UPDATE awarded_achievements SET celebrated=1
            WHERE learner_id=? AND celebrated=0 AND id IN ({placeholders})""",
        (learner_id, *ids),
    )
