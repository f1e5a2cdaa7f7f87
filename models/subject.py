"""CRUD for subjects table."""
from db.database import query_db, execute_db
from engine.achievements import subject_mastery_code


def get_all():
    return query_db("SELECT * FROM subjects ORDER BY name")


def get_by_id(subject_id):
    return query_db("SELECT * FROM subjects WHERE id=?", (subject_id,), one=True)


def get_by_name(name):
    return query_db("SELECT * FROM subjects WHERE name=?", (name,), one=True)


def create(name, description=None):
    """Create a subject and its subject-mastery achievement definition."""
    subject_id = execute_db(
        "INSERT INTO subjects (name, description) VALUES (?, ?)",
        (name, description),
    )
    execute_db(
        """INSERT OR IGNORE INTO achievements
           (code, category, name, description, subject_id, celebration_message)
           VALUES (?, 'subject_mastery', ?, ?, ?, ?)""",
        (subject_mastery_code(subject_id), f'{name} Master',
         f'Finished most of {name} with great scores!', subject_id,
         f'You mastered {name}!'),
    )
    return subject_id
