"""BrightSteps centralized configuration."""
import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DB_PATH = os.environ.get('BRIGHTSTEPS_DB_PATH', os.path.join(BASE_DIR, 'brightsteps.db'))

SECRET_KEY = os.environ.get('SECRET_KEY', 'brightsteps-dev-key')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Used by scripts/simulate_learner.py
API_BASE_URL = os.environ.get('API_BASE_URL', 'http://localhost:5002')

# Age-banded star thresholds: (max_age, three_star, two_star).
# Last band has no upper bound.
STAR_THRESHOLDS = [
    (4, 0.80, 0.60),
    (6, 0.85, 0.70),
    (None, 0.90, 0.75),
]

# Difficulty recommendation
DIFFICULTY_DEFAULTS = {
    'escalate_accuracy': 0.85,
    'escalate_max_attempts': 1.5,
    'deescalate_accuracy': 0.60,
    'deescalate_min_attempts': 3.0,
    'neutral_accuracy': 0.75,
    'recent_window': 20,
    'auto_apply_confidence': 0.5,
}

# Answer validation
VALIDATION_DEFAULTS = {
    'tracing_tolerance': 0.1,
    'tracing_accuracy_threshold': 0.75,
    'tracing_samples': 32,
    'hint_after_failed_attempts': 2,
    # Longest accepted time for one answer or one activity
    'max_time_seconds': 24 * 60 * 60,
}

# Achievement triggers
ACHIEVEMENT_DEFAULTS = {
    'streak_length': 5,
    'streak_min_stars': 2,
    'milestones': (1, 10, 25, 50, 100),
    'streak_day_milestones': (3, 7, 14, 30, 60),
    'mastery_completion': 0.80,
    'mastery_score': 0.85,
}
