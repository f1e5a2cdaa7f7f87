"""Difficulty recommendation from a rolling window of answers.

High accuracy with few attempts moves a learner one level up; low accuracy
or many attempts moves them one level down. Confidence grows with the
distance of recent accuracy from the 75% midpoint.
"""
from config.settings import DIFFICULTY_DEFAULTS
from engine.records import DifficultyRecommendation

LEVELS = ('Easy', 'Medium', 'Hard')


def canonical_level(name):
    for level in LEVELS:
        if str(name).strip().lower() == level.lower():
            return level
    raise ValueError(f'Unknown difficulty level: {name!r}')


def recommend(recent_results, current_difficulty, settings=DIFFICULTY_DEFAULTS):
    """Recommend a difficulty level.

    Args:
        recent_results: ordered list of AnswerOutcome.
        current_difficulty: 'Easy', 'Medium' or 'Hard'.
    """
    current = canonical_level(current_difficulty)
    if not recent_results:
        return DifficultyRecommendation(
            current=current,
            recommended=current,
            should_adjust=False,
            confidence=0.0,
            reasoning='Not enough data for a recommendation',
        )

    n = len(recent_results)
    avg_accuracy = sum(1 for r in recent_results if r.is_correct) / n
    avg_attempts = sum(r.attempt_number for r in recent_results) / n
    confidence = abs(avg_accuracy - settings['neutral_accuracy']) * 2

    escalate = (avg_accuracy >= settings['escalate_accuracy']
                and avg_attempts <= settings['escalate_max_attempts'])
    deescalate = (avg_accuracy <= settings['deescalate_accuracy']
                  or avg_attempts >= settings['deescalate_min_attempts'])

    idx = LEVELS.index(current)
    pct = f'{avg_accuracy * 100:.0f}%'
    if escalate:
        # Hard stays Hard
        recommended = LEVELS[min(idx + 1, len(LEVELS) - 1)]
        reasoning = (f'High accuracy ({pct}) suggests readiness for more challenge'
                     if recommended != current
                     else 'Current difficulty level is appropriate')
    elif deescalate and current != LEVELS[0]:
        recommended = LEVELS[idx - 1]
        reasoning = (f'Lower accuracy ({pct}, {avg_attempts:.1f} attempts per question) '
                     f'suggests easier content')
    else:
        recommended = current
        reasoning = 'Current difficulty level is appropriate'

    return DifficultyRecommendation(
        current=current,
        recommended=recommended,
        should_adjust=recommended != current,
        confidence=confidence,
        reasoning=reasoning,
        average_accuracy=avg_accuracy,
        average_attempts=avg_attempts,
    )
