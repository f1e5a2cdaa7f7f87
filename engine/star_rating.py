"""Star rating for a completed activity attempt.

Stars come from accuracy alone, against age-banded thresholds:
  age <= 4 : 80% for 3 stars, 60% for 2
  age 5-6  : 85% / 70%
  age >= 7 : 90% / 75%
Completing an activity always earns at least one star.
"""
from config.settings import STAR_THRESHOLDS
from engine.records import StarRating


def thresholds_for_age(age, bands=STAR_THRESHOLDS):
    """Return (three_star, two_star) accuracy cutoffs for a learner's age."""
    for max_age, three, two in bands:
        if max_age is None or age <= max_age:
            return three, two
    return bands[-1][1], bands[-1][2]


def rate(correct_count, total_count, time_spent_seconds, estimated_seconds,
         is_first_attempt, learner_age):
    accuracy = correct_count / total_count if total_count > 0 else 0.0
    # Diagnostic only; does not change the star count
    time_ratio = estimated_seconds / max(time_spent_seconds, 1)

    three, two = thresholds_for_age(learner_age)
    if accuracy >= three:
        stars = 3
    elif accuracy >= two:
        stars = 2
    else:
        stars = 1

    return StarRating(
        stars=stars,
        accuracy=accuracy,
        time_ratio=round(time_ratio, 2),
        three_star_threshold=three,
        two_star_threshold=two,
        first_attempt=bool(is_first_attempt),
    )
