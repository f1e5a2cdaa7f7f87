"""Age-appropriate feedback messages.

Message choice is random for variety but never feeds back into scoring.
Pass a seed to FeedbackPicker for repeatable output.
"""
import random

POSITIVE = {
    'prek': [
        'Yay! You did it!',
        'Amazing! Great job!',
        'Wow! You are so smart!',
        'Perfect! I am so proud!',
        'Excellent work!',
        'You are awesome!',
    ],
    'kindergarten': [
        'Excellent! You got it right!',
        'Perfect! Amazing work!',
        'Outstanding! You are doing great!',
        'Wonderful! Keep it up!',
        'Fantastic job!',
        'Brilliant! You are a star!',
    ],
    'primary': [
        'Perfect! Outstanding work!',
        'Excellent! You nailed it!',
        'Amazing! Your hard work paid off!',
        'Fantastic! You are really learning!',
        'Brilliant! Keep up the great work!',
        'Outstanding! You should be proud!',
    ],
}

SUPPORTIVE = {
    'prek': [
        'That is okay! Try again!',
        'Almost! You can do it!',
        'Good try! Let us try once more!',
        'Nice attempt! Keep going!',
        'You are learning! Try again!',
    ],
    'kindergarten': [
        'Good effort! Let us try again!',
        'Almost there! You can do it!',
        'Nice try! Think about it once more!',
        'You are on the right track! Keep going!',
        'Learning is about practice! Try again!',
    ],
    'primary': [
        'Good attempt! Let us think about this!',
        'You are getting closer! Try again!',
        'Nice try! Take your time to think!',
        'Learning takes practice! Keep going!',
        'Do not give up! You have got this!',
    ],
}

HINT_PROMPTS = [
    'Try using the hint!',
    'Need a little help? Check the hint!',
]

FIRST_TRY_WORDS = ('Perfect', 'Amazing', 'Excellent')

COMPLETION = {
    3: ('WOW! You are amazing!', 'Perfect! Outstanding work! You are a star!'),
    2: ('Great job! You did so well!', 'Excellent work! You are doing great!'),
    1: ('Good job! Keep learning!', 'Good effort! Keep practicing and you will get even better!'),
}


def age_band(age):
    if age <= 4:
        return 'prek'
    if age <= 6:
        return 'kindergarten'
    return 'primary'


class FeedbackPicker:
    """Seedable message chooser."""

    def __init__(self, seed=None):
        self._rng = random.Random(seed)

    def positive(self, age, is_first_attempt):
        messages = POSITIVE[age_band(age)]
        if is_first_attempt:
            messages = [m for m in messages if any(w in m for w in FIRST_TRY_WORDS)] or messages
        return self._rng.choice(messages)

    def supportive(self, age, attempt_number, hints_available):
        messages = list(SUPPORTIVE[age_band(age)])
        if hints_available and attempt_number >= 2:
            messages.extend(HINT_PROMPTS)
        return self._rng.choice(messages)

    def completion(self, age, stars):
        young, older = COMPLETION.get(stars, COMPLETION[1])
        return young if age <= 4 else older
