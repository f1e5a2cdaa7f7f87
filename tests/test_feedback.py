"""Tests for engine/feedback.py: message choice never touches scoring."""
from engine.feedback import (
    COMPLETION, FIRST_TRY_WORDS, HINT_PROMPTS, POSITIVE, SUPPORTIVE,
    FeedbackPicker, age_band,
)


def test_age_bands():
    assert age_band(3) == 'prek'
    assert age_band(4) == 'prek'
    assert age_band(5) == 'kindergarten'
    assert age_band(6) == 'kindergarten'
    assert age_band(7) == 'primary'


def test_seeded_pickers_repeat():
    a, b = FeedbackPicker(seed=42), FeedbackPicker(seed=42)
    seq_a = [a.positive(5, False) for _ in range(10)]
    seq_b = [b.positive(5, False) for _ in range(10)]
    assert seq_a == seq_b


def test_positive_from_age_table():
    picker = FeedbackPicker(seed=1)
    for _ in range(20):
        assert picker.positive(3, False) in POSITIVE['prek']


def test_first_attempt_prefers_celebratory_words():
    picker = FeedbackPicker(seed=7)
    for age in (3, 5, 8):
        for _ in range(20):
            msg = picker.positive(age, True)
            assert any(w in msg for w in FIRST_TRY_WORDS)


def test_no_hint_prompt_on_first_attempt():
    picker = FeedbackPicker(seed=3)
    for _ in range(50):
        assert picker.supportive(6, 1, True) not in HINT_PROMPTS


def test_hint_prompts_join_after_second_attempt():
    picker = FeedbackPicker(seed=3)
    seen = {picker.supportive(6, 2, True) for _ in range(200)}
    assert seen <= set(SUPPORTIVE['kindergarten']) | set(HINT_PROMPTS)
    assert seen & set(HINT_PROMPTS)


def test_completion_by_stars_and_age():
    picker = FeedbackPicker()
    assert picker.completion(4, 3) == COMPLETION[3][0]
    assert picker.completion(7, 2) == COMPLETION[2][1]
    assert picker.completion(6, 0) == COMPLETION[1][1]
