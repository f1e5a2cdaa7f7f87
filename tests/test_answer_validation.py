"""Tests for engine/answer_validation.py."""
import json

import pytest

from engine.answer_validation import (
    normalize_type, should_offer_hint, tracing_accuracy, validate,
)
from engine.records import Question

L_PATH = [[0.3, 0.1], [0.3, 0.9], [0.7, 0.9]]


def _q(question_type, correct, points=10):
    if not isinstance(correct, str):
        correct = json.dumps(correct)
    return Question(id=1, question_type=question_type, correct_answer=correct, points=points)


# --- Multiple choice ---

def test_multiple_choice_single_correct():
    result = validate(_q('multiple_choice', 2), 2)
    assert result.is_correct is True
    assert result.points_earned == 10


def test_multiple_choice_single_wrong():
    result = validate(_q('multiple_choice', 2), 1)
    assert result.is_correct is False
    assert result.points_earned == 0


def test_multiple_choice_list_payload_single_answer():
    assert validate(_q('multiple_choice', [2]), 2).is_correct


def test_multiple_choice_multi_select_order_does_not_matter():
    assert validate(_q('multiple_choice', [0, 2]), [2, 0]).is_correct


def test_multiple_choice_multi_select_must_be_exact():
    q = _q('multiple_choice', [0, 2])
    assert not validate(q, [0]).is_correct
    assert not validate(q, [0, 1, 2]).is_correct
    assert not validate(q, 0).is_correct


@pytest.mark.parametrize('submitted', ['2', True, None, 2.0, {'a': 1}, [], ['2']])
def test_multiple_choice_malformed_is_incorrect(submitted):
    assert validate(_q('multiple_choice', 2), submitted).is_correct is False


def test_bool_is_not_an_index():
    assert not validate(_q('multiple_choice', 1), True).is_correct


# --- Drag-drop / matching ---

def test_drag_drop_exact_mapping():
    q = _q('drag_drop', {'1': 'a', '2': 'b'})
    assert validate(q, {'1': 'a', '2': 'b'}).is_correct


def test_drag_drop_int_keys_match_json_string_keys():
    q = _q('drag_drop', {'1': 10, '2': 20})
    assert validate(q, {1: 10, 2: 20}).is_correct


def test_drag_drop_swapped_targets_wrong():
    q = _q('drag_drop', {'1': 'a', '2': 'b'})
    assert not validate(q, {'1': 'b', '2': 'a'}).is_correct


def test_drag_drop_partial_mapping_wrong():
    q = _q('drag_drop', {'1': 'a', '2': 'b'})
    assert not validate(q, {'1': 'a'}).is_correct


def test_drag_drop_extra_pair_wrong():
    q = _q('drag_drop', {'1': 'a'})
    assert not validate(q, {'1': 'a', '2': 'b'}).is_correct


@pytest.mark.parametrize('submitted', [['a', 'b'], 'a', None, 3, {}])
def test_mapping_malformed_is_incorrect(submitted):
    assert not validate(_q('matching', {'1': 'a'}), submitted).is_correct


def test_matching_uses_mapping_comparison():
    q = _q('matching', {'cat': 'kitten', 'dog': 'puppy'})
    assert validate(q, {'dog': 'puppy', 'cat': 'kitten'}).is_correct


# --- True / false ---

def test_true_false_correct():
    assert validate(_q('true_false', 'true'), True).is_correct
    assert validate(_q('true_false', 'False'), False).is_correct


def test_true_false_wrong():
    assert not validate(_q('true_false', 'true'), False).is_correct


@pytest.mark.parametrize('submitted', ['true', 1, 0, None, [True]])
def test_true_false_requires_bool(submitted):
    assert not validate(_q('true_false', 'true'), submitted).is_correct


# --- Fallback ---

def test_unknown_type_uses_string_equality():
    q = _q('short_answer', 'Cat')
    assert validate(q, ' cat ').is_correct
    assert not validate(q, 'dog').is_correct


def test_unknown_type_with_non_string_submission():
    assert validate(_q('counting', '7'), 7).is_correct


# --- Type names ---

@pytest.mark.parametrize('name,expected', [
    ('multiple_choice', 'multiplechoice'),
    ('MultipleChoice', 'multiplechoice'),
    ('multiple-choice', 'multiplechoice'),
    ('DragAndDrop', 'dragdrop'),
    ('drag_drop', 'dragdrop'),
    ('TrueFalse', 'truefalse'),
    ('Tracing', 'tracing'),
])
def test_normalize_type(name, expected):
    assert normalize_type(name) == expected


def test_original_style_type_names_dispatch():
    assert validate(_q('MultipleChoice', 1), 1).is_correct
    assert validate(_q('DragAndDrop', {'1': '2'}), {'1': '2'}).is_correct


# --- Tracing ---

def test_tracing_exact_path_passes():
    assert tracing_accuracy(L_PATH, json.dumps(L_PATH)) == pytest.approx(1.0)
    assert validate(_q('tracing', L_PATH), L_PATH).is_correct


def test_tracing_small_wobble_passes():
    wobbly = [[0.33, 0.1], [0.28, 0.5], [0.32, 0.88], [0.69, 0.92]]
    assert validate(_q('tracing', L_PATH), wobbly).is_correct


def test_tracing_far_away_fails():
    assert not validate(_q('tracing', L_PATH), [[0.9, 0.1], [0.9, 0.5]]).is_correct


def test_tracing_single_dot_on_path_fails():
    dot = [[0.3, 0.5], [0.3, 0.5]]
    assert tracing_accuracy(dot, json.dumps(L_PATH)) < 0.75
    assert not validate(_q('tracing', L_PATH), dot).is_correct


def test_tracing_per_path_tolerance():
    shifted = [[0.45, 0.1], [0.45, 0.9], [0.85, 0.9]]
    strict = _q('tracing', {'path': L_PATH})
    loose = _q('tracing', {'path': L_PATH, 'tolerance': 0.2})
    assert not validate(strict, shifted).is_correct
    assert validate(loose, shifted).is_correct


@pytest.mark.parametrize('submitted', [
    None,
    [[0.3, 0.1]],
    [['a', 1], [2, 3]],
    [[True, 1], [0, 0]],
    [[0.1, 0.2, 0.3], [0.1, 0.2, 0.3]],
    [[10 ** 400, 0], [1, 1]],
    [[0.3, 0.1], [float('inf'), 0.9]],
    'M 0 0 L 1 1',
])
def test_tracing_malformed_is_incorrect(submitted):
    assert not validate(_q('tracing', L_PATH), submitted).is_correct


# --- Hints ---

def test_hint_offered_after_two_failures():
    assert not should_offer_hint(1, True)
    assert should_offer_hint(2, True)
    assert should_offer_hint(5, True)


def test_no_hint_when_disabled():
    assert not should_offer_hint(5, False)


def test_points_follow_question_value():
    assert validate(_q('multiple_choice', 1, points=25), 1).points_earned == 25
