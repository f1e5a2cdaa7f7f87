"""Per-question-type answer checking.

validate() never raises on learner input: a submission with the wrong
shape for its question type is simply incorrect.
"""
import json
import logging
import math

from config.settings import VALIDATION_DEFAULTS
from engine.records import AnswerCheck

log = logging.getLogger(__name__)

MULTIPLE_CHOICE = 'multiplechoice'
DRAG_DROP = 'dragdrop'
MATCHING = 'matching'
TRACING = 'tracing'
TRUE_FALSE = 'truefalse'

_ALIASES = {
    'draganddrop': DRAG_DROP,
    'mcq': MULTIPLE_CHOICE,
}


def normalize_type(question_type):
    """'Multiple_Choice', 'multiple-choice' and 'multiplechoice' are one type."""
    key = str(question_type or '').lower()
    for ch in ('_', '-', ' '):
        key = key.replace(ch, '')
    return _ALIASES.get(key, key)


def validate(question, submitted,
             tracing_threshold=VALIDATION_DEFAULTS['tracing_accuracy_threshold']):
    """Check a submission against a question.

    Returns AnswerCheck(is_correct, points_earned).
    """
    q_type = normalize_type(question.question_type)
    payload = question.correct_answer

    if q_type == MULTIPLE_CHOICE:
        is_correct = _check_multiple_choice(submitted, payload)
    elif q_type in (DRAG_DROP, MATCHING):
        is_correct = _check_mapping(submitted, payload)
    elif q_type == TRACING:
        is_correct = tracing_accuracy(submitted, payload) >= tracing_threshold
    elif q_type == TRUE_FALSE:
        is_correct = _check_true_false(submitted, payload)
    else:
        is_correct = _normalize(submitted) == _normalize(payload)

    return AnswerCheck(is_correct, question.points if is_correct else 0)


def should_offer_hint(failed_attempts, hints_enabled,
                      after=VALIDATION_DEFAULTS['hint_after_failed_attempts']):
    return bool(hints_enabled) and failed_attempts >= after


def _decode(payload):
    try:
        return json.loads(payload)
    except (ValueError, TypeError):
        return None


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_multiple_choice(submitted, payload):
    """Submitted index set must equal the correct index set exactly."""
    if _is_int(submitted):
        chosen = {submitted}
    elif isinstance(submitted, (list, tuple)) and submitted and all(_is_int(i) for i in submitted):
        chosen = set(submitted)
    else:
        log.debug('Malformed multiple-choice answer: %r', submitted)
        return False

    decoded = _decode(payload)
    if _is_int(decoded):
        correct = {decoded}
    elif isinstance(decoded, list) and decoded and all(_is_int(i) for i in decoded):
        correct = set(decoded)
    else:
        # Undecodable payload: compare a single index as text
        if len(chosen) != 1:
            return False
        return _normalize(next(iter(chosen))) == _normalize(payload)

    return chosen == correct


def _check_mapping(submitted, payload):
    """Drag-drop and matching: source→target pairs must match as a set."""
    if not isinstance(submitted, dict) or not submitted:
        log.debug('Malformed mapping answer: %r', submitted)
        return False
    correct = _decode(payload)
    if not isinstance(correct, dict) or not correct:
        return False
    return _pairs(submitted) == _pairs(correct)


def _pairs(mapping):
    return {(str(k).strip(), str(v).strip()) for k, v in mapping.items()}


def _check_true_false(submitted, payload):
    if not isinstance(submitted, bool):
        log.debug('Malformed true/false answer: %r', submitted)
        return False
    decoded = _decode(str(payload).strip().lower())
    if not isinstance(decoded, bool):
        return False
    return submitted is decoded


def _normalize(value):
    return str(value).strip().lower()


# --- Tracing ---

def tracing_accuracy(submitted, payload,
                     default_tolerance=VALIDATION_DEFAULTS['tracing_tolerance'],
                     samples=VALIDATION_DEFAULTS['tracing_samples']):
    """Fraction (0-1) of the traced path that stays within tolerance.

    The trace and the reference path are both resampled by arc length.
    The score is the lower of precision (trace samples near the reference)
    and coverage (reference samples near the trace), so a single dot on
    the path does not pass.
    """
    trace = _points(submitted)
    if trace is None:
        log.debug('Malformed tracing answer')
        return 0.0

    decoded = _decode(payload)
    tolerance = default_tolerance
    if isinstance(decoded, dict):
        tol = decoded.get('tolerance')
        if _is_number(tol) and tol > 0:
            tolerance = float(tol)
        decoded = decoded.get('path')
    reference = _points(decoded)
    if reference is None:
        return 0.0

    trace_samples = _resample(trace, samples)
    ref_samples = _resample(reference, samples)

    precision = _fraction_within(trace_samples, reference, tolerance)
    coverage = _fraction_within(ref_samples, trace, tolerance)
    return min(precision, coverage)


def _points(raw):
    if not isinstance(raw, (list, tuple)) or len(raw) < 2:
        return None
    points = []
    for p in raw:
        if not isinstance(p, (list, tuple)) or len(p) != 2:
            return None
        x, y = p
        if not (_is_number(x) and _is_number(y)):
            return None
        try:
            x, y = float(x), float(y)
        except OverflowError:
            return None
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        points.append((x, y))
    return points


def _resample(points, n):
    """n points evenly spaced along the polyline."""
    lengths = [math.dist(a, b) for a, b in zip(points, points[1:])]
    total = sum(lengths)
    if total == 0:
        return [points[0]] * n

    step = total / (n - 1)
    out = [points[0]]
    seg = 0
    walked = 0.0
    for i in range(1, n - 1):
        target = i * step
        while seg < len(lengths) - 1 and walked + lengths[seg] < target:
            walked += lengths[seg]
            seg += 1
        seg_len = lengths[seg]
        t = (target - walked) / seg_len if seg_len else 0.0
        (x0, y0), (x1, y1) = points[seg], points[seg + 1]
        out.append((x0 + (x1 - x0) * t, y0 + (y1 - y0) * t))
    out.append(points[-1])
    return out


def _fraction_within(samples, polyline, tolerance):
    near = sum(1 for p in samples if _distance_to_polyline(p, polyline) <= tolerance)
    return near / len(samples)


def _distance_to_polyline(p, polyline):
    return min(_distance_to_segment(p, a, b) for a, b in zip(polyline, polyline[1:]))


def _distance_to_segment(p, a, b):
    (px, py), (ax, ay), (bx, by) = p, a, b
    dx, dy = bx - ax, by - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.dist(p, a)
    t = max(0.0, min(1.0, ((px - ax) * dx + (py - ay) * dy) / length_sq))
    return math.dist(p, (ax + t * dx, ay + t * dy))
