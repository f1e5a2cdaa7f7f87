"""Content unlocking.

Checks run in a fixed order and the first failure wins: active, age,
premium, prerequisites.
"""
from engine.records import PrerequisiteProgress, UnlockStatus

UNAVAILABLE = 'unavailable'
NOT_AGE_APPROPRIATE = 'not age-appropriate'
PREMIUM_REQUIRED = 'premium required'
PREREQUISITES_INCOMPLETE = 'prerequisites incomplete'


def is_unlocked(item, learner, completed_item_ids, has_premium_access):
    """Return UnlockStatus(unlocked, reason); reason is None when unlocked."""
    if not item.is_active:
        return UnlockStatus(False, UNAVAILABLE)
    if not item.min_age <= learner.age <= item.max_age:
        return UnlockStatus(False, NOT_AGE_APPROPRIATE)
    if item.requires_premium and not has_premium_access:
        return UnlockStatus(False, PREMIUM_REQUIRED)
    completed = set(completed_item_ids)
    if any(pid not in completed for pid in item.prerequisites):
        return UnlockStatus(False, PREREQUISITES_INCOMPLETE)
    return UnlockStatus(True, None)


def prerequisite_progress(item, completed_item_ids):
    completed = set(completed_item_ids)
    done = tuple(pid for pid in item.prerequisites if pid in completed)
    missing = tuple(pid for pid in item.prerequisites if pid not in completed)
    if not item.prerequisites:
        pct = 100
    else:
        pct = int(len(done) / len(item.prerequisites) * 100)
    return PrerequisiteProgress(completed=done, missing=missing, percentage=pct)


def unlocked_items(items, learner, completed_item_ids, has_premium_access):
    completed = set(completed_item_ids)
    return [item for item in items
            if is_unlocked(item, learner, completed, has_premium_access).unlocked]


def newly_unlocked(before_ids, after_ids):
    """Ids unlocked by the latest completion, in their after-order."""
    before = set(before_ids)
    return [i for i in after_ids if i not in before]


def next_item(items, learner, completed_item_ids, has_premium_access, target_difficulty):
    """First unlocked, not yet completed item, preferring target_difficulty.

    Items are taken in the order given. Returns None when nothing is left.
    """
    completed = set(completed_item_ids)
    open_items = [item for item in unlocked_items(items, learner, completed, has_premium_access)
                  if item.id not in completed]
    for item in open_items:
        if item.difficulty == target_difficulty:
            return item
    return open_items[0] if open_items else None
