# validator.py
# Turns an untyped tool payload into a canonical Step, or fails.
#
# Checks run in a fixed order and stop at the first violation. Optional
# fields are carried through uncoerced; absent ones stay None. Branch keys
# and the follow-up hint are type-checked, nothing else optional is.

import math
from collections.abc import Mapping
from typing import Any

from jiminy_thinking.categories import CategorySet
from jiminy_thinking.models import Step


class StepValidationError(Exception):
    """Raised when a payload cannot become a Step. Message names the field."""


# Wire key -> Step attribute, for optional pass-through fields.
OPTIONAL_FIELDS: dict[str, str] = {
    "isRevision": "is_revision",
    "revisesIndex": "revises_index",
    "branchFromIndex": "branch_from_index",
    "branchId": "branch_id",
    "needsMore": "needs_more",
    "followupHint": "followup_hint",
}


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    # inf / nan cannot be written back as JSON.
    return isinstance(value, float) and math.isfinite(value)


def validate_step(payload: Any, categories: CategorySet) -> Step:
    """
    Validate `payload` against the required-field rules and `categories`.

    Raises StepValidationError on the first failed check. Has no side effects.
    """
    if not isinstance(payload, Mapping):
        raise StepValidationError("Invalid payload: must be an object")

    text = payload.get("text")
    if not isinstance(text, str) or not text:
        raise StepValidationError("Invalid text: must be a non-empty string")

    index = payload.get("index")
    if not _is_number(index):
        raise StepValidationError("Invalid index: must be a number")

    estimated_total = payload.get("estimatedTotal")
    if not _is_number(estimated_total):
        raise StepValidationError("Invalid estimatedTotal: must be a number")

    continuation = payload.get("continuation")
    if not isinstance(continuation, bool):
        raise StepValidationError("Invalid continuation: must be a boolean")

    category = payload.get("category")
    if not categories.contains(category):
        raise StepValidationError(
            f"Invalid category: must be one of the configured set ({categories.describe()})"
        )

    # Fields that key the branch index or feed rendering must have the right
    # shape before the step is appended.
    branch_from_index = payload.get("branchFromIndex")
    if branch_from_index is not None and not _is_number(branch_from_index):
        raise StepValidationError("Invalid branchFromIndex: must be a number")

    branch_id = payload.get("branchId")
    if branch_id is not None and not isinstance(branch_id, str):
        raise StepValidationError("Invalid branchId: must be a string")

    followup_hint = payload.get("followupHint")
    if followup_hint is not None and not isinstance(followup_hint, str):
        raise StepValidationError("Invalid followupHint: must be a string")

    values: dict[str, Any] = {
        "text": text,
        "index": index,
        "estimated_total": estimated_total,
        "continuation": continuation,
        "category": category,
    }
    for key, attr in OPTIONAL_FIELDS.items():
        if payload.get(key) is not None:
            values[attr] = payload[key]

    # model_construct: no coercion of the pass-through fields.
    return Step.model_construct(**values)
