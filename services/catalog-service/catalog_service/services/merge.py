from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

import structlog

from ..filters import is_visible, matches
from ..normalizer import normalize, normalize_optional
from ..schemas import CategoryResponse, UnifiedExerciseResponse, VariantResponse

logger = structlog.get_logger(__name__)

_EPOCH = datetime.min


def _variant_recency(variant: Any) -> tuple:
    updated_at = getattr(variant, "updated_at", None) or _EPOCH
    created_at = getattr(variant, "created_at", None) or _EPOCH
    # sqlite hands back naive values, postgres aware ones; compare on wall time
    return (updated_at.replace(tzinfo=None), created_at.replace(tzinfo=None), str(variant.id))


def pick_variant(variants: Sequence[Any], user_id: str) -> Any | None:
    """Choose the variant attached to an exercise for ``user_id``.

    Only the caller's own variants qualify. When more than one exists the
    most recently updated wins.
    """
    owned = [v for v in variants if v is not None and v.user_id == user_id]
    if not owned:
        return None
    if len(owned) > 1:
        logger.warning(
            "duplicate_variants_collapsed",
            exercise_id=owned[0].exercise_id,
            variant_ids=[v.id for v in owned],
        )
    return max(owned, key=_variant_recency)


def merge_exercise_rows(
    rows: Iterable[tuple[Any, Any, Any]],
    user_id: str,
    query_text: str | None = None,
) -> list[UnifiedExerciseResponse]:
    """Fold ``(exercise, variant, category)`` join rows into unified entities.

    One entity per exercise, in first-seen order. Visibility and the name
    search are re-applied after the variant is chosen, so a row matched only
    through a discarded duplicate variant is dropped.
    """
    grouped: dict[str, dict[str, Any]] = {}
    for exercise, variant, category in rows:
        entry = grouped.setdefault(exercise.id, {"exercise": exercise, "category": category, "variants": []})
        if variant is not None and variant.exercise_id == exercise.id:
            entry["variants"].append(variant)

    merged = []
    for entry in grouped.values():
        exercise = entry["exercise"]
        if not is_visible(exercise, user_id):
            continue
        variant = pick_variant(entry["variants"], user_id)
        if not matches(exercise.name, variant.name if variant is not None else None, query_text):
            continue
        merged.append(
            normalize(
                exercise,
                UnifiedExerciseResponse,
                variant=normalize_optional(variant, VariantResponse),
                category=normalize_optional(entry["category"], CategoryResponse),
                has_user=exercise.user_id is not None,
            )
        )
    return merged
