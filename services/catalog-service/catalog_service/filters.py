"""Visibility and name-search predicates for catalog reads.

Each rule exists twice: as a pure function over loaded values and as a
SQLAlchemy expression fused into the read query. Both must agree.
"""

from typing import Any

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from .models import Exercise, ExerciseVariant


def is_visible(exercise: Any, user_id: str) -> bool:
    """Global exercises are visible to everyone, private ones to their owner."""
    owner = exercise.get("user_id") if isinstance(exercise, dict) else exercise.user_id
    return owner is None or owner == user_id


def visibility_clause(user_id: str, exercise=Exercise) -> ColumnElement[bool]:
    return or_(exercise.user_id.is_(None), exercise.user_id == user_id)


def normalize_query(query_text: str | None) -> str | None:
    # only None and "" disable the search; whitespace is searched as given
    return query_text or None


def matches(exercise_name: str, variant_name: str | None = None, query_text: str | None = None) -> bool:
    needle = normalize_query(query_text)
    if needle is None:
        return True
    needle = needle.lower()
    if needle in (exercise_name or "").lower():
        return True
    return variant_name is not None and needle in variant_name.lower()


def search_clause(
    query_text: str | None,
    exercise=Exercise,
    variant=ExerciseVariant,
) -> ColumnElement[bool] | None:
    """ILIKE over the exercise name OR the joined variant name.

    Returns None when there is nothing to filter on. ``%`` and ``_`` in the
    query are matched literally. ``exercise`` and ``variant`` may be aliases.
    """
    needle = normalize_query(query_text)
    if needle is None:
        return None
    return or_(
        exercise.name.icontains(needle, autoescape=True),
        variant.name.icontains(needle, autoescape=True),
    )
