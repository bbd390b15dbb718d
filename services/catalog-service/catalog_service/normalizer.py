from collections.abc import Mapping
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError
from sqlalchemy import Row, inspect
from sqlalchemy.exc import NoInspectionAvailable

from .exceptions import ValidationFailure

logger = structlog.get_logger(__name__)

EntityType = TypeVar("EntityType", bound=BaseModel)


def _as_mapping(raw: Any) -> dict[str, Any]:
    if isinstance(raw, Row):
        return dict(raw._mapping)
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        state = inspect(raw)
    except NoInspectionAvailable:
        raise ValidationFailure(f"Cannot normalize {type(raw).__name__} record") from None
    # column attributes only; relationships are attached explicitly by the caller
    return {attr.key: getattr(raw, attr.key) for attr in state.mapper.column_attrs}


def normalize(raw: Any, entity: type[EntityType], **extra: Any) -> EntityType:
    """Map a store record onto a public entity.

    ``raw`` may be an ORM instance, a ``Row`` or a plain mapping; ``extra``
    adds or overrides fields (joined sub-entities, derived flags). The input
    is never modified.
    """
    if raw is None:
        raise ValidationFailure(f"Missing {entity.__name__} record")

    data = _as_mapping(raw)
    data.update(extra)
    if data.get("id") is None:
        logger.warning("normalize_missing_id", entity=entity.__name__)
        raise ValidationFailure(f"{entity.__name__} record has no id")

    try:
        return entity.model_validate(data)
    except ValidationError as exc:
        logger.warning("normalize_failed", entity=entity.__name__, errors=exc.errors(include_url=False))
        raise ValidationFailure(f"Invalid {entity.__name__} record") from exc


def normalize_optional(raw: Any, entity: type[EntityType]) -> EntityType | None:
    """Like :func:`normalize` but an absent outer-join side yields None."""
    if raw is None:
        return None
    return normalize(raw, entity)
