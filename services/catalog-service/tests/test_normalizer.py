import pytest
from sqlalchemy import select

from catalog_service.exceptions import ValidationFailure
from catalog_service.models import Exercise, ExerciseCategory, ExerciseVariant
from catalog_service.normalizer import normalize, normalize_optional
from catalog_service.schemas import (
    CategoryResponse,
    DescriptionResponse,
    ExerciseResponse,
    UnifiedExerciseResponse,
    VariantResponse,
)


def test_normalize_plain_mapping_accepts_category_alias():
    raw = {"id": "e1", "name": "Back Squat", "video": None, "image": None, "category": "c1"}
    exercise = normalize(raw, ExerciseResponse)
    assert exercise.id == "e1"
    assert exercise.category_id == "c1"


def test_normalize_does_not_mutate_input():
    raw = {"id": "d1", "description": "Keep the bar over mid-foot", "user_id": "user-alice"}
    snapshot = dict(raw)
    normalize(raw, DescriptionResponse, exercise_id="e1")
    assert raw == snapshot


def test_normalize_orm_instance_uses_columns_only():
    variant = ExerciseVariant(id="v1", name="Pause Squat", user_id="user-alice", exercise_id="e1")
    result = normalize(variant, VariantResponse)
    assert result.name == "Pause Squat"
    assert result.exercise_id == "e1"
    assert result.user_id == "user-alice"


@pytest.mark.parametrize("raw", [{"name": "No id"}, {"id": None, "name": "Null id"}])
def test_missing_id_is_a_validation_failure(raw):
    with pytest.raises(ValidationFailure) as exc_info:
        normalize(raw, CategoryResponse)
    assert exc_info.value.kind == "validation_failure"
    assert exc_info.value.status_code == 422


def test_shape_mismatch_is_a_validation_failure():
    with pytest.raises(ValidationFailure):
        normalize({"id": "c1"}, CategoryResponse)


def test_unknown_record_type_is_rejected():
    with pytest.raises(ValidationFailure):
        normalize(object(), CategoryResponse)


def test_none_record_is_rejected_but_optional_is_not():
    with pytest.raises(ValidationFailure):
        normalize(None, CategoryResponse)
    assert normalize_optional(None, CategoryResponse) is None


def test_unified_entity_from_orm_with_extras():
    exercise = Exercise(id="e1", name="Back Squat", user_id=None, category_id="c1")
    category = ExerciseCategory(id="c1", name="Legs")
    unified = normalize(
        exercise,
        UnifiedExerciseResponse,
        category=normalize(category, CategoryResponse),
        variant=None,
        has_user=False,
    )
    assert unified.category.name == "Legs"
    assert unified.variant is None
    assert unified.has_user is False


async def test_normalize_row(db, catalog):
    row = (await db.execute(select(ExerciseCategory.id, ExerciseCategory.name))).first()
    category = normalize(row, CategoryResponse)
    assert category.id == catalog["legs"]
    assert category.name == "Legs"
