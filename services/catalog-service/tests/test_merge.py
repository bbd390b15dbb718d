from datetime import datetime

from catalog_service.models import Exercise, ExerciseCategory, ExerciseVariant
from catalog_service.services.merge import merge_exercise_rows, pick_variant

ALICE = "user-alice"
BOB = "user-bob"


def _variant(variant_id, name, user_id=ALICE, exercise_id="e1", updated_at=None, created_at=None):
    return ExerciseVariant(
        id=variant_id,
        name=name,
        user_id=user_id,
        exercise_id=exercise_id,
        updated_at=updated_at,
        created_at=created_at,
    )


def test_pick_variant_ignores_other_users():
    assert pick_variant([_variant("v1", "Bob's Squat", user_id=BOB)], ALICE) is None


def test_pick_variant_prefers_most_recent_update():
    older = _variant("v1", "Zercher", updated_at=datetime(2024, 1, 1))
    newer = _variant("v2", "Pause Squat", updated_at=datetime(2024, 6, 1))
    assert pick_variant([newer, older], ALICE) is newer
    assert pick_variant([older, newer], ALICE) is newer


def test_pick_variant_tie_breaks_on_created_at():
    same = datetime(2024, 1, 1)
    first = _variant("v1", "A", updated_at=same, created_at=datetime(2023, 1, 1))
    second = _variant("v2", "B", updated_at=same, created_at=datetime(2023, 6, 1))
    assert pick_variant([second, first], ALICE) is second


def test_one_entity_per_exercise_with_duplicate_variants():
    exercise = Exercise(id="e1", name="Back Squat")
    category = ExerciseCategory(id="c1", name="Legs")
    rows = [
        (exercise, _variant("v1", "Zercher", updated_at=datetime(2024, 1, 1)), category),
        (exercise, _variant("v2", "Pause Squat", updated_at=datetime(2024, 6, 1)), category),
    ]

    merged = merge_exercise_rows(rows, ALICE)

    assert len(merged) == 1
    assert merged[0].variant.id == "v2"
    assert merged[0].category.name == "Legs"


def test_search_is_rechecked_against_chosen_variant():
    exercise = Exercise(id="e1", name="Back Squat")
    rows = [
        (exercise, _variant("v1", "Zercher", updated_at=datetime(2024, 1, 1)), None),
        (exercise, _variant("v2", "Pause Squat", updated_at=datetime(2024, 6, 1)), None),
    ]
    assert merge_exercise_rows(rows, ALICE, "zercher") == []
    assert [u.variant.name for u in merge_exercise_rows(rows, ALICE, "pause")] == ["Pause Squat"]


def test_invisible_rows_are_dropped():
    rows = [(Exercise(id="e2", name="Secret Lift", user_id=BOB), None, None)]
    assert merge_exercise_rows(rows, ALICE) == []


def test_has_user_reflects_exercise_owner_not_variant():
    global_with_variant = Exercise(id="e1", name="Back Squat")
    private = Exercise(id="e2", name="Sled Push", user_id=ALICE)
    rows = [
        (global_with_variant, _variant("v1", "Pause Squat"), None),
        (private, None, None),
    ]

    merged = {u.id: u for u in merge_exercise_rows(rows, ALICE)}

    assert merged["e1"].has_user is False
    assert merged["e1"].variant is not None
    assert merged["e2"].has_user is True
    assert merged["e2"].variant is None
    assert merged["e2"].category is None


def test_order_follows_first_appearance():
    rows = [
        (Exercise(id="b", name="Bench Press"), None, None),
        (Exercise(id="a", name="Back Squat"), None, None),
    ]
    assert [u.id for u in merge_exercise_rows(rows, ALICE)] == ["b", "a"]
