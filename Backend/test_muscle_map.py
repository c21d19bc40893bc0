import pytest

from models import BodyCategory, WorkoutType
from muscle_map import (
    MuscleGroup, MUSCLE_GROUP_MAPPING, WORKOUT_TYPE_MUSCLE_GROUPS, UnknownMuscleGroupError,
    category_of_muscle_group, muscle_groups_for_workout_type, get_all_muscle_groups,
    get_muscle_group_label, get_workout_type_label,
)


def test_every_muscle_group_belongs_to_exactly_one_category():
    members = get_all_muscle_groups()
    assert sorted(m.value for m in members) == sorted(m.value for m in MuscleGroup)
    assert len(members) == len(set(members))


@pytest.mark.parametrize("muscle, category", [
    ("chest-upper", BodyCategory.CHEST),
    ("rear-delts", BodyCategory.BACK),
    ("brachialis", BodyCategory.ARMS),
    ("delts-posterior", BodyCategory.SHOULDERS),
    ("calves-soleus", BodyCategory.LEGS),
    (MuscleGroup.LATS, BodyCategory.BACK),
])
def test_category_of_muscle_group(muscle, category):
    assert category_of_muscle_group(muscle) == category


@pytest.mark.parametrize("unknown", ["biceps", "quads", "core", "", "Chest-Upper"])
def test_unknown_muscle_group_is_a_lookup_failure_not_arms(unknown):
    with pytest.raises(UnknownMuscleGroupError) as excinfo:
        category_of_muscle_group(unknown)
    assert isinstance(excinfo.value, LookupError)
    assert excinfo.value.muscle_group == unknown


def test_core_category_has_no_fine_members():
    assert MUSCLE_GROUP_MAPPING[BodyCategory.CORE] == []


def test_push_day_targets_chest_shoulders_and_triceps():
    targets = muscle_groups_for_workout_type(WorkoutType.PUSH)
    categories = {category_of_muscle_group(m) for m in targets}
    assert categories == {BodyCategory.CHEST, BodyCategory.SHOULDERS, BodyCategory.ARMS}
    assert MuscleGroup.TRICEPS_LONG in targets
    assert MuscleGroup.BICEPS_LONG not in targets


def test_pull_day_includes_rear_and_posterior_delts():
    targets = muscle_groups_for_workout_type("pull")
    assert MuscleGroup.REAR_DELTS in targets
    assert MuscleGroup.DELTS_POSTERIOR in targets


def test_workout_type_lookup_returns_a_copy():
    targets = muscle_groups_for_workout_type(WorkoutType.LEGS)
    targets.clear()
    assert WORKOUT_TYPE_MUSCLE_GROUPS[WorkoutType.LEGS]


def test_labels():
    assert get_muscle_group_label("glutes-medius") == "Gluteus Medius"
    assert get_muscle_group_label("not-a-muscle") == "not-a-muscle"
    assert get_workout_type_label(WorkoutType.ARMS) == "Arms Day"
