"""
GymTrack Muscle Mapping Module
Fine-grained muscle groups, the body categories they roll up into, and the
muscle groups each workout type targets.
Pure data and lookups - no external dependencies.
"""
from enum import Enum

from models import BodyCategory, WorkoutType


class UnknownMuscleGroupError(LookupError):
    """Raised when a muscle-group identifier is not part of the taxonomy."""

    def __init__(self, muscle_group: str):
        super().__init__(f"Unknown muscle group: {muscle_group!r}")
        self.muscle_group = muscle_group


class MuscleGroup(str, Enum):
    # Chest
    CHEST_UPPER = "chest-upper"
    CHEST_MIDDLE = "chest-middle"
    CHEST_LOWER = "chest-lower"

    # Back
    LATS = "lats"
    RHOMBOIDS = "rhomboids"
    TRAPS_MIDDLE = "traps-middle"
    TRAPS_LOWER = "traps-lower"
    REAR_DELTS = "rear-delts"

    # Arms
    BICEPS_LONG = "biceps-long"
    BICEPS_SHORT = "biceps-short"
    BRACHIALIS = "brachialis"
    TRICEPS_LONG = "triceps-long"
    TRICEPS_LATERAL = "triceps-lateral"
    TRICEPS_MEDIAL = "triceps-medial"
    FOREARMS_FLEXORS = "forearms-flexors"
    FOREARMS_EXTENSORS = "forearms-extensors"

    # Shoulders
    DELTS_ANTERIOR = "delts-anterior"
    DELTS_MEDIAL = "delts-medial"
    DELTS_POSTERIOR = "delts-posterior"

    # Legs
    QUADS_VASTUS_LATERALIS = "quads-vastus-lateralis"
    QUADS_VASTUS_MEDIALIS = "quads-vastus-medialis"
    QUADS_RECTUS_FEMORIS = "quads-rectus-femoris"
    QUADS_VASTUS_INTERMEDIUS = "quads-vastus-intermedius"
    HAMSTRINGS_BICEPS_FEMORIS = "hamstrings-biceps-femoris"
    HAMSTRINGS_SEMITENDINOSUS = "hamstrings-semitendinosus"
    HAMSTRINGS_SEMIMEMBRANOSUS = "hamstrings-semimembranosus"
    GLUTES_MAXIMUS = "glutes-maximus"
    GLUTES_MEDIUS = "glutes-medius"
    GLUTES_MINIMUS = "glutes-minimus"
    CALVES_GASTROCNEMIUS = "calves-gastrocnemius"
    CALVES_SOLEUS = "calves-soleus"


_ARMS = [
    MuscleGroup.BICEPS_LONG, MuscleGroup.BICEPS_SHORT, MuscleGroup.BRACHIALIS,
    MuscleGroup.TRICEPS_LONG, MuscleGroup.TRICEPS_LATERAL, MuscleGroup.TRICEPS_MEDIAL,
    MuscleGroup.FOREARMS_FLEXORS, MuscleGroup.FOREARMS_EXTENSORS,
]

_LEGS = [
    MuscleGroup.QUADS_VASTUS_LATERALIS, MuscleGroup.QUADS_VASTUS_MEDIALIS,
    MuscleGroup.QUADS_RECTUS_FEMORIS, MuscleGroup.QUADS_VASTUS_INTERMEDIUS,
    MuscleGroup.HAMSTRINGS_BICEPS_FEMORIS, MuscleGroup.HAMSTRINGS_SEMITENDINOSUS,
    MuscleGroup.HAMSTRINGS_SEMIMEMBRANOSUS,
    MuscleGroup.GLUTES_MAXIMUS, MuscleGroup.GLUTES_MEDIUS, MuscleGroup.GLUTES_MINIMUS,
    MuscleGroup.CALVES_GASTROCNEMIUS, MuscleGroup.CALVES_SOLEUS,
]

# ============================================================
# Body Category -> Muscle Groups
# Every muscle group belongs to exactly one category. CORE has no
# fine-grained members yet, so it only ever shows up as zero activity.
# ============================================================

MUSCLE_GROUP_MAPPING: dict[BodyCategory, list[MuscleGroup]] = {
    BodyCategory.CHEST: [
        MuscleGroup.CHEST_UPPER, MuscleGroup.CHEST_MIDDLE, MuscleGroup.CHEST_LOWER,
    ],
    BodyCategory.BACK: [
        MuscleGroup.LATS, MuscleGroup.RHOMBOIDS, MuscleGroup.TRAPS_MIDDLE,
        MuscleGroup.TRAPS_LOWER, MuscleGroup.REAR_DELTS,
    ],
    BodyCategory.ARMS: list(_ARMS),
    BodyCategory.SHOULDERS: [
        MuscleGroup.DELTS_ANTERIOR, MuscleGroup.DELTS_MEDIAL, MuscleGroup.DELTS_POSTERIOR,
    ],
    BodyCategory.LEGS: list(_LEGS),
    BodyCategory.CORE: [],
}

# Reverse index built once from the mapping above
_CATEGORY_BY_MUSCLE: dict[str, BodyCategory] = {
    muscle.value: category
    for category, muscles in MUSCLE_GROUP_MAPPING.items()
    for muscle in muscles
}

# ============================================================
# Workout Type -> Targeted Muscle Groups
# ============================================================

WORKOUT_TYPE_MUSCLE_GROUPS: dict[WorkoutType, list[MuscleGroup]] = {
    WorkoutType.ARMS: list(_ARMS),
    WorkoutType.PUSH: [
        MuscleGroup.CHEST_UPPER, MuscleGroup.CHEST_MIDDLE, MuscleGroup.CHEST_LOWER,
        MuscleGroup.DELTS_ANTERIOR, MuscleGroup.DELTS_MEDIAL, MuscleGroup.DELTS_POSTERIOR,
        MuscleGroup.TRICEPS_LONG, MuscleGroup.TRICEPS_LATERAL, MuscleGroup.TRICEPS_MEDIAL,
    ],
    WorkoutType.PULL: [
        MuscleGroup.LATS, MuscleGroup.RHOMBOIDS, MuscleGroup.TRAPS_MIDDLE,
        MuscleGroup.TRAPS_LOWER, MuscleGroup.REAR_DELTS,
        MuscleGroup.BICEPS_LONG, MuscleGroup.BICEPS_SHORT, MuscleGroup.BRACHIALIS,
        MuscleGroup.DELTS_POSTERIOR,
    ],
    WorkoutType.LEGS: list(_LEGS),
}

MUSCLE_GROUP_LABELS: dict[MuscleGroup, str] = {
    MuscleGroup.CHEST_UPPER: "Upper Chest",
    MuscleGroup.CHEST_MIDDLE: "Middle Chest",
    MuscleGroup.CHEST_LOWER: "Lower Chest",
    MuscleGroup.LATS: "Latissimus Dorsi",
    MuscleGroup.RHOMBOIDS: "Rhomboids",
    MuscleGroup.TRAPS_MIDDLE: "Middle Traps",
    MuscleGroup.TRAPS_LOWER: "Lower Traps",
    MuscleGroup.REAR_DELTS: "Rear Deltoids",
    MuscleGroup.BICEPS_LONG: "Biceps Long Head",
    MuscleGroup.BICEPS_SHORT: "Biceps Short Head",
    MuscleGroup.BRACHIALIS: "Brachialis",
    MuscleGroup.TRICEPS_LONG: "Triceps Long Head",
    MuscleGroup.TRICEPS_LATERAL: "Triceps Lateral Head",
    MuscleGroup.TRICEPS_MEDIAL: "Triceps Medial Head",
    MuscleGroup.FOREARMS_FLEXORS: "Forearm Flexors",
    MuscleGroup.FOREARMS_EXTENSORS: "Forearm Extensors",
    MuscleGroup.DELTS_ANTERIOR: "Anterior Deltoid",
    MuscleGroup.DELTS_MEDIAL: "Medial Deltoid",
    MuscleGroup.DELTS_POSTERIOR: "Posterior Deltoid",
    MuscleGroup.QUADS_VASTUS_LATERALIS: "Vastus Lateralis",
    MuscleGroup.QUADS_VASTUS_MEDIALIS: "Vastus Medialis",
    MuscleGroup.QUADS_RECTUS_FEMORIS: "Rectus Femoris",
    MuscleGroup.QUADS_VASTUS_INTERMEDIUS: "Vastus Intermedius",
    MuscleGroup.HAMSTRINGS_BICEPS_FEMORIS: "Biceps Femoris",
    MuscleGroup.HAMSTRINGS_SEMITENDINOSUS: "Semitendinosus",
    MuscleGroup.HAMSTRINGS_SEMIMEMBRANOSUS: "Semimembranosus",
    MuscleGroup.GLUTES_MAXIMUS: "Gluteus Maximus",
    MuscleGroup.GLUTES_MEDIUS: "Gluteus Medius",
    MuscleGroup.GLUTES_MINIMUS: "Gluteus Minimus",
    MuscleGroup.CALVES_GASTROCNEMIUS: "Gastrocnemius",
    MuscleGroup.CALVES_SOLEUS: "Soleus",
}

WORKOUT_TYPE_LABELS: dict[WorkoutType, str] = {
    WorkoutType.ARMS: "Arms Day",
    WorkoutType.PUSH: "Push Day",
    WorkoutType.PULL: "Pull Day",
    WorkoutType.LEGS: "Legs Day",
}


# ============================================================
# Lookups
# ============================================================

def category_of_muscle_group(muscle_group: str) -> BodyCategory:
    """
    Return the body category a fine-grained muscle group belongs to.
    Raises UnknownMuscleGroupError for identifiers outside the taxonomy.
    """
    key = muscle_group.value if isinstance(muscle_group, MuscleGroup) else str(muscle_group)
    try:
        return _CATEGORY_BY_MUSCLE[key]
    except KeyError:
        raise UnknownMuscleGroupError(key) from None


def muscle_groups_for_workout_type(workout_type: WorkoutType) -> list[MuscleGroup]:
    """Muscle groups a workout type targets, used to pre-fill new exercises."""
    return list(WORKOUT_TYPE_MUSCLE_GROUPS.get(WorkoutType(workout_type), []))


def get_all_muscle_groups() -> list[MuscleGroup]:
    return [muscle for muscles in MUSCLE_GROUP_MAPPING.values() for muscle in muscles]


def get_muscle_group_label(muscle_group: str) -> str:
    try:
        return MUSCLE_GROUP_LABELS[MuscleGroup(muscle_group)]
    except ValueError:
        return str(muscle_group)


def get_workout_type_label(workout_type: WorkoutType) -> str:
    return WORKOUT_TYPE_LABELS.get(workout_type, str(workout_type))


# ============================================================
# Example Usage
# ============================================================
if __name__ == "__main__":
    print("chest-upper ->", category_of_muscle_group("chest-upper").value)
    print("Push day targets:", [m.value for m in muscle_groups_for_workout_type(WorkoutType.PUSH)])
