"""
GymTrack Muscle Group Analyzer
Infers trained muscle groups from exercise names and aggregates counts,
volume and recency per group across a workout history.

This keyword taxonomy is deliberately separate from muscle_map.MuscleGroup:
it matches free-text exercise names, not the tags attached to exercises.
"""
from typing import Iterable

from models import WorkoutSession, MuscleGroupRecord
from stats_service import exercise_volume

# Muscle group -> keywords looked for inside the lowercased exercise name.
# Plain substring containment: "Bench Press" matches nothing here, while
# "Close-grip chest press with triceps focus" matches chest and triceps.
MUSCLE_KEYWORDS: dict[str, list[str]] = {
    "chest": ["chest", "pectorals", "pecs"],
    "back": ["back", "lats", "latissimus", "rhomboids", "traps", "trapezius"],
    "shoulders": ["shoulders", "delts", "deltoids"],
    "biceps": ["biceps", "bicep"],
    "triceps": ["triceps", "tricep"],
    "forearms": ["forearms", "forearm"],
    "abs": ["abs", "core", "abdominals"],
    "quadriceps": ["quadriceps", "quads", "quad"],
    "hamstrings": ["hamstrings", "hamstring"],
    "glutes": ["glutes", "glute", "buttocks"],
    "calves": ["calves", "calf"],
    "neck": ["neck"],
}


def exercise_matches(exercise_name: str, muscle_key: str) -> bool:
    """True if any keyword of the muscle group occurs in the exercise name."""
    name = exercise_name.lower()
    return any(keyword.lower() in name for keyword in MUSCLE_KEYWORDS.get(muscle_key, []))


def analyze_muscle_groups(sessions: Iterable[WorkoutSession]) -> list[MuscleGroupRecord]:
    """
    Build one record per muscle group in MUSCLE_KEYWORDS.

    An exercise adds 1 to workout_count of every group it matches, no matter
    how many sets it has. Groups that were never matched are still returned
    with zero counts.
    """
    records = {
        muscle_id: MuscleGroupRecord(id=muscle_id, name=muscle_id.capitalize())
        for muscle_id in MUSCLE_KEYWORDS
    }

    for session in sessions:
        for exercise in session.exercises:
            for muscle_id in MUSCLE_KEYWORDS:
                if not exercise_matches(exercise.name, muscle_id):
                    continue

                record = records[muscle_id]
                record.workout_count += 1
                record.total_volume += exercise_volume(exercise)

                if record.last_worked is None or session.date > record.last_worked:
                    record.last_worked = session.date

                if exercise.name not in record.exercises:
                    record.exercises.append(exercise.name)

    return list(records.values())


def workouts_for_muscle_group(
        sessions: Iterable[WorkoutSession],
        muscle_key: str,
) -> list[WorkoutSession]:
    """Sessions with at least one exercise matching the group's keywords."""
    if muscle_key not in MUSCLE_KEYWORDS:
        return []
    return [
        session for session in sessions
        if any(exercise_matches(ex.name, muscle_key) for ex in session.exercises)
    ]
