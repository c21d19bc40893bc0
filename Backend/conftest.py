from datetime import date

import pytest

from models import User, WorkoutType, WorkoutSession


@pytest.fixture
def today() -> date:
    return date(2024, 3, 15)


@pytest.fixture
def make_session():
    """Build a WorkoutSession from wire-style exercise dicts."""
    def _make(day, exercises=(), user=User.NAV, workout_type=WorkoutType.PUSH, **fields):
        return WorkoutSession.model_validate({
            "user": user,
            "date": day,
            "workoutType": workout_type,
            "exercises": list(exercises),
            **fields,
        })
    return _make


def exercise(name, sets=((10, 100),), muscle_groups=()):
    return {
        "name": name,
        "muscleGroups": list(muscle_groups),
        "sets": [{"reps": reps, "weight": weight} for reps, weight in sets],
    }


@pytest.fixture
def ex():
    return exercise
