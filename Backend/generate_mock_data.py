import logging
import os
import random
import sys
from datetime import date, timedelta
from dotenv import load_dotenv

# Add current directory to path to import local modules
sys.path.append(os.getcwd())

# Load environment variables explicitly
load_dotenv()

try:
    from models import User, WorkoutType, WorkoutSession, Exercise, ExerciseSet
    from muscle_map import MuscleGroup
    from database import get_repository, init_database, close_connection
except ImportError as e:
    print(f"Error importing modules: {e}")
    print("Make sure you are running this script from the Backend directory.")
    sys.exit(1)

logger = logging.getLogger("mock_data")

# Configuration
WORKOUTS_PER_USER = 24
DAYS_BACK = 90

# Mock Data Constants: exercise name -> explicit muscle tags
EXERCISES: dict[WorkoutType, dict[str, list[MuscleGroup]]] = {
    WorkoutType.PUSH: {
        "Bench Press": [MuscleGroup.CHEST_MIDDLE, MuscleGroup.TRICEPS_LATERAL],
        "Incline Dumbbell Chest Press": [MuscleGroup.CHEST_UPPER, MuscleGroup.DELTS_ANTERIOR],
        "Shoulders Press": [MuscleGroup.DELTS_ANTERIOR, MuscleGroup.DELTS_MEDIAL],
        "Triceps Pushdown": [MuscleGroup.TRICEPS_LATERAL, MuscleGroup.TRICEPS_MEDIAL],
    },
    WorkoutType.PULL: {
        "Lats Pulldown": [MuscleGroup.LATS, MuscleGroup.BICEPS_SHORT],
        "Barbell Row": [MuscleGroup.LATS, MuscleGroup.RHOMBOIDS, MuscleGroup.TRAPS_MIDDLE],
        "Face Pull": [MuscleGroup.REAR_DELTS, MuscleGroup.TRAPS_LOWER],
    },
    WorkoutType.LEGS: {
        "Squat": [MuscleGroup.QUADS_RECTUS_FEMORIS, MuscleGroup.GLUTES_MAXIMUS],
        "Hamstring Curl": [MuscleGroup.HAMSTRINGS_BICEPS_FEMORIS],
        "Standing Calf Raise": [MuscleGroup.CALVES_GASTROCNEMIUS, MuscleGroup.CALVES_SOLEUS],
    },
    WorkoutType.ARMS: {
        "Biceps Curl": [MuscleGroup.BICEPS_LONG, MuscleGroup.BICEPS_SHORT],
        "Hammer Curl": [MuscleGroup.BRACHIALIS, MuscleGroup.FOREARMS_FLEXORS],
        "Overhead Triceps Extension": [MuscleGroup.TRICEPS_LONG],
    },
}


def generate_sets(base_weight: float) -> list[ExerciseSet]:
    return [
        ExerciseSet(
            reps=random.randint(6, 12),
            weight=base_weight + random.choice([0, 5, 10]),
            rpe=random.randint(6, 9),
        )
        for _ in range(random.randint(3, 4))
    ]


def generate_sessions(user: User) -> list[WorkoutSession]:
    """Generate mock sessions spread over the last DAYS_BACK days."""
    today = date.today()
    days = sorted(random.sample(range(DAYS_BACK), WORKOUTS_PER_USER), reverse=True)
    sessions = []

    for days_ago in days:
        workout_type = random.choice(list(WorkoutType))
        exercises = [
            Exercise(
                name=name,
                muscle_groups=[m.value for m in muscles],
                sets=generate_sets(random.randint(20, 60) + (DAYS_BACK - days_ago) // 7 * 2.5),
            )
            for name, muscles in EXERCISES[workout_type].items()
        ]
        sessions.append(WorkoutSession(
            user=user,
            date=today - timedelta(days=days_ago),
            workout_type=workout_type,
            exercises=exercises,
            duration=random.randint(40, 90),
            rating=random.randint(5, 10),
        ))

    return sessions


def main():
    logging.basicConfig(level=logging.INFO)
    init_database()
    repo = get_repository()

    for user in User:
        sessions = generate_sessions(user)
        for session in sessions:
            repo.save(session)
        logger.info(f"Generated {len(sessions)} workouts for {user.value}")

    close_connection()


if __name__ == "__main__":
    main()
