"""
GymTrack Import / Export
Validate uploaded JSON workout data and render sessions as JSON or CSV.
"""
import csv
import io
import json
import logging
from datetime import date
from typing import Any, Iterable
from pydantic import ValidationError

from models import User, WorkoutSession, DataUploadResponse

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Date", "Workout Type", "Exercise", "Set Number", "Reps",
    "Weight", "RPE", "Duration (min)", "Notes",
]


def describe_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'record'}: {err['msg']}"
        for err in error.errors()
    )


def import_sessions(payload: Any, target_user: User) -> tuple[list[WorkoutSession], DataUploadResponse]:
    """
    Validate a decoded JSON payload for one user.

    Records belonging to another user are skipped and counted. Invalid
    records are reported per position and skipped; they never abort the
    rest of the import.
    """
    target_user = User(target_user)
    if not isinstance(payload, list):
        return [], DataUploadResponse(
            success=False,
            message="Data must be an array of workout sessions",
            errors=["Invalid data format"],
        )

    sessions: list[WorkoutSession] = []
    errors: list[str] = []
    skipped = 0

    for index, record in enumerate(payload, start=1):
        if not isinstance(record, dict):
            errors.append(f"Workout {index}: Expected an object")
            continue
        if record.get("user") != target_user.value:
            skipped += 1
            continue

        record = dict(record)
        if not record.get("id"):
            record.pop("id", None)

        try:
            session = WorkoutSession.model_validate(record)
        except ValidationError as e:
            errors.append(f"Workout {index}: {describe_validation_error(e)}")
            continue

        if not session.exercises:
            errors.append(f"Workout {index}: No exercises")
            continue
        sessions.append(session)

    if errors:
        logger.warning(f"Import for {target_user.value}: {len(errors)} invalid record(s)")

    if not sessions:
        return [], DataUploadResponse(
            success=False,
            message="No valid workout sessions found in the uploaded data.",
            skipped=skipped,
            errors=errors or ["Invalid data format"],
        )

    return sessions, DataUploadResponse(
        success=True,
        message=f"Successfully imported {len(sessions)} workout sessions.",
        workouts_imported=len(sessions),
        skipped=skipped,
        errors=errors,
    )


def export_json(sessions: Iterable[WorkoutSession]) -> str:
    return json.dumps(
        [s.model_dump(mode="json", by_alias=True, exclude_none=True) for s in sessions],
        indent=2,
    )


def _format_number(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def export_csv(sessions: Iterable[WorkoutSession]) -> str:
    """One row per set, every field quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)

    for session in sessions:
        for exercise in session.exercises:
            for set_number, exercise_set in enumerate(exercise.sets, start=1):
                notes = "; ".join(n for n in (session.notes, exercise.notes, exercise_set.notes) if n)
                writer.writerow([
                    session.date.isoformat(),
                    session.workout_type.value,
                    exercise.name,
                    set_number,
                    exercise_set.reps,
                    _format_number(exercise_set.weight),
                    _format_number(exercise_set.rpe),
                    session.duration,
                    notes,
                ])

    return buffer.getvalue()


def export_filename(user: User, extension: str, today: date) -> str:
    return f"{User(user).value.lower()}-workouts-{today.isoformat()}.{extension}"
