"""
GymTrack Statistics Service
Summary numbers for the dashboard, strength progression and volume trends.
Every function is pure: it only reads the sessions it is given, and any
date window is measured from an explicit `today`.
"""
import logging
import math
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from models import (
    WorkoutSession, Exercise, ExerciseSet, WorkoutType, WorkoutStats,
    ProgressionPoint, ExerciseProgression, VolumePoint, VolumeTrends,
    PersonalRecord,
)

logger = logging.getLogger(__name__)

# Brzycki's denominator (37 - reps) hits zero at 37 reps
BRZYCKI_REP_LIMIT = 37

PROGRESSION_METRICS = ("max_weight", "max_reps", "volume", "one_rep_max")


# ============================================================
# Volume
# ============================================================

def set_volume(exercise_set: ExerciseSet) -> float:
    """reps x weight, or 0 if the product is not a finite number."""
    try:
        volume = float(exercise_set.reps) * float(exercise_set.weight)
    except (TypeError, ValueError):
        logger.warning(f"Skipping set with non-numeric reps/weight: {exercise_set!r}")
        return 0.0
    if not math.isfinite(volume):
        logger.warning(f"Skipping set with non-finite volume: {exercise_set!r}")
        return 0.0
    return volume


def exercise_volume(exercise: Exercise) -> float:
    return sum(set_volume(s) for s in exercise.sets)


def session_volume(session: WorkoutSession) -> float:
    return sum(exercise_volume(ex) for ex in session.exercises)


def total_volume(sessions: Iterable[WorkoutSession]) -> float:
    return sum(session_volume(s) for s in sessions)


# ============================================================
# Formulas
# ============================================================

def one_rep_max(weight: float, reps: int) -> float:
    """
    Estimate a one-rep max with the Brzycki formula.
    1RM = weight * 36 / (37 - reps), and exactly `weight` for a single.
    Raises ValueError for reps below 1 or at/above 37, where the formula
    has no meaningful value.
    """
    if reps < 1 or reps >= BRZYCKI_REP_LIMIT:
        raise ValueError(f"Brzycki estimate needs 1 <= reps < {BRZYCKI_REP_LIMIT}, got {reps}")
    if reps == 1:
        return float(weight)
    return weight * 36 / (BRZYCKI_REP_LIMIT - reps)


def growth_rate(values: Sequence[float]) -> float:
    """Percent change from the first to the last value; 0 if undefined."""
    if len(values) < 2:
        return 0.0
    first, last = values[0], values[-1]
    if not first:
        return 0.0
    return (last - first) / first * 100


# ============================================================
# Streaks
# ============================================================

def current_streak(dates: Iterable[date], today: date) -> int:
    """
    Consecutive training days ending today.
    If nothing is logged today yet, the streak may still end yesterday;
    anything older than that means the streak is broken.
    """
    days = set(dates)
    yesterday = today - timedelta(days=1)
    if today in days:
        cursor = today
    elif yesterday in days:
        cursor = yesterday
    else:
        return 0

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(dates: Iterable[date]) -> int:
    """Longest run of consecutive calendar days with at least one session."""
    longest = 0
    run = 0
    previous = None
    for day in sorted(set(dates)):
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


# ============================================================
# Dashboard
# ============================================================

def workout_type_distribution(sessions: Iterable[WorkoutSession]) -> dict[WorkoutType, int]:
    distribution = {workout_type: 0 for workout_type in WorkoutType}
    for session in sessions:
        distribution[session.workout_type] += 1
    return distribution


def favorite_workout_type(sessions: Iterable[WorkoutSession]) -> Optional[WorkoutType]:
    """Most frequent workout type; ties go to the earlier WorkoutType member."""
    counts = Counter(s.workout_type for s in sessions)
    if not counts:
        return None
    # max() keeps the first maximum, so iteration order decides ties
    return max(WorkoutType, key=lambda workout_type: counts.get(workout_type, 0))


def calculate_workout_stats(sessions: Iterable[WorkoutSession], today: date) -> WorkoutStats:
    """Compute the dashboard summary for one user's sessions."""
    sessions = list(sessions)
    if not sessions:
        return WorkoutStats()

    total_minutes = sum(s.duration for s in sessions)
    ratings = [s.rating for s in sessions if s.rating is not None]

    week_cutoff = today - timedelta(days=7)
    month_cutoff = today - timedelta(days=30)
    dates = [s.date for s in sessions]

    return WorkoutStats(
        total_workouts=len(sessions),
        total_duration_min=total_minutes,
        total_hours=round(total_minutes / 60, 1),
        total_volume=total_volume(sessions),
        avg_duration=round(total_minutes / len(sessions), 1),
        avg_rating=round(sum(ratings) / len(ratings), 1) if ratings else None,
        this_week_workouts=sum(1 for d in dates if d > week_cutoff),
        last_30_days_workouts=sum(1 for d in dates if d > month_cutoff),
        this_month_workouts=sum(1 for d in dates if (d.year, d.month) == (today.year, today.month)),
        current_streak=current_streak(dates, today),
        longest_streak=longest_streak(dates),
        favorite_workout_type=favorite_workout_type(sessions),
    )


# ============================================================
# Strength Progression
# ============================================================

def best_one_rep_max(sets: Iterable[ExerciseSet]) -> float:
    """Highest 1RM estimate over the sets the formula can handle."""
    best = 0.0
    for s in sets:
        try:
            best = max(best, one_rep_max(s.weight, s.reps))
        except ValueError:
            logger.debug(f"No 1RM estimate for {s.reps} reps at {s.weight}")
    return best


def exercise_growth_rate(data: Sequence[ProgressionPoint], metric: str) -> float:
    if metric not in PROGRESSION_METRICS:
        raise ValueError(f"Unknown progression metric: {metric}")
    return growth_rate([getattr(point, metric) for point in data])


def strength_progression(
        sessions: Iterable[WorkoutSession],
        exercise: Optional[str] = None,
        min_points: int = 2,
) -> list[ExerciseProgression]:
    """
    Per-exercise history with one point per training date.
    Several entries of the same exercise on one date are merged: maxima are
    kept and volumes added. Exercises with fewer than `min_points` dates are
    left out, as there is nothing to chart.
    """
    history: dict[str, dict[date, ProgressionPoint]] = {}

    for session in sessions:
        for ex in session.exercises:
            if exercise is not None and ex.name != exercise:
                continue
            if not ex.sets:
                continue

            max_weight = max(s.weight for s in ex.sets)
            max_reps = max(s.reps for s in ex.sets)
            volume = exercise_volume(ex)
            estimate = best_one_rep_max(ex.sets)

            points = history.setdefault(ex.name, {})
            existing = points.get(session.date)
            if existing:
                existing.max_weight = max(existing.max_weight, max_weight)
                existing.max_reps = max(existing.max_reps, max_reps)
                existing.volume += volume
                existing.one_rep_max = max(existing.one_rep_max, estimate)
            else:
                points[session.date] = ProgressionPoint(
                    date=session.date,
                    max_weight=max_weight,
                    max_reps=max_reps,
                    volume=volume,
                    one_rep_max=estimate,
                )

    progressions = []
    for name, points in history.items():
        data = sorted(points.values(), key=lambda p: p.date)
        if len(data) < min_points:
            continue
        progressions.append(ExerciseProgression(
            exercise=name,
            data=data,
            weight_growth=exercise_growth_rate(data, "max_weight"),
            one_rep_max_growth=exercise_growth_rate(data, "one_rep_max"),
            volume_growth=exercise_growth_rate(data, "volume"),
        ))
    return progressions


# ============================================================
# Volume Trends
# ============================================================

def volume_trends(sessions: Iterable[WorkoutSession], today: date, days: int = 90) -> VolumeTrends:
    """
    Daily training volume over the last `days` days.
    The trend compares the average of the last 30% of training days with
    the first 30%.
    """
    cutoff = today - timedelta(days=days)
    by_date: dict[date, VolumePoint] = {}

    for session in sessions:
        if session.date <= cutoff:
            continue
        point = by_date.get(session.date)
        if point is None:
            point = VolumePoint(
                date=session.date,
                workout_type_volumes={workout_type: 0.0 for workout_type in WorkoutType},
            )
            by_date[session.date] = point

        volume = session_volume(session)
        point.total_volume += volume
        point.workout_type_volumes[session.workout_type] += volume
        point.exercise_count += len(session.exercises)
        point.set_count += sum(len(ex.sets) for ex in session.exercises)

    points = sorted(by_date.values(), key=lambda p: p.date)
    if not points:
        return VolumeTrends(days=days)

    volumes = [p.total_volume for p in points]
    window = max(1, int(len(points) * 0.3))
    recent = sum(volumes[-window:]) / window
    earliest = sum(volumes[:window]) / window

    return VolumeTrends(
        days=days,
        points=points,
        total_volume=sum(volumes),
        average_volume=sum(volumes) / len(volumes),
        max_volume=max(volumes),
        training_days=len(points),
        trend=(recent - earliest) / earliest * 100 if earliest > 0 else 0.0,
        workout_type_breakdown={
            workout_type: sum(p.workout_type_volumes[workout_type] for p in points)
            for workout_type in WorkoutType
        },
    )


# ============================================================
# Personal Records
# ============================================================

def personal_records(sessions: Iterable[WorkoutSession]) -> list[PersonalRecord]:
    """
    Best set per (user, exercise): heavier weight wins, equal weight with
    more reps wins. Sessions are replayed in date order so the record keeps
    the date it was first achieved.
    """
    records: dict[tuple, PersonalRecord] = {}
    for session in sorted(sessions, key=lambda s: s.date):
        for ex in session.exercises:
            key = (session.user, ex.name)
            for s in ex.sets:
                best = records.get(key)
                if best is None or s.weight > best.weight or (
                        s.weight == best.weight and s.reps > best.reps):
                    records[key] = PersonalRecord(
                        exercise_name=ex.name,
                        weight=s.weight,
                        reps=s.reps,
                        date=session.date,
                        user=session.user,
                    )
    return list(records.values())
