"""
GymTrack Activity Aggregator
Heat-map intensity per body category over a lookback window, compared
with the window of equal length right before it.

Signal: the muscle-group tags attached to each exercise, weighted by the
exercise's number of sets. Exercise names are not looked at here (that is
muscle_analyzer's job).
"""
import logging
from datetime import date, timedelta
from enum import Enum
from typing import Iterable

from models import WorkoutSession, BodyCategory, CategoryTrend, ActivityReport
from muscle_map import category_of_muscle_group, UnknownMuscleGroupError

logger = logging.getLogger(__name__)


class ActivityWindow(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    ALL = "all"

    @property
    def days(self) -> int:
        return WINDOW_DAYS[self]


WINDOW_DAYS = {
    ActivityWindow.WEEK: 7,
    ActivityWindow.MONTH: 30,
    ActivityWindow.QUARTER: 90,
    ActivityWindow.ALL: 365,
}


def partition_sessions(
        sessions: Iterable[WorkoutSession],
        window: ActivityWindow,
        today: date,
) -> tuple[list[WorkoutSession], list[WorkoutSession]]:
    """
    Split sessions into (current, previous) windows of `days` calendar days each.
    current:  date > today - days
    previous: today - 2*days < date <= today - days
    """
    current_cutoff = today - timedelta(days=window.days)
    previous_cutoff = today - timedelta(days=2 * window.days)

    current, previous = [], []
    for session in sessions:
        if session.date > current_cutoff:
            current.append(session)
        elif session.date > previous_cutoff:
            previous.append(session)
    return current, previous


def category_activity(sessions: Iterable[WorkoutSession]) -> dict[BodyCategory, int]:
    """Number of sets per body category, from each exercise's muscle tags."""
    counts = {category: 0 for category in BodyCategory}
    for session in sessions:
        for exercise in session.exercises:
            for tag in exercise.muscle_groups:
                try:
                    category = category_of_muscle_group(tag)
                except UnknownMuscleGroupError:
                    logger.warning(f"Ignoring unknown muscle group {tag!r} on {exercise.name!r} ({session.id})")
                    continue
                counts[category] += len(exercise.sets)
    return counts


def normalize_activity(counts: dict[BodyCategory, int]) -> dict[BodyCategory, float]:
    """Scale counts to 0-1 by the largest count; all zeros stay zero."""
    max_count = max(counts.values(), default=0)
    if max_count <= 0:
        return {category: 0.0 for category in counts}
    return {category: count / max_count for category, count in counts.items()}


def trend_percent(current: float, previous: float) -> float:
    if previous > 0:
        return (current - previous) / previous * 100
    return 100.0 if current > 0 else 0.0


def compare_activity(
        sessions: Iterable[WorkoutSession],
        window: ActivityWindow,
        today: date,
        top_n: int = 3,
) -> ActivityReport:
    """
    Build the heat-map report for one window.
    most_worked is ordered by descending current intensity; least_worked is
    the tail of that ordering read backwards, least active first. Equal
    intensities keep BodyCategory order in the ranking.
    """
    window = ActivityWindow(window)
    current, previous = partition_sessions(sessions, window, today)

    current_counts = category_activity(current)
    previous_counts = category_activity(previous)
    current_intensity = normalize_activity(current_counts)
    previous_intensity = normalize_activity(previous_counts)

    trends = [
        CategoryTrend(
            category=category,
            set_count=current_counts[category],
            intensity=current_intensity[category],
            previous_intensity=previous_intensity[category],
            trend=current_intensity[category] - previous_intensity[category],
            trend_percent=trend_percent(current_intensity[category], previous_intensity[category]),
        )
        for category in BodyCategory
    ]
    ranked = sorted(trends, key=lambda t: t.intensity, reverse=True)

    return ActivityReport(
        window=window.value,
        days=window.days,
        current_cutoff=today - timedelta(days=window.days),
        previous_cutoff=today - timedelta(days=2 * window.days),
        current_counts=current_counts,
        previous_counts=previous_counts,
        current_intensity=current_intensity,
        previous_intensity=previous_intensity,
        categories=trends,
        most_worked=ranked[:top_n],
        least_worked=list(reversed(ranked[-top_n:])),
    )
