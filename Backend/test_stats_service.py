from datetime import date

import pytest
from pydantic import ValidationError

from models import ExerciseSet, User, WorkoutType
from stats_service import (
    set_volume, total_volume, one_rep_max, growth_rate, current_streak, longest_streak,
    favorite_workout_type, calculate_workout_stats, best_one_rep_max, exercise_growth_rate,
    strength_progression, volume_trends, personal_records, workout_type_distribution,
)


# ============================================================
# Volume
# ============================================================

def test_volume_sums_reps_times_weight(make_session, ex):
    sessions = [
        make_session(date(2024, 1, 1), [ex("Squat", [(5, 200), (5, 200)]), ex("Pull Up", [(10, 0)])]),
        make_session(date(2024, 1, 3), [ex("Row", [(8, 62.5)])]),
    ]
    assert total_volume(sessions) == 2500


def test_malformed_numbers_are_rejected_on_input():
    with pytest.raises(ValidationError):
        ExerciseSet(reps=10, weight="heavy")
    with pytest.raises(ValidationError):
        ExerciseSet(reps=10, weight=float("nan"))
    with pytest.raises(ValidationError):
        ExerciseSet(reps=0, weight=100)


def test_set_volume_guards_unvalidated_values():
    assert set_volume(ExerciseSet.model_construct(reps=10, weight="heavy")) == 0.0
    assert set_volume(ExerciseSet.model_construct(reps=10, weight=float("inf"))) == 0.0
    assert set_volume(ExerciseSet.model_construct(reps=3, weight=10.5)) == 31.5


# ============================================================
# Formulas
# ============================================================

@pytest.mark.parametrize("weight", [0, 45, 100, 227.5])
def test_one_rep_max_of_a_single_is_the_weight(weight):
    assert one_rep_max(weight, 1) == weight


def test_one_rep_max_brzycki():
    assert one_rep_max(100, 10) == pytest.approx(133.333, rel=1e-4)
    assert one_rep_max(200, 5) == pytest.approx(225.0)


@pytest.mark.parametrize("reps", [0, -1, 37, 50])
def test_one_rep_max_undefined_rep_counts(reps):
    with pytest.raises(ValueError):
        one_rep_max(100, reps)


def test_best_one_rep_max_skips_sets_outside_the_formula():
    sets = [ExerciseSet(reps=40, weight=50), ExerciseSet(reps=5, weight=100)]
    assert best_one_rep_max(sets) == pytest.approx(112.5)
    assert best_one_rep_max([ExerciseSet(reps=40, weight=50)]) == 0.0


@pytest.mark.parametrize("values, expected", [
    ([], 0.0),
    ([100], 0.0),
    ([0, 50], 0.0),
    ([100, 120, 150], 50.0),
    ([200, 100], -50.0),
])
def test_growth_rate(values, expected):
    assert growth_rate(values) == pytest.approx(expected)


# ============================================================
# Streaks
# ============================================================

def test_current_streak_including_today():
    days = [date(2024, 3, 15), date(2024, 3, 14), date(2024, 3, 13), date(2024, 3, 11)]
    assert current_streak(days, date(2024, 3, 15)) == 3


def test_current_streak_allows_rest_today():
    days = [date(2024, 3, 14), date(2024, 3, 13)]
    assert current_streak(days, date(2024, 3, 15)) == 2


def test_current_streak_broken():
    days = [date(2024, 3, 13), date(2024, 3, 12)]
    assert current_streak(days, date(2024, 3, 15)) == 0
    assert current_streak([], date(2024, 3, 15)) == 0


def test_longest_streak_counts_distinct_days():
    days = [
        date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 2), date(2024, 1, 3),
        date(2024, 2, 10), date(2024, 2, 11),
    ]
    assert longest_streak(days) == 3
    assert longest_streak([]) == 0


# ============================================================
# Dashboard
# ============================================================

def test_favorite_workout_type_tie_goes_to_declaration_order(make_session):
    sessions = [
        make_session(date(2024, 1, 1), workout_type=WorkoutType.LEGS),
        make_session(date(2024, 1, 2), workout_type=WorkoutType.PUSH),
        make_session(date(2024, 1, 3), workout_type=WorkoutType.LEGS),
        make_session(date(2024, 1, 4), workout_type=WorkoutType.PUSH),
    ]
    assert favorite_workout_type(sessions) == WorkoutType.PUSH
    assert favorite_workout_type([]) is None


def test_distribution_includes_every_type(make_session):
    sessions = [make_session(date(2024, 1, 1), workout_type=WorkoutType.PULL)]
    assert workout_type_distribution(sessions) == {
        WorkoutType.ARMS: 0, WorkoutType.PUSH: 0, WorkoutType.PULL: 1, WorkoutType.LEGS: 0,
    }


def test_stats_without_sessions(today):
    stats = calculate_workout_stats([], today)
    assert stats.total_workouts == 0
    assert stats.avg_rating is None
    assert stats.favorite_workout_type is None


def test_stats_windows_and_averages(make_session, ex, today):
    sessions = [
        make_session(date(2024, 3, 14), [ex("Squat", [(5, 100)])], duration=60, rating=8,
                     workout_type=WorkoutType.LEGS),
        make_session(date(2024, 3, 8), duration=45, rating=6),
        make_session(date(2024, 3, 1), duration=30),
        make_session(date(2024, 2, 20), duration=50, workout_type=WorkoutType.LEGS),
        make_session(date(2024, 1, 10), duration=40, workout_type=WorkoutType.LEGS),
    ]
    stats = calculate_workout_stats(sessions, today)

    assert stats.total_workouts == 5
    assert stats.total_duration_min == 225
    assert stats.total_hours == 3.8
    assert stats.avg_duration == 45.0
    # unrated sessions do not drag the average down
    assert stats.avg_rating == 7.0
    assert stats.total_volume == 500
    # 2024-03-08 is exactly seven days back, outside a seven-day window
    assert stats.this_week_workouts == 1
    assert stats.last_30_days_workouts == 4
    assert stats.this_month_workouts == 3
    assert stats.current_streak == 1
    assert stats.longest_streak == 1
    assert stats.favorite_workout_type == WorkoutType.LEGS


def test_trailing_windows_span_exactly_n_days(make_session, today):
    sessions = [
        make_session(today),
        make_session(date(2024, 3, 9)),
        make_session(date(2024, 3, 8)),
        make_session(date(2024, 2, 15)),
        make_session(date(2024, 2, 14)),
    ]
    stats = calculate_workout_stats(sessions, today)
    assert stats.this_week_workouts == 2
    assert stats.last_30_days_workouts == 4


# ============================================================
# Strength Progression
# ============================================================

def test_progression_merges_same_day_and_sorts(make_session, ex):
    sessions = [
        make_session(date(2024, 2, 1), [ex("Bench Press", [(5, 110)])]),
        make_session(date(2024, 1, 1), [ex("Bench Press", [(8, 100)])]),
        make_session(date(2024, 1, 1), [ex("Bench Press", [(10, 90)])]),
        make_session(date(2024, 1, 5), [ex("Curl", [(12, 30)])]),
    ]
    progressions = strength_progression(sessions)

    assert [p.exercise for p in progressions] == ["Bench Press"]
    bench = progressions[0]
    assert [p.date for p in bench.data] == [date(2024, 1, 1), date(2024, 2, 1)]
    first = bench.data[0]
    assert first.max_weight == 100
    assert first.max_reps == 10
    assert first.volume == 800 + 900
    assert bench.weight_growth == pytest.approx(10.0)
    assert bench.volume_growth == pytest.approx((550 - 1700) / 1700 * 100)


def test_progression_for_one_exercise(make_session, ex):
    sessions = [
        make_session(date(2024, 1, 1), [ex("Curl", [(12, 30)]), ex("Row", [(8, 100)])]),
        make_session(date(2024, 1, 8), [ex("Curl", [(12, 35)]), ex("Row", [(8, 110)])]),
    ]
    progressions = strength_progression(sessions, exercise="Curl", min_points=1)
    assert [p.exercise for p in progressions] == ["Curl"]


def test_exercise_growth_rate_rejects_unknown_metric():
    with pytest.raises(ValueError):
        exercise_growth_rate([], "speed")


# ============================================================
# Volume Trends
# ============================================================

def test_volume_trends(make_session, ex, today):
    sessions = [
        make_session(date(2024, 3, 1), [ex("Squat", [(10, 100)])], workout_type=WorkoutType.LEGS),
        make_session(date(2024, 3, 1), [ex("Curl", [(10, 20)])], workout_type=WorkoutType.ARMS),
        make_session(date(2024, 3, 5), [ex("Squat", [(10, 110)])], workout_type=WorkoutType.LEGS),
        make_session(date(2024, 3, 10), [ex("Squat", [(10, 150)])], workout_type=WorkoutType.LEGS),
        make_session(date(2023, 6, 1), [ex("Squat", [(10, 500)])], workout_type=WorkoutType.LEGS),
    ]
    trends = volume_trends(sessions, today, days=30)

    assert trends.training_days == 3
    assert [p.total_volume for p in trends.points] == [1200, 1100, 1500]
    assert trends.points[0].exercise_count == 2
    assert trends.points[0].workout_type_volumes[WorkoutType.ARMS] == 200
    assert trends.total_volume == 3800
    assert trends.max_volume == 1500
    assert trends.trend == pytest.approx(25.0)
    assert trends.workout_type_breakdown[WorkoutType.LEGS] == 3600


def test_volume_trends_window_excludes_cutoff_day(make_session, ex, today):
    sessions = [
        make_session(date(2024, 3, 8), [ex("Squat", [(10, 100)])]),
        make_session(date(2024, 3, 9), [ex("Squat", [(10, 120)])]),
    ]
    trends = volume_trends(sessions, today, days=7)
    assert [p.date for p in trends.points] == [date(2024, 3, 9)]


def test_volume_trends_empty(today):
    trends = volume_trends([], today)
    assert trends.points == []
    assert trends.trend == 0.0


# ============================================================
# Personal Records
# ============================================================

def test_personal_records_heaviest_then_most_reps(make_session, ex):
    sessions = [
        make_session(date(2024, 2, 1), [ex("Deadlift", [(3, 315), (5, 315)])]),
        make_session(date(2024, 1, 1), [ex("Deadlift", [(1, 315)])]),
        make_session(date(2024, 3, 1), [ex("Deadlift", [(5, 315)])]),
        make_session(date(2024, 3, 2), [ex("Deadlift", [(2, 405)])], user=User.DELCHAN),
    ]
    records = {(r.user, r.exercise_name): r for r in personal_records(sessions)}

    nav = records[(User.NAV, "Deadlift")]
    assert (nav.weight, nav.reps, nav.date) == (315, 5, date(2024, 2, 1))
    delchan = records[(User.DELCHAN, "Deadlift")]
    assert (delchan.weight, delchan.reps) == (405, 2)
