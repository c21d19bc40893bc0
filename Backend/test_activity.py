import math
from datetime import date

import pytest

from models import BodyCategory
from activity import (
    ActivityWindow, partition_sessions, category_activity, normalize_activity,
    trend_percent, compare_activity,
)


def chest_upper(sets=3):
    return {
        "name": "Incline Press",
        "muscleGroups": ["chest-upper"],
        "sets": [{"reps": 10, "weight": 100}] * sets,
    }


def tagged(name, tags, sets=1):
    return {"name": name, "muscleGroups": tags, "sets": [{"reps": 8, "weight": 50}] * sets}


def test_window_lengths():
    assert [w.days for w in ActivityWindow] == [7, 30, 90, 365]
    assert ActivityWindow("quarter") is ActivityWindow.QUARTER


def test_steady_week_has_zero_trend(make_session):
    today = date(2024, 1, 15)
    sessions = [
        make_session(date(2024, 1, 14), [chest_upper()]),
        make_session(date(2024, 1, 7), [chest_upper()]),
    ]
    report = compare_activity(sessions, ActivityWindow.WEEK, today)

    assert report.current_counts[BodyCategory.CHEST] == 3
    assert report.previous_counts[BodyCategory.CHEST] == 3
    chest = next(t for t in report.categories if t.category == BodyCategory.CHEST)
    assert chest.intensity == 1.0
    assert chest.previous_intensity == 1.0
    assert chest.trend == 0
    assert chest.trend_percent == 0


def test_session_a_week_before_today_is_in_previous_week(make_session):
    today = date(2024, 1, 15)
    sessions = [
        make_session(date(2024, 1, 15), [chest_upper()]),
        make_session(date(2024, 1, 8), [chest_upper()]),
    ]
    report = compare_activity(sessions, ActivityWindow.WEEK, today)

    assert report.current_counts[BodyCategory.CHEST] == 3
    assert report.previous_counts[BodyCategory.CHEST] == 3
    chest = next(t for t in report.categories if t.category == BodyCategory.CHEST)
    assert chest.trend == 0
    assert chest.trend_percent == 0


def test_partition_boundaries(make_session):
    today = date(2024, 1, 15)
    oldest_current = make_session(date(2024, 1, 9))
    on_current_cutoff = make_session(date(2024, 1, 8))
    oldest_previous = make_session(date(2024, 1, 2))
    on_previous_cutoff = make_session(date(2024, 1, 1))
    future = make_session(date(2024, 1, 20))

    current, previous = partition_sessions(
        [oldest_current, on_current_cutoff, oldest_previous, on_previous_cutoff, future],
        ActivityWindow.WEEK, today,
    )
    assert current == [oldest_current, future]
    assert previous == [on_current_cutoff, oldest_previous]


def test_activity_counts_sets_not_reps(make_session):
    session = make_session(date(2024, 1, 1), [
        tagged("Row", ["lats", "rhomboids"], sets=4),
        tagged("Curl", ["biceps-long"], sets=2),
    ])
    counts = category_activity([session])
    assert counts[BodyCategory.BACK] == 8
    assert counts[BodyCategory.ARMS] == 2
    assert counts[BodyCategory.CORE] == 0


def test_unknown_tags_are_skipped_not_counted_as_arms(make_session, caplog):
    session = make_session(date(2024, 1, 1), [tagged("Mystery", ["biceps", "abs"], sets=3)])
    counts = category_activity([session])
    assert all(count == 0 for count in counts.values())
    assert "biceps" in caplog.text


def test_empty_window_normalizes_to_zero_without_nan():
    intensity = normalize_activity({category: 0 for category in BodyCategory})
    assert all(value == 0.0 for value in intensity.values())

    report = compare_activity([], ActivityWindow.MONTH, date(2024, 1, 15))
    for trend in report.categories:
        assert trend.intensity == 0.0
        assert trend.trend_percent == 0.0
        assert not math.isnan(trend.trend)


def test_intensities_stay_within_unit_interval(make_session):
    today = date(2024, 6, 30)
    sessions = [
        make_session(date(2024, 6, 29), [tagged("Squat", ["quads-vastus-lateralis", "glutes-maximus"], sets=5)]),
        make_session(date(2024, 6, 20), [chest_upper(sets=2), tagged("Fly", ["chest-middle"], sets=3)]),
        make_session(date(2024, 5, 20), [tagged("Press", ["delts-anterior"], sets=4)]),
    ]
    report = compare_activity(sessions, ActivityWindow.MONTH, today)
    for values in (report.current_intensity, report.previous_intensity):
        assert max(values.values()) == 1.0
        assert all(0.0 <= v <= 1.0 for v in values.values())


@pytest.mark.parametrize("current, previous, expected", [
    (0.5, 1.0, -50.0),
    (1.0, 0.5, 100.0),
    (0.4, 0.0, 100.0),
    (0.0, 0.0, 0.0),
])
def test_trend_percent(current, previous, expected):
    assert trend_percent(current, previous) == pytest.approx(expected)


def test_most_and_least_worked_ranking(make_session):
    today = date(2024, 1, 15)
    sessions = [make_session(date(2024, 1, 14), [
        tagged("Squat", ["quads-rectus-femoris"], sets=6),
        tagged("Fly", ["chest-lower"], sets=3),
        tagged("Row", ["lats"], sets=2),
        tagged("Curl", ["biceps-short"], sets=1),
    ])]
    report = compare_activity(sessions, ActivityWindow.WEEK, today)

    assert [t.category for t in report.most_worked] == [
        BodyCategory.LEGS, BodyCategory.CHEST, BodyCategory.BACK,
    ]
    assert [t.category for t in report.least_worked] == [
        BodyCategory.CORE, BodyCategory.SHOULDERS, BodyCategory.ARMS,
    ]
    # nothing in the previous week, so every active category is "new"
    chest = next(t for t in report.categories if t.category == BodyCategory.CHEST)
    assert chest.intensity == pytest.approx(0.5)
    assert chest.trend_percent == 100.0


def test_report_cutoffs(make_session):
    report = compare_activity([], "quarter", date(2024, 4, 30))
    assert report.window == "quarter"
    assert report.days == 90
    assert report.current_cutoff == date(2024, 1, 31)
    assert report.previous_cutoff == date(2023, 11, 2)
