from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from healthsync.services.goal_progress import (
    calculate_progress, derive_status, is_decrease_goal, progress_percentage, start_and_current, summarize_goal
)

TODAY = date(2026, 3, 15)


def record(day, value, weight_kg=None, record_id=None):
    return SimpleNamespace(record_date=TODAY + timedelta(days=day), value=value,
                           weight_kg=weight_kg, id=record_id)


def goal(status="in_progress", start_offset=-30, end_offset=30, goal_type="weight_loss",
         target=70.0, records=()):
    return SimpleNamespace(
        status=status,
        type=goal_type,
        target_value=target,
        start_date=TODAY + timedelta(days=start_offset),
        end_date=TODAY + timedelta(days=end_offset) if end_offset is not None else None,
        progress_records=list(records),
    )


def test_weight_loss_halfway():
    records = [record(-10, 80), record(-1, 75)]
    assert calculate_progress("weight_loss", 70, records) == 50.0


def test_weight_gain_progress():
    records = [record(-5, 60), record(0, 63)]
    assert calculate_progress("weight_gain", 70, records) == 30.0


def test_records_are_sorted_by_date():
    records = [record(0, 75), record(-10, 80)]
    assert start_and_current(records) == (80.0, 75.0)


def test_weight_kg_preferred_over_value():
    records = [record(-3, 1, weight_kg=90), record(0, 2, weight_kg=85)]
    assert start_and_current(records) == (90.0, 85.0)


def test_target_equal_to_start_is_zero():
    assert progress_percentage("muscle_gain", 70, 75, 70) == 0.0


def test_loss_goal_with_target_above_start_is_zero():
    assert progress_percentage("weight_loss", 70, 65, 80) == 0.0


@pytest.mark.parametrize("current, expected", [(60, 100.0), (95, 0.0)])
def test_percentage_is_clamped(current, expected):
    assert progress_percentage("weight_loss", 80, current, 70) == expected


def test_target_below_start_is_a_decrease_goal():
    assert is_decrease_goal("muscle_gain", 80, 75)
    assert progress_percentage("muscle_gain", 80, 78, 76) == 50.0


def test_rounded_to_one_decimal():
    assert progress_percentage("weight_gain", 60, 61, 63) == 33.3


def test_no_records_uses_fallback_start():
    assert start_and_current([], fallback_start=82) == (82.0, 82.0)
    assert calculate_progress("weight_loss", 70, [], fallback_start=82) == 0.0


def test_derive_status_completed_by_progress():
    assert derive_status(goal(), 100.0, TODAY) == "completed"


def test_derive_status_completed_by_stored_status():
    assert derive_status(goal(status="completed", end_offset=-5), 20.0, TODAY) == "completed"


def test_derive_status_overdue():
    assert derive_status(goal(end_offset=-1), 40.0, TODAY) == "overdue"


def test_derive_status_upcoming():
    assert derive_status(goal(start_offset=3), 0.0, TODAY) == "upcoming"


def test_derive_status_in_progress_without_end_date():
    assert derive_status(goal(end_offset=None), 10.0, TODAY) == "in-progress"


def test_summarize_goal():
    g = goal(records=[record(-10, 80, record_id=1), record(-1, 76, record_id=2)])
    summary = summarize_goal(g, today=TODAY)
    assert summary["start_value"] == 80.0
    assert summary["current_value"] == 76.0
    assert summary["progress"] == 40.0
    assert summary["progress_amount"] == 4.0
    assert summary["remaining"] == 6.0
    assert summary["derived_status"] == "in-progress"
