"""Goal progress arithmetic.

Progress is measured from the first recorded value towards the target.
Decrease goals (weight_loss, fat_loss, or any target below the start)
count a drop as progress, everything else counts a rise.
"""
from datetime import date


def _record_value(record):
    if record is None:
        return None
    if record.weight_kg is not None:
        return record.weight_kg
    return record.value


def sorted_records(records):
    return sorted(records, key=lambda r: (r.record_date or date.min, r.id or 0))


def start_and_current(records, fallback_start=0.0):
    ordered = sorted_records(records)
    first = _record_value(ordered[0]) if ordered else None
    latest = _record_value(ordered[-1]) if ordered else None
    start = first if first is not None else fallback_start
    current = latest if latest is not None else start
    return float(start or 0.0), float(current or 0.0)


def is_decrease_goal(goal_type, start, target) -> bool:
    return "loss" in (goal_type or "").lower() or target < start


def progress_percentage(goal_type, start, current, target) -> float:
    decrease = is_decrease_goal(goal_type, start, target)
    total_change = start - target if decrease else target - start
    if total_change <= 0:
        return 0.0
    progress = start - current if decrease else current - start
    pct = round(progress / total_change * 100, 1)
    return max(0.0, min(100.0, pct))


def calculate_progress(goal_type, target, records, fallback_start=0.0) -> float:
    start, current = start_and_current(records, fallback_start)
    return progress_percentage(goal_type, start, current, float(target))


def derive_status(goal, progress, today=None) -> str:
    today = today or date.today()
    if progress >= 100 or goal.status == "completed":
        return "completed"
    if goal.end_date and goal.end_date < today:
        return "overdue"
    if goal.start_date and goal.start_date > today:
        return "upcoming"
    return "in-progress"


def summarize_goal(goal, fallback_start=0.0, today=None):
    start, current = start_and_current(goal.progress_records, fallback_start)
    target = float(goal.target_value)
    decrease = is_decrease_goal(goal.type, start, target)
    progress = progress_percentage(goal.type, start, current, target)
    return {
        "start_value": start,
        "current_value": current,
        "progress": progress,
        "progress_amount": round(start - current if decrease else current - start, 2),
        "remaining": round(current - target if decrease else target - current, 2),
        "derived_status": derive_status(goal, progress, today),
    }
