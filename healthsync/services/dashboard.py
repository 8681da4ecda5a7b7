from datetime import date, datetime, timedelta

from sqlalchemy import func

from healthsync.errors import UnauthorizedError
from healthsync.extensions import db
from healthsync.models import User, Goal, WorkoutLog, NutritionLog, FoodEntry
from healthsync.models.goal import OPEN_STATUSES
from healthsync.services.goal_progress import summarize_goal, sorted_records


def admin_summary(today=None):
    today = today or date.today()
    first_of_month = date(today.year, today.month, 1)
    return {
        "total_users": User.query.count(),
        "new_users_this_month": User.query.filter(
            User.created_at >= datetime.combine(first_of_month, datetime.min.time())
        ).count(),
        "total_workout_logs": WorkoutLog.query.count(),
        "total_nutrition_logs": NutritionLog.query.count(),
        "total_goals": Goal.query.count(),
        "active_goals": Goal.query.filter(Goal.status.in_(OPEN_STATUSES)).count(),
    }


def workout_streak(dates, today=None):
    """Count consecutive workout days ending today or yesterday."""
    today = today or date.today()
    streak = 0
    check = today
    for d in sorted(set(dates), reverse=True):
        if d > check:
            continue
        # a streak may start yesterday when today has no workout yet
        if d == check or (streak == 0 and d == check - timedelta(days=1)):
            streak += 1
            check = d - timedelta(days=1)
        else:
            break
    return streak


def _goal_summary(goal, today):
    summary = summarize_goal(goal, today=today)
    return {
        "goal_id": goal.id,
        "type": goal.type,
        "notes": goal.notes or "",
        "target_value": goal.target_value,
        "progress": summary["progress"],
        "derived_status": summary["derived_status"],
    }


def customer_dashboard(user_id, today=None):
    today = today or date.today()
    user = db.session.get(User, user_id)
    if not user:
        raise UnauthorizedError("User account no longer exists or has been deleted.")
    profile = user.profile

    active_goals = user.goals.filter(Goal.status.in_(OPEN_STATUSES)).order_by(Goal.id.desc()).all()
    primary = active_goals[0] if active_goals else None

    if primary:
        fallback_weight = profile.weight_kg if profile else 0.0
        summary = summarize_goal(primary, fallback_start=fallback_weight, today=today)
        goal_progress = {
            "goal_id": primary.id,
            "goal_type": primary.type,
            "start_value": summary["start_value"],
            "current_value": summary["current_value"],
            "target_value": primary.target_value,
            "status": primary.status,
            "progress": summary["progress"],
            "progress_amount": summary["progress_amount"],
            "remaining": summary["remaining"],
        }
        days_remaining = (primary.end_date - today).days if primary.end_date else 0
        weight_progress = {
            "weight_history": [
                {"date": r.record_date.isoformat(), "weight": r.weight_kg}
                for r in sorted_records(primary.progress_records)
            ],
            "time_remaining": f"{days_remaining} days" if days_remaining > 0 else "N/A",
        }
    else:
        goal_progress = {"goal_type": "None", "status": "No active goal", "progress": 0.0}
        weight_progress = {"weight_history": [], "time_remaining": "N/A"}

    calories_today = db.session.query(func.coalesce(func.sum(FoodEntry.calories_kcal), 0))\
        .join(NutritionLog)\
        .filter(NutritionLog.user_id == user_id, NutritionLog.log_date == today)\
        .scalar()

    week_start = today - timedelta(days=today.weekday())
    workout_minutes = db.session.query(func.coalesce(func.sum(WorkoutLog.duration_min), 0))\
        .filter(WorkoutLog.user_id == user_id,
                WorkoutLog.workout_date >= week_start,
                WorkoutLog.workout_date <= today)\
        .scalar()

    workout_dates = [row[0] for row in db.session.query(WorkoutLog.workout_date)
                     .filter(WorkoutLog.user_id == user_id).distinct().all()]

    return {
        "user_info": {
            "user_id": user.id,
            "full_name": user.full_name,
            "email": user.email,
            "avatar_url": user.avatar_url or (profile.avatar_url if profile else "") or "",
        },
        "goal_progress": goal_progress,
        "active_goals": [_goal_summary(g, today) for g in active_goals],
        "weight_progress": weight_progress,
        "today_stats": {
            "calories_consumed": int(round(calories_today or 0)),
            "workout_minutes": int(workout_minutes or 0),
            "workout_duration": f"{int(workout_minutes or 0)} min",
        },
        "exercise_streak": {"current_streak": workout_streak(workout_dates, today)},
    }
