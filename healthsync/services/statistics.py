from datetime import date, datetime, timedelta

from sqlalchemy import func, extract

from healthsync.extensions import db
from healthsync.models import (
    User, Role, UserRole, Goal, Exercise, ExerciseSession, WorkoutLog,
    FoodItem, FoodEntry, NutritionLog
)
from healthsync.models.goal import OPEN_STATUSES


def _period(year, month):
    return f"{int(year):04d}-{int(month):02d}"


def _monthly(column, since):
    """Count rows per calendar month of ``column`` from ``since`` on."""
    year = extract('year', column)
    month = extract('month', column)
    rows = db.session.query(year, month, func.count())\
        .filter(column >= since)\
        .group_by(year, month)\
        .order_by(year, month)\
        .all()
    return [{"period": _period(y, m), "count": c} for y, m, c in rows]


def _window(days, today):
    today = today or date.today()
    return today, today - timedelta(days=days), date(today.year, today.month, 1)


def user_statistics(days=365, today=None):
    today, since, first_of_month = _window(days, today)
    week_ago = today - timedelta(days=7)

    role_rows = db.session.query(Role.role_name, func.count(UserRole.user_id))\
        .outerjoin(UserRole, UserRole.role_id == Role.id)\
        .group_by(Role.role_name)\
        .order_by(Role.role_name)\
        .all()

    return {
        "total_users": User.query.count(),
        "active_users": User.query.filter_by(is_active=True).count(),
        "new_users_this_week": User.query.filter(User.created_at >= datetime.combine(week_ago, datetime.min.time())).count(),
        "new_users_this_month": User.query.filter(User.created_at >= datetime.combine(first_of_month, datetime.min.time())).count(),
        "monthly_growth": _monthly(User.created_at, datetime.combine(since, datetime.min.time())),
        "role_distribution": [{"role": name, "count": count} for name, count in role_rows],
    }


def workout_statistics(days=365, today=None):
    today, since, first_of_month = _window(days, today)

    usage = func.count(ExerciseSession.id)
    top_rows = db.session.query(Exercise.id, Exercise.name, usage)\
        .join(ExerciseSession, ExerciseSession.exercise_id == Exercise.id)\
        .group_by(Exercise.id, Exercise.name)\
        .order_by(usage.desc(), Exercise.name)\
        .limit(10)\
        .all()

    muscle_rows = db.session.query(Exercise.muscle_group, usage)\
        .join(ExerciseSession, ExerciseSession.exercise_id == Exercise.id)\
        .group_by(Exercise.muscle_group)\
        .order_by(usage.desc())\
        .all()

    return {
        "total_workout_logs": WorkoutLog.query.count(),
        "workout_logs_this_month": WorkoutLog.query.filter(WorkoutLog.workout_date >= first_of_month).count(),
        "total_exercises": Exercise.query.count(),
        "top_exercises": [
            {"exercise_id": eid, "name": name, "usage_count": count} for eid, name, count in top_rows
        ],
        "monthly_activity": _monthly(WorkoutLog.workout_date, since),
        "muscle_group_distribution": [
            {"muscle_group": group, "count": count} for group, count in muscle_rows
        ],
    }


def nutrition_statistics(days=365, today=None):
    today, since, first_of_month = _window(days, today)

    usage = func.count(FoodEntry.id)
    top_rows = db.session.query(FoodItem.id, FoodItem.name, usage)\
        .join(FoodEntry, FoodEntry.food_item_id == FoodItem.id)\
        .group_by(FoodItem.id, FoodItem.name)\
        .order_by(usage.desc(), FoodItem.name)\
        .limit(10)\
        .all()

    avg_calories, avg_protein, avg_carbs, avg_fat = db.session.query(
        func.avg(FoodEntry.calories_kcal),
        func.avg(FoodEntry.protein_g),
        func.avg(FoodEntry.carbs_g),
        func.avg(FoodEntry.fat_g),
    ).one()

    return {
        "total_nutrition_logs": NutritionLog.query.count(),
        "nutrition_logs_this_month": NutritionLog.query.filter(NutritionLog.log_date >= first_of_month).count(),
        "total_food_items": FoodItem.query.count(),
        "top_foods": [
            {"food_item_id": fid, "name": name, "usage_count": count} for fid, name, count in top_rows
        ],
        "monthly_activity": _monthly(NutritionLog.log_date, since),
        "average_macros": {
            "calories_kcal": round(avg_calories or 0, 2),
            "protein_g": round(avg_protein or 0, 2),
            "carbs_g": round(avg_carbs or 0, 2),
            "fat_g": round(avg_fat or 0, 2),
        },
    }


def goal_statistics(days=365, today=None):
    total = Goal.query.count()
    completed = Goal.query.filter_by(status="completed").count()

    type_rows = db.session.query(Goal.type, func.count(Goal.id)).group_by(Goal.type).order_by(Goal.type).all()
    status_rows = db.session.query(Goal.status, func.count(Goal.id)).group_by(Goal.status).order_by(Goal.status).all()

    return {
        "total_goals": total,
        "active_goals": Goal.query.filter(Goal.status.in_(OPEN_STATUSES)).count(),
        "completed_goals": completed,
        "type_distribution": [{"type": t, "count": c} for t, c in type_rows],
        "status_distribution": [{"status": s, "count": c} for s, c in status_rows],
        "completion_rate": round(completed / total * 100, 2) if total > 0 else 0,
    }


def all_statistics(days=365, today=None):
    return {
        "user_statistics": user_statistics(days, today),
        "workout_statistics": workout_statistics(days, today),
        "nutrition_statistics": nutrition_statistics(days, today),
        "goal_statistics": goal_statistics(days, today),
        "generated_at": datetime.utcnow().isoformat(),
    }
