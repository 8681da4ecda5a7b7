import json
import logging
from datetime import date, datetime, timedelta

from healthsync.clients import get_client
from healthsync.errors import UnauthorizedError, ValidationError
from healthsync.extensions import db
from healthsync.models import (
    User, Goal, ChatMessage, Exercise, FoodItem, WorkoutLog, NutritionLog
)
from healthsync.models.goal import OPEN_STATUSES
from healthsync.services.audit import log_action, recent_actions
from healthsync.services.goal_progress import summarize_goal

logger = logging.getLogger(__name__)

ACTIVITY_MULTIPLIERS = {
    "Sedentary": 1.2,
    "Light": 1.375,
    "Moderate": 1.55,
    "Active": 1.725,
    "VeryActive": 1.9,
}

SYSTEM_PROMPT = """You are HealthSync Bot, a friendly personal health assistant.

Your role:
- Give nutrition, training and health advice based on the user's real data below.
- Encourage the user towards their goals.
- Keep advice practical and science based.

Answer rules:
1. Be concise (3-5 sentences) and get to the point.
2. Base every answer on the data provided.
3. If data is missing, ask the user to log it.
4. Give concrete numbers where possible (e.g. "aim for 120g protein per day").
5. Never diagnose; recommend a doctor for serious issues.

USER DATA (LAST 7 DAYS):
---
{context}
---

RECENT ACTIVITY:
{activity}
"""


# ---------------- Body metrics ----------------

def bmi(weight_kg, height_cm):
    if not weight_kg or not height_cm:
        return None
    meters = height_cm / 100
    return round(weight_kg / (meters * meters), 1)


def bmi_status(value):
    if value is None:
        return "Unknown"
    if value < 18.5:
        return "Underweight"
    if value < 25:
        return "Normal"
    if value < 30:
        return "Overweight"
    return "Obese"


def bmr(weight_kg, height_cm, age, gender):
    """Mifflin-St Jeor basal metabolic rate in kcal/day."""
    if not weight_kg or not height_cm or age is None:
        return None
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "Male":
        base += 5
    elif gender == "Female":
        base -= 161
    else:
        base -= 78
    return round(base, 0)


# ---------------- Context ----------------

def _profile_context(user):
    profile = user.profile
    if not profile:
        return None
    body_mass_index = bmi(profile.weight_kg, profile.height_cm)
    basal = bmr(profile.weight_kg, profile.height_cm, profile.age, profile.gender)
    return {
        "full_name": profile.full_name,
        "age": profile.age,
        "gender": profile.gender,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "activity_level": profile.activity_level,
        "bmi": body_mass_index,
        "bmi_status": bmi_status(body_mass_index),
        "bmr": basal,
        "tdee": round(basal * ACTIVITY_MULTIPLIERS.get(profile.activity_level, 1.55), 0) if basal else None,
    }


def _daily_logs(user_id, today, days=7):
    since = today - timedelta(days=days - 1)
    workouts = WorkoutLog.query.filter(WorkoutLog.user_id == user_id, WorkoutLog.workout_date >= since).all()
    nutrition = NutritionLog.query.filter(NutritionLog.user_id == user_id, NutritionLog.log_date >= since).all()

    result = []
    for offset in range(days):
        day = today - timedelta(days=offset)
        day_workouts = [w for w in workouts if w.workout_date == day]
        day_nutrition = [n for n in nutrition if n.log_date == day]
        if not day_workouts and not day_nutrition:
            continue
        result.append({
            "date": day.isoformat(),
            "workout_minutes": sum(w.duration_min for w in day_workouts),
            "exercises": sorted({s.exercise.name for w in day_workouts for s in w.exercise_sessions if s.exercise}),
            "calories": round(sum(n.total_calories or 0 for n in day_nutrition), 1),
            "protein_g": round(sum(n.protein_g or 0 for n in day_nutrition), 1),
            "carbs_g": round(sum(n.carbs_g or 0 for n in day_nutrition), 1),
            "fat_g": round(sum(n.fat_g or 0 for n in day_nutrition), 1),
        })
    return result


def build_user_context(user, today=None):
    today = today or date.today()
    profile = user.profile

    active = user.goals.filter(Goal.status.in_(OPEN_STATUSES)).order_by(Goal.id.desc()).first()
    goal = None
    if active:
        summary = summarize_goal(active, fallback_start=profile.weight_kg if profile else 0.0, today=today)
        goal = {
            "type": active.type,
            "target_value": active.target_value,
            "start_date": active.start_date.isoformat() if active.start_date else None,
            "end_date": active.end_date.isoformat() if active.end_date else None,
            "notes": active.notes or "",
            **summary,
        }

    completed = user.goals.filter(Goal.status == "completed").order_by(Goal.id.desc()).limit(5).all()

    return {
        "profile": _profile_context(user),
        "goal": goal,
        "completed_goals": [
            {"type": g.type, "target_value": g.target_value,
             "end_date": g.end_date.isoformat() if g.end_date else None}
            for g in completed
        ],
        "recent_activity_logs": [
            f"{a.timestamp:%Y-%m-%d %H:%M} {a.action_type}: {a.description}" for a in recent_actions(user.id, 20)
        ],
        "available_foods": [
            f"{f.name} ({f.serving_size:g}{f.serving_unit}: {f.calories_kcal:g} kcal, "
            f"P {f.protein_g:g}g, C {f.carbs_g:g}g, F {f.fat_g:g}g)"
            for f in FoodItem.query.order_by(FoodItem.id).limit(40).all()
        ],
        "available_exercises": [
            f"{e.name} ({e.muscle_group}, {e.difficulty})"
            for e in Exercise.query.order_by(Exercise.id).limit(40).all()
        ],
        "daily_logs": _daily_logs(user.id, today),
    }


def build_system_prompt(context):
    activity = "\n".join(context.get("recent_activity_logs") or []) or "No recent activity."
    data = {k: v for k, v in context.items() if k != "recent_activity_logs"}
    return SYSTEM_PROMPT.format(context=json.dumps(data, ensure_ascii=False, indent=2), activity=activity)


# ---------------- Commands / queries ----------------

def ask(user_id, question):
    """Answer a question with the user's data as context and store both messages."""
    question = (question or "").strip()
    if not question:
        raise ValidationError("Question is required", {"question": ["Question must not be blank."]})

    user = db.session.get(User, user_id)
    if not user:
        raise UnauthorizedError("User account no longer exists or has been deleted.")

    context = build_user_context(user)
    user_message = ChatMessage(
        user_id=user.id,
        role="user",
        content=question,
        context_data=json.dumps(context, ensure_ascii=False, default=str),
    )
    db.session.add(user_message)
    db.session.flush()

    answer = get_client("ai_chat").complete(build_system_prompt(context), question)

    assistant_message = ChatMessage(user_id=user.id, role="assistant", content=answer)
    db.session.add(assistant_message)
    log_action(user.id, "chat_asked", f"Asked the assistant: {question[:100]}")
    db.session.commit()
    logger.info(f"Answered chat question for user {user.id}")

    return {
        "response": answer,
        "timestamp": (assistant_message.created_at or datetime.utcnow()).isoformat(),
        "message_id": assistant_message.id,
    }


def history(user_id, page=1, page_size=20):
    pagination = ChatMessage.query.filter_by(user_id=user_id)\
        .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())\
        .paginate(page=page, per_page=page_size, error_out=False)
    messages = list(reversed(pagination.items))
    return pagination, messages
