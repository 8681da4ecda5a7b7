from datetime import date

from healthsync.errors import NotFoundError
from healthsync.extensions import db
from healthsync.models import FoodItem, FoodEntry, NutritionLog
from healthsync.services.audit import audited


def _macros(item, factor):
    return {
        "calories_kcal": round(item.calories_kcal * factor, 2),
        "protein_g": round(item.protein_g * factor, 2),
        "carbs_g": round(item.carbs_g * factor, 2),
        "fat_g": round(item.fat_g * factor, 2),
    }


def _food_items_by_id(ids):
    items = {f.id: f for f in FoodItem.query.filter(FoodItem.id.in_(set(ids))).all()}
    for food_item_id in ids:
        if food_item_id not in items:
            raise NotFoundError(f"Food item {food_item_id} not found")
    return items


def list_food_items(search=None):
    query = FoodItem.query
    if search:
        query = query.filter(FoodItem.name.ilike(f"%{search.strip()}%"))
    return query.order_by(FoodItem.name).all()


def get_log_for_date(user_id, log_date):
    return NutritionLog.query.filter_by(user_id=user_id, log_date=log_date)\
        .order_by(NutritionLog.id).first()


def list_nutrition_logs(user_id, start_date=None, end_date=None):
    query = NutritionLog.query.filter_by(user_id=user_id)
    if start_date:
        query = query.filter(NutritionLog.log_date >= start_date)
    if end_date:
        query = query.filter(NutritionLog.log_date <= end_date)
    return query.order_by(NutritionLog.log_date.desc(), NutritionLog.id.desc()).all()


@audited("nutrition_logged", lambda log: f"Logged {len(log.food_entries)} foods, {log.total_calories} kcal")
def create_nutrition_log(user_id, data):
    """Create a day's log. Quantities are in the food's serving unit (e.g. grams)."""
    items = _food_items_by_id([e["food_item_id"] for e in data["entries"]])

    log = NutritionLog(user_id=user_id, log_date=data["log_date"])
    for e in data["entries"]:
        item = items[e["food_item_id"]]
        factor = e["quantity"] / item.serving_size if item.serving_size else 0
        log.food_entries.append(FoodEntry(
            food_item_id=item.id,
            quantity=e["quantity"],
            meal_type=e["meal_type"],
            **_macros(item, factor)
        ))
    log.recalculate_totals()
    db.session.add(log)
    db.session.flush()
    return log


@audited("food_entry_added", lambda entry: f"Added {entry.quantity} x {entry.food_item.name} ({entry.meal_type})")
def add_food_entry(user_id, data):
    """Add one entry to the day's log, creating the log if needed.

    Quantity here counts servings, so macros scale by quantity directly.
    """
    item = db.session.get(FoodItem, data["food_item_id"])
    if not item:
        raise NotFoundError(f"Food item {data['food_item_id']} not found")

    log_date = data.get("log_date") or date.today()
    log = get_log_for_date(user_id, log_date)
    if log is None:
        log = NutritionLog(user_id=user_id, log_date=log_date)
        db.session.add(log)

    macros = _macros(item, data["quantity"])
    entry = FoodEntry(
        food_item=item,
        quantity=data["quantity"],
        meal_type=data["meal_type"],
        **macros
    )
    log.food_entries.append(entry)
    log.total_calories = round((log.total_calories or 0) + macros["calories_kcal"], 2)
    log.protein_g = round((log.protein_g or 0) + macros["protein_g"], 2)
    log.carbs_g = round((log.carbs_g or 0) + macros["carbs_g"], 2)
    log.fat_g = round((log.fat_g or 0) + macros["fat_g"], 2)
    db.session.flush()
    return entry


@audited("food_entry_deleted", lambda entry_id: f"Deleted food entry {entry_id}")
def delete_food_entry(user_id, entry_id):
    entry = FoodEntry.query.join(NutritionLog)\
        .filter(FoodEntry.id == entry_id, NutritionLog.user_id == user_id).first()
    if not entry:
        raise NotFoundError("Food entry not found")

    log = entry.nutrition_log
    log.total_calories = max(0.0, round((log.total_calories or 0) - (entry.calories_kcal or 0), 2))
    log.protein_g = max(0.0, round((log.protein_g or 0) - (entry.protein_g or 0), 2))
    log.carbs_g = max(0.0, round((log.carbs_g or 0) - (entry.carbs_g or 0), 2))
    log.fat_g = max(0.0, round((log.fat_g or 0) - (entry.fat_g or 0), 2))
    log.food_entries.remove(entry)
    return entry_id


@audited("nutrition_log_deleted", lambda log_id: f"Deleted nutrition log {log_id}")
def delete_nutrition_log(user_id, log_id):
    log = NutritionLog.query.filter_by(id=log_id, user_id=user_id).first()
    if not log:
        raise NotFoundError("Nutrition log not found")
    db.session.delete(log)
    return log_id
