"""Exercise and food item catalogs managed by administrators."""
from flask import current_app

from healthsync.clients import get_client
from healthsync.clients.storage import allowed_file
from healthsync.errors import InvalidOperationError, NotFoundError, ValidationError
from healthsync.extensions import db
from healthsync.models import Exercise, ExerciseSession, FoodItem, FoodEntry
from healthsync.services.audit import audited, after_commit


def _get(model, item_id, label):
    obj = db.session.get(model, item_id)
    if not obj:
        raise NotFoundError(f"{label} not found")
    return obj


def search_exercises(search=None, muscle_group=None, difficulty=None, page=1, per_page=20):
    query = Exercise.query
    if search:
        query = query.filter(Exercise.name.ilike(f"%{search.strip()}%"))
    if muscle_group:
        query = query.filter(Exercise.muscle_group == muscle_group)
    if difficulty:
        query = query.filter(Exercise.difficulty == difficulty)
    return query.order_by(Exercise.name).paginate(page=page, per_page=per_page, error_out=False)


def search_food_items(search=None, page=1, per_page=20):
    query = FoodItem.query
    if search:
        query = query.filter(FoodItem.name.ilike(f"%{search.strip()}%"))
    return query.order_by(FoodItem.name).paginate(page=page, per_page=per_page, error_out=False)


def get_exercise(exercise_id):
    return _get(Exercise, exercise_id, "Exercise")


def get_food_item(food_item_id):
    return _get(FoodItem, food_item_id, "Food item")


# ---------------- Exercises ----------------

@audited("exercise_created", lambda e: f"Created exercise '{e.name}'")
def create_exercise(user_id, data):
    exercise = Exercise(**data)
    db.session.add(exercise)
    db.session.flush()
    return exercise


@audited("exercise_updated", lambda e: f"Updated exercise '{e.name}'")
def update_exercise(user_id, exercise_id, data):
    exercise = get_exercise(exercise_id)
    for field, value in data.items():
        setattr(exercise, field, value)
    return exercise


@audited("exercise_deleted", lambda name: f"Deleted exercise '{name}'")
def delete_exercise(user_id, exercise_id):
    exercise = get_exercise(exercise_id)
    if ExerciseSession.query.filter_by(exercise_id=exercise.id).first():
        raise InvalidOperationError("Exercise is used in workout logs and cannot be deleted")
    name = exercise.name
    db.session.delete(exercise)
    return name


# ---------------- Food items ----------------

@audited("food_item_created", lambda f: f"Created food item '{f.name}'")
def create_food_item(user_id, data):
    item = FoodItem(**data)
    db.session.add(item)
    db.session.flush()
    return item


@audited("food_item_updated", lambda f: f"Updated food item '{f.name}'")
def update_food_item(user_id, food_item_id, data):
    item = get_food_item(food_item_id)
    for field, value in data.items():
        setattr(item, field, value)
    return item


@audited("food_item_deleted", lambda name: f"Deleted food item '{name}'")
def delete_food_item(user_id, food_item_id):
    item = get_food_item(food_item_id)
    if FoodEntry.query.filter_by(food_item_id=item.id).first():
        raise InvalidOperationError("Food item is used in nutrition logs and cannot be deleted")
    name = item.name
    db.session.delete(item)
    return name


# ---------------- Images ----------------

def validate_image(file, max_size=None):
    """Reject missing, non-image or oversized uploads."""
    if not file or not file.filename:
        raise ValidationError("No file uploaded", {"file": ["A file is required."]})
    if not allowed_file(file.filename, current_app.config["ALLOWED_IMAGE_EXTENSIONS"]):
        raise ValidationError("Only image files are allowed", {"file": ["Unsupported file type."]})
    if file.mimetype and not file.mimetype.startswith("image/"):
        raise ValidationError("Only image files are allowed", {"file": ["Unsupported content type."]})
    if max_size:
        file.stream.seek(0, 2)
        size = file.stream.tell()
        file.stream.seek(0)
        if size > max_size:
            raise ValidationError("File is too large", {"file": [f"Maximum size is {max_size // (1024 * 1024)}MB."]})


def replace_image(file, previous_url, folder, prefix):
    """Save the upload; the previously stored file is removed once the command commits."""
    storage = get_client("storage")
    url = storage.save(file, folder, prefix)
    if previous_url and previous_url != url:
        after_commit(lambda: storage.delete(previous_url))
    return url


@audited("exercise_image_uploaded", lambda e: f"Uploaded image for exercise '{e.name}'")
def upload_exercise_image(user_id, exercise_id, file):
    exercise = get_exercise(exercise_id)
    validate_image(file, current_app.config["MAX_AVATAR_SIZE"])
    exercise.image_url = replace_image(file, exercise.image_url, "exercises", f"exercise_{exercise.id}")
    return exercise


@audited("food_item_image_uploaded", lambda f: f"Uploaded image for food item '{f.name}'")
def upload_food_item_image(user_id, food_item_id, file):
    item = get_food_item(food_item_id)
    validate_image(file, current_app.config["MAX_AVATAR_SIZE"])
    item.image_url = replace_image(file, item.image_url, "foods", f"food_{item.id}")
    return item
