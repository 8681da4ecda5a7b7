"""Idempotent seeding of roles, permissions and the exercise/food catalogs."""
import click
from flask.cli import with_appcontext

from healthsync.extensions import db
from healthsync.models import Role, Permission, RolePermission, Exercise, FoodItem
from healthsync.permissions import PERMISSION_CATALOG, ROLE_PERMISSIONS, ROLE_DESCRIPTIONS

# name, muscle group, difficulty, equipment
EXERCISES = [
    ("Bench Press", "Chest", "Intermediate", "Barbell"),
    ("Incline Bench Press", "Chest", "Intermediate", "Barbell"),
    ("Push Up", "Chest", "Beginner", "None"),
    ("Cable Crossover", "Chest", "Intermediate", "Machine"),
    ("Dips", "Chest", "Intermediate", "ParallelBars"),
    ("Pull Up", "Back", "Intermediate", "PullUpBar"),
    ("Deadlift", "Back", "Advanced", "Barbell"),
    ("Lat Pulldown", "Back", "Beginner", "Machine"),
    ("Seated Cable Row", "Back", "Intermediate", "Machine"),
    ("Face Pull", "Back", "Beginner", "Machine"),
    ("Squat", "Legs", "Intermediate", "Barbell"),
    ("Romanian Deadlift", "Legs", "Intermediate", "Barbell"),
    ("Leg Extension", "Legs", "Beginner", "Machine"),
    ("Leg Curl", "Legs", "Beginner", "Machine"),
    ("Calf Raise", "Legs", "Beginner", "Machine"),
    ("Overhead Press", "Shoulders", "Intermediate", "Barbell"),
    ("Arnold Press", "Shoulders", "Intermediate", "Dumbbells"),
    ("Front Raise", "Shoulders", "Beginner", "Dumbbells"),
    ("Barbell Curl", "Arms", "Beginner", "Barbell"),
    ("Tricep Pushdown", "Arms", "Beginner", "Machine"),
    ("Hammer Curl", "Arms", "Beginner", "Dumbbells"),
    ("Skull Crushers", "Arms", "Intermediate", "Barbell"),
    ("Plank", "Core", "Beginner", "None"),
    ("Russian Twist", "Core", "Beginner", "None"),
    ("Leg Raise", "Core", "Intermediate", "PullUpBar"),
]

# name, serving size, unit, kcal, protein, carbs, fat
FOOD_ITEMS = [
    ("Chicken Breast", 100, "g", 165, 31, 0, 3.6),
    ("Egg", 50, "g", 78, 6.3, 0.6, 5.3),
    ("Salmon", 100, "g", 208, 20, 0, 13),
    ("Beef Steak", 100, "g", 250, 26, 0, 15),
    ("Ground Beef (Lean)", 100, "g", 200, 24, 0, 10),
    ("Turkey Breast", 100, "g", 135, 30, 0, 1),
    ("Tuna (Canned)", 100, "g", 116, 26, 0, 1),
    ("Greek Yogurt", 100, "g", 59, 10, 3.6, 0.4),
    ("Cottage Cheese", 100, "g", 98, 11, 3.4, 4.3),
    ("Tofu", 100, "g", 76, 8, 1.9, 4.8),
    ("White Rice", 100, "g", 130, 2.7, 28, 0.3),
    ("Brown Rice", 100, "g", 111, 2.6, 23, 0.9),
    ("Oats", 40, "g", 150, 5, 27, 2.5),
    ("Quinoa", 100, "g", 120, 4.4, 21, 1.9),
    ("Pasta", 100, "g", 131, 5, 25, 1.1),
    ("Whole Wheat Bread", 50, "g", 130, 6, 23, 2),
    ("Potato", 100, "g", 77, 2, 17, 0.1),
    ("Sweet Potato", 100, "g", 86, 1.6, 20, 0.1),
    ("Banana", 100, "g", 89, 1.1, 23, 0.3),
    ("Apple", 100, "g", 52, 0.3, 14, 0.2),
    ("Orange", 100, "g", 47, 0.9, 12, 0.1),
    ("Blueberries", 100, "g", 57, 0.7, 14, 0.3),
    ("Strawberries", 100, "g", 32, 0.7, 7.7, 0.3),
    ("Avocado", 100, "g", 160, 2, 8.5, 15),
    ("Broccoli", 100, "g", 34, 2.8, 7, 0.4),
    ("Carrot", 100, "g", 41, 0.9, 10, 0.2),
    ("Cucumber", 100, "g", 15, 0.7, 3.6, 0.1),
    ("Tomato", 100, "g", 18, 0.9, 3.9, 0.2),
    ("Bell Pepper", 100, "g", 20, 0.9, 4.6, 0.2),
    ("Kale", 100, "g", 49, 4.3, 8.8, 0.9),
    ("Almonds", 30, "g", 170, 6, 6, 15),
    ("Peanut Butter", 30, "g", 188, 7, 7, 16),
    ("Olive Oil", 15, "ml", 119, 0, 0, 13.5),
    ("Milk (Whole)", 250, "ml", 150, 8, 12, 8),
    ("Whey Protein", 30, "g", 120, 24, 3, 1),
]


def seed_roles_and_permissions():
    permissions = {p.permission_code: p for p in Permission.query.all()}
    for code, (category, description) in PERMISSION_CATALOG.items():
        if code not in permissions:
            permissions[code] = Permission(permission_code=code, category=category, description=description)
            db.session.add(permissions[code])

    for role_name, codes in ROLE_PERMISSIONS.items():
        role = Role.query.filter_by(role_name=role_name).first()
        if role is None:
            role = Role(role_name=role_name, description=ROLE_DESCRIPTIONS.get(role_name))
            db.session.add(role)
        granted = {rp.permission.permission_code for rp in role.role_permissions}
        for code in codes:
            if code not in granted:
                role.role_permissions.append(RolePermission(permission=permissions[code]))
    db.session.flush()


def seed_exercises():
    existing = {name for (name,) in db.session.query(Exercise.name).all()}
    added = 0
    for name, muscle_group, difficulty, equipment in EXERCISES:
        if name in existing:
            continue
        db.session.add(Exercise(
            name=name,
            muscle_group=muscle_group,
            difficulty=difficulty,
            equipment=equipment,
            description=f"{difficulty} {muscle_group.lower()} exercise using {equipment.lower()}.",
        ))
        added += 1
    return added


def seed_food_items():
    existing = {name for (name,) in db.session.query(FoodItem.name).all()}
    added = 0
    for name, size, unit, kcal, protein, carbs, fat in FOOD_ITEMS:
        if name in existing:
            continue
        db.session.add(FoodItem(
            name=name,
            serving_size=size,
            serving_unit=unit,
            calories_kcal=kcal,
            protein_g=protein,
            carbs_g=carbs,
            fat_g=fat,
        ))
        added += 1
    return added


def seed_all(with_catalog=True):
    seed_roles_and_permissions()
    if with_catalog:
        seed_exercises()
        seed_food_items()
    db.session.commit()


@click.command("seed")
@click.option("--no-catalog", is_flag=True, help="Only seed roles and permissions.")
@with_appcontext
def seed_command(no_catalog):
    """Insert roles, permissions and the default catalogs."""
    seed_all(with_catalog=not no_catalog)
    click.echo("Seed data is up to date.")
