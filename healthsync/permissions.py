# Permission codes checked by require_permission
USER_READ = "USER_READ"
USER_BAN = "USER_BAN"
USER_UPDATE_ROLE = "USER_UPDATE_ROLE"
USER_DELETE = "USER_DELETE"

EXERCISE_READ = "EXERCISE_READ"
EXERCISE_CREATE = "EXERCISE_CREATE"
EXERCISE_UPDATE = "EXERCISE_UPDATE"
EXERCISE_DELETE = "EXERCISE_DELETE"

FOOD_READ = "FOOD_READ"
FOOD_CREATE = "FOOD_CREATE"
FOOD_UPDATE = "FOOD_UPDATE"
FOOD_DELETE = "FOOD_DELETE"

WORKOUT_LOG_READ = "WORKOUT_LOG_READ"
WORKOUT_LOG_CREATE = "WORKOUT_LOG_CREATE"
WORKOUT_LOG_UPDATE = "WORKOUT_LOG_UPDATE"
WORKOUT_LOG_DELETE = "WORKOUT_LOG_DELETE"

NUTRITION_LOG_READ = "NUTRITION_LOG_READ"
NUTRITION_LOG_CREATE = "NUTRITION_LOG_CREATE"
NUTRITION_LOG_UPDATE = "NUTRITION_LOG_UPDATE"
NUTRITION_LOG_DELETE = "NUTRITION_LOG_DELETE"

GOAL_READ = "GOAL_READ"
GOAL_CREATE = "GOAL_CREATE"
GOAL_UPDATE = "GOAL_UPDATE"
GOAL_DELETE = "GOAL_DELETE"

DASHBOARD_VIEW = "DASHBOARD_VIEW"
DASHBOARD_ADMIN = "DASHBOARD_ADMIN"

ROLE_ADMIN = "Admin"
ROLE_CUSTOMER = "Customer"

# code -> (category, description)
PERMISSION_CATALOG = {
    USER_READ: ("User", "View users"),
    USER_BAN: ("User", "Ban or unban users"),
    USER_UPDATE_ROLE: ("User", "Change user roles and account data"),
    USER_DELETE: ("User", "Delete users"),
    EXERCISE_READ: ("Exercise", "View exercises"),
    EXERCISE_CREATE: ("Exercise", "Create exercises"),
    EXERCISE_UPDATE: ("Exercise", "Update exercises"),
    EXERCISE_DELETE: ("Exercise", "Delete exercises"),
    FOOD_READ: ("Food", "View food items"),
    FOOD_CREATE: ("Food", "Create food items"),
    FOOD_UPDATE: ("Food", "Update food items"),
    FOOD_DELETE: ("Food", "Delete food items"),
    WORKOUT_LOG_READ: ("WorkoutLog", "View workout logs"),
    WORKOUT_LOG_CREATE: ("WorkoutLog", "Create workout logs"),
    WORKOUT_LOG_UPDATE: ("WorkoutLog", "Update workout logs"),
    WORKOUT_LOG_DELETE: ("WorkoutLog", "Delete workout logs"),
    NUTRITION_LOG_READ: ("NutritionLog", "View nutrition logs"),
    NUTRITION_LOG_CREATE: ("NutritionLog", "Create nutrition logs"),
    NUTRITION_LOG_UPDATE: ("NutritionLog", "Update nutrition logs"),
    NUTRITION_LOG_DELETE: ("NutritionLog", "Delete nutrition logs"),
    GOAL_READ: ("Goal", "View goals"),
    GOAL_CREATE: ("Goal", "Create goals"),
    GOAL_UPDATE: ("Goal", "Update goals"),
    GOAL_DELETE: ("Goal", "Delete goals"),
    DASHBOARD_VIEW: ("Dashboard", "View personal dashboard"),
    DASHBOARD_ADMIN: ("Dashboard", "View admin dashboard and statistics"),
}

ROLE_PERMISSIONS = {
    ROLE_ADMIN: [
        USER_READ, USER_BAN, USER_UPDATE_ROLE, USER_DELETE,
        EXERCISE_READ, EXERCISE_CREATE, EXERCISE_UPDATE, EXERCISE_DELETE,
        FOOD_READ, FOOD_CREATE, FOOD_UPDATE, FOOD_DELETE,
        WORKOUT_LOG_READ, NUTRITION_LOG_READ, GOAL_READ,
        DASHBOARD_VIEW, DASHBOARD_ADMIN,
    ],
    ROLE_CUSTOMER: [
        EXERCISE_READ, FOOD_READ,
        WORKOUT_LOG_READ, WORKOUT_LOG_CREATE, WORKOUT_LOG_UPDATE, WORKOUT_LOG_DELETE,
        NUTRITION_LOG_READ, NUTRITION_LOG_CREATE, NUTRITION_LOG_UPDATE, NUTRITION_LOG_DELETE,
        GOAL_READ, GOAL_CREATE, GOAL_UPDATE, GOAL_DELETE,
        DASHBOARD_VIEW,
    ],
}

ROLE_DESCRIPTIONS = {
    ROLE_ADMIN: "System administrator",
    ROLE_CUSTOMER: "Regular user",
}
