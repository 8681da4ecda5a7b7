from .user import User
from .user_profile import UserProfile
from .role import Role
from .permission import Permission
from .role_permission import RolePermission
from .user_role import UserRole

from .goal import Goal
from .progress_record import ProgressRecord

from .exercise import Exercise
from .workout_log import WorkoutLog
from .exercise_session import ExerciseSession

from .food_item import FoodItem
from .nutrition_log import NutritionLog
from .food_entry import FoodEntry

from .chat_message import ChatMessage
from .user_action_log import UserActionLog
