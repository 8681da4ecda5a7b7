import logging
from datetime import date

from healthsync.errors import InvalidOperationError, NotFoundError
from healthsync.extensions import db
from healthsync.models import Goal, ProgressRecord
from healthsync.services.audit import audited
from healthsync.services.goal_progress import calculate_progress

logger = logging.getLogger(__name__)


def _get_own_goal(user_id, goal_id):
    goal = Goal.query.filter_by(id=goal_id, user_id=user_id).first()
    if not goal:
        raise NotFoundError("Goal not found")
    return goal


def list_goals(user_id, status=None):
    query = Goal.query.filter_by(user_id=user_id)
    if status:
        query = query.filter_by(status=status)
    return query.order_by(Goal.start_date.desc(), Goal.id.desc()).all()


def get_goal(user_id, goal_id):
    return _get_own_goal(user_id, goal_id)


@audited("goal_created", lambda goal: f"Created {goal.type} goal with target {goal.target_value}")
def create_goal(user_id, data):
    goal = Goal(
        user_id=user_id,
        type=data["type"],
        target_value=data["target_value"],
        start_date=data["start_date"],
        end_date=data.get("end_date"),
        status="active",
        notes=data.get("notes"),
    )
    db.session.add(goal)
    db.session.flush()
    return goal


@audited("goal_updated", lambda goal: f"Updated goal {goal.id}")
def update_goal(user_id, goal_id, data):
    goal = _get_own_goal(user_id, goal_id)
    start = data.get("start_date", goal.start_date)
    end = data.get("end_date", goal.end_date)
    if start and end and end < start:
        raise InvalidOperationError("End date must be on or after the start date")
    for field in ("target_value", "start_date", "end_date", "status", "notes"):
        if field in data:
            setattr(goal, field, data[field])
    return goal


@audited("goal_deleted", lambda goal_id: f"Deleted goal {goal_id}")
def delete_goal(user_id, goal_id):
    goal = _get_own_goal(user_id, goal_id)
    db.session.delete(goal)
    return goal_id


@audited("progress_added", lambda record: f"Recorded progress {record.value} on goal {record.goal_id}")
def add_progress(user_id, goal_id, data):
    """Append a progress record and move the goal's stored status along.

    Only active and in-progress goals accept records. The first record moves
    an active goal to in_progress and reaching the target completes it.
    """
    goal = _get_own_goal(user_id, goal_id)
    if not goal.is_open:
        raise InvalidOperationError(f"Cannot add progress to a goal with status '{goal.status}'")

    record = ProgressRecord(
        record_date=data.get("record_date") or date.today(),
        value=data["value"],
        notes=data.get("notes"),
        weight_kg=data.get("weight_kg"),
        waist_cm=data.get("waist_cm"),
    )
    goal.progress_records.append(record)
    db.session.flush()

    if goal.status == "active":
        goal.status = "in_progress"
    progress = calculate_progress(goal.type, goal.target_value, goal.progress_records)
    if progress >= 100:
        goal.status = "completed"
        logger.info(f"Goal {goal.id} completed")
    return record
