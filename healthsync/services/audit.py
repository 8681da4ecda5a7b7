import json
import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from healthsync.extensions import db
from healthsync.models import UserActionLog

logger = logging.getLogger(__name__)

AFTER_COMMIT_KEY = "healthsync.after_commit"


def log_action(user_id, action_type, description, metadata=None):
    """Queue an action log row in the current session.

    The caller commits; the row lands in the same transaction as the
    change it describes.
    """
    entry = UserActionLog(
        user_id=user_id,
        action_type=action_type,
        description=description[:500],
        metadata_json=json.dumps(metadata, default=str) if metadata else None,
    )
    db.session.add(entry)
    return entry


def recent_actions(user_id, limit=20):
    return (
        UserActionLog.query
        .filter_by(user_id=user_id)
        .order_by(UserActionLog.timestamp.desc(), UserActionLog.id.desc())
        .limit(limit)
        .all()
    )


def after_commit(callback):
    """Run ``callback`` once the enclosing audited command has committed."""
    db.session.info.setdefault(AFTER_COMMIT_KEY, []).append(callback)


def audited(action_type, describe):
    """Record an action after a command function returns.

    ``describe`` receives the command's result and returns the log line.
    The decorated function must take ``user_id`` as its first argument
    and must not have committed yet; the audit row is committed together
    with the command's changes. Callbacks queued with ``after_commit``
    run only when that commit succeeds.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(user_id, *args, **kwargs):
            db.session.info[AFTER_COMMIT_KEY] = []
            result = func(user_id, *args, **kwargs)
            log_action(user_id, action_type, describe(result))
            try:
                db.session.commit()
            except SQLAlchemyError:
                db.session.rollback()
                db.session.info.pop(AFTER_COMMIT_KEY, None)
                logger.error(f"Failed to commit {action_type} for user {user_id}")
                raise
            for callback in db.session.info.pop(AFTER_COMMIT_KEY, []):
                callback()
            return result
        return wrapper
    return decorator
