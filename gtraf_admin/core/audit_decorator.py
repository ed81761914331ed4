from functools import wraps
from typing import Callable
from gtraf_admin.core.enums import AuditAction
from gtraf_admin.core.audit_log import log_audit


def audit_log(action: AuditAction) -> Callable:
    """Record an audit entry after the wrapped endpoint succeeds.

    The endpoint must take ``db`` and ``current_user`` as keyword dependencies.
    The hashed payload is the first of ``payload``, ``imported`` or ``item_id``
    found among its arguments.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            result = await func(*args, **kwargs)

            db = kwargs.get("db")
            current_user = kwargs.get("current_user")

            if not db or not current_user:
                return result

            payload = None
            for key in ["payload", "imported", "item_id"]:
                if key in kwargs:
                    payload = kwargs[key]
                    break

            await log_audit(db, current_user.id, action, payload)
            return result

        return wrapper
    return decorator
