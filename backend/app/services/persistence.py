"""
Exercise Tracker Backend — Persistence Error Wrapping
======================================================

What:  One helper turning a driver/ORM exception into a PersistenceError.
Why:   Both services report database failures the same way: the client sees
       the action and the exception type, the log gets the full traceback.
"""

import logging
from typing import Any

from app.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def persistence_error(action: str, exc: Exception, **context: Any) -> PersistenceError:
    """
    Log `exc` and build the PersistenceError to raise in its place.

    Usage:
        except Exception as e:
            raise persistence_error("add the exercise", e, username=...)
    """
    error_type = type(exc).__name__
    logger.error("Database error during %s: %s", action, str(exc), exc_info=exc)
    context["original_error"] = error_type
    return PersistenceError(
        message=f"Could not {action} ({error_type})",
        context=context,
    )
