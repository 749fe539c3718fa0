"""
Exercise Tracker Backend — User Service
========================================

What:  List and create users. There is no update or delete.
Who:   Called by app.routes.users.
"""

import logging
from typing import Any, List, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.schemas.user import UserResponse
from app.services.coercion import coerce_user_input
from app.services.persistence import persistence_error

logger = logging.getLogger(__name__)

USER_ADDED = "User added!"


class UserService:
    """Stateless service; the session is passed in on every call."""

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        try:
            result = await db.execute(select(User))
            users = list(result.scalars().all())
        except Exception as e:
            raise persistence_error("list users", e)

        return [UserResponse.model_validate(user) for user in users]

    async def add_user(self, db: AsyncSession, payload: Mapping[str, Any]) -> str:
        """
        Coerce the payload and insert a new user.

        Raises:
            ValidationError: username is missing or not text
            PersistenceError: The insert failed
        """
        fields = coerce_user_input(payload)
        user = User(username=fields.username)
        try:
            db.add(user)
            await db.flush()
        except Exception as e:
            raise persistence_error("add the user", e, username=fields.username)

        logger.info("User created: %s (%s)", user.id, fields.username)
        return USER_ADDED


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
