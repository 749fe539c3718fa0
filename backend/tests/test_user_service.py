"""
Exercise Tracker Backend — User Service Unit Tests
===================================================

What:  Tests for UserService (list, add) with mock DB sessions.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import PersistenceError, ValidationError
from app.models.user import User
from app.services.user_service import UserService


class TestUserService:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_list_users(self, mock_db_session):
        now = datetime.now(timezone.utc)
        user = User(id=uuid.uuid4(), username="Nguyen Van A", created_at=now, updated_at=now)
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [user]
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_users(mock_db_session)

        assert len(result) == 1
        assert result[0].username == "Nguyen Van A"
        assert result[0].id == user.id

    @pytest.mark.asyncio
    async def test_add_user(self, mock_db_session, user_payload):
        result = await self.service.add_user(mock_db_session, user_payload)

        assert result == "User added!"
        added = mock_db_session.add.call_args.args[0]
        assert added.username == "Nguyen Van A"
        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_user_without_username(self, mock_db_session):
        with pytest.raises(ValidationError, match="username is required"):
            await self.service.add_user(mock_db_session, {"username": ""})
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_user_database_failure(self, mock_db_session, user_payload):
        mock_db_session.flush.side_effect = SQLAlchemyError("disk full")

        with pytest.raises(PersistenceError) as exc_info:
            await self.service.add_user(mock_db_session, user_payload)
        assert exc_info.value.message == "Could not add the user (SQLAlchemyError)"
        assert exc_info.value.context == {
            "username": "Nguyen Van A",
            "original_error": "SQLAlchemyError",
        }

    @pytest.mark.asyncio
    async def test_list_users_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("connection lost")

        with pytest.raises(PersistenceError, match=r"Could not list users \(SQLAlchemyError\)"):
            await self.service.list_users(mock_db_session)
