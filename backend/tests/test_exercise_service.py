"""
Exercise Tracker Backend — Exercise Service Unit Tests
=======================================================

What:  Tests for ExerciseService (list, add, get, delete, update).
How:   Uses mock DB sessions (no real database).

What we test:
    ✅ Confirmation messages on success
    ✅ Coercion happens before anything touches the session
    ✅ Absent record on get → None; on delete/update → NotFoundError
    ✅ Database failures wrapped in PersistenceError
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from app.exceptions import NotFoundError, PersistenceError, ValidationError
from app.models.exercise import Exercise
from app.services.exercise_service import ExerciseService


def make_exercise(**overrides):
    now = datetime.now(timezone.utc)
    values = {
        "id": uuid.uuid4(),
        "username": "Nguyen Van A",
        "description": "bike ride",
        "duration": 9.0,
        "date": datetime(2021, 9, 7, tzinfo=timezone.utc),
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    return Exercise(**values)


class TestExerciseServiceList:

    def setup_method(self):
        self.service = ExerciseService()

    @pytest.mark.asyncio
    async def test_list_exercises(self, mock_db_session):
        exercises = [make_exercise(), make_exercise(description="swim")]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = exercises
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_exercises(mock_db_session)

        assert [item.id for item in result] == [e.id for e in exercises]
        assert result[1].description == "swim"

    @pytest.mark.asyncio
    async def test_list_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("connection lost")

        with pytest.raises(PersistenceError) as exc_info:
            await self.service.list_exercises(mock_db_session)
        assert exc_info.value.context["original_error"] == "SQLAlchemyError"


class TestExerciseServiceAdd:

    def setup_method(self):
        self.service = ExerciseService()

    @pytest.mark.asyncio
    async def test_add_exercise(self, mock_db_session, exercise_payload):
        result = await self.service.add_exercise(mock_db_session, exercise_payload)

        assert result == "Exercise added!"
        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()
        added = mock_db_session.add.call_args.args[0]
        assert isinstance(added, Exercise)
        assert added.duration == 9.0
        assert added.date == datetime(2021, 9, 7, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_invalid_input_never_reaches_database(self, mock_db_session, exercise_payload):
        exercise_payload["date"] = "not a date"

        with pytest.raises(ValidationError):
            await self.service.add_exercise(mock_db_session, exercise_payload)
        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_flush_failure(self, mock_db_session, exercise_payload):
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("down"))

        with pytest.raises(PersistenceError, match="Could not add the exercise") as exc_info:
            await self.service.add_exercise(mock_db_session, exercise_payload)
        assert exc_info.value.message == "Could not add the exercise (OperationalError)"
        assert exc_info.value.context["username"] == "Nguyen Van A"


class TestExerciseServiceGet:

    def setup_method(self):
        self.service = ExerciseService()

    @pytest.mark.asyncio
    async def test_get_found(self, mock_db_session):
        exercise = make_exercise()
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = exercise
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_exercise(mock_db_session, str(exercise.id))

        assert result.id == exercise.id
        assert result.duration == 9.0

    @pytest.mark.asyncio
    async def test_get_absent_returns_none(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        assert await self.service.get_exercise(mock_db_session, str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, mock_db_session):
        with pytest.raises(ValidationError, match="not a valid record id"):
            await self.service.get_exercise(mock_db_session, "not-an-id")
        mock_db_session.execute.assert_not_awaited()


class TestExerciseServiceDelete:

    def setup_method(self):
        self.service = ExerciseService()

    @pytest.mark.asyncio
    async def test_delete(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=1)

        result = await self.service.delete_exercise(mock_db_session, str(uuid.uuid4()))

        assert result == "Exercise deleted."
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        with pytest.raises(NotFoundError):
            await self.service.delete_exercise(mock_db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_delete_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("locked")

        with pytest.raises(PersistenceError, match="Could not delete the exercise"):
            await self.service.delete_exercise(mock_db_session, str(uuid.uuid4()))


class TestExerciseServiceUpdate:

    def setup_method(self):
        self.service = ExerciseService()

    @pytest.mark.asyncio
    async def test_update(self, mock_db_session, exercise_payload):
        mock_db_session.execute.return_value = MagicMock(rowcount=1)

        result = await self.service.update_exercise(
            mock_db_session, str(uuid.uuid4()), exercise_payload
        )

        assert result == "Exercise updated!"
        mock_db_session.execute.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, mock_db_session, exercise_payload):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        with pytest.raises(NotFoundError):
            await self.service.update_exercise(
                mock_db_session, str(uuid.uuid4()), exercise_payload
            )

    @pytest.mark.asyncio
    async def test_update_rejects_bad_duration(self, mock_db_session, exercise_payload):
        exercise_payload["duration"] = "a while"

        with pytest.raises(ValidationError, match="duration"):
            await self.service.update_exercise(
                mock_db_session, str(uuid.uuid4()), exercise_payload
            )
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_id_reported_before_body(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_exercise(mock_db_session, "nope", {})
        assert exc_info.value.field == "id"
