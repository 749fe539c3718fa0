"""
Exercise Tracker Backend — Exercise Service
============================================

What:  CRUD operations over exercise log entries.
Why:   Keeps the route handlers thin; every operation here is one coercion
       step (where there is input) followed by exactly one database call.
Who:   Called by app.routes.exercises.

Operation → statement:
    list_exercises   SELECT * FROM exercises
    add_exercise     INSERT
    get_exercise     SELECT ... WHERE id = :id   (absent → None, not an error)
    delete_exercise  DELETE ... WHERE id = :id   (0 rows → NotFoundError)
    update_exercise  UPDATE ... WHERE id = :id   (0 rows → NotFoundError)

Update is one conditional UPDATE rather than fetch-then-save, so a record is
never half-updated. Two concurrent updates of the same id still race; the
later write wins.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ExerciseTrackerError, NotFoundError
from app.models.exercise import Exercise
from app.schemas.exercise import ExerciseResponse
from app.services.coercion import coerce_exercise_input, parse_record_id
from app.services.persistence import persistence_error

logger = logging.getLogger(__name__)

EXERCISE_ADDED = "Exercise added!"
EXERCISE_DELETED = "Exercise deleted."
EXERCISE_UPDATED = "Exercise updated!"


class ExerciseService:
    """
    Stateless service; the session is passed in on every call.

    Transactions:
        Methods flush, they never commit. get_db_session commits once the
        route returns, or rolls back if anything raised.

    Error Handling Strategy:
        Coercion failures raise ValidationError before the database is
        touched. Anything the database raises is wrapped in PersistenceError.
        Our own exceptions propagate unchanged.
    """

    async def list_exercises(self, db: AsyncSession) -> List[ExerciseResponse]:
        try:
            result = await db.execute(select(Exercise))
            exercises = list(result.scalars().all())
        except Exception as e:
            raise persistence_error("list exercises", e)

        return [ExerciseResponse.model_validate(exercise) for exercise in exercises]

    async def add_exercise(self, db: AsyncSession, payload: Mapping[str, Any]) -> str:
        """
        Coerce the payload and insert a new exercise.

        Raises:
            ValidationError: A field is missing or could not be coerced
            PersistenceError: The insert failed
        """
        fields = coerce_exercise_input(payload)
        exercise = Exercise(
            username=fields.username,
            description=fields.description,
            duration=fields.duration,
            date=fields.date,
        )
        try:
            db.add(exercise)
            await db.flush()
        except Exception as e:
            raise persistence_error("add the exercise", e, username=fields.username)

        logger.info("Exercise created: %s (user=%s)", exercise.id, fields.username)
        return EXERCISE_ADDED

    async def get_exercise(
        self, db: AsyncSession, exercise_id: str
    ) -> Optional[ExerciseResponse]:
        """
        Fetch one exercise. A well-formed id that matches nothing returns None.

        Raises:
            ValidationError: The id is malformed
            PersistenceError: The query failed
        """
        record_id = parse_record_id(exercise_id)
        try:
            result = await db.execute(select(Exercise).where(Exercise.id == record_id))
            exercise = result.scalar_one_or_none()
        except Exception as e:
            raise persistence_error("fetch the exercise", e, exercise_id=exercise_id)

        if exercise is None:
            return None
        return ExerciseResponse.model_validate(exercise)

    async def delete_exercise(self, db: AsyncSession, exercise_id: str) -> str:
        record_id = parse_record_id(exercise_id)
        try:
            result = await db.execute(delete(Exercise).where(Exercise.id == record_id))
            if result.rowcount == 0:
                raise NotFoundError(resource="exercise", resource_id=exercise_id)
        except ExerciseTrackerError:
            raise
        except Exception as e:
            raise persistence_error("delete the exercise", e, exercise_id=exercise_id)

        logger.info("Exercise deleted: %s", exercise_id)
        return EXERCISE_DELETED

    async def update_exercise(
        self, db: AsyncSession, exercise_id: str, payload: Mapping[str, Any]
    ) -> str:
        """
        Overwrite all four user fields of an existing exercise.

        The id is checked first, then the payload, so a malformed id is
        reported even when the body is also bad.

        Raises:
            ValidationError: Malformed id, or a field is missing/uncoercible
            NotFoundError: No exercise has this id
            PersistenceError: The update failed
        """
        record_id = parse_record_id(exercise_id)
        fields = coerce_exercise_input(payload)
        statement = (
            update(Exercise)
            .where(Exercise.id == record_id)
            .values(
                username=fields.username,
                description=fields.description,
                duration=fields.duration,
                date=fields.date,
            )
        )
        try:
            result = await db.execute(statement)
            if result.rowcount == 0:
                raise NotFoundError(resource="exercise", resource_id=exercise_id)
        except ExerciseTrackerError:
            raise
        except Exception as e:
            raise persistence_error("update the exercise", e, exercise_id=exercise_id)

        logger.info("Exercise updated: %s", exercise_id)
        return EXERCISE_UPDATED


# ── Singleton Instance ────────────────────────────────────────────────────
exercise_service = ExerciseService()
