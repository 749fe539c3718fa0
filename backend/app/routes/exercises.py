"""
Exercise Tracker Backend — Exercise Route Handlers
===================================================

What:  The /exercises resource: list, add, get, delete, update.
How:   Each handler extracts the path id and/or JSON body and delegates to
       ExerciseService. Failures are raised as app.exceptions errors and
       turned into 400 "Error: ..." responses by the global handlers.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.exercise import ExerciseResponse
from app.services.coercion import ExerciseFields
from app.services.exercise_service import exercise_service

router = APIRouter(prefix="/exercises", tags=["Exercises"])

ERROR_RESPONSES = {400: {"description": "Some error", "model": ErrorResponse}}

# Bodies arrive as raw objects and are validated in the service layer
EXERCISE_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": ExerciseFields.model_json_schema()}},
    }
}


@router.get(
    "",
    response_model=List[ExerciseResponse],
    responses=ERROR_RESPONSES,
    summary="Get all exercise logs",
)
async def list_exercises(
    db: AsyncSession = Depends(get_db_session),
) -> List[ExerciseResponse]:
    return await exercise_service.list_exercises(db)


@router.post(
    "/add",
    response_model=str,
    responses={
        200: {
            "description": "The exercise log was successfully created",
            "content": {"application/json": {"example": "Exercise added!"}},
        },
        **ERROR_RESPONSES,
    },
    summary="Create a new exercise log",
    description=(
        "All four fields are required. `duration` may be a number or numeric "
        "string; `date` must be an ISO 8601 date or date-time."
    ),
    openapi_extra=EXERCISE_BODY,
)
async def add_exercise(
    payload: Dict[str, Any] = Body(),
    db: AsyncSession = Depends(get_db_session),
) -> str:
    return await exercise_service.add_exercise(db, payload)


@router.get(
    "/{exercise_id}",
    response_model=Optional[ExerciseResponse],
    responses=ERROR_RESPONSES,
    summary="Get an exercise log by ID",
    description="Returns null when no exercise has this id.",
)
async def get_exercise(
    exercise_id: str = Path(description="The exercise log id"),
    db: AsyncSession = Depends(get_db_session),
) -> Optional[ExerciseResponse]:
    return await exercise_service.get_exercise(db, exercise_id)


@router.delete(
    "/{exercise_id}",
    response_model=str,
    responses={
        200: {
            "description": "Exercise log was successfully deleted",
            "content": {"application/json": {"example": "Exercise deleted."}},
        },
        **ERROR_RESPONSES,
    },
    summary="Delete an exercise log by ID",
)
async def delete_exercise(
    exercise_id: str = Path(description="The exercise log id"),
    db: AsyncSession = Depends(get_db_session),
) -> str:
    return await exercise_service.delete_exercise(db, exercise_id)


@router.put(
    "/update/{exercise_id}",
    response_model=str,
    responses={
        200: {
            "description": "Exercise log was successfully updated",
            "content": {"application/json": {"example": "Exercise updated!"}},
        },
        **ERROR_RESPONSES,
    },
    summary="Update an exercise log by ID",
    description="Replaces username, description, duration and date.",
    openapi_extra=EXERCISE_BODY,
)
async def update_exercise(
    payload: Dict[str, Any] = Body(),
    exercise_id: str = Path(description="The exercise log id"),
    db: AsyncSession = Depends(get_db_session),
) -> str:
    return await exercise_service.update_exercise(db, exercise_id, payload)
