"""
Exercise Tracker Backend — User Route Handlers
===============================================

What:  The /users resource: list and add.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.user import UserResponse
from app.services.coercion import UserFields
from app.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=List[UserResponse],
    responses={400: {"description": "Some error", "model": ErrorResponse}},
    summary="Get all users",
)
async def list_users(
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.post(
    "/add",
    response_model=str,
    responses={
        200: {
            "description": "The user was successfully created",
            "content": {"application/json": {"example": "User added!"}},
        },
        400: {"description": "Some error", "model": ErrorResponse},
    },
    summary="Create a new user",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": UserFields.model_json_schema()}},
        }
    },
)
async def add_user(
    payload: Dict[str, Any] = Body(),
    db: AsyncSession = Depends(get_db_session),
) -> str:
    return await user_service.add_user(db, payload)
