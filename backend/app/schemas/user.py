"""
Exercise Tracker Backend — User Request/Response Schemas
=========================================================

What:  Pydantic models defining the API contract for /users.
"""

import uuid

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.exercise import UtcDatetime


class UserResponse(BaseModel):
    """A stored user."""

    id: uuid.UUID = Field(
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
        description="The user id",
    )
    username: str = Field(description="The username of the user")
    created_at: UtcDatetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: UtcDatetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "_id": "6f1c1b1e-8a7e-4c55-b0a4-2f2b6f1f7c11",
                    "username": "Nguyen Van A",
                    "createdAt": "2021-09-08T09:54:36.726000Z",
                    "updatedAt": "2021-09-08T09:54:36.726000Z",
                }
            ]
        },
    }
