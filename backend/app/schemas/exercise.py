"""
Exercise Tracker Backend — Exercise Request/Response Schemas
=============================================================

What:  Pydantic models defining the API contract for /exercises.
Why:   Response serialization and OpenAPI documentation.

Request bodies have no schema here: they are validated by
app.services.coercion, which accepts "30" and 30 alike for duration.

Wire names follow the original document store: `_id`, `createdAt`,
`updatedAt`.
"""

import uuid
from datetime import datetime, timezone
from typing import Annotated, Union

from pydantic import AfterValidator, AliasChoices, BaseModel, Field, field_serializer


EXERCISE_EXAMPLE = {
    "_id": "0f8fad5b-d9cb-469f-a165-70867728950e",
    "username": "Nguyen Van A",
    "description": "bike ride",
    "duration": 9,
    "date": "2021-09-07T09:54:36.726000Z",
    "createdAt": "2021-09-08T09:54:36.726000Z",
    "updatedAt": "2021-09-08T09:54:36.726000Z",
}


def ensure_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything is stored in UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class ExerciseResponse(BaseModel):
    """A stored exercise log entry."""

    id: uuid.UUID = Field(
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
        description="The exercise id",
    )
    username: str = Field(description="The username of the user doing the exercise")
    description: str = Field(description="The exercise that was done")
    duration: float = Field(description="How long the exercise lasted")
    date: UtcDatetime = Field(description="When the exercise was done (UTC)")
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
        "json_schema_extra": {"examples": [EXERCISE_EXAMPLE]},
    }

    @field_serializer("duration")
    def serialize_duration(self, value: float) -> Union[int, float]:
        # "9" was submitted, 9 is returned
        return int(value) if value.is_integer() else value
