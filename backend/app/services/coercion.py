"""
Exercise Tracker Backend — Input Coercion
==========================================

What:  Pydantic models turning untyped JSON request bodies into typed fields.
Why:   Request bodies arrive with no schema guarantees ("9" vs 9, date
       strings). Coercion runs before any record is built, so a bad value is
       a ValidationError and never reaches the database.
How:   `coerce_exercise_input` / `coerce_user_input` call `model_validate`
       and translate pydantic's errors into app.exceptions.ValidationError.
       They are pure functions: no session, no I/O.
Who:   ExerciseService and UserService; unit-tested on their own.

Rules:
    text      str as-is; int/float via str(); missing, None or "" is required
    duration  number or numeric string → finite float
    date      ISO 8601 string → aware UTC datetime; date-only means midnight UTC

Invalid values are rejected rather than stored as a sentinel. Every
conversion error (including overflow) surfaces as a validation error.
"""

import math
import uuid
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Iterable, Mapping

from pydantic import AfterValidator, BaseModel, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import ValidationError

# Where FastAPI puts the request part in an error location; not a field name
_REQUEST_PARTS = {"body", "path", "query", "header"}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _to_utc(value: datetime) -> datetime:
    """Naive means UTC; offsets are converted. Out-of-range results are rejected."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        raise ValueError(f"date '{value.isoformat()}' is out of range once converted to UTC")


class ExerciseFields(BaseModel):
    """The four user-supplied fields shared by create and update."""

    username: str
    description: str
    duration: float
    date: Annotated[datetime, AfterValidator(_to_utc)]

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "json_schema_extra": {
            "examples": [
                {
                    "username": "Nguyen Van A",
                    "description": "bike ride",
                    "duration": 9,
                    "date": "2021-09-07",
                }
            ]
        },
    }

    @field_validator("username", "description", mode="before")
    @classmethod
    def validate_text(cls, v: Any, info: ValidationInfo) -> str:
        """Required free text; numbers are accepted and stringified."""
        return _coerce_text(v, info.field_name)

    @field_validator("duration", mode="before")
    @classmethod
    def validate_duration(cls, v: Any) -> float:
        """30, 30.5, "30" and " 30 " are all valid; bools, lists and objects are not."""
        if _is_blank(v):
            raise ValueError("duration is required")
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            raise ValueError(f"duration must be a number, got {type(v).__name__}")
        try:
            return float(v.strip()) if isinstance(v, str) else float(v)
        except ValueError:
            raise ValueError(f"duration '{v}' is not a number")
        except OverflowError:
            raise ValueError("duration is too large")

    @field_validator("duration")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"duration '{v}' is not a finite number")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v: Any) -> datetime:
        """Only ISO 8601 strings; epoch numbers are not dates here."""
        if _is_blank(v):
            raise ValueError("date is required")
        if not isinstance(v, str):
            raise ValueError(f"date must be an ISO 8601 string, got {type(v).__name__}")
        try:
            return datetime.fromisoformat(v.strip())
        except ValueError:
            raise ValueError(f"date '{v}' is not a valid ISO 8601 date")


class UserFields(BaseModel):
    """The one user-supplied field of a user."""

    username: str

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "json_schema_extra": {"examples": [{"username": "Nguyen Van A"}]},
    }

    @field_validator("username", mode="before")
    @classmethod
    def validate_text(cls, v: Any, info: ValidationInfo) -> str:
        return _coerce_text(v, info.field_name)


def _coerce_text(value: Any, field: str) -> str:
    if _is_blank(value):
        raise ValueError(f"{field} is required")
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"{field} must be a string, got {type(value).__name__}")


def _field_name(loc: Iterable[Any]) -> str:
    return ".".join(str(part) for part in loc if part not in _REQUEST_PARTS)


def describe_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """
    Flatten pydantic/FastAPI error dicts into one readable line.

    Messages raised by our validators are used verbatim ("duration 'x' is not
    a number"); a missing key reads "<field> is required"; anything else is
    "<field>: <pydantic message>".
    """
    parts = []
    for err in errors:
        field = _field_name(err.get("loc", ()))
        cause = err.get("ctx", {}).get("error")
        if err.get("type") == "missing" and field:
            parts.append(f"{field} is required")
        elif cause is not None:
            parts.append(str(cause))
        elif field:
            parts.append(f"{field}: {err.get('msg', 'invalid')}")
        else:
            parts.append(err.get("msg", "invalid"))
    return "; ".join(parts) or "Invalid request"


def _validate(model: type, payload: Mapping[str, Any]):
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False)
        field = _field_name(errors[0].get("loc", ())) if errors else None
        raise ValidationError(
            message=describe_validation_errors(errors),
            field=field or None,
            context={"error_count": len(errors)},
        )


def coerce_exercise_input(payload: Mapping[str, Any]) -> ExerciseFields:
    """Validate and coerce the four fields shared by create and update."""
    return _validate(ExerciseFields, payload)


def coerce_user_input(payload: Mapping[str, Any]) -> UserFields:
    return _validate(UserFields, payload)


def parse_record_id(raw: str) -> uuid.UUID:
    """Parse a path id; anything that is not a UUID is a malformed id."""
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError):
        raise ValidationError(
            message=f"'{raw}' is not a valid record id",
            field="id",
        )
