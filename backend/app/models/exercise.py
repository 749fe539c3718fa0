"""
Exercise Tracker Backend — Exercise SQLAlchemy Model
=====================================================

What:  ORM model for the `exercises` table, one row per exercise log entry.
Who:   ExerciseService for CRUD; `create_tables` at startup.

Column notes:
    - id: UUID generated in Python at insert time, never reused
    - username: free text; deliberately NOT a foreign key to users.username
    - duration: stored as a float so "9" and "9.5" both round-trip
    - date: when the exercise happened, always stored in UTC
"""

import uuid
from datetime import datetime

from sqlalchemy import Float, Index, String, Text, TIMESTAMP, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, TimestampMixin


class Exercise(TimestampMixin, Base):
    """A single exercise log entry."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    duration: Mapped[float] = mapped_column(Float, nullable=False)

    date: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_exercises_username", "username"),
    )

    def __repr__(self) -> str:
        return (
            f"<Exercise(id={self.id}, username='{self.username}', "
            f"duration={self.duration}, date='{self.date}')>"
        )
