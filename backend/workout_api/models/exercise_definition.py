from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String
from workout_api.db import Base

class ExerciseDefinition(Base):
    """Read-only catalog entry; seeded outside the API."""
    __tablename__ = "exercise_definitions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
