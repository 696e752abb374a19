from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey
from workout_api.db import Base

class ExerciseInstance(Base):
    __tablename__ = "exercise_instances"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_id: Mapped[int] = mapped_column(ForeignKey("workouts.id", ondelete="CASCADE"), index=True)
    # NULL once the catalog entry is gone; reads then show "Unknown Exercise"
    exercise_definition_id: Mapped[int | None] = mapped_column(
        ForeignKey("exercise_definitions.id", ondelete="SET NULL"), nullable=True
    )

    workout = relationship("Workout", back_populates="exercises")
    definition = relationship("ExerciseDefinition")
    sets = relationship("WorkoutSet", back_populates="exercise_instance", passive_deletes=True)
