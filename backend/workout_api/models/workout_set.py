from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, Float, CheckConstraint
from workout_api.db import Base

class WorkoutSet(Base):
    __tablename__ = "sets"
    __table_args__ = (
        CheckConstraint("weight >= 0", name="ck_sets_weight_unsigned"),
        CheckConstraint("repetitions >= 0", name="ck_sets_repetitions_unsigned"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    exercise_instance_id: Mapped[int] = mapped_column(
        ForeignKey("exercise_instances.id", ondelete="CASCADE"), index=True
    )
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    repetitions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    exercise_instance = relationship("ExerciseInstance", back_populates="sets")
