import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, Date, UniqueConstraint
from workout_api.db import Base

class Workout(Base):
    __tablename__ = "workouts"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_workouts_user_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    user = relationship("User", back_populates="workouts")
    exercises = relationship("ExerciseInstance", back_populates="workout", passive_deletes=True)
