from __future__ import annotations
import datetime
import logging
from typing import Any, Iterable, Optional, Sequence

from pydantic import PositiveInt, TypeAdapter, ValidationError as PydanticValidationError
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from workout_api.aggregation import WorkoutView, aggregate_workouts
from workout_api.errors import ForbiddenError, NotFoundError, ValidationError
from workout_api.models import ExerciseDefinition, ExerciseInstance, User, Workout, WorkoutSet
from workout_api.repositories.base import BaseRepository, KeyedLock
from workout_api.schemas.workout import ExerciseCreate, SetCreate

log = logging.getLogger(__name__)

_exercises_adapter = TypeAdapter(list[ExerciseCreate])
_user_id_adapter = TypeAdapter(PositiveInt)
_day_adapter = TypeAdapter(datetime.date)

# shared by every repository instance in the process
day_locks = KeyedLock()


class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def __init__(self, db: Session, *, locks: KeyedLock = day_locks):
        super().__init__(db)
        self.locks = locks

    # READS
    def _joined_rows_stmt(self, user_id: int):
        return (
            select(
                Workout.id.label("workout_id"),
                Workout.date.label("date"),
                ExerciseInstance.id.label("exercise_instance_id"),
                ExerciseInstance.exercise_definition_id.label("exercise_definition_id"),
                ExerciseDefinition.name.label("exercise_name"),
                WorkoutSet.id.label("set_id"),
                WorkoutSet.weight.label("weight"),
                WorkoutSet.repetitions.label("repetitions"),
            )
            .select_from(Workout)
            .outerjoin(ExerciseInstance, ExerciseInstance.workout_id == Workout.id)
            .outerjoin(ExerciseDefinition, ExerciseInstance.exercise_definition_id == ExerciseDefinition.id)
            .outerjoin(WorkoutSet, WorkoutSet.exercise_instance_id == ExerciseInstance.id)
            .where(Workout.user_id == user_id)
            # aggregation keeps first-appearance order, so pin it here
            .order_by(Workout.id.asc(), ExerciseInstance.id.asc(), WorkoutSet.id.asc())
        )

    def list_for_day(self, user_id: int, day: datetime.date) -> list[WorkoutView]:
        stmt = self._joined_rows_stmt(user_id).where(Workout.date == day)
        with self.reading("load workout"):
            rows = self.db.execute(stmt).all()
        return aggregate_workouts(rows)

    def list_all(self, user_id: int) -> list[WorkoutView]:
        with self.reading("load workouts"):
            rows = self.db.execute(self._joined_rows_stmt(user_id)).all()
        return aggregate_workouts(rows)

    # WRITES
    def _delete_trees(self, workout_ids: Sequence[int]) -> None:
        """Sets, then instances, then workouts; no orphans at any level."""
        if not workout_ids:
            return
        instance_ids = select(ExerciseInstance.id).where(ExerciseInstance.workout_id.in_(workout_ids))
        self.db.execute(delete(WorkoutSet).where(WorkoutSet.exercise_instance_id.in_(instance_ids)))
        self.db.execute(delete(ExerciseInstance).where(ExerciseInstance.workout_id.in_(workout_ids)))
        self.db.execute(delete(Workout).where(Workout.id.in_(workout_ids)))

    def _add_sets(self, exercise_instance_id: int, sets: Iterable[SetCreate]) -> None:
        self.db.add_all(
            WorkoutSet(exercise_instance_id=exercise_instance_id, weight=s.weight, repetitions=s.repetitions)
            for s in sets
        )
        self.db.flush()

    def delete(self, workout_id: int, *, user_id: Optional[int] = None) -> None:
        """
        Remove a workout with all its exercises and sets. Unknown ids are a no-op.

        With `user_id`, an existing workout owned by someone else raises
        ForbiddenError; the owner is read in the same transaction as the delete.
        """
        with self.transaction(f"delete workout {workout_id}"):
            if user_id is not None:
                owner = self.db.execute(
                    select(Workout.user_id).where(Workout.id == workout_id).with_for_update()
                ).scalar_one_or_none()
                if owner is not None and owner != user_id:
                    raise ForbiddenError("Not allowed for this user")
            self._delete_trees([workout_id])

    def replace_day(self, user_id: int, day: datetime.date, exercises: Iterable[Any]) -> int:
        """
        Store the full workout of `user_id` on `day`, replacing any earlier one.

        `exercises` is a list of ExerciseCreate models or equivalent dicts. It
        is validated, along with `user_id` and `day` (an ISO string is parsed),
        before the store is touched. Exercises whose definition id does not
        resolve are skipped; any store failure rolls the whole
        replacement back, so the day keeps either the old or the new workout.
        Returns the id of the new workout.
        """
        try:
            user_id = _user_id_adapter.validate_python(user_id)
            day = _day_adapter.validate_python(day)
            specs = _exercises_adapter.validate_python(exercises, from_attributes=True)
        except PydanticValidationError as exc:
            raise ValidationError("Invalid payload") from exc

        with self.locks.hold((user_id, day)):
            with self.transaction(f"save workout of user {user_id} on {day}"):
                # row lock on the owner orders concurrent saves across processes
                owner = self.db.execute(
                    select(User.id).where(User.id == user_id).with_for_update()
                ).scalar_one_or_none()
                if owner is None:
                    raise NotFoundError("User not found")

                existing = self.db.execute(
                    select(Workout.id).where(Workout.user_id == user_id, Workout.date == day)
                ).scalars().all()
                self._delete_trees(existing)

                workout = self.add_and_refresh(Workout(user_id=user_id, date=day))

                known = set(
                    self.db.execute(
                        select(ExerciseDefinition.id).where(
                            ExerciseDefinition.id.in_(sorted({s.exercise_definition_id for s in specs}))
                        )
                    ).scalars()
                ) if specs else set()

                for spec in specs:
                    if spec.exercise_definition_id not in known:
                        log.warning(
                            "skipping unknown exercise definition %s for workout %s",
                            spec.exercise_definition_id, workout.id,
                        )
                        continue
                    instance = ExerciseInstance(
                        workout_id=workout.id, exercise_definition_id=spec.exercise_definition_id
                    )
                    self.db.add(instance)
                    self.db.flush()
                    self._add_sets(instance.id, spec.sets)

                workout_id = workout.id

        log.info("saved workout %s for user %s on %s (%d exercises)", workout_id, user_id, day, len(specs))
        return workout_id
