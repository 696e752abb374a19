# workout_api/aggregation.py
"""
Fold flat join rows into nested workouts.

The rows come from the outer join

    workouts <- exercise_instances <- exercise_definitions
                exercise_instances <- sets

so a workout without exercises shows up as a single row whose instance and
set columns are NULL, and an exercise without sets as a single row whose set
columns are NULL. Output order follows the first appearance of each id in
the input; callers must hand rows over in a deterministic order (the
repository orders by workout id, instance id, set id).
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Iterable, NamedTuple, Optional, Protocol

UNKNOWN_EXERCISE = "Unknown Exercise"


class RowLike(Protocol):
    workout_id: int
    date: datetime.date
    exercise_instance_id: Optional[int]
    exercise_definition_id: Optional[int]
    exercise_name: Optional[str]
    set_id: Optional[int]
    weight: Optional[float]
    repetitions: Optional[int]


class JoinedRow(NamedTuple):
    """One row of the workout join; SQLAlchemy result rows have the same shape."""
    workout_id: int
    date: datetime.date
    exercise_instance_id: Optional[int] = None
    exercise_definition_id: Optional[int] = None
    exercise_name: Optional[str] = None
    set_id: Optional[int] = None
    weight: Optional[float] = None
    repetitions: Optional[int] = None


@dataclass(slots=True)
class SetView:
    id: int
    weight: float
    repetitions: int


@dataclass(slots=True)
class ExerciseView:
    id: int
    exercise_definition_id: Optional[int]
    name: str
    sets: list[SetView] = field(default_factory=list)


@dataclass(slots=True)
class WorkoutView:
    id: int
    date: datetime.date
    exercises: list[ExerciseView] = field(default_factory=list)


def aggregate_workouts(rows: Iterable[RowLike]) -> list[WorkoutView]:
    workouts: dict[int, WorkoutView] = {}
    # exercise ids are only unique within their workout
    exercises: dict[tuple[int, int], ExerciseView] = {}

    for row in rows:
        workout = workouts.get(row.workout_id)
        if workout is None:
            workout = WorkoutView(id=row.workout_id, date=row.date)
            workouts[row.workout_id] = workout

        if row.exercise_instance_id is None:
            continue

        key = (row.workout_id, row.exercise_instance_id)
        exercise = exercises.get(key)
        if exercise is None:
            exercise = ExerciseView(
                id=row.exercise_instance_id,
                exercise_definition_id=row.exercise_definition_id,
                name=row.exercise_name or UNKNOWN_EXERCISE,
            )
            exercises[key] = exercise
            workout.exercises.append(exercise)

        if row.set_id is not None:
            exercise.sets.append(
                SetView(id=row.set_id, weight=row.weight, repetitions=row.repetitions)
            )

    # dicts keep insertion order, i.e. first appearance
    return list(workouts.values())
