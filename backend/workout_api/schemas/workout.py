import datetime
from typing import Annotated
from pydantic import BaseModel, Field

PosInt = Annotated[int, Field(ge=1)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0)]

class SetCreate(BaseModel):
    weight: NonNegFloat
    repetitions: NonNegInt

class ExerciseCreate(BaseModel):
    exercise_definition_id: PosInt
    sets: list[SetCreate]

class WorkoutSave(BaseModel):
    user_id: PosInt
    date: datetime.date
    exercises: list[ExerciseCreate]

class WorkoutSaved(BaseModel):
    message: str = "Workout saved successfully"
    workout_id: int

class SetRead(BaseModel):
    id: int
    weight: float
    repetitions: int

    model_config = {"from_attributes": True}

class ExerciseRead(BaseModel):
    id: int
    exercise_definition_id: int | None = None
    name: str
    sets: list[SetRead]

    model_config = {"from_attributes": True}

class WorkoutRead(BaseModel):
    id: int
    date: datetime.date
    exercises: list[ExerciseRead]

    model_config = {"from_attributes": True}

class ExerciseDefinitionRead(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}

class Message(BaseModel):
    message: str
