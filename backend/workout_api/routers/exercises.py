from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from workout_api.db import get_db
from workout_api.repositories.exercise_repo import ExerciseRepository
from workout_api.schemas.workout import ExerciseDefinitionRead

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("", response_model=list[ExerciseDefinitionRead])
def list_exercises(db: Session = Depends(get_db)):
    return ExerciseRepository(db).list()
