import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from workout_api.db import get_db
from workout_api.deps.auth import ensure_owner, get_current_claim
from workout_api.repositories.workout_repo import WorkoutRepository
from workout_api.schemas.workout import Message, WorkoutRead, WorkoutSave, WorkoutSaved
from workout_api.security import IdentityClaim

router = APIRouter(prefix="/workouts", tags=["workouts"])

@router.get("", response_model=list[WorkoutRead])
def get_day(
    user_id: int = Query(..., alias="userId", ge=1),
    day: datetime.date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    claim: IdentityClaim = Depends(get_current_claim),
):
    ensure_owner(claim, user_id)
    return WorkoutRepository(db).list_for_day(user_id, day)

@router.get("/all", response_model=list[WorkoutRead])
def get_all(
    user_id: int = Query(..., alias="userId", ge=1),
    db: Session = Depends(get_db),
    claim: IdentityClaim = Depends(get_current_claim),
):
    ensure_owner(claim, user_id)
    return WorkoutRepository(db).list_all(user_id)

@router.post("", response_model=WorkoutSaved)
def save_workout(
    payload: WorkoutSave,
    db: Session = Depends(get_db),
    claim: IdentityClaim = Depends(get_current_claim),
):
    ensure_owner(claim, payload.user_id)
    workout_id = WorkoutRepository(db).replace_day(payload.user_id, payload.date, payload.exercises)
    return WorkoutSaved(workout_id=workout_id)

@router.delete("/{workout_id}", response_model=Message)
def delete_workout(
    workout_id: int,
    db: Session = Depends(get_db),
    claim: IdentityClaim = Depends(get_current_claim),
):
    # Unknown ids fall through: deleting nothing still succeeds
    WorkoutRepository(db).delete(workout_id, user_id=claim.user_id)
    return Message(message="Workout deleted successfully")
