from workout_api.models.user import User
from workout_api.models.exercise_definition import ExerciseDefinition
from workout_api.models.workout import Workout
from workout_api.models.exercise_instance import ExerciseInstance
from workout_api.models.workout_set import WorkoutSet

__all__ = ["User", "ExerciseDefinition", "Workout", "ExerciseInstance", "WorkoutSet"]
