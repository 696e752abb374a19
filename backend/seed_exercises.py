import sys
from pathlib import Path

from workout_api.db import SessionLocal
from workout_api.repositories.exercise_repo import ExerciseRepository

#default catalog
#the API never writes exercise_definitions itself, this script is the only writer
DEFAULT_EXERCISES = [
    "Bench Press",
    "Incline Bench Press",
    "Overhead Press",
    "Squat",
    "Front Squat",
    "Deadlift",
    "Romanian Deadlift",
    "Barbell Row",
    "Pull Up",
    "Chin Up",
    "Dip",
    "Lunge",
    "Leg Press",
    "Bicep Curl",
    "Tricep Extension",
    "Lateral Raise",
    "Calf Raise",
]


def read_names(path):
    """One exercise name per line; blank lines and # comments are skipped."""
    names = []
    for line in Path(path).read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            names.append(line)
    return names


def seed(names, session_factory=SessionLocal):
    with session_factory() as db:
        return ExerciseRepository(db).ensure(names)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    names = read_names(argv[0]) if argv else DEFAULT_EXERCISES
    added = seed(names)
    print(f"Added {added} of {len(names)} exercises")


if __name__ == "__main__":
    main()
