from __future__ import annotations
from sqlalchemy import select
from workout_api.models import ExerciseDefinition
from workout_api.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[ExerciseDefinition]):
    model = ExerciseDefinition

    def list(self) -> list[ExerciseDefinition]:
        stmt = select(ExerciseDefinition).order_by(ExerciseDefinition.id.asc())
        with self.reading("list exercises"):
            return list(self.db.execute(stmt).scalars().all())

    def ensure(self, names: list[str]) -> int:
        """Insert catalog names that are not there yet; returns how many were added."""
        with self.transaction("seed exercises"):
            present = set(self.db.execute(select(ExerciseDefinition.name)).scalars())
            fresh = [n for n in dict.fromkeys(names) if n not in present]
            self.db.add_all(ExerciseDefinition(name=n) for n in fresh)
        return len(fresh)
