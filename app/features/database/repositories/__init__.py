"""Database Repositories - Organized data access."""

from app.features.database.repositories.journals import JournalsRepository
from app.features.database.repositories.goals import GoalsRepository
from app.features.database.repositories.users import UsersRepository
from app.features.database.repositories.insights import InsightsRepository

__all__ = [
    "JournalsRepository",
    "GoalsRepository",
    "UsersRepository",
    "InsightsRepository",
]
