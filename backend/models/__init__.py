# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.user import User
from models.journal import JournalEntry

__all__ = [
    "User",
    "JournalEntry",
]
