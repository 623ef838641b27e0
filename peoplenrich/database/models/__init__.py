# peoplenrich/database/models/__init__.py

from peoplenrich.database.core.main import Base
from peoplenrich.database.models.person import Person

__all__ = [
    "Base",
    "Person",
]
