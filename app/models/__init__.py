# Import all models so Alembic can discover them via Base.metadata
from .certificate import Certificate
from .course import Course
from .event import Event

__all__ = [
    "Certificate",
    "Course",
    "Event",
]
