# SQLAlchemy models - import in main.py so Base.metadata has all tables
from interview_api.models.talent import CareerPath, Talent

__all__ = [
    "Talent",
    "CareerPath",
]
