"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization
from app.models.user import User
from app.models.job import Job
from app.models.application import Application

# Export all models
__all__ = [
    "User",
    "Job",
    "Application",
]
