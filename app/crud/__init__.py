"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer keeps SQLAlchemy queries out of the API routes.
"""

from app.crud import application

__all__ = ["application"]
