"""
Database models package.
"""

from app.models.application import Application, ApplicationStatus, DocumentCategory, EmploymentStatus

__all__ = ["Application", "ApplicationStatus", "DocumentCategory", "EmploymentStatus"]
