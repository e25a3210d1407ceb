"""
Application database model.

One row per job-application submission. Personal details, employment
history and uploaded document metadata are stored as JSON documents;
status is the only field reviewers change after submission (besides the
offer letter).
"""

import enum
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Enum, JSON
from sqlalchemy.dialects.postgresql import JSONB
from app.core.database import Base

# JSONB on PostgreSQL, plain JSON on other engines (SQLite in tests)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class ApplicationStatus(str, enum.Enum):
    """
    Review status. Any status may be set from any other:

    pending <-> approved <-> rejected <-> pending
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EmploymentStatus(str, enum.Enum):
    FRESHER = "fresher"
    EXPERIENCED = "experienced"


class DocumentCategory(str, enum.Enum):
    """Fixed upload slots on the intake form."""
    SSC = "ssc"
    INTER = "inter"
    GRADUATION = "graduation"
    POSTGRAD = "postgrad"
    RELIEVING = "relieving"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Application(Base):
    """
    A single job application with its uploaded documents.
    """
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    role = Column(String, nullable=False)
    location = Column(String, nullable=False)

    # {fullName, email, phone, gender, fatherName, fatherPhone}
    personal_info = Column(JSONDocument, nullable=False)

    employment_status = Column(String, nullable=True)
    # {companyName, location, experience}, only for experienced applicants
    employment_history = Column(JSONDocument, nullable=True)

    # {category: {originalName, storedPath, mimeType, sizeBytes}}
    documents = Column(JSONDocument, nullable=False, default=dict)
    offer_letter = Column(JSONDocument, nullable=True)

    status = Column(
        Enum(
            ApplicationStatus,
            name="application_status",
            values_callable=lambda statuses: [s.value for s in statuses]
        ),
        default=ApplicationStatus.PENDING,
        nullable=False,
        index=True
    )

    # Set in Python so the duplicate-per-day check sees the same UTC clock
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    def stored_paths(self) -> list:
        """Every file path this application references on disk."""
        paths = [doc["storedPath"] for doc in (self.documents or {}).values() if doc and doc.get("storedPath")]
        if self.offer_letter and self.offer_letter.get("storedPath"):
            paths.append(self.offer_letter["storedPath"])
        return paths

    def __repr__(self):
        return f"<Application(id={self.id}, role='{self.role}', status={self.status.value})>"
