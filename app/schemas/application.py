"""
Pydantic schemas for Application API requests/responses.

All fields serialize camelCase (personalInfo, createdAt, ...); nested
records are stored in the database with the same camelCase keys.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from app.models.application import ApplicationStatus


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PersonalInfo(CamelModel):
    full_name: str
    email: str
    phone: str
    gender: str
    father_name: str
    father_phone: str


class EmploymentHistory(CamelModel):
    """Previous employment, only recorded for experienced applicants."""
    company_name: Optional[str] = None
    location: Optional[str] = None
    experience: Optional[str] = None


class DocumentInfo(CamelModel):
    """Metadata for one stored upload."""
    original_name: str
    stored_path: str
    mime_type: str
    size_bytes: int


class ApplicationDocuments(CamelModel):
    ssc: Optional[DocumentInfo] = None
    inter: Optional[DocumentInfo] = None
    graduation: Optional[DocumentInfo] = None
    postgrad: Optional[DocumentInfo] = None
    relieving: Optional[DocumentInfo] = None


class ApplicationResponse(CamelModel):
    """Full application record"""
    id: int
    role: str
    location: str
    personal_info: PersonalInfo
    employment_status: Optional[str] = None
    employment_history: Optional[EmploymentHistory] = None
    documents: ApplicationDocuments = Field(default_factory=ApplicationDocuments)
    offer_letter: Optional[DocumentInfo] = None
    status: ApplicationStatus
    created_at: datetime


class ApplicationCreateResponse(BaseModel):
    id: int
    message: str


class StatusUpdateRequest(BaseModel):
    # Untyped so any unknown value, including non-strings, maps to 400 "Invalid status" instead of a 422
    status: Optional[Any] = None


class ApplicationActionResponse(BaseModel):
    """Response for operations that change one application."""
    message: str
    application: ApplicationResponse


class MessageResponse(BaseModel):
    message: str


