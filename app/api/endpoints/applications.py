"""
API endpoints for job applications.

Handles intake with document uploads, listing and lookup, status review,
offer letters, and clearing all records.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, UploadFile, File, Form, Depends, HTTPException
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.database import get_db
from app.core.storage import LocalStorage, InvalidUploadError, get_storage, validate_upload
from app.crud import application as application_crud
from app.models.application import ApplicationStatus, DocumentCategory, EmploymentStatus
from app.schemas.application import (
    ApplicationActionResponse,
    ApplicationCreateResponse,
    ApplicationResponse,
    DocumentInfo,
    EmploymentHistory,
    MessageResponse,
    PersonalInfo,
    StatusUpdateRequest,
)

router = APIRouter(prefix="/applications", tags=["Applications"])
logger = logging.getLogger(__name__)


async def _read_upload(upload: UploadFile) -> bytes:
    """Read an upload and reject it unless it is a PDF/JPG/PNG within the size limit.

    Never reads more than one byte past the limit into memory.
    """
    max_size = settings.MAX_UPLOAD_SIZE
    try:
        if upload.size is not None:
            validate_upload(upload.filename, upload.content_type, upload.size, max_size)
        content = await upload.read(max_size + 1)
        validate_upload(upload.filename, upload.content_type, len(content), max_size)
    except InvalidUploadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return content


def _document_info(upload: UploadFile, stored_path: str, size: int) -> dict:
    return DocumentInfo(
        original_name=upload.filename,
        stored_path=stored_path,
        mime_type=upload.content_type,
        size_bytes=size
    ).model_dump(by_alias=True)


@router.post("", status_code=201, response_model=ApplicationCreateResponse)
async def submit_application(
    role: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    full_name: Optional[str] = Form(None, alias="fullName"),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    father_name: Optional[str] = Form(None, alias="fatherName"),
    father_phone: Optional[str] = Form(None, alias="fatherPhone"),
    employment_status: Optional[str] = Form(None, alias="employmentStatus"),
    company_name: Optional[str] = Form(None, alias="companyName"),
    company_location: Optional[str] = Form(None, alias="companyLocation"),
    experience: Optional[str] = Form(None),
    ssc: Optional[UploadFile] = File(None),
    inter: Optional[UploadFile] = File(None),
    graduation: Optional[UploadFile] = File(None),
    postgrad: Optional[UploadFile] = File(None),
    relieving: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage)
):
    """
    Submit a job application with up to five supporting documents.

    Flow:
    1. Check required personal and role fields
    2. Validate every uploaded file (PDF, JPG, PNG; 5MB max) before storing any
    3. Reject a second application with the same email and phone on the same UTC day
    4. Store files, then insert the row with status=pending

    Raises:
        HTTPException 400: Missing fields, rejected file, or duplicate for today
        HTTPException 500: Storage or database failure
    """
    required = [role, location, full_name, email, phone, gender, father_name, father_phone]
    if not all(required):
        raise HTTPException(status_code=400, detail="All required fields must be provided")

    slots = {
        DocumentCategory.SSC: ssc,
        DocumentCategory.INTER: inter,
        DocumentCategory.GRADUATION: graduation,
        DocumentCategory.POSTGRAD: postgrad,
        DocumentCategory.RELIEVING: relieving,
    }
    uploads = {}
    for category, upload in slots.items():
        # Browsers send an empty part with no filename for unused file inputs
        if upload is None or not upload.filename:
            continue
        uploads[category] = (upload, await _read_upload(upload))

    personal_info = PersonalInfo(
        full_name=full_name,
        email=email,
        phone=phone,
        gender=gender,
        father_name=father_name,
        father_phone=father_phone
    )

    employment_history = None
    if employment_status == EmploymentStatus.EXPERIENCED.value:
        employment_history = EmploymentHistory(
            company_name=company_name,
            location=company_location,
            experience=experience
        ).model_dump(by_alias=True)

    written = []
    try:
        if application_crud.find_duplicate(db, email, phone):
            raise HTTPException(status_code=400, detail="Duplicate application detected for today")

        documents = {}
        for category, (upload, content) in uploads.items():
            stored_path = storage.upload_file(content, upload.filename)
            written.append(stored_path)
            documents[category.value] = _document_info(upload, stored_path, len(content))

        application = application_crud.create(
            db,
            role=role,
            location=location,
            personal_info=personal_info.model_dump(by_alias=True),
            employment_status=employment_status,
            employment_history=employment_history,
            documents=documents
        )

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        # Files are only referenced once the row exists
        for path in written:
            storage.delete_file(path)
        logger.error(f"Error submitting application: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to submit application")

    logger.info(f"Created application {application.id} for role '{role}' with {len(written)} documents")
    return ApplicationCreateResponse(id=application.id, message="Application submitted successfully")


@router.get("", response_model=List[ApplicationResponse])
def list_applications(
    search: Optional[str] = None,
    status: str = "all",
    db: Session = Depends(get_db)
):
    """
    List all applications.

    Args:
        search: Case-insensitive match against full name, email or role
        status: pending, approved, rejected, or all (default)
    """
    status_filter = None
    if status != "all":
        try:
            status_filter = ApplicationStatus(status)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid status")

    try:
        return application_crud.get_multi(db, search=search, status=status_filter)
    except Exception as e:
        logger.error(f"Error fetching applications: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch applications")


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(application_id: int, db: Session = Depends(get_db)):
    try:
        application = application_crud.get_by_id(db, application_id)
    except Exception as e:
        logger.error(f"Error fetching application {application_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch application")

    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    return application


@router.put("/{application_id}/status", response_model=ApplicationActionResponse)
def update_application_status(
    application_id: int,
    request: StatusUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Set the review status to pending, approved or rejected.

    Any status can be set from any other.
    """
    try:
        new_status = ApplicationStatus(request.status)
    except (ValueError, TypeError):
        raise HTTPException(status_code=400, detail="Invalid status")

    try:
        application = application_crud.update_status(db, application_id, new_status)
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating status of application {application_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update status")

    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    logger.info(f"Application {application_id} status set to {new_status.value}")
    return ApplicationActionResponse(
        message=f"Application {new_status.value} successfully",
        application=ApplicationResponse.model_validate(application)
    )


@router.post("/{application_id}/offer-letter", response_model=ApplicationActionResponse)
async def upload_offer_letter(
    application_id: int,
    offer_letter: Optional[UploadFile] = File(None, alias="offerLetter"),
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage)
):
    """
    Attach an offer letter, replacing any previous one.

    The file is stored first; if the application does not exist it is
    deleted again and 404 is returned. A replaced offer letter is removed
    from storage once the new one is committed.
    """
    if offer_letter is None or not offer_letter.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    content = await _read_upload(offer_letter)

    stored_path = None
    try:
        stored_path = storage.upload_file(content, offer_letter.filename)
        application, previous = application_crud.set_offer_letter(
            db,
            application_id,
            _document_info(offer_letter, stored_path, len(content))
        )
        if not application:
            storage.delete_file(stored_path)
            raise HTTPException(status_code=404, detail="Application not found")

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        if stored_path:
            storage.delete_file(stored_path)
        logger.error(f"Error uploading offer letter for application {application_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to upload offer letter")

    if previous and previous.get("storedPath"):
        storage.delete_file(previous["storedPath"])

    logger.info(f"Attached offer letter {stored_path} to application {application_id}")
    return ApplicationActionResponse(
        message="Offer letter uploaded successfully",
        application=ApplicationResponse.model_validate(application)
    )


@router.delete("/{application_id}/offer-letter", response_model=MessageResponse)
def remove_offer_letter(
    application_id: int,
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage)
):
    """
    Remove the offer letter. The reference is cleared before the file is deleted.
    """
    try:
        found, previous = application_crud.clear_offer_letter(db, application_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error removing offer letter from application {application_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to remove offer letter")

    if not found:
        raise HTTPException(status_code=404, detail="Application not found")

    if previous and previous.get("storedPath"):
        storage.delete_file(previous["storedPath"])

    logger.info(f"Removed offer letter from application {application_id}")
    return MessageResponse(message="Offer letter removed successfully")


@router.delete("", response_model=MessageResponse)
def clear_applications(
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage)
):
    """
    Delete every application and all of its stored files.

    Rows are deleted in one transaction first; files are removed only after
    the commit, so no remaining row can point at a deleted file. A file that
    fails to delete is logged and left behind.
    """
    try:
        paths = application_crud.delete_all(db)
    except Exception as e:
        db.rollback()
        logger.error(f"Error clearing applications: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to clear records")

    removed = sum(1 for path in paths if storage.delete_file(path))
    logger.info(f"Cleared all applications; removed {removed}/{len(paths)} stored files")

    return MessageResponse(message="All records cleared successfully")
