"""
CRUD operations for the Application model.

Every function takes the request's session and commits its own work;
file-system side effects stay in the API layer.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.models.application import Application, ApplicationStatus


def create(
    db: Session,
    role: str,
    location: str,
    personal_info: dict,
    employment_status: Optional[str],
    employment_history: Optional[dict],
    documents: dict
) -> Application:
    """
    Insert a new application with status=pending.

    Args:
        db: Database session
        personal_info: camelCase personal details document
        documents: {category: document metadata} for the files already stored

    Returns:
        Created Application instance with id
    """
    application = Application(
        role=role,
        location=location,
        personal_info=personal_info,
        employment_status=employment_status,
        employment_history=employment_history,
        documents=documents,
        status=ApplicationStatus.PENDING
    )

    db.add(application)
    db.commit()
    db.refresh(application)

    return application


def get_by_id(db: Session, application_id: int) -> Optional[Application]:
    return db.query(Application).filter(Application.id == application_id).first()


def get_multi(
    db: Session,
    search: Optional[str] = None,
    status: Optional[ApplicationStatus] = None
) -> List[Application]:
    """
    List applications, optionally filtered.

    Args:
        db: Database session
        search: Case-insensitive substring matched against full name, email and role
        status: Exact status match

    Returns:
        Matching applications in insertion order
    """
    query = db.query(Application)

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            Application.personal_info["fullName"].as_string().ilike(pattern),
            Application.personal_info["email"].as_string().ilike(pattern),
            Application.role.ilike(pattern)
        ))

    if status:
        query = query.filter(Application.status == status)

    return query.order_by(Application.id).all()


def find_duplicate(db: Session, email: str, phone: str, day: Optional[date] = None) -> Optional[Application]:
    """
    Find an application with the same email and phone created on the given UTC day.

    Defaults to today. Not serialized against a concurrent insert.
    """
    if day is None:
        day = datetime.now(timezone.utc).date()

    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    end = start + timedelta(days=1)

    return db.query(Application).filter(
        Application.personal_info["email"].as_string() == email,
        Application.personal_info["phone"].as_string() == phone,
        Application.created_at >= start,
        Application.created_at < end
    ).first()


def update_status(db: Session, application_id: int, status: ApplicationStatus) -> Optional[Application]:
    """
    Overwrite an application's status. Any transition is allowed.

    Returns:
        Updated Application instance if found, None otherwise
    """
    application = get_by_id(db, application_id)
    if not application:
        return None

    application.status = status
    db.commit()
    db.refresh(application)

    return application


def set_offer_letter(
    db: Session,
    application_id: int,
    offer_letter: dict
) -> Tuple[Optional[Application], Optional[dict]]:
    """
    Attach an offer letter, replacing any previous one.

    Returns:
        (updated application, previous offer letter document), or (None, None)
        if the application does not exist
    """
    application = get_by_id(db, application_id)
    if not application:
        return None, None

    previous = application.offer_letter
    application.offer_letter = offer_letter
    db.commit()
    db.refresh(application)

    return application, previous


def clear_offer_letter(db: Session, application_id: int) -> Tuple[bool, Optional[dict]]:
    """
    Remove the offer letter reference.

    Returns:
        (found, removed offer letter document)
    """
    application = get_by_id(db, application_id)
    if not application:
        return False, None

    previous = application.offer_letter
    application.offer_letter = None
    db.commit()

    return True, previous


def delete_all(db: Session) -> List[str]:
    """
    Delete every application in a single transaction.

    Returns:
        Stored file paths the deleted rows referenced, for the caller to remove
        once the delete is committed
    """
    applications = db.query(Application).all()
    paths = [path for application in applications for path in application.stored_paths()]

    db.query(Application).delete(synchronize_session=False)
    db.commit()

    return paths
