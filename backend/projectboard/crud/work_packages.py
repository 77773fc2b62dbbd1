from sqlalchemy.orm import Session

from projectboard.db.models._mixins import utcnow
from projectboard.db.models.attachment import Attachment
from projectboard.db.models.category import Category
from projectboard.db.models.project import Project
from projectboard.db.models.type import Type
from projectboard.db.models.user import User
from projectboard.db.models.version import Version
from projectboard.db.models.work_package import WorkPackage
from projectboard.schemas.work_package import AttachmentIn, WorkPackageBase, WorkPackageCreate


class WorkPackageInvalid(ValueError):
    def __init__(self, errors: dict[str, str]):
        super().__init__(", ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


def list_work_packages(db: Session, project_id: int):
    return db.query(WorkPackage).filter(WorkPackage.project_id == project_id).order_by(WorkPackage.id).all()


def get_work_package(db: Session, work_package_id: int) -> WorkPackage | None:
    return db.query(WorkPackage).filter(WorkPackage.id == work_package_id).one_or_none()


def resolve_type(project: Project, type_id: int | None) -> Type | None:
    """The requested type if it is enabled in ``project``, else the project's first type."""
    if type_id is None:
        return project.types[0] if project.types else None
    return next((ty for ty in project.types if ty.id == type_id), None)


def validate(db: Session, project: Project, data: WorkPackageBase, current: WorkPackage | None = None) -> tuple[Type | None, dict[str, str]]:
    errors: dict[str, str] = {}

    type_id = data.type_id if data.type_id is not None else (current.type_id if current else None)
    ty = resolve_type(project, type_id)
    if ty is None:
        errors["type"] = "type_not_enabled"

    if current is None and not (data.subject or "").strip():
        errors["subject"] = "blank"

    if data.category_id is not None:
        c = db.query(Category).filter(Category.id == data.category_id).one_or_none()
        if not c or c.project_id != project.id:
            errors["category"] = "not_in_project"
    if data.version_id is not None:
        v = db.query(Version).filter(Version.id == data.version_id).one_or_none()
        if not v or v.project_id != project.id:
            errors["version"] = "not_in_project"

    if ty is not None and not ty.is_milestone:
        start = data.start_date or (current.start_date if current else None)
        due = data.due_date or (current.due_date if current else None)
        if start and due and due < start:
            errors["dueDate"] = "before_start_date"
    return ty, errors


def _apply(wp: WorkPackage, ty: Type, data: WorkPackageBase) -> None:
    if data.subject is not None:
        wp.subject = data.subject.strip()
    if data.description is not None:
        wp.description = data.description
    wp.type_id = ty.id
    if ty.is_milestone:
        date = data.date or data.start_date or data.due_date
        if date is not None:
            wp.start_date = date
            wp.due_date = date
        elif wp.start_date or wp.due_date:
            wp.due_date = wp.start_date = wp.start_date or wp.due_date
    else:
        if data.start_date is not None:
            wp.start_date = data.start_date
        if data.due_date is not None:
            wp.due_date = data.due_date
    if data.category_id is not None:
        wp.category_id = data.category_id
    if data.version_id is not None:
        wp.version_id = data.version_id


def create_work_package(db: Session, project: Project, data: WorkPackageCreate, author: User | None = None) -> WorkPackage:
    ty, errors = validate(db, project, data)
    if errors:
        raise WorkPackageInvalid(errors)
    wp = WorkPackage(project_id=project.id, author_id=author.id if author else None)
    _apply(wp, ty, data)
    db.add(wp)
    db.commit()
    db.refresh(wp)
    return wp


def update_work_package(db: Session, wp: WorkPackage, data: WorkPackageBase) -> WorkPackage:
    ty, errors = validate(db, wp.project, data, current=wp)
    if errors:
        raise WorkPackageInvalid(errors)
    _apply(wp, ty, data)
    db.commit()
    db.refresh(wp)
    return wp


def add_attachment(db: Session, wp: WorkPackage, data: AttachmentIn) -> Attachment:
    a = Attachment(work_package_id=wp.id, file_name=data.file_name, content_type=data.content_type,
                   filesize=data.filesize)
    db.add(a)
    # attachments are embedded in the work package representation
    wp.updated_at = utcnow()
    db.commit()
    db.refresh(a)
    db.refresh(wp)
    return a
