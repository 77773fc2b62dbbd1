from sqlalchemy.orm import Session
from projectboard.db.models._mixins import utcnow
from projectboard.db.models.member import Member
from projectboard.db.models.project import Project
from projectboard.db.models.type import Type
from projectboard.schemas.project import ProjectCreate, ProjectUpdate

def list_projects(db: Session):
    return db.query(Project).order_by(Project.id).all()

def list_visible_projects(db: Session, user_id: int, admin: bool = False):
    if admin:
        return list_projects(db)
    return (
        db.query(Project)
        .join(Member, Member.project_id == Project.id)
        .filter(Member.user_id == user_id)
        .order_by(Project.id)
        .all()
    )

def get_project(db: Session, project_id: int) -> Project | None:
    return db.query(Project).filter(Project.id == project_id).one_or_none()

def get_project_by_identifier(db: Session, identifier: str) -> Project | None:
    return db.query(Project).filter(Project.identifier == identifier).one_or_none()

def create_project(db: Session, data: ProjectCreate) -> Project:
    if get_project_by_identifier(db, data.identifier):
        raise ValueError("identifier_taken")
    p = Project(
        identifier=data.identifier,
        name=data.name,
        description=data.description,
    )
    if data.type_ids:
        p.types = db.query(Type).filter(Type.id.in_(data.type_ids)).all()
    else:
        p.types = db.query(Type).order_by(Type.position).all()
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


def update_project(db: Session, p: Project, data: ProjectUpdate) -> Project:
    if data.identifier is not None and data.identifier != p.identifier:
        if get_project_by_identifier(db, data.identifier):
            raise ValueError("identifier_taken")
        p.identifier = data.identifier
    if data.name is not None:
        p.name = data.name
    if data.description is not None:
        p.description = data.description
    db.commit()
    db.refresh(p)
    return p


def touch_project(db: Session, p: Project) -> Project:
    """Bump ``updated_at`` so cached representations of the project expire."""
    p.updated_at = utcnow()
    db.commit()
    db.refresh(p)
    return p
