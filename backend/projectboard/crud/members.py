from sqlalchemy.orm import Session
from projectboard.db.models.member import Member
from projectboard.db.models.project import Project
from projectboard.db.models.user import User
from projectboard.schemas.admin import MemberIn

def list_members(db: Session, project_id: int):
    return db.query(Member).filter(Member.project_id == project_id).order_by(Member.id).all()

def add_member(db: Session, project: Project, data: MemberIn) -> Member:
    if not db.query(User).filter(User.id == data.user_id).one_or_none():
        raise ValueError("user_not_found")
    m = (
        db.query(Member)
        .filter(Member.project_id == project.id, Member.user_id == data.user_id)
        .one_or_none()
    )
    if m:
        m.role = data.role.value
    else:
        m = Member(project_id=project.id, user_id=data.user_id, role=data.role.value)
        db.add(m)
    db.commit()
    db.refresh(m)
    return m
