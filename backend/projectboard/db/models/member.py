from enum import Enum
from sqlalchemy import String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from projectboard.db.base import Base
from projectboard.db.models._mixins import TimestampMixin

class ProjectRole(str, Enum):
    manager = "manager"
    member = "member"
    reporter = "reporter"
    viewer = "viewer"

class Member(Base, TimestampMixin):
    __tablename__ = "member"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_member_project_user"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("user.id", ondelete="CASCADE"), index=True)
    role: Mapped[str] = mapped_column(String(32), default=ProjectRole.member.value)

    project = relationship("Project", back_populates="members")
    user = relationship("User", back_populates="memberships")
