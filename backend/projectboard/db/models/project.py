from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from projectboard.db.base import Base
from projectboard.db.models._mixins import TimestampMixin, as_utc

project_type = Table(
    "project_type",
    Base.metadata,
    Column("project_id", ForeignKey("project.id", ondelete="CASCADE"), primary_key=True),
    Column("type_id", ForeignKey("type.id", ondelete="CASCADE"), primary_key=True),
)

class Project(Base, TimestampMixin):
    __tablename__ = "project"

    id: Mapped[int] = mapped_column(primary_key=True)
    identifier: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(256))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    types = relationship("Type", secondary=project_type, order_by="Type.position")
    members = relationship("Member", back_populates="project", cascade="all, delete-orphan")
    categories = relationship("Category", back_populates="project", cascade="all, delete-orphan", order_by="Category.name")
    versions = relationship("Version", back_populates="project", cascade="all, delete-orphan", order_by="Version.name")
    work_packages = relationship("WorkPackage", back_populates="project", cascade="all, delete-orphan")

    @property
    def cache_key(self) -> str:
        stamp = f"{as_utc(self.updated_at).timestamp():.6f}" if self.updated_at else "new"
        return f"projects/{self.id}-{stamp}"
