import datetime as dt
from sqlalchemy import String, ForeignKey, Date, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from projectboard.db.base import Base
from projectboard.db.models._mixins import TimestampMixin, as_utc

class WorkPackage(Base, TimestampMixin):
    __tablename__ = "work_package"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    type_id: Mapped[int] = mapped_column(ForeignKey("type.id"), index=True)
    category_id: Mapped[int | None] = mapped_column(ForeignKey("category.id", ondelete="SET NULL"), nullable=True)
    version_id: Mapped[int | None] = mapped_column(ForeignKey("version.id", ondelete="SET NULL"), nullable=True)
    author_id: Mapped[int | None] = mapped_column(ForeignKey("user.id", ondelete="SET NULL"), nullable=True)

    subject: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # milestones keep their single date in both columns
    start_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    due_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    project = relationship("Project", back_populates="work_packages")
    type = relationship("Type")
    category = relationship("Category")
    version = relationship("Version")
    author = relationship("User")
    attachments = relationship("Attachment", back_populates="work_package", cascade="all, delete-orphan",
                               order_by="Attachment.id")

    @property
    def cache_key(self) -> str:
        stamp = f"{as_utc(self.updated_at).timestamp():.6f}" if self.updated_at else "new"
        return f"work_packages/{self.id}-{stamp}"
